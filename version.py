"""
Version information for the Astralis application.

Centralized version management for the API server and the display client.
"""

# Core application information
__version__ = "1.2.0"
__version_info__ = (1, 2, 0)
__app_name__ = "Astralis"
__app_display_name__ = "Astralis - Astronomical Event Aggregator"
__author__ = "Astralis Developers"
__description__ = "Aggregates astronomical events from NASA DONKI and visible planets APIs"

# License information
__license__ = "MIT"


def get_version_string() -> str:
    """Get formatted version string."""
    return f"{__app_name__} v{__version__}"


def get_user_agent() -> str:
    """Get the User-Agent header sent to upstream providers."""
    return f"{__app_name__}/{__version__}"
