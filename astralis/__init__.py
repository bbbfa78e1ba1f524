"""
Astralis astronomical event aggregator

Queries NASA DONKI and the visible planets API, normalizes their payloads
into a common event model and serves the merged results over REST.
"""

from version import __version__

__all__ = ["__version__"]
