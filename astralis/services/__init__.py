"""
Services package for business logic.
"""

from .event_service import AstronomyEventService, ProviderFailure

__all__ = ["AstronomyEventService", "ProviderFailure"]
