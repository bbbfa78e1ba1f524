"""
Data models for the Astralis application.
"""

from .astronomy_data import AstronomyEvent, AstronomyEventType, TimeRange

__all__ = ["AstronomyEvent", "AstronomyEventType", "TimeRange"]
