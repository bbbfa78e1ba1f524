"""
Factory building the ordered provider collection from configuration.

Registration order is the order results are merged in. The visible planets
provider needs no credentials and is always loaded; the NASA DONKI provider
is loaded only when an API key is configured.
"""

import logging
from typing import List

from ..managers.config_manager import AstralisConfig
from .base_provider import EventProvider, LookupWindow
from .http_client import AioHttpClient
from .nasa_donki_provider import NASADonkiProvider
from .visible_planets_provider import VisiblePlanetsProvider

logger = logging.getLogger(__name__)


class EventProviderFactory:
    """Creates event providers from configuration."""

    @staticmethod
    def create_visible_planets_provider(config: AstralisConfig) -> VisiblePlanetsProvider:
        return VisiblePlanetsProvider(
            AioHttpClient(timeout_seconds=config.timeout_seconds),
            latitude=config.observer_latitude,
            longitude=config.observer_longitude,
            lookup_window=LookupWindow(days_forward=config.planets_lookup_days_forward),
        )

    @staticmethod
    def create_nasa_provider(config: AstralisConfig) -> NASADonkiProvider:
        return NASADonkiProvider(
            AioHttpClient(timeout_seconds=config.timeout_seconds),
            api_key=config.nasa_api_key,
            lookup_window=LookupWindow(
                months_back=config.nasa_lookup_months_back,
                months_forward=config.nasa_lookup_months_forward,
            ),
        )

    @classmethod
    def create_providers(cls, config: AstralisConfig) -> List[EventProvider]:
        """Create all enabled providers in registration order."""
        providers: List[EventProvider] = [cls.create_visible_planets_provider(config)]
        logger.info("loading Visible Planets API...")

        if config.is_nasa_enabled():
            providers.append(cls.create_nasa_provider(config))
            logger.info("loading NASA API...")
        else:
            logger.info("NASA API key not set, NASA DONKI provider disabled")

        return providers
