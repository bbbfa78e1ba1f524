#!/usr/bin/env python3
"""
Main entry point for the Astralis API server.

Loads configuration, wires the enabled providers into the aggregation
service and serves the REST API until SIGINT/SIGTERM.
"""

import logging
import sys
from typing import List, Optional

from aiohttp import web

from version import get_version_string
from astralis.api.provider_factory import EventProviderFactory
from astralis.managers.config_manager import (
    ConfigurationError,
    load_config_from_command_line,
)
from astralis.server.rest_handler import create_app
from astralis.services.event_service import AstronomyEventService

# Seconds allowed for in-flight requests when shutting down
SHUTDOWN_TIMEOUT_SECONDS = 5.0


def setup_logging(level: str = "INFO"):
    """Setup application logging with console output."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    # aiohttp logs every request at INFO
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)


def build_application(config) -> web.Application:
    """Create providers, service and the web application from configuration."""
    providers = EventProviderFactory.create_providers(config)
    service = AstronomyEventService(providers)
    return create_app(service, providers)


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    try:
        config = load_config_from_command_line(argv)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.log_level)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting {get_version_string()}")
    logger.info(f"loading config... {config.to_summary_dict()}")

    app = build_application(config)

    logger.info(f"Server starting on {config.api_host}:{config.api_port}")
    web.run_app(
        app,
        host=config.api_host,
        port=config.api_port,
        shutdown_timeout=SHUTDOWN_TIMEOUT_SECONDS,
        print=None,
    )
    logger.info("Server exiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())
