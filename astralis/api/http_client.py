"""
HTTP client abstraction shared by all upstream event providers.

Providers depend on the abstract ``HTTPClient`` so that tests can swap in
canned responses; ``AioHttpClient`` is the production implementation.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

import aiohttp

from version import get_user_agent

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10


class AstronomyAPIException(Exception):
    """Base exception for upstream provider errors."""

    pass


class AstronomyNetworkException(AstronomyAPIException):
    """Exception for network-related errors."""

    pass


class AstronomyStatusException(AstronomyAPIException):
    """Exception for non-success HTTP responses."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class AstronomyDataException(AstronomyAPIException):
    """Exception for payload decoding and mapping errors."""

    pass


@dataclass
class AstronomyAPIResponse:
    """Container for raw provider response data."""

    status_code: int
    reason: str
    data: Any
    timestamp: datetime
    url: str

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class HTTPClient(ABC):
    """Abstract HTTP client interface for dependency injection."""

    @abstractmethod
    async def get(self, url: str, params: Dict[str, Any]) -> AstronomyAPIResponse:
        """Make HTTP GET request."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close HTTP client."""
        pass


class AioHttpClient(HTTPClient):
    """
    Concrete HTTP client implementation using aiohttp.

    The body of a successful response is decoded as JSON; the body of any
    other response is kept as text so callers can report it.
    """

    def __init__(self, timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS):
        """Initialize HTTP client with timeout."""
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout, headers={"User-Agent": get_user_agent()}
            )
        return self._session

    async def get(self, url: str, params: Dict[str, Any]) -> AstronomyAPIResponse:
        """
        Make HTTP GET request.

        Raises:
            AstronomyNetworkException: On connection failures and timeouts
            AstronomyDataException: If a successful response is not valid JSON
        """
        session = await self._ensure_session()

        try:
            async with session.get(url, params=params) as response:
                if response.status == 200:
                    data = await response.json(content_type=None)
                else:
                    data = await response.text(errors="replace")
                return AstronomyAPIResponse(
                    status_code=response.status,
                    reason=response.reason or "",
                    data=data,
                    timestamp=datetime.now(),
                    url=str(response.url),
                )
        except aiohttp.ClientError as e:
            raise AstronomyNetworkException(f"Network error: {e}") from e
        except asyncio.TimeoutError as e:
            raise AstronomyNetworkException(f"Request to {url} timed out") from e
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError from a bad body
            raise AstronomyDataException(f"Invalid JSON response: {e}") from e

    async def close(self) -> None:
        """Close HTTP client."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("HTTP client session closed")
