"""Async HTTP client for the Sveriges Radio Open API (playlists, XML)."""

import logging
from typing import Any, Dict, Optional
from xml.parsers.expat import ExpatError

import httpx
import xmltodict

from .config import SRConfig
from .exceptions import (
    RateLimitedError,
    SRTimeoutError,
    SRUnknownError,
    SRUnreachableError,
    SRUpstreamError,
)
from .models import P3_CHANNEL_ID
from .rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class SRApiClient:
    """Rate-limited async client for the SR playlist endpoints.

    Every request is checked against the shared RateLimiter before anything
    goes on the wire. There are no retries: a failed attempt is mapped to one
    of the typed SRApiError subclasses and raised immediately.

    Attributes:
        config: SRConfig with base URL, timeout and user agent
        rate_limiter: RateLimiter consulted before each request
        client: httpx.AsyncClient for HTTP requests

    Example:
        >>> async with SRApiClient(SRConfig(), RateLimiter()) as client:
        ...     tree = await client.get_current_playlist()
    """

    def __init__(
        self,
        config: SRConfig,
        rate_limiter: RateLimiter,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize SR API client.

        Args:
            config: SRConfig with server URL and timeout
            rate_limiter: RateLimiter instance (one per process)
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.config = config
        self.rate_limiter = rate_limiter
        self._base_url = config.base_url.rstrip("/")

        self.client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(config.timeout_seconds),
            headers={"User-Agent": config.user_agent},
            transport=transport,
            follow_redirects=True,
        )

        logger.info(f"Initialized SR API client for {self._base_url}")

    async def __aenter__(self) -> "SRApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        """Close the underlying connection pool."""
        await self.client.aclose()

    def _check_rate_limit(self):
        """Raise RateLimitedError if the limiter rejects this request."""
        if not self.rate_limiter.allow():
            raise RateLimitedError(
                self.rate_limiter.wait_seconds(),
                max_requests=self.rate_limiter.max_requests,
            )

    async def _request(self, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """GET an endpoint and decode its XML body.

        Args:
            endpoint: Path below the base URL (e.g., "/rightnow")
            params: Query parameters

        Returns:
            Decoded XML tree (attributes prefixed with "@", text as "#text")

        Raises:
            RateLimitedError: If the rate limiter rejected the request
            SRTimeoutError: On connect/read timeout
            SRUpstreamError: On non-2xx HTTP status
            SRUnreachableError: If no response was received
            SRUnknownError: For anything else, including undecodable XML
        """
        self._check_rate_limit()

        logger.info(f"SR API Request: GET {endpoint}")
        logger.debug(f"Parameters: {params}")

        try:
            response = await self.client.get(endpoint, params=params)
            response.raise_for_status()
            return xmltodict.parse(response.content)

        except httpx.TimeoutException as e:
            logger.error(f"SR API request timed out: {endpoint}: {e!r}")
            raise SRTimeoutError() from e

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"SR API returned HTTP {status_code} for {endpoint}")
            raise SRUpstreamError(status_code) from e

        except httpx.RequestError as e:
            logger.error(f"SR API unreachable: {endpoint}: {e!r}")
            raise SRUnreachableError() from e

        except (httpx.HTTPError, ExpatError, ValueError) as e:
            logger.error(f"Unexpected failure fetching {endpoint}: {e!r}")
            raise SRUnknownError() from e

    async def get_current_playlist(self) -> Dict[str, Any]:
        """Fetch the previous, current and next song on P3.

        Returns:
            Decoded "rightnow" tree: {"sr": {"playlist": {"previoussong", "song", "nextsong"}}}
        """
        return await self._request(
            "/rightnow",
            {"channelid": P3_CHANNEL_ID, "format": "xml"},
        )

    async def get_playlist_by_date_range(self, start_datetime: str, end_datetime: str) -> Dict[str, Any]:
        """Fetch P3 songs played between two instants.

        Args:
            start_datetime: ISO 8601 start (e.g., "2024-12-15T00:00:00.000Z")
            end_datetime: ISO 8601 end

        Returns:
            Decoded song list tree: {"sr": {"playlist": {"song": [...]}}}
        """
        return await self._request(
            "/getplaylistbychannelid",
            {
                "id": P3_CHANNEL_ID,
                "startdatetime": start_datetime,
                "enddatetime": end_datetime,
                "format": "xml",
            },
        )
