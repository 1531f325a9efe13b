"""
Catalog client - retrieves the full package listing from the registry.

One GET per call, no retries and no client-side timeout: bounding the total
time of a refresh cycle is the invoker's job.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

import httpx

from ...config.settings import settings
from ..core.exceptions import TransportError
from ..models.enums import CatalogSource
from ..schemas.catalog import RawSnapshot, decode_records

logger = logging.getLogger(__name__)


class CatalogClient:
    """
    Adapter for the registry's package listing endpoint.

    Handles:
    - Fetching the whole catalog in one request
    - Mapping network failures and bad responses to TransportError
    - Checking the envelope (JSON list) before anything is cached
    """

    def __init__(
        self,
        url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize catalog client.

        Args:
            url: Listing endpoint. If not provided, uses settings.
            transport: httpx transport override (e.g. httpx.MockTransport)
            clock: Source of the fetched_at timestamp
        """
        self.url = url or settings.MOD_CATALOG_URL
        self._transport = transport
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self._transport,
            timeout=None,
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )

    async def fetch(self) -> RawSnapshot:
        """
        Download the current catalog.

        Returns:
            RawSnapshot holding the body verbatim plus its parsed records

        Raises:
            TransportError: Network failure, non-2xx status, or a body that
                is not a JSON list
        """
        logger.info("Starting catalog download from %s", self.url)

        try:
            async with self._client() as client:
                response = await client.get(self.url)
        except httpx.HTTPError as e:
            logger.error("Catalog download failed: %s", e)
            raise TransportError(
                f"Catalog download failed: {e}",
                details={"url": self.url},
            ) from e

        if not response.is_success:
            logger.error("Catalog download returned HTTP %d", response.status_code)
            raise TransportError(
                f"Catalog download returned HTTP {response.status_code}",
                details={"url": self.url, "status_code": response.status_code},
            )

        payload = response.content
        records = decode_records(payload, TransportError)

        logger.info("Downloaded catalog: %d records, %d bytes", len(records), len(payload))
        return RawSnapshot(
            payload=payload,
            fetched_at=self._clock(),
            source=CatalogSource.REMOTE,
            records=records,
        )
