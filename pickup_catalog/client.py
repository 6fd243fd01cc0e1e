"""
Cached client for the pickup-point catalog.
"""

import asyncio
import contextlib
import time
from typing import Any, Callable, List, Optional

import httpx

from shared.config import (
    DEFAULT_CATALOG_URL,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_TTL_SECONDS,
    CatalogSettings,
)
from shared.errors import ConfigurationError, FetchError
from shared.logging import get_logger
from shared.metrics import CatalogMetrics

from .log_sink import LogSink, StructlogSink
from .models import CatalogEntry, Location


class CatalogClient:
    """
    Client for fetching and caching the pickup-point catalog.

    The whole catalog is downloaded at once and kept in memory for ``ttl``
    seconds. Every query first refreshes the cache if it is empty or expired,
    then reads from the cached snapshot. A failed refresh leaves the previous
    snapshot untouched and raises ``FetchError`` to the caller.

    Example::

        async with CatalogClient(ttl=3600) as client:
            countries = await client.get_countries()
            points = await client.get_by_country("Россия")
    """

    def __init__(
        self,
        url: str = DEFAULT_CATALOG_URL,
        ttl: Optional[float] = None,
        logger: Optional[LogSink] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.time,
        metrics: Optional[CatalogMetrics] = None,
        refresh_on_init: bool = True,
    ):
        ttl = DEFAULT_TTL_SECONDS if ttl is None else ttl
        if ttl < 0:
            raise ConfigurationError("ttl must not be negative", details={"ttl": ttl})
        if timeout <= 0:
            raise ConfigurationError("timeout must be positive", details={"timeout": timeout})

        self.url = url
        self.ttl = float(ttl)
        self.timeout = timeout
        self.logger: LogSink = logger or StructlogSink()
        self.metrics = metrics
        self._clock = clock
        self._log = get_logger("pickup_catalog.client")

        self._snapshot: List[CatalogEntry] = []
        self._last_refreshed_at: float = 0.0

        self._initial_refresh: Optional["asyncio.Task[None]"] = None
        if refresh_on_init:
            self._initial_refresh = self._start_initial_refresh()

    @classmethod
    def from_settings(cls, settings: Optional[CatalogSettings] = None, **kwargs: Any) -> "CatalogClient":
        """Build a client from ``CatalogSettings`` (environment by default)."""
        settings = settings or CatalogSettings()
        return cls(
            url=settings.url,
            ttl=settings.ttl_seconds,
            timeout=settings.timeout_seconds,
            **kwargs
        )

    @property
    def initial_refresh(self) -> Optional["asyncio.Task[None]"]:
        """The background refresh started at construction, if any."""
        return self._initial_refresh

    @property
    def last_refreshed_at(self) -> float:
        return self._last_refreshed_at

    def _start_initial_refresh(self) -> Optional["asyncio.Task[None]"]:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._log.debug("No running event loop, initial refresh deferred", url=self.url)
            return None
        return loop.create_task(self._refresh_in_background())

    async def _refresh_in_background(self) -> None:
        try:
            await self.refresh()
        except Exception as exc:
            self.logger.error("Error in obtaining markets")
            self.logger.error(exc)
        else:
            self.logger.log("The list of markets is updated")

    async def refresh(self) -> None:
        """Fetch the catalog unless the cached snapshot is still fresh."""
        current_time = self._clock()

        if self._snapshot and current_time - self._last_refreshed_at < self.ttl:
            if self.metrics is not None:
                self.metrics.record_cache_hit()
            return

        if self.metrics is not None:
            self.metrics.record_cache_miss()

        snapshot = await self._fetch()

        self._snapshot = snapshot
        self._last_refreshed_at = current_time

    def invalidate(self) -> None:
        """Drop the cached snapshot so the next query refetches."""
        self._snapshot = []
        self._last_refreshed_at = 0.0
        self._log.debug("Catalog cache invalidated", url=self.url)

    async def _fetch(self) -> List[CatalogEntry]:
        """Download and decode the full catalog."""
        started = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.url)

            if not response.is_success:
                raise FetchError(
                    self.url,
                    f"Unexpected status {response.status_code}",
                    status_code=response.status_code
                )

            try:
                data = response.json()
            except ValueError as exc:
                raise FetchError(self.url, "Invalid JSON payload", status_code=response.status_code) from exc

        except FetchError:
            self._record_fetch("error", started)
            raise
        except httpx.HTTPError as exc:
            self._record_fetch("error", started)
            raise FetchError(
                self.url,
                str(exc) or type(exc).__name__,
                details={"http_error": type(exc).__name__}
            ) from exc

        self._record_fetch("success", started)
        self._log.debug(
            "Catalog fetched",
            url=self.url,
            entries=len(data) if isinstance(data, list) else None
        )
        return data

    def _record_fetch(self, status: str, started: float) -> None:
        if self.metrics is not None:
            self.metrics.record_fetch(status, time.perf_counter() - started)

    async def _get_updated_data(self) -> List[CatalogEntry]:
        await self.refresh()
        return self._snapshot

    async def get_countries(self) -> List[str]:
        """Return country names in catalog order, duplicates included."""
        data = await self._get_updated_data()
        return [entry.get("country") for entry in data]

    async def get_by_country(self, country: str) -> List[Location]:
        """Return the pickup points of the first entry for ``country``, or ``[]``."""
        data = await self._get_updated_data()
        for entry in data:
            if entry.get("country") == country:
                return entry.get("markets", [])
        return []

    async def get_by_id(self, location_id: int) -> List[Location]:
        """
        Return every pickup point of the country that contains ``location_id``.

        The whole location list of the matching country is returned, not just
        the matching point; use ``find_location`` for the single point.
        """
        data = await self._get_updated_data()
        for entry in data:
            markets = entry.get("markets", [])
            if any(location.get("id") == location_id for location in markets):
                return markets
        return []

    async def find_location(self, location_id: int) -> Optional[Location]:
        """Return the single pickup point with ``location_id``, or ``None``."""
        data = await self._get_updated_data()
        for entry in data:
            for location in entry.get("markets", []):
                if location.get("id") == location_id:
                    return location
        return None

    async def markets(self) -> List[CatalogEntry]:
        """Return the whole cached catalog."""
        return await self._get_updated_data()

    get_all = markets

    async def close(self) -> None:
        """Cancel the construction-time refresh if it is still running."""
        task = self._initial_refresh
        if task is not None and not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def __aenter__(self) -> "CatalogClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
