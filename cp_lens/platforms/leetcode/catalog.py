import logging
import time
from typing import Awaitable, Callable

from cp_lens.platforms.base import DEGRADABLE

_log = logging.getLogger(__name__)

Catalog = dict[str, list[str]]  # titleSlug -> tag names

CATALOG_TTL = 24 * 60 * 60  # seconds


class ProblemCatalogCache:
    """Process-wide, time-bounded cache of the LeetCode problem catalog.

    Read-if-fresh, else refetch-and-replace. Concurrent requests on a stale
    entry may each refetch. A failed refetch yields an empty catalog and
    leaves the cache untouched.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[Catalog]],
        ttl: float = CATALOG_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetch = fetch
        self._ttl = ttl
        self._clock = clock
        self._catalog: Catalog | None = None
        self._fetched_at: float | None = None

    @property
    def age(self) -> float | None:
        """Seconds since the last successful refresh, or None if never loaded."""
        if self._fetched_at is None:
            return None
        return self._clock() - self._fetched_at

    def is_fresh(self, ttl: float | None = None) -> bool:
        age = self.age
        return self._catalog is not None and age is not None and age < (self._ttl if ttl is None else ttl)

    async def get_or_refresh(self, ttl: float | None = None) -> Catalog:
        if self.is_fresh(ttl):
            _log.debug("Using cached problem catalog (%d problems)", len(self._catalog))
            return self._catalog

        _log.info("Fetching LeetCode problem catalog")
        try:
            catalog = await self._fetch()
        except DEGRADABLE as exc:
            _log.warning("Problem catalog unavailable: %s", exc)
            return {}

        self._catalog = catalog
        self._fetched_at = self._clock()
        return catalog

    def clear(self) -> None:
        self._catalog = None
        self._fetched_at = None
        _log.info("Problem catalog cache cleared")
