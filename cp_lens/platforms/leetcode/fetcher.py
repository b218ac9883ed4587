import logging
import urllib.parse
from typing import Any

import httpx

from cp_lens.errors import FeedError
from cp_lens.platforms.leetcode.parser import parse_catalog
from cp_lens.utils.retry import request_with_retry

_log = logging.getLogger(__name__)

# Public REST mirror of the LeetCode GraphQL API.
LEETCODE_API_BASE = "https://alfa-leetcode-api.onrender.com"
CATALOG_LIMIT = 5000


class LeetCodeClient:
    """Async wrapper over the LeetCode mirror REST API. Returns raw JSON."""

    def __init__(self, http: httpx.AsyncClient, base_url: str = LEETCODE_API_BASE) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")

    async def _get(self, feed: str, path: str, **params: Any) -> Any:
        response = await request_with_retry(self._http.get, f"{self._base_url}{path}", params=params or None)
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError:
            raise FeedError("leetcode", feed, "response is not JSON") from None
        _log.debug("leetcode %s -> HTTP %s", feed, response.status_code)
        return payload

    @staticmethod
    def _user_path(username: str) -> str:
        return "/" + urllib.parse.quote(username, safe="")

    async def stats(self, username: str) -> Any:
        return await self._get("stats", self._user_path(username))

    async def calendar(self, username: str) -> Any:
        return await self._get("calendar", f"{self._user_path(username)}/calendar")

    async def contest(self, username: str) -> Any:
        return await self._get("contest", f"{self._user_path(username)}/contest")

    async def solved(self, username: str, limit: int) -> Any:
        return await self._get("solved", f"{self._user_path(username)}/acSubmission", limit=limit)

    async def problems(self, limit: int = CATALOG_LIMIT) -> Any:
        return await self._get("problems", "/problems", limit=limit)


async def fetch_problem_catalog(base_url: str = LEETCODE_API_BASE, timeout: float = 30.0) -> dict[str, list[str]]:
    """Download the full problem list and index tag names by title slug.

    Opens its own client so the process-wide catalog cache can refresh
    independently of any one request.
    """
    async with httpx.AsyncClient(timeout=timeout) as http:
        payload = await LeetCodeClient(http, base_url).problems()
    return parse_catalog(payload)
