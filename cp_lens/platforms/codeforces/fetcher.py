import logging
from typing import Any

import httpx

from cp_lens.errors import FeedError
from cp_lens.utils.retry import request_with_retry

_log = logging.getLogger(__name__)

CF_BASE = "https://codeforces.com/api"


class CodeforcesClient:
    """Thin async wrapper over the public Codeforces API.

    Returns raw JSON envelopes ({"status": ..., "result": ...}); parsing and
    validation live in codeforces.parser.
    """

    def __init__(self, http: httpx.AsyncClient, base_url: str = CF_BASE) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")

    async def _call(self, method: str, **params: Any) -> Any:
        response = await request_with_retry(self._http.get, f"{self._base_url}/{method}", params=params)
        # Unknown handles come back as HTTP 400 with a FAILED envelope, so
        # read the body before judging the status code.
        try:
            payload = response.json()
        except ValueError:
            response.raise_for_status()
            raise FeedError("codeforces", method, "response is not JSON") from None
        _log.debug("codeforces %s -> HTTP %s", method, response.status_code)
        return payload

    async def user_info(self, handle: str) -> Any:
        return await self._call("user.info", handles=handle)

    async def user_rating(self, handle: str) -> Any:
        return await self._call("user.rating", handle=handle)

    async def user_status(self, handle: str) -> Any:
        return await self._call("user.status", handle=handle)
