import asyncio
from typing import Any, Awaitable, Callable

import httpx

RETRY_STATUSES = frozenset({429, 503})


async def request_with_retry(
    send: Callable[..., Awaitable[httpx.Response]],
    *args: Any,
    max_retries: int = 3,
    base_delay: float = 2.0,
    **kwargs: Any,
) -> httpx.Response:
    """Send an HTTP request, backing off exponentially on 429/503.

    Waits base_delay, 2*base_delay, ... between attempts. The last response is
    returned as-is, so callers still see the throttled status.
    """
    for attempt in range(max_retries):
        response = await send(*args, **kwargs)
        if response.status_code not in RETRY_STATUSES or attempt == max_retries - 1:
            return response
        await asyncio.sleep(base_delay * (2 ** attempt))
    raise ValueError("max_retries must be at least 1")
