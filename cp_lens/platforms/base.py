"""Platform builder protocol and the shared partial-failure policy."""
import logging
from typing import Protocol, TypeVar

import httpx

from cp_lens.errors import FeedError
from cp_lens.models import PlatformAnalytics
from cp_lens.utils.result import Ok, Result

_log = logging.getLogger(__name__)

T = TypeVar("T")

# Failures of a secondary fetch that degrade the field instead of the builder.
DEGRADABLE = (FeedError, httpx.HTTPError)


class PlatformBuilder(Protocol):
    """Each platform module exposes a builder with this shape.

    `build` raises PlatformNotFoundError when the identifier is unknown or the
    primary profile fetch fails; secondary feeds degrade to empty defaults.
    """

    name: str

    async def build(self, identifier: str) -> PlatformAnalytics:
        ...


def degrade(result: Result, default: T, *, platform: str, feed: str, identifier: str) -> T:
    """Unwrap a secondary-feed result, falling back to `default` on feed failures.

    Anything other than a feed or transport failure is a bug and is re-raised.
    """
    if isinstance(result, Ok):
        return result.value
    if isinstance(result.reason, DEGRADABLE):
        _log.warning("%s %s unavailable for %s: %s", platform, feed, identifier, result.reason)
        return default
    raise result.reason
