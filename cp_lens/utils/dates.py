import re
from datetime import date, datetime, timezone

from cp_lens.errors import MalformedTimestampError

_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")
_EPOCH_SECONDS = re.compile(r"-?[0-9]+")


def timestamp_to_date(ts: str | int) -> str:
    """Convert Unix-epoch seconds to the UTC calendar date it falls on (YYYY-MM-DD)."""
    if isinstance(ts, bool) or (isinstance(ts, str) and not _EPOCH_SECONDS.fullmatch(ts)):
        raise MalformedTimestampError(ts)
    try:
        seconds = int(ts)
    except (TypeError, ValueError):
        raise MalformedTimestampError(ts) from None
    try:
        dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        raise MalformedTimestampError(ts) from None
    return dt.date().isoformat()


def ensure_iso_date(key: str) -> str:
    """Return `key` unchanged if it is a real YYYY-MM-DD date."""
    if not isinstance(key, str) or not _ISO_DATE.fullmatch(key):
        raise MalformedTimestampError(key)
    try:
        date.fromisoformat(key)
    except ValueError:
        raise MalformedTimestampError(key) from None
    return key
