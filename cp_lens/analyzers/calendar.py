from collections import Counter
from typing import Mapping

from cp_lens.errors import MalformedCountError
from cp_lens.utils.dates import ensure_iso_date, timestamp_to_date


def _count(key: object, count: object) -> int:
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise MalformedCountError(key, count)
    return count


def merge_calendars(
    leetcode_calendar: Mapping[str, int] | None = None,
    codeforces_calendar: Mapping[str, int] | None = None,
) -> dict[str, int]:
    """Merge an epoch-keyed calendar with a date-keyed one into YYYY-MM-DD -> count.

    LeetCode keys are Unix seconds and are folded onto their UTC date;
    Codeforces keys are already dates. Counts landing on the same date are
    summed. The result is ordered by date, ascending.

    Raises MalformedTimestampError for a key that is neither, and
    MalformedCountError for a count that is not a non-negative int.
    """
    merged: Counter[str] = Counter()
    for ts, count in (leetcode_calendar or {}).items():
        merged[timestamp_to_date(ts)] += _count(ts, count)
    for day, count in (codeforces_calendar or {}).items():
        merged[ensure_iso_date(day)] += _count(day, count)
    # ISO dates sort lexicographically in chronological order
    return dict(sorted(merged.items()))
