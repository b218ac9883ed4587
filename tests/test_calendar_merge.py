import pytest

from cp_lens.analyzers.calendar import merge_calendars
from cp_lens.errors import MalformedCountError, MalformedTimestampError

OCT_7 = 1759795200  # 2025-10-07T00:00:00Z
DAY = 86400


def test_same_day_counts_are_summed_across_platforms():
    assert merge_calendars({str(OCT_7): 2}, {"2025-10-07": 3}) == {"2025-10-07": 5}


def test_two_empty_calendars_merge_to_empty():
    assert merge_calendars({}, {}) == {}
    assert merge_calendars(None, None) == {}
    assert merge_calendars() == {}


def test_merging_with_empty_only_rekeys_timestamps():
    result = merge_calendars({str(OCT_7 + DAY): 1, str(OCT_7): 4}, {})
    assert result == {"2025-10-07": 4, "2025-10-08": 1}


def test_merging_with_empty_keeps_date_calendar():
    dates = {"2025-12-19": 3, "2025-12-17": 1}
    result = merge_calendars({}, dates)
    assert result == dates
    assert list(result) == ["2025-12-17", "2025-12-19"]


def test_time_of_day_is_truncated_in_utc():
    last_second = OCT_7 + DAY - 1
    midday = OCT_7 + DAY // 2
    assert merge_calendars({str(last_second): 1, str(midday): 2}, {}) == {"2025-10-07": 3}


def test_output_is_sorted_by_date():
    leetcode = {str(OCT_7 + 40 * DAY): 1, str(OCT_7 - 300 * DAY): 2, str(OCT_7): 5}
    codeforces = {"2026-01-02": 1, "2024-02-29": 7, "2025-10-08": 1}
    result = merge_calendars(leetcode, codeforces)
    assert list(result) == sorted(result)
    assert sum(result.values()) == sum(leetcode.values()) + sum(codeforces.values())


def test_output_keys_come_from_inputs_only():
    leetcode = {str(OCT_7): 1, str(OCT_7 + 2 * DAY): 1}
    codeforces = {"2025-10-08": 2}
    assert set(merge_calendars(leetcode, codeforces)) == {"2025-10-07", "2025-10-08", "2025-10-09"}


def test_integer_timestamp_keys_are_accepted():
    assert merge_calendars({OCT_7: 1}, {}) == {"2025-10-07": 1}


@pytest.mark.parametrize("key", ["abc", "", "1.5", "2025-10-07"])
def test_malformed_timestamp_key_fails_loudly(key):
    with pytest.raises(MalformedTimestampError):
        merge_calendars({key: 1}, {})


@pytest.mark.parametrize("key", ["2025-13-01", "07-10-2025", "1759795200"])
def test_malformed_date_key_fails_loudly(key):
    with pytest.raises(MalformedTimestampError):
        merge_calendars({}, {key: 1})


@pytest.mark.parametrize("leetcode, codeforces", [
    ({str(OCT_7): "2"}, {}),
    ({str(OCT_7): -1}, {}),
    ({}, {"2025-10-07": True}),
    ({}, {"2025-10-07": 1.5}),
])
def test_non_integer_count_fails_loudly(leetcode, codeforces):
    with pytest.raises(MalformedCountError):
        merge_calendars(leetcode, codeforces)
