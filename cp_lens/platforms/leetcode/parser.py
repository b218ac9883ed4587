"""Typed views over the LeetCode mirror payloads.

The mirror is loose about shapes (calendars as JSON strings, two spellings
of the contest fields, tags as objects or strings), so every tolerance lives
here. Payloads that still do not fit raise FeedError, or
PlatformNotFoundError for the profile stats.
"""
import json
from typing import Any

from pydantic import BaseModel, ConfigDict, NonNegativeInt, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from cp_lens.errors import FeedError, MalformedTimestampError, PlatformNotFoundError
from cp_lens.models import ContestSummary, RecentContest
from cp_lens.utils.dates import timestamp_to_date

RECENT_CONTESTS = 5


class _Feed(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class LeetCodeStats(_Feed):
    username: str | None = None
    # required: an absent count is a malformed payload, an explicit null is 0
    total_solved: NonNegativeInt
    easy_solved: NonNegativeInt
    medium_solved: NonNegativeInt
    hard_solved: NonNegativeInt

    @field_validator("total_solved", "easy_solved", "medium_solved", "hard_solved", mode="before")
    @classmethod
    def _zero_if_null(cls, value: Any) -> Any:
        return 0 if value is None else value


class _ContestRef(BaseModel):
    title: str


class _ContestEntry(BaseModel):
    attended: bool = True
    ranking: int | None = None
    rating: float | None = None
    contest: _ContestRef


def parse_stats(payload: Any, username: str) -> LeetCodeStats:
    if not isinstance(payload, dict) or payload.get("errors"):
        raise PlatformNotFoundError("leetcode", username)
    try:
        return LeetCodeStats.model_validate(payload)
    except ValidationError as exc:
        raise PlatformNotFoundError("leetcode", username, "malformed profile stats") from exc


def parse_calendar(payload: Any) -> dict[str, int]:
    """Return the epoch-seconds -> count calendar, validated key by key."""
    if not isinstance(payload, dict) or "submissionCalendar" not in payload:
        raise FeedError("leetcode", "calendar", "missing submissionCalendar")
    raw = payload["submissionCalendar"]
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            raise FeedError("leetcode", "calendar", "submissionCalendar is not valid JSON") from None
    if not isinstance(raw, dict):
        raise FeedError("leetcode", "calendar", "submissionCalendar is not an object")

    calendar: dict[str, int] = {}
    for ts, count in raw.items():
        try:
            timestamp_to_date(ts)
        except MalformedTimestampError as exc:
            raise FeedError("leetcode", "calendar", exc.message) from exc
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise FeedError("leetcode", "calendar", f"bad count for {ts}: {count!r}")
        calendar[str(ts)] = count
    return calendar


def _round(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return round(value)


def _first(payload: dict, *keys: str) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


def _recent_contests(entries: list[_ContestEntry]) -> list[RecentContest]:
    attended = [e for e in entries if e.attended]
    recent: list[RecentContest] = []
    previous: int | None = None
    for entry in attended:
        rating = _round(entry.rating)
        recent.append(RecentContest(name=entry.contest.title, rank=entry.ranking, old_rating=previous, new_rating=rating))
        previous = rating
    return recent[-RECENT_CONTESTS:]


def parse_contest(payload: Any) -> ContestSummary:
    if not isinstance(payload, dict):
        raise FeedError("leetcode", "contest", "unexpected payload shape")

    participation = payload.get("contestParticipation") or []
    if not isinstance(participation, list):
        raise FeedError("leetcode", "contest", "contestParticipation is not a list")
    try:
        entries = [_ContestEntry.model_validate(item) for item in participation]
    except ValidationError as exc:
        raise FeedError("leetcode", "contest", "malformed contestParticipation") from exc

    attended = _first(payload, "attendedContestsCount", "contestAttend")
    if not isinstance(attended, int) or isinstance(attended, bool) or attended < 0:
        attended = sum(1 for e in entries if e.attended)

    ranking = _first(payload, "ranking", "contestGlobalRanking")
    return ContestSummary(
        rating=_round(_first(payload, "rating", "contestRating")),
        global_ranking=ranking if isinstance(ranking, int) and not isinstance(ranking, bool) else None,
        attended_contests=attended,
        recent_contests=_recent_contests(entries),
    )


def parse_solved(payload: Any) -> list[str]:
    """Title slugs of solved problems, first occurrence wins."""
    items = payload
    if isinstance(payload, dict):
        items = _first(payload, "solvedProblem", "submission")
    if not isinstance(items, list):
        raise FeedError("leetcode", "solved", "no solved-problem list in payload")

    slugs: dict[str, None] = {}
    for item in items:
        if isinstance(item, str):
            slug = item
        elif isinstance(item, dict) and isinstance(item.get("titleSlug"), str):
            slug = item["titleSlug"]
        else:
            continue
        if slug:
            slugs.setdefault(slug, None)
    return list(slugs)


def parse_catalog(payload: Any) -> dict[str, list[str]]:
    """Index the problem list as titleSlug -> tag names."""
    items = payload
    if isinstance(payload, dict):
        items = _first(payload, "problemsetQuestionList", "problems")
    if not isinstance(items, list):
        raise FeedError("leetcode", "problems", "no problem list in payload")

    catalog: dict[str, list[str]] = {}
    for problem in items:
        if not isinstance(problem, dict) or not problem.get("titleSlug"):
            continue
        tags = problem.get("topicTags") or []
        if not isinstance(tags, list):
            continue
        names = [tag.get("name") if isinstance(tag, dict) else tag for tag in tags]
        catalog[problem["titleSlug"]] = [name for name in names if isinstance(name, str) and name]
    return catalog
