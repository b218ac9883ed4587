"""Typed views over Codeforces API envelopes.

Every endpoint payload is validated here; anything that does not match the
expected shape becomes a FeedError (or PlatformNotFoundError for user.info)
instead of leaking half-read data into the analytics.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from cp_lens.errors import FeedError, PlatformNotFoundError


class _Feed(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class CodeforcesUser(_Feed):
    handle: str
    rating: int | None = None
    max_rating: int | None = None
    rank: str | None = None
    max_rank: str | None = None


class RatingChange(_Feed):
    contest_name: str
    rank: int | None = None
    old_rating: int | None = None
    new_rating: int | None = None


class Problem(_Feed):
    contest_id: int | None = None
    problemset_name: str | None = None
    index: str
    name: str = ""
    tags: list[str] = []

    @property
    def key(self) -> tuple[str, str]:
        """Problem identity: (contest or problem-set id, index within it)."""
        source = self.contest_id if self.contest_id is not None else self.problemset_name
        return str(source), self.index


class Submission(_Feed):
    verdict: str | None = None
    creation_time_seconds: int
    problem: Problem


def _unwrap(payload: Any, endpoint: str) -> Any:
    if not isinstance(payload, dict):
        raise FeedError("codeforces", endpoint, "unexpected payload shape")
    if payload.get("status") != "OK":
        raise FeedError("codeforces", endpoint, str(payload.get("comment") or "status is not OK"))
    if "result" not in payload:
        raise FeedError("codeforces", endpoint, "missing result")
    return payload["result"]


def parse_user_info(payload: Any, handle: str) -> CodeforcesUser:
    try:
        result = _unwrap(payload, "user.info")
    except FeedError as exc:
        raise PlatformNotFoundError("codeforces", handle, "Invalid Codeforces handle") from exc
    if not isinstance(result, list) or not result:
        raise PlatformNotFoundError("codeforces", handle, "Invalid Codeforces handle")
    try:
        return CodeforcesUser.model_validate(result[0])
    except ValidationError as exc:
        raise PlatformNotFoundError("codeforces", handle, "malformed profile") from exc


def parse_rating_history(payload: Any) -> list[RatingChange]:
    result = _unwrap(payload, "user.rating")
    if not isinstance(result, list):
        raise FeedError("codeforces", "user.rating", "result is not a list")
    try:
        return [RatingChange.model_validate(item) for item in result]
    except ValidationError as exc:
        raise FeedError("codeforces", "user.rating", f"malformed entry: {exc.error_count()} errors") from exc


def parse_submissions(payload: Any) -> list[Submission]:
    result = _unwrap(payload, "user.status")
    if not isinstance(result, list):
        raise FeedError("codeforces", "user.status", "result is not a list")
    try:
        return [Submission.model_validate(item) for item in result]
    except ValidationError as exc:
        raise FeedError("codeforces", "user.status", f"malformed entry: {exc.error_count()} errors") from exc
