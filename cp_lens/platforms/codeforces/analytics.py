import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, NamedTuple

import httpx

from cp_lens.analyzers.topics import sort_topics
from cp_lens.errors import FeedError, InvalidRequestError, PlatformNotFoundError
from cp_lens.models import CodeforcesAnalytics, CodeforcesRank, ContestSummary, RecentContest
from cp_lens.platforms.base import degrade
from cp_lens.platforms.codeforces.fetcher import CodeforcesClient
from cp_lens.platforms.codeforces.parser import (
    CodeforcesUser,
    RatingChange,
    Submission,
    parse_rating_history,
    parse_submissions,
    parse_user_info,
)
from cp_lens.utils.dates import timestamp_to_date
from cp_lens.utils.result import settle_all

_log = logging.getLogger(__name__)

ACCEPTED = "OK"
RECENT_CONTESTS = 5
TOPIC_LIMIT = 200


class SubmissionTally(NamedTuple):
    total_solved: int
    topics: dict[str, int]
    calendar: dict[str, int]


def tally_submissions(submissions: Iterable[Submission], topic_limit: int | None = TOPIC_LIMIT) -> SubmissionTally:
    """Fold accepted submissions into solved count, tag table and activity calendar.

    The calendar counts every accepted submission, resubmissions included.
    The solved set and the tag table count each problem once, on its first
    accepted submission in feed order.
    """
    solved: set[tuple[str, str]] = set()
    topics: Counter[str] = Counter()
    calendar: Counter[str] = Counter()

    for sub in submissions:
        if sub.verdict != ACCEPTED:
            continue
        calendar[timestamp_to_date(sub.creation_time_seconds)] += 1

        key = sub.problem.key
        if key in solved:
            continue
        solved.add(key)
        topics.update(sub.problem.tags)

    return SubmissionTally(
        total_solved=len(solved),
        topics=sort_topics(topics, topic_limit),
        calendar=dict(sorted(calendar.items())),
    )


def summarize_contests(history: list[RatingChange], rating: int | None = None) -> ContestSummary:
    """Contest summary from a chronological rating history; keeps the last five entries."""
    recent = [
        RecentContest(
            name=change.contest_name,
            rank=change.rank,
            old_rating=change.old_rating,
            new_rating=change.new_rating,
        )
        for change in history[-RECENT_CONTESTS:]
    ]
    return ContestSummary(rating=rating, attended_contests=len(history), recent_contests=recent)


def _rank(user: CodeforcesUser) -> CodeforcesRank:
    return CodeforcesRank(
        rating=user.rating,
        max_rating=user.max_rating,
        rank=user.rank or "unrated",
        max_rank=user.max_rank or "unrated",
    )


class CodeforcesPlatform:
    name = "codeforces"

    def __init__(self, client: CodeforcesClient) -> None:
        self._client = client

    async def _rating_history(self, handle: str) -> list[RatingChange]:
        return parse_rating_history(await self._client.user_rating(handle))

    async def _submissions(self, handle: str) -> list[Submission]:
        return parse_submissions(await self._client.user_status(handle))

    async def build(self, identifier: str) -> CodeforcesAnalytics:
        handle = (identifier or "").strip()
        if not handle:
            raise InvalidRequestError("Codeforces handle is required")

        _log.info("Fetching Codeforces analytics for %s", handle)
        try:
            payload = await self._client.user_info(handle)
        except (httpx.HTTPError, FeedError) as exc:
            raise PlatformNotFoundError("codeforces", handle, f"API error: {exc}") from exc
        # Unknown handle short-circuits before the rating and submission feeds.
        user = parse_user_info(payload, handle)

        rating_result, status_result = await settle_all(
            self._rating_history(handle),
            self._submissions(handle),
        )
        history = degrade(rating_result, [], platform=self.name, feed="user.rating", identifier=handle)
        submissions = degrade(status_result, [], platform=self.name, feed="user.status", identifier=handle)
        _log.debug("codeforces %s: %d rating changes, %d submissions", handle, len(history), len(submissions))

        tally = tally_submissions(submissions)
        return CodeforcesAnalytics(
            identifier=user.handle,
            profile=_rank(user),
            total_solved=tally.total_solved,
            calendar=tally.calendar,
            contest=summarize_contests(history, user.rating),
            topics=tally.topics,
            fetched_at=datetime.now(timezone.utc),
        )
