import logging
from collections import Counter
from datetime import datetime, timezone
from typing import Iterable, Mapping

from cp_lens.analyzers.topics import sort_topics
from cp_lens.errors import InvalidRequestError, PlatformNotFoundError
from cp_lens.models import ContestSummary, DifficultyBreakdown, LeetCodeAnalytics
from cp_lens.platforms.base import DEGRADABLE, degrade
from cp_lens.platforms.leetcode.catalog import ProblemCatalogCache
from cp_lens.platforms.leetcode.fetcher import LeetCodeClient
from cp_lens.platforms.leetcode.parser import (
    LeetCodeStats,
    parse_calendar,
    parse_contest,
    parse_solved,
    parse_stats,
)
from cp_lens.utils.result import Err, settle_all

_log = logging.getLogger(__name__)

# The mirror returns at most this many recent accepted submissions, so
# topics may cover fewer problems than total_solved.
SOLVED_SAMPLE_LIMIT = 300


def build_topic_analysis(solved_slugs: Iterable[str], catalog: Mapping[str, list[str]]) -> dict[str, int]:
    """Count tags over solved problems; slugs missing from the catalog add nothing."""
    topics: Counter[str] = Counter()
    for slug in solved_slugs:
        topics.update(catalog.get(slug, ()))
    return sort_topics(topics)


class LeetCodePlatform:
    name = "leetcode"

    def __init__(
        self,
        client: LeetCodeClient,
        catalog: ProblemCatalogCache,
        solved_limit: int = SOLVED_SAMPLE_LIMIT,
    ) -> None:
        self._client = client
        self._catalog = catalog
        self._solved_limit = solved_limit

    async def _stats(self, username: str) -> LeetCodeStats:
        return parse_stats(await self._client.stats(username), username)

    async def _calendar(self, username: str) -> dict[str, int]:
        return parse_calendar(await self._client.calendar(username))

    async def _contest(self, username: str) -> ContestSummary:
        return parse_contest(await self._client.contest(username))

    async def _solved(self, username: str) -> list[str]:
        return parse_solved(await self._client.solved(username, self._solved_limit))

    async def build(self, identifier: str) -> LeetCodeAnalytics:
        username = (identifier or "").strip().lower()
        if not username:
            raise InvalidRequestError("Invalid username provided")

        _log.info("Fetching LeetCode analytics for %s", username)
        stats_result, calendar_result, contest_result, solved_result = await settle_all(
            self._stats(username),
            self._calendar(username),
            self._contest(username),
            self._solved(username),
        )

        if isinstance(stats_result, Err):
            reason = stats_result.reason
            if isinstance(reason, DEGRADABLE):
                raise PlatformNotFoundError("leetcode", username) from reason
            raise reason
        stats = stats_result.value

        calendar = degrade(calendar_result, {}, platform=self.name, feed="calendar", identifier=username)
        contest = degrade(contest_result, ContestSummary(), platform=self.name, feed="contest", identifier=username)
        slugs = degrade(solved_result, [], platform=self.name, feed="solved", identifier=username)

        topics: dict[str, int] = {}
        if slugs:
            topics = build_topic_analysis(slugs, await self._catalog.get_or_refresh())
        _log.debug("leetcode %s: %d calendar days, %d solved slugs, %d tags", username, len(calendar), len(slugs), len(topics))

        return LeetCodeAnalytics(
            identifier=stats.username or username,
            total_solved=stats.total_solved,
            difficulty_breakdown=DifficultyBreakdown(
                easy=stats.easy_solved,
                medium=stats.medium_solved,
                hard=stats.hard_solved,
            ),
            calendar=calendar,
            contest=contest,
            topics=topics,
            fetched_at=datetime.now(timezone.utc),
        )
