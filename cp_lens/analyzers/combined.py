"""Unified LeetCode + Codeforces report: concurrent fan-out, partial-failure policy, merge."""
import logging
from datetime import datetime, timezone

from cp_lens.analyzers.calendar import merge_calendars
from cp_lens.analyzers.topics import merge_topics
from cp_lens.errors import BothPlatformsFailedError, InvalidRequestError
from cp_lens.models import (
    CodeforcesAnalytics,
    CodeforcesProfile,
    CombinedMetrics,
    ContestData,
    LeetCodeAnalytics,
    LeetCodeProfile,
    PlatformAnalytics,
    Profiles,
    ReportSummary,
    UnifiedReport,
)
from cp_lens.platforms.base import PlatformBuilder
from cp_lens.utils.result import Ok, Result, settle_all

_log = logging.getLogger(__name__)

TOP_SKILLS = 10


def resolve_outcomes(
    leetcode: Result,
    codeforces: Result,
) -> tuple[LeetCodeAnalytics | None, CodeforcesAnalytics | None]:
    """Decide which platforms make it into the report.

    | leetcode      | codeforces    | outcome                      |
    |---------------|---------------|------------------------------|
    | Ok(analytics) | Ok(analytics) | both present                 |
    | Ok(analytics) | Err / Ok(None)| codeforces absent            |
    | Err / Ok(None)| Ok(analytics) | leetcode absent              |
    | Err / Ok(None)| Err / Ok(None)| BothPlatformsFailedError     |

    Ok(None) means the identifier was never supplied.
    """
    present: dict[str, PlatformAnalytics | None] = {}
    reasons: dict[str, str] = {}
    for name, result in (("leetcode", leetcode), ("codeforces", codeforces)):
        if isinstance(result, Ok):
            present[name] = result.value
            if result.value is None:
                reasons[name] = "no identifier supplied"
        else:
            _log.warning("%s fetch failed: %s", name, result.reason)
            present[name] = None
            reasons[name] = str(result.reason)

    if present["leetcode"] is None and present["codeforces"] is None:
        raise BothPlatformsFailedError(reasons)
    return present["leetcode"], present["codeforces"]


def compose_report(
    leetcode: LeetCodeAnalytics | None,
    codeforces: CodeforcesAnalytics | None,
    generated_at: datetime | None = None,
    top_skills: int = TOP_SKILLS,
) -> UnifiedReport:
    """Merge whichever platform analytics are present into one report.

    An absent platform contributes empty calendars and topic tables and a
    zero solved count.
    """
    if leetcode is None and codeforces is None:
        raise BothPlatformsFailedError({})

    calendar = merge_calendars(
        leetcode.calendar if leetcode else {},
        codeforces.calendar if codeforces else {},
    )
    topics = merge_topics(
        leetcode.topics if leetcode else {},
        codeforces.topics if codeforces else {},
    )
    leetcode_total = leetcode.total_solved if leetcode else 0
    codeforces_total = codeforces.total_solved if codeforces else 0

    profiles = Profiles(
        leetcode=LeetCodeProfile(
            username=leetcode.identifier,
            total_solved=leetcode.total_solved,
            difficulty_breakdown=leetcode.difficulty_breakdown,
        ) if leetcode else None,
        codeforces=CodeforcesProfile(
            handle=codeforces.identifier,
            profile=codeforces.profile,
            total_solved=codeforces.total_solved,
        ) if codeforces else None,
    )

    return UnifiedReport(
        profiles=profiles,
        combined_metrics=CombinedMetrics(
            total_solved_leetcode=leetcode_total,
            total_solved_codeforces=codeforces_total,
            combined_total=leetcode_total + codeforces_total,
        ),
        activity_calendar=calendar,
        topic_analysis=topics,
        contest_data=ContestData(
            leetcode=leetcode.contest if leetcode else None,
            codeforces=codeforces.contest if codeforces else None,
        ),
        summary=ReportSummary(
            platforms_covered=[p.platform for p in (leetcode, codeforces) if p is not None],
            last_updated=generated_at or datetime.now(timezone.utc),
            # merge_topics already orders by count
            top_skills=list(topics)[:top_skills],
        ),
    )


async def _build_if_requested(builder: PlatformBuilder, identifier: str) -> PlatformAnalytics | None:
    if not identifier:
        return None
    return await builder.build(identifier)


async def get_combined_analytics(
    leetcode_username: str | None,
    codeforces_handle: str | None,
    *,
    leetcode: PlatformBuilder,
    codeforces: PlatformBuilder,
    top_skills: int = TOP_SKILLS,
) -> UnifiedReport:
    """Fetch both platforms concurrently and merge them into a UnifiedReport.

    Raises InvalidRequestError when neither identifier is supplied (before
    any fetch), and BothPlatformsFailedError when no platform yields
    analytics. A single platform failing only makes it absent.
    """
    leetcode_username = (leetcode_username or "").strip()
    codeforces_handle = (codeforces_handle or "").strip()
    if not leetcode_username and not codeforces_handle:
        raise InvalidRequestError(
            "At least one platform username/handle is required (leetcode or codeforces)"
        )

    leetcode_result, codeforces_result = await settle_all(
        _build_if_requested(leetcode, leetcode_username),
        _build_if_requested(codeforces, codeforces_handle),
    )
    leetcode_data, codeforces_data = resolve_outcomes(leetcode_result, codeforces_result)
    return compose_report(leetcode_data, codeforces_data, top_skills=top_skills)
