import asyncio
from datetime import datetime, timezone

import pytest

from cp_lens.analyzers.combined import compose_report, get_combined_analytics, resolve_outcomes
from cp_lens.errors import BothPlatformsFailedError, InvalidRequestError, PlatformNotFoundError
from cp_lens.models import (
    CodeforcesAnalytics,
    CodeforcesRank,
    ContestSummary,
    DifficultyBreakdown,
    LeetCodeAnalytics,
    RecentContest,
)
from cp_lens.utils.result import Err, Ok

NOW = datetime(2025, 10, 19, 12, 0, tzinfo=timezone.utc)

LEETCODE = LeetCodeAnalytics(
    identifier="neal_wu",
    total_solved=412,
    difficulty_breakdown=DifficultyBreakdown(easy=150, medium=200, hard=62),
    calendar={"1759795200": 2, "1759881600": 1},
    contest=ContestSummary(rating=2891, global_ranking=12, attended_contests=3),
    topics={"dp": 5, "graphs": 2},
    fetched_at=NOW,
)

CODEFORCES = CodeforcesAnalytics(
    identifier="tourist",
    total_solved=3000,
    profile=CodeforcesRank(rating=3757, max_rating=4009, rank="legendary grandmaster", max_rank="tourist"),
    calendar={"2025-10-01": 1, "2025-10-07": 3},
    contest=ContestSummary(
        rating=3757,
        attended_contests=7,
        recent_contests=[RecentContest(name="Round 1", rank=1, old_rating=3700, new_rating=3757)],
    ),
    topics={"graphs": 3, "trees": 1},
    fetched_at=NOW,
)


class FakeBuilder:
    def __init__(self, name, result=None, error=None, before=None):
        self.name = name
        self.result = result
        self.error = error
        self.before = before
        self.calls: list[str] = []

    async def build(self, identifier):
        self.calls.append(identifier)
        if self.before is not None:
            await self.before()
        if self.error is not None:
            raise self.error
        return self.result


def _run(leetcode_id, codeforces_id, leetcode, codeforces, **kwargs):
    return asyncio.run(get_combined_analytics(
        leetcode_id, codeforces_id, leetcode=leetcode, codeforces=codeforces, **kwargs
    ))


# ── compose_report ───────────────────────────────────────────────────────────

def test_both_platforms_merge_into_one_report():
    report = compose_report(LEETCODE, CODEFORCES, generated_at=NOW)

    assert report.combined_metrics.total_solved_leetcode == 412
    assert report.combined_metrics.total_solved_codeforces == 3000
    assert report.combined_metrics.combined_total == 3412
    assert report.activity_calendar == {"2025-10-01": 1, "2025-10-07": 5, "2025-10-08": 1}
    assert list(report.activity_calendar) == sorted(report.activity_calendar)
    assert report.topic_analysis == {"graphs": 5, "dp": 5, "trees": 1}
    assert report.summary.platforms_covered == ["leetcode", "codeforces"]
    assert report.summary.top_skills[-1] == "trees"
    assert report.summary.last_updated == NOW
    assert report.profiles.leetcode.username == "neal_wu"
    assert report.profiles.codeforces.handle == "tourist"
    assert report.contest_data.codeforces.recent_contests[0].name == "Round 1"


def test_only_leetcode_present():
    report = compose_report(LEETCODE, None, generated_at=NOW)
    assert report.profiles.codeforces is None
    assert report.contest_data.codeforces is None
    assert report.combined_metrics.combined_total == 412
    assert report.summary.platforms_covered == ["leetcode"]
    assert report.activity_calendar == {"2025-10-07": 2, "2025-10-08": 1}


def test_top_skills_follow_merged_order_and_limit():
    many = LEETCODE.model_copy(update={"topics": {f"tag{i:02d}": 100 - i for i in range(15)}})
    report = compose_report(many, None, top_skills=10)
    assert report.summary.top_skills == [f"tag{i:02d}" for i in range(10)]


def test_json_shape_uses_camel_case():
    body = compose_report(LEETCODE, None, generated_at=NOW).model_dump(mode="json", by_alias=True)
    assert set(body) == {"profiles", "combinedMetrics", "activityCalendar", "topicAnalysis", "contestData", "summary"}
    assert body["combinedMetrics"] == {"totalSolvedLeetCode": 412, "totalSolvedCodeforces": 0, "combinedTotal": 412}
    assert body["profiles"]["codeforces"] is None
    assert body["profiles"]["leetcode"]["difficultyBreakdown"] == {"easy": 150, "medium": 200, "hard": 62}
    assert body["contestData"]["leetcode"]["globalRanking"] == 12
    assert set(body["summary"]) == {"platformsCovered", "lastUpdated", "topSkills"}


# ── resolve_outcomes ─────────────────────────────────────────────────────────

def test_resolve_keeps_successes_and_drops_failures():
    assert resolve_outcomes(Ok(LEETCODE), Ok(CODEFORCES)) == (LEETCODE, CODEFORCES)
    assert resolve_outcomes(Ok(LEETCODE), Err(RuntimeError("x"))) == (LEETCODE, None)
    assert resolve_outcomes(Ok(None), Ok(CODEFORCES)) == (None, CODEFORCES)


@pytest.mark.parametrize("leetcode, codeforces", [
    (Err(RuntimeError("a")), Err(RuntimeError("b"))),
    (Ok(None), Err(RuntimeError("b"))),
    (Err(RuntimeError("a")), Ok(None)),
    (Ok(None), Ok(None)),
])
def test_resolve_fails_when_nothing_is_present(leetcode, codeforces):
    with pytest.raises(BothPlatformsFailedError):
        resolve_outcomes(leetcode, codeforces)


# ── get_combined_analytics ───────────────────────────────────────────────────

def test_no_identifier_is_rejected_before_fetching():
    leetcode = FakeBuilder("leetcode", LEETCODE)
    codeforces = FakeBuilder("codeforces", CODEFORCES)
    with pytest.raises(InvalidRequestError):
        _run(None, "  ", leetcode, codeforces)
    assert leetcode.calls == codeforces.calls == []


def test_only_platform_a_succeeds():
    leetcode = FakeBuilder("leetcode", LEETCODE)
    codeforces = FakeBuilder("codeforces", error=PlatformNotFoundError("codeforces", "ghost"))
    report = _run("neal_wu", "ghost", leetcode, codeforces)

    assert report.profiles.codeforces is None
    assert report.combined_metrics.combined_total == LEETCODE.total_solved
    assert report.summary.platforms_covered == ["leetcode"]
    assert codeforces.calls == ["ghost"]


def test_both_platforms_failing_is_an_aggregate_error():
    leetcode = FakeBuilder("leetcode", error=PlatformNotFoundError("leetcode", "ghost"))
    codeforces = FakeBuilder("codeforces", error=RuntimeError("socket closed"))
    with pytest.raises(BothPlatformsFailedError) as excinfo:
        _run("ghost", "ghost", leetcode, codeforces)

    assert set(excinfo.value.reasons) == {"leetcode", "codeforces"}
    assert "socket closed" in excinfo.value.message


def test_unrequested_platform_is_skipped():
    leetcode = FakeBuilder("leetcode", LEETCODE)
    codeforces = FakeBuilder("codeforces", CODEFORCES)
    report = _run(None, "tourist", leetcode, codeforces)

    assert leetcode.calls == []
    assert report.summary.platforms_covered == ["codeforces"]
    assert report.activity_calendar == {"2025-10-01": 1, "2025-10-07": 3}


def test_single_requested_platform_failing_is_both_failed():
    codeforces = FakeBuilder("codeforces", error=PlatformNotFoundError("codeforces", "ghost"))
    with pytest.raises(BothPlatformsFailedError):
        _run("", "ghost", FakeBuilder("leetcode", LEETCODE), codeforces)


def test_identifiers_are_trimmed():
    leetcode = FakeBuilder("leetcode", LEETCODE)
    codeforces = FakeBuilder("codeforces", CODEFORCES)
    _run(" neal_wu ", "\ttourist\n", leetcode, codeforces)
    assert leetcode.calls == ["neal_wu"]
    assert codeforces.calls == ["tourist"]


def test_builders_run_concurrently():
    async def scenario():
        leetcode_started = asyncio.Event()
        codeforces_started = asyncio.Event()

        async def leetcode_waits():
            leetcode_started.set()
            await codeforces_started.wait()

        async def codeforces_waits():
            codeforces_started.set()
            await leetcode_started.wait()

        # Each builder blocks until the other has started; sequential execution would hang.
        return await asyncio.wait_for(
            get_combined_analytics(
                "neal_wu", "tourist",
                leetcode=FakeBuilder("leetcode", LEETCODE, before=leetcode_waits),
                codeforces=FakeBuilder("codeforces", CODEFORCES, before=codeforces_waits),
            ),
            timeout=2,
        )

    report = asyncio.run(scenario())
    assert report.combined_metrics.combined_total == 3412
