from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt
from pydantic.alias_generators import to_camel


class LensModel(BaseModel):
    # snake_case in Python, camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class DifficultyBreakdown(LensModel):
    easy: NonNegativeInt = 0
    medium: NonNegativeInt = 0
    hard: NonNegativeInt = 0


class RecentContest(LensModel):
    name: str
    rank: int | None = None
    old_rating: int | None = None
    new_rating: int | None = None


class ContestSummary(LensModel):
    rating: int | None = None
    global_ranking: int | None = None
    attended_contests: NonNegativeInt = 0
    recent_contests: list[RecentContest] = []


class CodeforcesRank(LensModel):
    rating: int | None = None
    max_rating: int | None = None
    rank: str = "unrated"
    max_rank: str = "unrated"


class PlatformAnalytics(LensModel):
    platform: str
    identifier: str
    total_solved: NonNegativeInt = 0
    calendar: dict[str, int] = {}       # platform-native keys (epoch seconds or YYYY-MM-DD)
    contest: ContestSummary = ContestSummary()
    topics: dict[str, int] = {}         # sorted by count, descending
    success: bool = True
    fetched_at: datetime


class LeetCodeAnalytics(PlatformAnalytics):
    platform: str = "leetcode"
    difficulty_breakdown: DifficultyBreakdown = DifficultyBreakdown()


class CodeforcesAnalytics(PlatformAnalytics):
    platform: str = "codeforces"
    profile: CodeforcesRank = CodeforcesRank()


class LeetCodeProfile(LensModel):
    username: str
    total_solved: NonNegativeInt
    difficulty_breakdown: DifficultyBreakdown


class CodeforcesProfile(LensModel):
    handle: str
    profile: CodeforcesRank
    total_solved: NonNegativeInt


class Profiles(LensModel):
    leetcode: LeetCodeProfile | None = None
    codeforces: CodeforcesProfile | None = None


class CombinedMetrics(LensModel):
    total_solved_leetcode: NonNegativeInt = Field(0, alias="totalSolvedLeetCode")
    total_solved_codeforces: NonNegativeInt = Field(0, alias="totalSolvedCodeforces")
    combined_total: NonNegativeInt = 0


class ContestData(LensModel):
    leetcode: ContestSummary | None = None
    codeforces: ContestSummary | None = None


class ReportSummary(LensModel):
    platforms_covered: list[str]
    last_updated: datetime
    top_skills: list[str]


class UnifiedReport(LensModel):
    profiles: Profiles
    combined_metrics: CombinedMetrics
    activity_calendar: dict[str, int]   # YYYY-MM-DD, ascending
    topic_analysis: dict[str, int]      # count, descending
    contest_data: ContestData
    summary: ReportSummary
