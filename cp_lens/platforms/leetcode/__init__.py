from cp_lens.platforms.leetcode.analytics import LeetCodePlatform, build_topic_analysis
from cp_lens.platforms.leetcode.catalog import CATALOG_TTL, ProblemCatalogCache
from cp_lens.platforms.leetcode.fetcher import LEETCODE_API_BASE, LeetCodeClient, fetch_problem_catalog

__all__ = [
    "CATALOG_TTL",
    "LEETCODE_API_BASE",
    "LeetCodeClient",
    "LeetCodePlatform",
    "ProblemCatalogCache",
    "build_topic_analysis",
    "fetch_problem_catalog",
]
