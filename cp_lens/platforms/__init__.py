import httpx

from cp_lens.platforms.codeforces import CodeforcesClient, CodeforcesPlatform
from cp_lens.platforms.leetcode import LeetCodeClient, LeetCodePlatform, ProblemCatalogCache, fetch_problem_catalog


def make_catalog(settings) -> ProblemCatalogCache:
    """Process-wide problem catalog cache wired to the configured mirror."""
    return ProblemCatalogCache(
        lambda: fetch_problem_catalog(settings.leetcode_api_base, timeout=settings.catalog_timeout),
        ttl=settings.catalog_ttl,
    )


def build_platforms(
    http: httpx.AsyncClient,
    settings,
    catalog: ProblemCatalogCache,
) -> tuple[LeetCodePlatform, CodeforcesPlatform]:
    """Per-request builders sharing one HTTP client."""
    return (
        LeetCodePlatform(LeetCodeClient(http, settings.leetcode_api_base), catalog, solved_limit=settings.solved_limit),
        CodeforcesPlatform(CodeforcesClient(http, settings.codeforces_api_base)),
    )
