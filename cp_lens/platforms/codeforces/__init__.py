from cp_lens.platforms.codeforces.analytics import CodeforcesPlatform, summarize_contests, tally_submissions
from cp_lens.platforms.codeforces.fetcher import CF_BASE, CodeforcesClient

__all__ = ["CF_BASE", "CodeforcesClient", "CodeforcesPlatform", "summarize_contests", "tally_submissions"]
