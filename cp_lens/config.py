"""Runtime settings read from the environment (and .env via load_dotenv at entry points)."""
import os
from dataclasses import dataclass, field

from cp_lens.analyzers.combined import TOP_SKILLS
from cp_lens.platforms.codeforces.fetcher import CF_BASE
from cp_lens.platforms.leetcode.analytics import SOLVED_SAMPLE_LIMIT
from cp_lens.platforms.leetcode.catalog import CATALOG_TTL
from cp_lens.platforms.leetcode.fetcher import LEETCODE_API_BASE


def _number(name: str, default: float, cast: type = float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    leetcode_api_base: str = LEETCODE_API_BASE
    codeforces_api_base: str = CF_BASE
    request_timeout: float = 10.0
    catalog_timeout: float = 30.0
    catalog_ttl: float = CATALOG_TTL
    solved_limit: int = SOLVED_SAMPLE_LIMIT
    top_skills: int = TOP_SKILLS
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"])

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        origins = os.getenv("CORS_ORIGINS")
        return cls(
            leetcode_api_base=os.getenv("LEETCODE_API_BASE", defaults.leetcode_api_base).rstrip("/"),
            codeforces_api_base=os.getenv("CODEFORCES_API_BASE", defaults.codeforces_api_base).rstrip("/"),
            request_timeout=_number("REQUEST_TIMEOUT", defaults.request_timeout),
            catalog_timeout=_number("CATALOG_TIMEOUT", defaults.catalog_timeout),
            catalog_ttl=_number("CATALOG_TTL_SECONDS", defaults.catalog_ttl),
            solved_limit=int(_number("SOLVED_SAMPLE_LIMIT", defaults.solved_limit, int)),
            top_skills=int(_number("TOP_SKILLS", defaults.top_skills, int)),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()] if origins else defaults.cors_origins,
        )
