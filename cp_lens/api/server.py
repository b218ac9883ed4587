"""FastAPI server exposing cp_lens analytics as JSON and SSE endpoints."""
import json
import logging
from typing import AsyncGenerator

from dotenv import load_dotenv

load_dotenv()

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sse_starlette.sse import EventSourceResponse

from cp_lens.analyzers.combined import get_combined_analytics
from cp_lens.config import Settings
from cp_lens.errors import LensError
from cp_lens.models import LensModel
from cp_lens.platforms import build_platforms, make_catalog

_log = logging.getLogger(__name__)

settings = Settings.from_env()

app = FastAPI(title="cp-lens API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# ── Problem catalog ──────────────────────────────────────────────────────────
# One catalog per process; every request's LeetCode builder reads through it.

_catalog = make_catalog(settings)


@app.on_event("startup")
async def _log_config() -> None:
    _log.info(
        "cp-lens api  leetcode=%s  codeforces=%s  catalog_ttl=%ss",
        settings.leetcode_api_base, settings.codeforces_api_base, int(settings.catalog_ttl),
    )


@app.exception_handler(LensError)
async def _lens_error(request: Request, exc: LensError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})


def _ok(data: LensModel) -> dict:
    return {"success": True, "data": data.model_dump(mode="json", by_alias=True)}


def _http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.request_timeout)


# ── Endpoints ────────────────────────────────────────────────────────────────

@app.get("/api/health")
def health():
    return {"status": "ok", "catalogAge": _catalog.age}


@app.get("/api/platform/combined")
async def combined(leetcode: str | None = None, codeforces: str | None = None):
    """Unified analytics for a LeetCode username and/or a Codeforces handle."""
    async with _http_client() as http:
        leetcode_builder, codeforces_builder = build_platforms(http, settings, _catalog)
        report = await get_combined_analytics(
            leetcode, codeforces,
            leetcode=leetcode_builder,
            codeforces=codeforces_builder,
            top_skills=settings.top_skills,
        )
    return _ok(report)


@app.get("/api/platform/combined/stream")
async def combined_stream(leetcode: str | None = None, codeforces: str | None = None):
    """Stream SSE events: progress stages then the final report."""

    async def _generate() -> AsyncGenerator[dict, None]:
        try:
            platforms = [name for name, ident in (("leetcode", leetcode), ("codeforces", codeforces)) if ident]
            yield {
                "event": "progress",
                "data": json.dumps({"stage": "fetching", "platforms": platforms}),
            }
            async with _http_client() as http:
                leetcode_builder, codeforces_builder = build_platforms(http, settings, _catalog)
                report = await get_combined_analytics(
                    leetcode, codeforces,
                    leetcode=leetcode_builder,
                    codeforces=codeforces_builder,
                    top_skills=settings.top_skills,
                )
            yield {
                "event": "progress",
                "data": json.dumps({"stage": "merged", "platforms": report.summary.platforms_covered}),
            }
            yield {"event": "result", "data": report.model_dump_json(by_alias=True)}
        except LensError as exc:
            yield {"event": "error", "data": json.dumps({"success": False, "message": exc.message})}
        except Exception:
            _log.exception("combined stream failed")
            yield {"event": "error", "data": json.dumps({"success": False, "message": "Internal server error"})}

    return EventSourceResponse(_generate())


@app.get("/api/platform/leetcode/{username}")
async def leetcode_analytics(username: str):
    async with _http_client() as http:
        leetcode_builder, _ = build_platforms(http, settings, _catalog)
        analytics = await leetcode_builder.build(username)
    return _ok(analytics)


@app.get("/api/platform/codeforces/{handle}")
async def codeforces_analytics(handle: str):
    async with _http_client() as http:
        _, codeforces_builder = build_platforms(http, settings, _catalog)
        analytics = await codeforces_builder.build(handle)
    return _ok(analytics)


@app.post("/api/platform/leetcode/cache/clear")
def clear_problem_cache():
    """Drop the cached problem catalog; the next LeetCode request refetches it."""
    _catalog.clear()
    return {"success": True, "message": "Problems cache cleared"}
