import httpx
import pytest


def _transport(routes: dict, calls: list[str]) -> httpx.MockTransport:
    """Route by URL path. A route maps to a JSON payload, (status, payload), or an exception to raise."""

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        entry = routes.get(request.url.path)
        if entry is None:
            return httpx.Response(404, json={"error": "not found"})
        if isinstance(entry, Exception):
            raise entry
        if isinstance(entry, tuple):
            status, payload = entry
            return httpx.Response(status, json=payload)
        return httpx.Response(200, json=entry)

    return httpx.MockTransport(handler)


@pytest.fixture
def calls() -> list[str]:
    """Paths requested through the fake upstream, in order."""
    return []


@pytest.fixture
def fake_http(calls):
    """Factory for an httpx.AsyncClient backed by canned upstream routes."""

    def make(routes: dict) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=_transport(routes, calls))

    return make
