import pytest

from cp_lens.analyzers.combined import TOP_SKILLS
from cp_lens.config import Settings

ENV_VARS = [
    "LEETCODE_API_BASE", "CODEFORCES_API_BASE", "REQUEST_TIMEOUT", "CATALOG_TIMEOUT",
    "CATALOG_TTL_SECONDS", "SOLVED_SAMPLE_LIMIT", "TOP_SKILLS", "CORS_ORIGINS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_without_environment():
    settings = Settings.from_env()
    assert settings == Settings()
    assert settings.catalog_ttl == 86400
    assert settings.top_skills == TOP_SKILLS == 10
    assert settings.codeforces_api_base == "https://codeforces.com/api"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LEETCODE_API_BASE", "http://localhost:3001/")
    monkeypatch.setenv("CATALOG_TTL_SECONDS", "60")
    monkeypatch.setenv("TOP_SKILLS", "5")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")

    settings = Settings.from_env()
    assert settings.leetcode_api_base == "http://localhost:3001"
    assert settings.catalog_ttl == 60.0
    assert settings.top_skills == 5
    assert settings.cors_origins == ["https://a.example", "https://b.example"]


def test_blank_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("REQUEST_TIMEOUT", "  ")
    assert Settings.from_env().request_timeout == Settings().request_timeout


@pytest.mark.parametrize("name, value", [
    ("REQUEST_TIMEOUT", "fast"),
    ("CATALOG_TTL_SECONDS", "0"),
    ("SOLVED_SAMPLE_LIMIT", "-5"),
    ("TOP_SKILLS", "2.5"),
])
def test_invalid_numbers_name_the_variable(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=name):
        Settings.from_env()
