from decimal import Decimal

from fxjournal.config import Settings


def test_defaults_when_environment_is_empty(monkeypatch):
    for name in ("JOURNAL_API_URL", "DATABASE_URL", "REDIS_URL", "CACHE_TTL_SECONDS", "BREAKEVEN_TOLERANCE"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.journal_api_url is None
    assert settings.cache_ttl_seconds == 60
    assert settings.breakeven_tolerance == Decimal("0.01")


def test_values_are_read_and_empty_strings_ignored(monkeypatch):
    monkeypatch.setenv("JOURNAL_API_URL", "https://journal.test/api")
    monkeypatch.setenv("CACHE_TTL_SECONDS", "120")
    monkeypatch.setenv("BREAKEVEN_TOLERANCE", "0.5")
    monkeypatch.setenv("REDIS_URL", "")

    settings = Settings.from_env()

    assert settings.journal_api_url == "https://journal.test/api"
    assert settings.cache_ttl_seconds == 120
    assert settings.breakeven_tolerance == Decimal("0.5")
    assert settings.redis_url is None
