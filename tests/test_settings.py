import pytest

from careers.core import settings as settings_module


@pytest.fixture
def fresh_settings(monkeypatch):
    settings_module.get_settings.cache_clear()
    yield monkeypatch
    settings_module.get_settings.cache_clear()


def test_test_environment_uses_sqlite(fresh_settings):
    settings = settings_module.get_settings()
    assert settings.is_sqlite
    assert settings.database_url.startswith("sqlite+aiosqlite:///")
    assert settings.timezone == "UTC"


def test_postgres_urls_are_normalised_to_asyncpg(fresh_settings):
    fresh_settings.setenv("DATABASE_URL", "postgresql://careers:secret@db:5432/careers")
    settings = settings_module.get_settings()
    assert settings.database_url == "postgresql+asyncpg://careers:secret@db:5432/careers"
    assert not settings.is_sqlite


def test_invalid_numbers_fall_back_to_defaults(fresh_settings):
    fresh_settings.setenv("DB_POOL_SIZE", "lots")
    fresh_settings.setenv("CANDIDATE_API_TIMEOUT", "-3")
    settings = settings_module.get_settings()
    assert settings.db_pool_size == 10
    assert settings.candidate_api_timeout == 10.0


def test_cors_origins_are_split(fresh_settings):
    fresh_settings.setenv("CORS_ORIGINS", "https://careers.example.com, https://jobs.example.com,")
    settings = settings_module.get_settings()
    assert settings.cors_origins == ("https://careers.example.com", "https://jobs.example.com")


def test_docs_disabled_in_production_by_default(fresh_settings):
    fresh_settings.setenv("ENVIRONMENT", "production")
    fresh_settings.delenv("API_DOCS_ENABLED", raising=False)
    assert settings_module.get_settings().api_docs_enabled is False


def test_unknown_environment_falls_back_to_development(fresh_settings):
    fresh_settings.setenv("ENVIRONMENT", "qa")
    assert settings_module.get_settings().environment == "development"
