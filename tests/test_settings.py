from bizadmin.core.settings import AppSettings
from bizadmin.db.config import Settings


def test_cors_origins_accept_comma_separated_and_json(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    assert AppSettings().CORS_ORIGINS == ["http://a.test", "http://b.test"]

    monkeypatch.setenv("CORS_ORIGINS", '["http://c.test"]')
    assert AppSettings().CORS_ORIGINS == ["http://c.test"]


def test_editor_defaults():
    settings = AppSettings()
    assert settings.VIEWPORT_BREAKPOINT_PX == 1000
    assert settings.DATA_BACKEND in ("sql", "supabase")


def test_postgres_url_is_normalised_to_asyncpg():
    settings = Settings(POSTGRES_URL="postgresql://u:p@db:5432/app")
    assert settings.async_database_url == "postgresql+asyncpg://u:p@db:5432/app"
    assert settings.sync_database_url == "postgresql://u:p@db:5432/app"


def test_url_built_from_parts():
    settings = Settings(
        POSTGRES_URL=None,
        POSTGRES_USER="u",
        POSTGRES_PASSWORD="p",
        POSTGRES_DB="app",
        POSTGRES_HOST="db",
        POSTGRES_PORT=6543,
    )
    assert settings.database_url == "postgresql://u:p@db:6543/app"


def test_non_postgres_urls_pass_through():
    settings = Settings(POSTGRES_URL="sqlite+aiosqlite:///./local.db")
    assert settings.async_database_url == "sqlite+aiosqlite:///./local.db"
    assert settings.sync_database_url == "sqlite:///./local.db"
