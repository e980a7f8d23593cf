from app.config import Settings


def test_postgres_urls_use_asyncpg():
    settings = Settings(DATABASE_URL="postgres://user:p%40ss@db:5432/rentals")
    assert settings.DATABASE_URL == "postgresql+asyncpg://user:p%40ss@db:5432/rentals"


def test_async_urls_are_left_alone():
    settings = Settings(DATABASE_URL="sqlite+aiosqlite:///./database.sqlite")
    assert settings.DATABASE_URL == "sqlite+aiosqlite:///./database.sqlite"


def test_token_lifetime_defaults_to_one_hour():
    assert Settings().ACCESS_TOKEN_EXPIRE_MINUTES == 60
