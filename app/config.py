from typing import List

from pydantic_settings import BaseSettings
from pydantic import field_validator
from sqlalchemy.engine import make_url


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./database.sqlite"
    JWT_SECRET: str = "your_jwt_secret"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 10
    HOST: str = "0.0.0.0"
    PORT: int = 9001
    API_PREFIX: str = ""
    CORS_ORIGINS: List[str] = ["*"]
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    CREATE_TABLES_ON_STARTUP: bool = True

    @field_validator("DATABASE_URL")
    def normalize_database_url(cls, v):
        """
        Points plain PostgreSQL URLs (as handed out by most hosting providers)
        at the asyncpg driver so the async engine can use them unchanged.
        """
        if not v:
            return v
        if v.startswith("postgres://"):
            v = "postgresql://" + v[len("postgres://"):]
        url = make_url(v)
        if url.drivername == "postgresql":
            url = url.set(drivername="postgresql+asyncpg")
            return url.render_as_string(hide_password=False)
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()


def get_settings() -> Settings:
    return settings
