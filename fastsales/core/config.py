# fastsales/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal

class Settings(BaseSettings):
    # App
    ENV: str = "development"
    DEBUG: bool = False

    # Security
    SECRET_KEY: str
    ALGORITHM: Literal["HS256"] = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Database
    DATABASE_URL: str = "sqlite:///./fastsales.db"
    DB_POOL_SIZE: int = 5

    # Reference time zone for "today" and default report windows
    TIMEZONE: str = "UTC"

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = True

    # Frontend origins allowed by CORS
    CORS_ORIGINS: list[str] = []



    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
    )


settings = Settings()
