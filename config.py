# config.py — environment driven settings, one instance per process
import sys
from typing import Literal

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, read from LIBRARY_* env vars and an optional .env file."""

    model_config = SettingsConfigDict(
        env_prefix="LIBRARY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Local Library"
    environment: Literal["development", "production"] = "development"
    database_url: str = "sqlite+aiosqlite:///./library.db"
    echo_sql: bool = False
    log_level: str = Field(default="INFO")

    @property
    def debug(self) -> bool:
        return self.environment == "development"


def configure_logging(settings: Settings) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {name} - {message}",
    )
