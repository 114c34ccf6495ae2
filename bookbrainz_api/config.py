import logging
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    database_url: str = Field(alias="DATABASE_URL")
    service_name: str = Field(default="bookbrainz-api", alias="SERVICE_NAME")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    sql_echo: bool = Field(default=False, alias="SQL_ECHO")
    auto_create_schema: bool = Field(default=True, alias="AUTO_CREATE_SCHEMA")

    @model_validator(mode="after")
    def validate_required_runtime(self) -> "Settings":
        if not self.database_url.strip():
            raise ValueError("DATABASE_URL is required")
        if self.database_url.startswith("sqlite:") or self.database_url.startswith("sqlite+pysqlite:"):
            raise ValueError("DATABASE_URL must use an async driver, e.g. sqlite+aiosqlite")
        if logging.getLevelName(self.log_level.upper()) not in {
            logging.DEBUG,
            logging.INFO,
            logging.WARNING,
            logging.ERROR,
            logging.CRITICAL,
        }:
            raise ValueError(f"LOG_LEVEL is not a logging level: {self.log_level}")
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
