"""
Configuration — loads logger settings from environment variables / `.env`.
Resolved once at process start and threaded into `build_logger`; nothing
re-reads the environment per log call.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sblogger.core.levels import DEFAULT_THRESHOLD, parse_threshold

UNKNOWN_SERVICE = "unknown"
DEVELOPMENT = "development"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # ── Filtering ─────────────────────────────────────────────────────────────
    log_level: str = DEFAULT_THRESHOLD

    # ── Identity ──────────────────────────────────────────────────────────────
    # SERVICE_NAME wins; CI_PROJECT_NAME is what GitLab pipelines export
    service_name: str = Field(
        default=UNKNOWN_SERVICE,
        validation_alias=AliasChoices("service_name", "ci_project_name"),
    )

    # ── Presentation ─────────────────────────────────────────────────────────
    environment: str = Field(
        default="production",
        validation_alias=AliasChoices("environment", "node_env"),
    )
    include_level_name: bool = Field(
        default=False,
        validation_alias=AliasChoices("include_level_name", "log_include_level_name"),
    )
    color: bool = Field(
        default=True,
        validation_alias=AliasChoices("color", "log_color"),
    )

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, v: str) -> str:
        return parse_threshold(v)

    @field_validator("service_name")
    @classmethod
    def default_blank_service(cls, v: str) -> str:
        return v.strip() or UNKNOWN_SERVICE

    @property
    def console_mode(self) -> bool:
        return self.environment.strip().lower() == DEVELOPMENT


@lru_cache()
def get_settings() -> Settings:
    return Settings()
