"""
Configuration Management for Mocha

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: Every setting has a default, so the core runs with no
environment at all. Variables only override the defaults (e.g. the name of
the jar created by the first deposit).
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """Jar and goal defaults."""

    model_config = SettingsConfigDict(
        env_prefix="MOCHA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_jar_name: str = Field(
        default="Main Jar",
        min_length=1,
        description="Name of the jar created by the first deposit"
    )
    default_jar_category: str = Field(
        default="savings",
        description="Category of the jar created by the first deposit"
    )
    default_goal_category: str = Field(
        default="shortTerm",
        description="Category given to goals created without one"
    )
    currency_code: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="ISO currency code used when formatting amounts"
    )
    near_completion_ratio: Decimal = Field(
        default=Decimal("0.75"),
        gt=0,
        le=1,
        description="Goal progress at which a 'close to goal' insight is raised"
    )

    @field_validator('currency_code')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.upper()


class QuerySettings(BaseSettings):
    """Natural-language query responder configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MOCHA_QUERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    canned_answer: str = Field(
        default="AI says: You're doing great!",
        description="Answer returned for every question"
    )
    suggested_actions: list[str] = Field(
        default_factory=lambda: ["Check jars", "Add new goal"],
        description="Suggested follow-up actions returned with every answer"
    )


class LoggingSettings(BaseSettings):
    """Structured logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MOCHA_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    json_output: bool = Field(
        default=True,
        description="Render log lines as JSON (False gives console output)"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def query(self) -> QuerySettings:
        return QuerySettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings groups load.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the ones that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("ledger", "query", "logging"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
