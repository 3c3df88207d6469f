"""Application configuration with validation."""
from typing import Literal
from functools import lru_cache
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from the environment / .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Graduate Recommendation Admission Engine"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # Rule tables
    RULE_TABLE_VERSION: str = "2024.1"

    # Review workflow
    TRANSITION_MAX_RETRIES: int = Field(default=5, ge=1, le=10)
    SYSTEM_REVIEW_SETTLE_SECONDS: int = Field(
        default=60,
        ge=0,
        le=3600,
        description="Applications submitted more recently than this are left for the next batch",
    )
    SYSTEM_REVIEW_BATCH_SIZE: int = Field(default=100, ge=1, le=1000)

    @model_validator(mode="after")
    def validate_rule_table_version(self):
        """The configured rule-table version must be the one shipped in code."""
        from admission.scoring.rule_tables import RULE_TABLE_VERSION

        if self.RULE_TABLE_VERSION != RULE_TABLE_VERSION:
            raise ValueError(
                f"RULE_TABLE_VERSION {self.RULE_TABLE_VERSION!r} does not match "
                f"the loaded rule tables ({RULE_TABLE_VERSION!r})"
            )
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production does not run in debug mode."""
        if self.APP_ENV == "production" and self.DEBUG:
            raise ValueError("DEBUG must be False in production")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
