"""
Environment Configuration.

The environment is determined by the `LOGGERW_ENV` environment variable and
drives environment-aware filters such as `DevelopmentFilter`.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


Environment = Literal["development", "testing", "staging", "production"]


class EnvironmentSettings(BaseSettings):
    """Runtime environment detection."""

    model_config = SettingsConfigDict(
        env_prefix="LOGGERW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: Environment = Field(
        default="development",
        description="Current environment (development, testing, staging, production)",
    )

    @property
    def is_development(self) -> bool:
        return self.env == "development"

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def debug(self) -> bool:
        """Debug mode is enabled in non-production environments."""
        return self.env != "production"
