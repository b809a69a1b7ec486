from __future__ import annotations

import json
from enum import Enum
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from kpi_outliers.catalog import DEFAULT_INVERSE_METRIC_CODES
from kpi_outliers.models import ComparisonMode, DefaultPolicy


class StrEnum(str, Enum):
    pass


class Environment(StrEnum):
    dev = "dev"
    prod = "prod"


class Settings(BaseSettings):
    ENV: Environment = Environment.dev
    LOGGING_LEVEL: str = "INFO"

    # Outlier defaults, applied to metrics without a fund policy
    DEFAULT_TOP_COUNT: int = Field(default=5, ge=0)
    DEFAULT_COMPARISON_MODE: ComparisonMode = ComparisonMode.FORECAST
    DEFAULT_GREEN_THRESHOLD: float = Field(default=20.0, ge=0)
    DEFAULT_RED_THRESHOLD: float = Field(default=20.0, ge=0)
    DEFAULT_ALERT_THRESHOLD: float | None = Field(default=None, ge=0)
    # comma separated in the environment
    DEFAULT_INVERSE_METRIC_CODES: Annotated[list[str], NoDecode] = sorted(DEFAULT_INVERSE_METRIC_CODES)

    # Policy cache
    CACHE_ENABLED: bool = True
    CACHE_TTL_SECONDS: int = Field(default=300, ge=0)

    @field_validator("DEFAULT_INVERSE_METRIC_CODES", mode="before")
    @classmethod
    def assemble_inverse_codes(cls, v: str | list[str] | frozenset[str]) -> list[str]:
        if isinstance(v, str) and v.strip().startswith("["):
            return json.loads(v)
        elif isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, (list, tuple, set, frozenset)):
            return list(v)
        raise ValueError(v)

    def default_policy(self) -> DefaultPolicy:
        """Build the system-wide fallback policy from the settings."""
        return DefaultPolicy(
            comparison_mode=self.DEFAULT_COMPARISON_MODE,
            green_threshold=self.DEFAULT_GREEN_THRESHOLD,
            red_threshold=self.DEFAULT_RED_THRESHOLD,
            alert_threshold=self.DEFAULT_ALERT_THRESHOLD,
            inverse_metric_codes=frozenset(self.DEFAULT_INVERSE_METRIC_CODES),
        )

    # pydantic settings config
    model_config = SettingsConfigDict(env_prefix="KPI_OUTLIERS_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()
