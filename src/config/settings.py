"""
Application settings loaded from environment variables.

Values can also be passed as keyword overrides (the CLI forwards raw strings).
Numeric options that don't parse fall back to their defaults instead of failing.
"""

import math
from typing import Any

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TRUE_VALUES = {"true", "1", "yes", "y"}
FALSE_VALUES = {"false", "0", "no", "n"}


class Settings(BaseSettings):
    """Pipeline configuration from environment."""

    # Run shape
    lookback_days: int = 30  # Ignore feed items older than this
    per_firm_limit: int = 6  # Max qualifying deals kept per firm
    firm_limit: int = 100  # Max firms taken from the registry
    max_concurrent_feeds: int = 6  # Parallel feed fetches
    demo_on_fail: bool = False  # Synthesize demo data when nothing qualified

    # Paths
    output_path: str = "data/deals.json"
    firms_path: str = "data/vc_firms.json"

    # Scraping Settings
    feed_fetch_timeout: float = 15.0  # Per-firm fetch timeout (seconds)
    max_connections: int = 20
    max_keepalive: int = 10

    log_level: str = "INFO"

    @field_validator(
        "lookback_days", "per_firm_limit", "firm_limit", "max_concurrent_feeds",
        mode="before",
    )
    @classmethod
    def fallback_on_invalid_number(cls, v: Any, info: ValidationInfo) -> Any:
        """Replace non-numeric overrides with the field default."""
        default = cls.model_fields[info.field_name].default
        try:
            number = float(v)
        except (TypeError, ValueError):
            return default
        if not math.isfinite(number):
            return default
        return int(number)

    @field_validator("feed_fetch_timeout", mode="before")
    @classmethod
    def fallback_on_invalid_timeout(cls, v: Any) -> Any:
        try:
            number = float(v)
        except (TypeError, ValueError):
            return cls.model_fields["feed_fetch_timeout"].default
        if not math.isfinite(number) or number <= 0:
            return cls.model_fields["feed_fetch_timeout"].default
        return number

    @field_validator("max_concurrent_feeds")
    @classmethod
    def at_least_one_worker(cls, v: int) -> int:
        return max(1, v)

    @field_validator("demo_on_fail", mode="before")
    @classmethod
    def parse_flag(cls, v: Any) -> bool:
        """Accept true/1/yes/y and false/0/no/n; anything else is the default."""
        if isinstance(v, bool):
            return v
        normalized = str(v).strip().lower()
        if normalized in TRUE_VALUES:
            return True
        if normalized in FALSE_VALUES:
            return False
        return cls.model_fields["demo_on_fail"].default

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Create settings instance at import time (singleton pattern)
# All code should import: from ..config.settings import settings
settings = Settings()
