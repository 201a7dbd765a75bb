"""Configuration management for yearglance."""

from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils.exceptions import ConfigurationError

load_dotenv()

DEFAULT_BIRTHDAY_KEYWORDS = ["birthday", "bday", "aniversario", "aniversari"]
DEFAULT_TRIP_KEYWORDS = ["trip"]
DEFAULT_VISIT_PREFIXES = ["visit:"]


class AppConfig(BaseSettings):
    """Application configuration."""

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: Optional[Path] = Field(default=None, validation_alias="LOG_FILE")

    # IANA zone used to decide "today"; local date when unset
    timezone: Optional[str] = Field(default=None, validation_alias="YEARGLANCE_TIMEZONE")

    # Layout settings
    min_cell_size: int = Field(default=60, validation_alias="YEARGLANCE_MIN_CELL_SIZE")
    preview_lines: int = Field(default=2, validation_alias="YEARGLANCE_PREVIEW_LINES")
    flight_lookback_months: int = Field(
        default=6, validation_alias="YEARGLANCE_FLIGHT_LOOKBACK_MONTHS"
    )
    minimap_weeks: int = Field(default=5, validation_alias="YEARGLANCE_MINIMAP_WEEKS")

    rules_file: Path = Field(
        default=Path("yearglance_rules.yaml"), validation_alias="YEARGLANCE_RULES_FILE"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_parse_none_str="",  # Treat empty string as None
    )


class RulesConfig:
    """Classification keyword rules loaded from YAML."""

    def __init__(self, config_path: Optional[Path] = Path("yearglance_rules.yaml")):
        self.birthday_keywords: list[str] = list(DEFAULT_BIRTHDAY_KEYWORDS)
        self.trip_keywords: list[str] = list(DEFAULT_TRIP_KEYWORDS)
        self.visit_prefixes: list[str] = list(DEFAULT_VISIT_PREFIXES)
        self.skip_summaries: list[str] = []

        if config_path is not None and config_path.exists():
            try:
                with open(config_path) as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid rules file {config_path}: {e}") from e

            if not isinstance(data, dict):
                raise ConfigurationError(f"Rules file {config_path} must contain a mapping")

            self.birthday_keywords = _lowered(
                data.get("birthday_keywords", self.birthday_keywords)
            )
            self.trip_keywords = _lowered(data.get("trip_keywords", self.trip_keywords))
            self.visit_prefixes = _lowered(data.get("visit_prefixes", self.visit_prefixes))
            self.skip_summaries = _lowered(data.get("skip_summaries", []))

    def should_skip(self, summary: str) -> bool:
        return summary.lower().strip() in self.skip_summaries


def _lowered(values) -> list[str]:
    if not isinstance(values, list):
        raise ConfigurationError(f"Expected a list of strings, got {values!r}")
    return [str(v).lower().strip() for v in values if str(v).strip()]


# Global config instances
config = AppConfig()
rules_config = RulesConfig(config.rules_file)
