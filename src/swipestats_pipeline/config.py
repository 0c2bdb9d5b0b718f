"""Configuration management for the swipestats pipeline."""

from pathlib import Path

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TINDER_OPTIONAL_SECTIONS = [
    "SocialGraph",
    "ReportContent",
    "Tailor",
    "ShareMyDate",
    "RoomsAndInteractions",
    "SwipeParty",
    "StudentVerifications",
]


class Settings(BaseSettings):
    """Pipeline settings, loaded from env vars and optionally overridden by a YAML config file."""

    model_config = SettingsConfigDict(
        env_prefix="SWIPESTATS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Aggregation
    default_granularity: str = "weekly"
    fill_gaps: bool = False

    # Extraction diagnostics
    tinder_optional_sections: list[str] = Field(
        default_factory=lambda: list(DEFAULT_TINDER_OPTIONAL_SECTIONS)
    )
    warning_sample_size: int = 5

    # Logging
    log_level: str = "INFO"

    # Paths
    output_dir: Path = Field(default=Path("output"))

    @classmethod
    def from_yaml(cls, config_path: str | Path, **overrides) -> "Settings":
        """Load settings from a YAML config file, with env vars and overrides applied on top."""
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                yaml_config = yaml.safe_load(f) or {}
        else:
            yaml_config = {}
        merged = {**yaml_config, **overrides}
        return cls(**merged)

    def resolved_log_level(self) -> str:
        """Return an upper-cased log level name, falling back to INFO."""

        candidate = self.log_level.strip().upper()
        if candidate in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            return candidate
        return "INFO"
