"""Configuration management for CampusMind.

Loads from environment variables, .env files, and config/default.toml.
Everything is read once at startup and treated as immutable afterwards.

Environment examples:
  CAMPUSMIND_DEBUG=1                               — expose error details
  CAMPUSMIND_ASSISTANT__NAME_PROBABILITY=0.5       — nested override
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AssistantConfig(BaseSettings):
    """Reply tone thresholds and personalization odds."""

    name_probability: float = 0.35
    greeting_name_probability: float = 0.5
    attendance_threshold: float = 75.0
    attendance_good: float = 85.0
    currency_symbol: str = "₹"
    high_spend: float = 10_000
    moderate_spend: float = 5_000
    busy_week_classes: int = 8
    moderate_week_classes: int = 5
    max_message_length: int = 500
    progression_max_semesters: int = 4
    top_expense_categories: int = 2
    due_window_days: int = 7

    @field_validator("name_probability", "greeting_name_probability")
    @classmethod
    def validate_probability(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"Probability must be between 0 and 1: {v}")
        return v

    @field_validator("attendance_threshold", "attendance_good")
    @classmethod
    def validate_percentage(cls, v: float) -> float:
        if not 0.0 <= v <= 100.0:
            raise ValueError(f"Percentage must be between 0 and 100: {v}")
        return v

    @property
    def attendance_ratio(self) -> float:
        """Threshold as a fraction, e.g. 0.75."""
        return self.attendance_threshold / 100


class Settings(BaseSettings):
    """Root configuration — aggregates all sub-configs."""

    model_config = SettingsConfigDict(
        env_prefix="CAMPUSMIND_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    debug: bool = False  # Development mode: error envelopes carry the cause
    assistant: AssistantConfig = Field(default_factory=AssistantConfig)

    @classmethod
    def from_toml(cls, path: Path | None = None) -> Settings:
        """Load settings from TOML file; env vars fill any field the file omits."""
        config_path = path or Path("config/default.toml")
        if config_path.exists():
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls(**data)
        return cls()


def load_settings(config_path: Path | None = None) -> Settings:
    """Load and validate settings. Entry point for all config access."""
    return Settings.from_toml(config_path)
