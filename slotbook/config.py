"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.exceptions import SlotbookError
from .domain.models import WorkingWindow
from .domain.timezone import get_timezone, parse_time_of_day

DEFAULT_BASE_URL = "http://localhost:5173"


class SchedulingConfig(BaseModel):
    """Working window and booking rules for a host."""
    start_time: str = "09:00"
    end_time: str = "17:00"
    duration_minutes: int = 30
    buffer_before: int = 0
    buffer_after: int = 0
    min_notice_minutes: int = 60
    max_days_in_advance: int = 60

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_of_day(cls, value: str) -> str:
        """Validate the HH:mm format."""
        try:
            parse_time_of_day(value)
        except SlotbookError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure meeting duration is positive."""
        if value <= 0:
            raise ValueError("duration_minutes must be greater than zero")
        return value

    @field_validator("buffer_before", "buffer_after", "min_notice_minutes", "max_days_in_advance")
    @classmethod
    def validate_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError(f"Value must not be negative, got {value}")
        return value

    @model_validator(mode="after")
    def validate_window_order(self) -> "SchedulingConfig":
        """Ensure the configured window opens before it closes."""
        if parse_time_of_day(self.end_time) <= parse_time_of_day(self.start_time):
            raise ValueError("end_time must be later than start_time")
        return self

    def get_window(self) -> WorkingWindow:
        return WorkingWindow(start_time=self.start_time, end_time=self.end_time)


class EmbedConfig(BaseModel):
    """Settings handed to the embeddable booking widget."""
    base_url: str = DEFAULT_BASE_URL
    badge_text: str = "Agendar reunión"
    badge_color: str = "#3b82f6"

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {value!r}")
        return value.rstrip("/")


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "UTC"
    scheduling: SchedulingConfig = Field(default_factory=SchedulingConfig)
    embed: EmbedConfig = Field(default_factory=EmbedConfig)
    bookings_file: Path | None = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the host timezone is a known IANA identifier."""
        try:
            get_timezone(value)
        except SlotbookError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of slotbook/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path


def load_config(config_path: Path | None = None) -> AppConfig:
    """
    Load the given config file, or the default one when present.

    Without an explicit path and without a default file, built-in defaults
    are used.
    """
    if config_path is not None:
        return AppConfig.load_from_yaml(config_path)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)
    return AppConfig()
