"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.break_calculator import BreakTimeCalculator
from .domain.models import DEFAULT_BREAK_WINDOWS, BreakWindow
from .domain.time_utils import is_valid_time, time_to_minutes


class BreakWindowConfig(BaseModel):
    """A configured break window."""
    name: str
    start_time: str
    end_time: str
    enabled: bool = True

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        """Validate the value is a zero-padded HH:MM time."""
        if not is_valid_time(v):
            raise ValueError(f"Time must be zero-padded HH:MM, got {v!r}")
        return v

    @model_validator(mode="after")
    def validate_time_order(self) -> "BreakWindowConfig":
        """Ensure the break starts before it ends."""
        if time_to_minutes(self.end_time) <= time_to_minutes(self.start_time):
            raise ValueError(f"Break '{self.name}' must end after it starts")
        return self

    def to_break_window(self) -> BreakWindow:
        return BreakWindow(
            name=self.name,
            start_time=self.start_time,
            end_time=self.end_time,
            enabled=self.enabled,
        )


def _default_break_windows() -> List[BreakWindowConfig]:
    return [
        BreakWindowConfig(name=w.name, start_time=w.start_time, end_time=w.end_time)
        for w in DEFAULT_BREAK_WINDOWS
    ]


class AppConfig(BaseModel):
    """Application configuration."""
    break_windows: List[BreakWindowConfig] = Field(default_factory=_default_break_windows)
    team_id: int = 1
    store_path: Optional[Path] = None
    log_level: str = "WARNING"

    @field_validator("break_windows")
    @classmethod
    def validate_break_windows(cls, value: List[BreakWindowConfig]) -> List[BreakWindowConfig]:
        """Ensure break window names are unique."""
        seen_names: set[str] = set()
        for window in value:
            name_key = window.name.lower()
            if name_key in seen_names:
                raise ValueError(f"Duplicate break window name detected: {window.name}")
            seen_names.add(name_key)
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    def get_break_windows(self) -> List[BreakWindow]:
        """Return the configured windows as domain objects, in priority order."""
        return [window.to_break_window() for window in self.break_windows]

    def find_break_window(self, name: str) -> BreakWindow | None:
        """Find a break window by name."""
        for window in self.break_windows:
            if window.name.lower() == name.lower():
                return window.to_break_window()
        return None

    def build_calculator(self) -> BreakTimeCalculator:
        return BreakTimeCalculator(self.get_break_windows())

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
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load the given config file, or the default one if present.

    Without an explicit path and without a config.yaml on disk the built-in
    defaults (lunch 12:00-13:00, dinner 18:00-19:00) are used.
    """
    if config_path is not None:
        return AppConfig.load_from_yaml(config_path)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)
    return AppConfig()
