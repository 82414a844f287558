"""Global configuration storage for Rockwater.

Stores scheduling preferences in ~/.rockwater/config.json
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)

# Steps used when scaling a task's own duration up or down
DURATION_SEQUENCE = [2, 5, 10, 15, 20, 30, 45, 60, 90, 120, 180, 240, 300, 360, 420, 480]


class SchedulerSettings(BaseModel):
    """Limits the stack controller applies to user duration edits.

    The scheduling core itself never clamps; these bounds only apply
    when a user rescales a task.
    """

    min_duration: int = Field(default=2, ge=0, description="Floor for a task's own duration")
    max_duration: int | None = Field(default=None, description="Optional cap, in minutes")

    @model_validator(mode="after")
    def _check_bounds(self) -> "SchedulerSettings":
        if self.max_duration is not None and self.max_duration < self.min_duration:
            raise ValueError("max_duration must not be below min_duration")
        return self

    def clamp(self, minutes: int) -> int:
        """Clamp a duration into the configured bounds."""
        minutes = max(self.min_duration, minutes)
        if self.max_duration is not None:
            minutes = min(self.max_duration, minutes)
        return minutes


def get_config_dir() -> Path:
    """Get the Rockwater config directory."""
    config_dir = Path.home() / ".rockwater"
    config_dir.mkdir(exist_ok=True)
    return config_dir


def get_settings() -> SchedulerSettings:
    """Load scheduler settings, falling back to defaults."""
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return SchedulerSettings(**data)
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.warning(f"Ignoring unreadable config {config_file}: {e}")
    return SchedulerSettings()  # defaults


def save_settings(settings: SchedulerSettings) -> None:
    """Save scheduler settings."""
    config_file = get_config_dir() / "config.json"
    config_file.write_text(
        json.dumps(settings.model_dump(), indent=2),
        encoding="utf-8",
    )
