"""Configuration loader and validator for the RealCoach daily run."""

import os
from pathlib import Path

from dotenv import load_dotenv

from realcoach.errors import ConfigurationError


class Config:
    """Configuration container loaded from environment variables.

    Only entry points read this; the engines take explicit arguments.
    """

    def __init__(self):
        """Load configuration from .env file and environment."""
        # Load .env file from project root
        load_dotenv()

        # Daily priorities list
        self.minimum_priority: int = self._int("MINIMUM_PRIORITY", 30)
        self.maximum_daily_actions: int = self._int("MAXIMUM_DAILY_ACTIONS", 10)

        # Engine thresholds
        self.seven_day_threshold_days: int = self._int("SEVEN_DAY_THRESHOLD_DAYS", 7)
        self.consistency_window_days: int = self._int("CONSISTENCY_WINDOW_DAYS", 7)
        self.daily_contact_target: int = self._int("DAILY_CONTACT_TARGET", 5)

        # File paths
        self.contacts_file: Path = Path(os.getenv("CONTACTS_FILE", "data/contacts.csv"))
        self.activity_file: Path = Path(os.getenv("ACTIVITY_FILE", "data/activity.csv"))
        self.output_dir: Path = Path(os.getenv("OUTPUT_DIR", "output"))

        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")

        self._validate()

    def _int(self, key: str, default: int) -> int:
        """Get an integer environment variable or raise on a malformed value."""
        value = os.getenv(key)
        if value is None or not value.strip():
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(
                f"Environment variable {key} must be an integer, got {value!r}"
            ) from None

    def _validate(self):
        """Validate configuration."""
        if not 0 <= self.minimum_priority <= 100:
            raise ConfigurationError(
                f"MINIMUM_PRIORITY must be within 0-100, got {self.minimum_priority}"
            )
        for key, value in (
            ("MAXIMUM_DAILY_ACTIONS", self.maximum_daily_actions),
            ("SEVEN_DAY_THRESHOLD_DAYS", self.seven_day_threshold_days),
            ("CONSISTENCY_WINDOW_DAYS", self.consistency_window_days),
            ("DAILY_CONTACT_TARGET", self.daily_contact_target),
        ):
            if value < 1:
                raise ConfigurationError(f"{key} must be >= 1, got {value}")


# Global config instance
config = Config()
