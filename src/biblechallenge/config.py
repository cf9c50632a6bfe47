"""Configuration management for biblechallenge.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()


DEFAULT_GROUP_NAMES = ("1조", "2조", "3조", "4조", "5조")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Application configuration."""

    # Database
    db_path: Path

    # Predefined challenge groups
    group_names: list[str] = field(default_factory=lambda: list(DEFAULT_GROUP_NAMES))

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        db_path_str = os.environ.get(
            "BIBLECHALLENGE_DB_PATH",
            str(Path.home() / ".biblechallenge" / "challenge.db"),
        )
        db_path = Path(db_path_str).expanduser()

        groups_str = os.environ.get("BIBLECHALLENGE_GROUPS")
        if groups_str:
            group_names = [name.strip() for name in groups_str.split(",") if name.strip()]
        else:
            group_names = list(DEFAULT_GROUP_NAMES)

        log_file_str = os.environ.get("BIBLECHALLENGE_LOG_FILE")

        return cls(
            db_path=db_path,
            group_names=group_names,
            log_level=os.environ.get("BIBLECHALLENGE_LOG_LEVEL", "WARNING").upper(),
            log_file=Path(log_file_str).expanduser() if log_file_str else None,
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        # Check database directory is writable
        if str(self.db_path) != ":memory:" and not self.db_path.parent.exists():
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except PermissionError:
                errors.append(f"Cannot create database directory: {self.db_path.parent}")

        if not self.group_names:
            errors.append("At least one group name must be configured")
        elif len(set(self.group_names)) != len(self.group_names):
            errors.append("Group names must be unique")

        if self.log_level not in LOG_LEVELS:
            errors.append(f"Invalid log level: {self.log_level}")

        return errors


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
