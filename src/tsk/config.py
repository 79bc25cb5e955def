"""Configuration models for tsk."""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field


class DisplayConfig(BaseModel):
    """Configuration for table output."""

    name_width: int = 40
    time_format: str = "%Y-%m-%d %H:%M:%S"


class LoggingConfig(BaseModel):
    """Configuration for diagnostic logging."""

    level: str = "WARNING"


class TskConfig(BaseModel):
    """Main configuration for tsk."""

    tasks_file: str = "tasks.json"
    lock: bool = True
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, path: Path | None = None) -> TskConfig:
        """Load configuration from file or return defaults.

        Environment variables take precedence over the file:
        ``TSK_TASKS_FILE`` sets the task file and ``TSK_LOG_LEVEL`` the log level.
        """
        if path is None:
            path = CONFIG_FILE

        if path.exists():
            with open(path) as f:
                data = json.load(f)
            config = cls.model_validate(data)
        else:
            config = cls()

        tasks_file = os.environ.get(TASKS_FILE_ENV)
        if tasks_file:
            config.tasks_file = tasks_file

        log_level = os.environ.get(LOG_LEVEL_ENV)
        if log_level:
            config.logging.level = log_level.upper()

        return config


# Default config directory
TSK_DIR = Path(".tsk")
CONFIG_FILE = TSK_DIR / "config.json"
TASKS_FILE_ENV = "TSK_TASKS_FILE"
LOG_LEVEL_ENV = "TSK_LOG_LEVEL"
