"""Shared fixtures for tsk tests."""

from __future__ import annotations

import json
import os
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

CREATED = 1_700_000_000
NOW = 1_700_000_500


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory and change to it."""
    original_dir = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_dir)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep user environment overrides out of the tests."""
    monkeypatch.delenv("TSK_TASKS_FILE", raising=False)
    monkeypatch.delenv("TSK_LOG_LEVEL", raising=False)


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> Console:
    """Give the CLI a console wide enough that tables never wrap."""
    console = Console(width=200)
    monkeypatch.setattr("tsk.cli.console", console)
    return console


@pytest.fixture
def frozen_time() -> Generator[int, None, None]:
    """Pin the store clock."""
    with patch("tsk.store._now", return_value=NOW):
        yield NOW


@pytest.fixture
def sample_tasks_data() -> dict:
    """Sample task file contents: two open tasks and one deleted."""
    return {
        "1": {
            "label": "buy milk",
            "status": 0,
            "created_at": CREATED,
            "updated_at": CREATED,
            "deleted_at": 0,
        },
        "2": {
            "label": "write report",
            "status": 1,
            "created_at": CREATED + 60,
            "updated_at": CREATED + 120,
            "deleted_at": 0,
        },
        "3": {
            "label": "call bank",
            "status": 3,
            "created_at": CREATED + 180,
            "updated_at": CREATED + 180,
            "deleted_at": CREATED + 240,
        },
    }


@pytest.fixture
def sample_tasks_file(temp_project: Path, sample_tasks_data: dict) -> Path:
    """Write the sample tasks to tasks.json in the temp project."""
    tasks_path = temp_project / "tasks.json"
    with open(tasks_path, "w") as f:
        json.dump(sample_tasks_data, f)
    return tasks_path
