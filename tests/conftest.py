"""Pytest fixtures for the Task List API tests."""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskapi.config import Settings
from taskapi.main import create_app
from taskapi.store import TaskStore


@pytest.fixture
def tasks_file(tmp_path: Path) -> Path:
    """Path of the data file used by a single test."""
    return tmp_path / "data" / "tasks.json"


@pytest.fixture
def settings(tasks_file: Path, tmp_path: Path) -> Settings:
    """Settings pointing at per-test paths."""
    return Settings(tasks_file=tasks_file, static_dir=tmp_path / "public")


@pytest.fixture
def store(tasks_file: Path) -> TaskStore:
    """A store over the per-test data file."""
    return TaskStore(tasks_file)


@pytest.fixture
def client(settings: Settings, store: TaskStore) -> Iterator[TestClient]:
    """Create a test client for the API, running its startup."""
    with TestClient(create_app(settings, store)) as test_client:
        yield test_client
