"""Test configuration and fixtures."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from proj.logging import JsonFormatter
from proj.service import ProjectService
from proj.store import ProjectStore


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host settings and any `.env` in the repo out of the tests."""
    for var in ("PROJ_DB_PATH", "PROJ_SHELL", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Undo `configure_logging` so handlers never outlive a captured stream."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, JsonFormatter):
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Provide a database location inside the test's temp directory."""
    return tmp_path / "state" / "projects.db"


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Provide an existing project directory."""
    path = tmp_path / "my-project"
    path.mkdir()
    return path


@pytest.fixture
def store(db_path: Path) -> Iterator[ProjectStore]:
    """Provide an open project store, closed after the test."""
    with ProjectStore(db_path) as s:
        yield s


@pytest.fixture
def service(store: ProjectStore) -> ProjectService:
    """Provide a service over the test store."""
    return ProjectService(store)
