"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from proj.config import DEFAULT_DB_PATH, ProjSettings


def test_settings_defaults() -> None:
    settings = ProjSettings()

    assert settings.db_path == DEFAULT_DB_PATH == Path("/tmp/projects.db")
    assert settings.shell == "sh"
    assert settings.log_level == "WARNING"


def test_settings_loads_from_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text(
        "\n".join(
            [
                "PROJ_DB_PATH=/var/tmp/other.db",
                "LOG_LEVEL=debug",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = ProjSettings()

    assert settings.db_path == Path("/var/tmp/other.db")
    assert settings.log_level == "DEBUG"


def test_environment_overrides_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROJ_SHELL", "bash")

    assert ProjSettings().shell == "bash"


def test_unknown_log_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    with pytest.raises(ValidationError):
        ProjSettings()


def test_blank_shell_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROJ_SHELL", "  ")

    with pytest.raises(ValidationError):
        ProjSettings()
