"""Unit tests for the proj.yml sidecar file."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from proj.errors import ProjectFileError
from proj.models import Project
from proj.sidecar import PROJECT_FILENAME, read_project_file, write_project_file


def test_write_uses_fixed_filename_and_keys(project_dir: Path) -> None:
    project = Project(
        id="abc",
        name="web",
        path=str(project_dir),
        command="make up",
        teardown="make down",
    )

    path = write_project_file(project, project_dir)

    assert path == project_dir / PROJECT_FILENAME == project_dir / "proj.yml"
    assert yaml.safe_load(path.read_text(encoding="utf-8")) == {
        "id": "abc",
        "name": "web",
        "path": str(project_dir),
        "command": "make up",
        "tear_down": "make down",
    }


def test_write_into_missing_directory_fails(tmp_path: Path) -> None:
    project = Project(name="web", path=str(tmp_path / "gone"), command="make up")

    with pytest.raises(ProjectFileError):
        write_project_file(project, tmp_path / "gone")


def test_read_defaults_to_current_directory(
    project_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    write_project_file(
        Project(id="abc", name="web", path=str(project_dir), command="make up"),
        project_dir,
    )
    monkeypatch.chdir(project_dir)

    project = read_project_file()

    assert project.id == "abc"
    assert project.name == "web"
    assert project.teardown == ""


def test_read_accepts_hand_edited_file(project_dir: Path) -> None:
    (project_dir / "proj.yml").write_text(
        "name: web\npath: /srv/web\ncommand: 42\ntear_down:\nnotes: ignored\n",
        encoding="utf-8",
    )

    project = read_project_file(project_dir)

    assert project.command == "42"
    assert project.teardown == ""
    assert project.path == "/srv/web"


def test_read_missing_file_fails(project_dir: Path) -> None:
    with pytest.raises(ProjectFileError, match="No proj.yml found"):
        read_project_file(project_dir)


@pytest.mark.parametrize(
    "content",
    [
        "name: [unclosed\n",
        "- just\n- a list\n",
        "",
        "name: web\npath: /srv/web\n",
        "name: ''\npath: /srv/web\ncommand: up\n",
    ],
    ids=["malformed", "not-a-mapping", "empty", "missing-command", "blank-name"],
)
def test_read_rejects_bad_documents(project_dir: Path, content: str) -> None:
    (project_dir / "proj.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ProjectFileError):
        read_project_file(project_dir)
