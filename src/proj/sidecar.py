"""The `proj.yml` sidecar file kept inside each project directory.

The sidecar is a user-editable mirror of a stored record. It is written by
`proj init` and read back by `proj commit`; nothing links it to the database
row except the project name.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from proj.errors import ProjectFileError
from proj.models import Project

logger = logging.getLogger(__name__)

PROJECT_FILENAME = "proj.yml"


def project_file_path(directory: Path) -> Path:
    return directory / PROJECT_FILENAME


def write_project_file(project: Project, directory: Path) -> Path:
    """Serialize `project` to `<directory>/proj.yml` and return the file path."""

    if not directory.is_dir():
        raise ProjectFileError(f"Project directory does not exist: {directory}")

    path = project_file_path(directory)
    text = yaml.safe_dump(project.to_document(), sort_keys=False, allow_unicode=True)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise ProjectFileError(f"Could not write {path}: {e}") from e

    logger.info("Project file written", extra={"path": str(path), "project": project.name})
    return path


def read_project_file(directory: Path = Path(".")) -> Project:
    """Parse `<directory>/proj.yml` back into a `Project`."""

    path = project_file_path(directory)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ProjectFileError(f"No {PROJECT_FILENAME} found in {directory.resolve()}") from e
    except OSError as e:
        raise ProjectFileError(f"Could not read {path}: {e}") from e

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ProjectFileError(f"{path} is not valid YAML: {e}") from e

    if not isinstance(document, dict):
        raise ProjectFileError(f"{path} must contain a mapping of project fields")

    try:
        project = Project.from_document(document)
    except ValidationError as e:
        raise ProjectFileError(f"{path} has invalid project fields:\n{e}") from e

    logger.debug("Project file read", extra={"path": str(path), "project": project.name})
    return project
