"""Project lifecycle operations: register, commit, start, stop."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from pydantic import ValidationError

from proj.errors import InvalidProject, MissingTeardown, ProjectAlreadyExists
from proj.models import Project
from proj.runner import CommandResult, run_shell_command
from proj.sidecar import read_project_file, write_project_file
from proj.store import ProjectStore

logger = logging.getLogger(__name__)


class ProjectService:
    """High-level, testable project orchestration over a store and the shell."""

    def __init__(
        self,
        store: ProjectStore,
        *,
        shell: str = "sh",
        on_execute: Callable[[list[str]], None] | None = None,
    ) -> None:
        self._store = store
        self._shell = shell
        self._on_execute = on_execute

    def init_project(
        self,
        *,
        name: str,
        path: str,
        command: str,
        teardown: str = "",
    ) -> Project:
        """Register a new project.

        The sidecar file is written into `path` first, then the record is
        saved. A name that is already registered is rejected.

        Raises:
            InvalidProject: `name` or `command` is blank.
            ProjectAlreadyExists: a stored record already uses `name`.
            ProjectFileError: the sidecar could not be written.
        """

        existing = self._store.find_by_name(name)
        if existing is not None:
            raise ProjectAlreadyExists(name, existing.id)

        try:
            project = Project(name=name, path=path, command=command, teardown=teardown)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise InvalidProject(f"Invalid project {name!r}: {problems}") from e

        write_project_file(project, Path(path))
        self._store.save(project)
        logger.info("Project registered", extra={"project": name, "project_id": project.id})
        return project

    def commit_changes(self, directory: Path = Path(".")) -> Project:
        """Push an edited `proj.yml` back into the store, matched by name.

        A relative or `~` path in the sidecar is resolved against the directory
        holding the sidecar, so the stored path is always absolute.
        """

        edited = read_project_file(directory)
        resolved = (directory / Path(edited.path).expanduser()).resolve()
        edited = edited.model_copy(update={"path": str(resolved)})
        self._store.update(edited)
        return self._store.load(edited.name)

    def start_project(self, name: str) -> CommandResult:
        project = self._store.load(name)
        return self._run(project.command, project)

    def stop_project(self, name: str) -> CommandResult:
        project = self._store.load(name)
        if not project.teardown.strip():
            raise MissingTeardown(name)
        return self._run(project.teardown, project)

    def show_project(self, name: str) -> Project:
        return self._store.load(name)

    def list_projects(self) -> list[Project]:
        return self._store.list()

    def _run(self, command: str, project: Project) -> CommandResult:
        return run_shell_command(
            command,
            Path(project.path),
            shell=self._shell,
            on_execute=self._on_execute,
        )
