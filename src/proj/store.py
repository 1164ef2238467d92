"""SQLite-backed store for project records.

A single `projects` table keyed by project id. Names are not unique at the
storage layer: `save` upserts by id, so two records sharing a name but not an
id become two rows. `ProjectService.init_project` refuses duplicate names
before they reach the store.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from types import TracebackType

from proj.errors import ProjectNotFound, StoreError
from proj.models import Project

logger = logging.getLogger(__name__)

_CREATE_TABLE = """
    CREATE TABLE IF NOT EXISTS projects(
        Id TEXT NOT NULL PRIMARY KEY,
        Name TEXT,
        Path TEXT,
        Command TEXT,
        TearDown TEXT,
        CreatedAt DATETIME DEFAULT CURRENT_TIMESTAMP
    )
"""

_UPSERT = """
    INSERT OR REPLACE INTO projects(Id, Name, Path, Command, TearDown, CreatedAt)
    VALUES (?, ?, ?, ?, ?, CURRENT_TIMESTAMP)
"""

_SELECT = "SELECT Id, Name, Path, Command, TearDown, CreatedAt FROM projects"

# Latest registration wins when a name was stored more than once.
_LATEST_BY_NAME = " WHERE Name = ? ORDER BY CreatedAt DESC, rowid DESC LIMIT 1"

_FIND_BY_NAME = _SELECT + _LATEST_BY_NAME

_UPDATE_BY_NAME = f"""
    UPDATE projects
    SET Path = ?, Command = ?, TearDown = ?
    WHERE Id = (SELECT Id FROM projects{_LATEST_BY_NAME})
"""

_LIST = _SELECT + " ORDER BY Name, CreatedAt"


def _row_to_project(row: sqlite3.Row) -> Project:
    return Project(
        id=row["Id"],
        name=row["Name"],
        path=row["Path"],
        command=row["Command"],
        teardown=row["TearDown"],
        created_at=row["CreatedAt"],
    )


class ProjectStore:
    """Project records persisted in one SQLite file.

    The connection is opened on construction and must be closed with `close()`
    (or by using the store as a context manager).
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self._path)
        except (OSError, sqlite3.Error) as e:
            raise StoreError(f"Could not open database {self._path}: {e}") from e

        self._conn.row_factory = sqlite3.Row
        try:
            with self._conn:
                self._conn.execute(_CREATE_TABLE)
        except sqlite3.Error as e:
            self._conn.close()
            raise StoreError(f"Failed to create database table: {e}") from e

        logger.debug("Project store opened", extra={"path": str(self._path)})

    @property
    def path(self) -> Path:
        return self._path

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> ProjectStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def save(self, project: Project) -> None:
        """Insert the record, replacing any existing row with the same id."""

        try:
            with self._conn:
                self._conn.execute(
                    _UPSERT,
                    (project.id, project.name, project.path, project.command, project.teardown),
                )
        except sqlite3.Error as e:
            raise StoreError(f"Failed to save project {project.name!r}: {e}") from e
        logger.info("Project saved", extra={"project": project.name, "project_id": project.id})

    def update(self, project: Project) -> None:
        """Overwrite path, command and teardown of the row named `project.name`.

        Only the row `load` would return is touched. The stored id is left
        untouched, whatever id `project` carries.
        """

        try:
            with self._conn:
                cursor = self._conn.execute(
                    _UPDATE_BY_NAME,
                    (project.path, project.command, project.teardown, project.name),
                )
        except sqlite3.Error as e:
            raise StoreError(f"Failed to update project {project.name!r}: {e}") from e

        if cursor.rowcount == 0:
            raise ProjectNotFound(project.name)
        logger.info("Project updated", extra={"project": project.name})

    def find_by_name(self, name: str) -> Project | None:
        try:
            row = self._conn.execute(_FIND_BY_NAME, (name,)).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to load project {name!r}: {e}") from e
        if row is None:
            return None
        return _row_to_project(row)

    def load(self, name: str) -> Project:
        """Return the project named `name` or raise `ProjectNotFound`."""

        project = self.find_by_name(name)
        if project is None:
            raise ProjectNotFound(name)
        return project

    def list(self) -> list[Project]:
        try:
            rows = self._conn.execute(_LIST).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Failed to list projects: {e}") from e
        return [_row_to_project(row) for row in rows]
