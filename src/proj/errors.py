"""Exceptions raised by proj.

Every failure the CLI knows how to report derives from `ProjError`; anything
else is treated as a bug.
"""

from __future__ import annotations


class ProjError(Exception):
    """Base class for all proj failures."""


class StoreError(ProjError):
    """The record store could not be opened, queried or written."""


class ProjectNotFound(ProjError):
    """No stored project matches the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Project not found: {name!r}")
        self.name = name


class ProjectAlreadyExists(ProjError):
    """A project with the requested name is already registered."""

    def __init__(self, name: str, existing_id: str) -> None:
        super().__init__(f"Project already exists: {name!r} (id {existing_id})")
        self.name = name
        self.existing_id = existing_id


class ProjectFileError(ProjError):
    """The sidecar file could not be written, read or parsed."""


class MissingTeardown(ProjError):
    """`stop` was requested for a project without a teardown command."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Project {name!r} has no teardown command")
        self.name = name


class InvalidProject(ProjError):
    """Project fields given on the command line failed validation."""
