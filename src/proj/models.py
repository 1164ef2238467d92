"""Project record model."""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def new_project_id() -> str:
    return uuid.uuid4().hex


class Project(BaseModel):
    """A registered project: where it lives and how to start and stop it."""

    # Hand-edited YAML may hold a bare number, e.g. `command: 123`.
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str = Field(default_factory=new_project_id)
    name: str
    path: str
    command: str
    teardown: str = Field(default="")

    # Only known for records read back from the store.
    created_at: str | None = Field(default=None)

    @field_validator("name", "command")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("teardown", mode="before")
    @classmethod
    def _none_is_empty(cls, value: object) -> object:
        return "" if value is None else value

    def to_document(self) -> dict[str, str]:
        """Mapping written to the sidecar file. `created_at` is store-only."""

        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "command": self.command,
            "tear_down": self.teardown,
        }

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> Project:
        data = {
            "name": document.get("name"),
            "path": document.get("path"),
            "command": document.get("command"),
            "teardown": document.get("tear_down"),
        }
        if document.get("id") is not None:
            data["id"] = str(document["id"])
        return cls.model_validate(data)
