"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation at the edge (API JSON) with self-documenting `Field`s.
- camelCase aliases match the REST payloads while Python code stays snake_case.

Note:
- These models describe *what* the platform returns, not *how* it is fetched.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

_API_MODEL_CONFIG = ConfigDict(extra="ignore", populate_by_name=True)


class FileTreeType(str, Enum):
    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    LAMBDA = "lambda"
    MIDDLEWARE = "middleware"
    INVALID = "invalid"


class AuthUser(BaseModel):
    """The identity behind the access token."""

    model_config = _API_MODEL_CONFIG

    username: str = Field(..., min_length=1, description="Handle of the personal account.")


class TeamMembership(BaseModel):
    model_config = _API_MODEL_CONFIG

    role: str = Field(default="MEMBER", description="Role of the user inside the team.")


class Team(BaseModel):
    """Organisational scope under which deployments may be listed."""

    model_config = _API_MODEL_CONFIG

    id: str = Field(..., min_length=1, description="Team id, sent as `teamId`.")
    name: str = Field(..., description="Display name of the team.")
    membership: TeamMembership = Field(default_factory=TeamMembership)


class Deployment(BaseModel):
    """A published snapshot of a project's build output."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    uid: str = Field(..., min_length=1, description="Unique deployment id.")
    url: str = Field(..., description="Deployment hostname (without scheme).")
    name: str = Field(..., description="Project name.")
    source: str | None = Field(
        default=None,
        description="Origin of the deployment: cli, git, import, import/repo, clone/repo.",
    )
    target: str | None = Field(
        default=None,
        description="Environment target (production/staging) or None for previews.",
    )
    inspector_url: str | None = Field(
        default=None,
        alias="inspectorUrl",
        description="Dashboard URL of the deployment.",
    )
    meta: dict[str, Any] = Field(
        default_factory=dict,
        description="Free-form metadata (git commit info, etc.).",
    )
    ready: int | None = Field(
        default=None,
        description="Epoch milliseconds at which the deployment became ready.",
    )

    @field_validator("meta", mode="before")
    @classmethod
    def _none_meta(cls, value: Any) -> Any:
        return {} if value is None else value


class FileTreeEntry(BaseModel):
    """One node of a deployment's output filesystem.

    Directories own an ordered list of `children`; files carry the `uid` used
    to fetch their content; symlinks carry the `symlink` target path.
    """

    model_config = _API_MODEL_CONFIG

    name: str = Field(..., description="Base name of the entry.")
    type: FileTreeType = Field(..., description="Kind of entry.")
    uid: str | None = Field(default=None, description="Content id (files only).")
    children: list[FileTreeEntry] | None = Field(
        default=None,
        description="Ordered child entries (directories only).",
    )
    content_type: str | None = Field(default=None, alias="contentType")
    mode: int = Field(default=0, description="POSIX permission bits.")
    symlink: str | None = Field(default=None, description="Link target (symlinks only).")

    @field_validator("type", mode="before")
    @classmethod
    def _unknown_type_is_invalid(cls, value: Any) -> Any:
        if isinstance(value, FileTreeType):
            return value
        try:
            return FileTreeType(value)
        except ValueError:
            return FileTreeType.INVALID

    @property
    def is_directory(self) -> bool:
        return self.type is FileTreeType.DIRECTORY


class ApiErrorPayload(BaseModel):
    """Structured `error` object of an API response."""

    model_config = _API_MODEL_CONFIG

    code: str = Field(default="unknown_error")
    message: str = Field(default="")
