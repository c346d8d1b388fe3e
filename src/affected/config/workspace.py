"""Workspace layout file (nx.json shape).

Only three things are read::

    {
      "workspaceLayout": {"appsDir": "apps", "libsDir": "libs"},
      "implicitDependencies": {"package.json": "*", "tsconfig.base.json": "*"}
    }

Everything else in the file is ignored. Values of ``implicitDependencies``
are ignored too; only the keys (exact file paths) matter.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from affected.core.errors import ConfigReadError

DEFAULT_APPS_DIR = "apps"
DEFAULT_LIBS_DIR = "libs"


class WorkspaceLayout(BaseModel):
    """Apps/libs roots, relative to the repository root."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    apps_dir: str = Field(default=DEFAULT_APPS_DIR, alias="appsDir")
    libs_dir: str = Field(default=DEFAULT_LIBS_DIR, alias="libsDir")

    @field_validator("apps_dir", "libs_dir")
    @classmethod
    def normalize_dir(cls, v: str) -> str:
        v = v.strip().strip("/")
        if v.startswith("./"):
            v = v[2:]
        if not v:
            raise ValueError("Layout directory must not be empty")
        return v


class WorkspaceConfig(BaseModel):
    """Typed view of the workspace layout file."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    workspace_layout: WorkspaceLayout = Field(
        default_factory=WorkspaceLayout, alias="workspaceLayout"
    )
    implicit_dependencies: dict[str, Any] = Field(
        default_factory=dict, alias="implicitDependencies"
    )

    @property
    def apps_dir(self) -> str:
        return self.workspace_layout.apps_dir

    @property
    def libs_dir(self) -> str:
        return self.workspace_layout.libs_dir

    @property
    def implicit_dependency_paths(self) -> tuple[str, ...]:
        """Implicit dependency file paths, in file order."""
        return tuple(self.implicit_dependencies)


def load_workspace_config(path: Path) -> WorkspaceConfig:
    """Read and validate a workspace layout file.

    Raises:
        ConfigReadError: File missing, not JSON, or wrong shape.
    """
    if not path.is_file():
        raise ConfigReadError.file_not_found(str(path))
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError.unreadable(str(path), str(e)) from e
    except json.JSONDecodeError as e:
        raise ConfigReadError.unreadable(str(path), f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigReadError.unreadable(str(path), "top level must be a JSON object")
    try:
        return WorkspaceConfig.model_validate(data)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigReadError.unreadable(str(path), f"{field}: {err['msg']}") from e
