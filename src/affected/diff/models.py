"""Serializable data models for changed files."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

import pygit2


class ChangeStatus(StrEnum):
    """How a file changed between the two commits."""

    ADDED = "added"
    COPIED = "copied"
    DELETED = "deleted"
    MODIFIED = "modified"
    RENAMED = "renamed"
    UNMERGED = "unmerged"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: str) -> ChangeStatus:
        """Map a ``git diff --name-status`` letter (A, C, D, M, R, U)."""
        return _CODE_MAP.get(code[:1].upper(), cls.UNKNOWN) if code else cls.UNKNOWN

    @classmethod
    def from_api(cls, status: str) -> ChangeStatus:
        """Map a compare API ``status`` field."""
        return _API_MAP.get(status, cls.UNKNOWN)

    @classmethod
    def from_delta(cls, status: int) -> ChangeStatus:
        return _DELTA_MAP.get(status, cls.UNKNOWN)


_CODE_MAP: dict[str, ChangeStatus] = {
    "A": ChangeStatus.ADDED,
    "C": ChangeStatus.COPIED,
    "D": ChangeStatus.DELETED,
    "M": ChangeStatus.MODIFIED,
    "R": ChangeStatus.RENAMED,
    "U": ChangeStatus.UNMERGED,
}

_API_MAP: dict[str, ChangeStatus] = {
    "added": ChangeStatus.ADDED,
    "copied": ChangeStatus.COPIED,
    "removed": ChangeStatus.DELETED,
    "modified": ChangeStatus.MODIFIED,
    "changed": ChangeStatus.MODIFIED,
    "renamed": ChangeStatus.RENAMED,
}

_DELTA_MAP: dict[int, ChangeStatus] = {
    pygit2.GIT_DELTA_ADDED: ChangeStatus.ADDED,
    pygit2.GIT_DELTA_COPIED: ChangeStatus.COPIED,
    pygit2.GIT_DELTA_DELETED: ChangeStatus.DELETED,
    pygit2.GIT_DELTA_MODIFIED: ChangeStatus.MODIFIED,
    pygit2.GIT_DELTA_RENAMED: ChangeStatus.RENAMED,
    pygit2.GIT_DELTA_CONFLICTED: ChangeStatus.UNMERGED,
}


@dataclass(frozen=True, slots=True)
class ChangedFile:
    """One path from the diff. Classification only looks at ``filename``."""

    filename: str
    status: ChangeStatus = ChangeStatus.MODIFIED
    previous_filename: str | None = None
