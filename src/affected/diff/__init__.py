"""Changed-file sources.

Two implementations of ``ChangeSource``:
- GitHubCompareClient: the compare REST API (default in CI)
- LocalDiffSource: the checked-out repository via pygit2
"""

from typing import Protocol, runtime_checkable

from affected.diff.github import GitHubCompareClient
from affected.diff.local import LocalDiffSource
from affected.diff.models import ChangedFile, ChangeStatus
from affected.refs import RefPair


@runtime_checkable
class ChangeSource(Protocol):
    """Anything that lists the files changed between two commits."""

    def changed_files(self, refs: RefPair) -> list[ChangedFile]:
        """Files changed between ``refs.base`` and ``refs.head``."""
        ...


__all__ = [
    "ChangeSource",
    "ChangeStatus",
    "ChangedFile",
    "GitHubCompareClient",
    "LocalDiffSource",
]
