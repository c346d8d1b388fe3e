"""Changed files from the checked-out repository via pygit2."""

from __future__ import annotations

from pathlib import Path

import pygit2
import structlog

from affected.core.errors import DiffFetchError
from affected.diff.models import ChangedFile, ChangeStatus
from affected.refs import RefPair

log = structlog.get_logger(__name__)


class LocalDiffSource:
    """Diff two commits of a local clone.

    Mirrors the compare API's three-dot semantics: the diff runs from the
    merge base of base and head (when one exists) to head. CI checkouts need
    enough history for both commits (``fetch-depth: 0``).
    """

    def __init__(self, repo_path: Path | str) -> None:
        self._path = Path(repo_path)
        self._repo: pygit2.Repository | None = None

    def _open(self, refs: RefPair) -> pygit2.Repository:
        if self._repo is None:
            try:
                self._repo = pygit2.Repository(str(self._path))
            except pygit2.GitError as e:
                raise DiffFetchError.request_failed(
                    refs.base, refs.head, f"not a git repository: {self._path}"
                ) from e
        return self._repo

    def _resolve_commit(self, ref: str, refs: RefPair) -> pygit2.Commit:
        try:
            obj, _ = self._open(refs).resolve_refish(ref)
        except (pygit2.GitError, KeyError, ValueError) as e:
            raise DiffFetchError.request_failed(
                refs.base, refs.head, f"reference not found: {ref}"
            ) from e
        try:
            return obj.peel(pygit2.Commit)
        except (pygit2.GitError, ValueError) as e:
            raise DiffFetchError.request_failed(
                refs.base, refs.head, f"{ref} is not a commit"
            ) from e

    def changed_files(self, refs: RefPair) -> list[ChangedFile]:
        """Files changed between the two commits, in diff order.

        Raises:
            DiffFetchError: Not a repository, or a ref cannot be resolved.
        """
        repo = self._open(refs)
        base = self._resolve_commit(refs.base, refs)
        head = self._resolve_commit(refs.head, refs)

        start_id = repo.merge_base(base.id, head.id) or base.id
        if start_id != base.id:
            log.debug("diff_from_merge_base", merge_base=str(start_id))

        diff = repo.diff(repo.get(start_id), head)
        diff.find_similar()

        result = [
            ChangedFile(
                filename=delta.new_file.path,
                status=ChangeStatus.from_delta(delta.status),
                previous_filename=(
                    delta.old_file.path if delta.status == pygit2.GIT_DELTA_RENAMED else None
                ),
            )
            for delta in diff.deltas
        ]
        log.info("local_diff_done", files=len(result), base=refs.base, head=refs.head)
        return result
