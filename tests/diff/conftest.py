"""Test fixtures for diff sources."""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path

import pygit2
import pytest

CommitFn = Callable[..., str]


@pytest.fixture
def temp_repo(tmp_path: Path) -> Generator[pygit2.Repository, None, None]:
    """Create a temporary git repository with initial commit."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()

    repo = pygit2.init_repository(str(repo_path), initial_head="main")
    repo.config["user.name"] = "Test User"
    repo.config["user.email"] = "test@example.com"

    (repo_path / "apps" / "foo").mkdir(parents=True)
    (repo_path / "apps" / "foo" / "main.ts").write_text("export const foo = 1;\n")
    (repo_path / "libs" / "shared").mkdir(parents=True)
    (repo_path / "libs" / "shared" / "index.ts").write_text("export const shared = 1;\n")
    (repo_path / "README.md").write_text("# Test Repo\n")
    repo.index.add_all()
    repo.index.write()
    tree = repo.index.write_tree()
    sig = pygit2.Signature("Test User", "test@example.com")
    repo.create_commit("refs/heads/main", sig, sig, "Initial commit", tree, [])
    repo.set_head("refs/heads/main")

    yield repo


@pytest.fixture
def commit(temp_repo: pygit2.Repository) -> CommitFn:
    """Write, delete or rename files and commit on HEAD; returns the new sha."""
    workdir = Path(temp_repo.workdir)

    def _commit(
        message: str = "change",
        *,
        write: dict[str, str] | None = None,
        delete: tuple[str, ...] = (),
        rename: dict[str, str] | None = None,
    ) -> str:
        for path, content in (write or {}).items():
            target = workdir / path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        for old, new in (rename or {}).items():
            target = workdir / new
            target.parent.mkdir(parents=True, exist_ok=True)
            (workdir / old).rename(target)
        for path in delete:
            (workdir / path).unlink()

        temp_repo.index.add_all()
        for path in (*delete, *(rename or {})):
            if path in temp_repo.index:
                temp_repo.index.remove(path)
        temp_repo.index.write()
        tree = temp_repo.index.write_tree()
        sig = temp_repo.default_signature
        oid = temp_repo.create_commit("HEAD", sig, sig, message, tree, [temp_repo.head.target])
        return str(oid)

    return _commit
