"""CLI utilities."""

from pathlib import Path


def find_repo_root(start_path: Path | None = None) -> Path:
    """Find the git repository root from the given path.

    Walks up the directory tree looking for a .git entry (directory, or file
    for worktrees and submodules). Falls back to the start directory when none
    is found: the compare API source does not need a checkout, only the
    project directories on disk.

    Args:
        start_path: Starting directory to search from (default: cwd)

    Returns:
        Path to repository root, or the resolved start directory
    """
    if start_path is None:
        start_path = Path.cwd()

    start = start_path.resolve()
    current = start

    while current != current.parent:
        if (current / ".git").exists():
            return current
        current = current.parent

    # Check root as well
    if (current / ".git").exists():
        return current

    return start
