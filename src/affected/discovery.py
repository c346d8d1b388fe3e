"""Find project directories on disk."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog

from affected.config.workspace import WorkspaceConfig
from affected.core.collections import OrderedSet
from affected.core.errors import ConfigError
from affected.index import normalize_path

log = structlog.get_logger(__name__)


def split_patterns(patterns: str | Iterable[str]) -> list[str]:
    """Accept ``"apps/* libs/*"`` or an iterable of patterns."""
    if isinstance(patterns, str):
        return patterns.split()
    return [p for pattern in patterns for p in pattern.split()]


def expand_directory_globs(root: Path, patterns: str | Iterable[str]) -> list[str]:
    """Expand globs relative to ``root``, keeping directories only.

    Results are repository-relative POSIX paths, grouped by pattern in the
    order given and sorted within each pattern. Hidden directories only match
    patterns that spell out the leading dot.

    Raises:
        ConfigError: A pattern is absolute or climbs above ``root``.
    """
    found: OrderedSet[str] = OrderedSet()
    for pattern in split_patterns(patterns):
        pattern = normalize_path(pattern)
        if not pattern:
            continue
        _check_relative(pattern)
        matches = sorted(
            path.relative_to(root).as_posix()
            for path in root.glob(pattern)
            if path.is_dir() and not _is_hidden(path.relative_to(root), pattern)
        )
        if not matches:
            log.debug("glob_no_match", pattern=pattern)
        found.update(matches)
    return list(found)


def _check_relative(pattern: str) -> None:
    if pattern.startswith("/") or Path(pattern).is_absolute():
        raise ConfigError.invalid_value(
            "base_directories", pattern, "pattern must be relative to the repository root"
        )
    if ".." in pattern.split("/"):
        raise ConfigError.invalid_value(
            "base_directories", pattern, "pattern must stay inside the repository root"
        )


def _is_hidden(relative: Path, pattern: str) -> bool:
    pattern_parts = pattern.split("/")
    for index, part in enumerate(relative.parts):
        if part.startswith("."):
            spelled = index < len(pattern_parts) and pattern_parts[index].startswith(".")
            if not spelled:
                return True
    return False


def discover_base_directories(root: Path, workspace: WorkspaceConfig) -> list[str]:
    """Every direct child directory of the workspace apps and libs roots."""
    return expand_directory_globs(
        root,
        [f"{workspace.apps_dir}/*", f"{workspace.libs_dir}/*"],
    )
