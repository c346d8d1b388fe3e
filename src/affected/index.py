"""Lookup of base directories and implicit dependency files."""

from __future__ import annotations

from collections.abc import Iterable

from affected.core.collections import OrderedSet


def normalize_path(path: str) -> str:
    """Repository-relative POSIX form: no leading ``./``, no trailing ``/``."""
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized.rstrip("/")


def split_segments(path: str) -> tuple[str, ...]:
    return tuple(segment for segment in normalize_path(path).split("/") if segment)


def is_under(path: str, directory: str) -> bool:
    """True when ``path`` lies strictly inside ``directory``.

    Compared segment by segment, so ``apps/foo-bar/x`` is not under
    ``apps/foo`` and ``apps/foo`` is not under itself.
    """
    path_parts = split_segments(path)
    dir_parts = split_segments(directory)
    if not dir_parts or len(path_parts) <= len(dir_parts):
        return False
    return path_parts[: len(dir_parts)] == dir_parts


class DirectoryIndex:
    """Base directories (project roots) plus exact implicit dependency paths.

    Lookup order is construction order; duplicates are dropped on the way in.
    """

    __slots__ = ("_directories", "_implicit")

    def __init__(
        self,
        base_directories: Iterable[str],
        implicit_dependencies: Iterable[str] = (),
    ) -> None:
        self._directories: tuple[tuple[str, tuple[str, ...]], ...] = tuple(
            (directory, split_segments(directory))
            for directory in OrderedSet(normalize_path(d) for d in base_directories)
            if directory
        )
        self._implicit: OrderedSet[str] = OrderedSet(
            normalize_path(p) for p in implicit_dependencies if normalize_path(p)
        )

    @property
    def base_directories(self) -> tuple[str, ...]:
        return tuple(directory for directory, _ in self._directories)

    @property
    def implicit_dependencies(self) -> tuple[str, ...]:
        return self._implicit.to_tuple()

    def find_containing_directory(self, file: str) -> str | None:
        """First base directory that strictly contains ``file``, if any."""
        parts = split_segments(file)
        for directory, dir_parts in self._directories:
            if len(parts) > len(dir_parts) and parts[: len(dir_parts)] == dir_parts:
                return directory
        return None

    def is_implicit_dependency(self, file: str) -> bool:
        return normalize_path(file) in self._implicit

    def __len__(self) -> int:
        return len(self._directories)

    def __repr__(self) -> str:
        return (
            f"DirectoryIndex(base_directories={list(self.base_directories)!r}, "
            f"implicit_dependencies={list(self._implicit)!r})"
        )
