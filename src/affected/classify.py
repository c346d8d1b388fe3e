"""Attribute changed files to apps, libs and implicit dependencies."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import structlog

from affected.core.collections import OrderedSet
from affected.index import DirectoryIndex, is_under, normalize_path, split_segments

log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ChangeReport:
    """Affected apps and libs (unique, first-seen order) and implicit dependency hits.

    ``implicit_dependencies`` keeps one entry per matching changed file, so a
    path listed twice in the diff appears twice here. ``directories`` holds
    every base directory hit, including ones outside the apps and libs roots.
    """

    apps: tuple[str, ...] = ()
    libs: tuple[str, ...] = ()
    implicit_dependencies: tuple[str, ...] = ()
    directories: tuple[str, ...] = ()

    @property
    def not_affected(self) -> bool:
        return not (self.apps or self.libs or self.implicit_dependencies or self.directories)

    def to_outputs(self) -> dict[str, str]:
        """CI outputs: space-joined lists and the not-affected flag."""
        not_affected = "true" if self.not_affected else "false"
        return {
            "changed-apps": " ".join(self.apps),
            "changed-libs": " ".join(self.libs),
            "changed-implicit-dependencies": " ".join(self.implicit_dependencies),
            "directories": " ".join(self.directories),
            "not-affected": not_affected,
            "non-affected": not_affected,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "apps": list(self.apps),
            "libs": list(self.libs),
            "implicit_dependencies": list(self.implicit_dependencies),
            "directories": list(self.directories),
            "not_affected": self.not_affected,
        }


def _project_name(directory: str, root: str) -> str:
    """First path segment below ``root``."""
    return split_segments(directory)[len(split_segments(root))]


def classify_changes(
    changed_files: Iterable[str],
    index: DirectoryIndex,
    apps_root: str = "apps",
    libs_root: str = "libs",
) -> ChangeReport:
    """Single pass over ``changed_files`` in order.

    Implicit dependencies are checked first; otherwise the containing base
    directory decides between apps and libs. Base directories outside both
    roots are still reported in ``directories``. Anything else is ignored.
    """
    apps: OrderedSet[str] = OrderedSet()
    libs: OrderedSet[str] = OrderedSet()
    directories: OrderedSet[str] = OrderedSet()
    implicit: list[str] = []

    for file in changed_files:
        path = normalize_path(file)
        if index.is_implicit_dependency(path):
            implicit.append(path)
            continue

        directory = index.find_containing_directory(path)
        if directory is None:
            log.debug("file_ignored", file=path)
            continue

        directories.add(directory)
        if is_under(directory, apps_root):
            apps.add(_project_name(directory, apps_root))
        elif is_under(directory, libs_root):
            libs.add(_project_name(directory, libs_root))
        else:
            log.debug("directory_outside_roots", file=path, directory=directory)

    return ChangeReport(
        apps=apps.to_tuple(),
        libs=libs.to_tuple(),
        implicit_dependencies=tuple(implicit),
        directories=directories.to_tuple(),
    )
