"""One affected-projects run: refs, diff, layout, classification."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import structlog

from affected.ci.context import EventContext
from affected.classify import ChangeReport, classify_changes
from affected.config.models import AffectedConfig
from affected.config.workspace import WorkspaceConfig, WorkspaceLayout, load_workspace_config
from affected.diff import ChangeSource, GitHubCompareClient, LocalDiffSource
from affected.discovery import discover_base_directories, expand_directory_globs
from affected.index import DirectoryIndex
from affected.refs import RefPair, resolve_refs

log = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class RunResult:
    """Everything a run produced, for outputs and summaries."""

    refs: RefPair
    changed_files: tuple[str, ...]
    index: DirectoryIndex
    report: ChangeReport


def make_change_source(
    config: AffectedConfig, event: EventContext, repo_root: Path
) -> ChangeSource:
    """Pick the configured source.

    Raises:
        ConfigReadError: 'github' source without an owner/name repository.
    """
    if config.layout.source == "local":
        return LocalDiffSource(repo_root)
    return GitHubCompareClient(
        config.github.token,
        event.owner,
        event.repo,
        api_url=config.github.api_url,
        timeout=config.github.timeout_sec,
    )


def build_index(config: AffectedConfig, repo_root: Path) -> tuple[DirectoryIndex, WorkspaceLayout]:
    """Directory index and the apps/libs roots used to attribute it.

    With a workspace file, its layout and implicit dependencies win and the
    base-directory globs are ignored.

    Raises:
        ConfigReadError: Workspace file missing or unparsable.
    """
    layout = config.layout
    if layout.workspace_config:
        workspace = load_workspace_config(repo_root / layout.workspace_config)
        directories = discover_base_directories(repo_root, workspace)
        implicit = workspace.implicit_dependency_paths
    else:
        workspace = WorkspaceConfig(
            workspace_layout=WorkspaceLayout(apps_dir=layout.apps_dir, libs_dir=layout.libs_dir)
        )
        directories = expand_directory_globs(repo_root, layout.base_directories)
        implicit = ()

    log.debug("base_directories", directories=directories, implicit_dependencies=list(implicit))
    return DirectoryIndex(directories, implicit), workspace.workspace_layout


def run(
    config: AffectedConfig,
    event: EventContext,
    *,
    repo_root: Path,
    base_ref: str | None = None,
    head_ref: str | None = None,
    source: ChangeSource | None = None,
) -> RunResult:
    """Resolve refs, fetch the diff once, classify.

    Every error propagates unchanged; nothing is written here.
    """
    refs = resolve_refs(base_ref, head_ref, event)
    source = source or make_change_source(config, event, repo_root)
    changed = tuple(f.filename for f in source.changed_files(refs))
    log.debug("changed_files", count=len(changed), files=list(changed))

    index, layout = build_index(config, repo_root)
    report = classify_changes(changed, index, layout.apps_dir, layout.libs_dir)
    log.info(
        "classified",
        apps=list(report.apps),
        libs=list(report.libs),
        implicit_dependencies=list(report.implicit_dependencies),
        directories=list(report.directories),
        not_affected=report.not_affected,
    )
    return RunResult(refs=refs, changed_files=changed, index=index, report=report)
