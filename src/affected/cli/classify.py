"""affected classify - attribute a list of paths without touching git."""

from __future__ import annotations

import json
from pathlib import Path

import click

from affected.cli.utils import find_repo_root
from affected.classify import classify_changes
from affected.config.loader import load_config
from affected.core.errors import AffectedError
from affected.core.progress import print_report, status
from affected.runner import build_index


@click.command()
@click.argument("files", nargs=-1)
@click.option("--base-directories", help="Space-separated directory globs, e.g. 'apps/* libs/*'")
@click.option("--workspace-config", help="Workspace layout file (nx.json shape)")
@click.option(
    "--repo-path",
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Repository root (default: walk up from the current directory)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
def classify_command(
    files: tuple[str, ...],
    base_directories: str | None,
    workspace_config: str | None,
    repo_path: Path | None,
    as_json: bool,
) -> None:
    """Classify FILES (or newline-separated paths on stdin) into apps and libs.

    Handy with git locally:

        git diff --name-only origin/main | affected classify
    """
    paths = list(files) or [line.strip() for line in click.get_text_stream("stdin") if line.strip()]

    layout = {
        k: v
        for k, v in (("base_directories", base_directories), ("workspace_config", workspace_config))
        if v
    }
    try:
        repo_root = find_repo_root(repo_path)
        config = load_config(repo_root, **({"layout": layout} if layout else {}))
        index, roots = build_index(config, repo_root)
    except AffectedError as e:
        status(e.message, style="error")
        raise SystemExit(1) from e

    report = classify_changes(paths, index, roots.apps_dir, roots.libs_dir)
    if as_json:
        click.echo(json.dumps(report.to_dict()))
    else:
        print_report(report)
