"""affected run - detect affected projects for the triggering CI event."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
import structlog

from affected.ci.context import EventContext
from affected.ci.outputs import output_file_from_env, report_failure, write_outputs
from affected.cli.utils import find_repo_root
from affected.config.loader import load_config
from affected.core.errors import AffectedError, InternalError
from affected.core.logging import configure_logging, set_run_id
from affected.core.progress import print_report, status
from affected.runner import run

log = structlog.get_logger(__name__)


def _overrides(
    token: str | None,
    api_url: str | None,
    base_directories: str | None,
    workspace_config: str | None,
    source: str | None,
) -> dict[str, Any]:
    """CLI options that were actually given, shaped as config sections."""
    github = {k: v for k, v in (("token", token), ("api_url", api_url)) if v}
    layout = {
        k: v
        for k, v in (
            ("base_directories", base_directories),
            ("workspace_config", workspace_config),
            ("source", source),
        )
        if v
    }
    overrides: dict[str, Any] = {}
    if github:
        overrides["github"] = github
    if layout:
        overrides["layout"] = layout
    return overrides


@click.command()
@click.option(
    "--base-ref", envvar=["AFFECTED_BASE_REF", "INPUT_BASEREF"], help="Explicit base commit"
)
@click.option(
    "--head-ref", envvar=["AFFECTED_HEAD_REF", "INPUT_HEADREF"], help="Explicit head commit"
)
@click.option(
    "--token", envvar=["INPUT_TOKEN", "GITHUB_TOKEN"], help="API token for the compare call"
)
@click.option("--api-url", envvar="GITHUB_API_URL", help="REST API root")
@click.option("--repository", help="owner/name (default: GITHUB_REPOSITORY)")
@click.option(
    "--base-directories",
    envvar="INPUT_BASEDIRECTORIES",
    help="Space-separated directory globs, e.g. 'apps/* libs/*'",
)
@click.option(
    "--workspace-config",
    envvar="INPUT_WORKSPACECONFIG",
    help="Workspace layout file (nx.json shape), relative to the repo root",
)
@click.option("--source", type=click.Choice(["github", "local"]), help="Where the diff comes from")
@click.option(
    "--repo-path",
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Repository root (default: walk up from the current directory)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON on stdout")
@click.pass_context
def run_command(
    ctx: click.Context,
    base_ref: str | None,
    head_ref: str | None,
    token: str | None,
    api_url: str | None,
    repository: str | None,
    base_directories: str | None,
    workspace_config: str | None,
    source: str | None,
    repo_path: Path | None,
    as_json: bool,
) -> None:
    """Detect apps and libs affected by the triggering pull request or push.

    Writes changed-apps, changed-libs, changed-implicit-dependencies and
    not-affected to GITHUB_OUTPUT (or stdout outside a runner). Any failure
    exits 1 without writing outputs.
    """
    set_run_id()
    try:
        repo_root = find_repo_root(repo_path)
        config = load_config(
            repo_root,
            **_overrides(token, api_url, base_directories, workspace_config, source),
        )
        if ctx.obj and ctx.obj.get("verbose"):
            config.logging.level = "DEBUG"
        configure_logging(config=config.logging)

        event = EventContext.from_env()
        if repository:
            event = EventContext(event.event_name, event.payload, repository)

        result = run(config, event, repo_root=repo_root, base_ref=base_ref, head_ref=head_ref)
        output_file = output_file_from_env()
        if output_file is not None or not as_json:
            write_outputs(result.report.to_outputs(), output_file)
    except AffectedError as e:
        log.error("run_failed", error=e.error_name, details=e.details)
        status(e.message, style="error")
        report_failure(e)
        raise SystemExit(1) from e
    except Exception as e:
        log.exception("run_crashed")
        error = InternalError.unexpected(str(e) or type(e).__name__, type=type(e).__name__)
        status(error.message, style="error")
        report_failure(error)
        raise SystemExit(1) from e

    if as_json:
        payload = {"base": result.refs.base, "head": result.refs.head, **result.report.to_dict()}
        click.echo(json.dumps(payload))
    status(f"Compared {result.refs}")
    print_report(result.report)
