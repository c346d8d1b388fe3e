"""CI outputs and the failure channel.

Outputs are ``key=value`` lines appended to the file named by GITHUB_OUTPUT.
Outside a runner (no output file) the same lines go to stdout.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

import click
import structlog

from affected.core.errors import AffectedError, ConfigReadError

log = structlog.get_logger(__name__)


def output_file_from_env(environ: Mapping[str, str] | None = None) -> Path | None:
    env = os.environ if environ is None else environ
    value = env.get("GITHUB_OUTPUT", "").strip()
    return Path(value) if value else None


def _escape(value: str) -> str:
    # Single-line outputs only; collapse stray newlines from path lists
    return value.replace("\r", " ").replace("\n", " ")


def write_outputs(outputs: Mapping[str, str], path: Path | None) -> None:
    """Append every output as ``key=value``.

    Raises:
        ConfigReadError: Output file cannot be written.
    """
    lines = [f"{key}={_escape(value)}" for key, value in outputs.items()]
    if path is None:
        for line in lines:
            click.echo(line)
        return

    try:
        with path.open("a", encoding="utf-8") as handle:
            handle.writelines(f"{line}\n" for line in lines)
    except OSError as e:
        raise ConfigReadError.unreadable(str(path), str(e)) from e
    log.debug("outputs_written", path=str(path), keys=list(outputs))


def report_failure(error: AffectedError | str) -> None:
    """Mark the step failed with a workflow ``error`` annotation."""
    message = error.message if isinstance(error, AffectedError) else error
    click.echo(f"::error::{_escape(message)}")
