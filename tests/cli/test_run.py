"""Tests for affected run command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from affected.cli.main import cli
from affected.diff import ChangedFile
from affected.refs import RefPair

runner = CliRunner()


class StubSource:
    """Fixed file list; remembers which refs were asked for."""

    def __init__(self, files: list[str]) -> None:
        self.files = files
        self.calls: list[RefPair] = []

    def changed_files(self, refs: RefPair) -> list[ChangedFile]:
        self.calls.append(refs)
        return [ChangedFile(f) for f in self.files]


@pytest.fixture
def monorepo(tmp_path: Path) -> Path:
    root = tmp_path / "mono"
    for directory in ("apps/foo", "apps/bar", "libs/shared"):
        (root / directory).mkdir(parents=True)
    (root / "nx.json").write_text(
        json.dumps(
            {
                "workspaceLayout": {"appsDir": "apps", "libsDir": "libs"},
                "implicitDependencies": {"nx.json": "*"},
            }
        )
    )
    return root


@pytest.fixture
def push_event(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    event_path = tmp_path / "event.json"
    event_path.write_text(json.dumps({"before": "b0", "after": "a1"}))
    monkeypatch.setenv("GITHUB_EVENT_NAME", "push")
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(event_path))
    monkeypatch.setenv("GITHUB_REPOSITORY", "acme/mono")


@pytest.fixture
def source(monkeypatch: pytest.MonkeyPatch) -> StubSource:
    stub = StubSource(["apps/foo/src/a.ts", "libs/shared/x.ts", "nx.json", "README.md"])
    monkeypatch.setattr("affected.runner.make_change_source", lambda *args: stub)
    return stub


class TestRunOutputs:
    """Where outputs go."""

    def test_writes_github_output(
        self,
        monorepo: Path,
        tmp_path: Path,
        push_event: None,
        source: StubSource,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Outputs are appended to the GITHUB_OUTPUT file."""
        # Given
        output = tmp_path / "github_output"
        output.write_text("earlier=1\n")
        monkeypatch.setenv("GITHUB_OUTPUT", str(output))

        # When
        result = runner.invoke(
            cli, ["run", "--repo-path", str(monorepo), "--workspace-config", "nx.json"]
        )

        # Then
        assert result.exit_code == 0, result.output
        assert source.calls == [RefPair("b0", "a1")]
        assert output.read_text().splitlines() == [
            "earlier=1",
            "changed-apps=foo",
            "changed-libs=shared",
            "changed-implicit-dependencies=nx.json",
            "directories=apps/foo libs/shared",
            "not-affected=false",
            "non-affected=false",
        ]

    def test_stdout_without_output_file(
        self, monorepo: Path, push_event: None, source: StubSource
    ) -> None:
        result = runner.invoke(cli, ["run", "--repo-path", str(monorepo)])

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert "changed-apps=foo" in lines
        assert "changed-libs=shared" in lines
        assert "changed-implicit-dependencies=" in lines

    def test_json_report(self, monorepo: Path, push_event: None, source: StubSource) -> None:
        result = runner.invoke(cli, ["run", "--repo-path", str(monorepo), "--json"])

        assert result.exit_code == 0, result.output
        json_lines = [line for line in result.output.splitlines() if line.startswith("{")]
        assert json.loads(json_lines[0]) == {
            "base": "b0",
            "head": "a1",
            "apps": ["foo"],
            "libs": ["shared"],
            "implicit_dependencies": [],
            "directories": ["apps/foo", "libs/shared"],
            "not_affected": False,
        }
        assert not any(line.startswith("changed-apps=") for line in result.output.splitlines())

    def test_nothing_affected(
        self, monorepo: Path, push_event: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        stub = StubSource(["docs/readme.md"])
        monkeypatch.setattr("affected.runner.make_change_source", lambda *args: stub)

        result = runner.invoke(cli, ["run", "--repo-path", str(monorepo)])

        assert result.exit_code == 0, result.output
        assert "not-affected=true" in result.output.splitlines()


class TestRunRefs:
    """Explicit refs from options and action inputs."""

    def test_explicit_refs_option(
        self, monorepo: Path, push_event: None, source: StubSource
    ) -> None:
        result = runner.invoke(
            cli,
            ["run", "--repo-path", str(monorepo), "--base-ref", "abc", "--head-ref", "def"],
        )

        assert result.exit_code == 0, result.output
        assert source.calls == [RefPair("abc", "def")]

    def test_explicit_refs_from_action_inputs(
        self,
        monorepo: Path,
        push_event: None,
        source: StubSource,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("INPUT_BASEREF", "main")
        monkeypatch.setenv("INPUT_HEADREF", "feature")

        result = runner.invoke(cli, ["run", "--repo-path", str(monorepo)])

        assert result.exit_code == 0, result.output
        assert source.calls == [RefPair("main", "feature")]


class TestRunFailures:
    """Any error exits 1 without writing outputs."""

    def test_unsupported_event(
        self,
        monorepo: Path,
        tmp_path: Path,
        source: StubSource,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        output = tmp_path / "github_output"
        monkeypatch.setenv("GITHUB_OUTPUT", str(output))
        monkeypatch.setenv("GITHUB_EVENT_NAME", "release")

        result = runner.invoke(cli, ["run", "--repo-path", str(monorepo)])

        assert result.exit_code == 1
        assert "::error::'release' events are not supported" in result.output
        assert not output.exists()
        assert source.calls == []

    def test_missing_workspace_file(
        self, monorepo: Path, push_event: None, source: StubSource
    ) -> None:
        result = runner.invoke(
            cli, ["run", "--repo-path", str(monorepo), "--workspace-config", "missing.json"]
        )

        assert result.exit_code == 1
        assert "::error::" in result.output

    def test_invalid_repository_for_github_source(
        self, monorepo: Path, push_event: None
    ) -> None:
        result = runner.invoke(
            cli, ["run", "--repo-path", str(monorepo), "--repository", "not-a-repo"]
        )

        assert result.exit_code == 1
        assert "::error::" in result.output

    def test_unexpected_error_reported_as_internal(
        self, monorepo: Path, push_event: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        class BrokenSource:
            def changed_files(self, refs: RefPair) -> list[ChangedFile]:
                raise RuntimeError("boom")

        monkeypatch.setattr("affected.runner.make_change_source", lambda *args: BrokenSource())

        result = runner.invoke(cli, ["run", "--repo-path", str(monorepo)])

        assert result.exit_code == 1
        assert "::error::Internal error: boom" in result.output
