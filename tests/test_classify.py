"""Tests for change classification."""

from __future__ import annotations

import itertools

import pytest

from affected.classify import ChangeReport, classify_changes
from affected.index import DirectoryIndex


@pytest.fixture
def index() -> DirectoryIndex:
    return DirectoryIndex(["apps/foo", "apps/bar", "libs/shared"], ["nx.json"])


class TestScenarios:
    """End-to-end classification examples."""

    def test_mixed_changes(self, index: DirectoryIndex) -> None:
        """Apps, libs and implicit dependencies are reported separately."""
        # Given
        files = [
            "apps/foo/src/a.ts",
            "apps/foo/src/b.ts",
            "libs/shared/x.ts",
            "nx.json",
            "README.md",
        ]

        # When
        report = classify_changes(files, index, "apps", "libs")

        # Then
        assert report == ChangeReport(
            apps=("foo",),
            libs=("shared",),
            implicit_dependencies=("nx.json",),
            directories=("apps/foo", "libs/shared"),
        )
        assert report.not_affected is False

    def test_untracked_changes_only(self, index: DirectoryIndex) -> None:
        report = classify_changes(["docs/readme.md"], index, "apps", "libs")

        assert report == ChangeReport()
        assert report.not_affected is True

    def test_empty_input(self, index: DirectoryIndex) -> None:
        report = classify_changes([], index)

        assert report.not_affected is True


class TestOrderingAndDedup:
    """First-seen order and duplicate handling."""

    def test_first_seen_order(self, index: DirectoryIndex) -> None:
        files = ["apps/bar/1.ts", "apps/foo/1.ts", "apps/bar/2.ts"]

        assert classify_changes(files, index).apps == ("bar", "foo")

    def test_implicit_dependency_duplicates_kept(self, index: DirectoryIndex) -> None:
        report = classify_changes(["nx.json", "nx.json"], index)

        assert report.implicit_dependencies == ("nx.json", "nx.json")

    def test_idempotent(self, index: DirectoryIndex) -> None:
        files = ["libs/shared/a.ts", "apps/foo/b.ts", "nx.json"]

        assert classify_changes(files, index) == classify_changes(files, index)

    def test_permutations_give_same_sets(self, index: DirectoryIndex) -> None:
        files = ["libs/shared/a.ts", "apps/foo/b.ts", "apps/bar/c.ts", "nx.json", "x.md"]
        expected = classify_changes(files, index)

        for permutation in itertools.permutations(files):
            report = classify_changes(permutation, index)
            assert set(report.apps) == set(expected.apps)
            assert set(report.libs) == set(expected.libs)
            assert sorted(report.implicit_dependencies) == sorted(expected.implicit_dependencies)


class TestAttribution:
    """Which bucket a file lands in."""

    def test_project_name_is_segment_below_root(self) -> None:
        index = DirectoryIndex(["packages/apps/web", "packages/libs/ui"])

        report = classify_changes(
            ["packages/apps/web/main.ts", "packages/libs/ui/button.ts"],
            index,
            "packages/apps",
            "packages/libs",
        )

        assert report.apps == ("web",)
        assert report.libs == ("ui",)

    def test_nested_base_directory_uses_first_segment(self) -> None:
        index = DirectoryIndex(["apps/group/web"])

        assert classify_changes(["apps/group/web/a.ts"], index).apps == ("group",)

    def test_directory_outside_both_roots_reported_as_directory(self) -> None:
        """A base directory under neither root is no app or lib, but still changed."""
        # Given
        index = DirectoryIndex(["packages/web", "packages/api"])

        # When
        report = classify_changes(
            ["packages/web/a.ts", "packages/api/b.ts", "packages/web/c.ts"], index
        )

        # Then
        assert report.apps == ()
        assert report.libs == ()
        assert report.directories == ("packages/web", "packages/api")
        assert report.not_affected is False

    def test_file_equal_to_base_directory_ignored(self, index: DirectoryIndex) -> None:
        assert classify_changes(["apps/foo"], index).not_affected

    def test_implicit_dependency_inside_project_not_attributed(self) -> None:
        index = DirectoryIndex(["apps/foo"], ["apps/foo/project.json"])

        report = classify_changes(["apps/foo/project.json"], index)

        assert report.apps == ()
        assert report.implicit_dependencies == ("apps/foo/project.json",)

    @pytest.mark.parametrize(
        ("apps_root", "libs_root"), [("apps", "libs"), ("apps/", "./libs")]
    )
    def test_roots_normalized(self, index: DirectoryIndex, apps_root: str, libs_root: str) -> None:
        report = classify_changes(["apps/foo/a", "libs/shared/b"], index, apps_root, libs_root)

        assert report.apps == ("foo",)
        assert report.libs == ("shared",)


class TestChangeReport:
    """Outputs and serialization."""

    def test_not_affected_when_all_empty(self) -> None:
        assert ChangeReport().not_affected
        assert not ChangeReport(implicit_dependencies=("nx.json",)).not_affected
        assert not ChangeReport(libs=("a",)).not_affected
        assert not ChangeReport(directories=("tools/scripts",)).not_affected

    def test_to_outputs(self) -> None:
        report = ChangeReport(
            apps=("foo", "bar"),
            implicit_dependencies=("nx.json",),
            directories=("apps/foo", "apps/bar"),
        )

        assert report.to_outputs() == {
            "changed-apps": "foo bar",
            "changed-libs": "",
            "changed-implicit-dependencies": "nx.json",
            "directories": "apps/foo apps/bar",
            "not-affected": "false",
            "non-affected": "false",
        }

    def test_to_outputs_not_affected(self) -> None:
        outputs = ChangeReport().to_outputs()

        assert outputs["not-affected"] == "true"
        assert outputs["non-affected"] == "true"
        assert outputs["directories"] == ""

    def test_to_dict(self) -> None:
        assert ChangeReport(apps=("a",)).to_dict() == {
            "apps": ["a"],
            "libs": [],
            "implicit_dependencies": [],
            "directories": [],
            "not_affected": False,
        }
