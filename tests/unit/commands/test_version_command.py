"""Tests for the version command."""

from __future__ import annotations

import pytest

from lockstep.commands import CommandContext, VersionCommand, VersionOptions, version
from lockstep.errors import GitError, InconsistentVersionsError, InvalidSemverError
from lockstep.versioning import BumpType


class TestVersionOptions:
    """Tests for VersionOptions."""

    def test_defaults(self) -> None:
        options = VersionOptions()
        assert options.bump is None
        assert options.skip_ci is False
        assert options.no_git_commit is False


class TestExplicitBump:
    """Version bumps with an explicit type."""

    def test_minor_bumps_all_and_rewrites_internal_ranges(
        self, context: CommandContext, memory_store
    ) -> None:
        result = version(context, bump=BumpType.MINOR)

        records = memory_store.records
        assert {r.version for r in records.values()} == {"1.1.0"}
        assert records["pkg-a"].dependencies["pkg-b"] == "^1.1.0"
        assert records["pkg-b"].dependencies["pkg-c"] == "~1.1.0"
        assert result.old_version == "1.0.0"
        assert result.new_version == "1.1.0"
        assert result.bump == BumpType.MINOR
        assert result.packages == ["pkg-a", "pkg-b", "pkg-c"]
        assert result.auto is False

    def test_external_ranges_untouched(self, context: CommandContext, memory_store) -> None:
        version(context, bump=BumpType.MAJOR)
        assert memory_store.records["pkg-a"].dependencies["lodash"] == "^4.17.21"

    def test_every_dependency_field_rewritten(
        self, context: CommandContext, memory_store, record_factory
    ) -> None:
        memory_store.records["pkg-c"] = record_factory(
            "pkg-c",
            dev_dependencies={"pkg-b": ">=1.0.0"},
            peer_dependencies={"pkg-a": "=1.0.0"},
            optional_dependencies={"pkg-b": "1.0.0"},
        )
        # pkg-c depending back on pkg-b/pkg-a is a cycle, but version never sorts.
        version(context, bump=BumpType.PATCH)

        pkg_c = memory_store.records["pkg-c"]
        assert pkg_c.dev_dependencies == {"pkg-b": ">=1.0.1"}
        assert pkg_c.peer_dependencies == {"pkg-a": "=1.0.1"}
        assert pkg_c.optional_dependencies == {"pkg-b": "1.0.1"}

    def test_non_string_internal_range_left_alone(
        self, context: CommandContext, memory_store
    ) -> None:
        memory_store.records["pkg-c"].dependencies["pkg-a"] = {"version": "1.0.0"}
        version(context, bump=BumpType.PATCH)
        assert memory_store.records["pkg-c"].dependencies["pkg-a"] == {"version": "1.0.0"}

    def test_every_package_persisted(self, context: CommandContext, memory_store) -> None:
        version(context, bump=BumpType.PATCH)
        assert memory_store.writes == ["pkg-a", "pkg-b", "pkg-c"]


class TestInvariants:
    """Failures before anything is written."""

    def test_inconsistent_versions(
        self, context: CommandContext, memory_store, vcs
    ) -> None:
        memory_store.records["pkg-b"].version = "1.1.0"
        with pytest.raises(InconsistentVersionsError, match="1.0.0, 1.1.0"):
            version(context, bump=BumpType.PATCH)
        assert memory_store.writes == []
        assert vcs.calls == []

    def test_invalid_semver(self, context: CommandContext, memory_store) -> None:
        for record in memory_store.records.values():
            record.version = "next"
        with pytest.raises(InvalidSemverError, match="next"):
            version(context, bump=BumpType.PATCH)
        assert memory_store.writes == []

    def test_missing_version_field(self, context: CommandContext, memory_store) -> None:
        for record in memory_store.records.values():
            record.version = None
        with pytest.raises(InvalidSemverError, match="None"):
            version(context, bump=BumpType.PATCH)
        assert memory_store.writes == []


class TestRootManifest:
    """Aggregate root manifest handling."""

    def test_root_version_updated(self, context: CommandContext, memory_store) -> None:
        memory_store.root = {"name": "monorepo", "version": "1.0.0", "private": True}
        result = version(context, bump=BumpType.PATCH)
        assert result.root_updated is True
        assert memory_store.root == {"name": "monorepo", "version": "1.0.1", "private": True}

    def test_root_without_version_untouched(
        self, context: CommandContext, memory_store
    ) -> None:
        memory_store.root = {"name": "monorepo", "private": True}
        result = version(context, bump=BumpType.PATCH)
        assert result.root_updated is False
        assert "<root>" not in memory_store.writes

    def test_no_root(self, context: CommandContext) -> None:
        assert version(context, bump=BumpType.PATCH).root_updated is False


class TestGitSteps:
    """Commit and tag after the write-back."""

    def test_commit_and_tag(self, context: CommandContext, vcs) -> None:
        result = version(context, bump=BumpType.MINOR)
        assert vcs.calls == [
            ("stage_all",),
            ("commit", "chore(release): v1.1.0"),
            ("tag", "v1.1.0"),
        ]
        assert result.committed is True
        assert result.tag == "v1.1.0"

    def test_skip_ci_suffix(self, context: CommandContext, vcs) -> None:
        version(context, bump=BumpType.PATCH, skip_ci=True)
        assert ("commit", "chore(release): v1.0.1 [skip ci]") in vcs.calls

    def test_no_git_commit(self, context: CommandContext, vcs, memory_store) -> None:
        result = version(context, bump=BumpType.PATCH, no_git_commit=True)
        assert vcs.calls == []
        assert result.committed is False
        assert memory_store.writes == ["pkg-a", "pkg-b", "pkg-c"]

    def test_custom_templates(self, context: CommandContext, vcs) -> None:
        context.config.versioning.tag_format = "release-{version}"
        context.config.versioning.commit_message = "release {version}"
        version(context, bump=BumpType.PATCH)
        assert vcs.calls[1:] == [("commit", "release 1.0.1"), ("tag", "release-1.0.1")]

    def test_templates_with_other_braces(self, context: CommandContext, vcs) -> None:
        context.config.versioning.tag_format = "{0}-v{version}"
        context.config.versioning.commit_message = "release {version} {scope}"
        version(context, bump=BumpType.PATCH)
        assert vcs.calls[1:] == [("commit", "release 1.0.1 {scope}"), ("tag", "{0}-v1.0.1")]

    def test_commit_failure_aborts_without_rollback(
        self, context: CommandContext, vcs, memory_store
    ) -> None:
        vcs.fail_on = "commit"
        with pytest.raises(GitError):
            version(context, bump=BumpType.PATCH)
        assert memory_store.records["pkg-a"].version == "1.0.1"
        assert [c[0] for c in vcs.calls] == ["stage_all", "commit"]


class TestAutoBump:
    """Bump type derived from commit history."""

    def test_feature_commits_give_minor(self, context: CommandContext, vcs) -> None:
        vcs.subjects = ["feat(ui): new button", "fix: typo"]
        result = version(context)
        assert result.bump == BumpType.MINOR
        assert result.new_version == "1.1.0"
        assert result.auto is True
        assert result.release_marker == "v1.0.0"
        assert [c.subject for c in result.classification.commits] == vcs.subjects

    def test_breaking_gives_major(self, context: CommandContext, vcs) -> None:
        vcs.subjects = ["fix: a", "feat!: drop legacy api"]
        assert version(context).new_version == "2.0.0"

    def test_no_marker_defaults_to_patch(self, context: CommandContext, vcs) -> None:
        vcs.marker = None
        vcs.subjects = ["feat!: ignored without a tag"]
        result = version(context)
        assert result.bump == BumpType.PATCH
        assert result.release_marker is None
        assert result.classification.commits == []

    def test_no_commits_defaults_to_patch(self, context: CommandContext, vcs) -> None:
        vcs.subjects = []
        assert version(context).bump == BumpType.PATCH

    def test_history_failure_aborts(self, context: CommandContext, vcs, memory_store) -> None:
        vcs.fail_on = "log"
        with pytest.raises(GitError, match="bad revision"):
            version(context)
        assert memory_store.writes == []
        assert vcs.calls == []

    def test_explicit_bump_skips_history(self, context: CommandContext, vcs) -> None:
        vcs.subjects = ["feat!: breaking"]
        result = version(context, bump=BumpType.PATCH)
        assert result.new_version == "1.0.1"
        assert result.classification is None


class TestHasChanges:
    """Tests for VersionCommand.has_changes."""

    def test_changes_present(self, context: CommandContext) -> None:
        assert VersionCommand(context).has_changes() is True

    def test_no_changes(self, context: CommandContext, vcs) -> None:
        vcs.changed = []
        assert VersionCommand(context).has_changes() is False

    def test_no_tag_counts_as_changed(self, context: CommandContext, vcs) -> None:
        vcs.marker = None
        vcs.changed = []
        assert VersionCommand(context).has_changes() is True
