"""Version command: lockstep bump, write-back, commit and tag."""

from __future__ import annotations

from dataclasses import dataclass, field

from lockstep.commands.base import CommandContext, SyncCommand
from lockstep.versioning import (
    BumpType,
    Classification,
    bump_version,
    classify_commits,
    preserve_operator,
)
from lockstep.workspace import PackageRecord


@dataclass
class VersionOptions:
    """Options for version command.

    Attributes:
        bump: Bump level; None means detect it from commit history.
        skip_ci: Append the skip-ci marker to the release commit.
        no_git_commit: Skip staging, commit and tag.
    """

    bump: BumpType | None = None
    skip_ci: bool = False
    no_git_commit: bool = False


@dataclass
class VersionResult:
    """Result of version command."""

    old_version: str
    new_version: str
    bump: BumpType
    packages: list[str] = field(default_factory=list)
    classification: Classification | None = None
    release_marker: str | None = None
    root_updated: bool = False
    commit_message: str | None = None
    tag: str | None = None

    @property
    def auto(self) -> bool:
        """Whether the bump level was detected from commits."""
        return self.classification is not None

    @property
    def committed(self) -> bool:
        return self.tag is not None


class VersionCommand(SyncCommand[VersionResult]):
    """Bump every package to the next shared version."""

    def __init__(self, context: CommandContext, options: VersionOptions | None = None) -> None:
        super().__init__(context)
        self.options = options or VersionOptions()

    def has_changes(self) -> bool:
        """Check for file changes since the last release tag.

        Without any tag every state counts as changed.
        """
        marker = self.context.vcs.last_release_marker()
        if marker is None:
            return True
        return bool(self.context.vcs.changed_file_names(marker))

    def classify(self) -> tuple[Classification, str | None]:
        """Classify commits since the last release tag.

        Returns:
            The classification and the tag it was measured from. Without a
            tag the classification is an empty ``patch`` one.
        """
        marker = self.context.vcs.last_release_marker()
        if marker is None:
            return classify_commits([]), None
        return classify_commits(self.context.vcs.commit_subjects_since(marker)), marker

    def _update_package(self, pkg: PackageRecord, internal: set[str], next_version: str) -> None:
        pkg.version = next_version
        for dep_field, dep_name, dep_range in list(pkg.iter_dependencies()):
            if dep_name not in internal or not isinstance(dep_range, str):
                continue
            pkg.dependency_map(dep_field)[dep_name] = preserve_operator(dep_range, next_version)
        self.context.manifests.write(pkg)

    def _update_root(self, next_version: str) -> bool:
        root = self.context.manifests.read_root()
        if not root or not root.get("version"):
            return False
        root["version"] = next_version
        self.context.manifests.write_root(root)
        return True

    def _commit_and_tag(self, next_version: str) -> tuple[str, str]:
        versioning = self.config.versioning
        message = versioning.commit_message.replace("{version}", next_version)
        if self.options.skip_ci:
            message += versioning.skip_ci_suffix
        tag = versioning.tag_format.replace("{version}", next_version)

        vcs = self.context.vcs
        vcs.stage_all()
        vcs.commit(message)
        vcs.tag(tag)
        return message, tag

    def execute(self) -> VersionResult:
        """Execute the version command."""
        classification = None
        marker = None
        bump = self.options.bump
        if bump is None:
            classification, marker = self.classify()
            bump = classification.bump

        workspace = self.context.build_workspace()
        current = workspace.shared_version()
        next_version = bump_version(current, bump)

        internal = workspace.names
        for pkg in workspace.packages:
            self._update_package(pkg, internal, next_version)

        result = VersionResult(
            old_version=current,
            new_version=next_version,
            bump=bump,
            packages=[pkg.name for pkg in workspace.packages],
            classification=classification,
            release_marker=marker,
            root_updated=self._update_root(next_version),
        )

        if not self.options.no_git_commit:
            result.commit_message, result.tag = self._commit_and_tag(next_version)

        return result


def version(
    context: CommandContext,
    *,
    bump: BumpType | None = None,
    skip_ci: bool = False,
    no_git_commit: bool = False,
) -> VersionResult:
    """Convenience function for versioning."""
    options = VersionOptions(bump=bump, skip_ci=skip_ci, no_git_commit=no_git_commit)
    return VersionCommand(context, options).execute()
