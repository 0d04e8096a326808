"""Version-control port and its git implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from lockstep.git.commits import get_changed_files, get_commit_subjects, get_latest_tag
from lockstep.git.repo import get_current_branch, run_git_command


class VersionControl(Protocol):
    """Version-control operations used by the version and publish commands."""

    def last_release_marker(self) -> str | None: ...

    def changed_file_names(self, since: str) -> list[str]: ...

    def commit_subjects_since(self, marker: str) -> list[str]: ...

    def current_branch(self) -> str: ...

    def stage_all(self) -> None: ...

    def commit(self, message: str) -> None: ...

    def tag(self, name: str) -> None: ...

    def push_with_tags(self) -> None: ...


class GitVersionControl:
    """VersionControl backed by the git CLI.

    Every failing command raises GitError; nothing is retried.

    Attributes:
        root: Repository working directory.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def last_release_marker(self) -> str | None:
        return get_latest_tag(self.root)

    def changed_file_names(self, since: str) -> list[str]:
        return get_changed_files(since, cwd=self.root)

    def commit_subjects_since(self, marker: str) -> list[str]:
        return get_commit_subjects(marker, cwd=self.root)

    def current_branch(self) -> str:
        return get_current_branch(self.root)

    def stage_all(self) -> None:
        run_git_command(["add", "."], cwd=self.root)

    def commit(self, message: str) -> None:
        run_git_command(["commit", "-m", message], cwd=self.root)

    def tag(self, name: str) -> None:
        run_git_command(["tag", name], cwd=self.root)

    def push_with_tags(self) -> None:
        run_git_command(["push", "--follow-tags"], cwd=self.root)
