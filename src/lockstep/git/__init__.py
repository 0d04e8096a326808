"""Git integration."""

from lockstep.git.client import GitVersionControl, VersionControl
from lockstep.git.commits import get_changed_files, get_commit_subjects, get_latest_tag
from lockstep.git.repo import get_current_branch, run_git_command

__all__ = [
    "GitVersionControl",
    "VersionControl",
    "get_changed_files",
    "get_commit_subjects",
    "get_current_branch",
    "get_latest_tag",
    "run_git_command",
]
