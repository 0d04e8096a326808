"""Git history queries relative to the last release tag."""

from __future__ import annotations

from pathlib import Path

from lockstep.git.repo import run_git_command


def get_latest_tag(cwd: Path | None = None) -> str | None:
    """Get the most recent tag reachable from HEAD.

    Returns:
        Tag name, or None if the repository has no reachable tag.
    """
    result = run_git_command(["describe", "--tags", "--abbrev=0"], cwd=cwd, check=False)
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def get_changed_files(since: str, cwd: Path | None = None) -> list[str]:
    """List files changed between ``since`` and HEAD.

    Raises:
        GitError: If git cannot compute the diff.
    """
    result = run_git_command(["diff", "--name-only", f"{since}..HEAD"], cwd=cwd)
    return [line for line in result.stdout.splitlines() if line.strip()]


def get_commit_subjects(since: str, cwd: Path | None = None) -> list[str]:
    """List commit subjects between ``since`` and HEAD, newest first.

    Raises:
        GitError: If git cannot read the history.
    """
    result = run_git_command(["log", f"{since}..HEAD", "--pretty=format:%s"], cwd=cwd)
    return [line for line in result.stdout.splitlines() if line.strip()]
