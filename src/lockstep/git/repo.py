"""Git command execution and branch lookup."""

from __future__ import annotations

import subprocess
from pathlib import Path

from lockstep.errors import GitError


def run_git_command(
    args: list[str],
    cwd: Path | None = None,
    *,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Run a git command synchronously.

    Args:
        args: Git command arguments (without 'git').
        cwd: Working directory.
        check: Raise on non-zero exit code.

    Returns:
        Completed process result.

    Raises:
        GitError: If command fails and check is True.
    """
    cmd = ["git"] + args

    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        if check and result.returncode != 0:
            raise GitError(
                result.stderr.strip() or f"Command failed with exit code {result.returncode}",
                command=" ".join(cmd),
            )
        return result
    except FileNotFoundError as e:
        raise GitError("Git is not installed") from e


def get_current_branch(cwd: Path | None = None) -> str:
    """Get the current git branch name.

    Args:
        cwd: Working directory.

    Returns:
        Current branch name (``HEAD`` when detached).
    """
    result = run_git_command(["rev-parse", "--abbrev-ref", "HEAD"], cwd=cwd)
    return result.stdout.strip()
