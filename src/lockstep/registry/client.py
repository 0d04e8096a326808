"""Package manager subprocess wrapper."""

from __future__ import annotations

import subprocess
from pathlib import Path

from lockstep.config.schema import PackageManager
from lockstep.errors import PublishError


def publish_executable(manager: PackageManager) -> str:
    """Return the executable used to publish for a package manager.

    yarn publishes through npm.
    """
    if manager == PackageManager.PNPM:
        return "pnpm"
    return "npm"


def build_publish_args(access: str, dist_tag: str, *, dry_run: bool = False) -> list[str]:
    """Build arguments for a ``publish`` invocation (without the executable)."""
    args = ["publish", "--access", access, "--tag", dist_tag]
    if dry_run:
        args.append("--dry-run")
    return args


def run_package_manager(
    manager: PackageManager,
    args: list[str],
    cwd: Path,
) -> subprocess.CompletedProcess[str]:
    """Run the package manager in a package directory.

    Output is streamed to the terminal, not captured.

    Args:
        manager: Package manager to use.
        args: Arguments after the executable.
        cwd: Package directory.

    Returns:
        Completed process result.

    Raises:
        PublishError: If the executable is missing or exits non-zero.
    """
    cmd = [publish_executable(manager), *args]
    try:
        result = subprocess.run(cmd, cwd=cwd, text=True, check=False)
    except FileNotFoundError as e:
        raise PublishError(f"{cmd[0]} is not installed") from e
    if result.returncode != 0:
        raise PublishError(f"'{' '.join(cmd)}' exited with code {result.returncode}")
    return result
