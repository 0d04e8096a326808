"""Registry publisher port and its package-manager implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from lockstep.config.schema import PackageManager
from lockstep.errors import PublishError
from lockstep.registry.client import build_publish_args, run_package_manager


class RegistryPublisher(Protocol):
    """Publishes a single package directory to a registry."""

    def publish(self, directory: Path, *, access: str, dist_tag: str, dry_run: bool) -> None:
        """Publish one package. Raises on failure."""
        ...


class PackageManagerPublisher:
    """RegistryPublisher that shells out to npm or pnpm.

    Attributes:
        manager: Package manager used for every publish.
    """

    def __init__(self, manager: PackageManager = PackageManager.NPM) -> None:
        self.manager = manager

    def publish(self, directory: Path, *, access: str, dist_tag: str, dry_run: bool) -> None:
        args = build_publish_args(access, dist_tag, dry_run=dry_run)
        try:
            run_package_manager(self.manager, args, cwd=directory)
        except PublishError as e:
            raise PublishError(f"{e.message} in {directory}") from e
