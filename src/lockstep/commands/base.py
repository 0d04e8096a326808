"""Base command infrastructure."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

from lockstep.config import LockstepConfig
from lockstep.git import GitVersionControl, VersionControl
from lockstep.manifest import JsonManifestStore, ManifestStore
from lockstep.registry import PackageManagerPublisher, RegistryPublisher
from lockstep.workspace import Workspace

TResult = TypeVar("TResult")


@dataclass
class CommandContext:
    """Context passed to all commands.

    Attributes:
        config: Workspace configuration.
        manifests: Source and sink of package records.
        vcs: Version-control collaborator.
        publisher: Registry collaborator.
    """

    config: LockstepConfig
    manifests: ManifestStore
    vcs: VersionControl
    publisher: RegistryPublisher

    @classmethod
    def from_config(cls, config: LockstepConfig) -> CommandContext:
        """Wire the default on-disk, git and package-manager collaborators."""
        return cls(
            config=config,
            manifests=JsonManifestStore(
                config.root,
                packages_dirs=config.packages_dirs,
                manifest_name=config.manifest_name,
            ),
            vcs=GitVersionControl(config.root),
            publisher=PackageManagerPublisher(config.resolve_package_manager()),
        )

    def build_workspace(self) -> Workspace:
        """Discover packages and build a fresh workspace."""
        return Workspace.build(self.manifests.discover())


class SyncCommand(ABC, Generic[TResult]):
    """Base class for lockstep commands.

    Commands run their steps in order and stop at the first error; effects
    of steps that already ran are left in place.
    """

    def __init__(self, context: CommandContext) -> None:
        """Initialize command.

        Args:
            context: Command context.
        """
        self.context = context
        self.config = context.config

    @abstractmethod
    def execute(self) -> TResult:
        """Execute the command.

        Returns:
            Command-specific result.
        """
        ...
