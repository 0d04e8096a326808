"""Workspace: packages plus their dependency graph."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from lockstep.errors import InconsistentVersionsError, PackageNotFoundError
from lockstep.workspace.graph import DependencyGraph, topological_sort
from lockstep.workspace.package import PackageRecord


@dataclass
class Workspace:
    """A snapshot of every package in the monorepo.

    Built fresh for each operation and never updated incrementally.

    Attributes:
        packages: Package records in discovery order.
        by_name: Name-indexed lookup.
        graph: Dependency graph (dependency -> dependents).
    """

    packages: list[PackageRecord]
    by_name: dict[str, PackageRecord] = field(default_factory=dict)
    graph: DependencyGraph = field(default_factory=DependencyGraph)

    @classmethod
    def build(cls, packages: Iterable[PackageRecord]) -> Workspace:
        """Create a workspace from package records."""
        packages = list(packages)
        return cls(
            packages=packages,
            by_name={pkg.name: pkg for pkg in packages},
            graph=DependencyGraph.build(packages),
        )

    @property
    def names(self) -> set[str]:
        """Names of all workspace members."""
        return set(self.by_name)

    def get_package(self, name: str) -> PackageRecord:
        """Look up a package by name.

        Raises:
            PackageNotFoundError: If no such package exists.
        """
        try:
            return self.by_name[name]
        except KeyError:
            raise PackageNotFoundError(name) from None

    def shared_version(self) -> str:
        """Return the single version all packages share.

        Raises:
            InconsistentVersionsError: If packages disagree, or there are none.
        """
        versions = list(dict.fromkeys(pkg.version for pkg in self.packages))
        if len(versions) != 1:
            raise InconsistentVersionsError(versions)
        return versions[0]

    def publish_order(self) -> list[str]:
        """Return package names in dependency order."""
        return topological_sort(self.packages, self.graph)
