"""Workspace dependency graph and topological ordering."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence

from lockstep.errors import CyclicDependencyError
from lockstep.workspace.package import PackageRecord


class DependencyGraph:
    """Dependency graph over workspace packages.

    Edges point from a dependency to its dependents, so a forward walk
    emits dependencies before the packages that consume them.

    Attributes:
        dependents: Mapping of package name to the names depending on it.
    """

    def __init__(self, dependents: dict[str, list[str]] | None = None) -> None:
        self.dependents: dict[str, list[str]] = dependents or {}

    @classmethod
    def build(cls, packages: Iterable[PackageRecord]) -> DependencyGraph:
        """Build a graph from package records.

        An edge ``B -> A`` is recorded when A declares B in any dependency
        field and B is a workspace member. External dependencies,
        self-references and non-string ranges are skipped.

        Args:
            packages: All workspace packages.

        Returns:
            The dependency graph.
        """
        packages = list(packages)
        dependents: dict[str, list[str]] = {pkg.name: [] for pkg in packages}

        for pkg in packages:
            for _field, dep_name, dep_range in pkg.iter_dependencies():
                if dep_name == pkg.name or dep_name not in dependents:
                    continue
                if not isinstance(dep_range, str):
                    continue
                dependents[dep_name].append(pkg.name)

        return cls(dependents)

    def get_dependents(self, name: str) -> list[str]:
        """Get packages that directly depend on ``name``."""
        return list(self.dependents.get(name, []))

    def get_dependencies(self, name: str) -> list[str]:
        """Get workspace packages that ``name`` directly depends on."""
        return [dep for dep, users in self.dependents.items() if name in users]

    def in_degrees(self, names: Iterable[str]) -> dict[str, int]:
        """Count incoming edges per package by walking the dependent lists."""
        degrees = {name: 0 for name in names}
        for users in self.dependents.values():
            for user in users:
                degrees[user] = degrees.get(user, 0) + 1
        return degrees

    def __contains__(self, name: object) -> bool:
        return name in self.dependents

    def __len__(self) -> int:
        return len(self.dependents)


def topological_sort(packages: Sequence[PackageRecord], graph: DependencyGraph) -> list[str]:
    """Order packages so every package follows its workspace dependencies.

    Kahn's algorithm. Ties between independent packages keep the input order.

    Args:
        packages: Workspace packages; their order seeds the queue.
        graph: Dependency graph built from the same packages.

    Returns:
        Package names, dependencies first.

    Raises:
        CyclicDependencyError: If not every package could be ordered.
    """
    names = [pkg.name for pkg in packages]
    degrees = graph.in_degrees(names)

    queue = deque(name for name in names if degrees.get(name, 0) == 0)
    order: list[str] = []

    while queue:
        name = queue.popleft()
        order.append(name)
        for user in graph.dependents.get(name, []):
            degrees[user] -= 1
            if degrees[user] == 0:
                queue.append(user)

    if len(order) < len(names):
        placed = set(order)
        raise CyclicDependencyError([name for name in names if name not in placed])

    return order
