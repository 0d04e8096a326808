"""Package record model."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class DependencyField(str, Enum):
    """Manifest keys holding dependency maps, in scan order."""

    DEPENDENCIES = "dependencies"
    DEV_DEPENDENCIES = "devDependencies"
    PEER_DEPENDENCIES = "peerDependencies"
    OPTIONAL_DEPENDENCIES = "optionalDependencies"

    @property
    def attribute(self) -> str:
        """Name of the matching PackageRecord attribute."""
        return _FIELD_ATTRIBUTES[self]


_FIELD_ATTRIBUTES = {
    DependencyField.DEPENDENCIES: "dependencies",
    DependencyField.DEV_DEPENDENCIES: "dev_dependencies",
    DependencyField.PEER_DEPENDENCIES: "peer_dependencies",
    DependencyField.OPTIONAL_DEPENDENCIES: "optional_dependencies",
}


@dataclass
class PackageRecord:
    """A workspace package as described by its manifest.

    Attributes:
        name: Package name, unique within the workspace.
        version: Version string as found in the manifest.
        directory: Package directory.
        dependencies: Runtime dependency ranges.
        dev_dependencies: Development dependency ranges.
        peer_dependencies: Peer dependency ranges.
        optional_dependencies: Optional dependency ranges.
        extra: Every other manifest field, written back unchanged.
        key_order: Manifest key order at load time.
    """

    name: str
    version: str
    directory: Path
    dependencies: dict[str, Any] = field(default_factory=dict)
    dev_dependencies: dict[str, Any] = field(default_factory=dict)
    peer_dependencies: dict[str, Any] = field(default_factory=dict)
    optional_dependencies: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)
    key_order: list[str] = field(default_factory=list)

    @classmethod
    def from_manifest(cls, data: dict[str, Any], directory: Path) -> PackageRecord:
        """Build a record from parsed manifest data.

        A dependency field that is not an object is not treated as
        dependencies; it is kept verbatim alongside the other unknown keys.
        """
        deps = {
            f.attribute: dict(data[f.value])
            for f in DependencyField
            if isinstance(data.get(f.value), dict)
        }
        typed = {"name", "version", *(f.value for f in DependencyField if f.attribute in deps)}
        return cls(
            name=data.get("name", ""),
            version=data.get("version", ""),
            directory=directory,
            extra={k: v for k, v in data.items() if k not in typed},
            key_order=list(data),
            **deps,
        )

    def dependency_map(self, dep_field: DependencyField) -> dict[str, Any]:
        """Return the dependency mapping for a manifest field."""
        return getattr(self, dep_field.attribute)

    def iter_dependencies(self) -> Iterator[tuple[DependencyField, str, Any]]:
        """Yield ``(field, name, range)`` for every declared dependency."""
        for dep_field in DependencyField:
            for dep_name, dep_range in self.dependency_map(dep_field).items():
                yield dep_field, dep_name, dep_range

    def to_manifest(self) -> dict[str, Any]:
        """Serialize back to manifest data, keeping the original key order.

        Empty dependency maps that were absent at load time stay absent.
        """
        known: dict[str, Any] = {"name": self.name, "version": self.version}
        for dep_field in DependencyField:
            deps = self.dependency_map(dep_field)
            if deps or (dep_field.value in self.key_order and dep_field.value not in self.extra):
                known[dep_field.value] = deps

        data: dict[str, Any] = {}
        for key in self.key_order:
            if key in known:
                data[key] = known.pop(key)
            elif key in self.extra:
                data[key] = self.extra[key]
        data.update(known)
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data
