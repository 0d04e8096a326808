"""Reading and writing package manifests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol

from lockstep.errors import ManifestError, PackageNotFoundError
from lockstep.workspace.package import PackageRecord


class ManifestStore(Protocol):
    """Source and sink of package records."""

    def discover(self) -> list[PackageRecord]:
        """Return every package record in the workspace."""
        ...

    def read(self, name: str) -> PackageRecord:
        """Return the record for one package."""
        ...

    def write(self, record: PackageRecord) -> None:
        """Persist a record."""
        ...

    def read_root(self) -> dict[str, Any] | None:
        """Return the aggregate root manifest, if there is one."""
        ...

    def write_root(self, data: dict[str, Any]) -> None:
        """Persist the aggregate root manifest."""
        ...


def read_json(path: Path) -> dict[str, Any]:
    """Read a JSON manifest.

    Raises:
        ManifestError: If the file is missing, unparsable or not an object.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ManifestError("Manifest not found", path=path) from e
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON: {e.msg} at line {e.lineno}", path=path) from e
    if not isinstance(data, dict):
        raise ManifestError("Manifest must be a JSON object", path=path)
    return data


def write_json(path: Path, data: dict[str, Any]) -> None:
    """Write a manifest as 2-space indented JSON with a trailing newline."""
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


class JsonManifestStore:
    """Manifest store backed by ``package.json`` files on disk.

    Attributes:
        root: Workspace root.
        packages_dirs: Directories under root that are searched for packages.
        manifest_name: File name identifying a package directory.
    """

    def __init__(
        self,
        root: Path,
        packages_dirs: list[str] | None = None,
        manifest_name: str = "package.json",
    ) -> None:
        self.root = root
        self.packages_dirs = packages_dirs or ["packages"]
        self.manifest_name = manifest_name
        self._paths: dict[str, Path] = {}

    def find_package_dirs(self) -> list[Path]:
        """Recursively find directories holding a manifest.

        Search continues below a package directory, so nested packages are
        found as well. Entries are visited in sorted order.
        """
        found: list[Path] = []

        def walk(directory: Path) -> None:
            for entry in sorted(directory.iterdir()):
                if not entry.is_dir() or entry.name == "node_modules":
                    continue
                if (entry / self.manifest_name).is_file():
                    found.append(entry)
                walk(entry)

        for base in self.packages_dirs:
            base_path = self.root / base
            if base_path.is_dir():
                walk(base_path)
        return found

    def discover(self) -> list[PackageRecord]:
        """Load every package record under the configured directories."""
        records = []
        self._paths = {}
        for directory in self.find_package_dirs():
            path = directory / self.manifest_name
            record = PackageRecord.from_manifest(read_json(path), directory)
            if not record.name:
                raise ManifestError("Manifest has no name", path=path)
            self._paths[record.name] = path
            records.append(record)
        return records

    def read(self, name: str) -> PackageRecord:
        """Read one package record by name.

        Raises:
            PackageNotFoundError: If the package is not in the workspace.
        """
        if name not in self._paths:
            self.discover()
        if name not in self._paths:
            raise PackageNotFoundError(name)
        path = self._paths[name]
        return PackageRecord.from_manifest(read_json(path), path.parent)

    def write(self, record: PackageRecord) -> None:
        """Write a record back to its manifest file."""
        write_json(record.directory / self.manifest_name, record.to_manifest())

    @property
    def root_manifest_path(self) -> Path:
        """Path of the aggregate manifest at the workspace root."""
        return self.root / self.manifest_name

    def read_root(self) -> dict[str, Any] | None:
        """Read the root manifest, or None when the workspace has none."""
        if not self.root_manifest_path.is_file():
            return None
        return read_json(self.root_manifest_path)

    def write_root(self, data: dict[str, Any]) -> None:
        """Write the root manifest."""
        write_json(self.root_manifest_path, data)
