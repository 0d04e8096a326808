"""Package manifest persistence."""

from lockstep.manifest.store import JsonManifestStore, ManifestStore, read_json, write_json

__all__ = ["JsonManifestStore", "ManifestStore", "read_json", "write_json"]
