"""Configuration schema for lockstep.yaml."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class PackageManager(str, Enum):
    """Supported registry clients."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


class VersioningConfig(BaseModel):
    """Commit and tag naming for version bumps.

    Both templates receive ``{version}``.
    """

    tag_format: str = "v{version}"
    commit_message: str = "chore(release): v{version}"
    skip_ci_suffix: str = " [skip ci]"

    @field_validator("tag_format", "commit_message")
    @classmethod
    def _requires_version_placeholder(cls, value: str) -> str:
        if "{version}" not in value:
            raise ValueError("must contain the {version} placeholder")
        return value


class PublishConfig(BaseModel):
    """Defaults for the publish command."""

    access: str = "public"
    latest_tag: str = "latest"

    @field_validator("access")
    @classmethod
    def _known_access(cls, value: str) -> str:
        if value not in ("public", "restricted"):
            raise ValueError("access must be 'public' or 'restricted'")
        return value


class LockstepConfig(BaseModel):
    """Root configuration model.

    Attributes:
        root: Workspace root directory.
        packages_dirs: Directories (relative to root) searched for packages.
        package_manager: Registry client; detected from lock files when unset.
        manifest_name: File name that marks a package directory.
        versioning: Commit and tag templates.
        publish: Publish defaults.
    """

    root: Path = Field(default_factory=Path.cwd)
    packages_dirs: list[str] = Field(default_factory=lambda: ["packages"])
    package_manager: PackageManager | None = None
    manifest_name: str = "package.json"
    versioning: VersioningConfig = Field(default_factory=VersioningConfig)
    publish: PublishConfig = Field(default_factory=PublishConfig)

    @field_validator("packages_dirs")
    @classmethod
    def _non_empty_dirs(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("at least one packages directory is required")
        return value

    def resolve_package_manager(self) -> PackageManager:
        """Return the configured package manager or detect it from lock files."""
        if self.package_manager is not None:
            return self.package_manager
        if (self.root / "pnpm-lock.yaml").exists():
            return PackageManager.PNPM
        if (self.root / "yarn.lock").exists():
            return PackageManager.YARN
        return PackageManager.NPM
