"""Exception hierarchy for lockstep."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


class LockstepError(Exception):
    """Base exception for all lockstep errors.

    Attributes:
        message: Human readable, single-line description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(LockstepError):
    """Invalid or unreadable lockstep configuration."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)


class ManifestError(LockstepError):
    """A package manifest is missing or cannot be parsed."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)


class InvalidSemverError(LockstepError):
    """A version string is not a strict MAJOR.MINOR.PATCH triple."""

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Not a semver version: {version}")


class InconsistentVersionsError(LockstepError):
    """Workspace packages do not share one version."""

    def __init__(self, versions: Iterable[str]) -> None:
        self.versions = [str(v) for v in versions]
        super().__init__(
            "Lockstep requires all packages have the same version. "
            f"Found: {', '.join(self.versions)}"
        )


class CyclicDependencyError(LockstepError):
    """The workspace dependency graph contains a cycle."""

    def __init__(self, remaining: Iterable[str] = ()) -> None:
        self.remaining = list(remaining)
        message = "Cycle detected in local dependency graph."
        if self.remaining:
            message = f"{message} Unresolved packages: {', '.join(self.remaining)}"
        super().__init__(message)


class MissingTagError(LockstepError):
    """Publish was invoked without a distribution tag."""

    def __init__(self) -> None:
        super().__init__("--tag parameter is required for publish command")


class PackageNotFoundError(LockstepError):
    """A package name does not belong to the workspace."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Package {name} not found in workspace")


class GitError(LockstepError):
    """A git command failed."""

    def __init__(self, message: str, command: str | None = None) -> None:
        self.command = command
        super().__init__(message)


class PublishError(LockstepError):
    """Publishing a package to the registry failed."""

    def __init__(self, message: str, package_name: str | None = None) -> None:
        self.package_name = package_name
        if package_name:
            message = f"Failed to publish {package_name}: {message}"
        super().__init__(message)
