"""lockstep - lockstep versioning for monorepos.

Every package in the workspace shares one version. lockstep provides:
- Workspace discovery and a dependency graph over package manifests
- Dependency-ordered publishing with branch-aware distribution tags
- Explicit or conventional-commit driven version bumps
"""

from lockstep.commands import (
    CommandContext,
    PublishCommand,
    PublishResult,
    VersionCommand,
    VersionResult,
    publish,
    version,
)
from lockstep.config import LockstepConfig, load_config
from lockstep.errors import (
    ConfigurationError,
    CyclicDependencyError,
    GitError,
    InconsistentVersionsError,
    InvalidSemverError,
    LockstepError,
    ManifestError,
    MissingTagError,
    PackageNotFoundError,
    PublishError,
)
from lockstep.versioning import BumpType, Version, bump_version, classify_commits, preserve_operator
from lockstep.workspace import DependencyGraph, PackageRecord, Workspace, topological_sort

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Core
    "Workspace",
    "PackageRecord",
    "DependencyGraph",
    "topological_sort",
    "LockstepConfig",
    "load_config",
    # Versioning
    "BumpType",
    "Version",
    "bump_version",
    "preserve_operator",
    "classify_commits",
    # Commands
    "CommandContext",
    "VersionCommand",
    "VersionResult",
    "PublishCommand",
    "PublishResult",
    "version",
    "publish",
    # Errors
    "LockstepError",
    "ConfigurationError",
    "ManifestError",
    "InvalidSemverError",
    "InconsistentVersionsError",
    "CyclicDependencyError",
    "MissingTagError",
    "PackageNotFoundError",
    "GitError",
    "PublishError",
]
