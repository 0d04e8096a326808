"""Version arithmetic and commit-based bump detection."""

from lockstep.versioning.conventional import (
    Classification,
    ClassifiedCommit,
    CommitKind,
    classify_commit,
    classify_commits,
    determine_bump,
)
from lockstep.versioning.semver import (
    BumpType,
    Version,
    bump_version,
    preserve_operator,
)

__all__ = [
    "BumpType",
    "Classification",
    "ClassifiedCommit",
    "CommitKind",
    "Version",
    "bump_version",
    "classify_commit",
    "classify_commits",
    "determine_bump",
    "preserve_operator",
]
