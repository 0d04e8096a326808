"""Conventional commit classification."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from lockstep.versioning.semver import BumpType

# Examples:
#   feat: add new feature
#   feat(core): scoped feature
FEATURE_PATTERN = re.compile(r"^feat(\(.+\))?:")
#   fix(api): fix bug
#   chore: tidy up
FIX_PATTERN = re.compile(r"^(fix|docs|style|refactor|test|chore)(\(.+\))?:")

BREAKING_MARKERS = ("BREAKING CHANGE", "!:")


class CommitKind(str, Enum):
    """Classification of a single commit subject."""

    BREAKING = "breaking"
    FEATURE = "feature"
    FIX = "fix"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class ClassifiedCommit:
    """A commit subject and the kind it was classified as."""

    subject: str
    kind: CommitKind


@dataclass
class Classification:
    """Aggregate result of scanning commit subjects.

    Attributes:
        bump: Resulting bump level.
        commits: Every non-blank subject that was scanned, in order.
        has_breaking: At least one breaking change was seen.
        has_feature: At least one feature was seen.
        has_fix: At least one fix or maintenance commit was seen.
    """

    bump: BumpType
    commits: list[ClassifiedCommit]
    has_breaking: bool = False
    has_feature: bool = False
    has_fix: bool = False

    @property
    def reason(self) -> str:
        """Short explanation of the chosen bump."""
        if self.has_breaking:
            return "Breaking changes detected"
        if self.has_feature:
            return "New features detected"
        if self.has_fix:
            return "Fixes or maintenance detected"
        if self.commits:
            return "No conventional commits found"
        return "No commits found"


def classify_commit(subject: str) -> CommitKind:
    """Classify one commit subject.

    Checks run in the order breaking, feature, fix; the first match wins.
    """
    if any(marker in subject for marker in BREAKING_MARKERS):
        return CommitKind.BREAKING
    if FEATURE_PATTERN.match(subject):
        return CommitKind.FEATURE
    if FIX_PATTERN.match(subject):
        return CommitKind.FIX
    return CommitKind.OTHER


def classify_commits(subjects: Iterable[str]) -> Classification:
    """Scan commit subjects and derive a bump level for the whole history.

    Args:
        subjects: Commit subject lines, oldest or newest first.

    Returns:
        Classification with the bump level and per-commit kinds. An empty
        history, or one with no conventional commits, yields ``patch``.
    """
    commits = [
        ClassifiedCommit(subject=s, kind=classify_commit(s)) for s in subjects if s.strip()
    ]
    kinds = {c.kind for c in commits}

    has_breaking = CommitKind.BREAKING in kinds
    has_feature = CommitKind.FEATURE in kinds
    has_fix = CommitKind.FIX in kinds

    if has_breaking:
        bump = BumpType.MAJOR
    elif has_feature:
        bump = BumpType.MINOR
    else:
        bump = BumpType.PATCH

    return Classification(
        bump=bump,
        commits=commits,
        has_breaking=has_breaking,
        has_feature=has_feature,
        has_fix=has_fix,
    )


def determine_bump(subjects: Iterable[str]) -> BumpType:
    """Return only the bump level for a sequence of commit subjects."""
    return classify_commits(subjects).bump
