"""Shared test fixtures for lockstep tests."""

from __future__ import annotations

import json
import shutil
import subprocess
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

from lockstep.commands import CommandContext
from lockstep.config import LockstepConfig
from lockstep.errors import GitError, PackageNotFoundError, PublishError
from lockstep.manifest import JsonManifestStore
from lockstep.workspace import PackageRecord

# Load .env from project root (doesn't override existing env vars)
load_dotenv(Path(__file__).parent.parent / ".env")


def write_manifest(directory: Path, data: dict[str, Any]) -> Path:
    """Write a package.json into ``directory``, creating it if needed."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    path.write_text(json.dumps(data, indent=2) + "\n")
    return path


def make_record(
    name: str,
    version: str = "1.0.0",
    *,
    dependencies: dict[str, Any] | None = None,
    dev_dependencies: dict[str, Any] | None = None,
    peer_dependencies: dict[str, Any] | None = None,
    optional_dependencies: dict[str, Any] | None = None,
) -> PackageRecord:
    """Build an in-memory package record."""
    return PackageRecord(
        name=name,
        version=version,
        directory=Path("/ws/packages") / name,
        dependencies=dict(dependencies or {}),
        dev_dependencies=dict(dev_dependencies or {}),
        peer_dependencies=dict(peer_dependencies or {}),
        optional_dependencies=dict(optional_dependencies or {}),
    )


class InMemoryManifestStore:
    """Manifest store holding records in a dict."""

    def __init__(
        self,
        records: list[PackageRecord],
        root: dict[str, Any] | None = None,
    ) -> None:
        self.records = {r.name: r for r in records}
        self.root = root
        self.writes: list[str] = []

    def discover(self) -> list[PackageRecord]:
        return list(self.records.values())

    def read(self, name: str) -> PackageRecord:
        if name not in self.records:
            raise PackageNotFoundError(name)
        return self.records[name]

    def write(self, record: PackageRecord) -> None:
        self.records[record.name] = record
        self.writes.append(record.name)

    def read_root(self) -> dict[str, Any] | None:
        return None if self.root is None else dict(self.root)

    def write_root(self, data: dict[str, Any]) -> None:
        self.root = data
        self.writes.append("<root>")


class FakeVersionControl:
    """Version control that records calls instead of running git."""

    def __init__(
        self,
        *,
        marker: str | None = "v1.0.0",
        subjects: list[str] | None = None,
        changed: list[str] | None = None,
        branch: str = "main",
        fail_on: str | None = None,
    ) -> None:
        self.marker = marker
        self.subjects = subjects or []
        self.changed = changed if changed is not None else ["packages/pkg-a/index.js"]
        self.branch = branch
        self.fail_on = fail_on
        self.calls: list[tuple[str, ...]] = []

    def _record(self, *call: str) -> None:
        self.calls.append(call)
        if call[0] == self.fail_on:
            raise GitError(f"git {call[0]} failed", command=f"git {call[0]}")

    def last_release_marker(self) -> str | None:
        return self.marker

    def changed_file_names(self, since: str) -> list[str]:
        return list(self.changed)

    def commit_subjects_since(self, marker: str) -> list[str]:
        if self.fail_on == "log":
            raise GitError("fatal: bad revision", command=f"git log {marker}..HEAD")
        return list(self.subjects)

    def current_branch(self) -> str:
        return self.branch

    def stage_all(self) -> None:
        self._record("stage_all")

    def commit(self, message: str) -> None:
        self._record("commit", message)

    def tag(self, name: str) -> None:
        self._record("tag", name)

    def push_with_tags(self) -> None:
        self._record("push_with_tags")


class FakePublisher:
    """Registry publisher that records each publish."""

    def __init__(self, fail_for: str | None = None) -> None:
        self.fail_for = fail_for
        self.calls: list[dict[str, Any]] = []

    def publish(self, directory: Path, *, access: str, dist_tag: str, dry_run: bool) -> None:
        if directory.name == self.fail_for:
            raise PublishError("registry rejected the package")
        self.calls.append(
            {"directory": directory, "access": access, "dist_tag": dist_tag, "dry_run": dry_run}
        )

    @property
    def published(self) -> list[str]:
        return [call["directory"].name for call in self.calls]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def chain_records() -> list[PackageRecord]:
    """pkg-a -> pkg-b -> pkg-c, all at 1.0.0."""
    return [
        make_record(
            "pkg-a",
            dependencies={"pkg-b": "^1.0.0", "lodash": "^4.17.21"},
        ),
        make_record("pkg-b", dependencies={"pkg-c": "~1.0.0"}),
        make_record("pkg-c"),
    ]


@pytest.fixture
def memory_store(chain_records: list[PackageRecord]) -> InMemoryManifestStore:
    return InMemoryManifestStore(chain_records)


@pytest.fixture
def vcs() -> FakeVersionControl:
    return FakeVersionControl()


@pytest.fixture
def publisher() -> FakePublisher:
    return FakePublisher()


@pytest.fixture
def context(
    memory_store: InMemoryManifestStore,
    vcs: FakeVersionControl,
    publisher: FakePublisher,
    temp_dir: Path,
) -> CommandContext:
    """Command context wired to in-memory collaborators."""
    return CommandContext(
        config=LockstepConfig(root=temp_dir),
        manifests=memory_store,
        vcs=vcs,
        publisher=publisher,
    )


@pytest.fixture
def workspace_dir(temp_dir: Path) -> Path:
    """Create a sample workspace: pkg-a -> pkg-b -> pkg-c, all at 1.0.0."""
    write_manifest(
        temp_dir,
        {"name": "monorepo", "version": "1.0.0", "private": True, "workspaces": ["packages/*"]},
    )
    packages = temp_dir / "packages"
    write_manifest(
        packages / "pkg-a",
        {
            "name": "pkg-a",
            "version": "1.0.0",
            "description": "Package A",
            "main": "index.js",
            "dependencies": {"pkg-b": "^1.0.0", "lodash": "^4.17.21"},
        },
    )
    write_manifest(
        packages / "pkg-b",
        {
            "name": "pkg-b",
            "version": "1.0.0",
            "dependencies": {"pkg-c": "~1.0.0"},
            "devDependencies": {"typescript": "^5.4.0"},
        },
    )
    write_manifest(packages / "pkg-c", {"name": "pkg-c", "version": "1.0.0"})
    return temp_dir


@pytest.fixture
def store(workspace_dir: Path) -> JsonManifestStore:
    return JsonManifestStore(workspace_dir)


def run_git(args: list[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    """Run a git command for test setup."""
    return subprocess.run(["git", *args], cwd=cwd, capture_output=True, text=True, check=True)


@pytest.fixture
def git_workspace(workspace_dir: Path) -> Path:
    """Create a workspace with git initialized and one commit on main."""
    if not shutil.which("git"):
        pytest.skip("git not found")

    run_git(["init", "-q"], workspace_dir)
    run_git(["symbolic-ref", "HEAD", "refs/heads/main"], workspace_dir)
    run_git(["config", "user.email", "test@example.com"], workspace_dir)
    run_git(["config", "user.name", "Test User"], workspace_dir)
    run_git(["config", "commit.gpgsign", "false"], workspace_dir)
    run_git(["config", "tag.gpgsign", "false"], workspace_dir)
    run_git(["add", "-A"], workspace_dir)
    run_git(["commit", "-q", "-m", "chore: initial commit"], workspace_dir)
    return workspace_dir


@pytest.fixture
def record_factory():
    """Factory for in-memory package records."""
    return make_record


@pytest.fixture
def manifest_writer():
    """Helper writing package.json files."""
    return write_manifest
