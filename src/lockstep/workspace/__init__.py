"""Workspace model and dependency graph."""

from lockstep.workspace.graph import DependencyGraph, topological_sort
from lockstep.workspace.package import DependencyField, PackageRecord
from lockstep.workspace.workspace import Workspace

__all__ = [
    "DependencyField",
    "DependencyGraph",
    "PackageRecord",
    "Workspace",
    "topological_sort",
]
