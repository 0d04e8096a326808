"""lockstep commands."""

from lockstep.commands.base import CommandContext, SyncCommand
from lockstep.commands.publish import (
    PublishCommand,
    PublishOptions,
    PublishResult,
    publish,
    resolve_dist_tag,
)
from lockstep.commands.version import (
    VersionCommand,
    VersionOptions,
    VersionResult,
    version,
)

__all__ = [
    # Base
    "CommandContext",
    "SyncCommand",
    # Version
    "VersionCommand",
    "VersionOptions",
    "VersionResult",
    "version",
    # Publish
    "PublishCommand",
    "PublishOptions",
    "PublishResult",
    "publish",
    "resolve_dist_tag",
]
