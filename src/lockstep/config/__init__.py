"""Configuration loading and schema."""

from lockstep.config.loader import CONFIG_FILENAME, find_config, load_config
from lockstep.config.schema import (
    LockstepConfig,
    PackageManager,
    PublishConfig,
    VersioningConfig,
)

__all__ = [
    "CONFIG_FILENAME",
    "LockstepConfig",
    "PackageManager",
    "PublishConfig",
    "VersioningConfig",
    "find_config",
    "load_config",
]
