"""Loading lockstep.yaml from disk."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import ValidationError

from lockstep.config.schema import LockstepConfig
from lockstep.errors import ConfigurationError

CONFIG_FILENAME = "lockstep.yaml"


def find_config(start: Path | None = None) -> Path | None:
    """Search upwards from ``start`` for a lockstep.yaml file.

    Args:
        start: Directory to begin from. Defaults to the current directory.

    Returns:
        Path to the config file, or None if none was found.
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(root: Path | None = None) -> LockstepConfig:
    """Load configuration for a workspace.

    A missing config file is not an error: defaults are returned with
    ``root`` set to the given directory.

    Args:
        root: Workspace root. Defaults to the current directory.

    Returns:
        Validated configuration.

    Raises:
        ConfigurationError: If the file is not valid YAML or fails validation.
    """
    root = (root or Path.cwd()).resolve()
    path = root / CONFIG_FILENAME

    data: dict = {}
    if path.is_file():
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML: {e}", path=path) from e
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ConfigurationError("Configuration must be a mapping", path=path)
        data = loaded

    data.setdefault("root", root)
    try:
        config = LockstepConfig.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ConfigurationError(f"Invalid config at '{location}': {first['msg']}", path=path) from e

    if not config.root.is_absolute():
        config.root = (root / config.root).resolve()
    return config
