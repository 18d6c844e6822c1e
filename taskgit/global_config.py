"""Global configuration management for taskgit.

Handles user-level configuration stored in ~/.taskgit/config.yaml:
- patch_dir: Where scratch patches are written during hunk selection
- diff: Default git diff options for add-diff
- color: Whether hunks are shown with ANSI colors
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from taskgit.git.diff import DiffAlgorithm
from taskgit.hunks.cache import get_default_patch_dir


PATCH_DIR_ENV = "TASKGIT_PATCH_DIR"


class GlobalConfigError(Exception):
    """Raised when there's an error with global configuration."""
    pass


class DiffDefaults(BaseModel):
    """Default git diff options applied by add-diff."""

    ignore_all_space: bool = False
    ignore_blank_lines: bool = False
    ignore_space_at_eol: bool = False
    ignore_space_change: bool = False
    algorithm: Optional[DiffAlgorithm] = None
    unified: Optional[int] = Field(default=None, ge=0)


class TaskgitConfig(BaseModel):
    """Validated contents of ~/.taskgit/config.yaml."""

    patch_dir: Optional[str] = None
    diff: DiffDefaults = Field(default_factory=DiffDefaults)
    color: bool = True


_CONFIG_DIR = Path.home() / ".taskgit"


def get_global_config_dir() -> Path:
    """Get the global taskgit configuration directory.

    Returns:
        Path to ~/.taskgit/
    """
    return _CONFIG_DIR


def ensure_global_config_dir() -> Path:
    """Ensure the global config directory exists.

    Returns:
        Path to ~/.taskgit/
    """
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file_path() -> Path:
    """Get path to config.yaml file.

    Returns:
        Path to ~/.taskgit/config.yaml
    """
    return get_global_config_dir() / "config.yaml"


def load_global_config() -> Dict[str, Any]:
    """Load global configuration from ~/.taskgit/config.yaml.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise GlobalConfigError(f"Invalid config in {config_file}: expected a mapping")
    return config


def save_global_config(config: Dict[str, Any]) -> None:
    """Save global configuration to ~/.taskgit/config.yaml.

    Args:
        config: Configuration dictionary to save.
    """
    ensure_global_config_dir()
    config_file = get_config_file_path()

    try:
        with open(config_file, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        raise GlobalConfigError(f"Failed to save config to {config_file}: {e}")


def get_config() -> TaskgitConfig:
    """Load and validate the global configuration.

    Returns:
        TaskgitConfig with defaults for any missing keys.

    Raises:
        GlobalConfigError: If the file is unreadable or invalid.
    """
    try:
        return TaskgitConfig(**load_global_config())
    except ValidationError as e:
        raise GlobalConfigError(f"Invalid config in {get_config_file_path()}: {e}")


def get_patch_dir() -> Path:
    """Resolve the scratch patch directory.

    Priority: $TASKGIT_PATCH_DIR, then patch_dir in config.yaml, then
    <tempdir>/taskgit/patch.
    """
    env_dir = os.environ.get(PATCH_DIR_ENV)
    if env_dir:
        return Path(env_dir).expanduser()

    configured = get_config().patch_dir
    if configured:
        return Path(configured).expanduser()

    return get_default_patch_dir()


def set_patch_dir(patch_dir: str) -> None:
    """Set the scratch patch directory in global config.

    Args:
        patch_dir: Directory for scratch patches.
    """
    config = load_global_config()
    config["patch_dir"] = patch_dir
    save_global_config(config)
