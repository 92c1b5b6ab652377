"""
Configuration and path management.

Provides the global config file and the standard paths used by the
catalog commands.

Resolution order for the catalog JSON file:
  1. --input command line option (highest priority)
  2. ONLINE_CATALOG environment variable
  3. Global config file (~/.config/online/config.yaml) catalog key
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml

DEFAULT_DATA_DIR = Path("~/.wolm")


@dataclass(frozen=True)
class OnlinePaths:
    """Standard paths for catalog data."""

    config_file: Path
    data_dir: Path

    # Catalog JSON read by the commands (may be None if unconfigured)
    catalog: Path | None

    # Where `catalog dump` writes to by default
    output: Path

    # Backups of overwritten dumps
    backups: Path


def get_global_config_path() -> Path:
    """Return the path to the global config file.

    Respects XDG_CONFIG_HOME if set, otherwise defaults to
    ~/.config/online/config.yaml.

    Returns:
        Path to global config file (may not exist).
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        base = Path(xdg_config_home)
    else:
        base = Path.home() / ".config"
    return base / "online" / "config.yaml"


def load_global_config() -> dict:
    """Load the global configuration.

    Returns:
        Configuration dict, or empty dict if file is missing or invalid.
    """
    config_path = get_global_config_path()
    if not config_path.is_file():
        return {}
    try:
        text = config_path.read_text(encoding="utf-8")
        data = yaml.safe_load(text)
        if isinstance(data, dict):
            return data
        return {}
    except (OSError, yaml.YAMLError):
        return {}


def _expand(value: str | Path) -> Path:
    return Path(value).expanduser()


def find_catalog_path(explicit: str | Path | None = None) -> Path:
    """Find the catalog JSON file using 3-tier resolution.

    Args:
        explicit: Path given on the command line, if any

    Returns:
        Path to the catalog JSON file

    Raises:
        FileNotFoundError: If no catalog is configured by any method
    """
    if explicit:
        return _expand(explicit)

    env_catalog = os.environ.get("ONLINE_CATALOG")
    if env_catalog:
        return _expand(env_catalog)

    catalog = load_global_config().get("catalog")
    if catalog:
        return _expand(catalog)

    raise FileNotFoundError(
        "No catalog specified. Pass --input, set ONLINE_CATALOG, or configure "
        f"'catalog' in {get_global_config_path()}."
    )


def get_paths() -> OnlinePaths:
    """Get all standard paths.

    Returns:
        OnlinePaths dataclass with all paths
    """
    config = load_global_config()
    data_dir = _expand(config.get("data_dir", DEFAULT_DATA_DIR))

    try:
        catalog: Path | None = find_catalog_path()
    except FileNotFoundError:
        catalog = None

    return OnlinePaths(
        config_file=get_global_config_path(),
        data_dir=data_dir,
        catalog=catalog,
        output=_expand(config.get("output", data_dir / "online.cache.json")),
        backups=_expand(config.get("backups", data_dir / "backups")),
    )
