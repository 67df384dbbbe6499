"""Configuration I/O utilities for reading and writing TOML config files.

This module handles serialization/deserialization of FgitConfig to/from TOML format.
"""

import os
import platform
import tomllib
from dataclasses import asdict
from pathlib import Path
from typing import Any

import tomli_w

from fgit.domain.config import FgitConfig

LOCAL_CONFIG_NAME = ".fgit.toml"


def get_global_config_path() -> Path:
    """Get the path to the global config file.

    The location is platform-dependent:
    - Linux/macOS: $XDG_CONFIG_HOME/fgit/config.toml or ~/.config/fgit/config.toml
    - Windows: %APPDATA%/fgit/config.toml

    Returns:
        Path to the global config file (may not exist)
    """
    if platform.system() == "Windows":
        appdata = os.environ.get("APPDATA", "")
        if appdata:
            return Path(appdata) / "fgit" / "config.toml"
        return Path.home() / ".config" / "fgit" / "config.toml"

    xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg_config:
        return Path(xdg_config) / "fgit" / "config.toml"
    return Path.home() / ".config" / "fgit" / "config.toml"


def get_local_config_path(repo_root: Path) -> Path:
    """Get the path to a repository's local config file (may not exist)."""
    return repo_root / LOCAL_CONFIG_NAME


def load_config_data(path: Path) -> dict[str, Any]:
    """Load raw TOML data from a config file.

    Args:
        path: Path to a TOML config file

    Returns:
        Dictionary with parsed TOML data

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config file is malformed
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Invalid TOML in config file: {e}") from e


def config_to_data(config: FgitConfig) -> dict[str, Any]:
    """Convert a config to plain TOML-serializable data (section -> table)."""
    return asdict(config)


def dump_config(config: FgitConfig) -> str:
    """Render a config as TOML text."""
    return tomli_w.dumps(config_to_data(config))


def save_config(config: FgitConfig, path: Path) -> None:
    """Save configuration to a TOML file.

    Args:
        config: FgitConfig to save
        path: Destination path
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as f:
        tomli_w.dump(config_to_data(config), f)


def create_default_config_file(path: Path) -> None:
    """Create a default config file with comments.

    Args:
        path: Destination path
    """
    defaults = FgitConfig.default()
    template = f"""\
# fgit configuration
# Created by: f config init

[ids]
# Symbols used for file IDs, in digit order (at least 2 distinct symbols).
# Home-row keys are the easiest to type. Changing this changes every ID.
alphabet = "{defaults.ids.alphabet}"

# Fingerprint digits used before colliding paths switch to a second fingerprint
max_length = {defaults.ids.max_length}

[editor]
# Used when neither $VISUAL nor $EDITOR is set
command = "{defaults.editor.command}"

[watch]
# Seconds between refreshes in 'f watch'
interval = {defaults.watch.interval}

[display]
# "auto" (color on terminals), "always" or "never"
color_scheme = "{defaults.display.color_scheme}"

# Syntax-highlight code in inline diffs
syntax_highlighting = {str(defaults.display.syntax_highlighting).lower()}
"""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(template, encoding="utf-8")
