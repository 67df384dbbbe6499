"""Configuration provider port.

Defines the interface for loading and accessing application configuration.
"""

from pathlib import Path
from typing import Protocol

from fgit.domain.config import FgitConfig


class ConfigProvider(Protocol):
    """Protocol for loading and providing configuration."""

    def load(self, repo_root: Path | None) -> FgitConfig:
        """Load configuration for a repository.

        Args:
            repo_root: Repository root holding an optional .fgit.toml, or
                None outside a repository (global config only).

        Returns:
            FgitConfig instance with loaded or default values

        Raises:
            ConfigurationError: If the configured ID settings are unusable.

        Note:
            Implementations should fall back to defaults if a config file
            is missing or malformed.
        """
        ...
