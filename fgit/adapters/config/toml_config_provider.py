"""TOML-based configuration provider.

Config loading priority (highest to lowest):
1. Local: <repo>/.fgit.toml (repo-specific)
2. Global: ~/.config/fgit/config.toml (user defaults)
3. Built-in defaults
"""

import logging
from pathlib import Path

from fgit.domain.config import FgitConfig
from fgit.shared.config_io import (
    get_global_config_path,
    get_local_config_path,
    load_config_data,
)

logger = logging.getLogger(__name__)


class TomlConfigProvider:
    """Configuration provider that loads from TOML files.

    Implements config cascade:
    1. Load global config if present
    2. Load local config if present
    3. Local values override global values (section-level merge)
    4. Missing values fall back to built-in defaults

    Malformed files are skipped with a warning. An unusable ID alphabet is
    not: ConfigurationError propagates, since every ID depends on it.
    """

    def __init__(self, global_path: Path | None = None) -> None:
        """Initialize the provider.

        Args:
            global_path: Override for the global config location.
        """
        self._global_path = global_path

    def _apply(self, config: FgitConfig, path: Path, label: str) -> FgitConfig:
        if not path.exists():
            return config
        try:
            data = load_config_data(path)
            merged = FgitConfig.from_partial(config, data)
        except (FileNotFoundError, ValueError) as e:
            logger.warning(
                "Failed to parse %s config at %s: %s. Ignoring it.", label, path, e
            )
            return config
        logger.debug("Loaded %s config from %s", label, path)
        return merged

    def load(self, repo_root: Path | None) -> FgitConfig:
        """Load configuration with global fallback.

        Args:
            repo_root: Work tree root holding .fgit.toml, or None to skip
                the local layer.

        Returns:
            FgitConfig with merged global/local values or defaults.

        Raises:
            ConfigurationError: If the resulting ID alphabet is unusable.
        """
        config = FgitConfig.default()
        config = self._apply(config, self._global_path or get_global_config_path(), "global")
        if repo_root is not None:
            config = self._apply(config, get_local_config_path(repo_root), "local")
        return config
