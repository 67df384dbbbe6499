"""Factory classes for adapter instantiation.

Keeps the CLI layer free from direct adapter imports. Imports are lazy so
that commands only load what they use (the picker pulls in prompt_toolkit,
listing does not).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fgit.core.listing import Snapshot
    from fgit.ports.config import ConfigProvider
    from fgit.ports.editor import Editor
    from fgit.ports.vcs import VCS


class ConfigFactory:
    """Factory for creating configuration-related instances."""

    def create_config_provider(self) -> ConfigProvider:
        """Create a TomlConfigProvider instance."""
        from fgit.adapters.config.toml_config_provider import TomlConfigProvider

        return TomlConfigProvider()


class RepositoryFactory:
    """Factory for creating VCS adapters."""

    def create_git_adapter(self, repo_root: Path) -> VCS:
        """Create a GitAdapter instance.

        Raises:
            RuntimeError: If repo_root is not a git repository.
        """
        from fgit.adapters.git_cmd.git_adapter import GitAdapter

        return GitAdapter(repo_root)


class InterfaceFactory:
    """Factory for creating terminal-facing adapters."""

    def create_editor(self, configured: str | None = None) -> Editor:
        """Create a SubprocessEditor honouring $VISUAL/$EDITOR and config."""
        from fgit.adapters.editor import SubprocessEditor

        return SubprocessEditor(configured=configured)

    def create_picker(self, snapshot: Snapshot):
        """Create the full-screen picker for a snapshot."""
        from fgit.adapters.tui.picker_ui import InteractivePickerUI

        return InteractivePickerUI(snapshot)
