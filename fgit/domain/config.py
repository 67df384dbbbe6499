"""Config domain models for fgit.

Configuration lives in ~/.config/fgit/config.toml (global) and
<repo>/.fgit.toml (local). This module defines the domain models that
represent validated configuration state.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Literal

from fgit.domain.exceptions import ConfigurationError
from fgit.domain.value_objects import DEFAULT_ALPHABET, CodeAlphabet

DEFAULT_EDITOR = "vim"


@dataclass(frozen=True)
class IdsConfig:
    """Configuration for file ID generation.

    Attributes:
        alphabet: Symbols used for IDs, in digit order. Repeated symbols
                  are dropped; at least 2 distinct symbols are required.
        max_length: Number of path-fingerprint digits collision refinement
                    uses before continuing with a second fingerprint.

    Raises:
        ConfigurationError: If the alphabet is unusable or max_length < 1.
    """

    alphabet: str = DEFAULT_ALPHABET
    max_length: int = 12

    def __post_init__(self) -> None:
        """Validate ids config after initialization."""
        # Raises ConfigurationError for unusable alphabets
        CodeAlphabet.from_string(self.alphabet)
        if self.max_length < 1:
            raise ConfigurationError(
                f"max_length must be at least 1, got {self.max_length}"
            )

    @property
    def code_alphabet(self) -> CodeAlphabet:
        """The validated alphabet."""
        return CodeAlphabet.from_string(self.alphabet)


@dataclass(frozen=True)
class EditorConfig:
    """Configuration for the external editor.

    Attributes:
        command: Editor used when neither $VISUAL nor $EDITOR is set.
    """

    command: str = DEFAULT_EDITOR

    def __post_init__(self) -> None:
        """Validate editor config after initialization."""
        if not self.command.strip():
            raise ValueError("editor command cannot be empty")


@dataclass(frozen=True)
class WatchConfig:
    """Configuration for watch mode.

    Attributes:
        interval: Seconds between refreshes.
    """

    interval: float = 2.0

    def __post_init__(self) -> None:
        """Validate watch config after initialization."""
        if self.interval <= 0:
            raise ValueError(f"interval must be positive, got {self.interval}")


@dataclass(frozen=True)
class DisplayConfig:
    """Configuration for output display.

    Attributes:
        color_scheme: "auto" (colour on terminals), "always", or "never".
        syntax_highlighting: Highlight code in inline diffs.
    """

    color_scheme: Literal["auto", "always", "never"] = "auto"
    syntax_highlighting: bool = True

    def __post_init__(self) -> None:
        """Validate display config after initialization."""
        if self.color_scheme not in ("auto", "always", "never"):
            raise ValueError(
                f"color_scheme must be auto, always or never, got {self.color_scheme!r}"
            )

    @property
    def color(self) -> bool | None:
        """Value for click's ``color`` argument (None means auto-detect)."""
        return {"auto": None, "always": True, "never": False}[self.color_scheme]


@dataclass(frozen=True)
class FgitConfig:
    """Complete fgit configuration.

    Attributes:
        ids: ID generation configuration
        editor: Editor configuration
        watch: Watch mode configuration
        display: Display configuration
    """

    ids: IdsConfig = field(default_factory=IdsConfig)
    editor: EditorConfig = field(default_factory=EditorConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    @staticmethod
    def default() -> "FgitConfig":
        """Create a config with all default values."""
        return FgitConfig(
            ids=IdsConfig(),
            editor=EditorConfig(),
            watch=WatchConfig(),
            display=DisplayConfig(),
        )

    @staticmethod
    def from_partial(base: "FgitConfig", data: dict[str, Any]) -> "FgitConfig":
        """Overlay raw config data onto an existing config.

        Only keys present in ``data`` change; every section is re-validated.

        Args:
            base: Config to start from.
            data: Parsed TOML data (section name -> key/value table).

        Returns:
            New FgitConfig with overrides applied.

        Raises:
            ValueError: If a section is not a table, a key is unknown, or a
                value fails validation.
            ConfigurationError: If the resulting ID settings are unusable.
        """
        updates: dict[str, Any] = {}
        for section in fields(base):
            section_data = data.get(section.name)
            if section_data is None:
                continue
            if not isinstance(section_data, dict):
                raise ValueError(f"[{section.name}] must be a table")

            current = getattr(base, section.name)
            known = {f.name for f in fields(current)}
            unknown = set(section_data) - known
            if unknown:
                raise ValueError(
                    f"Unknown key(s) in [{section.name}]: {', '.join(sorted(unknown))}"
                )
            try:
                updates[section.name] = replace(current, **section_data)
            except TypeError as e:
                raise ValueError(f"Invalid value in [{section.name}]: {e}") from e

        return replace(base, **updates)
