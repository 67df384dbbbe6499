"""Domain value objects with validation.

Value objects that validate at construction time, so an invalid alphabet
can never reach the code assigner.
"""

from dataclasses import dataclass

from fgit.domain.exceptions import ConfigurationError

DEFAULT_ALPHABET = "dfghklsa"

# Width of a path fingerprint in bits (xxh64)
FINGERPRINT_BITS = 64


@dataclass(frozen=True)
class CodeAlphabet:
    """Ordered set of symbols used to render fingerprints as codes.

    Symbol order defines the digit-to-symbol mapping: digit 0 renders as
    ``symbols[0]`` and so on. Changing the alphabet changes every code.

    Attributes:
        symbols: Distinct single-character symbols, in digit order.

    Raises:
        ConfigurationError: If fewer than 2 symbols are given, a symbol is
            duplicated, not a single character, or whitespace.
    """

    symbols: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate symbols."""
        if len(self.symbols) < 2:
            raise ConfigurationError(
                f"ID alphabet needs at least 2 distinct symbols, got {len(self.symbols)}",
                hint="Set [ids] alphabet in your config, e.g. alphabet = \"dfghklsa\"",
            )
        if len(set(self.symbols)) != len(self.symbols):
            raise ConfigurationError(
                f"ID alphabet contains duplicate symbols: {''.join(self.symbols)!r}"
            )
        for symbol in self.symbols:
            if len(symbol) != 1:
                raise ConfigurationError(
                    f"ID alphabet symbols must be single characters, got {symbol!r}"
                )
            if symbol.isspace():
                raise ConfigurationError(
                    "ID alphabet must not contain whitespace",
                    hint="IDs are typed as command arguments",
                )

    @classmethod
    def from_string(cls, text: str) -> "CodeAlphabet":
        """Build an alphabet from a config string, dropping repeated symbols.

        Args:
            text: Alphabet string such as "dfghklsa".

        Returns:
            CodeAlphabet keeping the first occurrence of each symbol.

        Raises:
            ConfigurationError: If fewer than 2 distinct symbols remain.
        """
        return cls(tuple(dict.fromkeys(text)))

    @classmethod
    def default(cls) -> "CodeAlphabet":
        """Create the home-row default alphabet."""
        return cls.from_string(DEFAULT_ALPHABET)

    @property
    def base(self) -> int:
        """Number of symbols (the radix of a code digit)."""
        return len(self.symbols)

    @property
    def capacity(self) -> int:
        """Number of digits a fingerprint can supply in this base.

        The largest k with base**k <= 2**64.
        """
        k = 0
        while self.base ** (k + 1) <= 2**FINGERPRINT_BITS:
            k += 1
        return k

    def is_code(self, text: str) -> bool:
        """Check whether text is non-empty and uses only alphabet symbols."""
        return bool(text) and all(ch in self.symbols for ch in text)

    def render(self, digits: list[int] | tuple[int, ...]) -> str:
        """Map digit values to symbols."""
        return "".join(self.symbols[d] for d in digits)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.symbols

    def __str__(self) -> str:
        """Return the alphabet as a string."""
        return "".join(self.symbols)
