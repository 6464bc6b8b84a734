"""GlyphTable - immutable character to stroke-code mapping."""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Words per glyph in the DD60 character ROM
ROM_GLYPH_LENGTH = 22

# Display order used by the character pickers and the test pattern
DEFAULT_CHAR_ORDER = "0123456789 ABCDEFGHIJKLMNOPQRSTUVWXYZ+-*/()=,."

GlyphDefinition = Tuple[int, ...]

# Sentinel for "use the table's own fallback"
_TABLE_FALLBACK = object()


def _parse_code(char: str, index: int, raw: Any) -> int:
    """Convert one raw table entry to a stroke code integer."""
    if isinstance(raw, bool):
        raise ValueError(f"Glyph {char!r} word {index}: expected an integer, got bool {raw!r}")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        try:
            # Base 0 accepts '0b01010', '0o12', '0x0a' and plain decimal
            value = int(raw.strip(), 0)
        except ValueError:
            raise ValueError(
                f"Glyph {char!r} word {index}: {raw!r} is not an integer literal"
            ) from None
    else:
        raise ValueError(
            f"Glyph {char!r} word {index}: expected int or integer string, "
            f"got {type(raw).__name__}"
        )

    if value < 0:
        raise ValueError(f"Glyph {char!r} word {index}: stroke code must be >= 0, got {value}")
    if value > 0b11111:
        logger.warning(
            f"Glyph {char!r} word {index}: value {value:#x} has bits above the low 5; "
            f"they will be ignored"
        )
    return value


class GlyphTable(Mapping):
    """
    Read-only mapping from character to its stroke-code sequence.

    Built once (from a dict or a JSON file) and never mutated afterwards,
    so it can be shared freely between threads.
    """

    def __init__(
        self,
        glyphs: Mapping,
        fallback: Optional[str] = " ",
        glyph_length: Optional[int] = None,
    ):
        """
        Initialize GlyphTable.

        Args:
            glyphs: Mapping of character to a sequence of stroke codes.
                Codes may be ints or integer literal strings ('0b01010').
            fallback: Character substituted by lookup() for missing keys
                (None = no substitution, lookup() raises KeyError)
            glyph_length: If set, every glyph must have exactly this many words

        Raises:
            ValueError: If a code is not a non-negative integer, a glyph has
                the wrong length, or the fallback character is not in the table
        """
        parsed: Dict[str, GlyphDefinition] = {}
        for char, codes in glyphs.items():
            if not isinstance(char, str):
                raise ValueError(f"Glyph keys must be strings, got {type(char).__name__}")
            definition = tuple(_parse_code(char, i, raw) for i, raw in enumerate(codes))
            if glyph_length is not None and len(definition) != glyph_length:
                raise ValueError(
                    f"Glyph {char!r} has {len(definition)} words, expected {glyph_length}"
                )
            parsed[char] = definition

        if fallback is not None and fallback not in parsed:
            available = "".join(sorted(parsed))
            raise ValueError(
                f"Fallback character {fallback!r} not in table. Available: {available!r}"
            )

        self._glyphs = MappingProxyType(parsed)
        self.fallback = fallback
        self.glyph_length = glyph_length

        logger.debug(f"GlyphTable built with {len(parsed)} glyphs")

    @classmethod
    def from_mapping(cls, glyphs: Mapping, **kwargs) -> "GlyphTable":
        """Build a table from an in-memory mapping."""
        return cls(glyphs, **kwargs)

    @classmethod
    def from_json(cls, path: str | Path, **kwargs) -> "GlyphTable":
        """
        Load a table from a JSON object file: {"A": [16, 8, ...], ...}.

        Args:
            path: Path to the JSON file
            **kwargs: Passed through to GlyphTable()
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a JSON object at top level, got {type(data).__name__}")

        table = cls(data, **kwargs)
        logger.info(f"Loaded {len(table)} glyphs from {path}")
        return table

    # Mapping protocol
    def __getitem__(self, char: str) -> GlyphDefinition:
        return self._glyphs[char]

    def __iter__(self) -> Iterator[str]:
        return iter(self._glyphs)

    def __len__(self) -> int:
        return len(self._glyphs)

    def __repr__(self) -> str:
        return f"GlyphTable({len(self)} glyphs, fallback={self.fallback!r})"

    def lookup(self, char: str, fallback: Any = _TABLE_FALLBACK) -> GlyphDefinition:
        """
        Get a glyph, substituting the fallback character when it is missing.

        Args:
            char: Character to look up
            fallback: Override the table's fallback character (None = raise
                instead of substituting)

        Raises:
            KeyError: If char is missing and no fallback applies
        """
        if char in self._glyphs:
            return self._glyphs[char]

        substitute = self.fallback if fallback is _TABLE_FALLBACK else fallback
        if substitute is None or substitute not in self._glyphs:
            raise KeyError(char)

        logger.debug(f"No glyph for {char!r}, substituting {substitute!r}")
        return self._glyphs[substitute]

    def ordered(self, char_order: Iterable[str] = DEFAULT_CHAR_ORDER) -> List[str]:
        """Characters of char_order that exist in the table, in that order."""
        return [char for char in char_order if char in self._glyphs]
