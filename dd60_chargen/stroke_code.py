"""StrokeCode - 5-bit DD60 character generator control word."""

from typing import List, Literal, NamedTuple

# Only the low 5 bits of a ROM word carry stroke information
STROKE_MASK = 0b11111

StepKind = Literal["none", "move", "toggle"]


class AxisStep(NamedTuple):
    """Outcome of one stroke on one axis."""

    kind: StepKind
    units: int = 0


NO_STEP = AxisStep("none")
TOGGLE_DIRECTION = AxisStep("toggle")


def axis_step(one: bool, two: bool) -> AxisStep:
    """
    Resolve the two movement flags of an axis into a single outcome.

    Both flags set means "reverse direction, don't move" - it is NOT a
    3-unit move. A single flag moves 1 or 2 units along the current direction.
    """
    if one and two:
        return TOGGLE_DIRECTION
    if one:
        return AxisStep("move", 1)
    if two:
        return AxisStep("move", 2)
    return NO_STEP


class StrokeCode(NamedTuple):
    """Decoded control flags of one ROM word, laid out as 0bV1V2H1H2U."""

    v1: bool
    v2: bool
    h1: bool
    h2: bool
    u: bool

    @classmethod
    def from_value(cls, value: int) -> "StrokeCode":
        """Decode an integer ROM word. Bits above the low 5 are ignored."""
        value &= STROKE_MASK
        return cls(
            v1=bool((value >> 4) & 1),
            v2=bool((value >> 3) & 1),
            h1=bool((value >> 2) & 1),
            h2=bool((value >> 1) & 1),
            u=bool(value & 1),
        )

    @property
    def value(self) -> int:
        """Re-pack the flags into a 5-bit integer."""
        return (
            (self.v1 << 4) | (self.v2 << 3) | (self.h1 << 2) | (self.h2 << 1) | int(self.u)
        )

    @property
    def vertical(self) -> AxisStep:
        return axis_step(self.v1, self.v2)

    @property
    def horizontal(self) -> AxisStep:
        return axis_step(self.h1, self.h2)

    @property
    def bits(self) -> str:
        """Flags as a binary digit string, e.g. '01010'."""
        return "".join("1" if flag else "0" for flag in self)

    @property
    def pattern(self) -> str:
        """Flags as the ROM listing pattern, e.g. '.X.X.'."""
        return "".join("X" if flag else "." for flag in self)

    @property
    def flag_names(self) -> List[str]:
        """Names of the set flags, e.g. ['V2', 'H2']."""
        names = ("V1", "V2", "H1", "H2", "U")
        return [name for name, flag in zip(names, self) if flag]


def stroke_label(index: int) -> str:
    """
    ROM row label for a stroke index.

    The first word of each glyph sits at octal row 76; the rest count up
    from 00 in octal (00-07, 10-17, 20-24 for a 22-word glyph).
    """
    if index == 0:
        return "76"
    return format(index - 1, "02o")
