"""Stroke decoder - turns a glyph's stroke codes into absolute beam positions."""

import logging
from typing import Dict, Iterable, List, NamedTuple, Tuple

from .glyph_table import GlyphTable
from .stroke_code import AxisStep, StrokeCode

logger = logging.getLogger(__name__)


class VectorPoint(NamedTuple):
    """Beam position and state after one stroke."""

    x: int
    y: int
    beam_on: bool


def apply_step(step: AxisStep, position: int, direction: int) -> Tuple[int, int]:
    """
    Apply one axis outcome to (position, direction).

    Returns:
        (new_position, new_direction)
    """
    if step.kind == "toggle":
        return position, -direction
    if step.kind == "move":
        return position + step.units * direction, direction
    return position, direction


def decode(glyph: Iterable[int]) -> List[VectorPoint]:
    """
    Decode a glyph into one VectorPoint per stroke code.

    The generator starts every glyph at (0, 0) with the beam off and both
    directions positive. Movement size comes from the flags, direction is
    carried between strokes and only reversed by a toggle stroke. Each point
    records the state AFTER its stroke.

    Any integer is accepted; bits above the low 5 are ignored.
    """
    x, y = 0, 0
    h_dir, v_dir = 1, 1
    beam_on = False

    points = []
    for value in glyph:
        code = StrokeCode.from_value(value)
        y, v_dir = apply_step(code.vertical, y, v_dir)
        x, h_dir = apply_step(code.horizontal, x, h_dir)
        if code.u:
            beam_on = not beam_on
        points.append(VectorPoint(x, y, beam_on))

    return points


def decode_char(table: GlyphTable, char: str) -> List[VectorPoint]:
    """Decode a character, using the table's fallback glyph if it is missing."""
    return decode(table.lookup(char))


def decode_table(table: GlyphTable) -> Dict[str, List[VectorPoint]]:
    """Decode every glyph in the table."""
    vectors = {char: decode(glyph) for char, glyph in table.items()}
    logger.debug(f"Decoded {len(vectors)} glyphs")
    return vectors
