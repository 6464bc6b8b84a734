"""Glyph analysis - step-by-step stroke traces and summaries."""

from typing import Iterable, List, NamedTuple

from .decoder import VectorPoint, apply_step
from .stroke_code import StrokeCode, stroke_label
from .triplets import Bounds, bounds, dwell_points, path_length, to_triplets


class StrokeRow(NamedTuple):
    """One row of a glyph's ROM listing, with the state it produces."""

    step: int
    label: str  # octal ROM row (76, 00, 01, ...)
    value: int  # masked 5-bit code
    code: StrokeCode
    description: str  # e.g. "V-toggle(-), H+2, Beam=ON"
    point: VectorPoint


class GlyphSummary(NamedTuple):
    strokes: int
    beam_on_strokes: int
    beam_off_strokes: int
    direction_toggles: int
    dwell_points: int
    path_length: float
    bounds: Bounds


def _sign(direction: int) -> str:
    return "+" if direction > 0 else "-"


def trace(glyph: Iterable[int]) -> List[StrokeRow]:
    """
    Decode a glyph keeping a human-readable description of every stroke.

    Produces the same points as decode(); the description names the
    movement in the direction that was actually applied.
    """
    x, y = 0, 0
    h_dir, v_dir = 1, 1
    beam_on = False

    rows = []
    for index, value in enumerate(glyph):
        code = StrokeCode.from_value(value)
        y, v_dir = apply_step(code.vertical, y, v_dir)
        x, h_dir = apply_step(code.horizontal, x, h_dir)

        moves = []
        for axis, step, direction in (("V", code.vertical, v_dir), ("H", code.horizontal, h_dir)):
            if step.kind == "toggle":
                moves.append(f"{axis}-toggle({_sign(direction)})")
            elif step.kind == "move":
                moves.append(f"{axis}{_sign(direction)}{step.units}")

        if code.u:
            beam_on = not beam_on
            moves.append(f"Beam={'ON' if beam_on else 'OFF'}")

        rows.append(
            StrokeRow(
                step=index,
                label=stroke_label(index),
                value=code.value,
                code=code,
                description=", ".join(moves) or "no change",
                point=VectorPoint(x, y, beam_on),
            )
        )

    return rows


def format_stroke_table(glyph: Iterable[int], title: str = "") -> str:
    """
    Render the ROM listing of a glyph as a fixed-width text table.

    Columns: row label, binary word, flag pattern, set flags, resulting
    position and beam state.
    """
    lines = []
    if title:
        lines.append(title)
    lines.append(f"{'Row':<4} {'Binary':<6} {'V1V2H1H2U':<9}  {'Flags':<14} {'Position':<9} Beam")

    for row in trace(glyph):
        flags = ", ".join(row.code.flag_names) or "None"
        position = f"({row.point.x},{row.point.y})"
        beam = "ON" if row.point.beam_on else "OFF"
        lines.append(f"{row.label:<4} {row.code.bits:<6} {row.code.pattern:<9}  {flags:<14} {position:<9} {beam}")

    return "\n".join(lines)


def summarize(glyph: Iterable[int]) -> GlyphSummary:
    """Stroke counts and beam metrics for one glyph."""
    rows = trace(glyph)
    triplets = to_triplets([row.point for row in rows])
    beam_on = sum(1 for row in rows if row.point.beam_on)
    toggles = sum(
        (row.code.vertical.kind == "toggle") + (row.code.horizontal.kind == "toggle")
        for row in rows
    )
    return GlyphSummary(
        strokes=len(rows),
        beam_on_strokes=beam_on,
        beam_off_strokes=len(rows) - beam_on,
        direction_toggles=toggles,
        dwell_points=len(dwell_points(triplets)),
        path_length=path_length(triplets),
        bounds=bounds(triplets),
    )
