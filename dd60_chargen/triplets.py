"""Triplet conversion and per-glyph beam metrics."""

import math
from typing import Dict, List, NamedTuple, Sequence

from .decoder import VectorPoint, decode
from .glyph_table import GlyphTable


class Triplet(NamedTuple):
    """Destination position plus numeric beam intensity (0 or 1)."""

    x: int
    y: int
    intensity: int


class Bounds(NamedTuple):
    min_x: int
    max_x: int
    min_y: int
    max_y: int


class Segment(NamedTuple):
    """One beam move, from the previous position to (x2, y2)."""

    x1: int
    y1: int
    x2: int
    y2: int
    intensity: int


def to_triplets(points: Sequence[VectorPoint]) -> List[Triplet]:
    """Map beam state to intensity: on -> 1, off -> 0. Order is preserved."""
    return [Triplet(x, y, 1 if beam_on else 0) for x, y, beam_on in points]


def triplet_table(table: GlyphTable) -> Dict[str, List[Triplet]]:
    """Decode and convert every glyph in the table."""
    return {char: to_triplets(decode(glyph)) for char, glyph in table.items()}


def bounds(triplets: Sequence[Triplet]) -> Bounds:
    """Extent of all visited positions, beam on or off. (0, 0, 0, 0) when empty."""
    if not triplets:
        return Bounds(0, 0, 0, 0)

    xs = [t[0] for t in triplets]
    ys = [t[1] for t in triplets]
    return Bounds(min(xs), max(xs), min(ys), max(ys))


def dwell_points(triplets: Sequence[Triplet]) -> List[int]:
    """
    Indices where the beam stays parked with the beam on.

    Index i (i >= 1) qualifies when its position equals that of i-1 and both
    intensities are nonzero. A beam-off zero-length move is not a dwell.
    """
    dwells = []
    for i in range(1, len(triplets)):
        x, y, intensity = triplets[i]
        prev_x, prev_y, prev_intensity = triplets[i - 1]
        if x == prev_x and y == prev_y and intensity > 0 and prev_intensity > 0:
            dwells.append(i)
    return dwells


def to_segments(triplets: Sequence[Triplet]) -> List[Segment]:
    """One segment per triplet, the first one starting at the implicit origin."""
    segments = []
    prev_x, prev_y = 0, 0
    for x, y, intensity in triplets:
        segments.append(Segment(prev_x, prev_y, x, y, intensity))
        prev_x, prev_y = x, y
    return segments


def path_length(triplets: Sequence[Triplet]) -> float:
    """Total Euclidean length of beam-on segments, starting from (0, 0)."""
    return sum(
        (
            math.hypot(seg.x2 - seg.x1, seg.y2 - seg.y1)
            for seg in to_segments(triplets)
            if seg.intensity > 0
        ),
        0.0,
    )


def filter_by_intensity(triplets: Sequence[Triplet], threshold: float = 0.5) -> List[Triplet]:
    """Keep only triplets with intensity >= threshold."""
    return [t for t in triplets if t[2] >= threshold]
