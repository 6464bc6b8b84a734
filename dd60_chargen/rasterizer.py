"""Rasterizer - draws decoded glyphs into RasterBuffers."""

import logging
import math
from dataclasses import dataclass
from typing import Iterator, Literal, Optional, Sequence, Tuple

from .raster_buffer import Color, RasterBuffer

logger = logging.getLogger(__name__)

# Logical glyph window is GLYPH_SIZE x GLYPH_SIZE units (coordinates 0-6)
GLYPH_SIZE = 7

RasterMode = Literal["true_size", "cdc_scaled", "bitmap"]
RASTER_MODES = ("true_size", "cdc_scaled", "bitmap")


@dataclass
class RasterOptions:
    """Colors and overlays for rasterization."""

    pixel_color: Color = (0, 0, 0)
    background_color: Optional[Color] = (255, 255, 255)  # None = transparent
    beam_width: int = 1  # device pixels, cdc_scaled mode only
    show_grid: bool = False
    grid_color: Color = (204, 204, 204)

    def __post_init__(self):
        if self.beam_width < 1:
            raise ValueError(f"beam_width must be >= 1, got {self.beam_width}")


def bresenham_line(x0: int, y0: int, x1: int, y1: int) -> Iterator[Tuple[int, int]]:
    """Yield every integer point from (x0, y0) to (x1, y1), both ends included."""
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1
    err = dx - dy

    x, y = x0, y0
    while True:
        yield x, y
        if x == x1 and y == y1:
            return
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy


def _edge(value: float) -> int:
    """Round a pixel edge half-up."""
    return math.floor(value + 0.5)


def _beam_segments(points: Sequence) -> Iterator[Tuple[int, int, int, int]]:
    """
    Yield (x0, y0, x1, y1) for every beam-on move, starting from the origin.

    A move is drawn when its DESTINATION has the beam on. Accepts
    VectorPoints (bool beam) or Triplets (numeric intensity).
    """
    prev_x, prev_y = 0, 0
    for point in points:
        x, y, beam = point[0], point[1], point[2]
        if beam > 0:
            yield prev_x, prev_y, x, y
        prev_x, prev_y = x, y


def _draw_grid(buffer: RasterBuffer, pitch: float, color: Color):
    """Paint one row and one column of grid color at every cell edge. Leaves the mask alone."""
    for pos in sorted({_edge(i * pitch) for i in range(GLYPH_SIZE + 1)}):
        if 0 <= pos < buffer.width:
            buffer.data[:, pos, :3] = color[:3]
            buffer.data[:, pos, 3] = 255
        if 0 <= pos < buffer.height:
            buffer.data[pos, :, :3] = color[:3]
            buffer.data[pos, :, 3] = 255


def rasterize(
    points: Sequence,
    mode: RasterMode = "cdc_scaled",
    scale: int = 1,
    options: Optional[RasterOptions] = None,
    resolution: Optional[int] = None,
) -> RasterBuffer:
    """
    Render a decoded glyph into a new RasterBuffer.

    Modes:
        true_size: 7x7 canvas, one pixel per unit.
        cdc_scaled: (7*scale)^2 canvas. Coordinates are multiplied by scale
            before line drawing but the beam stays beam_width (1) pixel wide,
            as on the real display where a larger character spreads strokes
            apart without thickening them.
        bitmap: resolution^2 canvas (default 7*scale). Each unit is a filled
            square of resolution/7 pixels, so the beam thickens with size.

    Y is flipped: glyph origin is bottom-left, raster origin is top-left.
    Coordinates outside 0-6 are not clamped; pixels off the canvas are dropped.

    Args:
        points: VectorPoints or Triplets, in stroke order
        mode: One of RASTER_MODES
        scale: Integer scale factor (cdc_scaled, and default bitmap resolution)
        options: Colors, beam width and grid overlay (default RasterOptions())
        resolution: Canvas size for bitmap mode

    Raises:
        ValueError: If mode is unknown or scale/resolution is < 1
    """
    if mode not in RASTER_MODES:
        raise ValueError(f"Unknown raster mode: {mode!r}. Available: {list(RASTER_MODES)}")
    if scale < 1:
        raise ValueError(f"scale must be >= 1, got {scale}")
    if options is None:
        options = RasterOptions()

    if mode == "bitmap":
        if resolution is None:
            resolution = GLYPH_SIZE * scale
        if resolution < 1:
            raise ValueError(f"resolution must be >= 1, got {resolution}")
        return _rasterize_bitmap(points, resolution, options)

    if mode == "true_size":
        return _rasterize_scaled(points, 1, options, beam_width=1)
    return _rasterize_scaled(points, scale, options, beam_width=options.beam_width)


def _rasterize_scaled(points: Sequence, scale: int, options: RasterOptions, beam_width: int) -> RasterBuffer:
    """True-size and CDC-scaled drawing: scaled coordinates, fixed-width beam."""
    size = GLYPH_SIZE * scale
    buffer = RasterBuffer(size, size, background=options.background_color)
    logger.debug(f"Rasterizing {len(points)} points at scale {scale} ({size}x{size})")

    if options.show_grid:
        _draw_grid(buffer, scale, options.grid_color)

    flip = size - 1
    for x0, y0, x1, y1 in _beam_segments(points):
        for x, y in bresenham_line(x0 * scale, y0 * scale, x1 * scale, y1 * scale):
            buffer.plot(x, flip - y, options.pixel_color, size=beam_width)

    return buffer


def _rasterize_bitmap(points: Sequence, resolution: int, options: RasterOptions) -> RasterBuffer:
    """Supersampled drawing: logical Bresenham, each unit a resolution/7 square."""
    buffer = RasterBuffer(resolution, resolution, background=options.background_color)
    pixel_size = resolution / GLYPH_SIZE
    logger.debug(f"Rasterizing {len(points)} points as {resolution}x{resolution} bitmap")

    if options.show_grid:
        _draw_grid(buffer, pixel_size, options.grid_color)

    top = GLYPH_SIZE - 1
    for x0, y0, x1, y1 in _beam_segments(points):
        for x, y in bresenham_line(x0, y0, x1, y1):
            # Unit square centred on the logical coordinate
            left = _edge(x * pixel_size)
            right = _edge((x + 1) * pixel_size)
            upper = _edge((top - y) * pixel_size)
            lower = _edge((top - y + 1) * pixel_size)
            buffer.fill_rect(left, upper, right, lower, options.pixel_color)

    return buffer


def render_true_size(points: Sequence, options: Optional[RasterOptions] = None) -> RasterBuffer:
    """7x7 bitmap, one pixel per unit."""
    return rasterize(points, mode="true_size", options=options)


def render_cdc_scaled(points: Sequence, scale: int = 1, options: Optional[RasterOptions] = None) -> RasterBuffer:
    """Vector-scaled bitmap with a constant 1-pixel beam."""
    return rasterize(points, mode="cdc_scaled", scale=scale, options=options)


def render_bitmap(points: Sequence, resolution: int = 14, options: Optional[RasterOptions] = None) -> RasterBuffer:
    """Supersampled bitmap where the beam grows with resolution."""
    return rasterize(points, mode="bitmap", options=options, resolution=resolution)
