"""Multi-glyph rendering: whole-table batches, text lines and the test pattern."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, Optional, Sequence

from .decoder import decode
from .glyph_table import DEFAULT_CHAR_ORDER, GlyphTable
from .raster_buffer import Color, RasterBuffer
from .rasterizer import GLYPH_SIZE, RasterMode, RasterOptions, rasterize

logger = logging.getLogger(__name__)

# Test pattern layout (512px reference canvas)
PATTERN_SIZE = 512
PATTERN_MARGIN = 10
PATTERN_USABLE_WIDTH = 492
PATTERN_SECTION_Y = (15, 45, 295)
PATTERN_CELL_GAP = 3


def render_glyph(
    table: GlyphTable,
    char: str,
    mode: RasterMode = "cdc_scaled",
    scale: int = 1,
    options: Optional[RasterOptions] = None,
    resolution: Optional[int] = None,
) -> RasterBuffer:
    """Look up, decode and rasterize one character (missing chars use the table fallback)."""
    points = decode(table.lookup(char))
    return rasterize(points, mode=mode, scale=scale, options=options, resolution=resolution)


def render_table(
    table: GlyphTable,
    mode: RasterMode = "cdc_scaled",
    scale: int = 1,
    options: Optional[RasterOptions] = None,
    characters: Optional[Iterable[str]] = None,
    resolution: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> Dict[str, RasterBuffer]:
    """
    Render many glyphs concurrently.

    Every glyph is decoded and rasterized independently into its own buffer,
    so the work is spread over a thread pool without any locking.

    Args:
        table: Glyph table to render from
        mode: Raster mode (see rasterize())
        scale: Scale factor
        options: Raster options shared by all glyphs (read-only)
        characters: Characters to render (default: every key in the table).
            Characters missing from the table are skipped.
        resolution: Canvas size for bitmap mode
        max_workers: Thread pool size (None = executor default)

    Returns:
        Dict of character to RasterBuffer, in the order requested
    """
    chars = list(table) if characters is None else [c for c in characters if c in table]
    logger.debug(f"Rendering {len(chars)} glyphs in {mode} mode, scale {scale}")

    def render_one(char: str) -> RasterBuffer:
        return rasterize(decode(table[char]), mode=mode, scale=scale, options=options, resolution=resolution)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        buffers = list(executor.map(render_one, chars))

    return dict(zip(chars, buffers))


def render_text(
    table: GlyphTable,
    text: str,
    scale: int = 1,
    spacing: int = PATTERN_CELL_GAP,
    pixel_color: Color = (0, 0, 0),
    background_color: Optional[Color] = (255, 255, 255),
) -> RasterBuffer:
    """
    Render a line of text with CDC-scaled glyphs.

    Characters missing from the table use the table's fallback glyph.

    Args:
        table: Glyph table
        text: Text to render
        scale: Vector scale factor (beam stays 1px)
        spacing: Gap between character cells in pixels
        pixel_color: Beam color
        background_color: Background color (None = transparent)
    """
    cell = GLYPH_SIZE * scale
    width = len(text) * cell + max(0, len(text) - 1) * spacing
    buffer = RasterBuffer(width, cell, background=background_color)

    glyph_options = RasterOptions(pixel_color=pixel_color, background_color=None)
    x_offset = 0
    for char in text:
        glyph = render_glyph(table, char, mode="cdc_scaled", scale=scale, options=glyph_options)
        buffer.blit(glyph, (x_offset, 0))
        x_offset += cell + spacing

    return buffer


def render_test_pattern(
    table: GlyphTable,
    scales: Sequence[int] = (1, 2, 4),
    char_order: str = DEFAULT_CHAR_ORDER,
    pixel_color: Color = (0, 255, 0),
    background_color: Color = (0, 0, 0),
    canvas_scale: int = 1,
) -> RasterBuffer:
    """
    Render the display test pattern: every character at several scales.

    The reference canvas is 512x512 with one section per scale (at most three,
    starting at y = 15, 45 and 295). Scale 1 uses true-size rendering, larger
    scales use CDC scaling, so the beam is 1px everywhere. Characters wrap
    when a row runs out of the 492px usable width.

    Args:
        table: Glyph table
        scales: Glyph scale for each section
        char_order: Characters to show, in order (missing ones are skipped)
        pixel_color: Beam color
        background_color: Canvas color
        canvas_scale: Multiplies the whole layout (canvas becomes 512*canvas_scale)

    Raises:
        ValueError: If canvas_scale < 1
    """
    if canvas_scale < 1:
        raise ValueError(f"canvas_scale must be >= 1, got {canvas_scale}")

    size = PATTERN_SIZE * canvas_scale
    buffer = RasterBuffer(size, size, background=background_color)
    chars = table.ordered(char_order)
    glyph_options = RasterOptions(pixel_color=pixel_color, background_color=None)

    if len(scales) > len(PATTERN_SECTION_Y):
        logger.warning(
            f"Test pattern has {len(PATTERN_SECTION_Y)} sections; "
            f"ignoring scales {list(scales[len(PATTERN_SECTION_Y):])}"
        )

    for section_y, scale in zip(PATTERN_SECTION_Y, scales):
        glyph_scale = scale * canvas_scale
        mode = "true_size" if glyph_scale == 1 else "cdc_scaled"
        glyphs = render_table(table, mode=mode, scale=glyph_scale, options=glyph_options, characters=chars)

        pitch = GLYPH_SIZE * glyph_scale + PATTERN_CELL_GAP * canvas_scale
        max_cols = max(1, (PATTERN_USABLE_WIDTH * canvas_scale) // pitch)
        origin_x = PATTERN_MARGIN * canvas_scale
        origin_y = section_y * canvas_scale

        for i, char in enumerate(chars):
            col, row = i % max_cols, i // max_cols
            buffer.blit(glyphs[char], (origin_x + col * pitch, origin_y + row * pitch))

        logger.debug(f"Test pattern section at y={origin_y}: {len(chars)} glyphs at scale {glyph_scale}")

    return buffer
