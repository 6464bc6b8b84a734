"""dd60-chargen - DD60 vector character ROM decoder and rasterizer."""

from .analysis import GlyphSummary, StrokeRow, format_stroke_table, summarize, trace
from .decoder import VectorPoint, decode, decode_char, decode_table
from .glyph_table import DEFAULT_CHAR_ORDER, ROM_GLYPH_LENGTH, GlyphTable
from .preview import render_ansi, render_ascii
from .raster_buffer import RasterBuffer
from .rasterizer import (GLYPH_SIZE, RASTER_MODES, RasterOptions,
                         bresenham_line, rasterize, render_bitmap,
                         render_cdc_scaled, render_true_size)
from .sheet import render_glyph, render_table, render_test_pattern, render_text
from .stroke_code import AxisStep, StrokeCode, axis_step, stroke_label
from .triplets import (Bounds, Segment, Triplet, bounds, dwell_points,
                       filter_by_intensity, path_length, to_segments,
                       to_triplets, triplet_table)

__all__ = [
    "GlyphTable",
    "DEFAULT_CHAR_ORDER",
    "ROM_GLYPH_LENGTH",
    "StrokeCode",
    "AxisStep",
    "axis_step",
    "stroke_label",
    "VectorPoint",
    "decode",
    "decode_char",
    "decode_table",
    "Triplet",
    "Bounds",
    "Segment",
    "to_triplets",
    "triplet_table",
    "bounds",
    "dwell_points",
    "path_length",
    "to_segments",
    "filter_by_intensity",
    "RasterBuffer",
    "RasterOptions",
    "GLYPH_SIZE",
    "RASTER_MODES",
    "bresenham_line",
    "rasterize",
    "render_true_size",
    "render_cdc_scaled",
    "render_bitmap",
    "render_glyph",
    "render_table",
    "render_text",
    "render_test_pattern",
    "StrokeRow",
    "GlyphSummary",
    "trace",
    "format_stroke_table",
    "summarize",
    "render_ascii",
    "render_ansi",
]
