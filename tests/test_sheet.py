#!/usr/bin/env python3
"""Tests for batch rendering, text lines and the display test pattern."""

import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from dd60_chargen import (GlyphTable, RasterOptions, decode, rasterize,
                          render_glyph, render_table, render_test_pattern,
                          render_text)

RESOURCES = os.path.join(os.path.dirname(__file__), 'resources')

GREEN = (0, 255, 0, 255)


def load_sample_table():
    return GlyphTable.from_json(os.path.join(RESOURCES, 'sample_glyphs.json'))


def test_render_glyph_uses_fallback():
    """Test single-character rendering with lookup policy."""
    print("\n=== Test: render_glyph ===")

    table = load_sample_table()
    assert render_glyph(table, "L", mode="true_size").lit_count == 13
    missing = render_glyph(table, "?", mode="cdc_scaled", scale=2)
    assert missing.size == (14, 14)
    assert missing.lit_count == 0

    print("✓ Missing characters render as the blank fallback")


def test_render_table_matches_sequential():
    """Test that concurrent rendering gives the same buffers as one-by-one."""
    print("\n=== Test: render_table ===")

    table = load_sample_table()
    options = RasterOptions(show_grid=True)
    buffers = render_table(table, mode="cdc_scaled", scale=4, options=options, max_workers=4)

    assert list(buffers) == list(table), "Results keep table order"
    for char, buffer in buffers.items():
        expected = rasterize(decode(table[char]), mode="cdc_scaled", scale=4, options=options)
        assert np.array_equal(buffer.data, expected.data)
        assert np.array_equal(buffer.mask, expected.mask)

    print(f"✓ {len(buffers)} glyphs rendered concurrently")


def test_render_table_character_selection():
    """Test rendering a subset, skipping unknown characters."""
    print("\n=== Test: render_table Subset ===")

    table = load_sample_table()
    buffers = render_table(table, mode="bitmap", resolution=21, characters="-?L")
    assert list(buffers) == ["-", "L"]
    assert all(b.size == (21, 21) for b in buffers.values())

    print("✓ Requested order, unknown characters skipped")


def test_render_text():
    """Test laying out a line of glyphs."""
    print("\n=== Test: render_text ===")

    table = load_sample_table()
    line = render_text(table, "L-", scale=1)
    assert line.size == (7 + 3 + 7, 7)
    assert line.lit_count == 13 + 5
    # '-' cell starts at x=10, its stroke is on row 3 from x=1 to x=5
    assert line.mask[3, 11:16].all()
    assert not line.mask[3, 7:10].any()

    # Unknown characters fall back to the blank glyph
    assert render_text(table, "L?").lit_count == 13

    scaled = render_text(table, "--", scale=2, spacing=0)
    assert scaled.size == (28, 14)
    assert scaled.lit_count == 2 * 9

    assert render_text(table, "").size == (0, 7)

    print("✓ Glyph cells laid out left to right")


def test_test_pattern_layout():
    """Test glyph placement on the 512x512 test pattern."""
    print("\n=== Test: Test Pattern Layout ===")

    table = load_sample_table()
    pattern = render_test_pattern(table)
    assert pattern.size == (512, 512)
    assert pattern.get_pixel(0, 0) == (0, 0, 0, 255)

    # Order is ' ', 'L', '-'. Scale 1 section at y=15, 10px pitch:
    # 'L' sits at x=20 and its stem fills x=20, y=15..21
    assert pattern.mask[15:22, 20].all()
    assert pattern.get_pixel(20, 15) == GREEN

    # Scale 2 section at y=45, 17px pitch: '-' cell at x=44, stroke on local row 7, x 2..10
    assert pattern.mask[52, 46:55].all()
    assert not pattern.mask[52, 45]

    # Scale 4 section at y=295, 31px pitch: 'L' cell at x=41, base on local row 27, x 0..24
    assert pattern.mask[322, 41:66].all()

    assert pattern.lit_count == 13 + 5 + (12 * 2 + 1) + (4 * 2 + 1) + (12 * 4 + 1) + (4 * 4 + 1)

    print("✓ Three sections at 1x, 2x and 4x")


def test_test_pattern_canvas_scale():
    """Test the enlarged test pattern canvas."""
    print("\n=== Test: Test Pattern Canvas Scale ===")

    table = load_sample_table()
    pattern = render_test_pattern(table, scales=(1,), canvas_scale=2)
    assert pattern.size == (1024, 1024)
    # Scale 1 at canvas scale 2 renders 2x CDC glyphs: 'L' cell at x=40, y=30, stem rows 1..13
    assert pattern.mask[31:44, 40].all()
    assert not pattern.mask[30, 40]

    with pytest.raises(ValueError, match="canvas_scale"):
        render_test_pattern(table, canvas_scale=0)

    print("✓ 1024x1024 at canvas scale 2")


if __name__ == '__main__':
    test_render_glyph_uses_fallback()
    test_render_table_matches_sequential()
    test_render_table_character_selection()
    test_render_text()
    test_test_pattern_layout()
    test_test_pattern_canvas_scale()
    print("\nAll sheet tests passed!")
