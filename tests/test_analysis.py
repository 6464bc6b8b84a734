#!/usr/bin/env python3
"""Tests for stroke traces, glyph summaries and terminal previews."""

import math
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from dd60_chargen import (Bounds, GlyphTable, decode, format_stroke_table,
                          render_ansi, render_ascii, render_true_size,
                          summarize, trace)

RESOURCES = os.path.join(os.path.dirname(__file__), 'resources')


def load_sample_table():
    return GlyphTable.from_json(os.path.join(RESOURCES, 'sample_glyphs.json'))


def test_trace_matches_decode():
    """Test that the trace produces the decoder's points."""
    print("\n=== Test: trace == decode ===")

    table = load_sample_table()
    for char in table:
        rows = trace(table[char])
        assert [row.point for row in rows] == decode(table[char])
        assert [row.step for row in rows] == list(range(len(rows)))

    glyph = [0b11000, 0b10001, 0b00110, 0b00101, 0b111111]
    assert [row.point for row in trace(glyph)] == decode(glyph)

    print("✓ Same points as decode()")


def test_trace_descriptions():
    """Test human-readable stroke descriptions."""
    print("\n=== Test: Trace Descriptions ===")

    rows = trace(load_sample_table()["L"])
    assert rows[0].label == "76" and rows[0].description == "V+2"
    assert rows[3].description == "Beam=ON"
    assert rows[4].description == "V-toggle(-)"
    assert rows[5].description == "V-2"
    assert rows[8].description == "H+2"
    assert rows[11].description == "Beam=OFF"
    assert rows[21].description == "no change"
    assert rows[21].label == "24"

    rows = trace([0b00110, 0b10101, 0b100000])
    assert rows[0].description == "H-toggle(-)"
    assert rows[1].description == "V+1, H-1, Beam=ON"
    assert rows[2].value == 0, "High bits are masked"

    print("✓ Descriptions show applied direction")


def test_format_stroke_table():
    """Test the ROM listing text table."""
    print("\n=== Test: format_stroke_table ===")

    text = format_stroke_table(load_sample_table()["-"], title="Character '-'")
    lines = text.splitlines()
    assert lines[0] == "Character '-'"
    assert lines[1].startswith("Row")
    assert len(lines) == 2 + 22

    first = lines[2]
    assert first.startswith("76")
    assert "10100" in first and "X.X.." in first and "V1, H1" in first and "(1,1)" in first
    assert lines[4].split()[0] == "01"
    assert lines[4].endswith("ON")
    assert "None" in lines[-1]

    print(text)
    print("✓ One row per stroke code")


def test_summarize():
    """Test per-glyph summary."""
    print("\n=== Test: summarize ===")

    summary = summarize(load_sample_table()["L"])
    assert summary.strokes == 22
    assert summary.beam_on_strokes == 8
    assert summary.beam_off_strokes == 14
    assert summary.direction_toggles == 1
    assert summary.dwell_points == 1
    assert math.isclose(summary.path_length, 12.0)
    assert summary.bounds == Bounds(0, 6, 0, 6)

    empty = summarize([])
    assert empty.strokes == 0 and empty.path_length == 0.0
    assert empty.bounds == Bounds(0, 0, 0, 0)

    # A stroke toggling both axes counts twice
    assert summarize([0b11110]).direction_toggles == 2

    print(f"✓ {summary}")


def test_render_ascii():
    """Test ASCII preview of the beam mask."""
    print("\n=== Test: render_ascii ===")

    buffer = render_true_size(decode(load_sample_table()["-"]))
    text = render_ascii(buffer, on="#", off=".")
    lines = text.split("\n")
    assert len(lines) == 7
    assert lines[3] == ".#####."
    assert all(line == "......." for i, line in enumerate(lines) if i != 3)

    doubled = render_ascii(buffer, on="#", off=".", scale=2).split("\n")
    assert len(doubled) == 14
    assert doubled[6] == doubled[7] == "..##########.."

    print(text)
    print("✓ Mask drawn row by row")


def test_render_ansi():
    """Test ANSI true-color preview."""
    print("\n=== Test: render_ansi ===")

    buffer = render_true_size(decode(load_sample_table()["-"]))

    full = render_ansi(buffer)
    assert full.count("\x1b[0m\n") == 7
    assert full.count("\x1b[48;2;0;0;0m  ") == 5
    assert full.count("\x1b[48;2;255;255;255m  ") == 44

    half = render_ansi(buffer, use_half_blocks=True)
    assert half.count("\x1b[0m\n") == 4
    assert half.count("▀") == 7 * 4

    print("✓ Full and half-block output")


if __name__ == '__main__':
    test_trace_matches_decode()
    test_trace_descriptions()
    test_format_stroke_table()
    test_summarize()
    test_render_ascii()
    test_render_ansi()
    print("\nAll analysis tests passed!")
