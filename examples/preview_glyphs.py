#!/usr/bin/env python3
"""Glyph viewer: decode a character ROM and show glyphs in the terminal.

Usage:
    python examples/preview_glyphs.py tests/resources/sample_glyphs.json
    python examples/preview_glyphs.py ROM.json --chars AB --mode cdc_scaled --scale 4
    python examples/preview_glyphs.py ROM.json --chars A --table
    python examples/preview_glyphs.py ROM.json --pattern pattern.png
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dd60_chargen import (RASTER_MODES, GlyphTable, RasterOptions,
                          format_stroke_table, render_ansi, render_ascii,
                          render_table, render_test_pattern, summarize)


def main():
    parser = argparse.ArgumentParser(description='Preview DD60 character ROM glyphs')
    parser.add_argument('rom', help='JSON file mapping characters to stroke codes')
    parser.add_argument('--chars', default=None, help='Characters to show (default: all)')
    parser.add_argument('--mode', choices=RASTER_MODES, default='cdc_scaled')
    parser.add_argument('--scale', type=int, default=2)
    parser.add_argument('--resolution', type=int, default=None, help='Canvas size for bitmap mode')
    parser.add_argument('--grid', action='store_true', help='Draw the grid overlay')
    parser.add_argument('--color', action='store_true', help='ANSI true-color output')
    parser.add_argument('--table', action='store_true', help='Print the stroke table of each glyph')
    parser.add_argument('--pattern', default=None, help='Save the 512x512 test pattern to this image file')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    table = GlyphTable.from_json(args.rom)

    if args.pattern:
        render_test_pattern(table).to_image().save(args.pattern)
        logging.getLogger(__name__).info(f"Test pattern written to {args.pattern}")
        return

    options = RasterOptions(show_grid=args.grid)
    buffers = render_table(
        table,
        mode=args.mode,
        scale=args.scale,
        options=options,
        characters=args.chars,
        resolution=args.resolution,
    )

    for char, buffer in buffers.items():
        summary = summarize(table[char])
        print(f"\n'{char}'  {buffer.width}x{buffer.height}  "
              f"beam-on strokes: {summary.beam_on_strokes}  "
              f"toggles: {summary.direction_toggles}  "
              f"path: {summary.path_length:.2f}")
        if args.color:
            print(render_ansi(buffer, use_half_blocks=True), end='')
        else:
            print(render_ascii(buffer, on='█', off='·'))
        if args.table:
            print(format_stroke_table(table[char]))


if __name__ == '__main__':
    main()
