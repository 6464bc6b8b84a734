"""Terminal previews of RasterBuffers (ASCII and ANSI true color)."""

from .raster_buffer import RasterBuffer


def render_ascii(buffer: RasterBuffer, on: str = "█", off: str = " ", scale: int = 1) -> str:
    """
    Draw the beam mask as text, one character per pixel.

    Args:
        buffer: RasterBuffer to show
        on: Character for beam pixels
        off: Character for everything else (grid and background included)
        scale: Integer scaling factor (each pixel becomes scale x scale chars)
    """
    lines = []
    for y in range(buffer.height):
        line = "".join((on if lit else off) * scale for lit in buffer.mask[y])
        # Apply vertical scaling by repeating lines
        lines.extend([line] * scale)
    return "\n".join(lines)


def render_ansi(buffer: RasterBuffer, use_half_blocks: bool = False, square_pixels: bool = True) -> str:
    """
    Draw the RGBA data with ANSI 24-bit color escape codes.

    Fully transparent pixels show as black.

    Args:
        buffer: RasterBuffer to show
        use_half_blocks: If True, use Unicode half-blocks (▀) to pack two
            pixel rows into one terminal line
        square_pixels: If True, render each pixel as 2 horizontal characters
            (terminal cells are roughly 2:1). Ignored with half-blocks.
    """
    frame = []

    def color_at(x: int, y: int):
        r, g, b, a = buffer.get_pixel(x, y)
        if a == 0:
            return 0, 0, 0
        return r, g, b

    if use_half_blocks:
        # Process two rows at a time
        for y in range(0, buffer.height, 2):
            for x in range(buffer.width):
                r1, g1, b1 = color_at(x, y)
                if y + 1 < buffer.height:
                    r2, g2, b2 = color_at(x, y + 1)
                    # Foreground is top pixel, background is bottom pixel
                    frame.append(f"\x1b[38;2;{r1};{g1};{b1}m\x1b[48;2;{r2};{g2};{b2}m▀")
                else:
                    # Last row (odd height) - just show top pixel
                    frame.append(f"\x1b[38;2;{r1};{g1};{b1}m▀")
            frame.append("\x1b[0m\n")
    else:
        chars_per_pixel = 2 if square_pixels else 1
        for y in range(buffer.height):
            for x in range(buffer.width):
                r, g, b = color_at(x, y)
                frame.append(f"\x1b[48;2;{r};{g};{b}m")
                frame.append(" " * chars_per_pixel)
            frame.append("\x1b[0m\n")

    return "".join(frame)
