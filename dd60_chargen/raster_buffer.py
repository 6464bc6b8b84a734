"""RasterBuffer - fixed-size RGBA pixel buffer with a beam mask."""

from typing import List, Optional, Tuple

import numpy as np
from PIL import Image

Color = Tuple[int, int, int] | Tuple[int, int, int, int]


class RasterBuffer:
    """
    RGBA pixel buffer using numpy, plus a boolean mask of beam pixels.

    `data` holds what a viewer would see (background, grid, strokes).
    `mask` holds only the pixels the beam lit, so overlays drawn into
    `data` never change it.
    """

    def __init__(self, width: int, height: int, background: Optional[Color] = None):
        """
        Initialize RasterBuffer.

        Args:
            width: Buffer width in pixels
            height: Buffer height in pixels
            background: Fill color (r, g, b) or (r, g, b, a); None = transparent black
        """
        self.width = width
        self.height = height
        # Shape: (height, width, 4), RGBA, uint8
        self.data = np.zeros((height, width, 4), dtype=np.uint8)
        # Shape: (height, width), True where the beam drew
        self.mask = np.zeros((height, width), dtype=bool)
        if background is not None:
            self.clear(background)

    @property
    def size(self) -> Tuple[int, int]:
        """Return (width, height) tuple."""
        return (self.width, self.height)

    def set_pixel(self, x: int, y: int, color: Color):
        """Set pixel color at (x, y) without touching the mask. Clips silently."""
        if 0 <= x < self.width and 0 <= y < self.height:
            if len(color) == 3:
                self.data[y, x, :3] = color
                self.data[y, x, 3] = 255
            else:
                self.data[y, x] = color

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Get pixel color at (x, y) as (r, g, b, a)."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return tuple(int(c) for c in self.data[y, x])
        return (0, 0, 0, 0)

    def plot(self, x: int, y: int, color: Color, size: int = 1):
        """Light a size x size beam spot with its top-left corner at (x, y)."""
        self.fill_rect(x, y, x + size, y + size, color)

    def fill_rect(self, x0: int, y0: int, x1: int, y1: int, color: Color):
        """Light the half-open pixel rectangle [x0, x1) x [y0, y1), clipped to the buffer."""
        x0, x1 = max(0, x0), min(self.width, x1)
        y0, y1 = max(0, y0), min(self.height, y1)
        if x0 >= x1 or y0 >= y1:
            return

        self.mask[y0:y1, x0:x1] = True
        if len(color) == 3:
            self.data[y0:y1, x0:x1, :3] = color
            self.data[y0:y1, x0:x1, 3] = 255
        else:
            self.data[y0:y1, x0:x1] = color

    def clear(self, color: Color = (0, 0, 0, 0)):
        """Clear buffer to color and reset the mask. Default is transparent black."""
        if len(color) == 3:
            self.data[:, :, :3] = color
            self.data[:, :, 3] = 255  # Opaque
        else:
            self.data[:, :] = color
        self.mask[:, :] = False

    def lit_pixels(self) -> List[Tuple[int, int]]:
        """All beam pixels as (x, y), row by row."""
        ys, xs = np.nonzero(self.mask)
        return [(int(x), int(y)) for x, y in zip(xs, ys)]

    @property
    def lit_count(self) -> int:
        return int(self.mask.sum())

    def blit(self, source: "RasterBuffer", position: Tuple[int, int], opacity: float = 1.0):
        """
        Blit source onto this buffer at position with alpha compositing.
        The source mask is OR-ed into this mask. Clips at the edges.
        """
        x_offset, y_offset = position

        # Calculate visible region
        src_x_start = max(0, -x_offset)
        src_y_start = max(0, -y_offset)
        src_x_end = min(source.width, self.width - x_offset)
        src_y_end = min(source.height, self.height - y_offset)

        dst_x_start = max(0, x_offset)
        dst_y_start = max(0, y_offset)

        # Nothing to blit if completely out of bounds
        if src_x_start >= src_x_end or src_y_start >= src_y_end:
            return

        dst_x_end = dst_x_start + (src_x_end - src_x_start)
        dst_y_end = dst_y_start + (src_y_end - src_y_start)

        src_region = source.data[src_y_start:src_y_end, src_x_start:src_x_end].astype(float)
        dst_region = self.data[dst_y_start:dst_y_end, dst_x_start:dst_x_end].astype(float)

        # out = src * alpha + dst * (1 - alpha)
        src_alpha = src_region[:, :, 3:4] / 255.0 * opacity
        blended_rgb = dst_region[:, :, :3] * (1 - src_alpha) + src_region[:, :, :3] * src_alpha

        dst_alpha = dst_region[:, :, 3:4] / 255.0
        blended_alpha = src_alpha + dst_alpha * (1 - src_alpha)

        self.data[dst_y_start:dst_y_end, dst_x_start:dst_x_end, :3] = np.rint(blended_rgb).astype(np.uint8)
        self.data[dst_y_start:dst_y_end, dst_x_start:dst_x_end, 3:4] = np.rint(blended_alpha * 255).astype(np.uint8)
        self.mask[dst_y_start:dst_y_end, dst_x_start:dst_x_end] |= source.mask[
            src_y_start:src_y_end, src_x_start:src_x_end
        ]

    def copy(self) -> "RasterBuffer":
        """Create a copy of this buffer."""
        new_buffer = RasterBuffer(self.width, self.height)
        new_buffer.data = self.data.copy()
        new_buffer.mask = self.mask.copy()
        return new_buffer

    def to_image(self) -> Image.Image:
        """Convert to a Pillow RGBA image."""
        return Image.fromarray(self.data)
