"""An in-memory frame of 0xRRGGBB pixels."""

from __future__ import annotations

from raycube.scene import WINDOW_HEIGHT, WINDOW_WIDTH, Rgb

_MASK = 0xFFFFFFFF


class Frame:
    """A row-major pixel buffer; writes outside it are ignored."""

    def __init__(self, width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"invalid frame size {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = [0] * (width * height)

    def put(self, x: float, y: float, color: int) -> None:
        """Set one pixel; coordinates are truncated and clipped to the frame."""
        col, row = int(x), int(y)
        if 0 <= col < self.width and 0 <= row < self.height:
            self.pixels[col + row * self.width] = color & _MASK

    def get(self, x: int, y: int) -> int:
        """Return the pixel at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return self.pixels[x + y * self.width]

    def clear(self) -> None:
        """Set every pixel to black."""
        self.pixels[:] = [0] * len(self.pixels)

    def fill_floor_ceiling(self, floor: Rgb, ceiling: Rgb) -> None:
        """Paint the upper half with the ceiling and the lower half with the floor.

        With an odd height the middle row belongs to the ceiling.
        """
        split = (self.height + 1) // 2 * self.width
        total = len(self.pixels)
        self.pixels[:split] = [ceiling.packed() & _MASK] * split
        self.pixels[split:] = [floor.packed() & _MASK] * (total - split)