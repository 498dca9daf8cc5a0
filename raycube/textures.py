"""Loading wall and sprite images into fixed-size texture tables."""

from __future__ import annotations

from collections.abc import Iterable

from PIL import Image

from raycube.scene import TEX_DIMENSIONS, CubError


def resample(pixels: Iterable[int], width: int, height: int) -> list[int]:
    """Scale a row-major image to a TEX_DIMENSIONS x TEX_DIMENSIONS table.

    Uses nearest-neighbour sampling; cells that rounding leaves uncovered
    stay 0.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"invalid image size {width}x{height}")
    source = list(pixels)
    if len(source) != width * height:
        raise ValueError(
            f"expected {width * height} pixels for {width}x{height}, got {len(source)}"
        )
    step_x = TEX_DIMENSIONS / width
    step_y = TEX_DIMENSIONS / height
    columns = min(int(width * step_x), TEX_DIMENSIONS)
    rows = min(int(height * step_y), TEX_DIMENSIONS)
    table = [0] * (TEX_DIMENSIONS * TEX_DIMENSIONS)
    source_columns = [int(x / step_x) for x in range(columns)]
    for y in range(rows):
        source_row = int(y / step_y) * width
        start = y * TEX_DIMENSIONS
        table[start : start + columns] = [
            source[source_row + column] for column in source_columns
        ]
    return table


def _packed_pixels(image: Image.Image) -> list[int]:
    data = image.tobytes()
    packed = []
    for offset in range(0, len(data), 4):
        r, g, b, a = data[offset : offset + 4]
        packed.append(0 if a == 0 else (r << 16) | (g << 8) | b)
    return packed


def load_texture(path: str) -> list[int]:
    """Read an image file and return it as a resampled texture table.

    Fully transparent pixels become 0, which the sprite renderer skips.
    """
    try:
        with Image.open(path) as image:
            rgba = image.convert("RGBA")
    except (OSError, ValueError) as exc:
        raise CubError(f"couldn't open a texture file: {path}") from exc
    return resample(_packed_pixels(rgba), rgba.width, rgba.height)