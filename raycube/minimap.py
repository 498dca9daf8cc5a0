"""The overhead map drawn in the corner of the frame."""

from __future__ import annotations

import math
from dataclasses import dataclass

from raycube.framebuffer import Frame
from raycube.scene import WINDOW_HEIGHT, WINDOW_WIDTH, Player, Scene

Point = tuple[float, float]

_VERTICAL_SLOPE = 10000000.0
_PLAYER_COLOUR = 0xFF0000
_FLOOR_COLOUR = 0xFFFFFF
_DOOR_COLOUR = 0x00FF00
_BORDER_COLOUR = 0xAAAAAA
_EMPTY_COLOUR = 0x000000
_FOV_COLOUR = 0x0000FF
_BORDER = 2
_FOV_LENGTH = 500
_FOV_DIR_SCALE = 100
_FOV_PLANE_SCALE = 102


@dataclass(frozen=True)
class Minimap:
    """Size of the minimap in pixels and pixels per map cell."""

    width: int = WINDOW_WIDTH // 5
    height: int = WINDOW_HEIGHT // 5
    unit: int = 10


def _clip_x(minimap: Minimap, point: Point, a: float, b: float) -> Point:
    x, _ = point
    if x < 0:
        return 0.0, b
    if x > minimap.width:
        return float(minimap.width), a * minimap.width + b
    return point


def _clip_y(minimap: Minimap, point: Point, a: float, b: float) -> Point:
    x, y = point
    if y < 0:
        target = 0.0
    elif y > minimap.height:
        target = float(minimap.height)
    else:
        return point
    return ((target - b) / a if a else x), target


def clip_segment(minimap: Minimap, start: Point, end: Point) -> tuple[Point, Point]:
    """Pull both ends of a segment onto the minimap's rectangle along its line."""
    (x1, y1), (x2, y2) = start, end
    a = (y2 - y1) / (x2 - x1) if x2 != x1 else _VERTICAL_SLOPE
    b = y1 - a * x1
    new_start = _clip_y(minimap, _clip_x(minimap, start, a, b), a, b)
    new_end = _clip_y(minimap, _clip_x(minimap, end, a, b), a, b)
    return new_start, new_end


def draw_line(
    frame: Frame, minimap: Minimap, start: Point, end: Point, color: int
) -> None:
    """Draw a two-pixel-thick line clipped to the minimap."""
    (x1, y1), (x2, y2) = clip_segment(minimap, start, end)
    steep = abs(x2 - x1) < abs(y2 - y1)
    if steep:
        x1, y1, x2, y2 = y1, x1, y2, x2
    if x1 > x2:
        x1, y1, x2, y2 = x2, y2, x1, y1
    grad = (y2 - y1) / (x2 - x1) if x2 != x1 else 1.0
    for step in range(max(math.ceil(x2 - x1), 0)):
        x = x1 + step
        y = y1 + grad * step
        if steep:
            frame.put(y - 1, x, color)
            frame.put(y, x, color)
        else:
            frame.put(x, y - 1, color)
            frame.put(x, y, color)


def _map_colour(
    scene: Scene, player: Player, minimap: Minimap, x: int, y: int
) -> int | None:
    map_x = (x - minimap.width // 2) / minimap.unit + player.x
    map_y = (y - minimap.height // 2) / minimap.unit + player.y
    if not 0 <= map_y < len(scene.grid):
        return None
    if not 0 <= map_x < scene.row_ends[int(map_y)]:
        return None
    cell = scene.cell(int(map_y), int(map_x))
    if cell == "0":
        return _FLOOR_COLOUR
    if cell == "D":
        return _DOOR_COLOUR
    return None


def _pixel_colour(
    scene: Scene, player: Player, minimap: Minimap, x: int, y: int
) -> int:
    half_unit_low_y = (minimap.height - minimap.unit) // 2
    half_unit_high_y = (minimap.height + minimap.unit) // 2
    half_unit_low_x = (minimap.width - minimap.unit) // 2
    half_unit_high_x = (minimap.width + minimap.unit) // 2
    if half_unit_low_y < y < half_unit_high_y and half_unit_low_x < x < half_unit_high_x:
        return _PLAYER_COLOUR
    colour = _map_colour(scene, player, minimap, x, y)
    if colour is not None:
        return colour
    if (
        x < _BORDER
        or x > minimap.width - _BORDER - 1
        or y < _BORDER
        or y > minimap.height - _BORDER - 1
    ):
        return _BORDER_COLOUR
    return _EMPTY_COLOUR


def _draw_field_of_view(frame: Frame, player: Player, minimap: Minimap) -> None:
    start = (float(minimap.width // 2), float(minimap.height // 2))
    for sign in (1, -1):
        end = (
            start[0]
            + _FOV_LENGTH
            * (player.dir_x * _FOV_DIR_SCALE + sign * player.plane_x * _FOV_PLANE_SCALE),
            start[1]
            + _FOV_LENGTH
            * (player.dir_y * _FOV_DIR_SCALE + sign * player.plane_y * _FOV_PLANE_SCALE),
        )
        draw_line(frame, minimap, start, end, _FOV_COLOUR)


def draw_minimap(frame: Frame, scene: Scene, player: Player, minimap: Minimap) -> None:
    """Draw the map around the player, the player marker and the view cone."""
    for y in range(minimap.height):
        for x in range(minimap.width):
            frame.put(x, y, _pixel_colour(scene, player, minimap, x, y))
    _draw_field_of_view(frame, player, minimap)