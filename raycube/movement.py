"""Player movement with wall, door and sprite collision, and view rotation."""

from __future__ import annotations

import math

from raycube.doors import DoorSet
from raycube.scene import HB_RADIUS, MOVE_SPEED, Player, Scene, Sprite

_OFFSETS = (-HB_RADIUS, 0.0, HB_RADIUS)
_DOOR_PASSABLE_ABOVE = 1.0


def is_traversable(scene: Scene, doors: DoorSet, row: float, col: float) -> bool:
    """Tell whether the map cell at (row, col) can be walked through.

    Floor cells always can; door cells only once they are more than fully
    slid open. Coordinates are truncated to whole cells.
    """
    row, col = int(row), int(col)
    cell = scene.cell(row, col)
    if cell == "0":
        return True
    if cell == "D":
        ratio = doors.open_ratio(col, row)
        return ratio is not None and ratio > _DOOR_PASSABLE_ABOVE
    return False


def _hit_box_clear(scene: Scene, doors: DoorSet, x: float, y: float) -> bool:
    return all(
        is_traversable(scene, doors, y + dy, x + dx)
        for dx in _OFFSETS
        for dy in _OFFSETS
    )


def _hits_sprite(sprites: list[Sprite], x: float, y: float) -> bool:
    return any(
        sprite.x - HB_RADIUS <= x <= sprite.x + HB_RADIUS
        and sprite.y - HB_RADIUS <= y <= sprite.y + HB_RADIUS
        for sprite in sprites
    )


def _fits(scene: Scene, doors: DoorSet, x: float, y: float) -> bool:
    return _hit_box_clear(scene, doors, x, y) and not _hits_sprite(scene.sprites, x, y)


def move_player(
    scene: Scene, doors: DoorSet, player: Player, forward: int, strafe: int
) -> None:
    """Move the player one step, each axis separately so walls can be slid along.

    ``forward`` is 1, 0 or -1 along the view direction; ``strafe`` is the same
    along the camera plane.
    """
    new_x = player.x + MOVE_SPEED * (forward * player.dir_x + strafe * player.plane_x)
    if _fits(scene, doors, new_x, player.y):
        player.x = new_x
    new_y = player.y + MOVE_SPEED * (forward * player.dir_y + strafe * player.plane_y)
    if _fits(scene, doors, player.x, new_y):
        player.y = new_y


def rotate_player(player: Player, amount: float) -> None:
    """Turn the view direction and camera plane by ``amount`` radians."""
    cos_a = math.cos(amount)
    sin_a = math.sin(amount)
    dir_x, dir_y = player.dir_x, player.dir_y
    player.dir_x = dir_x * cos_a - dir_y * sin_a
    player.dir_y = dir_x * sin_a + dir_y * cos_a
    plane_x, plane_y = player.plane_x, player.plane_y
    player.plane_x = plane_x * cos_a - plane_y * sin_a
    player.plane_y = plane_x * sin_a + plane_y * cos_a