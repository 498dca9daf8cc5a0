"""Billboard sprites: distance sorting and projection into the frame."""

from __future__ import annotations

from collections.abc import Sequence
from operator import attrgetter

from raycube.framebuffer import Frame
from raycube.scene import TEX_DIMENSIONS, Player, Sprite

_FIXED = 256
_COLOR_BITS = 0x00FFFFFF


def sort_sprites_by_distance(sprites: list[Sprite], player: Player) -> list[Sprite]:
    """Store each sprite's squared distance and sort farthest first, in place."""
    for sprite in sprites:
        dx = player.x - sprite.x
        dy = player.y - sprite.y
        sprite.distance = dx * dx + dy * dy
    sprites.sort(key=attrgetter("distance"), reverse=True)
    return sprites


def _draw_one(
    frame: Frame,
    sprite: Sprite,
    player: Player,
    inv_det: float,
    zbuffer: Sequence[float],
    texture: Sequence[int],
) -> None:
    width, height = frame.width, frame.height
    rel_x = sprite.x - player.x
    rel_y = sprite.y - player.y
    transform_x = inv_det * (player.dir_y * rel_x - player.dir_x * rel_y)
    depth = inv_det * (-player.plane_y * rel_x + player.plane_x * rel_y)
    if depth <= 0:
        return
    screen_x = int((width // 2) * (1 + transform_x / depth))
    size = int(abs(height / depth))
    half = size // 2
    top = max(height // 2 - half, 0)
    bottom = min(half + height // 2, height)
    left = screen_x - half
    first = max(left, 0)
    last = min(half + screen_x, width - 1)
    if first >= last or top >= bottom:
        return
    tex_rows = [
        (
            row,
            ((_FIXED * (row - height // 2 + half)) * TEX_DIMENSIONS // size) // _FIXED,
        )
        for row in range(top, bottom)
    ]
    for stripe in range(first, last):
        if not (0 < stripe < width and stripe < len(zbuffer) and depth < zbuffer[stripe]):
            continue
        tex_x = (stripe - left) * TEX_DIMENSIONS // size
        for row, tex_y in tex_rows:
            color = texture[TEX_DIMENSIONS * tex_y + tex_x]
            if color & _COLOR_BITS:
                frame.put(stripe, row, color)


def draw_sprites(
    frame: Frame,
    sprites: list[Sprite],
    player: Player,
    zbuffer: Sequence[float],
    texture: Sequence[int],
) -> None:
    """Sort the sprites and draw them farthest first behind closer walls.

    Texture pixels whose colour bits are zero are transparent.
    """
    ordered = sort_sprites_by_distance(sprites, player)
    if not texture or not ordered:
        return
    det = player.plane_x * player.dir_y - player.dir_x * player.plane_y
    if det == 0:
        raise ValueError("camera plane is parallel to the view direction")
    inv_det = 1.0 / det
    for sprite in ordered:
        _draw_one(frame, sprite, player, inv_det, zbuffer, texture)