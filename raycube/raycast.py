"""Wall casting on a half-cell grid with the DDA algorithm, and frame rendering.

Rays walk a grid twice as fine as the map so that doors can sit in the
middle of their cell.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from raycube.doors import DoorSet
from raycube.framebuffer import Frame
from raycube.scene import FAR, TEX_DIMENSIONS, Player, Scene, TextureKind
from raycube.sprites import draw_sprites

_ANIMATION_FRAMES = 5
_NEAR_WALL = 0.01


@dataclass(frozen=True)
class RayHit:
    """Where one screen column's ray stopped."""

    distance: float
    side: bool
    cell_x: int
    cell_y: int
    ray_x: float
    ray_y: float
    door: bool = False
    door_side: bool = False

    @property
    def face(self) -> TextureKind:
        """The wall face the ray struck."""
        if not self.side:
            return TextureKind.EAST if self.ray_x > 0 else TextureKind.WEST
        return TextureKind.SOUTH if self.ray_y > 0 else TextureKind.NORTH


def _ray_angle(ray_x: float, ray_y: float) -> float:
    if ray_x == 0:
        return math.copysign(math.pi / 2, ray_y * math.copysign(1.0, ray_x))
    return math.atan(ray_y / ray_x)


class _Dda:
    """State of one ray walking the doubled grid."""

    def __init__(
        self, scene: Scene, doors: DoorSet, player: Player, ray_x: float, ray_y: float
    ) -> None:
        self.scene = scene
        self.doors = doors
        self.px = 2 * player.x
        self.py = 2 * player.y
        self.ray_x = ray_x
        self.ray_y = ray_y
        self.map_x = int(self.px)
        self.map_y = int(self.py)
        self.delta_x = FAR if ray_x == 0 else abs(1 / ray_x)
        self.delta_y = FAR if ray_y == 0 else abs(1 / ray_y)
        if ray_x < 0:
            self.step_x = -1
            self.side_x = (self.px - self.map_x) * self.delta_x
        else:
            self.step_x = 1
            self.side_x = (self.map_x + 1.0 - self.px) * self.delta_x
        if ray_y < 0:
            self.step_y = -1
            self.side_y = (self.py - self.map_y) * self.delta_y
        else:
            self.step_y = 1
            self.side_y = (self.map_y + 1.0 - self.py) * self.delta_y
        self.side = False
        self.pass_door = False
        self.hit = False
        self.door = False
        self.door_side = False
        self.angle = _ray_angle(ray_x, ray_y)
        self._backup()

    def _backup(self) -> None:
        self.back_x = self.map_x // 2
        self.back_y = self.map_y // 2
        self.back_side = self.side

    def _cell(self, map_x: int, map_y: int) -> str:
        return self.scene.cell(map_y // 2, map_x // 2)

    def _outside(self) -> bool:
        row = self.map_y // 2
        return (
            self.map_x <= 0
            or self.map_y <= 0
            or row >= len(self.scene.grid)
            or self.map_x // 2 > self.scene.row_ends[row]
        )

    def _advance(self) -> None:
        if self.side_x < self.side_y:
            self.side_x += self.delta_x
            self.map_x += self.step_x
            self.side = False
        else:
            self.side_y += self.delta_y
            self.map_y += self.step_y
            self.side = True

    def _door_intersection(self) -> float:
        tangent = math.tan(self.angle)
        if self.side:
            delta = self.map_y - self.py + (0 if self.ray_y > 0 else 1)
            if tangent == 0:
                return 0.0
            value = (self.px + delta / tangent) / 2
        else:
            delta = self.map_x - self.px + (0 if self.ray_x > 0 else 1)
            value = (self.py + delta * tangent) / 2
        if not math.isfinite(value):
            return 0.0
        return value - int(value)

    def _cross_door(self) -> None:
        back = self.scene.cell(self.back_y, self.back_x)
        if back == "D" and (self.back_side == self.side or self.pass_door):
            ratio = self.doors.open_ratio(self.map_x // 2, self.map_y // 2)
            if ratio is None or self._door_intersection() > ratio:
                self.hit = True
            self.door = True
        self.pass_door = back == "D" and self.back_side != self.side

    def run(self) -> RayHit:
        while not self.hit:
            self.door = False
            self.door_side = self._cell(self.map_x, self.map_y) == "D"
            self._advance()
            outside = self._outside()
            cell = " " if outside else self._cell(self.map_x, self.map_y)
            if outside or cell == "D":
                self._cross_door()
            if outside or cell == "1":
                self.hit = True
            self._backup()
        if self.side:
            travelled = self.side_y - self.delta_y
        else:
            travelled = self.side_x - self.delta_x
        return RayHit(
            travelled / 2,
            self.side,
            self.map_x // 2,
            self.map_y // 2,
            self.ray_x,
            self.ray_y,
            self.door,
            self.door_side,
        )


def cast_ray(
    scene: Scene, doors: DoorSet, player: Player, column: int, width: int
) -> RayHit:
    """Cast the ray for one screen column of a view ``width`` columns wide."""
    if width <= 0:
        raise ValueError(f"invalid view width {width}")
    camera = 2 * column / width - 1
    ray_x = player.dir_x + player.plane_x * camera
    ray_y = player.dir_y + player.plane_y * camera
    return _Dda(scene, doors, player, ray_x, ray_y).run()


def _texture_for(
    hit: RayHit, doors: DoorSet, tex_x: int
) -> tuple[TextureKind, int]:
    face = hit.face
    ratio = doors.open_ratio(hit.cell_x, hit.cell_y) if hit.door else None
    if ratio is not None:
        motion = -1 if face in (TextureKind.SOUTH, TextureKind.WEST) else 1
        return TextureKind.DOOR, int(tex_x + ratio * TEX_DIMENSIONS * motion)
    if hit.door_side:
        return TextureKind.DOOR, tex_x
    return face, tex_x


def _draw_column(
    frame: Frame,
    scene: Scene,
    doors: DoorSet,
    player: Player,
    column: int,
    hit: RayHit,
) -> None:
    height = frame.height
    line_height = height
    if hit.distance > _NEAR_WALL:
        line_height = int(height / hit.distance)
    half = line_height // 2
    start = max(height // 2 - half, 0)
    end = min(half + height // 2, height - 1)
    if start >= end:
        return

    if hit.side:
        wall_x = player.x + hit.distance * hit.ray_x
    else:
        wall_x = player.y + hit.distance * hit.ray_y
    wall_x -= math.floor(wall_x)
    tex_x = int(wall_x * TEX_DIMENSIONS)
    if (not hit.side and hit.ray_x > 0) or (hit.side and hit.ray_y < 0):
        tex_x = TEX_DIMENSIONS - tex_x - 1
    step = TEX_DIMENSIONS / line_height
    position = (start - height // 2 + half) * step

    kind, tex_x = _texture_for(hit, doors, tex_x)
    texture = scene.textures.get(kind) or ()
    size = len(texture)
    for y in range(start, end):
        tex_y = int(position) & (TEX_DIMENSIONS - 1)
        position += step
        color = texture[(TEX_DIMENSIONS * tex_y + tex_x) % size] if size else 0
        frame.put(column, y, color)


def draw_walls(
    frame: Frame, scene: Scene, doors: DoorSet, player: Player
) -> list[float]:
    """Draw every wall column and return the per-column wall distances."""
    zbuffer: list[float] = []
    for column in range(frame.width):
        hit = cast_ray(scene, doors, player, column, frame.width)
        zbuffer.append(hit.distance)
        _draw_column(frame, scene, doors, player, column, hit)
    return zbuffer


def render(
    frame: Frame, scene: Scene, doors: DoorSet, player: Player, frame_index: int
) -> list[float]:
    """Draw floor, ceiling, walls and sprites; return the wall distances.

    ``frame_index`` selects the sprite animation image.
    """
    frame.fill_floor_ceiling(scene.floor, scene.ceiling)
    zbuffer = draw_walls(frame, scene, doors, player)
    kind = TextureKind(TextureKind.FIREHEAD1 + frame_index % _ANIMATION_FRAMES)
    texture: Sequence[int] = scene.textures.get(kind) or ()
    draw_sprites(frame, scene.sprites, player, zbuffer, texture)
    return zbuffer