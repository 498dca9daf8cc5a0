"""Scene model: map grid, player, sprites, colours and textures."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

WINDOW_WIDTH = 1920
WINDOW_HEIGHT = 1080

TEX_DIMENSIONS = 256
HB_RADIUS = 0.3

MOVE_SPEED = 0.1
ROT_SPEED = 0.02

FAR = 1.0e30

_SPACES = " \t\v\r\f\n"


class CubError(Exception):
    """Raised when a scene cannot be loaded or the game cannot start."""


class TextureKind(enum.IntEnum):
    """Slots in the texture table."""

    NORTH = 0
    SOUTH = 1
    EAST = 2
    WEST = 3
    FLOOR = 4
    CEILING = 5
    DOOR = 6
    SPRITE = 7
    FIREHEAD1 = 8
    FIREHEAD2 = 9
    FIREHEAD3 = 10
    FIREHEAD4 = 11
    FIREHEAD5 = 12
    NOT_DEFINED = 13


@dataclass(frozen=True)
class Rgb:
    """An 8-bit per channel colour."""

    r: int
    g: int
    b: int

    def packed(self) -> int:
        """Return the colour as a 0xRRGGBB integer."""
        return (self.r << 16) + (self.g << 8) + self.b


_CAMERAS: dict[str, tuple[tuple[float, float], tuple[float, float]]] = {
    "W": ((-1.0, 0.0), (0.0, -0.66)),
    "S": ((0.0, 1.0), (-0.66, 0.0)),
    "E": ((1.0, 0.0), (0.0, 0.66)),
    "N": ((0.0, -1.0), (0.66, 0.0)),
}


def camera_for(heading: str) -> tuple[tuple[float, float], tuple[float, float]]:
    """Return the (direction, camera plane) vectors for a start heading."""
    try:
        return _CAMERAS[heading]
    except KeyError:
        raise CubError(f"unknown starting heading {heading!r}") from None


@dataclass
class Player:
    """Position, view direction and camera plane of the player."""

    x: float
    y: float
    dir_x: float
    dir_y: float
    plane_x: float
    plane_y: float

    @classmethod
    def facing(cls, heading: str, x: float, y: float) -> "Player":
        """Create a player at (x, y) looking towards N, S, E or W."""
        (dir_x, dir_y), (plane_x, plane_y) = camera_for(heading)
        return cls(x, y, dir_x, dir_y, plane_x, plane_y)


@dataclass
class Sprite:
    """A billboard object placed on the map."""

    x: float
    y: float
    kind: TextureKind = TextureKind.SPRITE
    distance: float = 0.0


def _last_solid_index(row: str) -> int:
    stripped = row.rstrip(_SPACES)
    return max(len(stripped) - 1, 0)


@dataclass
class Scene:
    """A parsed map with everything needed to render it."""

    grid: list[str]
    player: Player
    floor: Rgb
    ceiling: Rgb
    textures: dict[TextureKind, list[int]] = field(default_factory=dict)
    sprites: list[Sprite] = field(default_factory=list)
    row_ends: list[int] = field(init=False)

    def __post_init__(self) -> None:
        self.row_ends = [_last_solid_index(row) for row in self.grid]

    def cell(self, row: int, col: int) -> str:
        """Return the map character at (row, col), or a space outside the map."""
        if 0 <= row < len(self.grid) and 0 <= col < len(self.grid[row]):
            return self.grid[row][col]
        return " "