"""Sliding doors: opening, closing and animation."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from raycube.scene import HB_RADIUS, Player

DOOR_STEP = 0.03
_CLOSABLE_ABOVE = 1.0
_REOPEN_AT = 1.01
_FULLY_OPEN = 2.0
_GONE_BELOW = -0.01


@dataclass
class Door:
    """A door cell being opened or closed; ``open`` grows from 0 upwards."""

    x: int
    y: int
    open: float = 0.0
    opening: bool = True

    def overlaps(self, player: Player) -> bool:
        """Tell whether the player's hit box intersects this door's cell."""
        return (
            player.y + HB_RADIUS > self.y
            and player.y - HB_RADIUS < self.y + 1
            and player.x + HB_RADIUS > self.x
            and player.x - HB_RADIUS < self.x + 1
        )


class DoorSet:
    """The doors that are currently open or moving."""

    def __init__(self) -> None:
        self._doors: list[Door] = []

    def __iter__(self) -> Iterator[Door]:
        return iter(self._doors)

    def __len__(self) -> int:
        return len(self._doors)

    def _find(self, x: int, y: int) -> Door | None:
        return next((d for d in self._doors if d.x == x and d.y == y), None)

    def open_ratio(self, x: int, y: int) -> float | None:
        """Return how far the door at (x, y) is open, or None if it is closed."""
        door = self._find(x, y)
        return None if door is None else door.open

    def toggle(self, grid: Sequence[str], player: Player) -> Door | None:
        """Open the door in front of the player, or start closing it.

        Returns the affected door, or None if the player does not face a door.
        """
        x = int(player.x + 0.5 * player.dir_x)
        y = int(player.y + 0.5 * player.dir_y)
        if not (0 <= y < len(grid) and 0 <= x < len(grid[y])) or grid[y][x] != "D":
            return None
        door = self._find(x, y)
        if door is not None:
            if door.open > _CLOSABLE_ABOVE:
                door.opening = False
                door.open = _REOPEN_AT
            return door
        door = Door(x, y)
        self._doors.append(door)
        return door

    def animate(self, player: Player) -> None:
        """Advance every door one step and forget doors that have closed."""
        self._doors = [d for d in self._doors if d.open >= _GONE_BELOW]
        for door in self._doors:
            if door.open > _FULLY_OPEN:
                door.opening = False
            if not door.overlaps(player):
                door.open += DOOR_STEP if door.opening else -DOOR_STEP