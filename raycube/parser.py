"""Reading a scene file: header, map grid, player and sprites."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from os import PathLike
from typing import NamedTuple

from raycube.header import parse_header
from raycube.scene import CubError, Player, Scene, Sprite, TextureKind
from raycube.textures import load_texture
from raycube.textutil import clamp_trailing_space, is_space, skip_space

_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+")
_START = frozenset("NESW")
_WALKABLE = frozenset("0DI") | _START


class _MapLayout(NamedTuple):
    grid: list[str]
    player: Player
    sprites: list[Sprite]


def check_map_path(path: str | PathLike[str]) -> str:
    """Check that a map path names a ``.cub`` file and return it as a string."""
    name = str(path)
    if len(name) < 5:
        raise CubError("invalid file name")
    if not name.endswith(".cub"):
        raise CubError("invalid extension scheme")
    return name


def _is_blank(cells: list[str]) -> bool:
    return not skip_space("".join(cells))


def _touches_void(cells: list[list[str]], row: int, col: int) -> bool:
    return (
        is_space(cells[row - 1][col])
        or is_space(cells[row + 1][col])
        or is_space(cells[row][col - 1])
        or is_space(cells[row][col + 1])
    )


def _check_cell(
    cells: list[list[str]], row: int, col: int, door_texture_set: bool
) -> None:
    char = cells[row][col]
    if char == "1" or is_space(char):
        return
    if char in _WALKABLE and (col == 0 or _touches_void(cells, row, col)):
        raise CubError("unvalid map due to unclosed walls")
    if char == "D":
        if not door_texture_set:
            raise CubError("door texture not provided")
        vertical_open = cells[row - 1][col] != "1" or cells[row + 1][col] != "1"
        horizontal_open = cells[row][col + 1] != "1" or cells[row][col - 1] != "1"
        if vertical_open and horizontal_open:
            raise CubError("door left out in the open")
    elif char not in _WALKABLE:
        raise CubError("wrong map caracter")


def parse_map(lines: Iterable[str], door_texture_set: bool) -> _MapLayout:
    """Validate the map part of a scene file.

    ``lines`` start at the first map line. Returns the grid with trailing
    whitespace removed and the start position replaced by ``0``, the player
    and the sprites found on the map.
    """
    rows = [line.rstrip("\n") for line in lines]
    width = max((len(row) for row in rows), default=0) + 1
    cells = [[" "] * width]
    cells.extend(list(row.ljust(width)) for row in rows)
    cells.append([" "] * width)

    player: Player | None = None
    sprites: list[Sprite] = []
    end = 1
    while not _is_blank(cells[end]):
        for col, char in enumerate(cells[end]):
            _check_cell(cells, end, col, door_texture_set)
            if char == "I":
                sprites.append(Sprite(col + 0.5, end - 0.5))
            elif char in _START:
                if player is not None:
                    raise CubError("unvalid map due to mutiple player positions")
                player = Player.facing(char, col + 0.5, end - 0.5)
                cells[end][col] = "0"
        end += 1

    if any(not _is_blank(row) for row in cells[end:]):
        raise CubError("garbage value after map")
    if player is None:
        raise CubError("starting player position is mandatory")
    grid = [clamp_trailing_space("".join(row))[0] for row in cells[1:end]]
    return _MapLayout(grid, player, sprites)


def parse_scene(
    text: str, loader: Callable[[str], list[int]] = load_texture
) -> Scene:
    """Parse the full text of a scene file, loading textures with ``loader``."""
    lines = _LINE_RE.findall(text)
    if not lines:
        raise CubError("empty map file")
    header = parse_header(lines, loader)
    map_lines = lines[header.consumed:]
    if not map_lines:
        raise CubError("no map given")
    layout = parse_map(map_lines, TextureKind.DOOR in header.textures)
    return Scene(
        layout.grid,
        layout.player,
        header.floor,
        header.ceiling,
        header.textures,
        layout.sprites,
    )


def load_scene(
    path: str | PathLike[str], loader: Callable[[str], list[int]] = load_texture
) -> Scene:
    """Read and parse a ``.cub`` scene file."""
    name = check_map_path(path)
    try:
        with open(name, encoding="utf-8", errors="replace") as handle:
            text = handle.read()
    except OSError as exc:
        raise CubError("couldn't open the map file") from exc
    return parse_scene(text, loader)