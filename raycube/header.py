"""Parsing of the texture and colour lines at the top of a scene file."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from typing import NamedTuple

from raycube.scene import CubError, Rgb, TextureKind
from raycube.textutil import is_space, parse_int, skip_space

_WALL_KEYS = {
    "NO": TextureKind.NORTH,
    "EA": TextureKind.EAST,
    "SO": TextureKind.SOUTH,
    "WE": TextureKind.WEST,
    "DO": TextureKind.DOOR,
}
_COLOUR_KEYS = {"F": TextureKind.FLOOR, "C": TextureKind.CEILING}
_COLOUR_NAMES = {TextureKind.FLOOR: "floor", TextureKind.CEILING: "ceiling"}
_REQUIRED = (TextureKind.NORTH, TextureKind.SOUTH, TextureKind.EAST, TextureKind.WEST)
_TOKEN_RE = re.compile(r"[^ \t\v\r\f\n]*")


class _Header(NamedTuple):
    textures: dict[TextureKind, list[int]]
    floor: Rgb
    ceiling: Rgb
    consumed: int


def _next_component(text: str) -> tuple[int, str]:
    """Read one colour component and return it with the unread remainder."""
    text = skip_space(text)
    piece, comma, rest = text.partition(",")
    number = _TOKEN_RE.match(piece).group()
    if skip_space(piece[len(number):]):
        raise CubError("extra content after floor/ceiling colors")
    try:
        value = parse_int(number)
    except ValueError:
        raise CubError("floor/ceiling color is not a valid number") from None
    if not 0 <= value <= 255:
        raise CubError("floor/ceiling color overflows")
    return value, rest


def parse_colour(text: str) -> Rgb:
    """Parse the "R,G,B" part of a floor or ceiling line."""
    red, text = _next_component(text)
    green, text = _next_component(text)
    blue, text = _next_component(text)
    if skip_space(text):
        raise CubError("extra content after floor/ceiling color")
    return Rgb(red, green, blue)


def _texture_path(text: str) -> str:
    rest = skip_space(text)
    path = _TOKEN_RE.match(rest).group()
    if not path:
        raise CubError("empty texture line")
    if skip_space(rest[len(path):]):
        raise CubError("unrespected texture format")
    return path


def _wall_key(line: str) -> TextureKind | None:
    if len(line) > 2 and is_space(line[2]):
        return _WALL_KEYS.get(line[:2])
    return None


def _colour_key(line: str) -> TextureKind | None:
    if len(line) > 1 and is_space(line[1]):
        return _COLOUR_KEYS.get(line[0])
    return None


def parse_header(
    lines: Iterable[str], loader: Callable[[str], list[int]]
) -> _Header:
    """Read texture and colour lines until the first other non-blank line.

    Each texture path is passed to ``loader`` as soon as it is read. Returns
    the textures, floor and ceiling colours, and the index of the first line
    that is not part of the header.
    """
    lines = list(lines)
    textures: dict[TextureKind, list[int]] = {}
    colours: dict[TextureKind, Rgb] = {}
    consumed = len(lines)
    for index, raw in enumerate(lines):
        line = skip_space(raw)
        if not line:
            continue
        wall = _wall_key(line)
        if wall is not None:
            if wall in textures:
                raise CubError("texture already set")
            textures[wall] = loader(_texture_path(line[2:]))
            continue
        colour = _colour_key(line)
        if colour is not None:
            if colour in colours:
                raise CubError(f"{_COLOUR_NAMES[colour]} color already set")
            colours[colour] = parse_colour(line[1:])
            continue
        consumed = index
        break
    if (
        any(kind not in textures for kind in _REQUIRED)
        or TextureKind.FLOOR not in colours
        or TextureKind.CEILING not in colours
    ):
        raise CubError("not all textures are set")
    return _Header(
        textures, colours[TextureKind.FLOOR], colours[TextureKind.CEILING], consumed
    )