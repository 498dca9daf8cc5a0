"""The interactive game: input handling, the update loop and the window."""

from __future__ import annotations

import sys
from array import array
from collections.abc import Sequence

import pygame

from raycube.doors import DoorSet
from raycube.framebuffer import Frame
from raycube.minimap import Minimap, draw_minimap
from raycube.movement import move_player, rotate_player
from raycube.parser import load_scene
from raycube.raycast import render as render_scene
from raycube.scene import (
    HB_RADIUS,
    MOVE_SPEED,
    ROT_SPEED,
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    CubError,
    Scene,
    TextureKind,
)
from raycube.textures import load_texture

_FORWARD_KEYS = {"w": 1, "s": -1}
_STRAFE_KEYS = {"d": 1, "a": -1}
_TURN_KEYS = {"right": 1, "left": -1}
_MOUSE_TURN_FACTOR = 3
_ANIMATION_FRAMES = 5
_MINIMAP_SCALE = 5
_MINIMAP_UNIT = 10
_FIRE_HEAD = "textures/fire_head/{}.xpm"
_FPS = 60
_OPAQUE = 0xFF000000


class Game:
    """Game state driven by key and mouse events and a periodic tick."""

    def __init__(self, scene: Scene) -> None:
        self.scene = scene
        self.player = scene.player
        self.doors = DoorSet()
        self.forward = 0
        self.strafe = 0
        self.turn = 0
        self.mouse_turn = 0
        self.frame_index = 0
        self.running = True
        self.view_width = WINDOW_WIDTH
        self._motion_events = 0

    def key_down(self, key: str) -> None:
        """Handle a key press given by its name ("w", "left", "escape", ...)."""
        if key == "escape":
            self.running = False
        elif key in _FORWARD_KEYS:
            self.forward = _FORWARD_KEYS[key]
        elif key in _STRAFE_KEYS:
            self.strafe = _STRAFE_KEYS[key]
        elif key in _TURN_KEYS:
            self.turn = _TURN_KEYS[key]
        elif key == "c":
            self.doors.toggle(self.scene.grid, self.player)

    def key_up(self, key: str) -> None:
        """Handle a key release given by its name."""
        if key == "escape":
            self.running = False
        elif key in _FORWARD_KEYS:
            self.forward = 0
        elif key in _STRAFE_KEYS:
            self.strafe = 0
        elif key in _TURN_KEYS:
            self.turn = 0

    def mouse_motion(self, x: int) -> bool:
        """Turn towards the side of the screen the pointer moved to.

        Returns True when the pointer should be moved back to the centre,
        which happens on every other event.
        """
        self._motion_events += 1
        centre = self.view_width // 2
        if x > centre:
            self.mouse_turn = 1
        elif x < centre:
            self.mouse_turn = -1
        return self._motion_events % 2 == 1

    def tick(self) -> None:
        """Advance doors, movement, rotation and the sprite animation by one step."""
        self.doors.animate(self.player)
        if self.forward or self.strafe:
            move_player(self.scene, self.doors, self.player, self.forward, self.strafe)
        if self.turn or self.mouse_turn:
            amount = (self.turn + _MOUSE_TURN_FACTOR * self.mouse_turn) * ROT_SPEED
            rotate_player(self.player, amount)
        self.mouse_turn = 0
        self.frame_index = (self.frame_index + 1) % _ANIMATION_FRAMES

    def render(self, frame: Frame) -> None:
        """Draw the 3D view and the minimap into ``frame``."""
        render_scene(frame, self.scene, self.doors, self.player, self.frame_index)
        minimap = Minimap(
            frame.width // _MINIMAP_SCALE, frame.height // _MINIMAP_SCALE, _MINIMAP_UNIT
        )
        draw_minimap(frame, self.scene, self.player, minimap)


def _load_animation(scene: Scene) -> None:
    for offset in range(_ANIMATION_FRAMES):
        path = _FIRE_HEAD.format(offset + 1)
        try:
            table = load_texture(path)
        except CubError as exc:
            raise CubError("couldn't open sprite file") from exc
        scene.textures[TextureKind(TextureKind.FIREHEAD1 + offset)] = table


def _to_surface(frame: Frame) -> pygame.Surface:
    data = array("I", (pixel | _OPAQUE for pixel in frame.pixels))
    if sys.byteorder == "big":
        data.byteswap()
    return pygame.image.frombuffer(data.tobytes(), (frame.width, frame.height), "BGRA")


def _run(game: Game) -> None:
    pygame.init()
    try:
        screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption("cub3D")
        pygame.mouse.set_visible(False)
        frame = Frame(WINDOW_WIDTH, WINDOW_HEIGHT)
        clock = pygame.time.Clock()
        game.render(frame)
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type == pygame.KEYDOWN:
                    game.key_down(pygame.key.name(event.key))
                elif event.type == pygame.KEYUP:
                    game.key_up(pygame.key.name(event.key))
                elif event.type == pygame.MOUSEMOTION:
                    if game.mouse_motion(event.pos[0]):
                        pygame.mouse.set_pos((WINDOW_WIDTH // 2, WINDOW_HEIGHT // 2))
            if not game.running:
                break
            screen.blit(_to_surface(frame), (0, 0))
            pygame.display.flip()
            game.tick()
            game.render(frame)
            clock.tick(_FPS)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game on the ``.cub`` map named on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        if MOVE_SPEED > HB_RADIUS:
            raise CubError("move speed is too high in comparaison to hit_box")
        if len(args) != 1:
            raise CubError("only need the map file")
        scene = load_scene(args[0])
        _load_animation(scene)
    except CubError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    _run(Game(scene))
    return 0


if __name__ == "__main__":
    sys.exit(main())