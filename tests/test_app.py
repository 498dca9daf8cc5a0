from dataclasses import replace

import pytest

from raycube.app import Game, main
from raycube.framebuffer import Frame
from raycube.movement import rotate_player
from raycube.scene import MOVE_SPEED, ROT_SPEED, Player, Rgb, Scene

ROOM = ["11111", "10001", "10001", "10001", "11111"]
DOOR_ROOM = ["11111", "11D11", "10001", "10001", "11111"]


def make_scene(grid=ROOM, x=2.5, y=2.5):
    return Scene(list(grid), Player.facing("N", x, y), Rgb(0, 0, 0), Rgb(0, 0, 0))


def test_forward_key_moves_on_tick():
    game = Game(make_scene())
    game.key_down("w")
    game.tick()
    assert game.player.y == pytest.approx(2.5 - MOVE_SPEED)


def test_key_release_stops_movement():
    game = Game(make_scene())
    game.key_down("s")
    game.tick()
    game.key_up("s")
    game.tick()
    assert game.player.y == pytest.approx(2.5 + MOVE_SPEED)
    assert game.forward == 0


def test_escape_stops_game():
    game = Game(make_scene())
    game.key_down("escape")
    assert game.running is False


def test_turn_key_rotates_by_rot_speed():
    game = Game(make_scene())
    expected = replace(game.player)
    rotate_player(expected, ROT_SPEED)
    game.key_down("right")
    game.tick()
    assert game.player.dir_x == pytest.approx(expected.dir_x)
    assert game.player.dir_y == pytest.approx(expected.dir_y)


def test_mouse_motion_recentres_every_other_event():
    game = Game(make_scene())
    assert game.mouse_motion(game.view_width) is True
    assert game.mouse_motion(game.view_width) is False
    assert game.mouse_motion(0) is True
    assert game.mouse_turn == -1


def test_mouse_turn_is_faster_and_resets():
    game = Game(make_scene())
    expected = replace(game.player)
    rotate_player(expected, 3 * ROT_SPEED)
    game.mouse_motion(game.view_width)
    game.tick()
    assert game.player.dir_x == pytest.approx(expected.dir_x)
    assert game.mouse_turn == 0


def test_door_key_opens_facing_door():
    game = Game(make_scene(DOOR_ROOM, y=2.3))
    game.key_down("c")
    assert len(game.doors) == 1
    assert game.doors.open_ratio(2, 1) == pytest.approx(0.0)


def test_animation_index_cycles():
    game = Game(make_scene())
    seen = []
    for _ in range(5):
        game.tick()
        seen.append(game.frame_index)
    assert sorted(seen) == [0, 1, 2, 3, 4]
    assert game.frame_index == 0


def test_render_draws_minimap_player_marker():
    game = Game(make_scene())
    frame = Frame(200, 100)
    game.render(frame)
    assert frame.get(20, 10) == 0xFF0000


def test_main_rejects_missing_argument(capsys):
    assert main([]) == 1
    assert "only need the map file" in capsys.readouterr().err


def test_main_rejects_bad_extension(capsys):
    assert main(["map.txt"]) == 1
    assert "invalid extension scheme" in capsys.readouterr().err


def test_main_reports_unreadable_map(tmp_path, capsys):
    assert main([str(tmp_path / "missing.cub")]) == 1
    assert "couldn't open the map file" in capsys.readouterr().err