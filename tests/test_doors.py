import pytest

from raycube.doors import DOOR_STEP, Door, DoorSet
from raycube.scene import Player

GRID = ["1111", "10D1", "1111"]


def _facing_door():
    return Player.facing("E", 1.5, 1.5)


def test_toggle_creates_door_in_front():
    doors = DoorSet()
    door = doors.toggle(GRID, _facing_door())
    assert (door.x, door.y) == (2, 1)
    assert door.opening
    assert len(doors) == 1
    assert doors.open_ratio(2, 1) == 0.0


def test_toggle_facing_no_door_does_nothing():
    doors = DoorSet()
    assert doors.toggle(GRID, Player.facing("W", 1.5, 1.5)) is None
    assert len(doors) == 0


def test_toggle_outside_grid_does_nothing():
    doors = DoorSet()
    assert doors.toggle(GRID, Player.facing("S", 1.5, 2.9)) is None
    assert list(doors) == []


def test_toggle_again_before_open_keeps_door():
    doors = DoorSet()
    first = doors.toggle(GRID, _facing_door())
    second = doors.toggle(GRID, _facing_door())
    assert second is first
    assert len(doors) == 1
    assert second.opening and second.open == 0.0


def test_animate_opens_by_one_step():
    doors = DoorSet()
    doors.toggle(GRID, _facing_door())
    doors.animate(_facing_door())
    assert doors.open_ratio(2, 1) == pytest.approx(DOOR_STEP)


def test_toggle_open_door_starts_closing():
    doors = DoorSet()
    door = doors.toggle(GRID, _facing_door())
    for _ in range(40):
        doors.animate(_facing_door())
    assert door.open > 1
    doors.toggle(GRID, _facing_door())
    assert not door.opening
    assert door.open == pytest.approx(1.01)
    doors.animate(_facing_door())
    assert door.open == pytest.approx(1.01 - DOOR_STEP)


def test_door_turns_back_when_fully_open():
    doors = DoorSet()
    door = doors.toggle(GRID, _facing_door())
    peak = 0.0
    for _ in range(80):
        doors.animate(_facing_door())
        peak = max(peak, door.open)
    assert not door.opening
    assert door.open < peak


def test_closed_door_is_forgotten():
    doors = DoorSet()
    doors.toggle(GRID, _facing_door())
    for _ in range(200):
        doors.animate(_facing_door())
    assert len(doors) == 0
    assert doors.open_ratio(2, 1) is None


def test_player_inside_door_blocks_animation():
    doors = DoorSet()
    door = doors.toggle(GRID, _facing_door())
    inside = Player.facing("E", 2.5, 1.5)
    doors.animate(inside)
    assert door.open == 0.0
    assert door.overlaps(inside)


def test_overlap_uses_hit_box():
    door = Door(2, 1)
    assert door.overlaps(Player.facing("E", 1.8, 1.5))
    assert not door.overlaps(Player.facing("E", 1.5, 1.5))


def test_iteration_and_unknown_ratio():
    doors = DoorSet()
    door = doors.toggle(GRID, _facing_door())
    assert list(doors) == [door]
    assert doors.open_ratio(1, 1) is None