import pytest

from raycube.framebuffer import Frame
from raycube.scene import FAR, TEX_DIMENSIONS, Player, Sprite
from raycube.sprites import draw_sprites, sort_sprites_by_distance

SIZE = TEX_DIMENSIONS * TEX_DIMENSIONS
COLOUR = 0x336699
OTHER = 0x996633
BLANK = [0] * (64 * 48)


def setup():
    frame = Frame(64, 48)
    player = Player.facing("N", 2.5, 4.5)
    return frame, player


def test_sort_puts_farthest_first_and_stores_distance():
    player = Player.facing("N", 0.0, 0.0)
    sprites = [Sprite(1.0, 0.0), Sprite(3.0, 0.0), Sprite(2.0, 0.0)]
    result = sort_sprites_by_distance(sprites, player)
    assert result is sprites
    assert [s.x for s in sprites] == [3.0, 2.0, 1.0]
    assert sprites[0].distance == pytest.approx(9.0)
    distances = [s.distance for s in sprites]
    assert distances == sorted(distances, reverse=True)


def test_sort_keeps_order_of_equal_distances():
    player = Player.facing("N", 0.0, 0.0)
    first, second = Sprite(0.0, 2.0), Sprite(2.0, 0.0)
    sprites = [first, second]
    sort_sprites_by_distance(sprites, player)
    assert sprites[0] is first
    assert sprites[1] is second


def test_sprite_ahead_is_drawn_at_centre():
    frame, player = setup()
    draw_sprites(frame, [Sprite(2.5, 2.5)], player, [FAR] * 64, [COLOUR] * SIZE)
    assert frame.get(32, 24) == COLOUR
    assert frame.get(32, 0) == 0
    assert frame.get(0, 24) == 0
    painted = [p for p in frame.pixels if p]
    assert painted
    assert set(painted) == {COLOUR}


def test_texture_rows_map_top_to_bottom():
    frame, player = setup()
    half = SIZE // 2
    texture = [COLOUR] * half + [OTHER] * half
    draw_sprites(frame, [Sprite(2.5, 2.5)], player, [FAR] * 64, texture)
    assert frame.get(32, 13) == COLOUR
    assert frame.get(32, 34) == OTHER


def test_sprite_hidden_behind_closer_wall():
    frame, player = setup()
    draw_sprites(frame, [Sprite(2.5, 2.5)], player, [1.0] * 64, [COLOUR] * SIZE)
    assert frame.get(32, 24) == 0
    assert list(frame.pixels) == BLANK
    draw_sprites(frame, [Sprite(2.5, 2.5)], player, [FAR] * 64, [COLOUR] * SIZE)
    assert frame.get(32, 24) == COLOUR


def test_sprite_behind_player_is_not_drawn():
    frame, player = setup()
    draw_sprites(frame, [Sprite(2.5, 6.5)], player, [FAR] * 64, [COLOUR] * SIZE)
    assert frame.get(32, 24) == 0
    assert list(frame.pixels) == BLANK


@pytest.mark.parametrize("pixel", [0, 0xFF000000])
def test_transparent_pixels_are_skipped(pixel):
    frame, player = setup()
    draw_sprites(frame, [Sprite(2.5, 2.5)], player, [FAR] * 64, [pixel] * SIZE)
    assert frame.get(32, 24) == 0
    assert list(frame.pixels) == BLANK


def test_empty_texture_still_sorts():
    frame, player = setup()
    near, far = Sprite(2.5, 3.5), Sprite(2.5, 1.5)
    sprites = [near, far]
    draw_sprites(frame, sprites, player, [FAR] * 64, [])
    assert sprites == [far, near]
    assert list(frame.pixels) == BLANK


def test_degenerate_camera_raises():
    frame = Frame(64, 48)
    player = Player(0.0, 0.0, 1.0, 0.0, 1.0, 0.0)
    with pytest.raises(ValueError):
        draw_sprites(frame, [Sprite(2.0, 0.0)], player, [FAR] * 64, [COLOUR] * SIZE)