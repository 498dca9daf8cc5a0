# raycube

A compact first-person raycasting engine. It reads a `.cub` scene file, which
names the wall textures, the floor and ceiling colours and a tile map. It then
renders the scene in a 1920×1080 pygame window, with sliding doors, an
animated sprite and a minimap.

## Installing

```
pip install .
```

This installs Pillow, which reads textures, and pygame, which provides the
window.

## Running

```
raycube path/to/level.cub
```

The command takes exactly one argument, the scene file, and its name must end
in `.cub`. The animated sprite is read from `textures/fire_head/1.xpm` through
`textures/fire_head/5.xpm`, relative to the current directory, so these five
images must exist. If the scene or any image cannot be loaded, the command
prints `Error: <message>` to standard error and exits with status 1.

### Controls

| Key          | Action                          |
|--------------|---------------------------------|
| W / S        | move forwards / backwards       |
| A / D        | strafe left / right             |
| Left / Right | turn                            |
| mouse        | turn towards the pointer's side |
| C            | open or close the door ahead    |
| Esc          | quit                            |

## Scene files

A scene file begins with a header. Each header line is one of these:

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
DO ./textures/door.png
F 220,100,0
C 225,30,0
```

- `NO`, `SO`, `WE`, `EA`, `F` and `C` are required. `DO` is required only
  when the map contains doors.
- Each key may appear only once, and blank lines between keys are allowed.
- Texture paths may point to any image that Pillow can open. Each image is
  scaled to 256×256, and fully transparent pixels are left out when sprites
  are drawn.
- A colour is three integers from 0 to 255, separated by commas.
- A texture line may not carry anything after the path, and a colour line may
  not carry anything after the third component.

The map follows the header:

```
1111111
10N0001
1111D11
10I0001
1111111
```

| Char      | Meaning                                             |
|-----------|-----------------------------------------------------|
| `1`       | wall                                                |
| `0`       | floor                                               |
| `D`       | door, with walls on both sides in one direction     |
| `I`       | sprite                                              |
| `N S E W` | player start, and the direction the player faces    |
| space     | outside the map                                     |

The map must satisfy these rules:

- Walkable cells must be enclosed by walls.
- There must be exactly one start position.
- Only blank lines may follow the map.

A scene that breaks any rule raises `raycube.scene.CubError`.

## Using the library

```python
from raycube.app import Game
from raycube.framebuffer import Frame
from raycube.parser import load_scene, parse_scene

scene = load_scene("level.cub")          # textures loaded with raycube.textures.load_texture
game = Game(scene)
game.key_down("w")                       # key names as pygame reports them
game.tick()                              # doors, movement, rotation, animation
frame = Frame(320, 200)
game.render(frame)                       # 3D view plus minimap
print(hex(frame.get(160, 100)))
```

`load_scene` and `parse_scene` also accept a `loader` argument. It is a
function that maps a texture path to a list of 256×256 pixel values, so scenes
can be parsed without image files.

The modules can also be used one at a time:

| Module | Contents |
|---|---|
| `raycube.scene` | `Scene`, `Player`, `Sprite`, `Rgb`, `TextureKind`, `CubError`, `camera_for` |
| `raycube.parser` | `check_map_path`, `parse_map`, `parse_scene`, `load_scene` |
| `raycube.header` | `parse_header`, `parse_colour` |
| `raycube.textures` | `load_texture`, `resample` |
| `raycube.textutil` | `is_space`, `skip_space`, `clamp_trailing_space`, `parse_int` |
| `raycube.framebuffer` | `Frame`, a pixel buffer holding 0xRRGGBB values |
| `raycube.raycast` | `cast_ray`, `RayHit`, `draw_walls`, `render` |
| `raycube.sprites` | `sort_sprites_by_distance`, `draw_sprites` |
| `raycube.doors` | `Door`, `DoorSet` |
| `raycube.movement` | `is_traversable`, `move_player`, `rotate_player` |
| `raycube.minimap` | `Minimap`, `clip_segment`, `draw_line`, `draw_minimap` |
| `raycube.app` | `Game`, `main` |

## Limitations

- The floor and ceiling are flat colours, not textures.
- Every sprite uses the same five-frame animation.
- The game has no sound, no settings, and no options on the command line.

## Tests

```
pip install .[test]
pytest
```