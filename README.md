# cubraycaster

A small first-person maze explorer. It reads a `.cub` scene file and checks
it thoroughly. It then draws the maze in a window with textured walls,
using raycasting to render one screen column at a time.

## Installing

```
pip install .
```

`pygame` provides the window, the keyboard input and the PNG texture
loading.

## Running

```
cubraycaster path/to/scene.cub
```

The program takes exactly one argument, and the file name must end in `.cub`.
If the arguments or the scene have a problem, the program prints a coloured
`Error` message to standard error and exits with status 1.

The window is 1920×1080 and refreshes at up to 60 frames per second.

* **Escape:** the program prints a short exit notice and returns 0.
* **Closing the window:** the program first prints a dump of the scene and
  the player's final state, then the exit notice.

### Controls

| Key                 | Action                                  |
|---------------------|-----------------------------------------|
| `W` / `Up`          | move forward                            |
| `S` / `Down`        | move backward                           |
| `A` / `D`           | strafe left / right                     |
| `Left` / `Right`    | turn the camera                         |
| `Left Shift`        | forward and backward moves 1.5× faster  |
| `Escape`            | quit                                    |

You cannot walk through walls. When a move is blocked, the player slides
along the wall one axis at a time.

## The `.cub` format

Put the configuration first and the map last:

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png

F 220,100,0
C 225,30,0

111111
100101
101001
1100N1
111111
```

**Textures.** Each of `NO`, `SO`, `WE` and `EA` takes one path. A space must
follow the identifier. Each path must end in `.png` and point to a readable
file.

**Colours.** `F` and `C` set the floor and ceiling colours as `R,G,B`. A space
must follow the identifier, and each value must be an integer from 0 to 255.

**Identifiers and blank lines.** Each identifier may appear only once. Blank
lines may go between the entries. A line that starts with anything else is an
error.

**Map rows.** A map row is any line whose first non-blank character is `1`.

**Map characters.**
* `0` is floor and `1` is wall.
* Spaces are empty space. Tabs and carriage returns count as spaces.
* Exactly one of `N`, `S`, `E`, `W` marks the player's start and the way the
  player faces.

**Map shape.**
* The map must be a single block at the end of the file.
* The area the player can reach must be closed by walls.
* The map must be at least 4×4, 3×5 or 5×3.

## Using it as a library

Rendering needs no window. Colours are packed as `0xRRGGBBAA` integers, and
textures are raw RGBA bytes:

```python
from cubraycaster.mapgrid import load_map
from cubraycaster.player import player_from_map
from cubraycaster.raycast import Frame, Texture, render_frame, rgb_to_rgba

scene = load_map("scene.cub")          # raises CubError if invalid
player = player_from_map(scene)
print(scene.width, scene.height, player.x, player.y)

grey = Texture(1, 1, bytes([128, 128, 128, 255]))
textures = {side: grey for side in "NSWE"}
frame = render_frame(
    Frame(320, 200),
    scene,
    player,
    textures,
    rgb_to_rgba(scene.floor_color),
    rgb_to_rgba(scene.ceiling_color),
)
print(hex(frame.get_pixel(160, 100)))
```

### Modules

* `cubraycaster.errors`: `CubError`. Its `render()` method returns the text
  that the command prints.
* `cubraycaster.models`:
  * `MapData`, the parsed scene.
  * `SimulationConfig`, the screen size and movement speeds.
* `cubraycaster.parsing`: parses textures and colours (`parse_config`,
  `parse_color`, `parse_texture_path`, `ensure_config_ready`).
* `cubraycaster.mapgrid`: measures, copies and validates the map
  (`measure_map`, `copy_map`, `flood_fill`, `check_map_validity`), then
  `parse_cub` for a list of lines and `load_map` for a file.
* `cubraycaster.player`: `Player` with `rotate`, `move_linear`,
  `move_lateral` and `attempt_move`, plus `player_from_map` and
  `has_wall_at`.
* `cubraycaster.raycast`: `cast_ray`, `texture_column`, `draw_column`,
  `render_frame`, `shade_color`, `Frame` and `Texture`.
* `cubraycaster.app`:
  * `Game`: its `step(Controls)` method moves the player and redraws the
    frame, and its `describe()` method returns the scene and player dump.
  * `load_texture`, which reads a PNG into a `Texture`.
  * `main`, the command-line entry point.