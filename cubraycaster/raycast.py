"""Raycasting: casting rays through the grid and drawing textured columns.

Colours are 32-bit integers packed as ``0xRRGGBBAA``. Frame and texture
pixels are stored as RGBA bytes, four per pixel, row by row.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field

from .models import RGB, MapData
from .player import Player

_WALL = "1"
_NEAR_ZERO = 1e-10


@dataclass
class Ray:
    """State of one ray while it walks the grid, and where it stopped."""

    dir_x: float
    dir_y: float
    tile_x: int
    tile_y: int
    step_x: int
    step_y: int
    side_dist_x: float
    side_dist_y: float
    delta_dist_x: float
    delta_dist_y: float
    side: int = 0
    perp_distance: float = 0.0


@dataclass(frozen=True)
class Texture:
    """An RGBA image: ``width * height * 4`` bytes, row by row."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("texture dimensions must be positive")
        if len(self.pixels) != self.width * self.height * 4:
            raise ValueError(
                f"expected {self.width * self.height * 4} bytes of pixels, "
                f"got {len(self.pixels)}"
            )


@dataclass
class Frame:
    """A drawable RGBA image the size of the screen."""

    width: int
    height: int
    pixels: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("frame dimensions must be positive")
        self.pixels = bytearray(self.width * self.height * 4)

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set pixel (x, y) to ``color``; points outside the frame are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            offset = (y * self.width + x) * 4
            self.pixels[offset : offset + 4] = (color & 0xFFFFFFFF).to_bytes(
                4, "big"
            )

    def get_pixel(self, x: int, y: int) -> int:
        """Return the packed colour at (x, y); IndexError outside the frame."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the frame")
        offset = (y * self.width + x) * 4
        return int.from_bytes(self.pixels[offset : offset + 4], "big")


def rgb_to_rgba(rgb: RGB) -> int:
    """Pack an (r, g, b) triple into an opaque ``0xRRGGBBAA`` colour."""
    red, green, blue = rgb
    return (red << 24) | (green << 16) | (blue << 8) | 0xFF


def texel_color(texture: Texture, x: int, y: int) -> int:
    """Return the packed colour of texture pixel (x, y)."""
    if not (0 <= x < texture.width and 0 <= y < texture.height):
        raise IndexError(f"texel ({x}, {y}) is outside the texture")
    offset = (y * texture.width + x) * 4
    return int.from_bytes(texture.pixels[offset : offset + 4], "big")


def shade_color(color: int) -> int:
    """Halve the red, green and blue channels, keeping alpha."""
    alpha = color & 0x000000FF
    rgb = (color >> 8) & 0x00FFFFFF
    rgb = (rgb >> 1) & 0x007F7F7F
    return (rgb << 8) | alpha


def _delta_distance(component: float) -> float:
    if abs(component) < _NEAR_ZERO:
        return math.inf
    return 1.0 / abs(component)


def _initial_side_distance(
    position: float, tile: int, direction: float, delta: float
) -> tuple[int, float]:
    if direction < 0:
        return -1, (position - tile) * delta
    return 1, (tile + 1.0 - position) * delta


def cast_ray(
    map_data: MapData, player: Player, screen_x: int, screen_width: int
) -> Ray:
    """Cast the ray for screen column ``screen_x`` until it hits a wall."""
    camera_x = 2.0 * screen_x / float(screen_width) - 1.0
    dir_x = player.dir_x + player.plane_x * camera_x
    dir_y = player.dir_y + player.plane_y * camera_x
    tile_x = int(player.x)
    tile_y = int(player.y)
    delta_x = _delta_distance(dir_x)
    delta_y = _delta_distance(dir_y)
    step_x, side_x = _initial_side_distance(player.x, tile_x, dir_x, delta_x)
    step_y, side_y = _initial_side_distance(player.y, tile_y, dir_y, delta_y)
    ray = Ray(
        dir_x=dir_x,
        dir_y=dir_y,
        tile_x=tile_x,
        tile_y=tile_y,
        step_x=step_x,
        step_y=step_y,
        side_dist_x=side_x,
        side_dist_y=side_y,
        delta_dist_x=delta_x,
        delta_dist_y=delta_y,
    )
    while True:
        if ray.side_dist_x < ray.side_dist_y:
            ray.side_dist_x += ray.delta_dist_x
            ray.tile_x += ray.step_x
            ray.side = 0
        else:
            ray.side_dist_y += ray.delta_dist_y
            ray.tile_y += ray.step_y
            ray.side = 1
        if map_data.tile(ray.tile_x, ray.tile_y) == _WALL:
            break
    if ray.side == 0:
        ray.perp_distance = ray.side_dist_x - ray.delta_dist_x
    else:
        ray.perp_distance = ray.side_dist_y - ray.delta_dist_y
    return ray


def _wall_texture(ray: Ray, textures: Mapping[str, Texture]) -> Texture:
    if ray.side != 0:
        return textures["N"] if ray.dir_y < 0 else textures["S"]
    return textures["W"] if ray.dir_x < 0 else textures["E"]


def texture_column(
    ray: Ray, player: Player, textures: Mapping[str, Texture]
) -> tuple[Texture, int]:
    """Pick the wall texture hit by ``ray`` and the texture column to draw.

    ``textures`` maps 'N', 'S', 'W' and 'E' to their textures.
    """
    texture = _wall_texture(ray, textures)
    if ray.side == 1:
        wall_x = player.x + ray.perp_distance * ray.dir_x
    else:
        wall_x = player.y + ray.perp_distance * ray.dir_y
    wall_x -= math.floor(wall_x)
    hit_x = int(wall_x * texture.width)
    if (ray.side == 0 and ray.dir_x > 0) or (ray.side == 1 and ray.dir_y < 0):
        hit_x = texture.width - hit_x - 1
    return texture, hit_x


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def draw_column(
    frame: Frame,
    screen_x: int,
    ray: Ray,
    texture: Texture,
    wall_hit_x: int,
    floor_color: int,
    ceiling_color: int,
) -> None:
    """Draw ceiling, textured wall slice and floor for one screen column."""
    screen_height = frame.height
    if ray.perp_distance > 0:
        wall_height = int(screen_height / ray.perp_distance)
    else:
        wall_height = screen_height
    if wall_height <= 0:
        wall_height = 1
    half = wall_height // 2
    wall_start = max(-half + screen_height // 2, 0)
    wall_end = min(half + screen_height // 2, screen_height - 1)

    for y in range(wall_start):
        frame.put_pixel(screen_x, y, ceiling_color)

    step = texture.height / wall_height
    texture_y = (
        wall_start - _trunc_div(screen_height - wall_height, 2)
    ) * step
    for y in range(wall_start, wall_end + 1):
        color = texel_color(
            texture, wall_hit_x, int(texture_y) % texture.height
        )
        if ray.side == 1:
            color = shade_color(color)
        frame.put_pixel(screen_x, y, color)
        texture_y += step

    for y in range(wall_end + 1, screen_height):
        frame.put_pixel(screen_x, y, floor_color)


def render_frame(
    frame: Frame,
    map_data: MapData,
    player: Player,
    textures: Mapping[str, Texture],
    floor_color: int,
    ceiling_color: int,
) -> Frame:
    """Render the player's view into every column of ``frame``."""
    for screen_x in range(frame.width):
        ray = cast_ray(map_data, player, screen_x, frame.width)
        texture, hit_x = texture_column(ray, player, textures)
        draw_column(
            frame, screen_x, ray, texture, hit_x, floor_color, ceiling_color
        )
    return frame