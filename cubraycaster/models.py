"""Data shared by the parser, the game and the renderer."""

from __future__ import annotations

from dataclasses import dataclass, field

RGB = tuple[int, int, int]


@dataclass
class MapData:
    """Everything read from a .cub file.

    ``grid`` holds one string per map row, each padded with spaces to
    ``width``. A colour of ``None`` means it has not been defined yet.
    """

    grid: list[str] = field(default_factory=list)
    width: int = 0
    height: int = 0
    floor_color: RGB | None = None
    ceiling_color: RGB | None = None
    north_texture: str | None = None
    south_texture: str | None = None
    west_texture: str | None = None
    east_texture: str | None = None
    player_direction: str = ""
    player_x_start: float = 0.0
    player_y_start: float = 0.0

    def tile(self, x: int, y: int) -> str:
        """Return the map character at column ``x``, row ``y``.

        Raises IndexError when the cell lies outside the map.
        """
        if not (0 <= y < self.height and 0 <= x < self.width):
            raise IndexError(f"tile ({x}, {y}) is outside the map")
        row = self.grid[y]
        return row[x] if x < len(row) else " "

    def config_complete(self) -> bool:
        """True when all four textures and both colours are defined."""
        textures = (
            self.north_texture,
            self.south_texture,
            self.west_texture,
            self.east_texture,
        )
        return (
            all(path is not None for path in textures)
            and self.floor_color is not None
            and self.ceiling_color is not None
        )


@dataclass(frozen=True)
class SimulationConfig:
    """Screen size, texture size and movement speeds."""

    screen_width: int = 1920
    screen_height: int = 1080
    texture_width: int = 256
    texture_height: int = 256
    linear_speed: float = 0.04
    lateral_speed: float = 0.04
    rotation_speed: float = 0.025
    sprint_factor: float = 1.5