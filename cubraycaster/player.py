"""Player position, orientation, rotation and collision-aware movement."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .models import MapData

_ORIENTATIONS = {
    "N": (0.0, -1.0, 0.66, 0.0),
    "S": (0.0, 1.0, -0.66, 0.0),
    "E": (1.0, 0.0, 0.0, 0.66),
    "W": (-1.0, 0.0, 0.0, -0.66),
}


def has_wall_at(map_data: MapData, x: int, y: int) -> bool:
    """True when cell (x, y) is a wall or lies outside the map."""
    if not (0 <= y < map_data.height and 0 <= x < map_data.width):
        return True
    return map_data.tile(x, y) == "1"


@dataclass
class Player:
    """Position, unit direction vector and camera plane vector."""

    x: float = 0.0
    y: float = 0.0
    dir_x: float = 0.0
    dir_y: float = 0.0
    plane_x: float = 0.0
    plane_y: float = 0.0

    def rotate(self, angle: float) -> None:
        """Rotate direction and camera plane by ``angle`` radians."""
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        self.dir_x, self.dir_y = (
            self.dir_x * cos_a - self.dir_y * sin_a,
            self.dir_x * sin_a + self.dir_y * cos_a,
        )
        self.plane_x, self.plane_y = (
            self.plane_x * cos_a - self.plane_y * sin_a,
            self.plane_x * sin_a + self.plane_y * cos_a,
        )

    def attempt_move(
        self, map_data: MapData, delta_x: float, delta_y: float
    ) -> None:
        """Move by the delta, sliding along walls axis by axis."""
        new_x = self.x + delta_x
        new_y = self.y + delta_y
        if has_wall_at(map_data, int(new_x), int(new_y)):
            return
        if not has_wall_at(map_data, int(new_x), int(self.y)):
            self.x = new_x
        if not has_wall_at(map_data, int(self.x), int(new_y)):
            self.y = new_y

    def move_linear(
        self, map_data: MapData, speed: float, direction: int
    ) -> None:
        """Step forwards (+1) or backwards (-1) along the view direction."""
        self.attempt_move(
            map_data,
            direction * self.dir_x * speed,
            direction * self.dir_y * speed,
        )

    def move_lateral(
        self, map_data: MapData, speed: float, direction: int
    ) -> None:
        """Strafe right (+1) or left (-1) along the camera plane."""
        self.attempt_move(
            map_data,
            direction * self.plane_x * speed,
            direction * self.plane_y * speed,
        )


def player_from_map(map_data: MapData) -> Player:
    """Place a player at the map's start cell, facing its start direction."""
    dir_x, dir_y, plane_x, plane_y = _ORIENTATIONS.get(
        map_data.player_direction, (0.0, 0.0, 0.0, 0.0)
    )
    return Player(
        x=map_data.player_x_start,
        y=map_data.player_y_start,
        dir_x=dir_x,
        dir_y=dir_y,
        plane_x=plane_x,
        plane_y=plane_y,
    )