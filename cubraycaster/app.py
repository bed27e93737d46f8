"""The game window: argument checks, texture loading, input and main loop."""

from __future__ import annotations

import enum
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from .errors import (  # noqa: E402
    ERROR_ARGC,
    ERROR_CUB,
    ERROR_DISPLAY_INIT,
    ERROR_LOAD_IMAGE,
    ERROR_LOAD_TEXTURE,
    ERROR_MISSING_CONFIG,
    ERROR_NEW_IMAGE,
    INFO_ESCAPE_EXIT,
    INFO_WINDOW_CLOSE,
    CubError,
)
from .mapgrid import load_map  # noqa: E402
from .models import MapData, SimulationConfig  # noqa: E402
from .player import player_from_map  # noqa: E402
from .raycast import Frame, Texture, render_frame, rgb_to_rgba  # noqa: E402

WINDOW_TITLE = "cubraycaster"
FRAMES_PER_SECOND = 60

_YELLOW = "\033[1;33m"
_CYAN_BOLD = "\033[1;36m"
_RESET = "\033[0m"
_RULE = "====================\n"
_DEBUG_CHARS = {"\0": "*", " ": ".", "\t": "\\t", "\r": "\\r"}


def is_cub_file(path: str) -> bool:
    """True when the text after the last dot of ``path`` is exactly '.cub'."""
    dot = path.rfind(".")
    if dot <= 0:
        return False
    return path[dot:] == ".cub"


def validate_arguments(argv: Sequence[str]) -> str:
    """Check the command-line arguments and return the map path."""
    if len(argv) != 1:
        raise CubError(ERROR_ARGC)
    if not is_cub_file(argv[0]):
        raise CubError(ERROR_CUB)
    return argv[0]


def _surface_to_rgba(surface: pygame.Surface) -> bytes:
    encode = getattr(pygame.image, "tobytes", None) or pygame.image.tostring
    return encode(surface, "RGBA")


def load_texture(path: str) -> Texture:
    """Load a PNG file into an RGBA texture."""
    try:
        surface = pygame.image.load(path)
    except (pygame.error, OSError) as exc:
        raise CubError(ERROR_LOAD_TEXTURE) from exc
    width, height = surface.get_size()
    try:
        return Texture(width, height, _surface_to_rgba(surface))
    except (pygame.error, ValueError) as exc:
        raise CubError(ERROR_LOAD_IMAGE) from exc


@dataclass(frozen=True)
class Controls:
    """Which game actions are held down during one tick."""

    escape: bool = False
    sprint: bool = False
    turn_left: bool = False
    turn_right: bool = False
    forward: bool = False
    backward: bool = False
    strafe_left: bool = False
    strafe_right: bool = False


def _controls_from_keys(pressed: Sequence[bool]) -> Controls:
    return Controls(
        escape=bool(pressed[pygame.K_ESCAPE]),
        sprint=bool(pressed[pygame.K_LSHIFT]),
        turn_left=bool(pressed[pygame.K_LEFT]),
        turn_right=bool(pressed[pygame.K_RIGHT]),
        forward=bool(pressed[pygame.K_w] or pressed[pygame.K_UP]),
        backward=bool(pressed[pygame.K_s] or pressed[pygame.K_DOWN]),
        strafe_left=bool(pressed[pygame.K_a]),
        strafe_right=bool(pressed[pygame.K_d]),
    )


class Game:
    """A running game: map, player, textures and the screen frame."""

    def __init__(
        self,
        map_data: MapData,
        textures: Mapping[str, Texture],
        config: SimulationConfig | None = None,
    ) -> None:
        self.map_data = map_data
        self.config = config if config is not None else SimulationConfig()
        self.player = player_from_map(map_data)
        if map_data.floor_color is None or map_data.ceiling_color is None:
            raise CubError(ERROR_MISSING_CONFIG)
        self.floor_color = rgb_to_rgba(map_data.floor_color)
        self.ceiling_color = rgb_to_rgba(map_data.ceiling_color)
        self.textures = dict(textures)
        try:
            self.frame = Frame(
                self.config.screen_width, self.config.screen_height
            )
        except ValueError as exc:
            raise CubError(ERROR_NEW_IMAGE) from exc
        self.running = True

    def apply_controls(self, controls: Controls) -> bool:
        """Move the player; return False when the game should end."""
        if controls.escape:
            self.running = False
            return False
        config = self.config
        linear = config.linear_speed
        if controls.sprint:
            linear *= config.sprint_factor
        if controls.turn_left:
            self.player.rotate(-config.rotation_speed)
        if controls.turn_right:
            self.player.rotate(config.rotation_speed)
        if controls.forward:
            self.player.move_linear(self.map_data, linear, +1)
        if controls.backward:
            self.player.move_linear(self.map_data, linear, -1)
        if controls.strafe_left:
            self.player.move_lateral(self.map_data, config.lateral_speed, -1)
        if controls.strafe_right:
            self.player.move_lateral(self.map_data, config.lateral_speed, +1)
        return True

    def step(self, controls: Controls) -> bool:
        """Handle one tick of input and redraw the frame.

        Returns False, without drawing, when the game should end.
        """
        if not self.apply_controls(controls):
            return False
        render_frame(
            self.frame,
            self.map_data,
            self.player,
            self.textures,
            self.floor_color,
            self.ceiling_color,
        )
        return True

    def _describe_layout(self) -> str:
        data = self.map_data
        rows = []
        for y in range(data.height):
            cells = "".join(
                _DEBUG_CHARS.get(data.tile(x, y), data.tile(x, y))
                for x in range(data.width)
            )
            rows.append(f"|{cells}|\n")
        return (
            f"\n{_YELLOW}Map Layout:{_RESET}\n\n{_RULE}"
            + "".join(rows)
            + _RULE
        )

    def describe(self) -> str:
        """Return a readable dump of the map data and the player state."""
        data = self.map_data
        player = self.player
        floor = data.floor_color or (0, 0, 0)
        ceiling = data.ceiling_color or (0, 0, 0)

        def show(path: str | None) -> str:
            return path if path is not None else "(null)"

        parts = [
            f"\n{_CYAN_BOLD}=== Map Data ==={_RESET}\n",
            f"\n{_YELLOW}Map Dimensions:{_RESET}\n",
            f"  Width : {data.width}\n",
            f"  Height: {data.height}\n",
            self._describe_layout()
            if data.grid
            else f"\n{_YELLOW}Map Layout:{_RESET} (none loaded)\n",
            f"\n{_YELLOW}Floor Color:{_RESET}   "
            f"R:{floor[0]:3d} G:{floor[1]:3d} B:{floor[2]:3d}\n",
            f"{_YELLOW}Ceiling Color:{_RESET} "
            f"R:{ceiling[0]:3d} G:{ceiling[1]:3d} B:{ceiling[2]:3d}\n",
            f"\n{_YELLOW}Textures:{_RESET}\n",
            f"  North:  {show(data.north_texture)}\n",
            f"  South:  {show(data.south_texture)}\n",
            f"  West:   {show(data.west_texture)}\n",
            f"  East:   {show(data.east_texture)}\n",
            f"\n{_YELLOW}Player Info:{_RESET}\n",
            f"  Position: ({data.player_x_start:.2f}, "
            f"{data.player_y_start:.2f})\n",
            f"  Direction: '{data.player_direction or '-'}'\n",
            f"\n{_CYAN_BOLD}======================{_RESET}\n",
            "=== Player Data ===\n",
            f"Position   : ({player.x:.2f}, {player.y:.2f})\n",
            f"Direction  : ({player.dir_x:.3f}, {player.dir_y:.3f})\n",
            f"Plane (FOV): ({player.plane_x:.3f}, {player.plane_y:.3f})\n",
            _RULE,
        ]
        return "".join(parts)


class _Outcome(enum.Enum):
    ESCAPED = enum.auto()
    WINDOW_CLOSED = enum.auto()


def _load_textures(map_data: MapData) -> dict[str, Texture]:
    return {
        "N": load_texture(map_data.north_texture),
        "S": load_texture(map_data.south_texture),
        "W": load_texture(map_data.west_texture),
        "E": load_texture(map_data.east_texture),
    }


def _run(game: Game, window: pygame.Surface) -> _Outcome:
    clock = pygame.time.Clock()
    size = (game.frame.width, game.frame.height)
    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return _Outcome.WINDOW_CLOSED
        controls = _controls_from_keys(pygame.key.get_pressed())
        if not game.step(controls):
            return _Outcome.ESCAPED
        image = pygame.image.frombuffer(bytes(game.frame.pixels), size, "RGBA")
        window.blit(image, (0, 0))
        pygame.display.flip()
        clock.tick(FRAMES_PER_SECOND)


def main(argv: Sequence[str] | None = None) -> int:
    """Load the map named on the command line and run the game."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        path = validate_arguments(args)
        map_data = load_map(path)
    except CubError as exc:
        sys.stderr.write(exc.render())
        return exc.exit_code

    config = SimulationConfig()
    pygame.init()
    try:
        try:
            window = pygame.display.set_mode(
                (config.screen_width, config.screen_height)
            )
        except pygame.error as exc:
            raise CubError(ERROR_DISPLAY_INIT) from exc
        pygame.display.set_caption(WINDOW_TITLE)
        game = Game(map_data, _load_textures(map_data), config)
        outcome = _run(game, window)
    except CubError as exc:
        sys.stderr.write(exc.render())
        return exc.exit_code
    finally:
        pygame.quit()

    if outcome is _Outcome.WINDOW_CLOSED:
        sys.stdout.write(game.describe())
        sys.stdout.write(INFO_WINDOW_CLOSE)
    else:
        sys.stdout.write(INFO_ESCAPE_EXIT)
    return 0