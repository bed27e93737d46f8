"""Reading, measuring and validating the map block of a .cub file."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator, Sequence

from .errors import (
    ERROR_EMPTY_MAP,
    ERROR_INVALID_CHAR,
    ERROR_MAP_NOT_AT_THE_END,
    ERROR_MAP_NOT_CLOSED,
    ERROR_MAP_NOT_SINGLE_BLOCK,
    ERROR_MAP_TOO_SMALL,
    ERROR_NUMBER_CHARACTER,
    ERROR_OPEN,
    CubError,
)
from .models import MapData
from .parsing import WHITESPACE, ensure_config_ready, parse_config

PLAYER_CHARS = frozenset("NSEW")
_MAP_CHARS = frozenset("10 ") | PLAYER_CHARS


class _Phase(enum.Enum):
    BEFORE = enum.auto()
    INSIDE = enum.auto()
    AFTER = enum.auto()


def _first_char(line: str) -> str:
    return line.lstrip(WHITESPACE)[:1]


def _row_length(line: str) -> int:
    return len(line) - 1 if line.endswith("\n") else len(line)


def measure_map(lines: Iterable[str]) -> tuple[int, int]:
    """Return ``(width, height)`` of the single map block in ``lines``.

    A map row is a line whose first non-blank character is '1'. The line
    that closes the block is passed over; every later line must be blank.
    """
    width = height = 0
    phase = _Phase.BEFORE
    for line in lines:
        first = _first_char(line)
        if phase is _Phase.AFTER:
            if first == "1":
                raise CubError(ERROR_MAP_NOT_SINGLE_BLOCK)
            if first:
                raise CubError(ERROR_MAP_NOT_AT_THE_END)
            continue
        if first == "1":
            height += 1
            width = max(width, _row_length(line))
            phase = _Phase.INSIDE
        elif phase is _Phase.INSIDE:
            phase = _Phase.AFTER
    return width, height


def copy_map(lines: Iterable[str], width: int, height: int) -> list[str]:
    """Collect the first ``height`` map rows, each padded with spaces."""
    rows: list[str] = []
    for line in lines:
        if len(rows) >= height:
            break
        if _first_char(line) != "1":
            continue
        row = line[:-1] if line.endswith("\n") else line
        rows.append(row.ljust(width))
    return rows


def flood_fill(
    grid: Sequence[str], x: int, y: int, width: int, height: int
) -> frozenset[tuple[int, int]]:
    """Return every cell reachable from (x, y) without crossing a wall.

    Raises CubError when the region touches a space or the map's edge.
    """
    filled: set[tuple[int, int]] = set()
    stack = [(x, y)]
    while stack:
        cx, cy = stack.pop()
        if not (0 <= cy < height and 0 <= cx < width):
            raise CubError(ERROR_MAP_NOT_CLOSED)
        if (cx, cy) in filled:
            continue
        row = grid[cy]
        cell = row[cx] if cx < len(row) else " "
        if cell == "1":
            continue
        if cell in (" ", "\0"):
            raise CubError(ERROR_MAP_NOT_CLOSED)
        filled.add((cx, cy))
        stack.extend(
            ((cx + 1, cy), (cx - 1, cy), (cx, cy + 1), (cx, cy - 1))
        )
    return frozenset(filled)


def _count_players(grid: Iterable[str]) -> int:
    players = 0
    for row in grid:
        for cell in row:
            if cell in PLAYER_CHARS:
                players += 1
            elif cell not in _MAP_CHARS:
                raise CubError(ERROR_INVALID_CHAR)
    return players


def _locate_player(map_data: MapData) -> None:
    for y, row in enumerate(map_data.grid[: map_data.height]):
        for x, cell in enumerate(row[: map_data.width]):
            if cell in PLAYER_CHARS:
                map_data.player_direction = cell
                map_data.player_x_start = x + 0.5
                map_data.player_y_start = y + 0.5
                return


def _check_min_size(width: int, height: int) -> None:
    if not (
        (width >= 4 and height >= 4)
        or (width >= 3 and height >= 5)
        or (width >= 5 and height >= 3)
    ):
        raise CubError(ERROR_MAP_TOO_SMALL)


def check_map_validity(map_data: MapData) -> None:
    """Validate the grid and record the player's start in ``map_data``."""
    if _count_players(map_data.grid) != 1:
        raise CubError(ERROR_NUMBER_CHARACTER)
    _locate_player(map_data)
    _check_min_size(map_data.width, map_data.height)
    flood_fill(
        map_data.grid,
        int(map_data.player_x_start),
        int(map_data.player_y_start),
        map_data.width,
        map_data.height,
    )


def parse_cub(lines: Iterable[str]) -> MapData:
    """Build a fully validated MapData from the lines of a .cub file."""
    lines = list(lines)
    map_data = parse_config(lines, MapData())
    width, height = measure_map(lines)
    grid = [
        row.replace("\t", " ").replace("\r", " ")
        for row in copy_map(lines, width, height)
    ]
    if not grid or height == 0:
        raise CubError(ERROR_EMPTY_MAP)
    map_data.grid = grid
    map_data.width = width
    map_data.height = height
    ensure_config_ready(map_data)
    check_map_validity(map_data)
    return map_data


def _split_lines(text: str) -> Iterator[str]:
    parts = text.split("\n")
    for part in parts[:-1]:
        yield part + "\n"
    if parts[-1]:
        yield parts[-1]


def load_map(path: str) -> MapData:
    """Read and validate the .cub file at ``path``."""
    try:
        with open(
            path, encoding="utf-8", errors="surrogateescape", newline=""
        ) as handle:
            text = handle.read()
    except OSError as exc:
        raise CubError(ERROR_OPEN) from exc
    return parse_cub(_split_lines(text))