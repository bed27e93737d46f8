"""Reading the configuration part of a .cub file: textures and colours."""

from __future__ import annotations

import os
from collections.abc import Iterable

from .errors import (
    ERROR_DUPLICATE_COLOR,
    ERROR_DUPLICATE_TEXTURE,
    ERROR_EMPTY_FILE,
    ERROR_INVALID_RGB,
    ERROR_MISSING_COLOR_VALUE,
    ERROR_MISSING_CONFIG,
    ERROR_MISSING_TEXTURE_PATH,
    ERROR_TEXTURE_NOT_ACCESSIBLE,
    ERROR_TEXTURE_NOT_PNG,
    ERROR_TEXTURE_PATH_EMPTY,
    CubError,
)
from .models import RGB, MapData

WHITESPACE = " \t\n\v\f\r"
_DIGITS = "0123456789"
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

_TEXTURE_KEYS = {
    "NO": "north_texture",
    "SO": "south_texture",
    "WE": "west_texture",
    "EA": "east_texture",
}
_COLOR_KEYS = {"F": "floor_color", "C": "ceiling_color"}
_IDENTIFIER_STARTS = frozenset("NSWEFC1")


def parse_int_strict(text: str) -> int:
    """Parse a signed 32-bit integer with optional leading whitespace.

    Nothing may follow the digits. Raises ValueError otherwise.
    """
    body = text.lstrip(WHITESPACE)
    sign = 1
    if body[:1] in ("+", "-"):
        if body[0] == "-":
            sign = -1
        body = body[1:]
    rest = body.lstrip(_DIGITS)
    digits = body[: len(body) - len(rest)]
    value = sign * int(digits) if digits else 0
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    if rest:
        raise ValueError(f"invalid integer: {text!r}")
    return value


def parse_color(text: str) -> RGB:
    """Parse the part of a colour line after its identifier, e.g. ' 1,2,3'."""
    if not text.startswith(" "):
        raise CubError(ERROR_MISSING_COLOR_VALUE)
    parts = [part for part in text[1:].strip(WHITESPACE).split(",") if part]
    if len(parts) != 3:
        raise CubError(ERROR_INVALID_RGB)
    try:
        red, green, blue = (parse_int_strict(part) for part in parts)
    except ValueError as exc:
        raise CubError(ERROR_INVALID_RGB) from exc
    if not all(0 <= value <= 255 for value in (red, green, blue)):
        raise CubError(ERROR_INVALID_RGB)
    return (red, green, blue)


def parse_texture_path(text: str) -> str:
    """Parse the part of a texture line after its identifier."""
    if not text.startswith(" "):
        raise CubError(ERROR_MISSING_TEXTURE_PATH)
    path = text[1:].strip(WHITESPACE)
    if not path:
        raise CubError(ERROR_TEXTURE_PATH_EMPTY)
    return path


def _apply_line(content: str, map_data: MapData) -> None:
    texture_attr = _TEXTURE_KEYS.get(content[:2])
    if texture_attr is not None:
        if getattr(map_data, texture_attr) is not None:
            raise CubError(ERROR_DUPLICATE_TEXTURE)
        setattr(map_data, texture_attr, parse_texture_path(content[2:]))
        return
    color_attr = _COLOR_KEYS.get(content[0])
    if color_attr is not None:
        if getattr(map_data, color_attr) is not None:
            raise CubError(ERROR_DUPLICATE_COLOR)
        setattr(map_data, color_attr, parse_color(content[1:]))


def parse_config(lines: Iterable[str], map_data: MapData) -> MapData:
    """Read texture and colour definitions from every line into ``map_data``.

    Map rows (starting with '1') and blank lines are passed over; any other
    unknown leading character is an error.
    """
    seen_any = False
    for line in lines:
        seen_any = True
        content = line.lstrip(WHITESPACE)
        if not content:
            continue
        if content[0] not in _IDENTIFIER_STARTS:
            raise CubError(
                "Invalid or unknown identifier found in .cub file. Expected: "
                "NO, SO, WE, EA, F, C, or map data. Ensure the map is a "
                "single, closed block surrounded by walls (1)."
            )
        _apply_line(content, map_data)
    if not seen_any:
        raise CubError(ERROR_EMPTY_FILE)
    return map_data


def is_png_path(path: str) -> bool:
    """True when the text after the last dot of ``path`` is exactly '.png'."""
    dot = path.rfind(".")
    if dot <= 0:
        return False
    return path[dot:] == ".png"


def _verify_readable(path: str) -> None:
    try:
        handle = os.open(path, os.O_RDONLY)
    except OSError as exc:
        raise CubError(ERROR_TEXTURE_NOT_ACCESSIBLE, path=path) from exc
    os.close(handle)


def ensure_config_ready(map_data: MapData) -> None:
    """Check that the configuration is complete and every texture is usable."""
    if not map_data.config_complete():
        raise CubError(ERROR_MISSING_CONFIG)
    paths = (
        map_data.north_texture,
        map_data.south_texture,
        map_data.west_texture,
        map_data.east_texture,
    )
    if not all(is_png_path(path) for path in paths):
        raise CubError(ERROR_TEXTURE_NOT_PNG)
    for path in paths:
        _verify_readable(path)