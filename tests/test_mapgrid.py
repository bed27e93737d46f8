import pytest

from cubraycaster.errors import (
    ERROR_EMPTY_FILE,
    ERROR_EMPTY_MAP,
    ERROR_INVALID_CHAR,
    ERROR_MAP_NOT_AT_THE_END,
    ERROR_MAP_NOT_CLOSED,
    ERROR_MAP_NOT_SINGLE_BLOCK,
    ERROR_MAP_TOO_SMALL,
    ERROR_MISSING_CONFIG,
    ERROR_NUMBER_CHARACTER,
    ERROR_OPEN,
    CubError,
)
from cubraycaster.mapgrid import (
    check_map_validity,
    copy_map,
    flood_fill,
    load_map,
    measure_map,
    parse_cub,
)
from cubraycaster.models import MapData

MAP = ["111111", "100001", "10N001", "100001", "111111"]


@pytest.fixture
def textures(tmp_path):
    paths = {}
    for key, name in (("NO", "north"), ("SO", "south"), ("WE", "west"), ("EA", "east")):
        path = tmp_path / f"{name}.png"
        path.write_bytes(b"")
        paths[key] = str(path)
    return paths


def _cub_lines(textures, rows, floor="F 10,20,30", ceiling="C 40,50,60"):
    lines = [f"{key} {path}\n" for key, path in textures.items()]
    if floor:
        lines.append(floor + "\n")
    if ceiling:
        lines.append(ceiling + "\n")
    lines.append("\n")
    lines.extend(row + "\n" for row in rows)
    return lines


def _map_data(rows):
    width = max(len(row) for row in rows)
    return MapData(grid=[row.ljust(width) for row in rows], width=width, height=len(rows))


def test_measure_map_counts_block():
    lines = ["NO a.png\n", "\n"] + [row + "\n" for row in MAP]
    assert measure_map(lines) == (len(MAP[0]), len(MAP))


def test_measure_map_width_is_longest_row_without_newline():
    rows = ["1111", "  1001111", "1N01", "1111"]
    lines = [row + "\n" for row in rows]
    assert measure_map(lines) == (max(len(r) for r in rows), len(rows))


def test_measure_map_without_map():
    assert measure_map(["F 1,2,3\n", "\n"]) == (0, 0)


def test_measure_map_second_block_rejected():
    lines = [row + "\n" for row in MAP] + ["\n", "1111\n"]
    with pytest.raises(CubError) as info:
        measure_map(lines)
    assert info.value.message == ERROR_MAP_NOT_SINGLE_BLOCK


def test_measure_map_content_after_map_rejected():
    lines = [row + "\n" for row in MAP] + ["\n", "NO x.png\n"]
    with pytest.raises(CubError) as info:
        measure_map(lines)
    assert info.value.message == ERROR_MAP_NOT_AT_THE_END


def test_measure_map_trailing_blank_lines_allowed():
    lines = [row + "\n" for row in MAP] + ["\n", "   \n", "\t\n"]
    assert measure_map(lines) == (len(MAP[0]), len(MAP))


def test_copy_map_pads_and_skips_config():
    rows = ["1111", "1N0111", "1001", "1111"]
    lines = ["F 1,2,3\n", "\n"] + [row + "\n" for row in rows]
    grid = copy_map(lines, 6, len(rows))
    assert len(grid) == len(rows)
    assert all(len(row) == 6 for row in grid)
    assert [row.rstrip(" ") for row in grid] == rows


def test_copy_map_stops_at_height():
    lines = [row + "\n" for row in MAP]
    assert copy_map(lines, 6, 2) == MAP[:2]


def test_flood_fill_closed_map():
    cells = flood_fill(MAP, 2, 2, 6, 5)
    assert (2, 2) in cells
    assert all(MAP[y][x] != "1" for x, y in cells)
    assert (0, 0) not in cells


def test_flood_fill_open_edge():
    grid = ["111111", "100001", "10N000", "100001", "111111"]
    with pytest.raises(CubError) as info:
        flood_fill(grid, 2, 2, 6, 5)
    assert info.value.message == ERROR_MAP_NOT_CLOSED


def test_flood_fill_hole_to_space():
    grid = ["111111", "100001", "10N0 1", "100001", "111111"]
    with pytest.raises(CubError) as info:
        flood_fill(grid, 2, 2, 6, 5)
    assert info.value.message == ERROR_MAP_NOT_CLOSED


def test_check_map_validity_records_player():
    data = _map_data(MAP)
    check_map_validity(data)
    assert data.player_direction == "N"
    assert (data.player_x_start, data.player_y_start) == (2.5, 2.5)


def test_check_map_validity_invalid_char():
    data = _map_data(["111111", "10X001", "10N001", "100001", "111111"])
    with pytest.raises(CubError) as info:
        check_map_validity(data)
    assert info.value.message == ERROR_INVALID_CHAR


@pytest.mark.parametrize(
    "rows",
    [
        ["111111", "10S001", "10N001", "100001", "111111"],
        ["111111", "100001", "100001", "100001", "111111"],
    ],
)
def test_check_map_validity_player_count(rows):
    with pytest.raises(CubError) as info:
        check_map_validity(_map_data(rows))
    assert info.value.message == ERROR_NUMBER_CHARACTER


def test_check_map_validity_too_small():
    with pytest.raises(CubError) as info:
        check_map_validity(_map_data(["111", "1N1", "111"]))
    assert info.value.message == ERROR_MAP_TOO_SMALL


def test_check_map_validity_accepts_five_by_three():
    data = _map_data(["11111", "1N001", "11111"])
    check_map_validity(data)
    assert data.player_direction == "N"


def test_check_map_validity_open_map():
    data = _map_data(["111111", "100001", "10E000", "100001", "111111"])
    with pytest.raises(CubError) as info:
        check_map_validity(data)
    assert info.value.message == ERROR_MAP_NOT_CLOSED


def test_parse_cub_full(textures):
    data = parse_cub(_cub_lines(textures, MAP))
    assert data.grid == MAP
    assert (data.width, data.height) == (len(MAP[0]), len(MAP))
    assert data.floor_color == (10, 20, 30)
    assert data.ceiling_color == (40, 50, 60)
    assert data.north_texture == textures["NO"]
    assert data.player_direction == "N"


def test_parse_cub_replaces_tabs(textures):
    rows = ["111111\t", "100001", "10W001", "100001", "111111"]
    data = parse_cub(_cub_lines(textures, rows))
    assert all("\t" not in row for row in data.grid)
    assert data.grid[0] == "111111 "


def test_parse_cub_without_map(textures):
    with pytest.raises(CubError) as info:
        parse_cub(_cub_lines(textures, []))
    assert info.value.message == ERROR_EMPTY_MAP


def test_parse_cub_missing_color(textures):
    with pytest.raises(CubError) as info:
        parse_cub(_cub_lines(textures, MAP, floor=None))
    assert info.value.message == ERROR_MISSING_CONFIG


def test_load_map_missing_file(tmp_path):
    with pytest.raises(CubError) as info:
        load_map(str(tmp_path / "absent.cub"))
    assert info.value.message == ERROR_OPEN


def test_load_map_empty_file(tmp_path):
    path = tmp_path / "empty.cub"
    path.write_bytes(b"")
    with pytest.raises(CubError) as info:
        load_map(str(path))
    assert info.value.message == ERROR_EMPTY_FILE


def test_load_map_round_trip(tmp_path, textures):
    path = tmp_path / "level.cub"
    path.write_text("".join(_cub_lines(textures, MAP)), encoding="utf-8")
    data = load_map(str(path))
    assert data.grid == MAP
    assert data.east_texture == textures["EA"]


def test_load_map_crlf(tmp_path, textures):
    text = "".join(_cub_lines(textures, MAP)).replace("\n", "\r\n")
    path = tmp_path / "windows.cub"
    path.write_bytes(text.encode("utf-8"))
    data = load_map(str(path))
    assert all("\r" not in row for row in data.grid)
    assert [row.rstrip(" ") for row in data.grid] == MAP
    assert data.width == len(MAP[0]) + 1