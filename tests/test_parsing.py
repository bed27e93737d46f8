import pytest

from cubraycaster import errors
from cubraycaster.errors import CubError
from cubraycaster.models import MapData
from cubraycaster.parsing import (
    ensure_config_ready,
    is_png_path,
    parse_color,
    parse_config,
    parse_int_strict,
    parse_texture_path,
)

CONFIG_LINES = [
    "NO ./n.png\n",
    "SO ./s.png\n",
    "WE ./w.png\n",
    "EA ./e.png\n",
    "\n",
    "F 220,100,0\n",
    "C 225,30,0\n",
    "\n",
    "1111\n",
    "1N01\n",
    "1111\n",
]


@pytest.mark.parametrize(
    ("text", "expected"),
    [("42", 42), (" -7", -7), ("+3", 3), ("-2147483648", -2147483648), ("", 0)],
)
def test_parse_int_strict_accepts(text, expected):
    assert parse_int_strict(text) == expected


@pytest.mark.parametrize("text", ["12a", "2147483648", "10 ", "1.5"])
def test_parse_int_strict_rejects(text):
    with pytest.raises(ValueError):
        parse_int_strict(text)


def test_parse_color_valid():
    assert parse_color(" 255,0,128\n") == (255, 0, 128)


def test_parse_color_skips_empty_fields():
    assert parse_color(" 1,,2,3") == (1, 2, 3)


def test_parse_color_requires_space():
    with pytest.raises(CubError) as exc:
        parse_color("1,2,3")
    assert exc.value.message == errors.ERROR_MISSING_COLOR_VALUE


@pytest.mark.parametrize(
    "text", [" 256,0,0", " 1,2", " 1,2,3,4", " -1,0,0", " 10 , 20, 30", " "]
)
def test_parse_color_invalid(text):
    with pytest.raises(CubError) as exc:
        parse_color(text)
    assert exc.value.message == errors.ERROR_INVALID_RGB


def test_parse_texture_path_trims():
    assert parse_texture_path(" \t./a.png \n") == "./a.png"


def test_parse_texture_path_missing_space():
    with pytest.raises(CubError) as exc:
        parse_texture_path("./a.png")
    assert exc.value.message == errors.ERROR_MISSING_TEXTURE_PATH


def test_parse_texture_path_empty():
    with pytest.raises(CubError) as exc:
        parse_texture_path("   \n")
    assert exc.value.message == errors.ERROR_TEXTURE_PATH_EMPTY


def test_parse_config_reads_all_fields():
    data = parse_config(CONFIG_LINES, MapData())
    assert data.north_texture == "./n.png"
    assert data.south_texture == "./s.png"
    assert data.west_texture == "./w.png"
    assert data.east_texture == "./e.png"
    assert data.floor_color == (220, 100, 0)
    assert data.ceiling_color == (225, 30, 0)
    assert data.config_complete()


def test_parse_config_leading_whitespace():
    data = parse_config(["   NO ./n.png\n"], MapData())
    assert data.north_texture == "./n.png"


def test_parse_config_duplicate_texture():
    with pytest.raises(CubError) as exc:
        parse_config(["NO ./a.png\n", "NO ./b.png\n"], MapData())
    assert exc.value.message == errors.ERROR_DUPLICATE_TEXTURE


def test_parse_config_duplicate_color():
    with pytest.raises(CubError) as exc:
        parse_config(["F 1,2,3\n", "F 1,2,3\n"], MapData())
    assert exc.value.message == errors.ERROR_DUPLICATE_COLOR


def test_parse_config_unknown_identifier():
    with pytest.raises(CubError) as exc:
        parse_config(["X something\n"], MapData())
    assert exc.value.message == errors.ERROR_UNKNOWN_IDENTIFIER


def test_parse_config_empty_file():
    with pytest.raises(CubError) as exc:
        parse_config([], MapData())
    assert exc.value.message == errors.ERROR_EMPTY_FILE


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("./a.png", True),
        (".png", False),
        ("a.jpg", False),
        ("noext", False),
        ("dir.png/x", False),
    ],
)
def test_is_png_path(path, expected):
    assert is_png_path(path) is expected


def _complete(tmp_path, names=("n.png", "s.png", "w.png", "e.png"), create=True):
    paths = [tmp_path / name for name in names]
    if create:
        for path in paths:
            path.write_bytes(b"")
    return MapData(
        north_texture=str(paths[0]),
        south_texture=str(paths[1]),
        west_texture=str(paths[2]),
        east_texture=str(paths[3]),
        floor_color=(0, 0, 0),
        ceiling_color=(255, 255, 255),
    )


def test_ensure_config_ready_accepts_existing_files(tmp_path):
    data = _complete(tmp_path)
    assert ensure_config_ready(data) is None
    assert data.config_complete()


def test_ensure_config_ready_missing_config():
    with pytest.raises(CubError) as exc:
        ensure_config_ready(MapData(north_texture="./n.png"))
    assert exc.value.message == errors.ERROR_MISSING_CONFIG


def test_ensure_config_ready_not_png(tmp_path):
    data = _complete(tmp_path, names=("n.png", "s.png", "w.jpg", "e.png"))
    with pytest.raises(CubError) as exc:
        ensure_config_ready(data)
    assert exc.value.message == errors.ERROR_TEXTURE_NOT_PNG


def test_ensure_config_ready_missing_file(tmp_path):
    data = _complete(tmp_path, create=False)
    with pytest.raises(CubError) as exc:
        ensure_config_ready(data)
    assert exc.value.message == errors.ERROR_TEXTURE_NOT_ACCESSIBLE
    assert exc.value.path == data.north_texture
    assert data.north_texture in exc.value.render()