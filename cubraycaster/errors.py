"""Error type and user-facing messages for map loading and the game."""

from __future__ import annotations

RED = "\033[91m"
CYAN = "\033[96m"
RESET = "\033[0m"

ERROR_ARGC = "This program takes a single argument as parameter."
ERROR_CUB = "This program takes a .cub map file as parameter."
ERROR_OPEN = "Error while opening file."
ERROR_EMPTY_FILE = "The file is empty."
ERROR_UNKNOWN_IDENTIFIER = (
    "Invalid or unknown identifier found in .cub file. Expected: NO, SO, WE, "
    "EA, F, C, or map data. Ensure the map is a single, closed block "
    "surrounded by walls (1)."
)
ERROR_MISSING_TEXTURE_PATH = (
    "Missing path after texture identifier. Expected one or more spaces "
    "followed by a valid texture path."
)
ERROR_TEXTURE_PATH_EMPTY = (
    "Texture path is empty. Expected a valid path after identifier "
    "(e.g. NO ./path_to_texture)."
)
ERROR_DUPLICATE_TEXTURE = (
    "Duplicate texture path detected. Each texture (NO, SO, WE, EA) must be "
    "defined only once in the .cub file."
)
ERROR_MISSING_COLOR_VALUE = (
    "Missing value after color identifier. Expected one or more spaces "
    "followed by a valid RGB value."
)
ERROR_DUPLICATE_COLOR = (
    "Duplicate color detected. Each color (F or C) must be defined only once "
    "in the .cub file."
)
ERROR_INVALID_RGB = (
    "Invalid RGB color format. Expected format: R,G,B with values between "
    "0 and 255."
)
ERROR_MAP_NOT_SINGLE_BLOCK = (
    "Map is not a single block. Unexpected map content after map ended."
)
ERROR_MAP_NOT_AT_THE_END = (
    "Invalid map position in .cub file.\n"
    "The map must appear at the end of the file."
)
ERROR_INVALID_CHAR = (
    "The map contains an invalid character.\n"
    "Only the following characters are allowed:\n"
    "'0' (floor), '1' (wall), 'N', 'S', 'E', 'W' (player directions)."
)
ERROR_NUMBER_CHARACTER = (
    "Invalid number of player starting positions.\n"
    "The map must contain exactly one starting position among the "
    "characters: 'N', 'S', 'E', or 'W'."
)
ERROR_MAP_TOO_SMALL = (
    "The map is too small.\n"
    "Minimum required size is:\n"
    "  - 4x4\n"
    "  - or 3x5\n"
    "  - or 5x3\n"
    "Ensure your map meets one of these minimum dimensions."
)
ERROR_MAP_NOT_CLOSED = (
    "The map is not closed. Player can escape through a hole or space."
)
ERROR_EMPTY_MAP = (
    "Map data is missing or empty in the .cub file.\n"
    "Expected a map layout defined with characters: "
    "'1', '0', 'N', 'S', 'E', 'W'."
)
ERROR_MISSING_CONFIG = (
    "Incomplete configuration in .cub file.\n"
    "Missing one or more required elements: textures (NO, SO, WE, EA) or "
    "colors (F, C)."
)
ERROR_TEXTURE_PATH_NULL = (
    "A texture path is missing. All texture paths (NO, SO, WE, EA) must be "
    "defined."
)
ERROR_TEXTURE_NOT_ACCESSIBLE = "Cannot access texture file : "
TEXTURE_NOT_ACCESSIBLE_HINT = "Make sure the path exists and is readable."
ERROR_TEXTURE_NOT_PNG = (
    "Texture file must be a .png file. Expected extension: .png"
)
ERROR_DISPLAY_INIT = (
    "Failed to initialize the display.\n"
    "Ensure that your system supports a graphical window and try again."
)
ERROR_LOAD_TEXTURE = (
    "Failed to load a texture.\n"
    "Check the file path and ensure the image exists and is valid."
)
ERROR_LOAD_IMAGE = (
    "Failed to convert texture to image.\n"
    "Ensure the display is properly initialized and your textures are valid."
)
ERROR_NEW_IMAGE = (
    "Failed to create a new image.\n"
    "Ensure the display is properly initialized and sufficient memory is "
    "available."
)
ERROR_DISPLAY_IMAGE = (
    "Failed to display image in the window.\n"
    "Ensure the display is initialized and the window is valid."
)
ERROR_SCREEN_NOT_INITIALIZED = (
    "Screen buffer is not initialized.\n"
    "Create the screen before rendering frames."
)

INFO_ESCAPE_EXIT = (
    f"{CYAN}[EXIT] Escape key pressed.\n"
    "Application terminated gracefully.\n"
    f"Resources have been released.{RESET}\n"
)
INFO_WINDOW_CLOSE = (
    f"{CYAN}[EXIT] Window closed by user.\n"
    "Application terminated gracefully.\n"
    f"Resources have been released.{RESET}\n"
)


class CubError(Exception):
    """A fatal configuration, map or graphics error.

    ``path`` is set for errors about a specific file that could not be
    accessed; it is rendered between the message and a hint.
    """

    exit_code = 1

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(message if path is None else f"{message}{path}")

    def render(self) -> str:
        """Return the coloured text written to standard error."""
        if self.path is None:
            return f"{RED}Error\n{self.message}{RESET}\n"
        return (
            f"{RED}Error\n{self.message}{RESET}{self.path}"
            f"{RED}\n{TEXTURE_NOT_ACCESSIBLE_HINT}{RESET}\n"
        )