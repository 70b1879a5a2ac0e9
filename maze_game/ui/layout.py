"""Layout constants for the maze game UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

# Tile metrics
TILE_SIZE: int = 32
GRID_PADDING: int = 24
BOARD_OUTER_PADDING: int = 32

# Side panel metrics
UI_PANEL_WIDTH: int = 280
UI_PANEL_PADDING: int = 20
UI_PANEL_SPACING: int = 12
UI_PANEL_HEADER_HEIGHT: int = 40

# Message bar metrics
MESSAGE_BAR_HEIGHT: int = 72

# Colors expressed as RGB tuples
BACKGROUND_COLOR: Tuple[int, int, int] = (12, 14, 26)
PANEL_BACKGROUND_COLOR: Tuple[int, int, int] = (32, 36, 60)
MESSAGE_BACKGROUND_COLOR: Tuple[int, int, int] = (40, 44, 72)
GRID_LINE_COLOR: Tuple[int, int, int] = (58, 64, 96)
TEXT_COLOR: Tuple[int, int, int] = (232, 236, 244)
MUTED_TEXT_COLOR: Tuple[int, int, int] = (120, 128, 150)

WALL_COLOR: Tuple[int, int, int] = (70, 76, 110)
PATH_COLOR: Tuple[int, int, int] = (214, 218, 228)
FOG_COLOR: Tuple[int, int, int] = (6, 6, 12)
EXIT_COLOR: Tuple[int, int, int] = (120, 220, 140)
PLAYER_COLOR: Tuple[int, int, int] = (80, 140, 255)
KEY_COLOR: Tuple[int, int, int] = (255, 200, 60)
FLASHLIGHT_COLOR: Tuple[int, int, int] = (250, 250, 160)
GHOST_COLOR: Tuple[int, int, int] = (200, 80, 200)


@dataclass(frozen=True)
class BoardGeometry:
    """Pixel rectangles for the major UI regions."""

    board: Tuple[int, int, int, int]
    panel: Tuple[int, int, int, int]
    messages: Tuple[int, int, int, int]
    window: Tuple[int, int]


def compute_geometry(maze_size: int, tile_size: int = TILE_SIZE) -> BoardGeometry:
    """Compute useful rectangles for rendering the game window."""

    board_side = maze_size * tile_size

    board_x = BOARD_OUTER_PADDING
    board_y = BOARD_OUTER_PADDING

    panel_x = board_x + board_side + GRID_PADDING
    panel_y = board_y

    messages_width = board_side + GRID_PADDING + UI_PANEL_WIDTH
    messages_x = board_x
    messages_y = board_y + board_side + GRID_PADDING

    window_width = messages_x + messages_width + BOARD_OUTER_PADDING
    window_height = messages_y + MESSAGE_BAR_HEIGHT + BOARD_OUTER_PADDING

    return BoardGeometry(
        board=(board_x, board_y, board_side, board_side),
        panel=(panel_x, panel_y, UI_PANEL_WIDTH, board_side),
        messages=(messages_x, messages_y, messages_width, MESSAGE_BAR_HEIGHT),
        window=(window_width, window_height),
    )
