"""Minimal pygame based board renderer and keyboard adapter.

This module keeps rendering deterministic so it can be exercised in automated
tests using the SDL ``dummy`` video driver.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, List, Optional, Tuple

from ..entities import ItemType
from ..level import LevelState
from ..maze import Position
from ..session import SAVE_COMMAND, GameSession, TurnReport
from . import layout


# Pygame is required for the UI helpers only.  The import is performed lazily
# in ``ensure_pygame`` so test environments can control the SDL configuration
# (e.g. select the ``dummy`` video driver) first.
_PYGAME = None

ITEM_COLORS = {
    ItemType.KEY: layout.KEY_COLOR,
    ItemType.FLASHLIGHT: layout.FLASHLIGHT_COLOR,
}


def ensure_pygame():
    global _PYGAME
    if _PYGAME is None:
        # ``setdefault`` so that real applications can pick a different driver.
        os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
        _PYGAME = __import__("pygame")
        _PYGAME.display.init()
        _PYGAME.font.init()
    return _PYGAME


def key_commands() -> Dict[int, str]:
    """Map pygame key codes to turn engine command tokens."""

    pygame = ensure_pygame()
    return {
        pygame.K_UP: "up",
        pygame.K_w: "up",
        pygame.K_DOWN: "down",
        pygame.K_s: "down",
        pygame.K_LEFT: "left",
        pygame.K_a: "left",
        pygame.K_RIGHT: "right",
        pygame.K_d: "right",
        pygame.K_F5: SAVE_COMMAND,
    }


def cell_color(level: LevelState, position: Position) -> Tuple[int, int, int]:
    """Colour of a single board cell, fog and entities included."""

    if not level.is_visible(position):
        return layout.FOG_COLOR
    if position == level.player.position:
        return layout.PLAYER_COLOR
    if level.ghost is not None and position == level.ghost.position:
        return layout.GHOST_COLOR
    for item in level.items_in_world():
        if item.position == position:
            return ITEM_COLORS[item.item_type]
    if level.maze.is_wall(position):
        return layout.WALL_COLOR
    if position == level.maze.exit:
        return layout.EXIT_COLOR
    return layout.PATH_COLOR


class MazeGameUI:
    """Very small pygame driven UI wrapper around a game session."""

    def __init__(
        self,
        session: GameSession,
        *,
        cell_size: int = layout.TILE_SIZE,
        surface=None,
        use_display: bool = False,
    ) -> None:
        pygame = ensure_pygame()
        self.session = session
        self.cell_size = cell_size
        side = session.config.maze_size * cell_size
        self.surface = surface if surface is not None else pygame.Surface((side, side))
        self.screen = None
        if use_display:
            self.screen = pygame.display.set_mode((side, side))
        self.commands = key_commands()
        self.reports: List[TurnReport] = []

    # ------------------------------------------------------------------
    # Input handling
    def process_events(self, events: Iterable[object]) -> List[TurnReport]:
        pygame = ensure_pygame()
        reports: List[TurnReport] = []
        for event in events:
            if event.type != pygame.KEYDOWN:
                continue
            command = self.commands.get(event.key)
            if command is None:
                continue
            reports.append(self.session.apply_move(command))
        self.reports.extend(reports)
        return reports

    def last_messages(self) -> List[str]:
        return list(self.reports[-1].messages) if self.reports else []

    # ------------------------------------------------------------------
    # Rendering helpers
    def render(self, level: Optional[LevelState] = None):
        pygame = ensure_pygame()
        level = level or self.session.current_level
        self.surface.fill(layout.BACKGROUND_COLOR)
        if level is not None:
            self._draw_cells(level)
        if self.screen:
            self.screen.blit(self.surface, (0, 0))
            pygame.display.flip()
        return self.surface

    def _draw_cells(self, level: LevelState) -> None:
        pygame = ensure_pygame()
        for y in range(level.maze.size):
            for x in range(level.maze.size):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size,
                    self.cell_size,
                )
                self.surface.fill(cell_color(level, (x, y)), rect)

    def pixel_for(self, position: Position) -> Tuple[int, int]:
        """Centre pixel of a cell, handy for sampling rendered colours."""

        return (
            position[0] * self.cell_size + self.cell_size // 2,
            position[1] * self.cell_size + self.cell_size // 2,
        )


__all__ = ["MazeGameUI", "cell_color", "ensure_pygame", "key_commands"]
