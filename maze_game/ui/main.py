"""Interactive pygame front-end for the maze game."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pygame

from ..config import GameConfig, load_config
from ..level import LevelState
from ..persistence import SaveFormatError, SaveStore
from ..session import GameSession, LevelLockedError
from . import layout
from .toolkit import cell_color, key_commands

logger = logging.getLogger(__name__)

MAX_LEVEL_KEYS = 9
LEVEL_NAMES = {1: "Easy", 2: "Medium", 3: "Hard"}
EXIT_PROMPT = "Save your progress before exiting? (Y/N, Esc to cancel)"


def level_keys(level_count: int) -> Dict[int, int]:
    """Number keys 1-9 mapped to the levels they start."""

    count = min(level_count, MAX_LEVEL_KEYS)
    return {pygame.K_1 + number - 1: number for number in range(1, count + 1)}


class MazeGameApp:
    """Pygame driven application with a level map and a play screen."""

    def __init__(self, config: Optional[GameConfig] = None, *, load_saved: bool = False) -> None:
        pygame.init()
        pygame.display.set_caption("Maze Game")
        self.config = config or GameConfig()
        self.store = SaveStore(self.config.save_path, self.config)
        self.session = GameSession(self.config, saver=self.store.save)
        self.geometry = layout.compute_geometry(self.config.maze_size)
        self.screen = pygame.display.set_mode(self.geometry.window)
        self.font = pygame.font.Font(None, 28)
        self.small_font = pygame.font.Font(None, 22)
        self.clock = pygame.time.Clock()
        self.commands = key_commands()
        self.level_keys = level_keys(self.config.level_count)
        self.messages: List[str] = ["Pick a level with the number keys."]
        self.mode = "map"
        self.mode_before_exit = "map"
        if load_saved:
            self.load_saved_game()

    # ------------------------------------------------------------------
    # State changes
    def load_saved_game(self) -> bool:
        try:
            self.session = self.store.load()
        except FileNotFoundError:
            self._set_messages("No saved game found.")
            return False
        except SaveFormatError as exc:
            logger.warning("could not load %s: %s", self.store.path, exc)
            self._set_messages("No file can be loaded, start a new game from level 1...")
            return False
        if self.session.level_in_progress and self.session.current_level is not None:
            self.mode = "play"
            self._set_messages(f"Resuming Level {self.session.current_level.level_number}...")
        else:
            self._set_messages("Progress loaded.")
        return True

    def _enter_level(self, level_number: int) -> None:
        try:
            self.session.start_level(level_number)
        except LevelLockedError as exc:
            self._set_messages(str(exc))
            return
        self.mode = "play"
        self._set_messages(f"Level {level_number}: find the key, then the exit.")

    def _enter_next_level(self) -> None:
        try:
            level = self.session.start_next_level()
        except LevelLockedError as exc:
            self._set_messages(str(exc))
            return
        if level is None:
            self._set_messages("All levels completed!")
            return
        self.mode = "play"
        self._set_messages(f"Level {level.level_number}: find the key, then the exit.")

    def _go_to_map(self) -> None:
        self.mode = "map"

    def _set_messages(self, *messages: str) -> None:
        self.messages = [message for message in messages if message]

    def _request_exit(self) -> None:
        """Quit at once, or ask about saving first while a level is unfinished."""

        if not (self.session.level_in_progress and self.session.current_level is not None):
            raise SystemExit
        self.mode_before_exit = self.mode
        self.mode = "confirm_exit"
        self._set_messages(EXIT_PROMPT)

    def _answer_exit_prompt(self, key: int) -> None:
        if key == pygame.K_y:
            try:
                self.session.save()
            except OSError as exc:
                self._set_messages(f"Unable to save the game: {exc}")
                return
            raise SystemExit
        if key == pygame.K_n:
            self.store.clear()
            raise SystemExit
        if key == pygame.K_ESCAPE:
            self.mode = self.mode_before_exit
            self._set_messages("Exit cancelled.")

    # ------------------------------------------------------------------
    # Event handling
    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            if self.mode != "confirm_exit":
                self._request_exit()
            return
        if event.type != pygame.KEYDOWN:
            return
        if self.mode == "confirm_exit":
            self._answer_exit_prompt(event.key)
            return
        if self.mode == "map":
            if event.key == pygame.K_ESCAPE:
                self._request_exit()
            elif event.key in self.level_keys:
                self._enter_level(self.level_keys[event.key])
            elif event.key == pygame.K_n:
                self._enter_next_level()
            elif event.key == pygame.K_l:
                self.load_saved_game()
            return

        if event.key == pygame.K_ESCAPE:
            self._go_to_map()
            return
        if event.key == pygame.K_r:
            self.session.reset_level()
            self._set_messages("Level reset.")
            return
        command = self.commands.get(event.key)
        if command is None:
            return
        try:
            report = self.session.apply_move(command)
        except OSError as exc:
            self._set_messages(f"Unable to save the game: {exc}")
            return
        if report.messages:
            self._set_messages(*report.messages)
        if report.level_completed:
            self._go_to_map()

    # ------------------------------------------------------------------
    # Drawing
    def draw(self) -> None:
        self.screen.fill(layout.BACKGROUND_COLOR)
        screen = self.mode_before_exit if self.mode == "confirm_exit" else self.mode
        if screen == "play" and self.session.current_level is not None:
            self._draw_board(self.session.current_level)
            self._draw_sidebar(self.session.current_level)
        else:
            self._draw_level_map()
        self._draw_messages()
        pygame.display.flip()

    def _draw_board(self, level: LevelState) -> None:
        board_x, board_y, _, _ = self.geometry.board
        for y in range(level.maze.size):
            for x in range(level.maze.size):
                rect = pygame.Rect(
                    board_x + x * layout.TILE_SIZE,
                    board_y + y * layout.TILE_SIZE,
                    layout.TILE_SIZE,
                    layout.TILE_SIZE,
                )
                pygame.draw.rect(self.screen, cell_color(level, (x, y)), rect)
                pygame.draw.rect(self.screen, layout.GRID_LINE_COLOR, rect, 1)

    def _draw_sidebar(self, level: LevelState) -> None:
        panel_rect = pygame.Rect(*self.geometry.panel)
        pygame.draw.rect(self.screen, layout.PANEL_BACKGROUND_COLOR, panel_rect, border_radius=12)
        x = panel_rect.x + layout.UI_PANEL_PADDING
        y = panel_rect.y + layout.UI_PANEL_PADDING
        name = LEVEL_NAMES.get(level.level_number, "")
        heading = self.font.render(f"Level {level.level_number} {name}".strip(), True, layout.TEXT_COLOR)
        self.screen.blit(heading, (x, y))
        y += layout.UI_PANEL_HEADER_HEIGHT

        lines = level.player.inventory.describe().splitlines()
        vision = f"Vision: {level.player.visibility_diameter}"
        if level.player.has_flashlight():
            vision += " (flashlight)"
        lines.append(vision)
        for line in lines:
            surface = self.small_font.render(line, True, layout.TEXT_COLOR)
            self.screen.blit(surface, (x, y))
            y += surface.get_height() + layout.UI_PANEL_SPACING

        hints = ("Arrows/WASD: move", "F5: save", "R: reset level", "Esc: level map")
        for hint in hints:
            surface = self.small_font.render(hint, True, layout.MUTED_TEXT_COLOR)
            self.screen.blit(surface, (x, y))
            y += surface.get_height() + 4

    def _draw_level_map(self) -> None:
        board_x, board_y, _, _ = self.geometry.board
        title = self.font.render("Choose a level", True, layout.TEXT_COLOR)
        self.screen.blit(title, (board_x, board_y))
        y = board_y + layout.UI_PANEL_HEADER_HEIGHT
        for number in range(1, self.config.level_count + 1):
            if self.session.progress[number - 1]:
                state, color = "completed", layout.EXIT_COLOR
            elif self.session.is_unlocked(number):
                state, color = "unlocked", layout.TEXT_COLOR
            else:
                state, color = "locked", layout.MUTED_TEXT_COLOR
            label = f"{number}. {LEVEL_NAMES.get(number, '')} ({state})"
            surface = self.font.render(label, True, color)
            self.screen.blit(surface, (board_x, y))
            y += surface.get_height() + layout.UI_PANEL_SPACING
        hint = self.small_font.render(
            "N: next level   L: load saved game   Esc: quit", True, layout.MUTED_TEXT_COLOR
        )
        self.screen.blit(hint, (board_x, y + layout.UI_PANEL_SPACING))

    def _draw_messages(self) -> None:
        rect = pygame.Rect(*self.geometry.messages)
        pygame.draw.rect(self.screen, layout.MESSAGE_BACKGROUND_COLOR, rect, border_radius=12)
        y = rect.y + 10
        for message in self.messages[-2:]:
            surface = self.small_font.render(message, True, layout.TEXT_COLOR)
            self.screen.blit(surface, (rect.x + layout.UI_PANEL_PADDING, y))
            y += surface.get_height() + 6

    # ------------------------------------------------------------------
    # Main loop
    def run(self) -> None:
        while True:
            for event in pygame.event.get():
                try:
                    self.handle_event(event)
                except SystemExit:
                    pygame.quit()
                    return
            self.draw()
            self.clock.tick(30)


def resolve_config(config_path: Optional[Path] = None, seed: Optional[int] = None) -> GameConfig:
    config = load_config(config_path)
    if seed is not None:
        config = replace(config, seed=seed)
    return config


def run(config: Optional[GameConfig] = None, *, load_saved: bool = False) -> None:
    """Entry point helper that instantiates and runs the UI."""

    app = MazeGameApp(config, load_saved=load_saved)
    app.run()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Game UI launcher")
    parser.add_argument("--config", type=Path, help="Path to a JSON config file.")
    parser.add_argument("--seed", type=int, help="Seed for maze generation.")
    parser.add_argument("--load", action="store_true", help="Resume the saved game on start.")
    parser.add_argument(
        "--info",
        action="store_true",
        help="Print the resolved configuration and exit without launching the UI.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = resolve_config(args.config, args.seed)
    print(
        "Maze Game UI bootstrap\n"
        f"  save file: {config.save_path}\n"
        f"  maze size: {config.maze_size}\n"
        f"  ghost policy: {config.ghost_policy.value}"
    )
    if args.info:
        return 0
    run(config, load_saved=args.load)
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation entry point
    raise SystemExit(main())
