"""Text front-end for the maze game."""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .config import GameConfig, load_config
from .entities import ItemType
from .level import LevelState
from .persistence import SaveFormatError, SaveStore
from .session import GameSession, LevelLockedError, LevelStatus, MoveResult

logger = logging.getLogger(__name__)

QUIT_COMMANDS = {"q", "quit"}
ITEM_GLYPHS = {ItemType.KEY: "K", ItemType.FLASHLIGHT: "F"}

MENU = (
    "Welcome to the Maze Game!\n"
    "1. Start Game\n"
    "2. Save Game\n"
    "3. Load Game\n"
    "4. View Instructions\n"
    "5. Exit"
)

INSTRUCTIONS = (
    "Instructions:\n"
    "Navigate the maze to reach the exit.\n"
    "Use the following commands: up(W), down(S), left(A), right(D).\n"
    "Type 'save' during a level to save it, or 'quit' to return to the menu.\n"
    "Collect the flashlight to aid your journey (levels 2 and 3).\n"
    "You must collect the key to exit each level.\n"
    "Avoid the ghost or get sent back to the maze's start (level 3 only).\n"
    "Good luck!"
)


def render_viewport(level: LevelState) -> str:
    """Draw the maze as text, hiding cells outside the player's visibility square."""

    items = {item.position: item.item_type for item in level.items_in_world()}
    ghost = level.ghost.position if level.ghost is not None else None
    lines: List[str] = []
    for y, row in enumerate(level.maze.grid):
        glyphs = []
        for x, _cell in enumerate(row):
            position = (x, y)
            if not level.is_visible(position):
                glyphs.append("*")
            elif position == level.player.position:
                glyphs.append("P")
            elif position == ghost:
                glyphs.append("G")
            elif position in items:
                glyphs.append(ITEM_GLYPHS[items[position]])
            elif level.maze.is_wall(position):
                glyphs.append("#")
            else:
                glyphs.append(".")
        lines.append(" ".join(glyphs))
    return "\n".join(lines)


class ConsoleGame:
    """Menu-driven console loop around a :class:`GameSession`."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        input_fn: Optional[Callable[[str], str]] = None,
        output: Optional[Callable[[str], None]] = None,
    ):
        self.config = config or GameConfig()
        self.store = SaveStore(self.config.save_path, self.config)
        self.session = GameSession(self.config, saver=self.store.save)
        self.input = input_fn or input
        self.output = output or print

    # ------------------------------------------------------------------
    # Prompts
    def ask_level(self) -> int:
        prompt = f"Choose difficulty level (1-{self.config.level_count}): "
        while True:
            raw = self.input(prompt).strip()
            try:
                number = int(raw)
            except ValueError:
                self.output(f"Invalid input. Please enter a number (1-{self.config.level_count}).")
                continue
            if not 1 <= number <= self.config.level_count:
                self.output(f"Invalid input. Please enter a number (1-{self.config.level_count}).")
                continue
            if not self.session.is_unlocked(number):
                self.output(
                    "Selected level is unavailable as you need to play the prerequisite level!"
                )
                continue
            return number

    def ask_continue(self) -> bool:
        while True:
            answer = self.input("Do you want to continue playing? (y/n) ").strip().lower()
            if answer == "y":
                return True
            if answer == "n":
                self.session.abandon_level()
                self.output("Returning to main menu...")
                return False
            self.output("Invalid input. Please enter 'y' or 'n'.")

    # ------------------------------------------------------------------
    # Game flow
    def play_level(self) -> bool:
        """Play the current level until it is completed (True) or the player quits (False)."""

        level = self.session.current_level
        if level is None:
            return False
        self.output(f"Level {level.level_number}")
        self.output(render_viewport(level))
        while self.session.status is LevelStatus.IN_PROGRESS:
            command = self.input(
                "Enter your move (up(W), down(S), left(A), right(D)) or 'save': "
            ).strip().lower()
            if command in QUIT_COMMANDS:
                self.output("Returning to main menu...")
                return False
            try:
                report = self.session.apply_move(command)
            except OSError as exc:
                self.output(f"Unable to save the game: {exc}")
                continue
            for message in report.messages:
                self.output(message)
            if report.result is not MoveResult.SAVED:
                self.output(render_viewport(level))
        return True

    def start_game(self) -> None:
        if self.session.level_in_progress and self.session.current_level is not None:
            self.output(f"Resuming Level {self.session.current_level.level_number}...")
            self.session.resumed_game = False
            if not self.play_level():
                return
        else:
            self.session.start_level(self.ask_level())
            if not self.play_level():
                return
        while self.ask_continue():
            try:
                self.session.start_level(self.ask_level())
            except LevelLockedError as exc:
                self.output(str(exc))
                continue
            if not self.play_level():
                return

    def save_progress(self) -> None:
        try:
            self.store.save_progress(self.session)
        except OSError as exc:
            self.output(f"Unable to save the game: {exc}")
            return
        self.output("Game saved successfully.")

    def load_game(self) -> bool:
        try:
            self.session = self.store.load()
        except FileNotFoundError as exc:
            self.output(f"Unable to load the game: {exc}")
            return False
        except SaveFormatError as exc:
            logger.warning("could not load %s: %s", self.store.path, exc)
            self.output("No file can be loaded, start a new game from level 1...")
            return False
        self.output("Game state loaded successfully.")
        return True

    def run(self) -> int:
        try:
            while True:
                self.output(MENU)
                choice = self.input("Enter your choice: ").strip()
                if choice == "1":
                    self.start_game()
                elif choice == "2":
                    self.save_progress()
                elif choice == "3":
                    if self.load_game() and self.session.level_in_progress:
                        self.output("Resuming previous level...")
                        self.start_game()
                elif choice == "4":
                    self.output(INSTRUCTIONS)
                elif choice == "5":
                    self.output("Thank you for playing! Exiting...")
                    return 0
                else:
                    self.output("Invalid choice. Please try again.")
        except EOFError:
            self.output("Thank you for playing! Exiting...")
            return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze game (console)")
    parser.add_argument("--config", type=Path, help="Path to a JSON config file.")
    parser.add_argument("--seed", type=int, help="Seed for maze generation and placement.")
    parser.add_argument("--save-file", type=Path, help="Where to read and write saved games.")
    parser.add_argument(
        "--preview",
        type=int,
        metavar="LEVEL",
        help="Print a freshly generated maze for LEVEL and exit.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log game events to stderr.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_config(args.config)
    overrides = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.save_file is not None:
        overrides["save_path"] = args.save_file
    if overrides:
        config = replace(config, **overrides)

    if args.preview is not None:
        try:
            level = LevelState.create(args.preview, config=config)
        except ValueError as exc:
            print(exc)
            return 2
        route = level.maze.shortest_path(level.entrance, level.exit)
        steps = len(route) - 1 if route else None
        print(
            f"Level {level.level_number} (exit reachable: {level.maze.exit_accessible}, "
            f"shortest route: {steps} steps)"
        )
        print(render_viewport(level))
        return 0

    return ConsoleGame(config).run()


if __name__ == "__main__":  # pragma: no cover - manual invocation entry point
    raise SystemExit(main())
