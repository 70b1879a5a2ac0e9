"""Turn engine that drives level attempts and tracks which levels are unlocked."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence

from .config import GameConfig
from .entities import Direction, ItemType
from .level import LevelState, check_level_number
from .maze import Position


logger = logging.getLogger(__name__)

SAVE_COMMAND = "save"

MSG_WALL = "Invalid move or ran into a wall. Try again."
MSG_INVALID = "Invalid move. Please enter 'w', 'a', 's', 'd' or 'save'."
MSG_NO_LEVEL = "No level in progress."
MSG_NEED_KEY = "You need the key to exit. Find it first!"
MSG_GHOST = "You have collided with a ghost! Sent back to the entrance."
MSG_COMPLETED = "Congratulations! You have completed the level!"
MSG_SAVED = "Game saved successfully!"


class MoveResult(Enum):
    ACCEPTED = "accepted"
    REJECTED_WALL = "rejected_wall"
    REJECTED_BOUNDARY = "rejected_boundary"
    INVALID = "invalid"
    SAVED = "saved"


class LevelStatus(Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class LevelLockedError(ValueError):
    """Raised when a level is started before its prerequisite is completed."""


@dataclass
class TurnReport:
    """Outcome of one command handed to :meth:`GameSession.apply_move`."""

    result: MoveResult
    position: Optional[Position] = None
    collected: List[ItemType] = field(default_factory=list)
    ghost_collision: bool = False
    level_completed: bool = False
    messages: List[str] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.result is MoveResult.ACCEPTED


Saver = Callable[["GameSession"], None]


class GameSession:
    """Holds the active level and the per-level completion flags."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        saver: Optional[Saver] = None,
    ):
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.saver = saver
        self.progress: List[bool] = [False] * self.config.level_count
        self.current_level: Optional[LevelState] = None
        self.resumed_game = False
        self.level_in_progress = False

    # ------------------------------------------------------------------
    # Progress
    def is_unlocked(self, level_number: int) -> bool:
        check_level_number(level_number, self.config)
        if level_number == 1:
            return True
        return self.progress[level_number - 2]

    def set_progress(self, flags: Sequence[bool]) -> None:
        values = [bool(flag) for flag in flags][: self.config.level_count]
        values.extend([False] * (self.config.level_count - len(values)))
        self.progress = values

    @property
    def status(self) -> Optional[LevelStatus]:
        if self.current_level is None:
            return None
        if self.current_level.completed:
            return LevelStatus.COMPLETED
        return LevelStatus.IN_PROGRESS

    # ------------------------------------------------------------------
    # Level lifecycle
    def start_level(self, level_number: int) -> LevelState:
        if not self.is_unlocked(level_number):
            raise LevelLockedError(
                "Selected level is unavailable as you need to play the prerequisite level!"
            )
        self.current_level = LevelState.create(level_number, self.rng, self.config)
        self.level_in_progress = True
        self.resumed_game = False
        return self.current_level

    def start_next_level(self) -> Optional[LevelState]:
        """Start the level after the current one, or return None after the last level."""

        current = self.current_level.level_number if self.current_level else 0
        next_number = current + 1
        if next_number > self.config.level_count:
            logger.info("all levels completed")
            return None
        return self.start_level(next_number)

    def resume(self, level: LevelState) -> None:
        self.current_level = level
        self.level_in_progress = not level.completed

    def abandon_level(self) -> None:
        self.current_level = None
        self.level_in_progress = False

    def reset_level(self) -> Optional[LevelState]:
        if self.current_level is None:
            return None
        self.current_level.reset()
        self.level_in_progress = True
        return self.current_level

    # ------------------------------------------------------------------
    # Turns
    def apply_move(self, command: str) -> TurnReport:
        token = str(command).strip().lower()
        if token == SAVE_COMMAND:
            return self.save()

        level = self.current_level
        if level is None or level.completed:
            return TurnReport(MoveResult.INVALID, messages=[MSG_NO_LEVEL])

        try:
            direction = Direction.from_name(token)
        except ValueError:
            logger.debug("ignored command %r", command)
            return TurnReport(MoveResult.INVALID, level.player.position, messages=[MSG_INVALID])

        player = level.player
        previous = player.move(direction)
        if not level.maze.inside(player.position):
            player.position = previous
            return TurnReport(MoveResult.REJECTED_BOUNDARY, previous, messages=[MSG_WALL])
        if level.maze.is_wall(player.position):
            player.position = previous
            return TurnReport(MoveResult.REJECTED_WALL, previous, messages=[MSG_WALL])

        report = TurnReport(MoveResult.ACCEPTED)
        for item in level.collect_items():
            report.collected.append(item.item_type)
            report.messages.append(f"You found the {item.item_type.value}!")

        if level.ghost is not None:
            level.advance_ghost()
            if level.ghost_caught_player():
                level.send_player_to_entrance()
                report.ghost_collision = True
                report.messages.append(MSG_GHOST)
                logger.info("ghost collision, player sent back to %s", level.entrance)

        if level.player_at_exit():
            if player.has_key():
                report.level_completed = self._complete(level)
                report.messages.append(MSG_COMPLETED)
            else:
                report.messages.append(MSG_NEED_KEY)

        report.position = player.position
        return report

    def _complete(self, level: LevelState) -> bool:
        changed = level.mark_completed()
        self.progress[level.level_number - 1] = True
        level.player.inventory.clear()
        self.level_in_progress = False
        self.resumed_game = False
        return changed

    def save(self) -> TurnReport:
        """Hand the session to the persistence collaborator without advancing the turn."""

        position = self.current_level.player.position if self.current_level else None
        flags = (self.resumed_game, self.level_in_progress)
        if self.current_level is not None and not self.current_level.completed:
            self.resumed_game = True
            self.level_in_progress = True
        if self.saver is not None:
            try:
                self.saver(self)
            except OSError:
                # Nothing was written, so the session is not resumable yet.
                self.resumed_game, self.level_in_progress = flags
                raise
        logger.info("session saved")
        return TurnReport(MoveResult.SAVED, position, messages=[MSG_SAVED])
