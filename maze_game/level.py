"""A single level attempt: maze, player, items, ghost and completion flag."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .config import GameConfig
from .entities import Ghost, Item, ItemType, Player
from .maze import Maze, MazeGenerator, Position
from .placement import EntityPlacer


logger = logging.getLogger(__name__)

FLASHLIGHT_MIN_LEVEL = 2
GHOST_MIN_LEVEL = 3


class SlotState(Enum):
    """Where a level's key or flashlight currently is."""

    PRESENT = "present"  # lying in the maze
    COLLECTED = "collected"  # picked up, now lives in the inventory
    ABSENT = "absent"  # never generated for this level


@dataclass
class ItemSlot:
    state: SlotState = SlotState.ABSENT
    item: Optional[Item] = None

    @classmethod
    def present(cls, item: Item) -> "ItemSlot":
        return cls(state=SlotState.PRESENT, item=item)

    @classmethod
    def collected(cls) -> "ItemSlot":
        return cls(state=SlotState.COLLECTED)

    @classmethod
    def absent(cls) -> "ItemSlot":
        return cls(state=SlotState.ABSENT)

    @property
    def active(self) -> Optional[Item]:
        return self.item if self.state is SlotState.PRESENT else None


@dataclass
class LevelState:
    level_number: int
    maze: Maze
    player: Player
    key: ItemSlot = field(default_factory=ItemSlot)
    flashlight: ItemSlot = field(default_factory=ItemSlot)
    ghost: Optional[Ghost] = None
    completed: bool = False
    config: GameConfig = field(default_factory=GameConfig, repr=False, compare=False)
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    @classmethod
    def create(
        cls,
        level_number: int,
        rng: Optional[random.Random] = None,
        config: Optional[GameConfig] = None,
    ) -> "LevelState":
        config = config or GameConfig()
        check_level_number(level_number, config)
        rng = rng or random.Random(config.seed)
        level = cls(
            level_number=level_number,
            maze=generate_playable_maze(rng, config),
            player=Player(position=(0, 0)),
            config=config,
            rng=rng,
        )
        level._populate()
        logger.info("created level %d", level_number)
        return level

    def _populate(self) -> None:
        self.player = Player.for_level(
            self.level_number,
            self.maze.entrance,
            full_visibility=self.config.full_visibility,
            dark_visibility=self.config.dark_visibility,
        )
        placer = EntityPlacer(self.maze, max_attempts=self.config.max_attempts)
        taken: List[Position] = []

        key_position = placer.place(self.rng, taken)
        taken.append(key_position)
        self.key = ItemSlot.present(Item(ItemType.KEY, key_position))

        self.flashlight = ItemSlot.absent()
        if self.level_number >= FLASHLIGHT_MIN_LEVEL:
            flashlight_position = placer.place(self.rng, taken)
            taken.append(flashlight_position)
            self.flashlight = ItemSlot.present(Item(ItemType.FLASHLIGHT, flashlight_position))

        self.ghost = None
        if self.level_number >= GHOST_MIN_LEVEL:
            self.ghost = Ghost(placer.place(self.rng, taken), policy=self.config.ghost_policy)

    def reset(self, rng: Optional[random.Random] = None) -> None:
        """Regenerate the maze and start the attempt over."""

        if rng is not None:
            self.rng = rng
        self.maze = generate_playable_maze(self.rng, self.config)
        self.completed = False
        self._populate()
        logger.info("reset level %d", self.level_number)

    @property
    def entrance(self) -> Position:
        return self.maze.entrance

    @property
    def exit(self) -> Position:
        return self.maze.exit

    def items_in_world(self) -> List[Item]:
        return [slot.active for slot in (self.key, self.flashlight) if slot.active is not None]

    def collect_items(self) -> List[Item]:
        """Pick up every item on the player's cell and clear its slot."""

        collected: List[Item] = []
        for slot in (self.key, self.flashlight):
            item = slot.active
            if item is not None and item.position == self.player.position:
                self.player.collect(item, flashlight_visibility=self.config.flashlight_visibility)
                slot.state = SlotState.COLLECTED
                slot.item = None
                collected.append(item)
        return collected

    def advance_ghost(self) -> Optional[Position]:
        if self.ghost is None:
            return None
        return self.ghost.step(self.maze, self.rng)

    def ghost_caught_player(self) -> bool:
        return self.ghost is not None and self.ghost.position == self.player.position

    def send_player_to_entrance(self) -> None:
        self.player.position = self.maze.entrance

    def player_at_exit(self) -> bool:
        return self.player.position == self.maze.exit

    def mark_completed(self) -> bool:
        """Flag the level as completed; returns False if it already was."""

        if self.completed:
            return False
        self.completed = True
        logger.info("level %d completed", self.level_number)
        return True

    def is_visible(self, position: Position) -> bool:
        if self.level_number == 1:
            return True
        radius = self.player.visibility_diameter // 2
        return (
            abs(position[0] - self.player.position[0]) <= radius
            and abs(position[1] - self.player.position[1]) <= radius
        )


def check_level_number(level_number: int, config: GameConfig) -> int:
    if not isinstance(level_number, int) or not 1 <= level_number <= config.level_count:
        raise ValueError(f"Invalid level number: {level_number!r}")
    return level_number


def generate_playable_maze(rng: random.Random, config: GameConfig) -> Maze:
    """Generate mazes until one has a reachable exit, within ``config.max_attempts``."""

    generator = MazeGenerator(config.maze_size, max_attempts=config.max_attempts)
    maze = generator.generate(rng)
    attempts = 1
    while not maze.exit_accessible and attempts < config.max_attempts:
        maze = generator.generate(rng)
        attempts += 1
    if not maze.exit_accessible:
        logger.warning("no reachable exit after %d mazes, keeping the last one", attempts)
    elif attempts > 1:
        logger.debug("needed %d mazes for a reachable exit", attempts)
    return maze
