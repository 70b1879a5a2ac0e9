"""Shared fixtures building small hand-made levels."""

from __future__ import annotations

import random
from typing import Callable, Optional, Tuple

import pytest

from maze_game.config import GameConfig
from maze_game.entities import Ghost, GhostPolicy, Item, ItemType, Player
from maze_game.level import ItemSlot, LevelState
from maze_game.maze import Maze

from .helpers import SMALL_ENTRANCE, SMALL_EXIT, SMALL_GRID


@pytest.fixture
def small_config(tmp_path) -> GameConfig:
    return GameConfig(maze_size=7, save_path=tmp_path / "save.json", seed=1)


@pytest.fixture
def make_level(small_config) -> Callable[..., LevelState]:
    def factory(
        level_number: int = 1,
        *,
        key: Optional[Tuple[int, int]] = (1, 5),
        flashlight: Optional[Tuple[int, int]] = None,
        ghost: Optional[Tuple[int, int]] = None,
        ghost_policy: GhostPolicy = GhostPolicy.SWEEP,
    ) -> LevelState:
        maze = Maze.from_grid(SMALL_GRID, SMALL_ENTRANCE, SMALL_EXIT, size=7)
        player = Player.for_level(
            level_number,
            maze.entrance,
            full_visibility=small_config.full_visibility,
            dark_visibility=small_config.dark_visibility,
        )
        return LevelState(
            level_number=level_number,
            maze=maze,
            player=player,
            key=ItemSlot.present(Item(ItemType.KEY, key)) if key else ItemSlot.absent(),
            flashlight=(
                ItemSlot.present(Item(ItemType.FLASHLIGHT, flashlight))
                if flashlight
                else ItemSlot.absent()
            ),
            ghost=Ghost(ghost, policy=ghost_policy) if ghost else None,
            config=small_config,
            rng=random.Random(7),
        )

    return factory
