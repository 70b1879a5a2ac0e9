"""Random placement of items and the ghost on free maze cells."""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional, Set

from .maze import DEFAULT_MAX_ATTEMPTS, Maze, Position


logger = logging.getLogger(__name__)


class EntityPlacer:
    """Samples PATH cells that avoid the entrance, the exit and earlier placements."""

    def __init__(self, maze: Maze, *, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.maze = maze
        self.max_attempts = max(1, int(max_attempts))

    def _allowed(self, position: Position, excluded: Set[Position]) -> bool:
        return self.maze.is_path(position) and position not in excluded

    def place(self, rng: random.Random, exclusions: Iterable[Position] = ()) -> Position:
        excluded: Set[Position] = {self.maze.entrance, self.maze.exit}
        excluded.update(tuple(position) for position in exclusions)
        size = self.maze.size
        for _ in range(self.max_attempts):
            candidate = (rng.randrange(size), rng.randrange(size))
            if self._allowed(candidate, excluded):
                return candidate
        fallback = self._scan(excluded)
        if fallback is None:
            raise ValueError("No free path cell left for placement")
        logger.debug("placement fell back to scan at %s", fallback)
        return fallback

    def _scan(self, excluded: Set[Position]) -> Optional[Position]:
        for position in self.maze.path_cells():
            if position not in excluded:
                return position
        return None
