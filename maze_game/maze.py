"""Maze grid representation and the stick-flip maze generator."""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple


logger = logging.getLogger(__name__)

PATH = 0
WALL = 1
MAZE_SIZE = 19
MIN_MAZE_SIZE = 5
DEFAULT_MAX_ATTEMPTS = 1000

Position = Tuple[int, int]
Grid = List[List[int]]


class CarveDirection(Enum):
    """Directions a pillar may extend its wall segment in."""

    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @property
    def vector(self) -> Tuple[int, int]:
        return self.value


# Index order matters: a seeded generator must pick the same direction for the
# same random draw.
_CARVE_ORDER: Sequence[CarveDirection] = (
    CarveDirection.UP,
    CarveDirection.RIGHT,
    CarveDirection.DOWN,
    CarveDirection.LEFT,
)


def validate_size(size: int) -> int:
    try:
        value = int(size)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid maze size: {size!r}") from exc
    if value < MIN_MAZE_SIZE or value % 2 == 0:
        raise ValueError(f"Invalid maze size: {value} (must be odd and >= {MIN_MAZE_SIZE})")
    return value


@dataclass
class Maze:
    """Square wall/path grid with an entrance on the bottom row and an exit on the top row."""

    grid: Grid
    entrance: Position
    exit: Position
    exit_accessible: bool

    @property
    def size(self) -> int:
        return len(self.grid)

    def inside(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self.size and 0 <= y < self.size

    def is_path(self, position: Position) -> bool:
        if not self.inside(position):
            return False
        x, y = position
        return self.grid[y][x] == PATH

    def is_wall(self, position: Position) -> bool:
        return self.inside(position) and not self.is_path(position)

    def path_cells(self) -> List[Position]:
        return [
            (x, y)
            for y, row in enumerate(self.grid)
            for x, value in enumerate(row)
            if value == PATH
        ]

    def neighbours(self, position: Position) -> List[Position]:
        """Adjacent PATH cells in up, down, left, right order."""

        x, y = position
        candidates = [(x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)]
        return [cell for cell in candidates if self.is_path(cell)]

    def shortest_path(self, start: Position, goal: Position) -> Optional[List[Position]]:
        """Breadth-first route from *start* to *goal* over PATH cells, both ends included."""

        if not self.is_path(start) or not self.is_path(goal):
            return None
        previous: Dict[Position, Optional[Position]] = {start: None}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            if current == goal:
                break
            for cell in self.neighbours(current):
                if cell not in previous:
                    previous[cell] = current
                    queue.append(cell)
        if goal not in previous:
            return None
        route: List[Position] = []
        cursor: Optional[Position] = goal
        while cursor is not None:
            route.append(cursor)
            cursor = previous[cursor]
        route.reverse()
        return route

    def to_rows(self) -> List[List[int]]:
        return [list(row) for row in self.grid]

    @classmethod
    def from_grid(
        cls,
        grid: Sequence[Sequence[int]],
        entrance: Position,
        exit: Position,
        exit_accessible: Optional[bool] = None,
        *,
        size: Optional[int] = None,
    ) -> "Maze":
        """Wrap an existing grid, e.g. one restored from a save file.

        Raises :class:`ValueError` when the grid is not square, has the wrong
        dimensions or contains values other than ``PATH``/``WALL``.
        """

        rows = [list(row) for row in grid]
        expected = len(rows) if size is None else size
        if len(rows) != expected or any(len(row) != expected for row in rows):
            raise ValueError("Invalid maze size")
        validate_size(expected)
        for row in rows:
            for value in row:
                if value not in (PATH, WALL):
                    raise ValueError(f"Invalid maze cell value: {value!r}")
        entrance = (int(entrance[0]), int(entrance[1]))
        exit = (int(exit[0]), int(exit[1]))
        if exit_accessible is None:
            exit_accessible = exit_reachable(rows, entrance)
        return cls(grid=rows, entrance=entrance, exit=exit, exit_accessible=bool(exit_accessible))


def exit_reachable(grid: Sequence[Sequence[int]], entrance: Position) -> bool:
    """Depth-first search from the entrance that succeeds on reaching row 0."""

    size = len(grid)
    visited = set()
    stack = [entrance]
    while stack:
        x, y = stack.pop()
        if not (0 <= y < size and 0 <= x < len(grid[y])):
            continue
        if grid[y][x] != PATH or (x, y) in visited:
            continue
        if y == 0:
            return True
        visited.add((x, y))
        stack.extend(((x - 1, y), (x + 1, y), (x, y + 1), (x, y - 1)))
    return False


class MazeGenerator:
    """Stick-flip generator.

    Every interior pillar (even row and column) grows one wall segment into a
    neighbouring cell. Pillars below the first carved row may not grow upwards,
    which keeps the later rows from sealing off rows that are already final.
    """

    def __init__(self, size: int = MAZE_SIZE, *, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.size = validate_size(size)
        self.max_attempts = max(1, int(max_attempts))

    def generate(self, rng: random.Random) -> Maze:
        grid = self._initial_grid()
        for row in range(2, self.size - 2, 2):
            for col in range(2, self.size - 2, 2):
                self._carve_pillar(grid, row, col, rng)
        entrance, exit = self._open_entrance_and_exit(grid, rng)
        accessible = exit_reachable(grid, entrance)
        logger.debug(
            "generated %dx%d maze, exit at %s, accessible=%s",
            self.size,
            self.size,
            exit,
            accessible,
        )
        return Maze(grid=grid, entrance=entrance, exit=exit, exit_accessible=accessible)

    def _initial_grid(self) -> Grid:
        last = self.size - 1
        grid: Grid = []
        for row in range(self.size):
            cells = []
            for col in range(self.size):
                if row in (0, last) or col in (0, last):
                    cells.append(WALL)
                elif row % 2 == 0 and col % 2 == 0:
                    cells.append(WALL)
                else:
                    cells.append(PATH)
            grid.append(cells)
        return grid

    def _carve_pillar(self, grid: Grid, row: int, col: int, rng: random.Random) -> None:
        for _ in range(self.max_attempts):
            direction = _CARVE_ORDER[rng.randrange(len(_CARVE_ORDER))]
            if row > 2 and direction is CarveDirection.UP:
                continue
            if self._try_carve(grid, row, col, direction):
                return
        # Deterministic fallback once the random draws are exhausted.
        for direction in _CARVE_ORDER:
            if row > 2 and direction is CarveDirection.UP:
                continue
            if self._try_carve(grid, row, col, direction):
                logger.debug("pillar (%d, %d) carved by fallback scan", col, row)
                return

    def _try_carve(self, grid: Grid, row: int, col: int, direction: CarveDirection) -> bool:
        if direction is CarveDirection.UP and row <= 2:
            return False
        if direction is CarveDirection.LEFT and col <= 2:
            return False
        if direction is CarveDirection.RIGHT and col >= self.size - 2:
            return False
        if direction is CarveDirection.DOWN and row >= self.size - 2:
            return False
        dx, dy = direction.vector
        target_row, target_col = row + dy, col + dx
        if grid[target_row][target_col] != PATH:
            return False
        grid[target_row][target_col] = WALL
        return True

    def _open_entrance_and_exit(self, grid: Grid, rng: random.Random) -> Tuple[Position, Position]:
        middle = self.size // 2
        grid[self.size - 1][middle] = PATH
        entrance = (middle, self.size - 1)
        exit_col = rng.randrange(self.size - 2) + 1
        grid[0][exit_col] = PATH
        return entrance, (exit_col, 0)


__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "MAZE_SIZE",
    "PATH",
    "WALL",
    "Maze",
    "MazeGenerator",
    "Position",
    "exit_reachable",
    "validate_size",
]
