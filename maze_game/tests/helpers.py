"""A hand-built 7x7 maze and a helper to turn routes into move commands."""

from __future__ import annotations

from typing import List, Sequence, Tuple

# x is the column, y the row. Entrance (3, 6) at the bottom, exit (3, 0) at the top.
SMALL_GRID = [
    [1, 1, 1, 0, 1, 1, 1],
    [1, 0, 0, 0, 0, 0, 1],
    [1, 0, 1, 1, 1, 0, 1],
    [1, 0, 0, 0, 0, 0, 1],
    [1, 0, 1, 0, 1, 0, 1],
    [1, 0, 0, 0, 0, 0, 1],
    [1, 1, 1, 0, 1, 1, 1],
]
SMALL_ENTRANCE = (3, 6)
SMALL_EXIT = (3, 0)

_STEP_NAMES = {(0, -1): "up", (0, 1): "down", (-1, 0): "left", (1, 0): "right"}


def commands_for(route: Sequence[Tuple[int, int]]) -> List[str]:
    """Translate a list of adjacent cells into move commands."""

    commands = []
    for (x1, y1), (x2, y2) in zip(route, route[1:]):
        commands.append(_STEP_NAMES[(x2 - x1, y2 - y1)])
    return commands
