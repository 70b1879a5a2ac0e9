import random

import pytest

from maze_game.maze import PATH, WALL, Maze, MazeGenerator, exit_reachable

from .helpers import SMALL_ENTRANCE, SMALL_EXIT, SMALL_GRID


class AlwaysFirst(random.Random):
    """Random source whose draws always pick the first option."""

    def randrange(self, *args, **kwargs):
        return 0


@pytest.mark.parametrize("seed", [0, 1, 7, 42, 1234])
def test_generated_maze_border_entrance_and_exit(seed: int):
    maze = MazeGenerator(19).generate(random.Random(seed))
    size = maze.size

    assert size == 19
    assert maze.entrance == (size // 2, size - 1)
    assert maze.exit[1] == 0
    assert 1 <= maze.exit[0] <= size - 2
    assert maze.is_path(maze.entrance)
    assert maze.is_path(maze.exit)

    openings = {maze.entrance, maze.exit}
    for i in range(size):
        for cell in ((i, 0), (i, size - 1), (0, i), (size - 1, i)):
            if cell not in openings:
                assert maze.is_wall(cell)


@pytest.mark.parametrize("seed", [3, 11, 99])
def test_pillars_stay_walls(seed: int):
    maze = MazeGenerator(11).generate(random.Random(seed))
    for y in range(2, maze.size - 2, 2):
        for x in range(2, maze.size - 2, 2):
            assert maze.grid[y][x] == WALL


@pytest.mark.parametrize("seed", range(10))
def test_reachability_flag_matches_independent_search(seed: int):
    maze = MazeGenerator(19).generate(random.Random(seed))
    route = maze.shortest_path(maze.entrance, maze.exit)
    assert maze.exit_accessible == (route is not None)


def test_same_seed_reproduces_layout():
    first = MazeGenerator(19).generate(random.Random(2024))
    second = MazeGenerator(19).generate(random.Random(2024))

    assert first.grid == second.grid
    assert first.entrance == second.entrance
    assert first.exit == second.exit


def test_each_pillar_adds_exactly_one_wall():
    size = 11
    maze = MazeGenerator(size).generate(random.Random(5))
    interior = [
        maze.grid[y][x]
        for y in range(1, size - 1)
        for x in range(1, size - 1)
        if not (x % 2 == 0 and y % 2 == 0)
    ]
    pillars = ((size - 3) // 2) ** 2
    assert interior.count(WALL) == pillars


def test_fallback_scan_terminates_on_biased_random_source():
    maze = MazeGenerator(7, max_attempts=3).generate(AlwaysFirst())

    assert maze.size == 7
    assert maze.exit == (1, 0)
    assert maze.grid[2][3] == WALL


def test_smallest_odd_size_is_supported():
    maze = MazeGenerator(5).generate(random.Random(0))
    assert maze.size == 5
    assert maze.entrance == (2, 4)


@pytest.mark.parametrize("size", [4, 3, 18, "big"])
def test_invalid_generator_sizes_raise(size):
    with pytest.raises(ValueError):
        MazeGenerator(size)


def test_from_grid_wraps_existing_structure():
    maze = Maze.from_grid(SMALL_GRID, SMALL_ENTRANCE, SMALL_EXIT)

    assert maze.size == 7
    assert maze.exit_accessible
    assert maze.grid[0][3] == PATH


def test_from_grid_rejects_malformed_dimensions():
    ragged = [row[:] for row in SMALL_GRID]
    ragged[2] = ragged[2][:-1]
    with pytest.raises(ValueError, match="Invalid maze size"):
        Maze.from_grid(ragged, SMALL_ENTRANCE, SMALL_EXIT)
    with pytest.raises(ValueError, match="Invalid maze size"):
        Maze.from_grid(SMALL_GRID, SMALL_ENTRANCE, SMALL_EXIT, size=19)
    with pytest.raises(ValueError):
        Maze.from_grid([[1] * 5] * 4 + [[1, 1, 2, 1, 1]], (2, 4), (2, 0))


def test_exit_reachable_detects_sealed_exit():
    sealed = [row[:] for row in SMALL_GRID]
    sealed[1] = [1] * 7
    assert not exit_reachable(sealed, SMALL_ENTRANCE)
    assert exit_reachable(SMALL_GRID, SMALL_ENTRANCE)


def test_shortest_path_walks_only_path_cells():
    maze = Maze.from_grid(SMALL_GRID, SMALL_ENTRANCE, SMALL_EXIT)
    route = maze.shortest_path(maze.entrance, maze.exit)

    assert route[0] == maze.entrance
    assert route[-1] == maze.exit
    assert all(maze.is_path(cell) for cell in route)
    assert maze.shortest_path(maze.entrance, (2, 2)) is None
