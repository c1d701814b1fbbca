from collections import deque

import numpy as np
import pytest


def parse_maze(text):
    """
    Parse an ASCII maze.

    '#' is a wall, 'S' the start, 'G' the goal, anything else is open.
    Returns (walls, start, goal) with coordinates as (x, y).
    """
    rows = [line.strip() for line in text.strip().splitlines()]
    walls = np.array([[ch == '#' for ch in row] for row in rows], dtype=bool)
    start = goal = None
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch == 'S':
                start = (x, y)
            elif ch == 'G':
                goal = (x, y)
    return walls, start, goal


def reference_distances(walls, goal):
    """Plain BFS hop counts from the goal; -1 where unreachable."""
    height, width = walls.shape
    dist = np.full((height, width), -1, dtype=np.int64)
    gx, gy = goal
    dist[gy, gx] = 0
    queue = deque([goal])
    while queue:
        x, y = queue.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = x + dx, y + dy
            if (0 <= nx < width and 0 <= ny < height
                    and not walls[ny, nx] and dist[ny, nx] < 0):
                dist[ny, nx] = dist[y, x] + 1
                queue.append((nx, ny))
    return dist


MAZE_WITH_LOOPS = """
S....#.....
.###.#.###.
.#.....#...
.#.###.#.##
...#...#...
##.#.#####.
...#.....#.
.#####.#...
.......#..G
"""

WALLED_IN_START = """
S#.
#..
..G
"""

GAP_3X3 = """
S..
##.
G..
"""


@pytest.fixture
def maze_from_text():
    return parse_maze


@pytest.fixture
def bfs_reference():
    return reference_distances


@pytest.fixture
def looped_maze():
    return parse_maze(MAZE_WITH_LOOPS)


@pytest.fixture
def walled_in_maze():
    return parse_maze(WALLED_IN_START)


@pytest.fixture
def gap_maze():
    return parse_maze(GAP_3X3)


@pytest.fixture
def open_5x5():
    return np.zeros((5, 5), dtype=bool), (0, 0), (4, 4)
