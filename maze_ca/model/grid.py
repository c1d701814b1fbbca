"""Maze grid management for the maze cellular automaton."""

import logging
import operator
import numpy as np
from typing import Dict, List, Sequence, Tuple, Union

from .cell import Cell, CellState, Wall
from .errors import InvalidCoordinateError, MalformedMaskError, NoPathFoundError
from .state import Label

logger = logging.getLogger(__name__)

WallMask = Union[np.ndarray, Sequence[Sequence]]


def coerce_wall_mask(walls: WallMask) -> np.ndarray:
    """
    Turn a wall mask into a 2D boolean array (True = wall).

    Boolean input is taken as is. Any other dtype is read as a pre-binarized
    label grid, where cells equal to Label.WALL are walls.
    """
    if isinstance(walls, np.ndarray):
        mask = walls
    else:
        rows = [list(row) for row in walls]
        if not rows:
            raise MalformedMaskError("Wall mask has no rows")
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise MalformedMaskError(
                f"Wall mask rows differ in length: {sorted(widths)}")
        mask = np.array(rows)

    if mask.ndim != 2:
        raise MalformedMaskError(f"Wall mask must be 2D, got {mask.ndim}D")
    if mask.size == 0:
        raise MalformedMaskError("Wall mask is empty")

    if mask.dtype == bool:
        return mask.copy()
    return mask == Label.WALL


class MazeGrid:
    """
    Owns every cell of the maze and the layers that hold their data.

    Layers (all indexed [y, x]):
    - walls:      bool, True = impassable
    - state:      uint8 CellState values, the current snapshot
    - next_state: uint8 CellState values, written during compute phases
    - distance:   int32 hops from the goal, -1 on walls

    Search runs from the goal outward; the path is found once the start
    cell is EXPLORED. Subclasses supply step().
    """

    # E, W, S, N as (dx, dy); this order is the backtracking tie-break
    NEIGHBOR_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))

    name = "maze"

    def __init__(self, walls: WallMask,
                 start: Tuple[int, int],
                 goal: Tuple[int, int]):
        self.walls = coerce_wall_mask(walls)
        self.height, self.width = self.walls.shape
        self.size = self.width * self.height

        self.start = self._check_position("start", start)
        self.goal = self._check_position("goal", goal)

        self.state = np.where(self.walls, CellState.WALL,
                              CellState.UNEXPLORED).astype(np.uint8)
        self.next_state = self.state.copy()
        self.distance = np.zeros((self.height, self.width), dtype=np.int32)
        self.distance[self.walls] = -1

        self.cells: List[List[Cell]] = self._build_cells()
        self._link_neighbors()

        # Searching starts at the goal
        self.goal_cell.search_next()

        self.solution_path: List[Tuple[int, int]] = []
        self._solution_marked = False

        logger.debug("Built %s %dx%d maze (%d walls), start=%s goal=%s",
                     self.name, self.width, self.height,
                     int(self.walls.sum()), self.start, self.goal)

    def _check_position(self, role: str,
                        position: Tuple[int, int]) -> Tuple[int, int]:
        try:
            x, y = (operator.index(v) for v in position)
        except (TypeError, ValueError):
            raise InvalidCoordinateError(
                role, position, "expected an (x, y) pair of integers")
        if not self.in_bounds(x, y):
            raise InvalidCoordinateError(
                role, (x, y),
                f"outside the {self.width}x{self.height} grid")
        if self.walls[y, x]:
            raise InvalidCoordinateError(role, (x, y), "cell is a wall")
        return (x, y)

    def _build_cells(self) -> List[List[Cell]]:
        cells = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                if self.walls[y, x]:
                    row.append(Wall(self, x, y))
                else:
                    row.append(self.make_cell(x, y))
            cells.append(row)
        return cells

    def make_cell(self, x: int, y: int) -> Cell:
        """Create the navigable cell at (x, y)."""
        return Cell(self, x, y)

    def _link_neighbors(self) -> None:
        """Give each open cell its in-bounds open neighbors, E, W, S, N."""
        for y in range(self.height):
            for x in range(self.width):
                if self.walls[y, x]:
                    continue
                cell = self.cells[y][x]
                for dx, dy in self.NEIGHBOR_OFFSETS:
                    nx, ny = x + dx, y + dy
                    if self.in_bounds(nx, ny) and not self.walls[ny, nx]:
                        cell.add_neighbor(nx, ny)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_wall(self, x: int, y: int) -> bool:
        return bool(self.walls[y, x])

    def cell(self, x: int, y: int) -> Cell:
        return self.cells[y][x]

    @property
    def start_cell(self) -> Cell:
        return self.cell(*self.start)

    @property
    def goal_cell(self) -> Cell:
        return self.cell(*self.goal)

    def step(self) -> None:
        """Advance the automaton by one update."""
        raise NotImplementedError

    def is_exhausted(self) -> bool:
        """True when no further step can make progress toward the start."""
        return False

    def path_found(self) -> bool:
        """True once the start cell has been explored."""
        return bool(self.state[self.start[1], self.start[0]] == CellState.EXPLORED)

    def state_layer(self) -> np.ndarray:
        """Read-only copy of the current CellState layer, for renderers."""
        layer = self.state.copy()
        layer.setflags(write=False)
        return layer

    def distance_layer(self) -> np.ndarray:
        """Copy of the distance layer with -1 wherever distance is not valid."""
        valid = (self.state == CellState.EXPLORED) | (self.state == CellState.SOLUTION)
        return np.where(valid, self.distance, -1)

    def count_states(self) -> Dict[CellState, int]:
        counts = np.bincount(self.state.ravel(), minlength=len(CellState))
        return {s: int(counts[s]) for s in CellState}

    def mark_solution(self) -> List[Tuple[int, int]]:
        """
        Backtrack from the start toward the goal, relabeling the path.

        Walks at most distance(start) times, always to the closest explored
        neighbor, and stops at the distance-0 seed. The start cell keeps its
        EXPLORED state; the goal becomes SOLUTION. Runs once per grid.
        """
        if self._solution_marked:
            return list(self.solution_path)
        if not self.path_found():
            raise NoPathFoundError(
                f"Start {self.start} was never reached from goal {self.goal}")

        cell = self.start_cell
        path = []
        for _ in range(cell.distance):
            cell = cell.next_solution_step()
            path.append(cell.position)
            if cell.distance == 0:
                break

        self.solution_path = path
        self._solution_marked = True
        logger.debug("Marked %d solution cells", len(path))
        return list(path)

    def solution_labels(self) -> np.ndarray:
        """
        Return the label grid: 0 empty, 1 wall, 2 solution.

        Backtracks on the first call; later calls rebuild the labels from
        the already marked cells.
        """
        self.mark_solution()
        labels = np.full((self.height, self.width), Label.EMPTY, dtype=np.uint8)
        labels[self.state == CellState.WALL] = Label.WALL
        labels[self.state == CellState.SOLUTION] = Label.SOLUTION
        return labels

    def to_text(self) -> str:
        """Pretty print the grid state. Not meant for large mazes."""
        lines = []
        for y in range(self.height):
            parts = []
            for x in range(self.width):
                state = self.state[y, x]
                if state == CellState.WALL:
                    parts.append("[XX]")
                elif state == CellState.UNEXPLORED:
                    parts.append("    ")
                elif state == CellState.SEARCHING:
                    parts.append("~??~")
                elif state == CellState.SOLUTION:
                    parts.append("|S |")
                else:
                    parts.append(f" {int(self.distance[y, x]):<3d}")
            lines.append("".join(parts))
        lines.append("-" * 40)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}({self.width}x{self.height}, "
                f"start={self.start}, goal={self.goal})")
