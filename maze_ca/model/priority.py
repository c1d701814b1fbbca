"""Work-list driven, depth-biased update strategy."""

import logging
from typing import List

from .cell import Cell
from .errors import SearchExhaustedError
from .grid import MazeGrid, WallMask

logger = logging.getLogger(__name__)


class PriorityMaze(MazeGrid):
    """
    Maze explored one cell per step from a stack-like work list.

    Each step pops the last cell, fixes its distance from the neighbors
    explored so far and pushes its unexplored neighbors. Newly found cells
    are explored first, so the search runs deep before it runs wide.

    A distance is never revisited once set. When a long branch reaches a
    region first, every cell behind it keeps the long distance even if a
    shorter route is explored later, so the resulting path snakes and is
    usually far from the shortest one.
    """

    name = "mystery"

    def __init__(self, walls: WallMask, start, goal):
        super().__init__(walls, start, goal)
        self.work_list: List[Cell] = [self.goal_cell]

    def step(self) -> None:
        if not self.work_list:
            raise SearchExhaustedError(
                f"Work list is empty; start {self.start} is unreachable")
        cell = self.work_list.pop()
        self.work_list.extend(cell.finalize())
        if not self.work_list and not self.path_found():
            logger.debug("Work list exhausted before reaching start %s",
                         self.start)

    def is_exhausted(self) -> bool:
        return not self.work_list
