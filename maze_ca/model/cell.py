"""Cell handles and the cell state machine for the maze automaton."""

from enum import IntEnum
from typing import List, Optional, Tuple, TYPE_CHECKING

from .errors import NoPathFoundError

if TYPE_CHECKING:
    from .grid import MazeGrid


class CellState(IntEnum):
    """Possible states for a maze cell. Values are stored in uint8 layers."""
    UNEXPLORED = 0
    SEARCHING = 1
    EXPLORED = 2
    WALL = 3
    SOLUTION = 4


class Cell:
    """
    A single navigable unit of the maze automaton.

    A cell owns no data of its own: current state, next state and distance
    live in the layers of the owning MazeGrid, and neighbors are stored as
    (x, y) links into that grid. Neighbors are added in East, West, South,
    North order and that order is the tie-break used when backtracking.

    Transition rules (synchronous update):
    - UNEXPLORED -> SEARCHING if any neighbor is currently SEARCHING
    - SEARCHING  -> EXPLORED, distance = 1 + min(explored neighbor distance),
                    or 0 when no neighbor is explored yet (the seed)
    - EXPLORED, WALL and SOLUTION do not change during the forward search
    """

    MAX_NEIGHBORS = 4

    __slots__ = ('grid', 'x', 'y', 'neighbors')

    def __init__(self, grid: "MazeGrid", x: int, y: int):
        self.grid = grid
        self.x = x
        self.y = y
        self.neighbors: List[Tuple[int, int]] = []

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def current_state(self) -> CellState:
        return CellState(int(self.grid.state[self.y, self.x]))

    @property
    def next_state(self) -> CellState:
        return CellState(int(self.grid.next_state[self.y, self.x]))

    @property
    def distance(self) -> int:
        """Hops from the seed cell. Only meaningful once EXPLORED."""
        return int(self.grid.distance[self.y, self.x])

    @property
    def neighbor_count(self) -> int:
        return len(self.neighbors)

    def add_neighbor(self, x: int, y: int) -> None:
        """Link an adjacent cell into this cell's neighborhood."""
        if len(self.neighbors) >= self.MAX_NEIGHBORS:
            raise ValueError(
                f"Cell {self.position} already has {self.MAX_NEIGHBORS} neighbors")
        self.neighbors.append((x, y))

    def neighbor_cells(self) -> List["Cell"]:
        return [self.grid.cell(nx, ny) for nx, ny in self.neighbors]

    def _set_state(self, state: CellState) -> None:
        self.grid.state[self.y, self.x] = state
        self.grid.next_state[self.y, self.x] = state

    def search_next(self) -> None:
        """Put the cell into SEARCHING immediately (seed or newly queued)."""
        self._set_state(CellState.SEARCHING)

    def nearest_explored_distance(self) -> Optional[int]:
        """Smallest distance among currently EXPLORED neighbors, or None."""
        state = self.grid.state
        distance = self.grid.distance
        nearest = None
        for nx, ny in self.neighbors:
            if state[ny, nx] == CellState.EXPLORED:
                d = int(distance[ny, nx])
                if nearest is None or d < nearest:
                    nearest = d
        return nearest

    def _explore_distance(self) -> int:
        nearest = self.nearest_explored_distance()
        return 0 if nearest is None else nearest + 1

    def compute_next(self) -> None:
        """
        First phase of a synchronous step: decide next_state from the
        current states of the neighbors.

        Only a SEARCHING cell writes its distance here. Other cells read
        distances of EXPLORED neighbors only, so the write never leaks into
        this step's snapshot.
        """
        current = self.current_state
        if current == CellState.UNEXPLORED:
            state = self.grid.state
            for nx, ny in self.neighbors:
                if state[ny, nx] == CellState.SEARCHING:
                    self.grid.next_state[self.y, self.x] = CellState.SEARCHING
                    break
        elif current == CellState.SEARCHING:
            self.grid.distance[self.y, self.x] = self._explore_distance()
            self.grid.next_state[self.y, self.x] = CellState.EXPLORED

    def commit(self) -> None:
        """Second phase of a synchronous step: take on the next state."""
        self.grid.state[self.y, self.x] = self.grid.next_state[self.y, self.x]

    def finalize(self) -> List["Cell"]:
        """
        Explore this cell immediately and queue its unexplored neighbors.

        Used by the work-list strategy. Each UNEXPLORED neighbor is moved to
        SEARCHING. The discovered cells are returned in reverse enumeration
        order, so appending them to a stack pops the East-most one first.
        """
        self.grid.distance[self.y, self.x] = self._explore_distance()
        self._set_state(CellState.EXPLORED)

        discovered = []
        for neighbor in self.neighbor_cells():
            if neighbor.current_state == CellState.UNEXPLORED:
                neighbor.search_next()
                discovered.append(neighbor)
        discovered.reverse()
        return discovered

    def mark_solution(self) -> None:
        self._set_state(CellState.SOLUTION)

    def next_solution_step(self) -> "Cell":
        """
        Mark and return the explored neighbor closest to the seed.

        Only neighbors strictly closer than this cell qualify; the first one
        in East, West, South, North order wins a tie.
        """
        best = None
        shortest = self.distance
        for neighbor in self.neighbor_cells():
            if (neighbor.current_state == CellState.EXPLORED
                    and neighbor.distance < shortest):
                best = neighbor
                shortest = neighbor.distance
        if best is None:
            raise NoPathFoundError(
                f"Cell {self.position} has no explored neighbor closer to the goal")
        best.mark_solution()
        return best

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(pos={self.position}, "
                f"state={self.current_state.name}, distance={self.distance})")


class Wall(Cell):
    """
    Impassable cell. Holds the WALL state for its whole life, never links
    neighbors and ignores every transition request.
    """

    __slots__ = ()

    def add_neighbor(self, x: int, y: int) -> None:
        pass

    def search_next(self) -> None:
        pass

    def compute_next(self) -> None:
        pass

    def commit(self) -> None:
        pass

    def finalize(self) -> List[Cell]:
        return []

    def mark_solution(self) -> None:
        pass
