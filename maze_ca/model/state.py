"""Label values and snapshot dataclasses for the maze automaton."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Optional, Any
import numpy as np


class Label(IntEnum):
    """Values of the final label grid."""
    EMPTY = 0
    WALL = 1
    SOLUTION = 2


@dataclass
class MazeSnapshot:
    """Snapshot of the maze after a given update step."""
    step: int
    states: np.ndarray          # Read-only copy of the CellState layer
    metrics: Dict[str, Any]     # per-state counts, frontier, path_found

    def to_csv_row(self) -> Dict[str, Any]:
        """Convert to CSV-compatible format."""
        return {
            "step": self.step,
            "unexplored": self.metrics.get("unexplored", 0),
            "searching": self.metrics.get("searching", 0),
            "explored": self.metrics.get("explored", 0),
            "solution": self.metrics.get("solution", 0),
            "path_found": int(bool(self.metrics.get("path_found", False))),
        }


@dataclass
class SolveResult:
    """Outcome of running a maze to termination."""
    algorithm: str
    found: bool
    steps: int
    distance: Optional[int] = None
    labels: Optional[np.ndarray] = None
    path: list = field(default_factory=list)

    @property
    def path_length(self) -> int:
        """Number of cells labeled as solution."""
        return len(self.path)
