"""Model package for the maze cellular automaton."""

from .cell import Cell, CellState, Wall
from .errors import (
    MazeError,
    MalformedMaskError,
    InvalidCoordinateError,
    NoPathFoundError,
    SearchExhaustedError,
)
from .state import Label, MazeSnapshot, SolveResult
from .grid import MazeGrid, coerce_wall_mask
from .wavefront import WavefrontMaze
from .priority import PriorityMaze
from .engine import ALGORITHMS, SolverEngine, create_maze

__all__ = [
    'Cell',
    'CellState',
    'Wall',
    'MazeError',
    'MalformedMaskError',
    'InvalidCoordinateError',
    'NoPathFoundError',
    'SearchExhaustedError',
    'Label',
    'MazeSnapshot',
    'SolveResult',
    'MazeGrid',
    'coerce_wall_mask',
    'WavefrontMaze',
    'PriorityMaze',
    'ALGORITHMS',
    'SolverEngine',
    'create_maze',
]
