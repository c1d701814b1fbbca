"""I/O package for the maze solver."""

from .csv_writer import CSVWriter
from .image_io import load_wall_mask, save_solution_image, solved_path
from .visualizer import Visualizer
from .reporter import Reporter

__all__ = [
    'CSVWriter',
    'load_wall_mask',
    'save_solution_image',
    'solved_path',
    'Visualizer',
    'Reporter',
]
