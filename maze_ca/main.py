#!/usr/bin/env python3
"""
Cellular Automaton Maze Solver

Reads a maze image, searches from the goal back to the start with a
cellular automaton and saves the solved maze.

Usage:
    maze-ca IMAGE START_X START_Y GOAL_X GOAL_Y [options]
    maze-ca --config configs/prim.yaml [options]

Examples:
    maze-ca mazes/westworld.jpg 511 424 399 390
    maze-ca mazes/prim_maze.png 26 16 470 488 --algorithm bfs --gif
    maze-ca mazes/westworld.jpg 511 424 399 390 --algorithm mystery --quiet
    maze-ca --config configs/prim.yaml --csv --out-dir results/
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from maze_ca.config import (AppConfig, BLUR_KINDS, build_config,
                            load_config, parse_blur)
from maze_ca.export.csv_writer import CSVWriter
from maze_ca.export.image_io import (load_wall_mask, save_solution_image,
                                     solved_path)
from maze_ca.export.reporter import Reporter
from maze_ca.export.visualizer import Visualizer
from maze_ca.model.engine import ALGORITHMS, SolverEngine
from maze_ca.model.errors import MazeError

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_PATH = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Cellular Automaton Maze Solver',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    maze-ca mazes/westworld.jpg 511 424 399 390
    maze-ca mazes/prim_maze.png 26 16 470 488 --algorithm bfs --gif
    maze-ca mazes/westworld.jpg 511 424 399 390 --algorithm mystery --quiet
    maze-ca --config configs/prim.yaml --csv --out-dir results/

Coordinates are pixels with (0, 0) at the top-left corner of the image.
        """
    )

    # Maze arguments (optional when --config provides them)
    parser.add_argument('image', type=Path, nargs='?',
                        help='Path to the maze image (PNG, JPG, ...)')
    parser.add_argument('start_x', type=int, nargs='?', help='Start X')
    parser.add_argument('start_y', type=int, nargs='?', help='Start Y')
    parser.add_argument('goal_x', type=int, nargs='?', help='Goal X')
    parser.add_argument('goal_y', type=int, nargs='?', help='Goal Y')

    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file')

    # Solver overrides
    parser.add_argument('--algorithm', type=str.lower, default=None,
                        choices=sorted(ALGORITHMS),
                        help='Search strategy (default: bfs)')
    parser.add_argument('--steps', type=int, default=None,
                        help='Override the step budget (default: cell count)')
    parser.add_argument('--cellwise', action='store_true', default=False,
                        help='Run the wavefront one cell at a time')
    parser.add_argument('--threshold', type=int, default=None,
                        help='Wall intensity threshold, 0-255 (default: 127)')
    parser.add_argument('--blur', choices=BLUR_KINDS, default=None,
                        help='Smooth the image before binarizing')
    parser.add_argument('--blur-window', type=int, default=3,
                        help='Blur window size in pixels (default: 3)')

    parser.add_argument('--out-dir', type=Path, default=None,
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable per-step CSV log')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable per-step CSV log (default)')

    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')
    parser.add_argument('--no-solution-image', action='store_true', default=False,
                        help='Do not save the solved maze image')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: WARNING)')

    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> AppConfig:
    """Build the run configuration from a YAML file and CLI overrides."""
    positional = [args.start_x, args.start_y, args.goal_x, args.goal_y]

    if args.config is not None:
        config = load_config(args.config)
        if args.image is not None:
            config.maze.image = args.image
        given = [v is not None for v in positional]
        if any(given) and not all(given):
            raise ValueError(
                "START_X START_Y GOAL_X GOAL_Y must be given together")
        if all(given):
            config.maze.start = (args.start_x, args.start_y)
            config.maze.goal = (args.goal_x, args.goal_y)
    else:
        if args.image is None or any(v is None for v in positional):
            raise ValueError(
                "IMAGE START_X START_Y GOAL_X GOAL_Y are required without --config")
        config = build_config(args.image,
                              (args.start_x, args.start_y),
                              (args.goal_x, args.goal_y))

    if config.maze.image is None:
        raise ValueError("No maze image given")

    # Apply CLI overrides
    if args.algorithm is not None:
        config.solver.algorithm = args.algorithm
    if args.steps is not None:
        config.solver.max_steps = args.steps
    if args.cellwise:
        config.solver.vectorized = False
    if args.threshold is not None:
        config.maze.threshold = args.threshold
    if args.blur is not None:
        config.maze.blur = parse_blur({'type': args.blur, 'window': args.blur_window})
    if args.out_dir is not None:
        config.out_dir = args.out_dir
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    if args.no_solution_image:
        config.solution_image_enabled = False
    config.quiet = args.quiet
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s - %(levelname)s - %(message)s')

    # Load configuration
    try:
        config = resolve_config(args)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return EXIT_ERROR
    except (KeyError, ValueError, TypeError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return EXIT_ERROR

    # Load maze and initialize engine
    try:
        walls = load_wall_mask(config.maze.image, config.maze.threshold,
                               config.maze.blur)
        engine = SolverEngine.from_config(walls, config.maze.start,
                                          config.maze.goal, config.solver)
    except (OSError, ValueError) as e:
        # InvalidCoordinateError and MalformedMaskError are ValueErrors
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    grid = engine.grid
    if not config.quiet:
        print(f"Initializing solver...")
        print(f"  Maze: {config.maze.image} ({grid.width}x{grid.height}, "
              f"{int(walls.sum())} wall cells)")
        print(f"  Algorithm: {engine.algorithm}")
        print(f"  Start: {grid.start}  Goal: {grid.goal}")
        print(f"  Max steps: {engine.max_steps}")

    # Initialize exporters
    csv_path = config.out_dir / 'search_log.csv'
    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(csv_path)
        csv_writer.open()

    visualizer = Visualizer(grid.width, grid.height,
                            title=f"{config.maze.image.name} ({engine.algorithm})",
                            start=grid.start, goal=grid.goal)
    reporter = Reporter(str(config.maze.image), engine.algorithm,
                        grid.start, grid.goal)

    # Main solving loop
    if not config.quiet:
        print(f"\nSearching...")

    final_state = engine.snapshot()
    if config.gif_enabled:
        visualizer.buffer_frame(final_state)

    try:
        while not engine.is_finished():
            state = engine.step()
            final_state = state

            if csv_writer:
                csv_writer.append(state)

            # Buffer GIF frame (every N steps to reduce memory)
            if config.gif_enabled:
                if state.step % config.frame_every == 0 or engine.is_finished():
                    visualizer.buffer_frame(state)

            reporter.update(state)

            # Progress indicator
            if not config.quiet and state.step % 100 == 0:
                print(f"  Step {state.step}: {state.metrics['frontier']} searching, "
                      f"{state.metrics['explored']} explored")

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSearch interrupted by user.")
    finally:
        if csv_writer:
            csv_writer.close()

    try:
        result = engine.result()
    except MazeError as e:
        print(f"Error extracting solution: {e}", file=sys.stderr)
        return EXIT_ERROR

    outputs = {
        'CSV Log': csv_path if config.csv_enabled else None,
        'Snapshot': None,
        'Animation': None,
        'Solution': None,
    }

    # Final exports
    if result.found:
        final_state = engine.snapshot()
        if config.solution_image_enabled:
            outputs['Solution'] = save_solution_image(
                result.labels, config.out_dir / solved_path(config.maze.image).name)

    if config.snapshot_enabled:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(final_state, snapshot_path)
        outputs['Snapshot'] = snapshot_path

    if config.gif_enabled:
        visualizer.buffer_frame(final_state)
        gif_path = config.out_dir / 'search.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path, fps=10)
        outputs['Animation'] = gif_path

    # Print summary report
    if not config.quiet:
        print(reporter.generate_summary(result, outputs))

    return EXIT_OK if result.found else EXIT_NO_PATH


if __name__ == '__main__':
    sys.exit(main())
