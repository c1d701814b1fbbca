"""Configuration dataclasses and YAML loader for the maze solver."""

from dataclasses import dataclass, field
from typing import Dict, Tuple, Optional, Any
from pathlib import Path
import yaml

BLUR_KINDS = ('mean', 'median')


@dataclass
class BlurSpec:
    kind: str    # "mean" or "median"
    window: int  # odd square window size in pixels


@dataclass
class MazeConfig:
    image: Optional[Path]
    start: Tuple[int, int]
    goal: Tuple[int, int]
    threshold: int = 127     # intensity below this is a wall
    blur: Optional[BlurSpec] = None


@dataclass
class SolverConfig:
    algorithm: str = "bfs"            # "bfs"/"wavefront" or "mystery"/"priority"
    max_steps: Optional[int] = None   # None = one step per grid cell
    vectorized: bool = True           # wavefront only


@dataclass
class AppConfig:
    maze: MazeConfig
    solver: SolverConfig = field(default_factory=SolverConfig)

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = False
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    solution_image_enabled: bool = True
    frame_every: int = 5
    quiet: bool = False
    out_dir: Path = field(default_factory=lambda: Path("./output"))


def _parse_point(raw: Any, name: str) -> Tuple[int, int]:
    """Parse an [x, y] pair from raw YAML data."""
    if raw is None or len(raw) != 2:
        raise ValueError(f"{name} must be an [x, y] pair, got {raw!r}")
    return (int(raw[0]), int(raw[1]))


def parse_blur(raw: Optional[Dict]) -> Optional[BlurSpec]:
    """Parse the optional blur settings."""
    if not raw:
        return None
    kind = raw.get('type', 'median')
    if kind not in BLUR_KINDS:
        raise ValueError(f"Unknown blur type: {kind}")
    window = int(raw.get('window', 3))
    if window < 1:
        raise ValueError(f"Blur window must be positive, got {window}")
    return BlurSpec(kind=kind, window=window)


def load_config(config_path: Path) -> AppConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    # Parse maze config; the image path is resolved next to the config file
    maze_raw = raw['maze']
    image = maze_raw.get('image')
    if image is not None:
        image = Path(config_path).parent / image
    maze = MazeConfig(
        image=image,
        start=_parse_point(maze_raw.get('start'), 'start'),
        goal=_parse_point(maze_raw.get('goal'), 'goal'),
        threshold=maze_raw.get('threshold', 127),
        blur=parse_blur(maze_raw.get('blur'))
    )

    # Parse solver config (optional)
    solver_raw = raw.get('solver', {})
    solver = SolverConfig(
        algorithm=solver_raw.get('algorithm', 'bfs'),
        max_steps=solver_raw.get('max_steps'),
        vectorized=solver_raw.get('vectorized', True)
    )

    # Parse export config (optional)
    export_raw = raw.get('export', {})
    frame_every = int(export_raw.get('frame_every', 5))
    if frame_every < 1:
        raise ValueError(f"frame_every must be positive, got {frame_every}")

    return AppConfig(
        maze=maze,
        solver=solver,
        csv_enabled=export_raw.get('csv', False),
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False),
        solution_image_enabled=export_raw.get('solution_image', True),
        frame_every=frame_every
    )


def build_config(image: Path, start: Tuple[int, int], goal: Tuple[int, int],
                 algorithm: str = "bfs") -> AppConfig:
    """Create a configuration from command line values alone."""
    return AppConfig(
        maze=MazeConfig(image=Path(image), start=start, goal=goal),
        solver=SolverConfig(algorithm=algorithm)
    )
