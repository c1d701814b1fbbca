"""CSV export of per-step search progress."""

import csv
from pathlib import Path
from typing import IO, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.state import MazeSnapshot


class CSVWriter:
    """
    Streams one row of cell counts per automaton update.

    Rows are flushed as they are written so a long search can be watched
    (or recovered after an interrupt) while it runs:

        step,unexplored,searching,explored,solution,path_found
        1,623,2,1,0,0
        ...
    """

    FIELDNAMES = ['step', 'unexplored', 'searching', 'explored',
                  'solution', 'path_found']

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self.rows_written = 0
        self._handle: Optional[IO[str]] = None
        self._writer: Optional[csv.DictWriter] = None

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    def open(self) -> None:
        """Create the file (and its directory) and write the header row."""
        if self.is_open:
            return
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = open(self.output_path, 'w', newline='')
        self._writer = csv.DictWriter(self._handle, fieldnames=self.FIELDNAMES)
        self._writer.writeheader()
        self.rows_written = 0

    def append(self, state: "MazeSnapshot") -> None:
        if not self.is_open:
            self.open()
        self._writer.writerow(state.to_csv_row())
        self._handle.flush()
        self.rows_written += 1

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
        self._handle = None
        self._writer = None

    def __enter__(self) -> "CSVWriter":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False
