import logging
import random
from abc import ABC, abstractmethod
from typing import List, Optional

from gridmaze import config
from gridmaze.core.events import AlgorithmStep, StepRecorder
from gridmaze.core.grid import CellType, Grid, Position

logger = logging.getLogger(__name__)


class Generator(ABC):
    """
    Carves a perfect maze out of a fully walled grid.

    Dimensions passed to generate() are logical cells. Logical cell (r, c)
    lives at physical (2r+1, 2c+1); the even rows/columns between them are
    the walls that get carved.
    """

    name = ""
    time_complexity = ""
    space_complexity = ""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.seed = seed
        # An injected rng is shared across calls; a seed gives every call a fresh, identical stream
        self.rng = rng
        self.step_count = 0

    def _make_rng(self) -> random.Random:
        if self.rng is not None:
            return self.rng
        return random.Random(self.seed)

    @abstractmethod
    def carve(self, grid: Grid, rows: int, cols: int, rng: random.Random,
              recorder: Optional[StepRecorder] = None):
        """
        Carves the spanning tree in place.
        rows/cols are logical dimensions. Every carve goes through self.open()
        so the recorder sees it.
        """
        pass

    def generate(self, rows: int, cols: int) -> Grid:
        return self._run(rows, cols, None)

    def generate_with_steps(self, rows: int, cols: int) -> List[AlgorithmStep]:
        recorder = StepRecorder()
        self._run(rows, cols, recorder)
        return recorder.steps

    def _run(self, rows: int, cols: int, recorder: Optional[StepRecorder]) -> Grid:
        self.validate_dimensions(rows, cols)
        grid = Grid(2 * rows + 1, 2 * cols + 1)
        self.step_count = 0

        logger.debug("%s: carving %dx%d logical cells (%dx%d grid)",
                     self.name, rows, cols, grid.rows, grid.cols)
        self.carve(grid, rows, cols, self._make_rng(), recorder)

        grid.set_start(Position(1, 1))
        grid.set_end(Position(grid.rows - 2, grid.cols - 2))

        if recorder is not None:
            recorder.log_complete(grid.end, (), "Maze generation completed")
        logger.debug("%s: done after %d carves", self.name, self.step_count)
        return grid

    def open(self, grid: Grid, cell_a: Position, wall: Position, cell_b: Position,
             recorder: Optional[StepRecorder], description: str = ""):
        """Joins two logical cells by carving them and the wall between."""
        grid.set_type(cell_a, CellType.PATH)
        grid.set_type(wall, CellType.PATH)
        grid.set_type(cell_b, CellType.PATH)
        self.step_count += 1

        if recorder is not None:
            recorder.log_visit(
                wall, (cell_a, wall, cell_b),
                description or f"Step {self.step_count}: removed wall between {tuple(cell_a)} and {tuple(cell_b)}",
            )

    @staticmethod
    def validate_dimensions(rows: int, cols: int):
        if rows < 1 or cols < 1:
            raise ValueError(f"Maze dimensions must be at least 1x1, got {rows}x{cols}")
        if rows * cols < config.MIN_LOGICAL_CELLS:
            raise ValueError(
                f"Maze needs at least {config.MIN_LOGICAL_CELLS} cells so start and end differ, got {rows}x{cols}"
            )

    @staticmethod
    def to_physical(r: int, c: int) -> Position:
        return Position(2 * r + 1, 2 * c + 1)

    @staticmethod
    def between(a: Position, b: Position) -> Position:
        return Position((a.row + b.row) // 2, (a.col + b.col) // 2)

    @staticmethod
    def logical_neighbors(pos: Position, grid: Grid):
        """Yields the physical positions of the logical cells next to pos (up, down, left, right)."""
        for dr, dc in Grid.DIRECTIONS:
            nr, nc = pos.row + 2 * dr, pos.col + 2 * dc
            if 0 < nr < grid.rows - 1 and 0 < nc < grid.cols - 1:
                yield Position(nr, nc)

    def __repr__(self):
        return f"{type(self).__name__}(seed={self.seed})"
