import logging
from typing import Dict, List, Optional

from gridmaze.algo.base import Generator
from gridmaze.algo.solvers import Solver
from gridmaze.core import analysis
from gridmaze.core.events import AlgorithmStep
from gridmaze.core.grid import Grid, Position
from gridmaze.core.obstacles import ObstacleManager
from gridmaze.core.path import Path

logger = logging.getLogger(__name__)


class MazeNotGeneratedError(RuntimeError):
    """Raised when a maze operation runs before any maze was generated."""


class MazeSession:
    """
    Holds the current maze and the last computed path.

    The cached path is tied to the grid revision it was computed against;
    any obstacle change makes it stale and current_path returns None until
    find_path() runs again.
    """

    def __init__(self, generator: Generator, solver: Solver,
                 obstacles: Optional[ObstacleManager] = None):
        self.generator = generator
        self.solver = solver
        self.obstacles = obstacles if obstacles is not None else ObstacleManager()
        self.grid: Optional[Grid] = None
        self._path: Optional[Path] = None
        self._path_revision = -1

    def generate(self, rows: int, cols: int) -> Grid:
        logger.info("Generating %dx%d maze with %s", rows, cols, self.generator.name)
        self.grid = self.generator.generate(rows, cols)
        self._path = None
        return self.grid

    def _require_grid(self) -> Grid:
        if self.grid is None:
            raise MazeNotGeneratedError("No maze generated")
        return self.grid

    def find_path(self, start=None, end=None) -> Path:
        grid = self._require_grid()
        start = grid.start if start is None else Position(*start)
        end = grid.end if end is None else Position(*end)

        logger.info("Solving %s -> %s with %s", tuple(start), tuple(end), self.solver.name)
        path = self.solver.find_path(grid, start, end)
        if path.is_empty():
            logger.info("No solution found")
        else:
            logger.info("Solution length: %d (%.3f ms)", path.length, path.elapsed_ms)

        self._path = path
        self._path_revision = grid.revision
        return path

    def find_path_with_steps(self, start=None, end=None) -> List[AlgorithmStep]:
        grid = self._require_grid()
        start = grid.start if start is None else start
        end = grid.end if end is None else end
        return self.solver.find_path_with_steps(grid, start, end)

    def find_path_multi_target(self, targets, start=None) -> Path:
        grid = self._require_grid()
        start = grid.start if start is None else start
        return self.solver.find_path_multi_target(grid, start, targets)

    @property
    def current_path(self) -> Optional[Path]:
        if self._path is None or self.grid is None:
            return None
        if self._path_revision != self.grid.revision:
            # Obstacles changed since the path was computed
            return None
        return self._path

    def add_obstacle(self, pos) -> bool:
        return self.obstacles.add_obstacle(self._require_grid(), pos)

    def remove_obstacle(self, pos) -> bool:
        return self.obstacles.remove_obstacle(self._require_grid(), pos)

    def add_random_obstacles(self, count: int) -> List[Position]:
        return self.obstacles.add_random_obstacles(self._require_grid(), count)

    def clear_obstacles(self) -> int:
        return self.obstacles.clear_obstacles(self._require_grid())

    def statistics(self) -> Dict[str, object]:
        return analysis.calculate_stats(self._require_grid())
