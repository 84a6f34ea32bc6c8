import logging
import random
from collections import deque
from typing import List, Optional

from gridmaze import config
from gridmaze.core.grid import CellType, Grid, Position
from gridmaze.core.path import Path

logger = logging.getLogger(__name__)


class ObstacleManager:
    """
    Marks and unmarks impassable cells on a generated maze.

    Only open PATH cells take an obstacle: walls are refused as well as
    START/END, so remove_obstacle can never open a wall that was not
    carved. Placement never raises; every change bumps
    grid.revision, which is how holders of a Path learn it is stale.
    Recomputing the path is the caller's job.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random(seed)

    def add_obstacle(self, grid: Grid, pos) -> bool:
        cell = grid.get_cell(pos)
        if cell is None:
            return False
        # Walls were never walkable, and START/END must stay reachable
        if cell.type != CellType.PATH:
            return False
        return grid.set_type(pos, CellType.OBSTACLE)

    def remove_obstacle(self, grid: Grid, pos) -> bool:
        cell = grid.get_cell(pos)
        if cell is None or cell.type != CellType.OBSTACLE:
            return False
        return grid.set_type(pos, CellType.PATH)

    def clear_obstacles(self, grid: Grid) -> int:
        removed = 0
        for pos in sorted(grid.obstacles):
            if self.remove_obstacle(grid, pos):
                removed += 1
        return removed

    def add_random_obstacles(self, grid: Grid, count: int) -> List[Position]:
        """
        Best effort: draws among walkable non-terminal cells and gives up after
        count * OBSTACLE_ATTEMPT_FACTOR draws, returning whatever was placed.
        """
        if count <= 0:
            return []

        candidates = [
            cell.position for cell in grid.iter_cells() if cell.type == CellType.PATH
        ]
        if not candidates:
            return []

        added: List[Position] = []
        attempts = 0
        max_attempts = count * config.OBSTACLE_ATTEMPT_FACTOR

        while len(added) < count and attempts < max_attempts:
            pos = self.rng.choice(candidates)
            # Collides with an obstacle placed earlier in this loop
            if self.add_obstacle(grid, pos):
                added.append(pos)
            attempts += 1

        if len(added) < count:
            logger.warning("Placed %d of %d requested obstacles after %d attempts",
                           len(added), count, attempts)
        return added

    def add_obstacles_off_path(self, grid: Grid, path: Path, count: int) -> List[Position]:
        """Blocks up to count random cells that the given path does not use."""
        if path.is_empty() or count <= 0:
            return []

        on_path = set(path.positions)
        candidates = [
            cell.position for cell in grid.iter_cells()
            if cell.type == CellType.PATH and cell.position not in on_path
        ]
        self.rng.shuffle(candidates)

        added = []
        for pos in candidates[:count]:
            if self.add_obstacle(grid, pos):
                added.append(pos)
        return added

    def get_obstacles(self, grid: Grid) -> List[Position]:
        return sorted(grid.obstacles)

    def is_obstacle(self, grid: Grid, pos) -> bool:
        return grid.get_type(pos) == CellType.OBSTACLE

    def obstacle_count(self, grid: Grid) -> int:
        return len(grid.obstacles)

    def is_path_blocked(self, grid: Grid, start, end) -> bool:
        """True when end can no longer be reached from start."""
        start, end = Position(*start), Position(*end)
        if not (grid.is_walkable(start) and grid.is_walkable(end)):
            return True

        seen = {start}
        queue = deque([start])
        while queue:
            pos = queue.popleft()
            if pos == end:
                return False
            for neighbor in grid.walkable_neighbors(pos):
                if neighbor.position not in seen:
                    seen.add(neighbor.position)
                    queue.append(neighbor.position)
        return True
