import random
from typing import List, NamedTuple, Optional

from gridmaze.algo.base import Generator
from gridmaze.core.events import StepRecorder
from gridmaze.core.grid import CellType, Grid, Position


class FrontierWall(NamedTuple):
    origin: Position
    wall: Position
    target: Position


class PrimsAlgorithm(Generator):
    name = "Prim's Algorithm"
    time_complexity = "O(V)"
    space_complexity = "O(V)"

    def carve(self, grid: Grid, rows: int, cols: int, rng: random.Random,
              recorder: Optional[StepRecorder] = None):
        # Start at a random logical cell
        start = self.to_physical(rng.randrange(rows), rng.randrange(cols))
        grid.set_type(start, CellType.PATH)
        if recorder is not None:
            recorder.log_visit(start, (start,), "Start cell selected")

        # Frontier: walls between the carved region and a still-walled cell.
        # A cell can sit behind several frontier walls; only the first one picked gets carved.
        frontier: List[FrontierWall] = []
        self.add_walls(grid, start, frontier)

        while frontier:
            # Pick a random wall, swap-remove for O(1)
            idx = rng.randrange(len(frontier))
            entry = frontier[idx]
            frontier[idx] = frontier[-1]
            frontier.pop()

            if grid.get_type(entry.target) != CellType.WALL:
                continue

            self.open(grid, entry.origin, entry.wall, entry.target, recorder,
                      f"Step {self.step_count + 1}: carved passage to {tuple(entry.target)}")
            self.add_walls(grid, entry.target, frontier)

    def add_walls(self, grid: Grid, cell: Position, frontier: List[FrontierWall]):
        for target in self.logical_neighbors(cell, grid):
            if grid.get_type(target) == CellType.WALL:
                frontier.append(FrontierWall(cell, self.between(cell, target), target))
