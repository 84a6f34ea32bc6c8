from typing import Iterable, Optional

from gridmaze.core.events import AlgorithmStep, StepType
from gridmaze.core.grid import CellType, Grid, Position


class StepReplayer:
    """
    Rebuilds a maze from a generation trace.
    Applies changes to the Grid as it iterates, so a consumer can stop
    anywhere and look at the partially carved maze.
    """

    def __init__(self, rows: int, cols: int):
        # Logical dimensions, same convention as Generator.generate()
        self.grid = Grid(2 * rows + 1, 2 * cols + 1)
        self.applied = 0
        self.completed = False

    def apply(self, step: AlgorithmStep):
        if step.type == StepType.VISIT:
            # Generation VISIT steps carry the corridor they opened
            for pos in step.path or (step.position,):
                self.grid.set_type(pos, CellType.PATH)

        elif step.type == StepType.COMPLETE:
            self.grid.set_start(Position(1, 1))
            self.grid.set_end(step.position)
            self.completed = True

        # BACKTRACK / EXPLORE do not change the maze
        self.applied += 1

    def run(self, steps: Iterable[AlgorithmStep], limit: Optional[int] = None) -> Grid:
        for step in steps:
            if limit is not None and self.applied >= limit:
                break
            self.apply(step)
        return self.grid


def replay_generation(rows: int, cols: int, steps: Iterable[AlgorithmStep]) -> Grid:
    return StepReplayer(rows, cols).run(steps)
