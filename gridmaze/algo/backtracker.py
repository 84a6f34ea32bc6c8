import random
from typing import Iterator, List, Optional, Set, Tuple

from gridmaze.algo.base import Generator
from gridmaze.core.events import StepRecorder
from gridmaze.core.grid import CellType, Grid, Position


class RecursiveBacktracker(Generator):
    """
    Depth-first carve. The recursion is unrolled onto an explicit stack:
    the longest corridor can be rows*cols cells deep, far past Python's
    recursion limit.
    """

    name = "Recursive Backtracker"
    time_complexity = "O(V)"
    space_complexity = "O(V)"

    def carve(self, grid: Grid, rows: int, cols: int, rng: random.Random,
              recorder: Optional[StepRecorder] = None):
        start = self.to_physical(rng.randrange(rows), rng.randrange(cols))
        visited: Set[Position] = set()

        # Stack of (cell, iterator over its shuffled neighbours), one frame per "recursive call"
        stack: List[Tuple[Position, Iterator[Position]]] = [
            (start, self.enter(grid, start, visited, rng))
        ]
        if recorder is not None:
            recorder.log_visit(start, (start,), f"Visiting {tuple(start)}")

        while stack:
            current, neighbours = stack[-1]

            for neighbour in neighbours:
                # May have been reached through another branch since the shuffle
                if neighbour in visited:
                    continue

                self.open(grid, current, self.between(current, neighbour), neighbour, recorder,
                          f"Step {self.step_count + 1}: visiting {tuple(neighbour)}")
                stack.append((neighbour, self.enter(grid, neighbour, visited, rng)))
                break
            else:
                # Backtrack
                stack.pop()
                if recorder is not None and stack:
                    recorder.log_backtrack(current, [frame[0] for frame in stack],
                                           f"Backtracking from {tuple(current)}")

    def enter(self, grid: Grid, cell: Position, visited: Set[Position],
              rng: random.Random) -> Iterator[Position]:
        """Marks cell and returns its unvisited neighbours in random order."""
        visited.add(cell)
        grid.set_type(cell, CellType.PATH)

        neighbours = [n for n in self.logical_neighbors(cell, grid) if n not in visited]
        rng.shuffle(neighbours)
        return iter(neighbours)
