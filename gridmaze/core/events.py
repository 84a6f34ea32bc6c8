from enum import Enum
from typing import Iterable, Iterator, List, NamedTuple, Tuple

from gridmaze.core.grid import Position


class StepType(Enum):
    VISIT = "visit"
    EXPLORE = "explore"
    BACKTRACK = "backtrack"
    COMPLETE = "complete"


class AlgorithmStep(NamedTuple):
    type: StepType
    position: Position
    # Snapshot of the frontier / current path at the time of the step
    path: Tuple[Position, ...] = ()
    description: str = ""

    def __str__(self):
        return f"Step({self.type.name} at {tuple(self.position)}, path={len(self.path)})"


class StepRecorder:
    """
    Collects AlgorithmSteps in the order an algorithm performs them.

    Generators and solvers receive either a recorder or None; the silent and
    traced runs go through the same code so the recorder never changes what
    the algorithm does.
    """

    def __init__(self):
        self.steps: List[AlgorithmStep] = []

    def _append(self, step_type: StepType, position, path: Iterable, description: str):
        self.steps.append(
            AlgorithmStep(step_type, Position(*position), tuple(Position(*p) for p in path), description)
        )

    def log_visit(self, position, path: Iterable = (), description: str = ""):
        self._append(StepType.VISIT, position, path, description)

    def log_explore(self, position, path: Iterable = (), description: str = ""):
        self._append(StepType.EXPLORE, position, path, description)

    def log_backtrack(self, position, path: Iterable = (), description: str = ""):
        self._append(StepType.BACKTRACK, position, path, description)

    def log_complete(self, position, path: Iterable = (), description: str = ""):
        self._append(StepType.COMPLETE, position, path, description)

    def count(self, step_type: StepType) -> int:
        return sum(1 for step in self.steps if step.type == step_type)

    def __len__(self):
        return len(self.steps)

    def __iter__(self) -> Iterator[AlgorithmStep]:
        return iter(self.steps)
