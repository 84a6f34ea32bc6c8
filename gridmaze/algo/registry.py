import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gridmaze import config
from gridmaze.algo.backtracker import RecursiveBacktracker
from gridmaze.algo.base import Generator
from gridmaze.algo.kruskal import KruskalsAlgorithm
from gridmaze.algo.prim import PrimsAlgorithm
from gridmaze.algo.solvers import BFS, DFS, AStar, Solver
from gridmaze.core.obstacles import ObstacleManager
from gridmaze.session import MazeSession


class GeneratorKind(Enum):
    KRUSKAL = "kruskal"
    PRIM = "prim"
    BACKTRACKER = "backtracker"


class SolverKind(Enum):
    BFS = "bfs"
    DFS = "dfs"
    ASTAR = "astar"


GENERATOR_NAMES = [kind.value for kind in GeneratorKind]
SOLVER_NAMES = [kind.value for kind in SolverKind]


def create_generator(kind, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> Generator:
    kind = GeneratorKind(kind)
    if kind == GeneratorKind.KRUSKAL:
        return KruskalsAlgorithm(seed=seed, rng=rng)
    if kind == GeneratorKind.PRIM:
        return PrimsAlgorithm(seed=seed, rng=rng)
    if kind == GeneratorKind.BACKTRACKER:
        return RecursiveBacktracker(seed=seed, rng=rng)
    raise ValueError(f"Unhandled generator kind: {kind}")


def create_solver(kind) -> Solver:
    kind = SolverKind(kind)
    if kind == SolverKind.BFS:
        return BFS()
    if kind == SolverKind.DFS:
        return DFS()
    if kind == SolverKind.ASTAR:
        return AStar()
    raise ValueError(f"Unhandled solver kind: {kind}")


@dataclass
class SessionConfig:
    generator: str = config.DEFAULT_GENERATOR
    solver: str = config.DEFAULT_SOLVER
    seed: Optional[int] = None


def build_session(session_config: Optional[SessionConfig] = None) -> MazeSession:
    """Wires a MazeSession from plain settings (CLI flags, tests)."""
    if session_config is None:
        session_config = SessionConfig()
    return MazeSession(
        create_generator(session_config.generator, seed=session_config.seed),
        create_solver(session_config.solver),
        ObstacleManager(seed=session_config.seed),
    )
