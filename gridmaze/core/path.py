from typing import Iterable, Iterator, Optional, Tuple

from gridmaze.core.grid import Grid, Position


class Path:
    """
    Immutable route from start (first) to end (last).
    An empty Path means no route was found; that is a normal result, not an error.
    """

    __slots__ = ('_positions', '_cost', '_elapsed_ms')

    def __init__(self, positions: Iterable = (), cost: Optional[float] = None, elapsed_ms: float = 0.0):
        self._positions: Tuple[Position, ...] = tuple(Position(*p) for p in positions)
        if cost is None:
            # Unit-weight edges: cost is the number of steps taken
            cost = max(len(self._positions) - 1, 0)
        self._cost = cost
        self._elapsed_ms = elapsed_ms

    @classmethod
    def empty(cls, elapsed_ms: float = 0.0) -> 'Path':
        return cls((), 0, elapsed_ms)

    @property
    def positions(self) -> Tuple[Position, ...]:
        return self._positions

    @property
    def cost(self) -> float:
        return self._cost

    @property
    def elapsed_ms(self) -> float:
        return self._elapsed_ms

    @property
    def length(self) -> int:
        return len(self._positions)

    def is_empty(self) -> bool:
        return not self._positions

    @property
    def start(self) -> Optional[Position]:
        return self._positions[0] if self._positions else None

    @property
    def end(self) -> Optional[Position]:
        return self._positions[-1] if self._positions else None

    def with_elapsed(self, elapsed_ms: float) -> 'Path':
        return Path(self._positions, self._cost, elapsed_ms)

    def __len__(self):
        return len(self._positions)

    def __iter__(self) -> Iterator[Position]:
        return iter(self._positions)

    def __getitem__(self, index):
        return self._positions[index]

    def __contains__(self, pos):
        return tuple(pos) in self._positions

    def __bool__(self):
        return bool(self._positions)

    def __eq__(self, other):
        if not isinstance(other, Path):
            return NotImplemented
        # Timing is measurement noise, not part of the route
        return self._positions == other._positions and self._cost == other._cost

    def __hash__(self):
        return hash((self._positions, self._cost))

    def __repr__(self):
        return f"Path(length={len(self._positions)}, cost={self._cost}, time={self._elapsed_ms:.3f}ms)"


def are_neighbors(a, b) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def manhattan(a, b) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def is_valid_path(path: Path, grid: Grid) -> bool:
    """Every position walkable and every step 4-adjacent."""
    if path.is_empty():
        return False
    if not all(grid.is_walkable(pos) for pos in path):
        return False
    return all(are_neighbors(a, b) for a, b in zip(path.positions, path.positions[1:]))


def compress_path(path: Path) -> Tuple[Position, ...]:
    """
    Turning points of a path, plus both ends.
    Consecutive points are generally not adjacent, so this is a list of
    waypoints and not a Path.
    """
    positions = path.positions
    if len(positions) <= 2:
        return positions

    kept = [positions[0]]
    for prev, cur, nxt in zip(positions, positions[1:], positions[2:]):
        same_row = prev.row == cur.row == nxt.row
        same_col = prev.col == cur.col == nxt.col
        if not (same_row or same_col):
            kept.append(cur)
    kept.append(positions[-1])
    return tuple(kept)


def reverse_path(path: Path) -> Path:
    return Path(reversed(path.positions), path.cost, path.elapsed_ms)


def concatenate(legs: Iterable[Path]) -> Path:
    """Joins consecutive legs, dropping the junction position each leg repeats."""
    positions = []
    elapsed = 0.0
    for leg in legs:
        if leg.is_empty():
            return Path.empty(elapsed)
        if positions and positions[-1] == leg.start:
            positions.extend(leg.positions[1:])
        else:
            positions.extend(leg.positions)
        elapsed += leg.elapsed_ms
    return Path(positions, None, elapsed)
