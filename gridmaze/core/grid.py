from enum import IntEnum
from typing import Iterator, List, NamedTuple, Optional, Set

import numpy as np


class Position(NamedTuple):
    row: int
    col: int


class CellType(IntEnum):
    # Codes double as the values written by Grid.to_numpy()
    WALL = 0
    PATH = 1
    START = 2
    END = 3
    OBSTACLE = 4


TYPE_TO_CHAR = {
    CellType.WALL: '#',
    CellType.PATH: ' ',
    CellType.START: 'S',
    CellType.END: 'E',
    CellType.OBSTACLE: 'X',
}
CHAR_TO_TYPE = {ch: cell_type for cell_type, ch in TYPE_TO_CHAR.items()}


def type_to_char(cell_type: CellType) -> str:
    return TYPE_TO_CHAR[cell_type]


def char_to_type(ch: str) -> CellType:
    try:
        return CHAR_TO_TYPE[ch]
    except KeyError:
        raise ValueError(f"Unknown cell character {ch!r}") from None


class Cell:
    INFINITY = float('inf')

    __slots__ = ('position', 'type', 'visited', 'g_cost', 'h_cost', 'parent')

    def __init__(self, position: Position, cell_type: CellType = CellType.WALL):
        self.position = position
        self.type = cell_type
        self.reset()

    @property
    def f_cost(self):
        return self.g_cost + self.h_cost

    def is_walkable(self) -> bool:
        return self.type != CellType.WALL and self.type != CellType.OBSTACLE

    def reset(self):
        """Clears the scratch state left behind by a search."""
        self.visited = False
        self.g_cost = self.INFINITY
        self.h_cost = 0
        # Position of the predecessor, never a Cell reference
        self.parent: Optional[Position] = None

    def __repr__(self):
        return f"Cell(pos={tuple(self.position)}, type={self.type.name})"


class Grid:
    # Neighbor order: up, down, left, right. Every algorithm breaks ties with it.
    DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))

    __slots__ = ('rows', 'cols', 'cells', 'start', 'end', 'obstacles', 'revision')

    def __init__(self, rows: int, cols: int):
        if rows < 1 or cols < 1:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.cells: List[List[Cell]] = [
            [Cell(Position(r, c)) for c in range(cols)] for r in range(rows)
        ]
        self.start: Optional[Position] = None
        self.end: Optional[Position] = None
        self.obstacles: Set[Position] = set()
        # Bumped on every obstacle change so holders of a Path can tell it is stale
        self.revision = 0

    def in_bounds(self, pos) -> bool:
        return 0 <= pos[0] < self.rows and 0 <= pos[1] < self.cols

    def get_cell(self, pos) -> Optional[Cell]:
        if self.in_bounds(pos):
            return self.cells[pos[0]][pos[1]]
        return None

    def get_type(self, pos) -> Optional[CellType]:
        cell = self.get_cell(pos)
        return cell.type if cell is not None else None

    def set_type(self, pos, cell_type: CellType) -> bool:
        cell = self.get_cell(pos)
        if cell is None:
            return False

        was_obstacle = cell.type == CellType.OBSTACLE
        cell.type = cell_type

        if cell_type == CellType.OBSTACLE:
            if not was_obstacle:
                self.obstacles.add(cell.position)
                self.revision += 1
        elif was_obstacle:
            self.obstacles.discard(cell.position)
            self.revision += 1
        return True

    def is_walkable(self, pos) -> bool:
        cell = self.get_cell(pos)
        return cell is not None and cell.is_walkable()

    def set_start(self, pos) -> bool:
        """Moves the START marker. False (nothing changed) when out of bounds or on END."""
        pos = Position(*pos)
        if not self.in_bounds(pos) or self.get_type(pos) == CellType.END:
            return False
        if self.start is not None and self.get_type(self.start) == CellType.START:
            self.set_type(self.start, CellType.PATH)
        self.start = pos
        return self.set_type(pos, CellType.START)

    def set_end(self, pos) -> bool:
        pos = Position(*pos)
        if not self.in_bounds(pos) or self.get_type(pos) == CellType.START:
            return False
        if self.end is not None and self.get_type(self.end) == CellType.END:
            self.set_type(self.end, CellType.PATH)
        self.end = pos
        return self.set_type(pos, CellType.END)

    def neighbors4(self, pos) -> Iterator[Cell]:
        """
        Yields the in-bounds neighbors of pos (up, down, left, right).
        Does NOT check walkability (that's for the caller).
        """
        r, c = pos
        for dr, dc in self.DIRECTIONS:
            nr, nc = r + dr, c + dc
            if 0 <= nr < self.rows and 0 <= nc < self.cols:
                yield self.cells[nr][nc]

    def walkable_neighbors(self, pos) -> Iterator[Cell]:
        for cell in self.neighbors4(pos):
            if cell.is_walkable():
                yield cell

    def iter_cells(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def walkable_positions(self) -> List[Position]:
        return [cell.position for cell in self.iter_cells() if cell.is_walkable()]

    def reset_search_state(self):
        for cell in self.iter_cells():
            cell.reset()

    def copy(self) -> 'Grid':
        clone = Grid(self.rows, self.cols)
        for cell in self.iter_cells():
            clone.set_type(cell.position, cell.type)
        clone.start = self.start
        clone.end = self.end
        return clone

    def to_numpy(self) -> np.ndarray:
        """Returns a rows x cols uint8 matrix of CellType codes."""
        return np.array(
            [[int(cell.type) for cell in row] for row in self.cells],
            dtype=np.uint8,
        )

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.rows == other.rows
            and self.cols == other.cols
            and self.start == other.start
            and self.end == other.end
            and all(
                a.type == b.type
                for a, b in zip(self.iter_cells(), other.iter_cells())
            )
        )

    __hash__ = None

    def __str__(self):
        return "\n".join(
            "".join(TYPE_TO_CHAR[cell.type] for cell in row) for row in self.cells
        )
