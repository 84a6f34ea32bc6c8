import random
from typing import List, NamedTuple, Optional

from gridmaze.algo.base import Generator
from gridmaze.core.disjoint_set import DisjointSet
from gridmaze.core.events import StepRecorder
from gridmaze.core.grid import CellType, Grid, Position


class Edge(NamedTuple):
    cell_a: Position
    cell_b: Position
    wall: Position


class KruskalsAlgorithm(Generator):
    """
    1. Every logical cell starts in its own set
    2. Collect every wall between two orthogonal neighbours
    3. Shuffle the walls
    4. Carve a wall when its two cells are still in different sets, then union them
    """

    name = "Kruskal's Algorithm"
    time_complexity = "O(E α(V))"
    space_complexity = "O(V + E)"

    def carve(self, grid: Grid, rows: int, cols: int, rng: random.Random,
              recorder: Optional[StepRecorder] = None):
        for r in range(rows):
            for c in range(cols):
                grid.set_type(self.to_physical(r, c), CellType.PATH)

        edges = self.build_edges(rows, cols)
        rng.shuffle(edges)

        sets = DisjointSet(rows * cols)
        for edge in edges:
            id_a = self.cell_id(edge.cell_a, cols)
            id_b = self.cell_id(edge.cell_b, cols)

            if sets.union(id_a, id_b):
                self.open(grid, edge.cell_a, edge.wall, edge.cell_b, recorder)

                # n-1 unions join everything; the remaining edges would all be rejected
                if sets.component_count == 1:
                    break

    @staticmethod
    def build_edges(rows: int, cols: int) -> List[Edge]:
        """Canonical order: row-major, right neighbour then down neighbour."""
        edges = []
        for r in range(rows):
            for c in range(cols):
                cell = Generator.to_physical(r, c)
                if c + 1 < cols:
                    edges.append(Edge(cell, Position(cell.row, cell.col + 2), Position(cell.row, cell.col + 1)))
                if r + 1 < rows:
                    edges.append(Edge(cell, Position(cell.row + 2, cell.col), Position(cell.row + 1, cell.col)))
        return edges

    @staticmethod
    def cell_id(pos: Position, cols: int) -> int:
        return (pos.row // 2) * cols + (pos.col // 2)
