import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gridmaze.algo.backtracker import RecursiveBacktracker
from gridmaze.algo.prim import PrimsAlgorithm
from gridmaze.algo.solvers import BFS
from gridmaze.core import analysis
from gridmaze.core.grid import CellType, Grid, Position
from gridmaze.core.obstacles import ObstacleManager
from gridmaze.core.path import (
    Path, compress_path, concatenate, is_valid_path, manhattan, reverse_path,
)
from gridmaze.io.text import MazeTextCodec

# A plus-shaped room: one junction, four dead ends
PLUS = (
    "5,5\n"
    "## ##\n"
    "## ##\n"
    "     \n"
    "## ##\n"
    "## ##\n"
)


class TestAnalysis(unittest.TestCase):
    def test_degrees(self):
        grid = MazeTextCodec.loads(PLUS)
        degrees = analysis.neighbor_degrees(grid)
        self.assertEqual(degrees.shape, (5, 5))
        self.assertEqual(degrees[2, 2], 4)
        self.assertEqual(degrees[0, 2], 1)
        self.assertEqual(degrees[1, 2], 2)
        self.assertEqual(degrees[0, 0], 0)

    def test_stats_on_plus(self):
        grid = MazeTextCodec.loads(PLUS)
        stats = analysis.calculate_stats(grid)
        self.assertEqual(stats["total_cells"], 25)
        self.assertEqual(stats["walkable"], 9)
        self.assertEqual(stats["walls"], 16)
        self.assertEqual(stats["obstacles"], 0)
        self.assertEqual(stats["dead_ends"], 4)
        self.assertEqual(stats["corridors"], 4)
        self.assertEqual(stats["junctions"], 1)
        self.assertAlmostEqual(stats["walkable_percent"], 36.0)
        # No start marker to measure from
        self.assertFalse(stats["connected"])

    def test_stats_on_generated_maze(self):
        grid = PrimsAlgorithm(seed=5).generate(5, 5)
        stats = analysis.calculate_stats(grid)
        self.assertEqual(stats["rows"], 11)
        self.assertEqual(stats["cols"], 11)
        self.assertEqual(stats["walkable"], 25 + 24)
        self.assertEqual(stats["connections"], 24)
        self.assertTrue(stats["connected"])
        self.assertEqual(stats["walkable"] + stats["walls"] + stats["obstacles"], 121)

    def test_obstacles_counted_separately(self):
        grid = PrimsAlgorithm(seed=5).generate(5, 5)
        placed = ObstacleManager(seed=2).add_random_obstacles(grid, 4)
        stats = analysis.calculate_stats(grid)
        self.assertEqual(stats["obstacles"], len(placed))
        self.assertEqual(stats["walkable"], 49 - len(placed))
        self.assertEqual(stats["walkable"] + stats["walls"] + stats["obstacles"], 121)

    def test_perfect(self):
        for seed in range(4):
            grid = RecursiveBacktracker(seed=seed).generate(7, 5)
            self.assertTrue(analysis.is_perfect(grid))
            self.assertEqual(analysis.logical_cell_count(grid), 35)

        # One extra opening creates a loop
        grid = RecursiveBacktracker(seed=0).generate(7, 5)
        extra = next(
            (r, c) for r in range(1, grid.rows - 1) for c in range(1, grid.cols - 1)
            if (r + c) % 2 == 1 and grid.get_type((r, c)) == CellType.WALL
        )
        grid.set_type(extra, CellType.PATH)
        self.assertFalse(analysis.is_perfect(grid))

    def test_reachability(self):
        grid = Grid(3, 5)
        for c in (1, 3):
            grid.set_type((1, c), CellType.PATH)
        self.assertEqual(analysis.reachable_from(grid, (1, 1)), {Position(1, 1)})
        self.assertEqual(analysis.reachable_from(grid, (0, 0)), set())
        self.assertFalse(analysis.is_connected(grid, (1, 1)))

        grid.set_type((1, 2), CellType.PATH)
        self.assertTrue(analysis.is_connected(grid, (1, 1)))
        self.assertTrue(analysis.is_solvable(grid, (1, 1), (1, 3)))
        # No markers and none given
        self.assertFalse(analysis.is_solvable(grid))

    def test_farthest_pair_matches_longest_route(self):
        grid = RecursiveBacktracker(seed=6).generate(6, 6)
        a, b = analysis.farthest_pair(grid)
        _, dist = analysis.farthest_from(grid, a)
        path = BFS().find_path(grid, a, b)
        self.assertEqual(path.cost, dist)

        # Nothing in the maze is farther from a than b
        for pos in grid.walkable_positions():
            self.assertLessEqual(BFS().find_path(grid, a, pos).cost, dist)

    def test_farthest_from_wall(self):
        grid = Grid(3, 3)
        self.assertEqual(analysis.farthest_from(grid, (0, 0)), (None, -1))
        self.assertIsNone(analysis.farthest_pair(grid))


class TestPathHelpers(unittest.TestCase):
    def test_default_cost(self):
        path = Path([(1, 1), (1, 2), (2, 2)])
        self.assertEqual(path.cost, 2)
        self.assertEqual(path.length, 3)
        self.assertEqual(Path.empty().cost, 0)
        self.assertFalse(Path.empty())

    def test_equality_ignores_timing(self):
        a = Path([(1, 1), (1, 2)], elapsed_ms=1.0)
        self.assertEqual(a, a.with_elapsed(99.0))
        self.assertEqual(hash(a), hash(a.with_elapsed(99.0)))

    def test_validity(self):
        grid = MazeTextCodec.loads(PLUS)
        self.assertTrue(is_valid_path(Path([(0, 2), (1, 2), (2, 2), (2, 3)]), grid))
        # Diagonal step
        self.assertFalse(is_valid_path(Path([(1, 2), (2, 3)]), grid))
        # Through a wall
        self.assertFalse(is_valid_path(Path([(1, 1), (1, 2)]), grid))
        self.assertFalse(is_valid_path(Path.empty(), grid))

    def test_compress_keeps_turns(self):
        path = Path([(0, 2), (1, 2), (2, 2), (2, 3), (2, 4)])
        turns = compress_path(path)
        self.assertEqual(list(turns), [(0, 2), (2, 2), (2, 4)])
        # Waypoints, not a walkable route
        self.assertNotIsInstance(turns, Path)
        self.assertEqual(path.cost, 4)
        self.assertEqual(compress_path(Path([(0, 0), (0, 1)])), ((0, 0), (0, 1)))

    def test_reverse(self):
        path = Path([(0, 2), (1, 2), (2, 2)])
        self.assertEqual(list(reverse_path(path).positions), [(2, 2), (1, 2), (0, 2)])

    def test_concatenate(self):
        joined = concatenate([Path([(0, 0), (0, 1)]), Path([(0, 1), (1, 1)])])
        self.assertEqual(list(joined.positions), [(0, 0), (0, 1), (1, 1)])
        self.assertEqual(joined.cost, 2)
        self.assertTrue(concatenate([Path([(0, 0)]), Path.empty()]).is_empty())
        self.assertEqual(manhattan((0, 0), (3, 4)), 7)


if __name__ == '__main__':
    unittest.main()
