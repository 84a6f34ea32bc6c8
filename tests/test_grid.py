import unittest
import sys
import os

# Add project root to path so we can import gridmaze
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import numpy as np

from gridmaze.core.grid import (
    Cell, CellType, Grid, Position, char_to_type, type_to_char,
)


class TestGrid(unittest.TestCase):
    def test_initialization(self):
        rows, cols = 4, 6
        grid = Grid(rows, cols)
        self.assertEqual(sum(1 for _ in grid.iter_cells()), rows * cols)
        # All cells start as walls
        for cell in grid.iter_cells():
            self.assertEqual(cell.type, CellType.WALL)
        self.assertIsNone(grid.start)
        self.assertIsNone(grid.end)
        self.assertEqual(grid.obstacles, set())

    def test_positions_match_coordinates(self):
        grid = Grid(3, 5)
        for r in range(3):
            for c in range(5):
                self.assertEqual(grid.cells[r][c].position, Position(r, c))

    def test_invalid_dimensions(self):
        with self.assertRaises(ValueError):
            Grid(0, 5)
        with self.assertRaises(ValueError):
            Grid(5, -1)

    def test_out_of_bounds_is_not_an_error(self):
        grid = Grid(5, 5)
        self.assertIsNone(grid.get_cell((-1, 0)))
        self.assertIsNone(grid.get_cell((0, 5)))
        self.assertIsNone(grid.get_type((5, 5)))
        self.assertFalse(grid.set_type((9, 9), CellType.PATH))
        self.assertFalse(grid.is_walkable((-1, -1)))
        self.assertFalse(grid.in_bounds((5, 0)))

    def test_set_type(self):
        grid = Grid(3, 3)
        self.assertTrue(grid.set_type((1, 1), CellType.PATH))
        self.assertEqual(grid.get_type((1, 1)), CellType.PATH)
        self.assertTrue(grid.is_walkable((1, 1)))

    def test_walkability(self):
        self.assertFalse(Cell(Position(0, 0), CellType.WALL).is_walkable())
        self.assertFalse(Cell(Position(0, 0), CellType.OBSTACLE).is_walkable())
        self.assertTrue(Cell(Position(0, 0), CellType.PATH).is_walkable())
        self.assertTrue(Cell(Position(0, 0), CellType.START).is_walkable())
        self.assertTrue(Cell(Position(0, 0), CellType.END).is_walkable())

    def test_neighbors_order(self):
        grid = Grid(3, 3)
        # Center cell has 4 neighbours: up, down, left, right
        neighbors = [cell.position for cell in grid.neighbors4((1, 1))]
        self.assertEqual(neighbors, [(0, 1), (2, 1), (1, 0), (1, 2)])

        # Corner cell (0,0) only has down and right
        corner = [cell.position for cell in grid.neighbors4((0, 0))]
        self.assertEqual(corner, [(1, 0), (0, 1)])

    def test_walkable_neighbors(self):
        grid = Grid(3, 3)
        grid.set_type((0, 1), CellType.PATH)
        grid.set_type((1, 2), CellType.OBSTACLE)
        walkable = [cell.position for cell in grid.walkable_neighbors((1, 1))]
        self.assertEqual(walkable, [(0, 1)])

    def test_obstacle_set_follows_cell_types(self):
        grid = Grid(3, 3)
        grid.set_type((1, 1), CellType.OBSTACLE)
        self.assertEqual(grid.obstacles, {Position(1, 1)})
        self.assertEqual(grid.revision, 1)

        # Same type again is not a change
        grid.set_type((1, 1), CellType.OBSTACLE)
        self.assertEqual(grid.revision, 1)

        grid.set_type((1, 1), CellType.PATH)
        self.assertEqual(grid.obstacles, set())
        self.assertEqual(grid.revision, 2)

        # Non-obstacle changes leave the revision alone
        grid.set_type((0, 0), CellType.PATH)
        self.assertEqual(grid.revision, 2)

    def test_start_and_end(self):
        grid = Grid(3, 3)
        grid.set_start((0, 0))
        grid.set_end((2, 2))
        self.assertEqual(grid.get_type((0, 0)), CellType.START)
        self.assertEqual(grid.get_type((2, 2)), CellType.END)

        # Moving the start clears the old one
        grid.set_start((1, 1))
        self.assertEqual(grid.get_type((0, 0)), CellType.PATH)
        self.assertEqual(grid.start, Position(1, 1))

    def test_rejected_markers_change_nothing(self):
        grid = Grid(3, 3)
        self.assertTrue(grid.set_start((0, 0)))
        self.assertTrue(grid.set_end((2, 2)))

        self.assertFalse(grid.set_start((5, 5)))
        self.assertFalse(grid.set_end((-1, 0)))
        self.assertEqual(grid.start, Position(0, 0))
        self.assertEqual(grid.end, Position(2, 2))

        # START may not take over the END cell, nor the other way round
        self.assertFalse(grid.set_start((2, 2)))
        self.assertFalse(grid.set_end((0, 0)))
        self.assertEqual(grid.get_type((0, 0)), CellType.START)
        self.assertEqual(grid.get_type((2, 2)), CellType.END)
        self.assertEqual(grid.start, Position(0, 0))
        self.assertEqual(grid.end, Position(2, 2))

    def test_reset_search_state(self):
        grid = Grid(2, 2)
        cell = grid.get_cell((1, 1))
        cell.visited = True
        cell.g_cost = 3
        cell.h_cost = 2
        cell.parent = Position(0, 1)
        self.assertEqual(cell.f_cost, 5)

        grid.reset_search_state()
        self.assertFalse(cell.visited)
        self.assertEqual(cell.g_cost, Cell.INFINITY)
        self.assertEqual(cell.h_cost, 0)
        self.assertIsNone(cell.parent)

    def test_to_numpy(self):
        grid = Grid(2, 3)
        grid.set_type((0, 1), CellType.PATH)
        grid.set_start((1, 0))
        grid.set_type((1, 2), CellType.OBSTACLE)

        arr = grid.to_numpy()
        self.assertEqual(arr.shape, (2, 3))
        self.assertEqual(arr.dtype, np.uint8)
        self.assertEqual(arr[0, 1], CellType.PATH)
        self.assertEqual(arr[1, 0], CellType.START)
        self.assertEqual(arr[1, 2], CellType.OBSTACLE)
        self.assertEqual(arr[0, 0], CellType.WALL)

    def test_copy_is_independent(self):
        grid = Grid(3, 3)
        grid.set_start((0, 0))
        grid.set_end((2, 2))
        clone = grid.copy()
        self.assertEqual(clone, grid)

        clone.set_type((1, 1), CellType.PATH)
        self.assertNotEqual(clone, grid)
        self.assertEqual(grid.get_type((1, 1)), CellType.WALL)

    def test_char_mapping(self):
        table = {
            CellType.WALL: '#',
            CellType.PATH: ' ',
            CellType.START: 'S',
            CellType.END: 'E',
            CellType.OBSTACLE: 'X',
        }
        for cell_type, ch in table.items():
            self.assertEqual(type_to_char(cell_type), ch)
            self.assertEqual(char_to_type(ch), cell_type)

        with self.assertRaises(ValueError):
            char_to_type('?')

    def test_position_is_structural(self):
        self.assertEqual(Position(1, 2), (1, 2))
        self.assertEqual(hash(Position(1, 2)), hash((1, 2)))
        self.assertEqual({Position(1, 2): 'a'}[(1, 2)], 'a')


if __name__ == '__main__':
    unittest.main()
