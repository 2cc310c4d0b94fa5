# -*- coding: utf-8 -*-
"""Test cases for the validity oracle and whole-grid checks."""
import unittest

from Generator.constraints import ConstraintChecker
from Generator.grid import clone_grid, get_box_shape

GRID_4 = [
    [1, 2, 3, 4],
    [3, 4, 1, 2],
    [2, 1, 4, 3],
    [4, 3, 2, 1],
]

GRID_6 = [
    [1, 2, 3, 4, 5, 6],
    [4, 5, 6, 1, 2, 3],
    [2, 3, 1, 5, 6, 4],
    [5, 6, 4, 2, 3, 1],
    [3, 1, 2, 6, 4, 5],
    [6, 4, 5, 3, 1, 2],
]


class TestIsValid(unittest.TestCase):
    def setUp(self):
        self.shape = get_box_shape(4)
        self.grid = [
            [1, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ]

    def test_row_conflict(self):
        self.assertFalse(ConstraintChecker.is_valid(self.grid, 0, 3, 1, self.shape))

    def test_column_conflict(self):
        self.assertFalse(ConstraintChecker.is_valid(self.grid, 3, 0, 1, self.shape))

    def test_box_conflict(self):
        self.assertFalse(ConstraintChecker.is_valid(self.grid, 1, 1, 1, self.shape))

    def test_free_placement(self):
        self.assertTrue(ConstraintChecker.is_valid(self.grid, 2, 2, 1, self.shape))
        self.assertTrue(ConstraintChecker.is_valid(self.grid, 1, 1, 4, self.shape))

    def test_rectangular_box(self):
        shape = get_box_shape(6)
        grid = [[0] * 6 for _ in range(6)]
        grid[0][2] = 5
        # (1, 0) shares the 2x3 box with (0, 2); (2, 0) does not
        self.assertFalse(ConstraintChecker.is_valid(grid, 1, 0, 5, shape))
        self.assertTrue(ConstraintChecker.is_valid(grid, 2, 0, 5, shape))
        self.assertTrue(ConstraintChecker.is_valid(grid, 1, 3, 5, shape))

    def test_does_not_modify_grid(self):
        before = clone_grid(self.grid)
        ConstraintChecker.is_valid(self.grid, 1, 1, 2, self.shape)
        self.assertEqual(self.grid, before)

    def test_candidates(self):
        grid = clone_grid(GRID_4)
        grid[1][1] = 0
        self.assertEqual(ConstraintChecker.get_candidates(grid, 1, 1, self.shape), [4])
        self.assertEqual(ConstraintChecker.get_candidates(self.grid, 0, 3, self.shape), [2, 3, 4])
        self.assertEqual(ConstraintChecker.get_candidates(self.grid, 3, 3, self.shape), [1, 2, 3, 4])


class TestWholeGrid(unittest.TestCase):
    def test_complete_solutions(self):
        self.assertTrue(ConstraintChecker.is_complete_solution(GRID_4, get_box_shape(4)))
        self.assertTrue(ConstraintChecker.is_complete_solution(GRID_6, get_box_shape(6)))

    def test_broken_solutions(self):
        swapped = clone_grid(GRID_4)
        swapped[0][0], swapped[0][1] = swapped[0][1], swapped[0][0]
        self.assertFalse(ConstraintChecker.is_complete_solution(swapped, get_box_shape(4)))

        holed = clone_grid(GRID_6)
        holed[3][3] = 0
        self.assertFalse(ConstraintChecker.is_complete_solution(holed, get_box_shape(6)))

        # Latin square whose 2x2 boxes repeat digits
        latin = [
            [1, 2, 3, 4],
            [2, 3, 4, 1],
            [3, 4, 1, 2],
            [4, 1, 2, 3],
        ]
        self.assertFalse(ConstraintChecker.is_complete_solution(latin, get_box_shape(4)))

    def test_derived_puzzle(self):
        puzzle = clone_grid(GRID_4)
        puzzle[0][0] = 0
        puzzle[2][3] = 0
        self.assertTrue(ConstraintChecker.is_derived_puzzle(puzzle, GRID_4))

        puzzle[1][1] = 1
        self.assertFalse(ConstraintChecker.is_derived_puzzle(puzzle, GRID_4))


if __name__ == "__main__":
    unittest.main()
