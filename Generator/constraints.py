"""
Constraint checking for Sudoku grids

Key points:
 - `is_valid` is the single placement rule used by the synthesizer
 - Candidate lists are always returned in ascending digit order
 - Whole-grid checks are used by diagnostics and the text report
"""

from typing import List

from .grid import Grid, BoxShape, get_digits


# -----------------------------------------------------------------------------
# Constraint Checking
# -----------------------------------------------------------------------------
class ConstraintChecker:
    """Validates digit placements against row, column and box rules."""

    @staticmethod
    def is_valid(grid: Grid, row: int, col: int, digit: int, box_shape: BoxShape) -> bool:
        """
        Can `digit` legally occupy (row, col)?

        False if the digit already appears anywhere in the row, anywhere in
        the column, or anywhere in the box containing the cell.
        """
        size = len(grid)

        # Row
        for j in range(size):
            if grid[row][j] == digit:
                return False

        # Column
        for i in range(size):
            if grid[i][col] == digit:
                return False

        # Box
        start_row = row - row % box_shape.rows
        start_col = col - col % box_shape.cols
        for i in range(start_row, start_row + box_shape.rows):
            for j in range(start_col, start_col + box_shape.cols):
                if grid[i][j] == digit:
                    return False

        return True

    @staticmethod
    def get_candidates(grid: Grid, row: int, col: int, box_shape: BoxShape) -> List[int]:
        """All digits that may legally occupy (row, col)."""
        return [
            digit for digit in get_digits(len(grid))
            if ConstraintChecker.is_valid(grid, row, col, digit, box_shape)
        ]

    # ---------- whole-grid checks ----------

    @staticmethod
    def _is_permutation(values: List[int], size: int) -> bool:
        return sorted(values) == list(get_digits(size))

    @staticmethod
    def is_complete_solution(grid: Grid, box_shape: BoxShape) -> bool:
        """Every row, column and box holds each digit 1..N exactly once."""
        size = len(grid)
        if size != box_shape.size or any(len(row) != size for row in grid):
            return False

        for r in range(size):
            if not ConstraintChecker._is_permutation(grid[r], size):
                return False

        for c in range(size):
            if not ConstraintChecker._is_permutation([grid[r][c] for r in range(size)], size):
                return False

        for box in range(size):
            values = [grid[r][c] for r, c in box_shape.box_cells(box)]
            if not ConstraintChecker._is_permutation(values, size):
                return False

        return True

    @staticmethod
    def is_derived_puzzle(puzzle: Grid, solution: Grid) -> bool:
        """Each puzzle cell is either empty or equal to the solution cell."""
        if len(puzzle) != len(solution):
            return False
        for p_row, s_row in zip(puzzle, solution):
            if len(p_row) != len(s_row):
                return False
            for p, s in zip(p_row, s_row):
                if p != 0 and p != s:
                    return False
        return True
