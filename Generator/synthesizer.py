"""
Complete-grid synthesizer

Strategy:
1. Seed the diagonal boxes with shuffled digit sets (they share no row,
   column or box, so no search is needed there)
2. Fill the rest with MRV backtracking over an explicit frame stack
3. Retry from scratch on exhaustion, up to a fixed number of attempts
"""

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .constraints import ConstraintChecker
from .errors import GenerationFailureError
from .grid import Grid, assert_valid_size, get_box_shape, get_digits, make_empty_grid


MAX_ATTEMPTS = 5

CellChoice = Tuple[int, int, List[int]]


@dataclass
class SearchFrame:
    """One level of the backtracking stack"""
    row: int
    col: int
    candidates: List[int]  # untried digits, in trial order


class GridSynthesizer:
    def __init__(self, size: int, rng: Optional[random.Random] = None,
                 max_attempts: int = MAX_ATTEMPTS, verbose: bool = False):
        assert_valid_size(size)
        self.size = size
        self.box_shape = get_box_shape(size)
        self.digits = get_digits(size)
        self.rng = rng if rng is not None else random.Random()
        self.max_attempts = max_attempts
        self.verbose = verbose
        self.stats = {
            'attempts': 0,
            'placements': 0,
            'backtracks': 0,
            'max_depth': 0,
        }

    # -------------------------------------------------------------------------
    # Main driver
    # -------------------------------------------------------------------------
    def generate(self) -> Grid:
        """Produce a fully filled, rule-valid grid."""
        grid = make_empty_grid(self.size)

        for attempt in range(1, self.max_attempts + 1):
            self.stats['attempts'] = attempt
            self._reset(grid)
            self._seed_diagonal_boxes(grid)

            if self._complete(grid):
                if self.verbose:
                    print(f"✓ {self.size}x{self.size} grid completed on attempt {attempt}")
                return grid

            if self.verbose:
                print(f"✗ Attempt {attempt} exhausted the search, retrying")

        raise GenerationFailureError(self.size, self.max_attempts)

    def _reset(self, grid: Grid) -> None:
        for row in grid:
            for j in range(len(row)):
                row[j] = 0

    # -------------------------------------------------------------------------
    # Diagonal seeding
    # -------------------------------------------------------------------------
    def _seed_diagonal_boxes(self, grid: Grid) -> None:
        """Fill every box (k, k) of the box grid with a random permutation."""
        shape = self.box_shape
        for k in range(min(shape.boxes_per_row, shape.boxes_per_col)):
            digits = list(self.digits)
            self.rng.shuffle(digits)
            start_row, start_col = k * shape.rows, k * shape.cols
            it = iter(digits)
            for i in range(shape.rows):
                for j in range(shape.cols):
                    grid[start_row + i][start_col + j] = next(it)

    # -------------------------------------------------------------------------
    # MRV backtracking
    # -------------------------------------------------------------------------
    def _complete(self, grid: Grid) -> bool:
        """
        Fill every empty cell, or return False if the search is exhausted.

        Each frame holds the chosen cell and its untried candidates, so the
        stack never grows past the number of cells.
        """
        choice = self._select_mrv_cell(grid)
        if choice is None:
            return True
        row, col, candidates = choice
        if not candidates:
            return False

        stack: List[SearchFrame] = [SearchFrame(row, col, candidates)]

        while stack:
            frame = stack[-1]

            if not frame.candidates:
                # Undo and hand control back to the parent frame
                grid[frame.row][frame.col] = 0
                stack.pop()
                self.stats['backtracks'] += 1
                continue

            grid[frame.row][frame.col] = frame.candidates.pop(0)
            self.stats['placements'] += 1

            choice = self._select_mrv_cell(grid)
            if choice is None:
                return True

            row, col, candidates = choice
            if not candidates:
                continue  # dead end, try the next digit for this frame

            stack.append(SearchFrame(row, col, candidates))
            self.stats['max_depth'] = max(self.stats['max_depth'], len(stack))

        return False

    def _select_mrv_cell(self, grid: Grid) -> Optional[CellChoice]:
        """
        Pick the empty cell with the fewest legal candidates.

        Returns None when the grid is full. A cell with no candidates is
        returned straight away (with an empty list) so the caller can fail
        fast; a cell with exactly one candidate ends the scan early.
        """
        best: Optional[CellChoice] = None
        best_count = len(self.digits) + 1

        for r in range(self.size):
            for c in range(self.size):
                if grid[r][c] != 0:
                    continue

                candidates = ConstraintChecker.get_candidates(grid, r, c, self.box_shape)
                if not candidates:
                    return r, c, candidates

                if len(candidates) < best_count:
                    best_count = len(candidates)
                    best = (r, c, candidates)
                    if best_count == 1:
                        return best

        if best is not None:
            self.rng.shuffle(best[2])
        return best

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------
    def print_stats(self) -> None:
        """Print generation statistics."""
        print("\nGeneration Statistics:")
        print(f"  Attempts: {self.stats['attempts']}")
        print(f"  Placements: {self.stats['placements']}")
        print(f"  Backtracks: {self.stats['backtracks']}")
        print(f"  Max depth: {self.stats['max_depth']}")


def generate_complete_grid(size: int, rng: Optional[random.Random] = None) -> Grid:
    """Fully solved grid of the given size."""
    return GridSynthesizer(size, rng=rng).generate()
