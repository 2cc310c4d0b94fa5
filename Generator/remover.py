"""
Balanced cell remover

Turns a complete solution into a puzzle by emptying cells until the
difficulty's fill fraction is reached, while keeping removals spread out:

1. Row coverage    - every row gets at least one empty cell
2. Column coverage - every column gets at least one empty cell
3. Box coverage    - every box gets at least one empty cell
4. Quota fill      - column round-robin up to the target, with a flat
                     priority ranking as a last resort

Lower priority means the cell's row/column/box/region has seen fewer
removals so far.
"""

import math
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from .errors import UnsupportedDifficultyError
from .grid import (
    Grid,
    BoxShape,
    REGION_COUNT,
    assert_valid_size,
    clone_grid,
    get_box_shape,
    get_spatial_region,
)


# Fraction of cells that stay filled
DIFFICULTY_FILL: Dict[str, float] = {
    'easy': 0.65,
    'medium': 0.40,
    'hard': 0.34,
    'hardest': 0.28,
}

DIFFICULTY_LABELS: Dict[str, str] = {
    'easy': 'Easy (Kids Easy - 65% filled)',
    'medium': 'Medium (Adult Easy - 40% filled)',
    'hard': 'Hard (Adult Medium - 34% filled)',
    'hardest': 'Hardest (Adult Hard - 28% filled)',
}

REGION_WEIGHT = 1.5
TOP_CHOICES = 3     # coverage phases pick randomly among this many best cells
COLUMN_SCAN = 5     # quota phase looks this deep into a column's ranking

Cell = Tuple[int, int]


def get_fill_fraction(difficulty: str) -> float:
    try:
        return DIFFICULTY_FILL[difficulty]
    except KeyError:
        raise UnsupportedDifficultyError(difficulty, DIFFICULTY_FILL.keys()) from None


def removal_target(size: int, difficulty: str) -> int:
    """Number of cells a puzzle of this size and difficulty should have empty."""
    return math.floor(size * size * (1 - get_fill_fraction(difficulty)))


# -----------------------------------------------------------------------------
# Removal bookkeeping
# -----------------------------------------------------------------------------
@dataclass
class RemovalState:
    """Counters for one removal run"""
    size: int
    box_shape: BoxShape
    row_removed: List[int] = field(default_factory=list)
    col_removed: List[int] = field(default_factory=list)
    box_removed: List[int] = field(default_factory=list)
    region_removed: List[int] = field(default_factory=list)
    removed: Set[Cell] = field(default_factory=set)
    rows_covered: Set[int] = field(default_factory=set)
    cols_covered: Set[int] = field(default_factory=set)
    boxes_covered: Set[int] = field(default_factory=set)

    def __post_init__(self):
        self.row_removed = [0] * self.size
        self.col_removed = [0] * self.size
        self.box_removed = [0] * self.size
        self.region_removed = [0] * REGION_COUNT

    @property
    def removed_count(self) -> int:
        return len(self.removed)

    def is_removed(self, row: int, col: int) -> bool:
        return (row, col) in self.removed

    def record_removal(self, row: int, col: int) -> bool:
        """
        Count a removal at (row, col).

        Returns False (and changes nothing) if the cell was already removed.
        """
        if (row, col) in self.removed:
            return False

        box = self.box_shape.box_index(row, col)
        region = get_spatial_region(row, col, self.size)

        self.removed.add((row, col))
        self.row_removed[row] += 1
        self.col_removed[col] += 1
        self.box_removed[box] += 1
        self.region_removed[region] += 1

        self.rows_covered.add(row)
        self.cols_covered.add(col)
        self.boxes_covered.add(box)
        return True

    def priority(self, row: int, col: int) -> float:
        box = self.box_shape.box_index(row, col)
        region = get_spatial_region(row, col, self.size)
        return (self.row_removed[row]
                + self.col_removed[col]
                + self.box_removed[box]
                + REGION_WEIGHT * self.region_removed[region])


@dataclass
class ColumnCandidate:
    row: int
    col: int
    priority: float  # ranked once when the quota phase starts
    region: int


# -----------------------------------------------------------------------------
# Remover
# -----------------------------------------------------------------------------
class BalancedCellRemover:
    def __init__(self, size: int, rng: Optional[random.Random] = None):
        assert_valid_size(size)
        self.size = size
        self.box_shape = get_box_shape(size)
        self.rng = rng if rng is not None else random.Random()
        self.stats = {
            'coverage_removals': 0,
            'round_robin_removals': 0,
            'fallback_removals': 0,
        }

    def create_puzzle(self, solution: Grid, difficulty: str) -> Grid:
        """Return a new puzzle grid; `solution` is never modified."""
        target = removal_target(self.size, difficulty)
        puzzle = clone_grid(solution)
        state = RemovalState(self.size, self.box_shape)
        for key in self.stats:
            self.stats[key] = 0

        self._cover_rows(puzzle, state)
        self._cover_columns(puzzle, state)
        self._cover_boxes(puzzle, state)
        self.stats['coverage_removals'] = state.removed_count

        self._fill_quota(puzzle, state, target)
        return puzzle

    def _remove(self, puzzle: Grid, state: RemovalState, row: int, col: int) -> bool:
        if not state.record_removal(row, col):
            return False
        puzzle[row][col] = 0
        return True

    def _pick_from_top(self, ranked: List[Tuple[float, Cell]]) -> Cell:
        """Random pick among the TOP_CHOICES lowest-priority cells."""
        ranked.sort(key=lambda item: item[0])
        top = ranked[:TOP_CHOICES]
        return self.rng.choice(top)[1]

    # -------------------------------------------------------------------------
    # Phases 1-3: coverage
    # -------------------------------------------------------------------------
    def _cover_rows(self, puzzle: Grid, state: RemovalState) -> None:
        for row in range(self.size):
            if row in state.rows_covered:
                continue
            ranked = [
                (state.priority(row, col), (row, col))
                for col in range(self.size)
                if not state.is_removed(row, col)
            ]
            if ranked:
                self._remove(puzzle, state, *self._pick_from_top(ranked))

    def _cover_columns(self, puzzle: Grid, state: RemovalState) -> None:
        for col in range(self.size):
            if col in state.cols_covered:
                continue
            ranked = [
                (state.priority(row, col), (row, col))
                for row in range(self.size)
                if not state.is_removed(row, col)
            ]
            if ranked:
                self._remove(puzzle, state, *self._pick_from_top(ranked))

    def _cover_boxes(self, puzzle: Grid, state: RemovalState) -> None:
        for box in range(self.size):
            if box in state.boxes_covered:
                continue
            ranked = [
                (state.priority(row, col), (row, col))
                for row, col in self.box_shape.box_cells(box)
                if not state.is_removed(row, col)
            ]
            if ranked:
                self._remove(puzzle, state, *self._pick_from_top(ranked))

    # -------------------------------------------------------------------------
    # Phase 4: quota
    # -------------------------------------------------------------------------
    def _fill_quota(self, puzzle: Grid, state: RemovalState, target: int) -> None:
        remaining = target - state.removed_count
        if remaining <= 0:
            return

        by_column: Dict[int, List[ColumnCandidate]] = {col: [] for col in range(self.size)}
        for row in range(self.size):
            for col in range(self.size):
                if not state.is_removed(row, col):
                    by_column[col].append(ColumnCandidate(
                        row, col, state.priority(row, col),
                        get_spatial_region(row, col, self.size),
                    ))
        for candidates in by_column.values():
            candidates.sort(key=lambda cand: (cand.priority, cand.region))

        quota = min(remaining, sum(len(c) for c in by_column.values()))
        column_order = sorted(range(self.size), key=lambda col: state.col_removed[col])
        removed = 0

        while removed < quota:
            column = next((col for col in column_order if by_column[col]), None)
            if column is None:
                break  # nothing left in any column

            candidates = by_column[column]
            scan = range(min(len(candidates), COLUMN_SCAN))
            best = min(scan, key=lambda i: (candidates[i].priority,
                                            state.region_removed[candidates[i].region]))
            cand = candidates.pop(best)

            if self._remove(puzzle, state, cand.row, cand.col):
                removed += 1
                self.stats['round_robin_removals'] += 1

            column_order.sort(key=lambda col: state.col_removed[col])

        if removed < quota:
            self._fill_fallback(puzzle, state, quota - removed)

    def _fill_fallback(self, puzzle: Grid, state: RemovalState, still_needed: int) -> None:
        """Flat ranking of every remaining cell, lowest priority first."""
        ranked = sorted(
            ((state.priority(row, col), (row, col))
             for row in range(self.size)
             for col in range(self.size)
             if not state.is_removed(row, col)),
            key=lambda item: item[0],
        )
        for _, (row, col) in ranked[:still_needed]:
            if self._remove(puzzle, state, row, col):
                self.stats['fallback_removals'] += 1


def reduce_to_difficulty(grid: Grid, size: int, difficulty: str,
                         rng: Optional[random.Random] = None) -> Grid:
    """Puzzle derived from a complete grid at the given difficulty."""
    return BalancedCellRemover(size, rng=rng).create_puzzle(grid, difficulty)
