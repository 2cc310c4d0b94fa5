"""
Sudoku Generator Package

Builds complete grids with diagonal seeding and MRV backtracking, then
empties cells under row/column/box/region balance to hit a difficulty.
"""

import random
from typing import Optional, Tuple

from .errors import (
    SudokuError,
    UnsupportedSizeError,
    UnsupportedDifficultyError,
    GenerationFailureError,
)
from .grid import Grid, BoxShape, SUPPORTED_SIZES, get_box_shape, get_digits, clone_grid
from .constraints import ConstraintChecker
from .synthesizer import GridSynthesizer, generate_complete_grid
from .remover import (
    BalancedCellRemover,
    RemovalState,
    DIFFICULTY_FILL,
    DIFFICULTY_LABELS,
    reduce_to_difficulty,
    removal_target,
)
from .diagnostics import RemovalDistribution, analyze_distribution
from .output import PuzzleFormatter


def generate_puzzle(size: int, difficulty: str,
                    rng: Optional[random.Random] = None) -> Tuple[Grid, Grid]:
    """Return (puzzle, solution) for one generation cycle."""
    rng = rng if rng is not None else random.Random()
    solution = generate_complete_grid(size, rng=rng)
    puzzle = reduce_to_difficulty(solution, size, difficulty, rng=rng)
    return puzzle, solution


__version__ = "1.0.0"
__all__ = [
    'SudokuError',
    'UnsupportedSizeError',
    'UnsupportedDifficultyError',
    'GenerationFailureError',
    'Grid',
    'BoxShape',
    'SUPPORTED_SIZES',
    'get_box_shape',
    'get_digits',
    'clone_grid',
    'ConstraintChecker',
    'GridSynthesizer',
    'generate_complete_grid',
    'BalancedCellRemover',
    'RemovalState',
    'DIFFICULTY_FILL',
    'DIFFICULTY_LABELS',
    'reduce_to_difficulty',
    'removal_target',
    'RemovalDistribution',
    'analyze_distribution',
    'PuzzleFormatter',
    'generate_puzzle',
]
