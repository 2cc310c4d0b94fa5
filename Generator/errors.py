"""
Error types raised by the generator core
"""


class SudokuError(Exception):
    """Base class for generator errors"""


class UnsupportedSizeError(SudokuError, ValueError):
    """Grid size has no supported box factorization"""

    def __init__(self, size, allowed=None):
        self.size = size
        self.allowed = tuple(allowed) if allowed else ()
        message = f'Unsupported Sudoku size "{size}".'
        if self.allowed:
            message += f" Allowed sizes: {', '.join(str(s) for s in self.allowed)}"
        super().__init__(message)


class UnsupportedDifficultyError(SudokuError, ValueError):
    """Difficulty label is not in the fill table"""

    def __init__(self, difficulty, allowed=None):
        self.difficulty = difficulty
        self.allowed = tuple(allowed) if allowed else ()
        message = f'Unknown difficulty "{difficulty}".'
        if self.allowed:
            message += f" Allowed: {', '.join(self.allowed)}"
        super().__init__(message)


class GenerationFailureError(SudokuError, RuntimeError):
    """Backtracking search exhausted every retry attempt"""

    def __init__(self, size, attempts):
        self.size = size
        self.attempts = attempts
        super().__init__(
            f"Failed to generate a valid {size}x{size} Sudoku grid after {attempts} attempts."
        )
