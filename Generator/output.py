from datetime import datetime
from typing import Dict, Optional

from .constraints import ConstraintChecker
from .diagnostics import analyze_distribution
from .grid import Grid, get_box_shape
from .remover import DIFFICULTY_LABELS, removal_target


class PuzzleFormatter:
    """Formats generated puzzles for output"""

    @staticmethod
    def format_grid(grid: Grid, size: int) -> str:
        """
        Text grid with box separators. Empty cells show as '·'.
        """
        shape = get_box_shape(size)
        width = len(str(size))
        band = "+".join(["-" * (shape.cols * (width + 1) - 1)] * shape.boxes_per_row)

        lines = []
        for r, row in enumerate(grid):
            if r and r % shape.rows == 0:
                lines.append("  " + band)
            chunks = []
            for start in range(0, size, shape.cols):
                cells = [
                    str(v).rjust(width) if v else "·".rjust(width)
                    for v in row[start:start + shape.cols]
                ]
                chunks.append(" ".join(cells))
            lines.append("  " + "|".join(chunks))
        return "\n".join(lines)

    @staticmethod
    def format_report(puzzle: Grid, solution: Grid, size: int, difficulty: str,
                      stats: Optional[Dict] = None) -> str:
        """
        Human-readable report: header, puzzle, answer key and checks
        """
        shape = get_box_shape(size)
        dist = analyze_distribution(puzzle, size)
        target = removal_target(size, difficulty)

        lines = []
        lines.append("=" * 60)
        lines.append("SUDOKU PUZZLE")
        lines.append("=" * 60)
        lines.append(f"\nSize: {size}x{size} (boxes {shape.rows}x{shape.cols})")
        lines.append(f"Difficulty: {DIFFICULTY_LABELS.get(difficulty, difficulty)}")
        lines.append(f"Empty cells: {dist.total}/{size * size} (target {target}, "
                     f"{dist.fill_fraction:.0%} filled)")
        lines.append(f"Generated: {datetime.now().isoformat(timespec='seconds')}\n")

        lines.append("PUZZLE:")
        lines.append("-" * 60)
        lines.append(PuzzleFormatter.format_grid(puzzle, size))

        lines.append("\nANSWER KEY:")
        lines.append("-" * 60)
        lines.append(PuzzleFormatter.format_grid(solution, size))

        lines.append("\n" + "=" * 60)
        lines.append("VALIDATION:")
        lines.append("-" * 60)

        checks = [
            ("Solution is a valid grid", ConstraintChecker.is_complete_solution(solution, shape)),
            ("Puzzle derives from solution", ConstraintChecker.is_derived_puzzle(puzzle, solution)),
            ("Every row/column/box has a blank", dist.is_covered()),
            ("Empty cells match target", dist.total == target),
        ]
        for name, ok in checks:
            mark = "✓" if ok else "✗"
            lines.append(f"{name:40s} {mark}")

        spread = dist.spread()
        lines.append(f"\nSpread (max-min) rows: {spread['rows']}  cols: {spread['cols']}  "
                     f"boxes: {spread['boxes']}")

        if stats:
            lines.append("\nGeneration stats:")
            for key, value in stats.items():
                lines.append(f"  {key}: {value}")

        lines.append("=" * 60)

        return "\n".join(lines)

    @staticmethod
    def save_human_readable(puzzle: Grid, solution: Grid, size: int, difficulty: str,
                            output_path: str, stats: Optional[Dict] = None):
        """
        Save the text report to a file
        """
        text = PuzzleFormatter.format_report(puzzle, solution, size, difficulty, stats)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(text + "\n")

        print(f"✓ Text version saved to: {output_path}")
