"""
Removal distribution diagnostics

Counts where the empty cells of a puzzle ended up, so a report (or a test)
can tell whether the removals are spread evenly and whether every row,
column and box kept at least one blank.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from .grid import Grid, REGION_COUNT, assert_valid_size, get_box_shape, get_spatial_region


@dataclass
class RemovalDistribution:
    size: int
    rows: List[int] = field(default_factory=list)
    cols: List[int] = field(default_factory=list)
    boxes: List[int] = field(default_factory=list)
    regions: List[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.rows)

    @property
    def fill_fraction(self) -> float:
        cells = self.size * self.size
        return (cells - self.total) / cells if cells else 0.0

    def uncovered(self) -> Dict[str, List[int]]:
        """Rows, columns and boxes that have no empty cell"""
        return {
            'rows': [i for i, n in enumerate(self.rows) if n == 0],
            'cols': [i for i, n in enumerate(self.cols) if n == 0],
            'boxes': [i for i, n in enumerate(self.boxes) if n == 0],
        }

    def is_covered(self) -> bool:
        return not any(self.uncovered().values())

    def spread(self) -> Dict[str, int]:
        """max - min removals per dimension"""
        return {
            'rows': max(self.rows) - min(self.rows),
            'cols': max(self.cols) - min(self.cols),
            'boxes': max(self.boxes) - min(self.boxes),
        }


def analyze_distribution(puzzle: Grid, size: int) -> RemovalDistribution:
    """Tally the empty cells of `puzzle` per row, column, box and region."""
    assert_valid_size(size)
    shape = get_box_shape(size)
    dist = RemovalDistribution(
        size=size,
        rows=[0] * size,
        cols=[0] * size,
        boxes=[0] * size,
        regions=[0] * REGION_COUNT,
    )

    for r in range(size):
        for c in range(size):
            if puzzle[r][c] != 0:
                continue
            dist.rows[r] += 1
            dist.cols[c] += 1
            dist.boxes[shape.box_index(r, c)] += 1
            dist.regions[get_spatial_region(r, c, size)] += 1

    return dist
