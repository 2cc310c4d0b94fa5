"""
Core grid model: sizes, box shapes, digit sets and spatial regions

A grid is an N x N list of lists of ints. 0 marks an empty cell,
1..N a placed digit.
"""
import math
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Tuple

from .errors import UnsupportedSizeError


Grid = List[List[int]]

SUPPORTED_SIZES: Tuple[int, ...] = (4, 6, 9)

# Box (rows, cols) per supported size. A supported size missing here falls back to sqrt.
BOX_SHAPES = {
    9: (3, 3),
    6: (2, 3),
    4: (2, 2),
}

# Regions tile the grid as a fixed 3x3 arrangement, whatever the box shape
REGIONS_PER_SIDE = 3
REGION_COUNT = REGIONS_PER_SIDE * REGIONS_PER_SIDE


@dataclass(frozen=True)
class BoxShape:
    """Shape of one box (sub-rectangle) of the grid"""
    rows: int
    cols: int

    @property
    def size(self) -> int:
        return self.rows * self.cols

    @property
    def boxes_per_row(self) -> int:
        """Number of boxes side by side across one band of rows"""
        return self.size // self.cols

    @property
    def boxes_per_col(self) -> int:
        """Number of boxes stacked down one band of columns"""
        return self.size // self.rows

    def box_index(self, row: int, col: int) -> int:
        """Box number of a cell, counted left to right, top to bottom"""
        return (row // self.rows) * self.boxes_per_row + (col // self.cols)

    def box_origin(self, index: int) -> Tuple[int, int]:
        """Top-left cell of box `index`"""
        box_row, box_col = divmod(index, self.boxes_per_row)
        return box_row * self.rows, box_col * self.cols

    def box_cells(self, index: int) -> List[Tuple[int, int]]:
        """All cells of box `index`, row-major"""
        start_row, start_col = self.box_origin(index)
        return [
            (start_row + i, start_col + j)
            for i in range(self.rows)
            for j in range(self.cols)
        ]

    def __repr__(self):
        return f"BoxShape({self.rows}x{self.cols})"


def is_valid_size(size) -> bool:
    return isinstance(size, int) and not isinstance(size, bool) and size in SUPPORTED_SIZES


def assert_valid_size(size) -> None:
    """Raise UnsupportedSizeError unless `size` is one of SUPPORTED_SIZES"""
    if not is_valid_size(size):
        raise UnsupportedSizeError(size, SUPPORTED_SIZES)


def get_box_shape(size: int) -> BoxShape:
    """
    Derive the box shape for a grid size.

    Uses the fixed lookup for known sizes and square boxes otherwise.
    Raises UnsupportedSizeError if the size is not supported or has no
    integral square root on the fallback path.

    Every size in SUPPORTED_SIZES has a BOX_SHAPES entry, so the square
    root branch only runs if a supported size is added without one.
    """
    assert_valid_size(size)
    if size in BOX_SHAPES:
        rows, cols = BOX_SHAPES[size]
        return BoxShape(rows, cols)

    root = math.isqrt(size)
    if root * root != size:
        raise UnsupportedSizeError(size, SUPPORTED_SIZES)
    return BoxShape(root, root)


@lru_cache(maxsize=None)
def get_digits(size: int) -> Tuple[int, ...]:
    """Ordered digit set 1..size (cached per size)"""
    return tuple(range(1, size + 1))


def make_empty_grid(size: int) -> Grid:
    return [[0] * size for _ in range(size)]


def clone_grid(grid: Grid) -> Grid:
    """Value copy of a grid; rows are never shared"""
    return [row[:] for row in grid]


def count_empty(grid: Grid) -> int:
    return sum(1 for row in grid for value in row if value == 0)


def get_region_tile(size: int) -> int:
    """Side length of one spatial region tile"""
    return -(-size // REGIONS_PER_SIDE)


def get_spatial_region(row: int, col: int, size: int) -> int:
    """
    Coarse spatial region of a cell.

    The grid is cut into a 3x3 arrangement of ceil(size/3)-sized tiles.
    For 9x9 each region is a 3x3 block, for 6x6 a 2x2 block, and for 4x4
    the 2x2 tiles only cover regions 0, 1, 3 and 4.
    """
    tile = get_region_tile(size)
    return (row // tile) * REGIONS_PER_SIDE + (col // tile)
