# Printable/page.py
from __future__ import annotations
import cv2
import numpy as np
from dataclasses import dataclass
from typing import List, Tuple
from PIL import Image

from Generator.grid import Grid, get_box_shape
from Generator.remover import DIFFICULTY_LABELS

# --------------------------- Models ---------------------------

@dataclass
class PageConfig:
    # Page (A4 portrait)
    dpi: int = 150
    page_width_in: float = 8.27
    page_height_in: float = 11.69

    # Grid takes the page width minus this margin on each side
    margin_ratio: float = 0.12

    # Vertical layout, as fractions of page height
    title_y_ratio: float = 0.07
    subtitle_y_ratio: float = 0.10
    grid_top_ratio: float = 0.14

    # Lines (px)
    thin_px: int = 2
    box_px: int = 5
    border_px: int = 7

    # Colours (BGR)
    thin_color: Tuple[int, int, int] = (204, 204, 204)
    line_color: Tuple[int, int, int] = (0, 0, 0)
    subtitle_color: Tuple[int, int, int] = (102, 102, 102)

    # Digit height relative to cell size; larger for smaller grids
    digit_ratio_9: float = 0.48
    digit_ratio_6: float = 0.52
    digit_ratio_4: float = 0.56

    @property
    def page_px(self) -> Tuple[int, int]:
        """(width, height) in pixels"""
        return int(round(self.page_width_in * self.dpi)), int(round(self.page_height_in * self.dpi))

    def digit_ratio(self, size: int) -> float:
        if size >= 9:
            return self.digit_ratio_9
        if size >= 6:
            return self.digit_ratio_6
        return self.digit_ratio_4

@dataclass
class GridGeometry:
    cell: int      # cell pitch (px)
    offset: int    # first grid line position inside the grid image (px)
    side: int      # grid image side (px)

    def cell_box(self, row: int, col: int) -> Tuple[int, int, int, int]:
        """x, y, w, h of a cell inside the grid image"""
        return self.offset + col * self.cell, self.offset + row * self.cell, self.cell, self.cell

# --------------------------- Geometry ---------------------------

FONT = cv2.FONT_HERSHEY_SIMPLEX

def grid_geometry(size: int, cfg: PageConfig) -> GridGeometry:
    width, _ = cfg.page_px
    usable = int(width * (1 - 2 * cfg.margin_ratio))
    cell = usable // size
    offset = cfg.border_px // 2 + 1
    return GridGeometry(cell=cell, offset=offset, side=cell * size + 2 * offset)

def _fit_font_scale(text_height: float, thickness: int) -> float:
    """Font scale giving roughly `text_height` px tall glyphs"""
    (_, h), _ = cv2.getTextSize("8", FONT, 1.0, thickness)
    return text_height / max(h, 1)

def _put_centered(img: np.ndarray, text: str, cx: int, cy: int,
                  scale: float, color: Tuple[int, int, int], thickness: int) -> None:
    (w, h), _ = cv2.getTextSize(text, FONT, scale, thickness)
    cv2.putText(img, text, (cx - w // 2, cy + h // 2), FONT, scale, color, thickness, cv2.LINE_AA)

# --------------------------- Rendering ---------------------------

def render_grid(grid: Grid, size: int, cfg: PageConfig = None) -> np.ndarray:
    """
    Draw a grid as a BGR image.

    Thin lines between cells, thick lines on box boundaries, digits centred
    in their cells. Zero cells are left blank.
    """
    cfg = cfg or PageConfig()
    shape = get_box_shape(size)
    geo = grid_geometry(size, cfg)
    img = np.full((geo.side, geo.side, 3), 255, dtype=np.uint8)

    start, end = geo.offset, geo.offset + size * geo.cell

    # Cell lines first, box lines over them
    for i in range(size + 1):
        p = geo.offset + i * geo.cell
        cv2.line(img, (p, start), (p, end), cfg.thin_color, cfg.thin_px)
        cv2.line(img, (start, p), (end, p), cfg.thin_color, cfg.thin_px)

    for i in range(0, size + 1, shape.cols):
        p = geo.offset + i * geo.cell
        cv2.line(img, (p, start), (p, end), cfg.line_color, cfg.box_px)
    for i in range(0, size + 1, shape.rows):
        p = geo.offset + i * geo.cell
        cv2.line(img, (start, p), (end, p), cfg.line_color, cfg.box_px)

    cv2.rectangle(img, (start, start), (end, end), cfg.line_color, cfg.border_px)

    # Digits
    thickness = max(2, geo.cell // 25)
    scale = _fit_font_scale(geo.cell * cfg.digit_ratio(size), thickness)
    for r in range(size):
        for c in range(size):
            value = grid[r][c]
            if not value:
                continue
            x, y, w, h = geo.cell_box(r, c)
            _put_centered(img, str(value), x + w // 2, y + h // 2, scale, cfg.line_color, thickness)

    return img

def render_page(grid: Grid, size: int, title: str, subtitle: str = "",
                cfg: PageConfig = None) -> np.ndarray:
    """White page with a title, an optional subtitle and the grid centred below."""
    cfg = cfg or PageConfig()
    width, height = cfg.page_px
    page = np.full((height, width, 3), 255, dtype=np.uint8)

    title_scale = _fit_font_scale(height * 0.022, 3)
    _put_centered(page, title, width // 2, int(height * cfg.title_y_ratio),
                  title_scale, cfg.line_color, 3)
    if subtitle:
        sub_scale = _fit_font_scale(height * 0.012, 2)
        _put_centered(page, subtitle, width // 2, int(height * cfg.subtitle_y_ratio),
                      sub_scale, cfg.subtitle_color, 2)

    grid_img = render_grid(grid, size, cfg)
    side = grid_img.shape[0]
    x = (width - side) // 2
    y = int(height * cfg.grid_top_ratio)
    page[y:y + side, x:x + side] = grid_img
    return page

def render_puzzle_pages(puzzle: Grid, solution: Grid, size: int, difficulty: str,
                        cfg: PageConfig = None) -> List[np.ndarray]:
    """[puzzle page, answer key page]. Neither grid is modified."""
    cfg = cfg or PageConfig()
    label = DIFFICULTY_LABELS.get(difficulty, difficulty)
    subtitle = f"{size}x{size} - {label}"
    return [
        render_page(puzzle, size, "Sudoku Puzzle", subtitle, cfg),
        render_page(solution, size, "Answer Key", subtitle, cfg),
    ]

# --------------------------- Export ---------------------------

def output_basename(size: int, difficulty: str) -> str:
    return f"sudoku-{size}x{size}-{difficulty.replace(' ', '-')}"

def save_png(page: np.ndarray, path: str) -> None:
    if not cv2.imwrite(str(path), page):
        raise RuntimeError(f"[page] Could not write image: {path}")

def save_pdf(pages: List[np.ndarray], path: str, cfg: PageConfig = None) -> None:
    """Write BGR pages to a single PDF, one page each."""
    if not pages:
        raise ValueError("[page] No pages to save")
    cfg = cfg or PageConfig()
    images = [Image.fromarray(cv2.cvtColor(p, cv2.COLOR_BGR2RGB)) for p in pages]
    images[0].save(str(path), "PDF", resolution=float(cfg.dpi),
                   save_all=True, append_images=images[1:])
