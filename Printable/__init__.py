"""
Printable page rendering for generated puzzles

Consumes a puzzle and its solution read-only and produces print-ready
pages (PNG images or a multi-page PDF).
"""

from .page import (
    PageConfig,
    GridGeometry,
    grid_geometry,
    render_grid,
    render_page,
    render_puzzle_pages,
    output_basename,
    save_png,
    save_pdf,
)

__all__ = [
    'PageConfig',
    'GridGeometry',
    'grid_geometry',
    'render_grid',
    'render_page',
    'render_puzzle_pages',
    'output_basename',
    'save_png',
    'save_pdf',
]
