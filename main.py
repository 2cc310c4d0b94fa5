#!/usr/bin/env python3
"""
Sudoku Generator - Main Entry Point

Usage:
    python main.py                 # Uses SIZE / DIFFICULTY below
    python main.py 6 hard          # 6x6 grid, hard
    python main.py all             # Every size and difficulty (batch)
"""

import os
import random
import sys
from pathlib import Path

from Generator import (
    DIFFICULTY_FILL,
    SUPPORTED_SIZES,
    BalancedCellRemover,
    GenerationFailureError,
    GridSynthesizer,
    PuzzleFormatter,
    SudokuError,
)
from Printable import PageConfig, output_basename, render_puzzle_pages, save_pdf, save_png

# ============================================================================
# CONFIGURATION
# ============================================================================
SIZE = 9                      # Grid size: 4, 6 or 9
DIFFICULTY = "easy"           # easy | medium | hard | hardest
OUTPUT_DIR = "data/output"    # Where printable files go
BATCH_MODE = False            # Set True to generate every size x difficulty

SEED = None
# Fix this to an int to get the same puzzle on every run

VERBOSE = False
# Print attempt/backtrack details from the generator

SAVE_PNG = True
# Also write each page as a PNG next to the PDF

SAVE_TEXT = True
# Also write a plain-text report (puzzle, answer key, checks)

PAGE_DPI = 150

GENERATION_RETRIES = 3
# Extra synthesizer runs when one exhausts its attempts
# ============================================================================


def ensure_dir(path):
    os.makedirs(path, exist_ok=True)


def generate_solution(synthesizer: GridSynthesizer, retries: int = GENERATION_RETRIES):
    """
    Run the synthesizer, starting over up to `retries` more times if it
    gives up. Every run draws from the synthesizer's own random source.
    """
    for run in range(retries + 1):
        try:
            return synthesizer.generate()
        except GenerationFailureError as e:
            if run == retries:
                raise
            print(f"⚠️  {e} - retrying ({run + 1}/{retries})")


def generate_printable(size: int, difficulty: str, output_dir: str = OUTPUT_DIR,
                       seed=SEED, verbose: bool = VERBOSE,
                       save_png_pages: bool = SAVE_PNG, save_text: bool = SAVE_TEXT,
                       dpi: int = PAGE_DPI, retries: int = GENERATION_RETRIES):
    """
    Generate one puzzle and write its printable outputs.

    Args:
        size: Grid size (4, 6 or 9)
        difficulty: Difficulty label
        output_dir: Directory for output files
        seed: Optional seed for a reproducible puzzle
        verbose: Print generator progress
        save_png_pages: Write puzzle/answer pages as PNG too
        save_text: Write a text report too
        dpi: Page resolution
        retries: Extra synthesizer runs if generation gives up

    Returns:
        Dict of written file paths
    """
    rng = random.Random(seed)

    synthesizer = GridSynthesizer(size, rng=rng, verbose=verbose)
    remover = BalancedCellRemover(size, rng=rng)

    solution = generate_solution(synthesizer, retries)
    puzzle = remover.create_puzzle(solution, difficulty)

    if verbose:
        synthesizer.print_stats()
        print(f"  Coverage removals: {remover.stats['coverage_removals']}")
        print(f"  Round-robin removals: {remover.stats['round_robin_removals']}")
        print(f"  Fallback removals: {remover.stats['fallback_removals']}")

    output_dir = Path(output_dir)
    ensure_dir(output_dir)
    base = output_basename(size, difficulty)
    written = {}

    cfg = PageConfig(dpi=dpi)
    pages = render_puzzle_pages(puzzle, solution, size, difficulty, cfg)

    pdf_path = output_dir / f"{base}.pdf"
    save_pdf(pages, str(pdf_path), cfg)
    written['pdf'] = str(pdf_path)

    if save_png_pages:
        for name, page in zip(("puzzle", "answers"), pages):
            png_path = output_dir / f"{base}-{name}.png"
            save_png(page, str(png_path))
            written[f'png_{name}'] = str(png_path)

    if save_text:
        txt_path = output_dir / f"{base}.txt"
        stats = dict(synthesizer.stats)
        stats.update(remover.stats)
        PuzzleFormatter.save_human_readable(puzzle, solution, size, difficulty,
                                            str(txt_path), stats)
        written['text'] = str(txt_path)

    if verbose:
        print("\n" + PuzzleFormatter.format_grid(puzzle, size))

    return written


def run_batch(output_dir: str = OUTPUT_DIR, seed=SEED, dpi: int = PAGE_DPI):
    """Generate every supported size and difficulty; returns (success, failed)."""
    jobs = [(size, difficulty) for size in SUPPORTED_SIZES for difficulty in DIFFICULTY_FILL]

    print("\n" + "=" * 70)
    print("BATCH GENERATION MODE")
    print("=" * 70)
    print(f"{len(jobs)} puzzles to generate\n")

    results = {'success': [], 'failed': []}

    for i, (size, difficulty) in enumerate(jobs, 1):
        name = output_basename(size, difficulty)
        print(f"[{i}/{len(jobs)}] {name}")
        job_seed = None if seed is None else seed + i
        try:
            generate_printable(size, difficulty, output_dir, seed=job_seed, verbose=False,
                               save_png_pages=False, save_text=False, dpi=dpi)
            results['success'].append(name)
        except Exception as e:
            print(f"\n❌ ERROR: {e}")
            results['failed'].append((name, str(e)))

    print("\n" + "=" * 70)
    print("BATCH GENERATION COMPLETE")
    print("=" * 70)
    print(f"\n✅ Successful: {len(results['success'])}/{len(jobs)}")
    if results['failed']:
        print(f"\n❌ Failed: {len(results['failed'])}/{len(jobs)}")
        for name, error in results['failed']:
            print(f"   - {name}: {error}")
    print(f"\nResults saved to: {output_dir}/")

    return results['success'], results['failed']


def parse_args(argv):
    """
    Positional overrides: [size] [difficulty], or 'all' for batch mode.
    Returns (batch, size, difficulty).
    """
    if argv and argv[0] == "all":
        return True, SIZE, DIFFICULTY

    size, difficulty = SIZE, DIFFICULTY
    if argv:
        try:
            size = int(argv[0])
        except ValueError:
            raise SystemExit(f"Error: size must be an integer, got '{argv[0]}'")
    if len(argv) > 1:
        difficulty = " ".join(argv[1:])
    return BATCH_MODE, size, difficulty


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    batch, size, difficulty = parse_args(argv)

    if batch:
        _, failed = run_batch(OUTPUT_DIR, SEED)
        return 1 if failed else 0

    print(f"\n{'=' * 60}")
    print(f"Generating {size}x{size} Sudoku ({difficulty})")
    print(f"Output directory: {OUTPUT_DIR}")
    print(f"{'=' * 60}")

    try:
        written = generate_printable(size, difficulty, OUTPUT_DIR)
    except SudokuError as e:
        print(f"\n❌ ERROR: {e}")
        return 1

    for kind, path in written.items():
        print(f"[output] {kind}: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
