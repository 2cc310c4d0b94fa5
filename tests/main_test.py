# -*- coding: utf-8 -*-
"""Test cases for the command-line entry point."""
import contextlib
import io
import os
import random
import tempfile
import unittest

import main
from Generator.constraints import ConstraintChecker
from Generator.errors import GenerationFailureError
from Generator.grid import get_box_shape
from Generator.synthesizer import GridSynthesizer


class TestParseArgs(unittest.TestCase):
    def test_defaults(self):
        self.assertEqual(main.parse_args([]), (main.BATCH_MODE, main.SIZE, main.DIFFICULTY))

    def test_overrides(self):
        self.assertEqual(main.parse_args(["6", "hard"]), (main.BATCH_MODE, 6, "hard"))
        self.assertEqual(main.parse_args(["4"]), (main.BATCH_MODE, 4, main.DIFFICULTY))

    def test_batch(self):
        batch, _, _ = main.parse_args(["all"])
        self.assertTrue(batch)

    def test_bad_size(self):
        with self.assertRaises(SystemExit):
            main.parse_args(["nine"])


class TestGeneratePrintable(unittest.TestCase):
    def test_writes_outputs(self):
        with tempfile.TemporaryDirectory() as tmp:
            with contextlib.redirect_stdout(io.StringIO()):
                written = main.generate_printable(4, "medium", tmp, seed=3, verbose=True, dpi=72)

            self.assertEqual(set(written), {'pdf', 'png_puzzle', 'png_answers', 'text'})
            for path in written.values():
                self.assertTrue(os.path.isfile(path), path)
            self.assertTrue(written['pdf'].endswith("sudoku-4x4-medium.pdf"))

            with open(written['text'], encoding='utf-8') as f:
                self.assertIn("Empty cells: 9/16", f.read())

    def test_pdf_only(self):
        with tempfile.TemporaryDirectory() as tmp:
            with contextlib.redirect_stdout(io.StringIO()):
                written = main.generate_printable(6, "hardest", tmp, seed=1,
                                                  save_png_pages=False, save_text=False, dpi=72)
            self.assertEqual(list(written), ['pdf'])
            self.assertEqual(os.listdir(tmp), ["sudoku-6x6-hardest.pdf"])


class FlakySynthesizer(GridSynthesizer):
    """Gives up a fixed number of times before producing a grid."""

    def __init__(self, failures):
        super().__init__(4, rng=random.Random(0))
        self.failures = failures
        self.runs = 0

    def generate(self):
        self.runs += 1
        if self.runs <= self.failures:
            raise GenerationFailureError(self.size, self.max_attempts)
        return super().generate()


class TestGenerationRetries(unittest.TestCase):
    def test_recovers_after_failures(self):
        synth = FlakySynthesizer(failures=2)
        with contextlib.redirect_stdout(io.StringIO()) as out:
            grid = main.generate_solution(synth, retries=3)
        self.assertEqual(synth.runs, 3)
        self.assertTrue(ConstraintChecker.is_complete_solution(grid, get_box_shape(4)))
        self.assertIn("retrying (2/3)", out.getvalue())

    def test_gives_up_after_retries(self):
        synth = FlakySynthesizer(failures=5)
        with contextlib.redirect_stdout(io.StringIO()):
            with self.assertRaises(GenerationFailureError):
                main.generate_solution(synth, retries=2)
        self.assertEqual(synth.runs, 3)

    def test_no_retries(self):
        synth = FlakySynthesizer(failures=1)
        with self.assertRaises(GenerationFailureError):
            main.generate_solution(synth, retries=0)
        self.assertEqual(synth.runs, 1)

    def test_exhausting_seed_still_writes_outputs(self):
        # A bare synthesizer gives up on seed 42 for 4x4
        with tempfile.TemporaryDirectory() as tmp:
            with contextlib.redirect_stdout(io.StringIO()) as out:
                written = main.generate_printable(4, "medium", tmp, seed=42, dpi=72)
            self.assertTrue(os.path.isfile(written['pdf']))
            self.assertIn("retrying (1/", out.getvalue())
            with open(written['text'], encoding='utf-8') as f:
                self.assertIn("Empty cells: 9/16", f.read())

        with tempfile.TemporaryDirectory() as tmp:
            with contextlib.redirect_stdout(io.StringIO()):
                with self.assertRaises(GenerationFailureError):
                    main.generate_printable(4, "medium", tmp, seed=42, dpi=72, retries=0)


class TestMain(unittest.TestCase):
    def test_unsupported_size_exits_with_error(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main.main(["5"])
        self.assertEqual(code, 1)
        self.assertIn("Unsupported Sudoku size", out.getvalue())

    def test_unknown_difficulty_exits_with_error(self):
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            code = main.main(["9", "extreme"])
        self.assertEqual(code, 1)
        self.assertIn("Unknown difficulty", out.getvalue())

    def test_batch(self):
        with tempfile.TemporaryDirectory() as tmp:
            with contextlib.redirect_stdout(io.StringIO()):
                success, failed = main.run_batch(tmp, seed=10, dpi=72)
            self.assertEqual(len(success), 12)
            self.assertEqual(failed, [])
            self.assertEqual(len(os.listdir(tmp)), 12)


if __name__ == "__main__":
    unittest.main()
