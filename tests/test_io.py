import io
import json
import tempfile
import unittest
from unittest.mock import patch
from pathlib import Path

import main
from sudoku_sat.core.exceptions import PuzzleFormatError
from sudoku_sat.engine.units import Units
from sudoku_sat.io.puzzles import format_puzzle, grid_to_indices, parse_puzzle, read_puzzles
from sudoku_sat.utils.pretty import format_candidates, format_grid

CLASSIC = "53..7....6..195....98....6.8...6...34..8.3..17...2...6.6....28....419..5....8..79"

BOXED = """
5 3 . | . 7 . | . . .
6 . . | 1 9 5 | . . .
. 9 8 | . . . | . 6 .
------+-------+------
8 . . | . 6 . | . . 3
4 . . | 8 . 3 | . . 1
7 . . | . 2 . | . . 6
------+-------+------
. 6 . | . . . | 2 8 .
. . . | 4 1 9 | . . 5
. . . | . 8 . | . 7 9
"""


class PuzzleFormatTests(unittest.TestCase):
    def test_boxed_and_inline_layouts_agree(self) -> None:
        self.assertEqual(parse_puzzle(BOXED), parse_puzzle(CLASSIC))

    def test_zero_blanks(self) -> None:
        grid = parse_puzzle(CLASSIC.replace(".", "0"))
        self.assertEqual(format_puzzle(grid), CLASSIC)
        self.assertEqual(grid[0][:3], [5, 3, 0])

    def test_rejects_bad_character(self) -> None:
        with self.assertRaises(PuzzleFormatError):
            parse_puzzle("x" + CLASSIC[1:])

    def test_rejects_wrong_length(self) -> None:
        with self.assertRaises(PuzzleFormatError):
            parse_puzzle(CLASSIC[:-1])

    def test_indices_follow_row_column_value_order(self) -> None:
        indices = list(grid_to_indices(parse_puzzle(CLASSIC)))
        self.assertEqual(len(indices), 30)
        self.assertEqual(indices[0], 4)
        self.assertEqual(indices[0].decode(), (0, 0, 4))

    def test_read_puzzles_skips_comments(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "puzzles.txt"
            path.write_text(f"# classic\n{CLASSIC}\n\n", encoding="utf-8")
            self.assertEqual(read_puzzles(path), [parse_puzzle(CLASSIC)])


class PrettyTests(unittest.TestCase):
    def test_format_grid_draws_boxes(self) -> None:
        lines = format_grid(parse_puzzle(CLASSIC)).splitlines()
        self.assertEqual(len(lines), 11)
        self.assertEqual(lines[0], " 5 3 . | . 7 . | . . .")

    def test_candidate_view_marks_placed_and_excluded(self) -> None:
        units = Units()
        units.assign(0, 0, 4)
        lines = format_candidates(units).splitlines()
        self.assertEqual(len(lines), 29)
        # Cell (0,0): values 1-3 excluded, then "-5-" on the middle row.
        self.assertTrue(lines[0].startswith("---"))
        self.assertTrue(lines[1].startswith("-5-"))
        # Cell (0,1) only lost value 5.
        self.assertEqual(lines[1].split()[1], ".-.")


class CliTests(unittest.TestCase):
    def test_solve_writes_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / "out.json"
            main.main(["--log-level", "WARNING", "--output", str(output), "solve", CLASSIC, "--verify"])
            payload = json.loads(output.read_text(encoding="utf-8"))
        entry = payload["results"][0]
        self.assertTrue(entry["solved"])
        self.assertTrue(entry["valid"])
        self.assertEqual(entry["solutions"], 1)
        self.assertTrue(entry["cpsat_solvable"])
        self.assertEqual(entry["status"], "SOLVED")

    def test_solve_reports_conflicting_clues(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / "out.json"
            with self.assertLogs("sudoku_sat.engine.sudoku", level="WARNING"):
                main.main(
                    ["--log-level", "WARNING", "--output", str(output), "solve", "55" + "." * 79, "--verify"]
                )
            payload = json.loads(output.read_text(encoding="utf-8"))
        entry = payload["results"][0]
        self.assertFalse(entry["solved"])
        self.assertEqual(entry["status"], "UNSATISFIABLE")
        self.assertIn("conflicts", entry["error"])
        self.assertEqual(entry["solutions"], 0)
        self.assertFalse(entry["cpsat_solvable"])

    def test_generate_writes_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / "out.json"
            main.main(["--log-level", "WARNING", "--output", str(output), "generate", "--seed", "1"])
            payload = json.loads(output.read_text(encoding="utf-8"))
        entry = payload["results"][0]
        self.assertEqual(entry["seed"], 1)
        self.assertEqual(len(entry["puzzle"]), 81)
        self.assertLess(entry["clues"], 81)

    def test_bad_puzzle_exits(self) -> None:
        with self.assertRaises(SystemExit):
            with patch("sys.stderr", new=io.StringIO()):
                main.main(["solve", "123"])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
