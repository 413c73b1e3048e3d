"""CLI entrypoint for the SAT-based Sudoku engine."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from sudoku_sat.core.exceptions import PuzzleFormatError
from sudoku_sat.core.models import EngineConfig, Grid
from sudoku_sat.engine.cpsat import count_solutions, solve_with_cpsat
from sudoku_sat.engine.sudoku import SudokuEngine
from sudoku_sat.engine.validator import GridValidator
from sudoku_sat.io.puzzles import format_puzzle, parse_puzzle, read_puzzles
from sudoku_sat.utils.logger import configure_logging
from sudoku_sat.utils.pretty import format_candidates, format_grid, print_generation_stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve and generate 9x9 Sudoku puzzles with a DPLL SAT solver",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Raise internal engine errors instead of reporting them",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate a new puzzle")
    generate.add_argument("--seed", type=int, default=1, help="32-bit generation seed")
    generate.add_argument(
        "--count", type=int, default=1, help="Number of puzzles (seeds seed, seed+1, ...)"
    )
    generate.add_argument(
        "--verify",
        action="store_true",
        help="Cross-check each puzzle with CP-SAT and report uniqueness",
    )
    generate.add_argument("--stats", action="store_true", help="Print grids and search counters")

    solve = subparsers.add_parser("solve", help="Solve puzzles")
    solve.add_argument("puzzle", nargs="?", help="81-cell puzzle text ('.' or 0 for blanks)")
    solve.add_argument(
        "--file",
        type=Path,
        metavar="FILE",
        help="File with one puzzle per line (# comments and blank lines ignored)",
    )
    solve.add_argument("--seed", type=int, default=1, help="Branching seed")
    solve.add_argument(
        "--verify",
        action="store_true",
        help="Validate each solution and count completions with CP-SAT",
    )
    solve.add_argument(
        "--candidates",
        action="store_true",
        help="Print the 27x27 candidate view after each solve",
    )
    return parser


def _generate(args: argparse.Namespace, engine: SudokuEngine) -> List[Dict[str, Any]]:
    entries: List[Dict[str, Any]] = []
    for seed in range(args.seed, args.seed + args.count):
        result = engine.generate_instance(seed)
        if result is None:
            entries.append({"seed": seed, "status": engine.status.value, "error": str(engine.last_error)})
            continue
        entry: Dict[str, Any] = {
            "seed": seed,
            "status": engine.status.value,
            "puzzle": format_puzzle(result.puzzle),
            "solution": format_puzzle(result.solution),
            "clues": result.clues,
        }
        if args.verify:
            entry["solutions"] = count_solutions(result.puzzle)
        if args.stats:
            print_generation_stats(result, stream=sys.stderr)
        entries.append(entry)
    return entries


def _solve(args: argparse.Namespace, engine: SudokuEngine, puzzles: List[Grid]) -> List[Dict[str, Any]]:
    validator = GridValidator()
    entries: List[Dict[str, Any]] = []
    for puzzle in puzzles:
        solved = engine.load(puzzle) and engine.solve()
        entry: Dict[str, Any] = {
            "puzzle": format_puzzle(puzzle),
            "status": engine.status.value,
            "solved": solved,
        }
        if solved:
            solution = engine.grid()
            entry["solution"] = format_puzzle(solution)
            if args.verify:
                validation = validator.validate(solution, clues=puzzle)
                entry["valid"] = validation.ok
                entry["validation"] = validation.messages
        elif engine.last_error is not None:
            entry["error"] = str(engine.last_error)
        if args.verify:
            entry["solutions"] = count_solutions(puzzle)
            entry["cpsat_solvable"] = solve_with_cpsat(puzzle) is not None
        if args.candidates:
            print(format_candidates(engine.units), file=sys.stderr)
            print(file=sys.stderr)
        elif solved:
            print(format_grid(engine.grid()), file=sys.stderr)
            print(file=sys.stderr)
        entries.append(entry)
    return entries


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    engine = SudokuEngine(EngineConfig(seed=args.seed, strict=args.strict))

    if args.command == "generate":
        if args.count < 1:
            parser.error("--count must be at least 1")
        entries = _generate(args, engine)
    else:
        puzzles: List[Grid] = []
        try:
            if args.puzzle:
                puzzles.append(parse_puzzle(args.puzzle))
            if args.file:
                puzzles.extend(read_puzzles(args.file))
        except PuzzleFormatError as exc:
            parser.error(str(exc))
        if not puzzles:
            parser.error("provide a puzzle or --file")
        entries = _solve(args, engine, puzzles)

    payload: Dict[str, Any] = {"command": args.command, "results": entries}
    output_text = json.dumps(payload, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)


if __name__ == "__main__":  # pragma: no cover
    main()
