"""SAT-based engine for 9x9 Sudoku.

This package exposes the public API surface via:

- ``sudoku_sat.engine.sudoku.SudokuEngine``: owns the stores and serves the
  host boundary (cell assignment, solving, puzzle generation).
- ``sudoku_sat.engine.search.DPLLSearch``: randomized DPLL over the encoding.
- ``sudoku_sat.io.puzzles`` helpers: plain-text puzzle parsing and output.
"""

from .core.models import EngineConfig, GenerationResult
from .engine.sudoku import SudokuEngine
from .io.puzzles import format_puzzle, parse_puzzle

__all__ = [
    "EngineConfig",
    "GenerationResult",
    "SudokuEngine",
    "format_puzzle",
    "parse_puzzle",
]

__version__ = "0.1.0"
