"""Plain-text puzzle format.

A puzzle is 81 cells read row by row: digits ``1-9`` for givens and ``.``,
``0`` or ``_`` for blanks. Whitespace and the box-drawing characters ``|``,
``-`` and ``+`` are ignored, so both single-line and boxed layouts parse.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List

from ..core.constants import CELLS, N
from ..core.exceptions import PuzzleFormatError
from ..core.index import Variable
from ..core.models import Grid

BLANKS = {".", "0", "_"}
SEPARATORS = {"|", "-", "+"}


def parse_puzzle(text: str) -> Grid:
    cells: List[int] = []
    for char in text:
        if char.isspace() or char in SEPARATORS:
            continue
        if char in BLANKS:
            cells.append(0)
        elif "1" <= char <= "9":
            cells.append(int(char))
        else:
            raise PuzzleFormatError(f"Invalid character {char!r} in puzzle")
    if len(cells) != CELLS:
        raise PuzzleFormatError(f"Puzzle has {len(cells)} cells, expected {CELLS}")
    return [cells[row * N:(row + 1) * N] for row in range(N)]


def read_puzzles(path: Path) -> List[Grid]:
    """Read one puzzle per non-empty line. Lines starting with # are skipped."""

    puzzles: List[Grid] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        puzzles.append(parse_puzzle(line))
    return puzzles


def format_puzzle(grid: Grid, blank: str = ".") -> str:
    return "".join(str(digit) if digit else blank for row in grid for digit in row)


def grid_to_indices(grid: Grid) -> Iterator[Variable]:
    """Yield the linear cell x value index of every given."""

    for row, digits in enumerate(grid):
        for column, digit in enumerate(digits):
            if digit:
                yield Variable.of(row, column, digit - 1)
