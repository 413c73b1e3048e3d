"""Deterministic rule validation for solved and partial grids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ..core.constants import N, SQRT_N
from ..core.exceptions import ValidationError
from ..core.models import Grid
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

DIGITS = set(range(1, N + 1))


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class GridValidator:
    """Checks a grid against the Sudoku rules.

    ``complete=True`` requires every row, column and block to be a
    permutation of 1-9; otherwise blanks are allowed and only repeated digits
    are reported.
    """

    def validate(
        self,
        grid: Grid,
        clues: Optional[Grid] = None,
        complete: bool = True,
    ) -> ValidationResult:
        try:
            self._check_shape(grid)
            self._check_digits(grid, complete)
            for label, cells in self._units():
                self._check_unit(grid, label, cells, complete)
            if clues is not None:
                self._check_shape(clues)
                self._check_clues(grid, clues)
        except ValidationError as exc:
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=[str(exc)])
        return ValidationResult(ok=True, messages=[])

    @staticmethod
    def _units() -> Iterable[Tuple[str, List[Tuple[int, int]]]]:
        for row in range(N):
            yield f"row {row + 1}", [(row, column) for column in range(N)]
        for column in range(N):
            yield f"column {column + 1}", [(row, column) for row in range(N)]
        for block in range(N):
            top = block // SQRT_N * SQRT_N
            left = block % SQRT_N * SQRT_N
            yield f"block {block + 1}", [
                (top + offset // SQRT_N, left + offset % SQRT_N) for offset in range(N)
            ]

    def _check_shape(self, grid: Grid) -> None:
        if len(grid) != N or any(len(row) != N for row in grid):
            raise ValidationError(f"Grid must be {N}x{N}")

    def _check_digits(self, grid: Grid, complete: bool) -> None:
        for r in range(N):
            for c in range(N):
                digit = grid[r][c]
                if digit == 0 and not complete:
                    continue
                if digit not in DIGITS:
                    raise ValidationError(f"Invalid digit {digit!r} at ({r},{c})")

    def _check_unit(
        self,
        grid: Grid,
        label: str,
        cells: List[Tuple[int, int]],
        complete: bool,
    ) -> None:
        digits = [grid[r][c] for r, c in cells if grid[r][c]]
        if len(set(digits)) != len(digits):
            raise ValidationError(f"Repeated digit in {label}: {digits}")
        if complete and set(digits) != DIGITS:
            raise ValidationError(f"{label.capitalize()} is not a permutation of 1-{N}")

    def _check_clues(self, grid: Grid, clues: Grid) -> None:
        for r in range(N):
            for c in range(N):
                if clues[r][c] and clues[r][c] != grid[r][c]:
                    raise ValidationError(
                        f"Clue {clues[r][c]} at ({r},{c}) replaced by {grid[r][c]}"
                    )
