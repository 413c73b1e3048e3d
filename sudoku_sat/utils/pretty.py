"""Pretty-print helpers for grids and candidate stores."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List

from ..core.constants import N, SQRT_N, TruthCode
from ..core.index import variable_index

if TYPE_CHECKING:
    from ..core.models import GenerationResult, Grid
    from ..engine.units import Units


SYMBOLS = {
    TruthCode.UNKNOWN: ".",
    TruthCode.FALSE: "-",
    TruthCode.CONFLICT: "!",
}


def format_grid(grid: Grid) -> str:
    rule = "+".join(["-" * (2 * SQRT_N + 1)] * SQRT_N)
    lines: List[str] = []
    for r in range(N):
        if r and r % SQRT_N == 0:
            lines.append(rule)
        blocks = []
        for left in range(0, N, SQRT_N):
            blocks.append(" ".join(str(d) if d else "." for d in grid[r][left:left + SQRT_N]))
        lines.append(" " + " | ".join(blocks))
    return "\n".join(lines)


def candidate_symbol(units: Units, variable: int) -> str:
    code = units.get(variable)
    if code == TruthCode.TRUE:
        return str(variable % N + 1)
    return SYMBOLS[TruthCode(code)]


def format_candidates(units: Units) -> str:
    """Render all 729 candidates as a 27x27 board.

    Each cell becomes a 3x3 patch holding candidate ``v`` at patch position
    ``(v // 3, v % 3)``: the digit when placed, ``-`` when excluded and ``.``
    when unknown.
    """

    lines: List[str] = []
    for r in range(N):
        if r and r % SQRT_N == 0:
            lines.append("")
        for sub_row in range(SQRT_N):
            patches = []
            for c in range(N):
                patch = "".join(
                    candidate_symbol(units, variable_index(r, c, sub_row * SQRT_N + sub_col))
                    for sub_col in range(SQRT_N)
                )
                patches.append(patch + ("  " if c % SQRT_N == SQRT_N - 1 else ""))
            lines.append(" ".join(patches).rstrip())
    return "\n".join(lines)


def print_generation_stats(result: GenerationResult, *, stream=None) -> None:
    """Print puzzle, solution and search counters for a generated instance."""

    stream = stream or sys.stdout
    print("--- Puzzle ---", file=stream)
    print(format_grid(result.puzzle), file=stream)
    print(file=stream)
    print("--- Solution ---", file=stream)
    print(format_grid(result.solution), file=stream)
    print(file=stream)
    print("--- Search ---", file=stream)
    print(f"  Clues:         {result.clues}", file=stream)
    stats = result.stats
    if stats is not None:
        print(f"  Decisions:     {stats.decisions}", file=stream)
        print(f"  Backtracks:    {stats.backtracks}", file=stream)
        print(f"  Regenerations: {stats.regenerations}", file=stream)
        print(f"  Reduce passes: {stats.passes}", file=stream)
    print(file=stream)
    print(f"Seed: {result.seed}", file=stream)
