"""Shared constants and enumerations for the Sudoku SAT engine."""

from __future__ import annotations

from enum import Enum, IntEnum

SQRT_N = 3
N = SQRT_N * SQRT_N
CELLS = N * N
VARS = N * N * N
# Literal space: every variable in both polarities.
VALUES = VARS * 2
# Two bits ("crumb") per variable in each 32-bit word.
CRUMBS = 32 // 2
UNITS = VARS // CRUMBS + 1

# Extended CNF encoding (9x9): four families, each with one definedness
# clause of N literals and N*(N-1)/2 binary uniqueness clauses per group.
GROUPS = CELLS
PAIRS = N * (N - 1) // 2
CLAUSES = 4 * GROUPS * (1 + PAIRS)
LITERALS = 4 * GROUPS * (N + 2 * PAIRS)

# One live checkpoint per cell: each branch decision fixes a distinct cell.
CHECKPOINTS = CELLS

assert CLAUSES == 11_988, CLAUSES
assert LITERALS == 26_244, LITERALS
assert UNITS * CRUMBS >= VARS
assert VALUES < 1 << 16 and LITERALS < 1 << 16

DEFAULT_SEED = 0x2545F491


class TruthCode(IntEnum):
    """Two-bit ternary code stored for every variable."""

    UNKNOWN = 0
    FALSE = 1
    TRUE = 2
    CONFLICT = 3


class SolveStatus(str, Enum):
    """Outcome of the last engine operation."""

    IDLE = "IDLE"
    SOLVED = "SOLVED"
    UNSATISFIABLE = "UNSATISFIABLE"
    ERROR = "ERROR"
