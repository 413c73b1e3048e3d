"""CP-SAT cross-check of grids using OR-Tools.

The SAT engine is audited against an independent model: one integer variable
per cell, ``add_all_different`` over every row, column and block, and the
clues fixed as constants.
"""

from __future__ import annotations

from typing import List, Optional

from ortools.sat.python import cp_model

from ..core.constants import N, SQRT_N
from ..core.models import Grid
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def _build_model(grid: Grid):
    model = cp_model.CpModel()
    cells: List[List[object]] = []
    for r in range(N):
        row_vars = []
        for c in range(N):
            digit = grid[r][c]
            if digit:
                row_vars.append(model.new_int_var(digit, digit, f"X_{r}_{c}"))
            else:
                row_vars.append(model.new_int_var(1, N, f"X_{r}_{c}"))
        cells.append(row_vars)

    for r in range(N):
        model.add_all_different(cells[r])
    for c in range(N):
        model.add_all_different([cells[r][c] for r in range(N)])
    for top in range(0, N, SQRT_N):
        for left in range(0, N, SQRT_N):
            model.add_all_different(
                [cells[top + dr][left + dc] for dr in range(SQRT_N) for dc in range(SQRT_N)]
            )
    return model, cells


def solve_with_cpsat(grid: Grid, timeout: float = 10.0) -> Optional[Grid]:
    """Return one completion of ``grid``, or None if CP-SAT finds none."""

    model, cells = _build_model(grid)
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = 4

    status = solver.solve(model)
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no solution found (status=%s)", solver.status_name(status))
        return None

    LOGGER.info("CP-SAT: solution found in %.2fs", solver.wall_time)
    return [[solver.value(cells[r][c]) for c in range(N)] for r in range(N)]


class _SolutionCounter(cp_model.CpSolverSolutionCallback):
    """Counts solutions and stops once ``limit`` is reached."""

    def __init__(self, limit: int) -> None:
        super().__init__()
        self.limit = limit
        self.count = 0

    def on_solution_callback(self) -> None:
        self.count += 1
        if self.count >= self.limit:
            self.stop_search()


def count_solutions(grid: Grid, limit: int = 2, timeout: float = 30.0) -> int:
    """Count completions of ``grid``, stopping at ``limit``.

    ``count_solutions(grid) == 1`` means the puzzle has a unique solution.
    """

    model, _ = _build_model(grid)
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.enumerate_all_solutions = True
    solver.parameters.num_workers = 1

    counter = _SolutionCounter(limit)
    status = solver.solve(model, counter)
    LOGGER.debug(
        "CP-SAT: counted %d solution(s) (status=%s, limit=%d)",
        counter.count,
        solver.status_name(status),
        limit,
    )
    return counter.count
