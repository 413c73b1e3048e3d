"""Engine handle exposing the solver to a host application.

One :class:`SudokuEngine` owns one assignment store, one clause store and one
random stream. Nothing is shared between instances; callers serialize access
to an instance themselves.

Structural failures (pool overflow, broken clause offsets) are not raised to
the host. They are logged, recorded in ``status`` and ``last_error`` and
reported as a ``False`` result, unless the engine runs with
``EngineConfig.strict``.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..core.constants import UNITS, SolveStatus, TruthCode
from ..core.exceptions import SudokuError, UnsatisfiableError
from ..core.index import Variable
from ..core.models import EngineConfig, GenerationResult, Grid
from ..io.puzzles import grid_to_indices
from ..utils.logger import get_logger
from .clauses import ClauseStore
from .cnf import generate_clauses
from .generator import PuzzleGenerator
from .propagation import reduce_clauses
from .rng import XorShift32
from .search import DPLLSearch, SearchStats
from .units import Units

LOGGER = get_logger(__name__)


class SudokuEngine:
    """Encoding, solving and generation over one explicitly owned state."""

    units_len = UNITS

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()
        self.units = Units()
        self.clauses = ClauseStore()
        self.rng = XorShift32(self.config.seed)
        self.generator = PuzzleGenerator(self.units, self.clauses, self.rng)
        self.status = SolveStatus.IDLE
        self.last_error: Optional[SudokuError] = None
        self.last_result: Optional[GenerationResult] = None
        self.last_stats: Optional[SearchStats] = None
        self._conflict: Optional[UnsatisfiableError] = None

    # ------------------------------------------------------------------
    # Grid input
    # ------------------------------------------------------------------
    def assign(self, index: int) -> None:
        """Place the value encoded by a linear cell x value index.

        Does nothing if the variable is already known either way.
        """

        variable = Variable(index)
        if self.units.get(variable):
            return
        self.units.assign(*variable.decode())

    def load(self, grid: Grid) -> bool:
        """Reset the engine and enter every non-zero digit of ``grid``.

        A clue already excluded by an earlier clue is rejected: the call
        returns ``False`` and every ``solve()`` until the next reset reports
        the grid as unsatisfiable.
        """

        self.reset()
        for variable in grid_to_indices(grid):
            self.assign(variable)
            if self.units.get(variable) != TruthCode.TRUE:
                row, column, value = variable.decode()
                self._conflict = UnsatisfiableError(
                    f"clue {value + 1} at ({row},{column}) conflicts with an earlier clue"
                )
                self._reject(self._conflict)
                return False
        return True

    def reset(self) -> None:
        self.units.reset()
        self.clauses.clear()
        self.status = SolveStatus.IDLE
        self.last_error = None
        self._conflict = None

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def units_view(self) -> memoryview:
        return self.units.view()

    def grid(self) -> Grid:
        return self.units.grid()

    def known_count(self) -> int:
        return self.units.known_count()

    def literals_count(self) -> int:
        return self.clauses.literal_count

    def clauses_count(self) -> int:
        return self.clauses.clause_count

    def new_units_pending(self) -> bool:
        return self.units.pending

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------
    def generate_clauses(self) -> bool:
        return self._step("clause generation", generate_clauses)

    def reduce_clauses(self) -> bool:
        return self._step("clause reduction", reduce_clauses)

    def _step(self, label: str, step: Callable[[Units, ClauseStore], None]) -> bool:
        self.last_error = None
        try:
            step(self.units, self.clauses)
        except UnsatisfiableError as exc:
            self._reject(exc)
            return False
        except SudokuError as exc:
            self._fail(label, exc)
            return False
        return True

    # ------------------------------------------------------------------
    # Solving and generation
    # ------------------------------------------------------------------
    def solve(self) -> bool:
        """Complete the current grid.

        On success the store holds the full solution. A grid without a
        completion is rejected: the store is rolled back to its contents
        before the call and ``status`` becomes ``UNSATISFIABLE``.
        """

        self.last_error = None
        if self._conflict is not None:
            self._reject(self._conflict)
            return False
        root = self.units.depth
        search = DPLLSearch(self.units, self.clauses, self.rng)
        try:
            self.units.checkpoint()
            solved = search.run()
        except SudokuError as exc:
            self.units.rollback_to(root)
            self.clauses.clear()
            self._fail("search", exc)
            return False
        finally:
            self.last_stats = search.stats

        if not solved:
            self.units.rollback_to(root)
            self.clauses.clear()
            self._reject(UnsatisfiableError("grid has no completion"))
            return False

        self.units.discard_checkpoint()
        self.status = SolveStatus.SOLVED
        LOGGER.info(
            "Solved after %d decisions, %d backtracks",
            search.stats.decisions,
            search.stats.backtracks,
        )
        return True

    def generate_instance(self, seed: int) -> Optional[GenerationResult]:
        """Replace the store with a freshly generated puzzle."""

        self.last_error = None
        try:
            result = self.generator.generate(seed)
        except SudokuError as exc:
            self._fail("generation", exc)
            return None
        self.last_result = result
        self.last_stats = result.stats
        self.status = SolveStatus.SOLVED
        return result

    # ------------------------------------------------------------------
    # Failure reporting
    # ------------------------------------------------------------------
    def _reject(self, exc: UnsatisfiableError) -> None:
        self.status = SolveStatus.UNSATISFIABLE
        self.last_error = exc
        LOGGER.warning("Grid rejected as unsatisfiable: %s", exc)

    def _fail(self, label: str, exc: SudokuError) -> None:
        self.status = SolveStatus.ERROR
        self.last_error = exc
        LOGGER.error("%s failed: %s", label.capitalize(), exc)
        if self.config.strict:
            raise exc
