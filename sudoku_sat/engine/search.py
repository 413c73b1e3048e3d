"""Randomized DPLL search over the clause and assignment stores."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..core.exceptions import UnsatisfiableError
from ..utils.logger import get_logger
from .clauses import ClauseStore
from .cnf import generate_clauses
from .propagation import propagate
from .rng import XorShift32
from .units import Units

LOGGER = get_logger(__name__)


@dataclass
class SearchStats:
    nodes: int = 0
    decisions: int = 0
    backtracks: int = 0
    regenerations: int = 0
    passes: int = 0
    max_depth: int = 0


class DPLLSearch:
    """Unit propagation plus random branching with checkpoint rollback.

    Each node propagates to a fixpoint. With clauses left it checkpoints the
    store, picks a stored literal uniformly at random and places its
    variable's value in the cell. A failed subtree is rolled back, the
    complement is asserted and, since the rollback invalidated the reduced
    clause set, the clauses are regenerated from scratch.

    Offsets of the checkpoints on the successful path are collected in
    ``decisions``; the log entry at each offset is that branch's decision.
    """

    def __init__(self, units: Units, clauses: ClauseStore, rng: XorShift32) -> None:
        self.units = units
        self.clauses = clauses
        self.rng = rng
        self.decisions: List[int] = []
        self.stats = SearchStats()

    def run(self) -> bool:
        """Generate the clauses and search to completion.

        Returns ``True`` with the store fully assigned, or ``False`` when the
        current assignment has no completion. Structural errors propagate.
        """

        self.decisions = []
        self.stats = SearchStats()
        if not self._regenerate():
            LOGGER.debug("Initial clause generation found a falsified clause")
            return False
        solved = self._search(0)
        # Checkpoints are discarded deepest first.
        self.decisions.reverse()
        LOGGER.debug(
            "Search %s after %d nodes, %d backtracks, %d regenerations",
            "succeeded" if solved else "failed",
            self.stats.nodes,
            self.stats.backtracks,
            self.stats.regenerations,
        )
        return solved

    def _regenerate(self) -> bool:
        self.stats.regenerations += 1
        try:
            generate_clauses(self.units, self.clauses)
        except UnsatisfiableError:
            return False
        return True

    def _propagate(self) -> bool:
        try:
            self.stats.passes += propagate(self.units, self.clauses)
        except UnsatisfiableError:
            return False
        return True

    def _pick_literal(self) -> int:
        position = self.rng.randrange(self.clauses.literal_count)
        return self.clauses.literal(position)

    def _search(self, depth: int) -> bool:
        self.stats.max_depth = max(self.stats.max_depth, depth)
        while True:
            self.stats.nodes += 1
            if not self._propagate():
                return False
            if not self.clauses.clause_count:
                return True

            # Polarity is dropped: placing the value fixes a fresh cell per live
            # checkpoint, so the stack never outgrows CHECKPOINTS.
            variable = self._pick_literal() >> 1
            self.units.checkpoint()
            self.stats.decisions += 1
            self.units.assign_variable(variable)
            if self._search(depth + 1):
                self.decisions.append(self.units.discard_checkpoint())
                return True

            self.stats.backtracks += 1
            self.units.rollback()
            self.units.set(variable, False)
            if not self._regenerate():
                return False
