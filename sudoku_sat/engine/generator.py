"""Puzzle generation from the decisions of a randomized solve.

A full solve from an empty grid records, for every branch on the successful
path, the log offset of the checkpoint taken before it. The literal logged at
that offset is the branch decision. Replaying only the positive decisions on
a fresh store yields a puzzle whose clues are exactly the guesses the search
needed; every cell that propagation derived is left blank.
"""

from __future__ import annotations

from typing import List

from ..core.exceptions import UnsatisfiableError
from ..core.index import Literal
from ..core.models import GenerationResult
from ..utils.logger import get_logger
from .clauses import ClauseStore
from .rng import XorShift32
from .search import DPLLSearch
from .units import Units

LOGGER = get_logger(__name__)


class PuzzleGenerator:
    """Drives a seeded solve and rebuilds a puzzle from its decisions."""

    def __init__(self, units: Units, clauses: ClauseStore, rng: XorShift32) -> None:
        self.units = units
        self.clauses = clauses
        self.rng = rng

    def generate(self, seed: int) -> GenerationResult:
        self.units.reset()
        self.rng.seed(seed)
        search = DPLLSearch(self.units, self.clauses, self.rng)
        if not search.run():
            raise UnsatisfiableError("empty grid reported unsatisfiable")

        solution = self.units.grid()
        decisions: List[Literal] = [self.units.log_entry(offset) for offset in search.decisions]

        self.units.reset()
        for literal in decisions:
            if literal.polarity:
                self.units.assign_variable(literal.variable())
        self.clauses.clear()

        result = GenerationResult(
            puzzle=self.units.grid(),
            solution=solution,
            seed=seed,
            decisions=[int(literal) for literal in decisions],
            stats=search.stats,
        )
        LOGGER.info(
            "Generated puzzle for seed %d: %d clues from %d decisions (%d backtracks)",
            seed,
            result.clues,
            len(decisions),
            search.stats.backtracks,
        )
        return result
