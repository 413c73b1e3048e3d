"""Clause insertion with unit propagation, and the incremental reducer."""

from __future__ import annotations

from typing import Sequence

from ..core.constants import N
from ..core.exceptions import CapacityError, ClauseBookkeepingError, UnsatisfiableError
from ..utils.logger import get_logger
from .clauses import ClauseStore
from .units import Units

LOGGER = get_logger(__name__)


def try_insert(units: Units, clauses: ClauseStore, literals: Sequence[int]) -> None:
    """Filter a clause against the current assignment and store what remains.

    A clause holding a true literal is dropped, false literals are removed and
    a clause reduced to a single literal is applied as a new fact instead of
    being stored.

    Raises:
        UnsatisfiableError: every literal of the clause is already false.
        CapacityError: the clause or literal pool is full.
    """

    if len(literals) > N:
        raise CapacityError(f"clause of {len(literals)} literals exceeds {N}")
    words = units.words
    kept = clauses.scratch
    count = 0
    for literal in literals:
        # Crumb of variable ``literal >> 1`` sits at bit ``literal & 30``.
        code = (words[literal >> 5] >> (literal & 30)) & 3
        if not code:
            kept[count] = literal
            count += 1
        elif (code >> (literal & 1)) & 1:
            return
    if not count:
        raise UnsatisfiableError(f"clause {list(literals)} has no satisfiable literal")
    if count == 1:
        unit = kept[0]
        if unit & 1:
            units.assign_variable(unit >> 1)
        else:
            units.set(unit >> 1, False)
        return
    clauses.append(kept, count)


def reduce_clauses(units: Units, clauses: ClauseStore) -> None:
    """Re-filter every stored clause against facts learned since it was stored.

    The pool is compacted in place: a surviving clause never grows, so its new
    position never passes the start of the next unread clause. If an error is
    raised part way, the pool is left half rebuilt and must be regenerated.
    """

    units.pending = False
    total_literals = clauses.literal_count
    total_clauses = clauses.clause_count
    starts = clauses.starts
    pool = clauses.literals
    clauses.clear()
    for index in range(total_clauses):
        start = starts[index]
        end = starts[index + 1] if index + 1 < total_clauses else total_literals
        if not start < end <= total_literals:
            raise ClauseBookkeepingError(
                f"clause {index} has bounds [{start}, {end}) in a pool of {total_literals}"
            )
        try_insert(units, clauses, pool[start:end])
    LOGGER.debug(
        "Reduced %d clauses (%d literals) to %d clauses (%d literals)",
        total_clauses,
        total_literals,
        clauses.clause_count,
        clauses.literal_count,
    )


def propagate(units: Units, clauses: ClauseStore) -> int:
    """Reduce until no new facts are pending or no clauses remain."""

    passes = 0
    while units.pending and clauses.clause_count:
        reduce_clauses(units, clauses)
        passes += 1
    return passes
