"""CNF encoding of the Sudoku rules.

Four constraint families share one shape. Cells range over values, while
rows, columns and blocks range over positions for a fixed value. Every group
gets a definedness clause ("some member holds") and one binary uniqueness
clause per pair of members ("not both"). All definedness passes run before
the uniqueness passes, in the order cell, row, column, block; from an empty
store this fills the clause store to exactly ``CLAUSES`` / ``LITERALS``.
"""

from __future__ import annotations

from typing import Callable, Iterator, List

from ..core.constants import N, SQRT_N
from ..core.index import negative, pairs, positive, variable_index
from ..utils.logger import get_logger
from .clauses import ClauseStore
from .propagation import try_insert
from .units import Units

LOGGER = get_logger(__name__)

Group = List[int]


def cell_groups() -> Iterator[Group]:
    for row in range(N):
        for column in range(N):
            yield [variable_index(row, column, value) for value in range(N)]


def row_groups() -> Iterator[Group]:
    for row in range(N):
        for value in range(N):
            yield [variable_index(row, column, value) for column in range(N)]


def column_groups() -> Iterator[Group]:
    for column in range(N):
        for value in range(N):
            yield [variable_index(row, column, value) for row in range(N)]


def block_groups() -> Iterator[Group]:
    for block_row in range(0, N, SQRT_N):
        for block_column in range(0, N, SQRT_N):
            for value in range(N):
                yield [
                    variable_index(block_row + offset // SQRT_N, block_column + offset % SQRT_N, value)
                    for offset in range(N)
                ]


FAMILIES: List[Callable[[], Iterator[Group]]] = [cell_groups, row_groups, column_groups, block_groups]
_PAIRS = list(pairs(N))


def definedness_clauses(units: Units, clauses: ClauseStore, group: Group) -> None:
    try_insert(units, clauses, [positive(variable) for variable in group])


def uniqueness_clauses(units: Units, clauses: ClauseStore, group: Group) -> None:
    for high, low in _PAIRS:
        try_insert(units, clauses, (negative(group[low]), negative(group[high])))


def generate_clauses(units: Units, clauses: ClauseStore) -> None:
    """Rebuild the clause store from the rules against the current assignment.

    Raises:
        UnsatisfiableError: a clause is already falsified by the assignment.
        CapacityError: the encoding no longer fits its fixed pools.
    """

    clauses.clear()
    for family in FAMILIES:
        for group in family():
            definedness_clauses(units, clauses, group)
    for family in FAMILIES:
        for group in family():
            uniqueness_clauses(units, clauses, group)
    LOGGER.debug(
        "Generated %d clauses (%d literals), %d variables known",
        clauses.clause_count,
        clauses.literal_count,
        units.known_count(),
    )
