"""Fixed-capacity clause storage.

Literals of all clauses live back to back in one pool; a second pool records
where each clause starts. A clause ends where the next one starts, or at the
end of the used literal pool for the last clause.
"""

from __future__ import annotations

from array import array
from typing import Iterator, Sequence, Tuple

from ..core.constants import CLAUSES, LITERALS, N
from ..core.exceptions import CapacityError, ClauseBookkeepingError


class ClauseStore:
    """Literal pool plus clause start offsets."""

    def __init__(self) -> None:
        self.literals = array("H", bytes(2 * LITERALS))
        self.starts = array("H", bytes(2 * CLAUSES))
        self.literal_count = 0
        self.clause_count = 0
        # Survivors of one clause while it is being filtered.
        self.scratch = array("H", bytes(2 * N))

    def clear(self) -> None:
        self.literal_count = 0
        self.clause_count = 0

    def append(self, literals: Sequence[int], count: int) -> None:
        """Store the first ``count`` entries of ``literals`` as a new clause."""

        start = self.literal_count
        if start + count > LITERALS:
            raise CapacityError(f"literal pool exceeds {LITERALS} slots")
        if self.clause_count >= CLAUSES:
            raise CapacityError(f"clause pool exceeds {CLAUSES} clauses")
        pool = self.literals
        for offset in range(count):
            pool[start + offset] = literals[offset]
        self.starts[self.clause_count] = start
        self.clause_count += 1
        self.literal_count = start + count

    def bounds(self, index: int) -> Tuple[int, int]:
        if not 0 <= index < self.clause_count:
            raise ClauseBookkeepingError(f"clause {index} outside [0, {self.clause_count})")
        start = self.starts[index]
        end = self.starts[index + 1] if index + 1 < self.clause_count else self.literal_count
        if not start < end <= self.literal_count:
            raise ClauseBookkeepingError(f"clause {index} has bounds [{start}, {end})")
        return start, end

    def clause(self, index: int) -> Tuple[int, ...]:
        start, end = self.bounds(index)
        return tuple(self.literals[start:end])

    def literal(self, position: int) -> int:
        if not 0 <= position < self.literal_count:
            raise ClauseBookkeepingError(f"literal {position} outside [0, {self.literal_count})")
        return self.literals[position]

    def __len__(self) -> int:
        return self.clause_count

    def __iter__(self) -> Iterator[Tuple[int, ...]]:
        for index in range(self.clause_count):
            yield self.clause(index)
