"""Bit-packed ternary assignment store with an undo log.

Every variable owns two bits ("a crumb") inside a fixed array of 32-bit
words: bit 0 records that the variable is known false, bit 1 that it is known
true. Each newly recorded literal is appended to an assignment log; a stack of
log positions (checkpoints) lets the search undo exactly the literals recorded
since a branch decision.
"""

from __future__ import annotations

from array import array
from typing import List

from ..core.constants import CELLS, CHECKPOINTS, N, SQRT_N, UNITS, VALUES, TruthCode
from ..core.exceptions import CapacityError, CheckpointError, IndexRangeError
from ..core.index import Literal, variable_index
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

_FALSE_BITS = 0x55555555


class Units:
    """Ternary truth values for all row x column x value variables."""

    def __init__(self) -> None:
        self.words = array("I", bytes(4 * UNITS))
        if self.words.itemsize != 4:
            raise CapacityError("packed words require a 32-bit array type")
        self.log = array("H", bytes(2 * VALUES))
        self.log_length = 0
        self.checkpoints = array("H", bytes(2 * CHECKPOINTS))
        self.depth = 0
        self.pending = False

    # ------------------------------------------------------------------
    # Truth values
    # ------------------------------------------------------------------
    def set(self, variable: int, value: bool) -> None:
        """Record the literal ``(variable, value)`` as true.

        The opposite polarity is left untouched; callers must not contradict
        a previously recorded fact.
        """

        literal = variable << 1 | int(value)
        word = literal >> 5
        mask = 1 << (literal & 31)
        words = self.words
        if words[word] & mask:
            return
        if self.log_length >= VALUES:
            raise CapacityError("assignment log is full")
        words[word] |= mask
        self.log[self.log_length] = literal
        self.log_length += 1
        self.pending = True

    def get(self, variable: int) -> int:
        return (self.words[variable >> 4] >> ((variable & 15) << 1)) & 3

    def assign(self, row: int, column: int, value: int) -> None:
        """Place ``value`` in a cell and exclude it from every peer."""

        self.set(variable_index(row, column, value), True)
        for other in range(N):
            if other != row:
                self.set(variable_index(other, column, value), False)
            if other != column:
                self.set(variable_index(row, other, value), False)
            if other != value:
                self.set(variable_index(row, column, other), False)
        block_row = row - row % SQRT_N
        block_column = column - column % SQRT_N
        for peer_row in range(block_row, block_row + SQRT_N):
            for peer_column in range(block_column, block_column + SQRT_N):
                if peer_row != row or peer_column != column:
                    self.set(variable_index(peer_row, peer_column, value), False)

    def assign_variable(self, variable: int) -> None:
        cell, value = divmod(variable, N)
        row, column = divmod(cell, N)
        self.assign(row, column, value)

    # ------------------------------------------------------------------
    # Checkpoints
    # ------------------------------------------------------------------
    def checkpoint(self) -> None:
        if self.depth >= CHECKPOINTS:
            raise CapacityError(f"checkpoint stack exceeds {CHECKPOINTS} entries")
        self.checkpoints[self.depth] = self.log_length
        self.depth += 1

    def discard_checkpoint(self) -> int:
        """Pop the latest checkpoint, keeping everything recorded since."""

        if not self.depth:
            raise CheckpointError("no checkpoint to discard")
        self.depth -= 1
        return self.checkpoints[self.depth]

    def rollback(self) -> int:
        """Undo every literal logged since the latest checkpoint."""

        if not self.depth:
            raise CheckpointError("no checkpoint to roll back to")
        self.depth -= 1
        offset = self.checkpoints[self.depth]
        words = self.words
        log = self.log
        for position in range(offset, self.log_length):
            literal = log[position]
            words[literal >> 5] &= ~(1 << (literal & 31))
        undone = self.log_length - offset
        self.log_length = offset
        LOGGER.debug("Rolled back %d literals to log offset %d", undone, offset)
        return undone

    def rollback_to(self, depth: int) -> None:
        while self.depth > depth:
            self.rollback()

    def reset(self) -> None:
        for word in range(UNITS):
            self.words[word] = 0
        self.log_length = 0
        self.depth = 0
        self.pending = False

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    def log_entry(self, offset: int) -> Literal:
        if not 0 <= offset < self.log_length:
            raise IndexRangeError(f"log offset {offset} outside [0, {self.log_length})")
        return Literal(self.log[offset])

    def known_count(self) -> int:
        return sum(bin((word | word >> 1) & _FALSE_BITS).count("1") for word in self.words)

    def grid(self) -> List[List[int]]:
        """Decode placed values into a 9x9 grid of digits (0 = blank)."""

        grid = [[0] * N for _ in range(N)]
        for cell in range(CELLS):
            row, column = divmod(cell, N)
            for value in range(N):
                if self.get(cell * N + value) == TruthCode.TRUE:
                    grid[row][column] = value + 1
                    break
        return grid

    def view(self) -> memoryview:
        return memoryview(self.words).toreadonly()

    def snapshot(self) -> bytes:
        return self.words.tobytes()
