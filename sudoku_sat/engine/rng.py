"""Deterministic 32-bit xorshift stream used for branching."""

from __future__ import annotations

from ..core.constants import DEFAULT_SEED

MASK = 0xFFFFFFFF


class XorShift32:
    """Marsaglia xorshift (13, 17, 5) over 32-bit state.

    Zero is a fixed point of the recurrence, so a zero seed is replaced with
    ``DEFAULT_SEED``.
    """

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        self.state = DEFAULT_SEED
        self.seed(seed)

    def seed(self, value: int) -> None:
        self.state = (value & MASK) or DEFAULT_SEED

    def next(self) -> int:
        x = self.state
        x ^= (x << 13) & MASK
        x ^= x >> 17
        x ^= (x << 5) & MASK
        self.state = x
        return x

    def randrange(self, stop: int) -> int:
        if stop <= 0:
            raise ValueError("randrange() requires a positive bound")
        return self.next() % stop
