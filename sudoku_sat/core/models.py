"""Data models shared by the engine and its callers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from ..engine.search import SearchStats

Grid = List[List[int]]


@dataclass
class EngineConfig:
    """Configuration values driving a :class:`SudokuEngine`."""

    seed: int = 1
    strict: bool = False


@dataclass
class GenerationResult:
    """A generated puzzle together with the solve that produced it."""

    puzzle: Grid
    solution: Grid
    seed: int
    decisions: List[int] = field(default_factory=list)
    stats: Optional["SearchStats"] = None

    @property
    def clues(self) -> int:
        return sum(1 for row in self.puzzle for digit in row if digit)
