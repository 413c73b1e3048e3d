"""Custom exception hierarchy for the Sudoku SAT engine."""


class SudokuError(Exception):
    """Base exception for engine failures."""


class IndexRangeError(SudokuError, ValueError):
    """Raised when an index falls outside its bounded space."""


class CapacityError(SudokuError):
    """Raised when a fixed-capacity pool or stack would overflow."""


class ClauseBookkeepingError(SudokuError):
    """Raised when stored clause offsets are inconsistent."""


class UnsatisfiableError(SudokuError):
    """Raised when propagation empties a clause under the current assignment."""


class PuzzleFormatError(SudokuError, ValueError):
    """Raised when a puzzle text cannot be parsed."""


class ValidationError(SudokuError):
    """Raised when a grid breaks the Sudoku rules."""


class CheckpointError(ClauseBookkeepingError):
    """Raised when the checkpoint stack is popped while empty."""
