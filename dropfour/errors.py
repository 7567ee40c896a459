"""
errors.py - Exceptions raised by the dropfour engine

Invalid moves and out-of-bounds queries are recoverable and reported to the
caller synchronously. NoLegalMoveError marks a broken engine invariant.
"""


class EngineError(Exception):
    """Base class for every error raised by the engine."""


class InvalidMoveError(EngineError, ValueError):
    """A move request that cannot be applied to the grid."""

    def __init__(self, column: int, message: str):
        super().__init__(message)
        self.column = column


class ColumnOutOfRangeError(InvalidMoveError):
    def __init__(self, column: int, columns: int):
        super().__init__(column, f"Column {column} is outside [0, {columns})")
        self.columns = columns


class ColumnFullError(InvalidMoveError):
    def __init__(self, column: int):
        super().__init__(column, f"Column {column} is full")


class GameAlreadyFinishedError(EngineError):
    """A move was attempted after the match ended."""


class OutOfBoundsError(EngineError, IndexError):
    """A grid query with coordinates outside the board."""

    def __init__(self, x: int, y: int):
        super().__init__(f"Position ({x}, {y}) is outside the grid")
        self.x = x
        self.y = y


class NoLegalMoveError(EngineError, RuntimeError):
    """The bot was asked to move on a board with no empty column."""
