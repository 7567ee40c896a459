"""
grid.py - Cell occupancy and gravity placement

This module implements the Grid class which owns the cells of the board and
the only mutation the game allows: dropping a piece into a column, where it
settles on the lowest empty cell. Pieces are never moved or removed.
"""

from typing import Iterator, List, NamedTuple, Optional, Tuple

import numpy as np

from dropfour.debug import debug
from dropfour.errors import ColumnFullError, ColumnOutOfRangeError, OutOfBoundsError
from dropfour.utils import ROWS, COLS, Direction, Player, render_board_ascii

Position = Tuple[int, int]  # (x, y)


class Piece(NamedTuple):
    """A placed piece: column x, row y (0 is the top row) and its owner."""
    x: int
    y: int
    player: Player

    @property
    def position(self) -> Position:
        return self.x, self.y

    def __str__(self):
        return f"Piece(x={self.x}, y={self.y}, player={self.player.value})"


class Grid:
    """
    The board: a rows x columns array of player values.

    Cells are addressed as (x, y) with x the column and y the row, row 0 at
    the top. Occupied cells of a column always form a block resting on the
    bottom row.
    """

    def __init__(self, columns: int = COLS, rows: int = ROWS):
        if columns < 1 or rows < 1:
            raise ValueError(f"Grid needs at least one column and row, got {columns}x{rows}")
        self.columns = columns
        self.rows = rows
        self.cells = np.zeros((rows, columns), dtype=np.int8)
        self.move_count = 0
        debug.debug(f"Created {columns}x{rows} grid", "grid")

    @classmethod
    def from_rows(cls, rows: List[str]) -> 'Grid':
        """
        Build a grid from text rows, top row first.

        Each row holds one character per column: '1'/'X' for player one,
        '2'/'O' for player two and '.' or ' ' for empty. The result is not
        checked for gravity; callers building positions are expected to
        respect it.
        """
        if not rows:
            raise ValueError("At least one row is required")
        grid = cls(columns=len(rows[0]), rows=len(rows))
        values = {'1': 1, 'X': 1, '2': 2, 'O': 2, '.': 0, ' ': 0}
        for y, row in enumerate(rows):
            if len(row) != grid.columns:
                raise ValueError(f"Row {y} has {len(row)} cells, expected {grid.columns}")
            for x, char in enumerate(row):
                try:
                    grid.cells[y, x] = values[char.upper()]
                except KeyError:
                    raise ValueError(f"Unknown cell symbol {char!r} at ({x}, {y})") from None
        grid.move_count = int(np.count_nonzero(grid.cells))
        return grid

    def copy(self) -> 'Grid':
        new_grid = Grid.__new__(Grid)
        new_grid.columns = self.columns
        new_grid.rows = self.rows
        new_grid.cells = self.cells.copy()
        new_grid.move_count = self.move_count
        return new_grid

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.columns and 0 <= y < self.rows

    def _check_column(self, column: int) -> None:
        if not (0 <= column < self.columns):
            raise ColumnOutOfRangeError(column, self.columns)

    def is_column_full(self, column: int) -> bool:
        self._check_column(column)
        return self.cells[0, column] != Player.EMPTY.value

    def legal_columns(self) -> List[int]:
        """Columns with at least one empty cell, left to right."""
        return [int(x) for x in np.flatnonzero(self.cells[0] == Player.EMPTY.value)]

    def landing_row(self, column: int) -> Optional[int]:
        """Row a piece dropped into column would occupy, or None if full."""
        self._check_column(column)
        empty_rows = np.flatnonzero(self.cells[:, column] == Player.EMPTY.value)
        if len(empty_rows) == 0:
            return None
        return int(empty_rows[-1])

    def place(self, column: int, player: Player) -> Piece:
        """
        Drop a piece for player into column.

        Raises:
            ColumnOutOfRangeError: column is not a column of this grid
            ColumnFullError: column has no empty cell
        """
        if player == Player.EMPTY:
            raise ValueError("Cannot place a piece for Player.EMPTY")

        row = self.landing_row(column)
        if row is None:
            debug.debug(f"Rejected move: column {column} is full", "grid")
            raise ColumnFullError(column)

        self.cells[row, column] = player.value
        self.move_count += 1
        piece = Piece(column, row, player)
        debug.debug(f"Placed {piece}", "grid")
        return piece

    def occupant_at(self, x: int, y: int) -> Optional[Player]:
        """Owner of the cell at (x, y), or None when empty."""
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y)
        value = int(self.cells[y, x])
        if value == Player.EMPTY.value:
            return None
        return Player(value)

    def piece_at(self, x: int, y: int) -> Optional[Piece]:
        player = self.occupant_at(x, y)
        if player is None:
            return None
        return Piece(x, y, player)

    def neighbor(self, position: Position, direction: Direction) -> Optional[Position]:
        """
        The position one step from position in direction.

        Returns None when the step would leave the grid; positions never
        wrap around an edge.
        """
        x, y = position
        next_x, next_y = x + direction.dx, y + direction.dy
        if not self.in_bounds(next_x, next_y):
            return None
        return next_x, next_y

    def is_playable(self, x: int, y: int) -> bool:
        """
        True if the next piece dropped into column x would land on (x, y).

        Off-grid positions are simply not playable.
        """
        if not self.in_bounds(x, y):
            return False
        if self.cells[y, x] != Player.EMPTY.value:
            return False
        if y == self.rows - 1:
            return True
        return self.cells[y + 1, x] != Player.EMPTY.value

    def is_full(self) -> bool:
        return not np.any(self.cells[0] == Player.EMPTY.value)

    def pieces(self) -> Iterator[Piece]:
        """Every placed piece, column by column, top to bottom."""
        for x in range(self.columns):
            for y in range(self.rows):
                value = int(self.cells[y, x])
                if value != Player.EMPTY.value:
                    yield Piece(x, y, Player(value))

    def get_state(self) -> np.ndarray:
        return self.cells.copy()

    def render(self, highlight=()) -> str:
        return render_board_ascii(self.cells, highlight)

    def __str__(self) -> str:
        return self.render()
