"""
utils.py - Constants and enumerations for the dropfour engine

This module holds the tunable constants of the game and the bot together
with the small enumerations (players, results, compass directions and line
orientations) shared by every other module.
"""

from enum import Enum, auto
from typing import Iterable, Optional, Tuple

import numpy as np

# Board defaults
ROWS = 6
COLS = 7
CONNECT_N = 4  # Pieces in a row needed to win
NEAR_WIN_LENGTH = CONNECT_N - 1  # Streak length that raises a near-win warning

# Heuristic bot tuning
CHAOS_ODDS = 6  # One move in CHAOS_ODDS is played at random
FORCED_MOVE_COUNT = 3  # Connecting-move count treated as a forced continuation


class Player(Enum):
    """Players and cell states."""
    EMPTY = 0
    ONE = 1    # Moves first (yellow)
    TWO = 2    # Bot seat in single-player matches (red)

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


BOT_PLAYER = Player.TWO


class GameResult(Enum):
    """Match outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        return self != GameResult.IN_PROGRESS

    @property
    def winner(self) -> Optional[Player]:
        if self == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        if self == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    @classmethod
    def win_for(cls, player: Player) -> 'GameResult':
        if player == Player.ONE:
            return cls.PLAYER_ONE_WIN
        if player == Player.TWO:
            return cls.PLAYER_TWO_WIN
        raise ValueError(f"No win result for {player!r}")


class Direction(Enum):
    """Unit steps on the grid as (dx, dy); row 0 is the top row."""
    NORTH = (0, -1)
    NORTH_EAST = (1, -1)
    EAST = (1, 0)
    SOUTH_EAST = (1, 1)
    SOUTH = (0, 1)
    SOUTH_WEST = (-1, 1)
    WEST = (-1, 0)
    NORTH_WEST = (-1, -1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class Orientation(Enum):
    """
    Line orientations, each an explicit pair of opposite directions.

    Declaration order is the order in which lines are checked for a win.
    """
    VERTICAL = (Direction.NORTH, Direction.SOUTH)            # |
    HORIZONTAL = (Direction.WEST, Direction.EAST)            # -
    BACKSLASH = (Direction.NORTH_WEST, Direction.SOUTH_EAST)  # \
    SLASH = (Direction.SOUTH_WEST, Direction.NORTH_EAST)      # /

    @property
    def directions(self) -> Tuple[Direction, Direction]:
        return self.value

    def __str__(self):
        return self.name.lower()


def render_board_ascii(cells: np.ndarray, highlight: Iterable[Tuple[int, int]] = ()) -> str:
    """
    Render a cell array as ASCII art.

    Args:
        cells: Array indexed as cells[y, x] holding player values
        highlight: (x, y) positions drawn as '*' (e.g. a winning line)

    Returns:
        ASCII representation of the board
    """
    rows, cols = cells.shape
    marked = set(highlight)
    symbols = {Player.EMPTY.value: " ", Player.ONE.value: "X", Player.TWO.value: "O"}

    result = ["|" + "-" * (cols * 2 - 1) + "|"]
    for y in range(rows):
        line = []
        for x in range(cols):
            line.append("*" if (x, y) in marked else symbols[int(cells[y, x])])
        result.append("|" + " ".join(line) + "|")
    result.append("|" + "-" * (cols * 2 - 1) + "|")
    result.append("|" + " ".join(str(x % 10) for x in range(cols)) + "|")

    return "\n".join(result)
