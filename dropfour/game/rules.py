"""
rules.py - Win and draw detection

This module provides the WinDetector, which decides the outcome of a match
either incrementally around the piece that was just placed or by scanning
every piece on the grid.
"""

from dataclasses import dataclass
from typing import Optional

from dropfour.debug import debug
from dropfour.game.grid import Grid, Piece
from dropfour.game.streak import Streak, scan_piece
from dropfour.utils import CONNECT_N, NEAR_WIN_LENGTH, GameResult


@dataclass(frozen=True)
class Evaluation:
    """
    Outcome of a rules check.

    Attributes:
        result: Match result after the check
        streak: Winning streak, or None
        near_win: True if the checked piece completed a near-win streak
        near_win_pieces: Pieces whose longest streak is a near-win (board scans only)
    """
    result: GameResult
    streak: Optional[Streak] = None
    near_win: bool = False
    near_win_pieces: int = 0


class WinDetector:
    """Applies the connect-N rules to a grid."""

    def __init__(self, grid: Grid, connect_n: int = CONNECT_N,
                 near_win_length: int = NEAR_WIN_LENGTH):
        self.grid = grid
        self.connect_n = connect_n
        self.near_win_length = near_win_length

    def evaluate_after_placement(self, piece: Piece) -> Evaluation:
        """
        Evaluate the grid after piece was placed.

        Orientations are checked vertical, horizontal, backslash, slash; the
        first streak reaching connect_n is reported as the win.
        """
        near_win = False
        for streak in scan_piece(self.grid, piece):
            if len(streak) >= self.connect_n:
                debug.info(f"Player {piece.player.value} wins with {streak}", "rules")
                return Evaluation(GameResult.win_for(piece.player), streak)
            if len(streak) == self.near_win_length:
                near_win = True

        if near_win:
            debug.debug(f"Near win for player {piece.player.value} at ({piece.x}, {piece.y})", "rules")

        if self.grid.is_full():
            debug.info("Grid is full, match is a draw", "rules")
            return Evaluation(GameResult.DRAW, near_win=near_win)

        return Evaluation(GameResult.IN_PROGRESS, near_win=near_win)

    def evaluate_board(self) -> Evaluation:
        """
        Evaluate every piece on the grid.

        Returns the first win found (pieces visited column by column), else a
        draw on a full grid, else in progress. near_win_pieces counts pieces
        whose longest streak has exactly near_win_length pieces.
        """
        near_win_pieces = 0
        for piece in self.grid.pieces():
            streaks = list(scan_piece(self.grid, piece))
            for streak in streaks:
                if len(streak) >= self.connect_n:
                    return Evaluation(GameResult.win_for(piece.player), streak)
            if max(len(s) for s in streaks) == self.near_win_length:
                near_win_pieces += 1

        result = GameResult.DRAW if self.grid.is_full() else GameResult.IN_PROGRESS
        return Evaluation(result, near_win=near_win_pieces > 0, near_win_pieces=near_win_pieces)
