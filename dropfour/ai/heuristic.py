"""
heuristic.py - Streak-extending heuristic player

This module provides a HeuristicPlayer that picks a column by looking at the
longest streaks on the board for both players. It is deliberately cheap and
beatable:
1. Now and then it plays a random legal column ("chaos" move)
2. A streak that can be extended in exactly FORCED_MOVE_COUNT columns is
   continued (own streaks) or blocked (opponent streaks)
3. Otherwise it plays any column that extends a longest streak
4. With nothing to extend it plays a random legal column
"""

import random
from typing import Iterable, List, Optional, Tuple

from dropfour.debug import debug
from dropfour.errors import NoLegalMoveError
from dropfour.game.grid import Grid
from dropfour.game.streak import Streak, longest_streak
from dropfour.utils import CHAOS_ODDS, FORCED_MOVE_COUNT, Orientation, Player


def longest_streaks(grid: Grid, player: Player) -> Tuple[int, List[Streak]]:
    """
    Scan the whole grid for player's longest streaks.

    Returns:
        The maximum streak length and every per-piece streak reaching it
    """
    best_len = 0
    best: List[Streak] = []
    for piece in grid.pieces():
        if piece.player != player:
            continue
        streak = longest_streak(grid, piece)
        if len(streak) > best_len:
            best_len = len(streak)
            best = [streak]
        elif len(streak) == best_len:
            best.append(streak)
    return best_len, best


def connecting_moves(grid: Grid, streaks: Iterable[Streak]) -> List[int]:
    """
    Columns whose next placement would extend one of streaks by one piece.

    Vertical streaks only grow upwards; the other orientations grow from
    either end. Columns are listed in discovery order without repeats.
    """
    moves = []
    for streak in streaks:
        candidates = []
        if streak.orientation == Orientation.VERTICAL:
            top = streak.highest_piece()
            candidates.append((top.x, top.y - 1))
        elif streak.orientation == Orientation.HORIZONTAL:
            left, right = streak.leftmost_piece(), streak.rightmost_piece()
            candidates.append((left.x - 1, left.y))
            candidates.append((right.x + 1, right.y))
        elif streak.orientation == Orientation.SLASH:
            left, right = streak.leftmost_piece(), streak.rightmost_piece()
            candidates.append((left.x - 1, left.y + 1))
            candidates.append((right.x + 1, right.y - 1))
        elif streak.orientation == Orientation.BACKSLASH:
            left, right = streak.leftmost_piece(), streak.rightmost_piece()
            candidates.append((left.x - 1, left.y - 1))
            candidates.append((right.x + 1, right.y + 1))
        else:
            raise ValueError(f"Unknown orientation {streak.orientation!r}")

        for x, y in candidates:
            if grid.is_playable(x, y) and x not in moves:
                moves.append(x)
    return moves


class HeuristicPlayer:
    """
    Bot that extends or blocks the longest streaks on the board.

    The random source is injectable so matches can be replayed exactly.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 chaos_odds: Optional[int] = CHAOS_ODDS,
                 forced_move_count: int = FORCED_MOVE_COUNT):
        """
        Initialize the heuristic player.

        Args:
            rng: Random source (a fresh unseeded one if omitted)
            chaos_odds: A random move is made with probability 1/chaos_odds;
                None or 0 disables chaos moves
            forced_move_count: Number of distinct connecting columns that
                triggers an immediate continuation or block
        """
        self.rng = rng if rng is not None else random.Random()
        self.chaos_odds = chaos_odds
        self.forced_move_count = forced_move_count

    def seed(self, seed: Optional[int]) -> None:
        self.rng.seed(seed)

    def random_move(self, grid: Grid) -> int:
        legal = grid.legal_columns()
        if not legal:
            raise NoLegalMoveError("Bot invoked on a full grid")
        return self.rng.choice(legal)

    def get_move(self, grid: Grid, player: Player) -> int:
        """
        Choose a column for player.

        Args:
            grid: The current grid (not modified)
            player: The player the bot moves for

        Returns:
            A column with at least one empty cell

        Raises:
            NoLegalMoveError: the grid is full
        """
        if not grid.legal_columns():
            raise NoLegalMoveError("Bot invoked on a full grid")

        if self.chaos_odds and self.rng.randrange(self.chaos_odds) == 0:
            column = self.random_move(grid)
            debug.debug(f"Chaos move: column {column}", "bot")
            return column

        own_len, own_streaks = longest_streaks(grid, player)
        opponent_len, opponent_streaks = longest_streaks(grid, player.other())
        own_moves = connecting_moves(grid, own_streaks)
        opponent_moves = connecting_moves(grid, opponent_streaks)
        debug.trace(f"Own streaks of {own_len} extend via {own_moves}, "
                    f"opponent streaks of {opponent_len} via {opponent_moves}", "bot")

        if len(own_moves) == self.forced_move_count:
            debug.debug(f"Continuing own streak in column {own_moves[0]}", "bot")
            return own_moves[0]

        if len(opponent_moves) == self.forced_move_count:
            debug.debug(f"Blocking opponent in column {opponent_moves[0]}", "bot")
            return opponent_moves[0]

        candidates = own_moves + [m for m in opponent_moves if m not in own_moves]
        if candidates:
            column = self.rng.choice(candidates)
            debug.debug(f"Extending a streak in column {column} (from {candidates})", "bot")
            return column

        column = self.random_move(grid)
        debug.debug(f"Nothing to extend, random column {column}", "bot")
        return column
