"""
match.py - Turn handling for a single match

This module provides the Match class: it accepts move requests, applies them
to the grid, asks the WinDetector for the outcome, switches the active player
and, in single-player matches, answers with the heuristic bot's move within
the same call.
"""

import random
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from dropfour.ai.heuristic import HeuristicPlayer
from dropfour.debug import debug
from dropfour.errors import GameAlreadyFinishedError
from dropfour.game.events import (Listener, MatchEvent, MatchFinished, MatchReset,
                                  NearWinDetected, PiecePlaced)
from dropfour.game.grid import Grid, Piece
from dropfour.game.rules import WinDetector
from dropfour.game.streak import Streak
from dropfour.utils import BOT_PLAYER, COLS, NEAR_WIN_LENGTH, ROWS, GameResult, Player


@dataclass
class MatchState:
    """Mutable per-match state, replaced on every reset."""
    active_player: Player = Player.ONE
    result: GameResult = GameResult.IN_PROGRESS
    winning_streak: Optional[Streak] = None
    near_win_count: int = 0


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a match for rendering."""
    cells: np.ndarray
    active_player: Player
    result: GameResult
    winning_streak: Optional[Streak]
    near_win_count: int

    @property
    def winner(self) -> Optional[Player]:
        return self.result.winner

    @property
    def is_finished(self) -> bool:
        return self.result.is_game_over()


@dataclass(frozen=True)
class MoveResult:
    """
    A placed piece and the match result right after it.

    reply holds the bot's answering move when the bot moved in the same call.
    """
    piece: Piece
    result: GameResult
    reply: Optional['MoveResult'] = field(default=None)


class Match:
    """
    A match between two players, one of which may be the heuristic bot.

    The match is either awaiting a move from its active player or finished.
    Instances are not thread-safe; callers must serialize access.
    """

    def __init__(self, columns: int = COLS, rows: int = ROWS, bot_enabled: bool = False,
                 bot_player: Player = BOT_PLAYER, bot: Optional[HeuristicPlayer] = None,
                 rng: Optional[random.Random] = None):
        """
        Initialize a match.

        Args:
            columns: Grid width
            rows: Grid height
            bot_enabled: Whether bot_player is controlled by the bot
            bot_player: The seat the bot plays when enabled
            bot: Bot instance to use (one sharing rng is created if omitted)
            rng: Random source for the bot
        """
        if bot_player == Player.EMPTY:
            raise ValueError("bot_player must be Player.ONE or Player.TWO")
        self.columns = columns
        self.rows = rows
        self.bot_enabled = bot_enabled
        self.bot_player = bot_player
        self.bot = bot if bot is not None else HeuristicPlayer(rng=rng)
        self._listeners: List[Listener] = []
        self.reset()

    def reset(self) -> None:
        """Start over with an empty grid and player one to move."""
        debug.debug("Resetting match", "match")
        self.grid = Grid(self.columns, self.rows)
        self.detector = WinDetector(self.grid)
        self.state = MatchState()
        self._emit(MatchReset())
        if self._is_bot_turn():
            self._play_bot_move()

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _emit(self, event: MatchEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    @property
    def active_player(self) -> Player:
        return self.state.active_player

    @property
    def result(self) -> GameResult:
        return self.state.result

    @property
    def winner(self) -> Optional[Player]:
        return self.state.result.winner

    def is_finished(self) -> bool:
        return self.state.result.is_game_over()

    def _is_bot_turn(self) -> bool:
        return (self.bot_enabled and not self.is_finished()
                and self.state.active_player == self.bot_player)

    def place_move(self, column: int) -> MoveResult:
        """
        Drop a piece for the active player into column.

        On a win or draw the match finishes; otherwise the turn passes and,
        if the bot now holds the turn, its reply is placed immediately and
        returned as the result's reply.

        Raises:
            GameAlreadyFinishedError: the match is over
            ColumnOutOfRangeError: column is not on the grid
            ColumnFullError: column has no empty cell
        """
        result = self._apply(column)
        if self._is_bot_turn():
            return MoveResult(result.piece, result.result, reply=self._play_bot_move())
        return result

    def _play_bot_move(self) -> MoveResult:
        column = self.bot.get_move(self.grid, self.state.active_player)
        debug.debug(f"Bot plays column {column}", "match")
        return self._apply(column)

    def _apply(self, column: int) -> MoveResult:
        if self.is_finished():
            raise GameAlreadyFinishedError(f"Match already finished: {self.state.result.name}")

        player = self.state.active_player
        piece = self.grid.place(column, player)
        self._emit(PiecePlaced(piece))

        evaluation = self.detector.evaluate_after_placement(piece)
        if evaluation.near_win:
            self.state.near_win_count += 1
            debug.info(f"Near win for player {player.value} "
                       f"(count {self.state.near_win_count})", "match")
            self._emit(NearWinDetected(NEAR_WIN_LENGTH, self.state.near_win_count))

        if evaluation.result.is_game_over():
            self.state.result = evaluation.result
            self.state.winning_streak = evaluation.streak
            debug.info(f"Match finished: {evaluation.result.name}", "match")
            self._emit(MatchFinished(evaluation.result, evaluation.streak))
        else:
            self.state.active_player = player.other()

        return MoveResult(piece, evaluation.result)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            cells=self.grid.get_state(),
            active_player=self.state.active_player,
            result=self.state.result,
            winning_streak=self.state.winning_streak,
            near_win_count=self.state.near_win_count,
        )

    def verify(self) -> bool:
        """
        Check the incremental result against a full-board scan.

        A fresh match must report no result and no near-wins; otherwise the
        full scan must agree on whether the match is over and who won.
        """
        board = self.detector.evaluate_board()
        if self.grid.move_count == 0:
            return (self.state.result == GameResult.IN_PROGRESS
                    and self.state.near_win_count == 0
                    and board.result == GameResult.IN_PROGRESS)
        return board.result == self.state.result

    def render(self) -> str:
        highlight = self.state.winning_streak.positions if self.state.winning_streak else ()
        return self.grid.render(highlight)


def new_match(columns: int = COLS, rows: int = ROWS, bot_enabled: bool = False,
              seed: Optional[int] = None) -> Match:
    """Create a match awaiting player one's first move."""
    return Match(columns, rows, bot_enabled=bot_enabled, rng=random.Random(seed))
