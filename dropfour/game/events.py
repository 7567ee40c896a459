"""
events.py - Notifications raised by a match

A presentation layer subscribes to a Match and reacts to these events, for
example by animating the falling piece or playing a sound.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

from dropfour.game.grid import Piece
from dropfour.game.streak import Streak
from dropfour.utils import GameResult


@dataclass(frozen=True)
class PiecePlaced:
    piece: Piece


@dataclass(frozen=True)
class NearWinDetected:
    """A new streak of near-win length appeared; count is the running total."""
    streak_length: int
    count: int


@dataclass(frozen=True)
class MatchFinished:
    result: GameResult
    winning_streak: Optional[Streak] = None


@dataclass(frozen=True)
class MatchReset:
    pass


MatchEvent = Union[PiecePlaced, NearWinDetected, MatchFinished, MatchReset]
Listener = Callable[[MatchEvent], None]
