"""
streak.py - Runs of same-owner pieces through an anchor piece

A streak is found by walking outward from a piece along both directions of
one orientation, collecting neighbours while they belong to the same player.
The same scan drives win detection and the heuristic bot.
"""

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from dropfour.debug import debug
from dropfour.game.grid import Grid, Piece, Position
from dropfour.utils import Direction, Orientation


@dataclass(frozen=True)
class Streak:
    """Contiguous pieces of one owner along one orientation, end to end."""
    orientation: Orientation
    pieces: Tuple[Piece, ...]

    def __len__(self) -> int:
        return len(self.pieces)

    def __iter__(self) -> Iterator[Piece]:
        return iter(self.pieces)

    def __str__(self):
        inner = ", ".join(str(p) for p in self.pieces)
        return f"Streak({self.orientation}, [{inner}])"

    @property
    def player(self):
        return self.pieces[0].player

    @property
    def positions(self) -> List[Position]:
        return [p.position for p in self.pieces]

    def contains(self, position: Position) -> bool:
        return position in self.positions

    def highest_piece(self) -> Piece:
        """Piece closest to the top row."""
        return min(self.pieces, key=lambda p: p.y)

    def leftmost_piece(self) -> Piece:
        return min(self.pieces, key=lambda p: p.x)

    def rightmost_piece(self) -> Piece:
        return max(self.pieces, key=lambda p: p.x)


def _walk(grid: Grid, anchor: Piece, direction: Direction) -> List[Piece]:
    """Pieces owned by the anchor's player, stepping away from it until a gap."""
    found = []
    position = grid.neighbor(anchor.position, direction)
    while position is not None:
        piece = grid.piece_at(*position)
        if piece is None or piece.player != anchor.player:
            break
        found.append(piece)
        position = grid.neighbor(position, direction)
    return found


def scan_line(grid: Grid, anchor: Piece, orientation: Orientation) -> Streak:
    """
    Longest run through anchor along orientation.

    Args:
        grid: The grid the anchor sits on
        anchor: A placed piece
        orientation: The line to scan

    Returns:
        Streak ordered from the far end in the first direction of the
        orientation to the far end in the second
    """
    direction_a, direction_b = orientation.directions
    before = _walk(grid, anchor, direction_a)
    after = _walk(grid, anchor, direction_b)
    streak = Streak(orientation, tuple(reversed(before)) + (anchor,) + tuple(after))
    debug.trace(f"{orientation} through ({anchor.x}, {anchor.y}): length {len(streak)}", "streak")
    return streak


def scan_piece(grid: Grid, anchor: Piece) -> Iterator[Streak]:
    """Streaks through anchor for every orientation, in win-check order."""
    for orientation in Orientation:
        yield scan_line(grid, anchor, orientation)


def longest_streak(grid: Grid, anchor: Piece) -> Streak:
    """The longest streak through anchor; the earlier orientation wins ties."""
    best = None
    for streak in scan_piece(grid, anchor):
        if best is None or len(streak) > len(best):
            best = streak
    return best
