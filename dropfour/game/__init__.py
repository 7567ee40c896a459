"""
dropfour.game - Core game mechanics

This package contains the grid, streak scanning and win detection. The match
controller lives in dropfour.game.match, which also depends on dropfour.ai.
"""

from dropfour.game.grid import Grid, Piece
from dropfour.game.streak import Streak, scan_line, scan_piece, longest_streak
from dropfour.game.rules import Evaluation, WinDetector

__all__ = ['Grid', 'Piece', 'Streak', 'scan_line', 'scan_piece', 'longest_streak',
           'Evaluation', 'WinDetector']
