"""
dropfour.ai - Automated opponents

Only the heuristic streak player lives here; it is intentionally weak.
"""

from dropfour.ai.heuristic import HeuristicPlayer, connecting_moves, longest_streaks

__all__ = ['HeuristicPlayer', 'connecting_moves', 'longest_streaks']
