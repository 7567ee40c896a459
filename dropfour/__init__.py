"""
dropfour - Rules engine for a gravity-drop four-in-a-row game

This package provides the grid and placement rules, streak scanning for win
detection, a cheap heuristic bot and a match controller that ties them
together, plus a text interface and a gymnasium environment.
"""

# Version number
__version__ = '0.1.0'
