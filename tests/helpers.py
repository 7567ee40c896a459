from dropfour.game.match import Match

# Column sequence for a 7x6 match that fills the grid without a line of four
DRAW_SEQUENCE = [0, 2, 2, 0] * 3 + [1, 3, 3, 1] * 3 + [4, 6, 6, 4] * 3 + [5] * 6

VERTICAL_WIN = [0, 1, 0, 1, 0, 1, 0]
HORIZONTAL_WIN = [0, 0, 1, 1, 2, 2, 3]
DIAGONAL_WIN = [1, 0, 2, 1, 2, 2, 3, 6, 3, 6, 3, 3]


def play(match: Match, columns):
    """Place each column in turn and return the last MoveResult."""
    result = None
    for column in columns:
        result = match.place_move(column)
    return result
