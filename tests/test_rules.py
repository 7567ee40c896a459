import random

import pytest

from dropfour.game.grid import Grid
from dropfour.game.rules import WinDetector
from dropfour.game.streak import scan_piece
from dropfour.utils import GameResult, Orientation, Player


def test_win_reported_iff_some_streak_reaches_four():
    for seed in range(40):
        rng = random.Random(seed)
        grid = Grid()
        detector = WinDetector(grid)
        while not grid.is_full():
            piece = grid.place(rng.choice(grid.legal_columns()), Player(grid.move_count % 2 + 1))
            expected = any(len(s) >= 4 for s in scan_piece(grid, piece))
            evaluation = detector.evaluate_after_placement(piece)
            if expected:
                assert evaluation.result == GameResult.win_for(piece.player)
                assert len(evaluation.streak) >= 4
                assert evaluation.streak.contains(piece.position)
                break
            assert evaluation.streak is None
            assert not evaluation.result.winner


def test_vertical_takes_priority_over_horizontal():
    grid = Grid.from_rows([
        ".......",
        ".......",
        "111....",
        "2221...",
        "2221...",
        "2221...",
    ])
    piece = grid.place(3, Player.ONE)
    assert piece.position == (3, 2)
    evaluation = WinDetector(grid).evaluate_after_placement(piece)
    assert evaluation.result == GameResult.PLAYER_ONE_WIN
    assert evaluation.streak.orientation == Orientation.VERTICAL
    assert evaluation.streak.positions == [(3, 2), (3, 3), (3, 4), (3, 5)]


def test_near_win_flag():
    grid = Grid()
    detector = WinDetector(grid)
    grid.place(0, Player.ONE)
    piece = grid.place(1, Player.ONE)
    assert not detector.evaluate_after_placement(piece).near_win
    piece = grid.place(2, Player.ONE)
    evaluation = detector.evaluate_after_placement(piece)
    assert evaluation.near_win
    assert evaluation.result == GameResult.IN_PROGRESS


def test_full_grid_without_line_is_draw():
    grid = Grid.from_rows([
        "2112",
        "1221",
    ])
    piece = grid.piece_at(3, 1)
    evaluation = WinDetector(grid).evaluate_after_placement(piece)
    assert evaluation.result == GameResult.DRAW
    assert evaluation.result.winner is None


def test_win_on_last_cell_beats_draw():
    grid = Grid.from_rows([
        "1111",
        "2122",
    ])
    piece = grid.piece_at(3, 0)
    assert WinDetector(grid).evaluate_after_placement(piece).result == GameResult.PLAYER_ONE_WIN


def test_evaluate_board_on_empty_grid(grid):
    evaluation = WinDetector(grid).evaluate_board()
    assert evaluation.result == GameResult.IN_PROGRESS
    assert evaluation.near_win_pieces == 0
    assert not evaluation.near_win


def test_evaluate_board_counts_near_win_pieces():
    grid = Grid.from_rows([
        ".......",
        ".......",
        ".......",
        ".......",
        ".......",
        "111.22.",
    ])
    evaluation = WinDetector(grid).evaluate_board()
    assert evaluation.result == GameResult.IN_PROGRESS
    assert evaluation.near_win_pieces == 3
    assert evaluation.near_win


def test_evaluate_board_finds_win():
    grid = Grid.from_rows([
        ".......",
        ".......",
        "...2...",
        "..21...",
        ".211...",
        "2112...",
    ])
    evaluation = WinDetector(grid).evaluate_board()
    assert evaluation.result == GameResult.PLAYER_TWO_WIN
    assert evaluation.streak.orientation == Orientation.SLASH
    assert evaluation.streak.positions == [(0, 5), (1, 4), (2, 3), (3, 2)]


@pytest.mark.parametrize("connect_n", [3, 5])
def test_connect_n_is_configurable(connect_n):
    grid = Grid()
    detector = WinDetector(grid, connect_n=connect_n, near_win_length=connect_n - 1)
    piece = None
    for _ in range(connect_n):
        piece = grid.place(0, Player.ONE)
    assert detector.evaluate_after_placement(piece).result == GameResult.PLAYER_ONE_WIN
