import random

import numpy as np
import pytest

from dropfour.errors import ColumnFullError, ColumnOutOfRangeError, GameAlreadyFinishedError
from dropfour.game.events import MatchFinished, MatchReset, NearWinDetected, PiecePlaced
from dropfour.game.match import Match, new_match
from dropfour.utils import GameResult, Orientation, Player
from tests.helpers import DIAGONAL_WIN, DRAW_SEQUENCE, HORIZONTAL_WIN, VERTICAL_WIN, play


def assert_initial(snapshot):
    assert not snapshot.cells.any()
    assert snapshot.cells.shape == (6, 7)
    assert snapshot.active_player == Player.ONE
    assert snapshot.result == GameResult.IN_PROGRESS
    assert snapshot.winner is None
    assert snapshot.winning_streak is None
    assert snapshot.near_win_count == 0


def test_new_match_awaits_player_one():
    match = new_match(7, 6, bot_enabled=False)
    assert_initial(match.snapshot())
    assert match.verify()


def test_players_alternate(match):
    first = match.place_move(3)
    assert first.piece.player == Player.ONE
    assert first.result == GameResult.IN_PROGRESS
    assert first.reply is None
    assert match.active_player == Player.TWO
    second = match.place_move(3)
    assert second.piece.player == Player.TWO
    assert second.piece.position == (3, 4)
    assert match.active_player == Player.ONE


def test_vertical_win(match):
    result = play(match, VERTICAL_WIN)
    assert result.result == GameResult.PLAYER_ONE_WIN
    snapshot = match.snapshot()
    assert snapshot.winner == Player.ONE
    assert snapshot.winning_streak.orientation == Orientation.VERTICAL
    assert set(snapshot.winning_streak.positions) == {(0, 5), (0, 4), (0, 3), (0, 2)}


def test_horizontal_win(match):
    result = play(match, HORIZONTAL_WIN)
    assert result.result == GameResult.PLAYER_ONE_WIN
    streak = match.snapshot().winning_streak
    assert streak.orientation == Orientation.HORIZONTAL
    assert streak.positions == [(0, 5), (1, 5), (2, 5), (3, 5)]


def test_diagonal_win_for_player_two(match):
    result = play(match, DIAGONAL_WIN)
    assert result.piece.player == Player.TWO
    assert result.result == GameResult.PLAYER_TWO_WIN
    streak = match.snapshot().winning_streak
    assert streak.orientation == Orientation.SLASH
    assert set(streak.positions) == {(0, 5), (1, 4), (2, 3), (3, 2)}


def test_full_grid_without_line_is_draw(match):
    for column in DRAW_SEQUENCE[:-1]:
        assert match.place_move(column).result == GameResult.IN_PROGRESS
    result = match.place_move(DRAW_SEQUENCE[-1])
    assert result.result == GameResult.DRAW
    snapshot = match.snapshot()
    assert snapshot.winner is None
    assert snapshot.is_finished
    assert match.grid.is_full()
    assert match.verify()


def test_out_of_range_move_leaves_state_unchanged(match):
    match.place_move(0)
    before = match.snapshot()
    for column in (-1, 7):
        with pytest.raises(ColumnOutOfRangeError):
            match.place_move(column)
    after = match.snapshot()
    assert np.array_equal(before.cells, after.cells)
    assert after.active_player == Player.TWO


def test_full_column_move_leaves_turn(match):
    play(match, [5] * 6)
    assert match.active_player == Player.ONE
    with pytest.raises(ColumnFullError):
        match.place_move(5)
    assert match.active_player == Player.ONE
    assert match.grid.move_count == 6


def test_move_after_finish_is_rejected(match):
    play(match, VERTICAL_WIN)
    before = match.snapshot()
    with pytest.raises(GameAlreadyFinishedError):
        match.place_move(4)
    assert np.array_equal(before.cells, match.snapshot().cells)
    assert match.result == GameResult.PLAYER_ONE_WIN


@pytest.mark.parametrize("moves", [VERTICAL_WIN, DIAGONAL_WIN, DRAW_SEQUENCE])
def test_reset_after_finish(match, moves):
    play(match, moves)
    assert match.is_finished()
    match.reset()
    assert_initial(match.snapshot())
    assert match.verify()
    match.place_move(0)


def test_snapshot_is_a_copy(match):
    match.place_move(2)
    snapshot = match.snapshot()
    snapshot.cells[:] = 0
    assert match.grid.occupant_at(2, 5) == Player.ONE


def test_events_for_winning_move(match, events):
    play(match, VERTICAL_WIN)
    placed = [e for e in events if isinstance(e, PiecePlaced)]
    assert len(placed) == len(VERTICAL_WIN)
    assert placed[-1].piece.position == (0, 2)
    assert isinstance(events[-1], MatchFinished)
    assert events[-1].result == GameResult.PLAYER_ONE_WIN
    assert events[-1].winning_streak == match.snapshot().winning_streak


def test_near_win_notified_once_per_new_line(match, events):
    play(match, [0, 6, 0, 4])
    assert not [e for e in events if isinstance(e, NearWinDetected)]
    match.place_move(0)
    near = [e for e in events if isinstance(e, NearWinDetected)]
    assert near == [NearWinDetected(streak_length=3, count=1)]
    match.place_move(2)
    assert len([e for e in events if isinstance(e, NearWinDetected)]) == 1
    assert match.snapshot().near_win_count == 1


def test_reset_emits_event(match, events):
    match.place_move(1)
    match.reset()
    assert isinstance(events[-1], MatchReset)


def test_unsubscribe(match, events):
    match.unsubscribe(events.append)
    match.place_move(1)
    assert events == []


def test_bot_replies_within_same_call():
    match = new_match(bot_enabled=True, seed=3)
    result = match.place_move(3)
    assert result.piece.player == Player.ONE
    assert result.reply is not None
    assert result.reply.piece.player == Player.TWO
    assert match.active_player == Player.ONE
    assert match.grid.move_count == 2


def test_bot_does_not_move_after_human_wins():
    match = new_match(bot_enabled=True, seed=0)
    match.bot.chaos_odds = None
    # Stack three of player one's pieces straight onto the grid
    match.grid.place(0, Player.ONE)
    match.grid.place(0, Player.ONE)
    match.grid.place(0, Player.ONE)
    result = match.place_move(0)
    assert result.result == GameResult.PLAYER_ONE_WIN
    assert result.reply is None
    assert match.is_finished()


def test_bot_always_plays_legal_columns():
    for seed in range(30):
        rng = random.Random(seed)
        match = new_match(bot_enabled=True, seed=seed)
        while not match.is_finished():
            column = rng.choice(match.grid.legal_columns())
            result = match.place_move(column)
            if result.reply is not None:
                assert result.reply.piece.player == Player.TWO
                assert 0 <= result.reply.piece.x < match.columns
        assert match.verify()


def test_seeded_matches_replay_identically():
    moves = [3, 3, 2, 4, 1]
    first = new_match(bot_enabled=True, seed=42)
    second = new_match(bot_enabled=True, seed=42)
    for column in moves:
        if first.is_finished():
            break
        first.place_move(column)
        second.place_move(column)
    assert np.array_equal(first.snapshot().cells, second.snapshot().cells)


def test_bot_can_take_first_seat():
    match = Match(bot_enabled=True, bot_player=Player.ONE, rng=random.Random(5))
    assert match.grid.move_count == 1
    assert match.active_player == Player.TWO
    result = match.place_move(match.grid.legal_columns()[0])
    assert result.piece.player == Player.TWO
    assert result.reply.piece.player == Player.ONE


def test_render_highlights_winning_line(match):
    play(match, HORIZONTAL_WIN)
    assert match.render().splitlines()[6].startswith("|* * * *")
