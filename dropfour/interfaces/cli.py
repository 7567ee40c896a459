"""
cli.py - Command-line interface for dropfour

This module provides a terminal front end for playing matches against the
heuristic bot or another person, inspecting board positions, and timing the
engine.
"""

import argparse
import random
import sys
from typing import List, Optional

from dropfour.ai.heuristic import HeuristicPlayer, connecting_moves, longest_streaks
from dropfour.debug import debug, DebugLevel
from dropfour.errors import EngineError, InvalidMoveError
from dropfour.game.events import MatchEvent, MatchFinished, MatchReset, NearWinDetected, PiecePlaced
from dropfour.game.grid import Grid
from dropfour.game.match import Match
from dropfour.game.rules import WinDetector
from dropfour.game.streak import longest_streak
from dropfour.utils import COLS, ROWS, GameResult, Player

QUIT = -1
RESTART = -2


def describe_result(result: GameResult) -> str:
    if result == GameResult.PLAYER_ONE_WIN:
        return "X won!"
    if result == GameResult.PLAYER_TWO_WIN:
        return "O won!"
    if result == GameResult.DRAW:
        return "it's a draw!"
    return "in progress"


class SimpleCLI:
    """Simple command-line interface for dropfour."""

    def __init__(self, argv: Optional[List[str]] = None, out=None):
        self.argv = argv
        self.out = out or sys.stdout
        self.args = None
        self.match: Optional[Match] = None

    def echo(self, text: str = "") -> None:
        print(text, file=self.out)

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='dropfour CLI')
        parser.add_argument('--debug', action='store_true', help='Enable debug logging')
        parser.add_argument('--debug-level', default='warning',
                            choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                            help='Logging level')
        parser.add_argument('--log-file', type=str, default=None, help='Also log to this file')
        parser.add_argument('--columns', type=int, default=COLS, help='Grid width')
        parser.add_argument('--rows', type=int, default=ROWS, help='Grid height')
        parser.add_argument('--seed', type=int, default=None, help='Seed for the bot')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a match interactively')
        play_parser.add_argument('--two-player', action='store_true',
                                 help='Two people share the terminal (no bot)')

        test_parser = subparsers.add_parser('test', help='Analyze a board position')
        test_parser.add_argument('--position', type=str, required=True,
                                 help="Rows top to bottom separated by '/', "
                                      "one of . 1 2 per cell")

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark the engine')
        benchmark_parser.add_argument('--iterations', type=int, default=200,
                                      help='Number of bot-vs-bot matches')

        env_parser = subparsers.add_parser('env', help='Random agent vs bot in the gymnasium env')
        env_parser.add_argument('--episodes', type=int, default=20, help='Number of episodes')

        return parser

    def parse_args(self) -> None:
        self.args = self.build_parser().parse_args(self.argv)

        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self) -> int:
        """Run the selected command and return the process exit code."""
        if not self.args:
            self.parse_args()

        try:
            if self.args.command == 'play':
                self.play_game()
            elif self.args.command == 'test':
                self.test_position()
            elif self.args.command == 'benchmark':
                self.benchmark()
            elif self.args.command == 'env':
                self.run_env()
            else:
                self.echo("Please specify a command. Use --help for options.")
                return 1
        except (ValueError, EngineError) as e:
            debug.error(str(e), "cli")
            self.echo(f"Error: {e}")
            return 1
        return 0

    def on_event(self, event: MatchEvent) -> None:
        """Text cues standing in for the sounds of the graphical front end."""
        if isinstance(event, PiecePlaced):
            self.echo(f"*click* {event.piece.player} drops into column {event.piece.x}")
        elif isinstance(event, NearWinDetected):
            self.echo(f"uh oh! a line of {event.streak_length} (near wins so far: {event.count})")
        elif isinstance(event, MatchFinished):
            self.echo(f"*cheer* {describe_result(event.result)}")
        elif isinstance(event, MatchReset):
            self.echo("let's play")

    def play_game(self) -> None:
        """Play a match interactively."""
        bot_enabled = not self.args.two_player
        self.match = Match(self.args.columns, self.args.rows, bot_enabled=bot_enabled,
                           rng=random.Random(self.args.seed))
        self.match.subscribe(self.on_event)
        self.echo(f"Enter a column number (0-{self.args.columns - 1}); 'q' quits, 'r' restarts.")
        self.match.reset()
        self.echo(self.match.render())

        while True:
            if self.match.is_finished():
                self.echo(self.match.render())
                self.echo(describe_result(self.match.result))
                again = self.read_line("Play again? (y/n): ")
                if again is None or again != 'y':
                    return
                self.match.reset()
                self.echo(self.match.render())
                continue

            move = self.get_human_move()
            if move is None:
                continue
            if move == QUIT:
                self.echo("Quitting match.")
                return
            if move == RESTART:
                self.match.reset()
                self.echo(self.match.render())
                continue

            try:
                self.match.place_move(move)
            except InvalidMoveError as e:
                self.echo(f"Invalid move: {e}")
                continue
            self.echo(self.match.render())

    def read_line(self, prompt: str) -> Optional[str]:
        try:
            return input(prompt).strip().lower()
        except EOFError:
            return None

    def get_human_move(self) -> Optional[int]:
        """
        Read a move from the active player.

        Returns:
            Column index, QUIT, RESTART, or None for unusable input
        """
        player = self.match.active_player
        user_input = self.read_line(f"Player {player} move: ")
        if user_input is None or user_input == 'q':
            return QUIT
        if user_input == 'r':
            return RESTART

        try:
            return int(user_input)
        except ValueError:
            self.echo("Invalid input. Please enter a column number, 'q' or 'r'.")
            return None

    def test_position(self) -> None:
        """Analyze a position given as '/'-separated rows."""
        grid = Grid.from_rows(self.args.position.split('/'))
        self.echo("Loaded position:")
        self.echo(grid.render())

        detector = WinDetector(grid)
        evaluation = detector.evaluate_board()
        if evaluation.streak is not None:
            self.echo(f"\nWin for {evaluation.streak.player}: {evaluation.streak}")
        else:
            self.echo("\nNo win detected for any player")
        self.echo(f"Result: {evaluation.result.name}")
        self.echo(f"Pieces on a line of three: {evaluation.near_win_pieces}")

        for player in (Player.ONE, Player.TWO):
            length, streaks = longest_streaks(grid, player)
            moves = connecting_moves(grid, streaks)
            self.echo(f"Player {player}: longest streak {length}, extending columns {moves}")

        self.echo(f"Valid moves: {grid.legal_columns()}")

    def benchmark(self) -> None:
        """Time streak scans and bot-vs-bot matches."""
        iterations = self.args.iterations
        rng = random.Random(self.args.seed)
        self.echo(f"Running benchmark with {iterations} bot-vs-bot matches...")

        results = {result: 0 for result in GameResult if result.is_game_over()}
        total_moves = 0
        debug.start_timer("matches")
        for _ in range(iterations):
            match = Match(self.args.columns, self.args.rows, bot_enabled=True,
                          bot_player=Player.TWO, rng=rng)
            opponent = HeuristicPlayer(rng=rng)
            while not match.is_finished():
                column = opponent.get_move(match.grid, match.active_player)
                match.place_move(column)
            results[match.result] += 1
            total_moves += match.grid.move_count
        elapsed = debug.end_timer("matches", "cli")
        self.echo(f"Played {iterations} matches with {total_moves} moves in {elapsed:.3f} seconds "
                  f"({elapsed / max(total_moves, 1) * 1000:.3f} ms per move)")
        for result, count in results.items():
            self.echo(f"  {result.name}: {count}")

        grid = Grid(self.args.columns, self.args.rows)
        while not grid.is_full():
            grid.place(rng.choice(grid.legal_columns()), Player(grid.move_count % 2 + 1))
        scans = 0
        debug.start_timer("scans")
        for _ in range(max(iterations // 10, 1)):
            for piece in grid.pieces():
                longest_streak(grid, piece)
                scans += 1
        elapsed = debug.end_timer("scans", "cli")
        self.echo(f"Scanned {scans} pieces in {elapsed:.3f} seconds "
                  f"({elapsed / scans * 1000:.4f} ms per piece)")

    def run_env(self) -> None:
        """Play a uniformly random agent against the bot through DropFourEnv."""
        from dropfour.game.env import DropFourEnv

        env = DropFourEnv(columns=self.args.columns, rows=self.args.rows)
        results = {result: 0 for result in GameResult if result.is_game_over()}
        total_reward = 0.0
        seed = self.args.seed
        for episode in range(self.args.episodes):
            observation, info = env.reset(seed=None if seed is None else seed + episode)
            done = False
            while not done:
                action = int(env.np_random.choice(info['valid_moves']))
                observation, reward, terminated, truncated, info = env.step(action)
                total_reward += reward
                done = terminated or truncated
            results[env.match.result] += 1
        env.close()

        self.echo(f"Random agent vs bot over {self.args.episodes} episodes "
                  f"(mean reward {total_reward / max(self.args.episodes, 1):.3f}):")
        for result, count in results.items():
            self.echo(f"  {result.name}: {count}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI(argv).run()


if __name__ == "__main__":
    sys.exit(main())
