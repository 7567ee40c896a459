"""
env.py - Gymnasium environment against the heuristic bot

The agent plays player one; the heuristic bot answers as player two inside
the same step, so every observation is a position where the agent is to move.
"""

import random
from typing import Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from dropfour.ai.heuristic import HeuristicPlayer
from dropfour.debug import debug
from dropfour.errors import InvalidMoveError
from dropfour.game.match import Match
from dropfour.utils import COLS, ROWS, GameResult, Player


class DropFourEnv(gym.Env):
    """
    Gymnasium environment for playing against the heuristic bot.

    Actions are column indices; observations are the rows x columns grid of
    player values (0 empty, 1 agent, 2 bot).
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, columns: int = COLS, rows: int = ROWS,
                 chaos_odds: Optional[int] = None):
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")
        debug.debug("Initializing DropFourEnv", "env")

        self.action_space = spaces.Discrete(columns)
        self.observation_space = spaces.Box(low=0, high=2, shape=(rows, columns), dtype=np.int8)

        self.render_mode = render_mode
        self._bot = HeuristicPlayer(rng=random.Random())
        if chaos_odds is not None:
            self._bot.chaos_odds = chaos_odds
        self.match = Match(columns, rows, bot_enabled=True, bot_player=Player.TWO, bot=self._bot)

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        super().reset(seed=seed)
        # Derive the bot's random stream from the env's seeded generator
        self._bot.seed(int(self.np_random.integers(0, 2**32)))
        self.match.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        try:
            self.match.place_move(int(action))
        except InvalidMoveError as e:
            debug.warning(f"Invalid action {action}: {e}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        result = self.match.result
        reward = self.reward_step
        terminated = result.is_game_over()
        if result == GameResult.PLAYER_ONE_WIN:
            reward = self.reward_win
        elif result == GameResult.PLAYER_TWO_WIN:
            reward = self.reward_lose
        elif result == GameResult.DRAW:
            reward = self.reward_draw

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.match.render()
        if self.render_mode == "human":
            print(self.match.render())
        return None

    def action_masks(self) -> np.ndarray:
        mask = np.zeros(self.action_space.n, dtype=bool)
        mask[self.match.grid.legal_columns()] = True
        return mask

    def _get_observation(self) -> np.ndarray:
        return self.match.grid.get_state()

    def _get_info(self) -> Dict:
        snapshot = self.match.snapshot()
        return {
            'valid_moves': self.match.grid.legal_columns(),
            'current_player': snapshot.active_player.value,
            'game_result': snapshot.result.name,
            'moves_made': self.match.grid.move_count,
            'near_win_count': snapshot.near_win_count,
            'winning_line': snapshot.winning_streak.positions if snapshot.winning_streak else [],
        }
