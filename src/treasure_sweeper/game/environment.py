"""
Gymnasium environment wrapper for Treasure Sweeper.

Provides a standard RL interface over a game session.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .cell import HIDDEN_CODE, TREASURE_CODE_BASE
from .config import GameConfig
from .session import GameSession, start_new_game


# ============================================================================
# Treasure Sweeper Environment
# ============================================================================

class TreasureSweeperEnv(gym.Env):
    """
    Gymnasium environment for Treasure Sweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine
        - 10+i = revealed treasure at catalog index i

    Actions:
        Discrete action space of size width * height.
        Action i corresponds to cell at (i // width, i % width).

    Rewards:
        - Score change caused by the reveal
        - -0.1 for invalid action (already revealed)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    INVALID_ACTION_REWARD = -0.1

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Game configuration (default: reference 10x10 board).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.session: Optional[GameSession] = None

        self.observation_space = spaces.Box(
            low=HIDDEN_CODE,
            high=TREASURE_CODE_BASE + max(len(self.config.treasures) - 1, 0),
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(
            self.config.height * self.config.width
        )

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new session on a freshly generated board.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        board_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.session = start_new_game(self.config, seed=board_seed)
        self._steps = 0

        return self._observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (row * width + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if self.session is None:
            raise RuntimeError("Call reset() before step()")

        row, col = self._action_to_position(int(action))
        self._steps += 1

        result = self.session.reveal_cell(row, col)
        if result.events:
            reward = float(result.score_delta)
        else:
            reward = self.INVALID_ACTION_REWARD

        terminated = self.session.is_over
        return self._observation(), reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return divmod(action, self.config.width)

    def _observation(self) -> np.ndarray:
        return self.session.snapshot().get_observation()

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "score": self.session.score,
            "lives": self.session.lives,
            "revealed": self.session.revealed_count,
            "total_safe": self.session.grid.safe_cell_count(),
            "game_state": self.session.status.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self.session.snapshot().render()
        if self.render_mode == "human":
            print(self.session.snapshot().render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = hidden cell (while playing).
        """
        if self.session.is_over:
            return np.zeros(self.action_space.n, dtype=bool)
        return ~self.session.snapshot().revealed.flatten()
