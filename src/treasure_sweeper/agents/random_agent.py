"""
Random agent for Treasure Sweeper.

Serves as a baseline by revealing random hidden cells.
"""
from typing import Optional

import numpy as np

from .base_agent import BaseAgent


class RandomAgent(BaseAgent):
    """Agent that reveals hidden cells uniformly at random."""

    def __init__(
        self,
        board_height: int = 10,
        board_width: int = 10,
        seed: Optional[int] = None,
    ) -> None:
        super().__init__(board_height, board_width)
        self.rng = np.random.default_rng(seed)

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        valid_indices = np.flatnonzero(valid_actions)
        if len(valid_indices) == 0:
            # Nothing left to reveal; any action is a no-op
            return 0
        return int(self.rng.choice(valid_indices))
