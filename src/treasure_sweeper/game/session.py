"""
Game session for Treasure Sweeper.

Owns score, lives and status for one generated board and applies the
outcome events produced by the reveal engine.
"""
import itertools
import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .board import Grid, generate_board
from .config import GameConfig
from .errors import InvalidCoordinateError
from .reveal import EventType, RevealEvent, flood_reveal, new_reveal_state


logger = logging.getLogger(__name__)

_session_ids = itertools.count(1)


# ============================================================================
# Constants
# ============================================================================

class GameStatus(Enum):
    """Possible states of a session."""

    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        return self != GameStatus.IN_PROGRESS


SessionListener = Callable[[Sequence[RevealEvent], GameStatus], None]


# ============================================================================
# Read-only Views
# ============================================================================

@dataclass(frozen=True, eq=False)
class Snapshot:
    """
    Read-only view of a session for rendering.

    Attributes:
        grid: Board content (immutable).
        revealed: Copy of the reveal mask (read-only array).
        score: Current score.
        lives: Remaining lives.
        status: Current status.
    """

    grid: Grid
    revealed: np.ndarray
    score: int
    lives: int
    status: GameStatus

    def get_observation(self) -> np.ndarray:
        """Board as seen by the player (-1 for hidden cells)."""
        return self.grid.get_observation(self.revealed)

    def render(self) -> str:
        """Render board as ASCII string."""
        lines = []
        for row in range(self.grid.height):
            row_str = ""
            for col in range(self.grid.width):
                if self.revealed[row, col]:
                    row_str += self.grid.cell(row, col).to_symbol()
                else:
                    row_str += "."
                row_str += " "
            lines.append(row_str)
        return "\n".join(lines)


@dataclass(frozen=True, eq=False)
class RevealResult:
    """
    Outcome of one reveal action.

    Attributes:
        revealed: Reveal mask after the action (read-only array).
        events: Events emitted, in reveal order.
        score: Score after the action.
        lives: Lives after the action.
        status: Status after the action.
        score_delta: Change in score caused by the action.
    """

    revealed: np.ndarray
    events: Tuple[RevealEvent, ...]
    score: int
    lives: int
    status: GameStatus
    score_delta: int = 0


def _frozen(array: np.ndarray) -> np.ndarray:
    view = array.copy()
    view.setflags(write=False)
    return view


# ============================================================================
# Game Session
# ============================================================================

class GameSession:
    """
    One game from board generation to a terminal status.

    The session is the single writer of score, lives and status. Reveal
    actions are accepted only while the status is IN_PROGRESS.
    """

    def __init__(self, config: GameConfig, grid: Grid) -> None:
        """
        Initialize a fresh session over an existing grid.

        Args:
            config: Scoring and lives configuration.
            grid: Generated board content.
        """
        self.session_id = next(_session_ids)
        self.config = config
        self.grid = grid
        self._revealed = new_reveal_state(grid)
        self._score = 0
        self._lives = config.starting_lives
        self._status = GameStatus.IN_PROGRESS
        self._listeners: List[SessionListener] = []

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal_cell(self, row: int, col: int) -> RevealResult:
        """
        Reveal a cell and apply the resulting events.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            Result with the new reveal mask, events and session state.
            Revealing after the game ended, or revealing an already
            revealed cell, returns the unchanged state and no events.

        Raises:
            InvalidCoordinateError: Position is outside the grid.
        """
        if not self.grid.in_bounds(row, col):
            raise InvalidCoordinateError(row, col, self.grid.height, self.grid.width)
        if self._status.is_terminal or self._revealed[row, col]:
            return self._result(())

        revealed, events = flood_reveal(self.grid, self._revealed, row, col)
        score_before = self._score
        self._revealed = revealed
        self._apply_events(events)
        result = self._result(tuple(events), self._score - score_before)

        for listener in self._listeners:
            listener(result.events, self._status)
        return result

    def _apply_events(self, events: Sequence[RevealEvent]) -> None:
        """Apply one event batch, then resolve loss before win."""
        for event in events:
            if event.type == EventType.MINE_HIT:
                self._score = max(0, self._score - self.config.mine_penalty)
                self._lives = max(0, self._lives - 1)
                if self._lives == 0:
                    self._status = GameStatus.LOST
            elif event.type == EventType.TREASURE_FOUND:
                self._score += event.treasure.points
            else:
                self._score += self.config.safe_reward

        if self._status == GameStatus.LOST:
            self._reveal_all_mines()
            logger.info("Session lost with score %d", self._score)
        elif self._all_safe_cells_revealed():
            self._status = GameStatus.WON
            logger.info(
                "Session won with score %d and %d lives left",
                self._score, self._lives,
            )

    def _reveal_all_mines(self) -> None:
        for row, col in self.grid.mine_positions():
            self._revealed[row, col] = True

    def _all_safe_cells_revealed(self) -> bool:
        """Check if every non-mine cell is revealed."""
        for row, col in self.grid.positions():
            if not self._revealed[row, col] and not self.grid.cell(row, col).is_mine:
                return False
        return True

    def add_listener(self, listener: SessionListener) -> None:
        """
        Register a callable notified after each non-empty reveal.

        Listeners receive the event batch and the resulting status once
        the session state has been updated.
        """
        self._listeners.append(listener)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def score(self) -> int:
        return self._score

    @property
    def lives(self) -> int:
        return self._lives

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def is_over(self) -> bool:
        """Check if the session reached a terminal status."""
        return self._status.is_terminal

    @property
    def revealed_count(self) -> int:
        return int(self._revealed.sum())

    def is_revealed(self, row: int, col: int) -> bool:
        if not self.grid.in_bounds(row, col):
            raise InvalidCoordinateError(row, col, self.grid.height, self.grid.width)
        return bool(self._revealed[row, col])

    def snapshot(self) -> Snapshot:
        """Get a read-only view of the session."""
        return Snapshot(
            grid=self.grid,
            revealed=_frozen(self._revealed),
            score=self._score,
            lives=self._lives,
            status=self._status,
        )

    def _result(
        self, events: Tuple[RevealEvent, ...], score_delta: int = 0
    ) -> RevealResult:
        return RevealResult(
            revealed=_frozen(self._revealed),
            events=events,
            score=self._score,
            lives=self._lives,
            status=self._status,
            score_delta=score_delta,
        )

    def __repr__(self) -> str:
        return (
            f"GameSession(id={self.session_id}, score={self._score}, "
            f"lives={self._lives}, status={self._status.name})"
        )


# ============================================================================
# Session Interface
# ============================================================================

def start_new_game(
    config: Optional[GameConfig] = None,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> GameSession:
    """
    Generate a board and start a fresh session.

    Args:
        config: Game configuration (default: reference 10x10 board).
        seed: Seed for a reproducible board. Ignored when ``rng`` is given.
        rng: Explicit randomness source.

    Returns:
        New session in progress.

    Raises:
        ConfigurationError: Configuration cannot produce a board.
    """
    config = config or GameConfig()
    if rng is None:
        rng = random.Random(seed)
    grid = generate_board(config, rng)
    logger.debug("Started new session on %r", grid)
    return GameSession(config, grid)


def reveal_cell(session: GameSession, row: int, col: int) -> RevealResult:
    """Reveal a cell in the given session."""
    return session.reveal_cell(row, col)


def get_snapshot(session: GameSession) -> Snapshot:
    """Get a read-only view of the given session."""
    return session.snapshot()
