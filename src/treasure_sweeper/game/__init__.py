"""
Treasure Sweeper game module.

Provides board generation, the reveal engine and the game session state
machine, plus presentation cues and a Gymnasium environment.
"""
from .cell import CellContent, CellKind, TreasureKind
from .config import CLASSIC, DEFAULT_TREASURES, GameConfig, load_config
from .errors import ConfigurationError, InvalidCoordinateError, SweeperError
from .board import Grid, generate_board
from .reveal import EventType, RevealEvent, flood_reveal, new_reveal_state
from .session import (
    GameSession,
    GameStatus,
    RevealResult,
    Snapshot,
    get_snapshot,
    reveal_cell,
    start_new_game,
)
from .cues import Cue, CueDispatcher, cues_for
from .environment import TreasureSweeperEnv

__all__ = [
    "CellContent",
    "CellKind",
    "TreasureKind",
    "CLASSIC",
    "DEFAULT_TREASURES",
    "GameConfig",
    "load_config",
    "ConfigurationError",
    "InvalidCoordinateError",
    "SweeperError",
    "Grid",
    "generate_board",
    "EventType",
    "RevealEvent",
    "flood_reveal",
    "new_reveal_state",
    "GameSession",
    "GameStatus",
    "RevealResult",
    "Snapshot",
    "get_snapshot",
    "reveal_cell",
    "start_new_game",
    "Cue",
    "CueDispatcher",
    "cues_for",
    "TreasureSweeperEnv",
]
