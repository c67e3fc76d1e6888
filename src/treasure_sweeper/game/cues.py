"""
Presentation cues for Treasure Sweeper.

Maps reveal outcomes to sound/visual cues and forwards them to a
presentation callback. Playback is fire-and-forget: a failing callback
is logged and never interrupts the game.
"""
import logging
from enum import Enum
from typing import Callable, List, Sequence

from .reveal import EventType, RevealEvent
from .session import GameSession, GameStatus


logger = logging.getLogger(__name__)


class Cue(Enum):
    """Cues the presentation layer can play."""

    BACKGROUND_START = "background-start"
    BACKGROUND_STOP = "background-stop"
    EXPLOSION = "explosion"
    TREASURE = "treasure"
    GAME_OVER = "game-over"
    VICTORY = "victory"


def cues_for(events: Sequence[RevealEvent], status: GameStatus) -> List[Cue]:
    """
    Map one event batch and its resulting status to cues.

    Args:
        events: Events from a single reveal.
        status: Session status after the batch was applied.

    Returns:
        Cues in playback order.
    """
    cues = []
    for event in events:
        if event.type == EventType.MINE_HIT:
            cues.append(Cue.EXPLOSION)
        elif event.type == EventType.TREASURE_FOUND:
            cues.append(Cue.TREASURE)
    if status.is_terminal:
        cues.append(Cue.BACKGROUND_STOP)
    if status == GameStatus.LOST:
        cues.append(Cue.GAME_OVER)
    elif status == GameStatus.WON:
        cues.append(Cue.VICTORY)
    return cues


class CueDispatcher:
    """
    Session listener that plays cues through a callback.

    Example:
        >>> session = start_new_game()
        >>> CueDispatcher(player.play).attach(session)
    """

    def __init__(self, play: Callable[[Cue], None]) -> None:
        self.play = play
        self.failures = 0

    def attach(self, session: GameSession) -> "CueDispatcher":
        """Listen to a session and start its background track."""
        session.add_listener(self)
        if not session.is_over:
            self._play(Cue.BACKGROUND_START)
        return self

    def __call__(self, events: Sequence[RevealEvent], status: GameStatus) -> None:
        for cue in cues_for(events, status):
            self._play(cue)

    def _play(self, cue: Cue) -> None:
        try:
            self.play(cue)
        except Exception:
            self.failures += 1
            logger.warning("Failed to play %s cue", cue.value, exc_info=True)
