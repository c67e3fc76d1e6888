"""
Reveal engine for Treasure Sweeper.

Computes the set of cells opened by a single player action, expanding
through zero-adjacency cells, and classifies each opened cell.
"""
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Tuple

import numpy as np

from .board import Grid, Position
from .cell import CellKind, TreasureKind
from .errors import InvalidCoordinateError


logger = logging.getLogger(__name__)


# ============================================================================
# Events
# ============================================================================

class EventType(Enum):
    """Outcome of revealing a single cell."""

    MINE_HIT = auto()
    TREASURE_FOUND = auto()
    SAFE_ZERO = auto()
    SAFE_NUMBERED = auto()


@dataclass(frozen=True)
class RevealEvent:
    """
    One revealed cell and what it held.

    Attributes:
        type: Outcome classification.
        row: Row of the revealed cell.
        col: Column of the revealed cell.
        treasure: Treasure kind for TREASURE_FOUND events.
        number: Adjacent mine count for SAFE_* events.
    """

    type: EventType
    row: int
    col: int
    treasure: Optional[TreasureKind] = None
    number: Optional[int] = None

    @property
    def position(self) -> Position:
        return self.row, self.col

    @property
    def is_safe(self) -> bool:
        """Check if event is a plain numbered reveal."""
        return self.type in (EventType.SAFE_ZERO, EventType.SAFE_NUMBERED)


# ============================================================================
# Reveal
# ============================================================================

def new_reveal_state(grid: Grid) -> np.ndarray:
    """Create an all-hidden reveal mask for the grid."""
    return np.zeros((grid.height, grid.width), dtype=bool)


def flood_reveal(
    grid: Grid,
    revealed: np.ndarray,
    row: int,
    col: int,
) -> Tuple[np.ndarray, List[RevealEvent]]:
    """
    Reveal a cell and flood outward through zero cells.

    Uses an explicit stack so large open regions never hit the recursion
    limit. Mines, treasures and non-zero numbers are revealed but do not
    propagate.

    Args:
        grid: Board content.
        revealed: Current reveal mask. Not modified.
        row: Row index to reveal.
        col: Column index to reveal.

    Returns:
        Tuple of (new reveal mask, events in reveal order). When the cell
        is already revealed the mask is an unchanged copy and there are no
        events.
    """
    if not grid.in_bounds(row, col):
        raise InvalidCoordinateError(row, col, grid.height, grid.width)

    updated = revealed.copy()
    events: List[RevealEvent] = []
    stack: List[Position] = [(row, col)]

    while stack:
        r, c = stack.pop()
        if updated[r, c]:
            continue
        updated[r, c] = True

        content = grid.cell(r, c)
        if content.kind == CellKind.MINE:
            events.append(RevealEvent(EventType.MINE_HIT, r, c))
        elif content.kind == CellKind.TREASURE:
            events.append(
                RevealEvent(EventType.TREASURE_FOUND, r, c, treasure=content.treasure)
            )
        elif content.adjacent_mines == 0:
            events.append(RevealEvent(EventType.SAFE_ZERO, r, c, number=0))
            for n_row, n_col in grid.neighbors(r, c):
                if not updated[n_row, n_col]:
                    stack.append((n_row, n_col))
        else:
            events.append(
                RevealEvent(
                    EventType.SAFE_NUMBERED, r, c, number=content.adjacent_mines
                )
            )

    if events:
        logger.debug("Reveal at (%d, %d) opened %d cells", row, col, len(events))
    return updated, events
