"""
Cell module for Treasure Sweeper.

Represents the immutable content of a grid cell: a mine, a treasure of
some catalog kind, or a number counting adjacent mines. Whether a cell
is revealed is tracked separately by the reveal engine.
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Sequence


# ============================================================================
# Constants
# ============================================================================

class CellKind(Enum):
    """Possible contents of a cell."""

    MINE = auto()
    TREASURE = auto()
    NUMBERED = auto()


# Observation codes shared with the environment and agents
HIDDEN_CODE = -1
MINE_CODE = 9
TREASURE_CODE_BASE = 10


@dataclass(frozen=True)
class TreasureKind:
    """
    A collectible treasure type.

    Attributes:
        name: Catalog key (e.g. "gold").
        points: Score awarded when the treasure is revealed.
        count: How many of this kind are placed per board.
        symbol: Single character used for text rendering.
    """

    name: str
    points: int
    count: int
    symbol: str


# ============================================================================
# Cell Content
# ============================================================================

@dataclass(frozen=True)
class CellContent:
    """
    Content of a single grid cell.

    Exactly one of mine, treasure or numbered. Use the class constructors
    rather than building instances by hand.

    Attributes:
        kind: Which variant this cell holds.
        treasure: Treasure kind when ``kind`` is TREASURE.
        adjacent_mines: Neighbouring mine count when ``kind`` is NUMBERED.
    """

    kind: CellKind
    treasure: Optional[TreasureKind] = None
    adjacent_mines: int = 0

    @classmethod
    def mine(cls) -> "CellContent":
        return cls(CellKind.MINE)

    @classmethod
    def treasure_of(cls, treasure: TreasureKind) -> "CellContent":
        return cls(CellKind.TREASURE, treasure=treasure)

    @classmethod
    def numbered(cls, adjacent_mines: int) -> "CellContent":
        if not 0 <= adjacent_mines <= 8:
            raise ValueError(f"Adjacent mine count out of range: {adjacent_mines}")
        return cls(CellKind.NUMBERED, adjacent_mines=adjacent_mines)

    @property
    def is_mine(self) -> bool:
        """Check if cell holds a mine."""
        return self.kind == CellKind.MINE

    @property
    def is_treasure(self) -> bool:
        """Check if cell holds a treasure."""
        return self.kind == CellKind.TREASURE

    @property
    def is_numbered(self) -> bool:
        """Check if cell holds an adjacency number."""
        return self.kind == CellKind.NUMBERED

    def to_observation(self, catalog: Sequence[TreasureKind]) -> int:
        """
        Convert revealed content to an observation value.

        Args:
            catalog: Treasure catalog the board was generated from.

        Returns:
            0-8: Adjacent mine count
            9: Mine
            10+i: Treasure at catalog index i
        """
        if self.kind == CellKind.MINE:
            return MINE_CODE
        if self.kind == CellKind.TREASURE:
            return TREASURE_CODE_BASE + list(catalog).index(self.treasure)
        return self.adjacent_mines

    def to_symbol(self) -> str:
        """Single character for text rendering."""
        if self.kind == CellKind.MINE:
            return "*"
        if self.kind == CellKind.TREASURE:
            return self.treasure.symbol
        if self.adjacent_mines == 0:
            return " "
        return str(self.adjacent_mines)
