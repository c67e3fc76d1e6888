"""
Board module for Treasure Sweeper.

Implements the immutable content grid and the board generator that
places mines and treasures and computes adjacency numbers.
"""
import logging
import numbers
import random
from collections import Counter
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .cell import CellContent, HIDDEN_CODE, TreasureKind
from .config import GameConfig
from .errors import ConfigurationError, InvalidCoordinateError


logger = logging.getLogger(__name__)

Position = Tuple[int, int]

MINE_SYMBOL = "*"
SAFE_SYMBOL = "."


# ============================================================================
# Grid Class
# ============================================================================

class Grid:
    """
    Immutable content grid for one session.

    Cells are addressed by (row, col). Content never changes after
    construction; reveal state lives in a separate array owned by the
    reveal engine.
    """

    def __init__(
        self,
        cells: Sequence[Sequence[CellContent]],
        catalog: Sequence[TreasureKind] = (),
    ) -> None:
        """
        Initialize the grid.

        Args:
            cells: Rows of cell content, all of equal length.
            catalog: Treasure catalog the cells were drawn from.
        """
        rows = tuple(tuple(row) for row in cells)
        if not rows or not rows[0]:
            raise ConfigurationError("Grid must have at least one cell")
        if any(len(row) != len(rows[0]) for row in rows):
            raise ConfigurationError("Grid rows must all have the same width")
        self._cells = rows
        self._catalog = tuple(catalog)

    @classmethod
    def from_layout(
        cls,
        layout: Sequence[str],
        catalog: Sequence[TreasureKind] = (),
    ) -> "Grid":
        """
        Build a grid from a text layout.

        Each character is ``*`` for a mine, ``.`` for a safe cell whose
        number is computed, or a treasure symbol from ``catalog``.

        Args:
            layout: One string per row.
            catalog: Treasure kinds referenced by symbol.

        Returns:
            Grid with adjacency numbers filled in.
        """
        by_symbol = {treasure.symbol: treasure for treasure in catalog}
        placed: List[List[Optional[CellContent]]] = []
        for line in layout:
            row = []
            for symbol in line:
                if symbol == MINE_SYMBOL:
                    row.append(CellContent.mine())
                elif symbol == SAFE_SYMBOL:
                    row.append(None)
                elif symbol in by_symbol:
                    row.append(CellContent.treasure_of(by_symbol[symbol]))
                else:
                    raise ConfigurationError(f"Unknown layout symbol: {symbol!r}")
            placed.append(row)
        if not placed or any(len(row) != len(placed[0]) for row in placed):
            raise ConfigurationError("Layout rows must be non-empty and equal width")
        return cls(_fill_numbers(placed), catalog)

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within grid bounds."""
        if not all(isinstance(index, numbers.Integral) for index in (row, col)):
            return False
        return 0 <= row < self.height and 0 <= col < self.width

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-bounds neighbors.
        """
        return _neighbors(row, col, self.height, self.width)

    def positions(self) -> Iterator[Position]:
        """Iterate over every (row, col) in row-major order."""
        for row in range(self.height):
            for col in range(self.width):
                yield row, col

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def width(self) -> int:
        return len(self._cells[0])

    @property
    def height(self) -> int:
        return len(self._cells)

    @property
    def catalog(self) -> Tuple[TreasureKind, ...]:
        return self._catalog

    def cell(self, row: int, col: int) -> CellContent:
        """Get content at position."""
        if not self.in_bounds(row, col):
            raise InvalidCoordinateError(row, col, self.height, self.width)
        return self._cells[row][col]

    def mine_positions(self) -> List[Position]:
        """Positions of every mine on the grid."""
        return [pos for pos in self.positions() if self.cell(*pos).is_mine]

    def count_mines(self) -> int:
        return len(self.mine_positions())

    def treasure_counts(self) -> Dict[str, int]:
        """Number of placed treasures by kind name."""
        counts = Counter(
            self.cell(*pos).treasure.name
            for pos in self.positions()
            if self.cell(*pos).is_treasure
        )
        return {treasure.name: counts.get(treasure.name, 0)
                for treasure in self._catalog}

    def safe_cell_count(self) -> int:
        """Number of cells that must be revealed to win."""
        return self.width * self.height - self.count_mines()

    def get_observation(self, revealed: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Get grid content as numpy array.

        Args:
            revealed: Optional reveal mask; hidden cells are encoded as -1.
                When omitted the full content is returned.

        Returns:
            2D int8 array where:
                -1 = hidden
                0-8 = adjacent mine count
                9 = mine
                10+i = treasure at catalog index i
        """
        obs = np.full((self.height, self.width), HIDDEN_CODE, dtype=np.int8)
        for row, col in self.positions():
            if revealed is None or revealed[row, col]:
                obs[row, col] = self._cells[row][col].to_observation(self._catalog)
        return obs

    def to_layout(self) -> List[str]:
        """Inverse of ``from_layout`` with numbers shown as digits."""
        return [
            "".join(
                "0" if cell.is_numbered and cell.adjacent_mines == 0
                else cell.to_symbol()
                for cell in row
            )
            for row in self._cells
        ]

    def __repr__(self) -> str:
        return f"Grid({self.height}x{self.width}, mines={self.count_mines()})"


# ============================================================================
# Board Generation
# ============================================================================

def generate_board(
    config: GameConfig,
    rng: Optional[random.Random] = None,
) -> Grid:
    """
    Generate a fully populated grid.

    Mines are placed first by rejection sampling, then each treasure kind
    in catalog order into cells that are still empty, then every remaining
    cell gets its adjacent mine count.

    Args:
        config: Game configuration. Its capacity check guarantees the
            sampling loops terminate.
        rng: Randomness source. A fresh, independently seeded one is
            created when omitted.

    Returns:
        Immutable grid.
    """
    capacity = config.width * config.height
    if config.total_items >= capacity:
        raise ConfigurationError(
            f"Cannot place {config.total_items} items on {capacity} cells"
        )
    rng = rng or random.Random()

    placed: List[List[Optional[CellContent]]] = [
        [None] * config.width for _ in range(config.height)
    ]
    _scatter(placed, CellContent.mine(), config.num_mines, rng)
    for treasure in config.treasures:
        _scatter(placed, CellContent.treasure_of(treasure), treasure.count, rng)

    grid = Grid(_fill_numbers(placed), config.treasures)
    logger.debug(
        "Generated %dx%d board with %d mines and %d treasures",
        config.height, config.width, config.num_mines, config.total_treasures,
    )
    return grid


def _scatter(
    placed: List[List[Optional[CellContent]]],
    content: CellContent,
    count: int,
    rng: random.Random,
) -> None:
    """Place ``count`` copies of content into random empty cells."""
    height = len(placed)
    width = len(placed[0])
    remaining = count
    while remaining > 0:
        row = rng.randrange(height)
        col = rng.randrange(width)
        if placed[row][col] is None:
            placed[row][col] = content
            remaining -= 1


def _fill_numbers(
    placed: List[List[Optional[CellContent]]],
) -> List[List[CellContent]]:
    """Replace every empty cell with its adjacent mine count."""
    height = len(placed)
    width = len(placed[0]) if placed else 0
    cells = []
    for row in range(height):
        out_row = []
        for col in range(width):
            content = placed[row][col]
            if content is None:
                count = sum(
                    1 for n_row, n_col in _neighbors(row, col, height, width)
                    if placed[n_row][n_col] is not None
                    and placed[n_row][n_col].is_mine
                )
                content = CellContent.numbered(count)
            out_row.append(content)
        cells.append(out_row)
    return cells


def _neighbors(row: int, col: int, height: int, width: int) -> List[Position]:
    neighbors = []
    for delta_row in (-1, 0, 1):
        for delta_col in (-1, 0, 1):
            if delta_row == 0 and delta_col == 0:
                continue
            new_row = row + delta_row
            new_col = col + delta_col
            if 0 <= new_row < height and 0 <= new_col < width:
                neighbors.append((new_row, new_col))
    return neighbors
