"""
Exception types raised by the game engine.
"""


class SweeperError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(SweeperError, ValueError):
    """Raised when a game configuration cannot produce a valid board."""


class InvalidCoordinateError(SweeperError, IndexError):
    """Raised when a (row, col) position lies outside the grid."""

    def __init__(self, row: int, col: int, height: int, width: int) -> None:
        super().__init__(
            f"Cell ({row}, {col}) is outside the {height}x{width} grid"
        )
        self.row = row
        self.col = col
