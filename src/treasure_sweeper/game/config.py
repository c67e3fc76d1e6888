"""
Game configuration for Treasure Sweeper.

Holds grid dimensions, mine count, the treasure catalog and scoring
rules, validated on construction.
"""
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from .cell import TreasureKind
from .errors import ConfigurationError


# ============================================================================
# Constants
# ============================================================================

GOLD = TreasureKind("gold", points=500, count=3, symbol="G")
SILVER = TreasureKind("silver", points=250, count=4, symbol="S")
GEM = TreasureKind("gem", points=1000, count=2, symbol="D")
MONEY = TreasureKind("money", points=100, count=5, symbol="M")

DEFAULT_TREASURES: Tuple[TreasureKind, ...] = (GOLD, SILVER, GEM, MONEY)

INTEGER_FIELDS = (
    "width", "height", "num_mines",
    "starting_lives", "safe_reward", "mine_penalty",
)


# ============================================================================
# Game Configuration
# ============================================================================

@dataclass
class GameConfig:
    """
    Configuration for a Treasure Sweeper session.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
        treasures: Treasure catalog, in placement order.
        starting_lives: Lives at session start.
        safe_reward: Points for each safe (numbered) cell revealed.
        mine_penalty: Points lost on each mine hit.
    """

    width: int = 10
    height: int = 10
    num_mines: int = 10
    treasures: Tuple[TreasureKind, ...] = field(
        default_factory=lambda: DEFAULT_TREASURES
    )
    starting_lives: int = 3
    safe_reward: int = 20
    mine_penalty: int = 1000

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.treasures = tuple(self.treasures)
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values can produce a board."""
        for name in INTEGER_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(
                    f"{name} must be an integer, got {value!r}"
                )
        if self.width < 1 or self.height < 1:
            raise ConfigurationError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ConfigurationError("Number of mines cannot be negative")
        if self.starting_lives < 1:
            raise ConfigurationError("Starting lives must be at least 1")
        if self.mine_penalty < 0:
            raise ConfigurationError("Mine penalty cannot be negative")
        self._validate_treasures()

        capacity = self.width * self.height
        if self.total_items >= capacity:
            raise ConfigurationError(
                f"Too many mines and treasures ({self.total_items}) "
                f"for a {self.height}x{self.width} grid"
            )

    def _validate_treasures(self) -> None:
        names = set()
        for treasure in self.treasures:
            if treasure.count < 0:
                raise ConfigurationError(
                    f"Treasure count cannot be negative: {treasure.name}"
                )
            if len(treasure.symbol) != 1:
                raise ConfigurationError(
                    f"Treasure symbol must be one character: {treasure.name}"
                )
            if treasure.symbol in "*. " or treasure.symbol.isdigit():
                raise ConfigurationError(
                    f"Treasure symbol is reserved: {treasure.symbol!r}"
                )
            if treasure.name in names:
                raise ConfigurationError(
                    f"Duplicate treasure kind: {treasure.name}"
                )
            names.add(treasure.name)

    @property
    def total_treasures(self) -> int:
        """Number of treasure cells on each board."""
        return sum(treasure.count for treasure in self.treasures)

    @property
    def total_items(self) -> int:
        """Number of mine and treasure cells on each board."""
        return self.num_mines + self.total_treasures

    # ========================================================================
    # Serialization
    # ========================================================================

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        """
        Build a configuration from a plain dictionary.

        Missing keys fall back to defaults. Treasures are given as a list
        of ``{"name", "points", "count", "symbol"}`` objects.
        """
        known = {
            "width", "height", "num_mines", "treasures",
            "starting_lives", "safe_reward", "mine_penalty",
        }
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}"
            )

        kwargs = dict(data)
        if "treasures" in kwargs:
            try:
                kwargs["treasures"] = tuple(
                    TreasureKind(
                        name=str(item["name"]),
                        points=int(item["points"]),
                        count=int(item["count"]),
                        symbol=str(item["symbol"]),
                    )
                    for item in kwargs["treasures"]
                )
            except (KeyError, TypeError, ValueError) as exc:
                raise ConfigurationError(f"Invalid treasure entry: {exc}") from exc
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "width": self.width,
            "height": self.height,
            "num_mines": self.num_mines,
            "treasures": [
                {
                    "name": t.name,
                    "points": t.points,
                    "count": t.count,
                    "symbol": t.symbol,
                }
                for t in self.treasures
            ],
            "starting_lives": self.starting_lives,
            "safe_reward": self.safe_reward,
            "mine_penalty": self.mine_penalty,
        }


def load_config(path: Union[str, Path]) -> GameConfig:
    """
    Load a configuration from a JSON file.

    Args:
        path: Location of the JSON document.

    Returns:
        Validated game configuration.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Malformed config file {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must hold a JSON object")
    return GameConfig.from_dict(data)


# Reference configuration
CLASSIC = GameConfig()
