"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from treasure_sweeper.game import (
    DEFAULT_TREASURES,
    GameConfig,
    GameSession,
    Grid,
    generate_board,
)
from treasure_sweeper.game.config import GOLD, GEM


# ============================================================================
# Layouts
# ============================================================================

# Mine in the top-left corner, gold in the bottom-right corner
CORNER_LAYOUT = [
    "*....",
    ".....",
    ".....",
    ".....",
    "....G",
]

# Three mines, a gem and a gold
MIXED_LAYOUT = [
    "*...*",
    ".D...",
    "..*.G",
]


def make_session(layout, catalog=(GOLD, GEM), **overrides) -> GameSession:
    """Build a session over a hand-written layout."""
    grid = Grid.from_layout(layout, catalog)
    config = GameConfig(
        width=grid.width,
        height=grid.height,
        num_mines=grid.count_mines(),
        treasures=tuple(catalog),
        **overrides,
    )
    return GameSession(config, grid)


# ============================================================================
# Factory Fixtures
# ============================================================================

@pytest.fixture
def session_factory():
    """Factory building sessions over hand-written layouts."""
    return make_session


@pytest.fixture
def corner_layout():
    return list(CORNER_LAYOUT)


@pytest.fixture
def mixed_layout():
    return list(MIXED_LAYOUT)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def classic_config() -> GameConfig:
    """Reference 10x10 configuration."""
    return GameConfig()


@pytest.fixture
def small_config() -> GameConfig:
    """Small 4x4 board with 2 mines and no treasures."""
    return GameConfig(width=4, height=4, num_mines=2, treasures=())


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def classic_grid(classic_config: GameConfig) -> Grid:
    """Reproducible reference board."""
    return generate_board(classic_config, random.Random(1234))


@pytest.fixture
def corner_grid() -> Grid:
    return Grid.from_layout(CORNER_LAYOUT, DEFAULT_TREASURES)


@pytest.fixture
def mixed_grid() -> Grid:
    return Grid.from_layout(MIXED_LAYOUT, DEFAULT_TREASURES)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def corner_session() -> GameSession:
    """Session over the corner layout with default lives."""
    return make_session(CORNER_LAYOUT)


@pytest.fixture
def mixed_session() -> GameSession:
    """Session over the mixed layout with default lives."""
    return make_session(MIXED_LAYOUT)


@pytest.fixture
def one_life_session() -> GameSession:
    """Session over the mixed layout with a single life."""
    return make_session(MIXED_LAYOUT, starting_lives=1)
