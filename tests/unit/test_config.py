"""
Unit tests for GameConfig.

Tests validation, defaults and JSON loading.
"""
import json

import pytest
from treasure_sweeper.game import (
    CLASSIC,
    ConfigurationError,
    GameConfig,
    TreasureKind,
    load_config,
)


# ============================================================================
# Default Configuration Tests
# ============================================================================

class TestDefaults:
    """Reference values."""

    def test_reference_board(self, classic_config: GameConfig) -> None:
        assert classic_config.width == 10
        assert classic_config.height == 10
        assert classic_config.num_mines == 10
        assert classic_config.starting_lives == 3
        assert classic_config.safe_reward == 20
        assert classic_config.mine_penalty == 1000

    def test_reference_catalog(self, classic_config: GameConfig) -> None:
        """Catalog order and values are preserved."""
        catalog = [(t.name, t.points, t.count) for t in classic_config.treasures]
        assert catalog == [
            ("gold", 500, 3),
            ("silver", 250, 4),
            ("gem", 1000, 2),
            ("money", 100, 5),
        ]
        assert classic_config.total_treasures == 14
        assert classic_config.total_items == 24

    def test_classic_preset_matches_defaults(self) -> None:
        assert CLASSIC == GameConfig()


# ============================================================================
# Validation Tests
# ============================================================================

class TestValidation:
    """Invalid configurations fail fast."""

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-1, 5)])
    def test_non_positive_dimensions(self, width: int, height: int) -> None:
        with pytest.raises(ConfigurationError, match="dimensions must be positive"):
            GameConfig(width=width, height=height)

    def test_negative_mines(self) -> None:
        with pytest.raises(ConfigurationError, match="cannot be negative"):
            GameConfig(num_mines=-1)

    def test_capacity_must_exceed_items(self) -> None:
        """Mines plus treasures filling every cell is rejected."""
        with pytest.raises(ConfigurationError, match="Too many"):
            GameConfig(width=3, height=3, num_mines=9, treasures=())

    def test_treasures_count_towards_capacity(self) -> None:
        treasures = (TreasureKind("gold", 500, 5, "G"),)
        with pytest.raises(ConfigurationError, match="Too many"):
            GameConfig(width=3, height=3, num_mines=4, treasures=treasures)

    def test_one_free_cell_is_enough(self) -> None:
        config = GameConfig(width=3, height=3, num_mines=8, treasures=())
        assert config.total_items == 8

    def test_zero_lives_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="lives"):
            GameConfig(starting_lives=0)

    def test_duplicate_treasure_names_rejected(self) -> None:
        treasures = (
            TreasureKind("gold", 500, 1, "G"),
            TreasureKind("gold", 100, 1, "H"),
        )
        with pytest.raises(ConfigurationError, match="Duplicate"):
            GameConfig(treasures=treasures)

    @pytest.mark.parametrize("symbol", ["", "GG", "*", ".", "3"])
    def test_bad_treasure_symbol_rejected(self, symbol: str) -> None:
        treasures = (TreasureKind("gold", 500, 1, symbol),)
        with pytest.raises(ConfigurationError):
            GameConfig(treasures=treasures)

    def test_configuration_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            GameConfig(width=0)


# ============================================================================
# Serialization Tests
# ============================================================================

class TestSerialization:
    """Dictionary and JSON configuration."""

    def test_from_dict_fills_defaults(self) -> None:
        config = GameConfig.from_dict({"width": 8, "starting_lives": 5})
        assert config.width == 8
        assert config.height == 10
        assert config.starting_lives == 5
        assert len(config.treasures) == 4

    def test_dict_round_trip(self, classic_config: GameConfig) -> None:
        assert GameConfig.from_dict(classic_config.to_dict()) == classic_config

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown"):
            GameConfig.from_dict({"colour": "red"})

    @pytest.mark.parametrize(
        "data",
        [
            {"width": "10"},
            {"num_mines": None},
            {"starting_lives": True},
            {"height": 4.0},
            {"mine_penalty": [1000]},
        ],
    )
    def test_non_integer_fields_rejected(self, data) -> None:
        with pytest.raises(ConfigurationError, match="must be an integer"):
            GameConfig.from_dict(data)

    def test_incomplete_treasure_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid treasure"):
            GameConfig.from_dict({"treasures": [{"name": "gold"}]})

    def test_load_config_from_file(self, tmp_path) -> None:
        path = tmp_path / "game.json"
        path.write_text(json.dumps({
            "width": 6,
            "height": 6,
            "num_mines": 4,
            "treasures": [
                {"name": "ruby", "points": 750, "count": 2, "symbol": "R"},
            ],
        }))
        config = load_config(path)
        assert (config.width, config.height, config.num_mines) == (6, 6, 4)
        assert config.treasures == (TreasureKind("ruby", 750, 2, "R"),)

    def test_load_malformed_file(self, tmp_path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="Malformed"):
            load_config(path)

    def test_load_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError, match="Cannot read"):
            load_config(tmp_path / "absent.json")
