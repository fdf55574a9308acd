"""Тесты для RoundConfig и пресетов."""

import pytest

from gridpool.engine import BoundaryPolicy, WalkMode, WinningPolicy
from gridpool.round import PRESET_NAMES, RoundConfig, get_preset


class TestRoundConfig:
    def test_defaults(self):
        config = RoundConfig()

        assert config.grid.rows == 10
        assert config.grid.cols == 10
        assert config.starting_credits == 1000
        assert config.default_bet_amount == 10
        assert config.initial_volatility == 5
        assert (config.volatility_min, config.volatility_max) == (1, 10)
        assert config.walk.mode == WalkMode.FREE_WALK
        assert config.winning_policy == WinningPolicy.SINGLE_CELL

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"starting_credits": -1},
            {"default_bet_amount": 0},
            {"initial_volatility": 11},
            {"initial_volatility": 0},
            {"volatility_min": 5, "volatility_max": 4, "initial_volatility": 5},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            RoundConfig(**kwargs)

    def test_frozen(self):
        config = RoundConfig()
        with pytest.raises(AttributeError):
            config.starting_credits = 5


class TestPresets:
    def test_preset_names(self):
        assert PRESET_NAMES == ["cursor", "price", "price_path"]

    def test_cursor(self):
        config = get_preset("cursor")
        assert config.walk.mode == WalkMode.FREE_WALK
        assert config.walk.effective_boundary() == BoundaryPolicy.WRAP
        assert config.winning_policy == WinningPolicy.SINGLE_CELL

    def test_price(self):
        config = get_preset("price")
        assert config.walk.mode == WalkMode.TIME_INDEXED
        assert config.walk.effective_boundary() == BoundaryPolicy.CLAMP
        assert config.winning_policy == WinningPolicy.SINGLE_CELL

    def test_price_path(self):
        config = get_preset("PRICE_PATH")
        assert config.walk.mode == WalkMode.TIME_INDEXED
        assert config.winning_policy == WinningPolicy.FULL_PATH

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown preset"):
            get_preset("roulette")

    def test_builders(self):
        config = get_preset("price_path")
        assert config.build_path_generator().step_count(3) == 10
        assert config.build_settlement_engine().winning_policy == WinningPolicy.FULL_PATH
