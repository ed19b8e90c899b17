"""Tests for value types and game options."""

import pytest
from pydantic import ValidationError

from cardtable.models.values import (
    BetAmount,
    BlackjackOptions,
    GameOptions,
    Points,
    UnoOptions,
)


class TestPoints:
    """Tests for Points value type."""

    def test_negative_rejected(self):
        """Test negative points fail at construction."""
        with pytest.raises(ValueError):
            Points(-1)

    def test_add(self):
        assert Points(3) + Points(4) == Points(7)

    def test_subtract_floors_at_zero(self):
        """Test subtraction never goes below zero."""
        assert Points(5) - Points(2) == Points(3)
        assert Points(2) - Points(5) == Points(0)

    def test_ordering(self):
        assert Points(1) < Points(2)
        assert int(Points(9)) == 9


class TestBetAmount:
    """Tests for BetAmount value type."""

    @pytest.mark.parametrize("value", [0, -5])
    def test_non_positive_rejected(self, value):
        """Test bets must be strictly positive."""
        with pytest.raises(ValueError):
            BetAmount(value)

    def test_add(self):
        assert BetAmount(2) + BetAmount(3) == BetAmount(5)


class TestGameOptions:
    """Tests for GameOptions validation."""

    def test_valid_options(self):
        """Test ints are accepted for points and bets."""
        options = GameOptions(
            min_players=2, max_players=4, initial_points=100, min_bet=5, max_bet=50
        )
        assert options.initial_points == Points(100)
        assert options.min_bet == BetAmount(5)
        assert options.max_bet == BetAmount(50)

    def test_min_players_must_be_positive(self):
        with pytest.raises(ValidationError):
            GameOptions(min_players=0, max_players=4)

    def test_max_players_below_min(self):
        with pytest.raises(ValidationError):
            GameOptions(min_players=4, max_players=2)

    def test_max_bet_below_min(self):
        with pytest.raises(ValidationError):
            GameOptions(min_players=2, max_players=4, min_bet=10, max_bet=5)

    def test_negative_initial_points(self):
        """Test the points value type rejects negatives during validation."""
        with pytest.raises(ValueError):
            GameOptions(min_players=2, max_players=4, initial_points=-1)

    def test_options_frozen(self):
        options = GameOptions(min_players=2, max_players=4)
        with pytest.raises(ValidationError):
            options.max_players = 10

    def test_variant_options_by_kind(self):
        """Test variant options are resolved by their tag."""
        options = GameOptions.model_validate({
            "min_players": 2,
            "max_players": 8,
            "variant": {"kind": "blackjack", "charlie_beats_dealer_charlie": True},
        })
        assert isinstance(options.variant, BlackjackOptions)
        assert options.variant.charlie_beats_dealer_charlie

        uno = GameOptions(min_players=2, max_players=10, variant=UnoOptions())
        assert uno.variant.recycle_discards
