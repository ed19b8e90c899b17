"""Tests for the draw pile."""

import random

import pytest

from cardtable.errors import DeckExhaustedError
from cardtable.models.card import create_blackjack_deck, create_poker_deck
from cardtable.models.deck import Deck


@pytest.fixture
def deck():
    d = Deck(create_blackjack_deck, random.Random(7))
    d.reset()
    return d


class TestDeck:
    """Tests for Deck class."""

    def test_new_deck_is_empty(self):
        """Test a deck holds nothing before its first reset."""
        d = Deck(create_blackjack_deck)
        assert d.remaining == 0
        assert len(d) == 0

    def test_reset_fills_deck(self, deck):
        """Test reset regenerates the full card set."""
        assert deck.remaining == 52
        assert set(deck.cards) == set(create_blackjack_deck())

    def test_draw_invariant(self, deck):
        """Test N draws shrink the deck by N and never leave a drawn card behind."""
        for n in (0, 1, 5, 13, 33):
            deck.reset()
            before = deck.remaining
            drawn = [deck.draw() for _ in range(n)]

            assert deck.remaining == before - n
            assert len(deck.cards) == deck.remaining
            assert not set(drawn) & set(deck.cards)

    def test_draw_many(self, deck):
        """Test bulk draw takes cards from the top."""
        top = deck.cards[:3]
        assert deck.draw_many(3) == list(top)
        assert deck.remaining == 49

    def test_draw_empty_deck(self, deck):
        """Test drawing from an exhausted deck fails."""
        deck.draw_many(52)
        with pytest.raises(DeckExhaustedError):
            deck.draw()

    def test_draw_many_too_many_leaves_deck_unchanged(self, deck):
        """Test an oversized bulk draw fails without drawing anything."""
        deck.draw_many(50)
        before = deck.cards
        with pytest.raises(DeckExhaustedError):
            deck.draw_many(3)
        assert deck.cards == before

    def test_draw_many_negative(self, deck):
        """Test negative counts are rejected."""
        with pytest.raises(ValueError):
            deck.draw_many(-1)

    def test_exhausted_error_is_index_error(self, deck):
        """Test the exhaustion error can be caught as IndexError."""
        deck.draw_many(52)
        with pytest.raises(IndexError):
            deck.draw()

    def test_reset_after_draws(self, deck):
        """Test reset restores all cards after play."""
        deck.draw_many(20)
        deck.reset()
        assert deck.remaining == 52

    def test_same_seed_same_order(self):
        """Test seeded decks shuffle identically."""
        d1 = Deck(create_poker_deck, random.Random(42))
        d2 = Deck(create_poker_deck, random.Random(42))
        d1.reset()
        d2.reset()
        assert d1.cards == d2.cards

    def test_restore(self, deck):
        """Test restore replaces the pile in order."""
        cards = list(deck.cards[:4])
        deck.restore(cards)
        assert deck.cards == tuple(cards)
        assert deck.draw() == cards[0]


class TestShuffleUniformity:
    """Statistical check of the shuffle."""

    def test_position_uniform(self):
        """Test each card lands in each position about equally often."""
        size = 8
        trials = 16000
        rng = random.Random(1234)
        deck = Deck(lambda: list(range(size)), rng)

        counts = [[0] * size for _ in range(size)]
        for _ in range(trials):
            deck.reset()
            for position, card in enumerate(deck.cards):
                counts[card][position] += 1

        expected = trials / size
        chi2 = sum(
            (observed - expected) ** 2 / expected
            for row in counts
            for observed in row
        )
        # 49 degrees of freedom; p=0.001 critical value is about 85.4
        assert chi2 < 85.4
        for row in counts:
            for observed in row:
                assert abs(observed - expected) < expected * 0.15
