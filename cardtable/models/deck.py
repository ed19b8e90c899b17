"""Draw pile."""

import logging
import random
from typing import Iterable

from cardtable.errors import DeckExhaustedError

from .card import Card, CardFactory

logger = logging.getLogger(__name__)


class Deck:
    """Ordered draw pile rebuilt from a card factory.

    Cards are drawn from the front. A drawn card is no longer owned by the
    deck, so `remaining` always equals the number of cards in `cards`.
    """

    def __init__(self, factory: CardFactory, rng: random.Random | None = None):
        """Initialize an empty deck.

        Args:
            factory: Callable producing the full card set for the variant.
            rng: Session-local random source (a fresh one if not provided).
        """
        self._factory = factory
        self._rng = rng or random.Random()
        self._cards: list[Card] = []

    @property
    def cards(self) -> tuple[Card, ...]:
        """Remaining cards, top of the deck first."""
        return tuple(self._cards)

    @property
    def remaining(self) -> int:
        return len(self._cards)

    def draw(self) -> Card:
        """Draw the top card.

        Raises:
            DeckExhaustedError: If the deck is empty.
        """
        if not self._cards:
            raise DeckExhaustedError("No cards remaining in the deck")
        return self._cards.pop(0)

    def draw_many(self, count: int) -> list[Card]:
        """Draw `count` cards from the top.

        Raises:
            ValueError: If count is negative.
            DeckExhaustedError: If fewer than `count` cards remain. The deck
                is left unchanged.
        """
        if count < 0:
            raise ValueError(f"Cannot draw a negative number of cards: {count}")
        if count > len(self._cards):
            raise DeckExhaustedError(
                f"Not enough cards remaining. Requested: {count}, "
                f"Available: {len(self._cards)}"
            )
        drawn = self._cards[:count]
        del self._cards[:count]
        return drawn

    def shuffle(self) -> None:
        """Shuffle in place (Fisher-Yates via the session random source)."""
        self._rng.shuffle(self._cards)

    def reset(self) -> None:
        """Discard the current pile, rebuild it from the factory and shuffle."""
        self._cards = list(self._factory())
        self.shuffle()
        logger.debug(f"Deck reset with {len(self._cards)} cards")

    def restore(self, cards: Iterable[Card]) -> None:
        """Replace the pile with `cards` in the given order."""
        self._cards = list(cards)

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Deck(remaining={len(self._cards)})"
