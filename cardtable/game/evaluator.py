"""Hand evaluation contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence

from cardtable.models.card import Card
from cardtable.models.hand import HandRank

if TYPE_CHECKING:
    from .context import GameContext


class HandEvaluator(ABC):
    """Scores a set of cards for one variant."""

    @abstractmethod
    def evaluate_hand(
        self, cards: Sequence[Card], context: GameContext | None = None
    ) -> HandRank:
        """Evaluate cards into a comparable rank.

        Args:
            cards: Cards to score, in hand order
            context: Session the cards belong to, for table-dependent values

        Returns:
            HandRank
        """

    def is_valid_hand(
        self, cards: Sequence[Card | None], context: GameContext | None = None
    ) -> bool:
        """Whether the cards form a hand this variant can score."""
        return bool(cards) and all(card is not None for card in cards)

    def get_playable_cards(
        self, cards: Sequence[Card], context: GameContext | None = None
    ) -> list[Card]:
        """Subset of `cards` the holder may play right now."""
        return list(cards)
