"""Hand rank models."""

from enum import IntEnum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .card import PokerCard

BLACKJACK = 21
FIVE_CARD_CHARLIE_SIZE = 5


class BlackjackHandDetail(BaseModel, frozen=True):
    """Scoring annotations for a house-dealer hand."""

    kind: Literal["blackjack"] = "blackjack"
    total: int
    card_count: int
    soft: bool = False  # At least one ace still counted as 11
    is_natural: bool = False
    is_bust: bool = False
    is_five_card_charlie: bool = False

    @property
    def comparison_value(self) -> int:
        """Value used when settling against the dealer.

        A five-card charlie is lifted above the 21 ceiling so it outranks
        every regular hand; two charlies still compare on their totals.
        """
        if self.is_five_card_charlie:
            return BLACKJACK + self.total
        return self.total


class HandCategory(IntEnum):
    """Ranked poker hand categories, weakest first."""

    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8


CATEGORY_NAMES = {
    HandCategory.HIGH_CARD: "High Card",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.FLUSH: "Flush",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
}


class PokerHandDetail(BaseModel, frozen=True):
    """Best-five-card breakdown of a ranked hand."""

    kind: Literal["poker"] = "poker"
    category: HandCategory
    tiebreakers: tuple[int, ...] = ()
    best_cards: tuple[PokerCard, ...] = ()


HandDetail = Annotated[
    Union[BlackjackHandDetail, PokerHandDetail],
    Field(discriminator="kind"),
]


class HandRank(BaseModel, frozen=True):
    """Score of a hand. Ordering compares `value` only."""

    value: int
    description: str
    detail: HandDetail | None = None

    def __gt__(self, other: "HandRank") -> bool:
        return self.value > other.value

    def __lt__(self, other: "HandRank") -> bool:
        return self.value < other.value

    def __ge__(self, other: "HandRank") -> bool:
        return self.value >= other.value

    def __le__(self, other: "HandRank") -> bool:
        return self.value <= other.value

    def __str__(self) -> str:
        return self.description
