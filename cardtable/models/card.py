"""Card models and card factories for every variant."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Annotated, Callable, Literal, Union

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from cardtable.game.context import GameContext


class Suit(IntEnum):
    """Standard French suit."""

    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3


class Rank(IntEnum):
    """Standard rank. Value is the pip count for number cards."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13


RANK_NAMES = {
    Rank.ACE: "A",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}

SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

FACE_RANKS = frozenset({Rank.JACK, Rank.QUEEN, Rank.KING})


class StandardCard(BaseModel, frozen=True):
    """Card from a standard 52-card deck."""

    suit: Suit
    rank: Rank

    @property
    def label(self) -> str:
        """Display label, e.g. "A♠" or "10♥"."""
        return f"{RANK_NAMES[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    def value(self, context: GameContext | None = None) -> int:
        """Numeric value of the card at the given table."""
        raise NotImplementedError

    def __str__(self) -> str:
        return self.label


class BlackjackCard(StandardCard, frozen=True):
    """Card valued for the house-dealer game."""

    kind: Literal["blackjack"] = "blackjack"

    def value(self, context: GameContext | None = None) -> int:
        # Ace starts soft; the evaluator demotes it when the hand would bust
        if self.rank == Rank.ACE:
            return 11
        if self.rank in FACE_RANKS:
            return 10
        return int(self.rank)


class PokerCard(StandardCard, frozen=True):
    """Card valued for ranked comparison (ace high)."""

    kind: Literal["poker"] = "poker"

    def value(self, context: GameContext | None = None) -> int:
        if self.rank == Rank.ACE:
            return 14
        return int(self.rank)


class UnoColor(str, Enum):
    """Color of a color/action card."""

    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    WILD = "wild"


class UnoAction(str, Enum):
    """Action printed on a color/action card."""

    NONE = "none"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"


ACTION_NAMES = {
    UnoAction.SKIP: "Skip",
    UnoAction.REVERSE: "Reverse",
    UnoAction.DRAW_TWO: "Draw Two",
    UnoAction.WILD: "Wild",
    UnoAction.WILD_DRAW_FOUR: "Wild Draw Four",
}

PLAYABLE_COLORS = (UnoColor.RED, UnoColor.BLUE, UnoColor.GREEN, UnoColor.YELLOW)


class UnoCard(BaseModel, frozen=True):
    """Color/action card. Number cards carry `number`, action cards do not."""

    kind: Literal["uno"] = "uno"
    color: UnoColor
    number: int | None = Field(default=None, ge=0, le=9)
    action: UnoAction = UnoAction.NONE

    @property
    def is_wild(self) -> bool:
        return self.color == UnoColor.WILD

    @property
    def label(self) -> str:
        if self.action == UnoAction.WILD or self.action == UnoAction.WILD_DRAW_FOUR:
            return ACTION_NAMES[self.action]
        color = self.color.value.capitalize()
        if self.action != UnoAction.NONE:
            return f"{color} {ACTION_NAMES[self.action]}"
        return f"{color} {self.number}"

    def value(self, context: GameContext | None = None) -> int:
        """Scoring value when left in a losing hand."""
        if self.action in (UnoAction.WILD, UnoAction.WILD_DRAW_FOUR):
            return 50
        if self.action != UnoAction.NONE:
            return 20
        return self.number or 0

    def __str__(self) -> str:
        return self.label


Card = Union[BlackjackCard, PokerCard, UnoCard]

# Serialized form of any card, resolved by the `kind` tag
AnyCard = Annotated[Card, Field(discriminator="kind")]

CardFactory = Callable[[], list]


def create_blackjack_deck() -> list[BlackjackCard]:
    """Create the full 52-card house-dealer deck."""
    return [BlackjackCard(suit=suit, rank=rank) for suit in Suit for rank in Rank]


def create_poker_deck() -> list[PokerCard]:
    """Create the full 52-card ranked deck."""
    return [PokerCard(suit=suit, rank=rank) for suit in Suit for rank in Rank]


def create_uno_deck() -> list[UnoCard]:
    """Create the full 108-card color/action deck."""
    cards: list[UnoCard] = []

    for color in PLAYABLE_COLORS:
        # One zero, two of every other number
        cards.append(UnoCard(color=color, number=0))
        for number in range(1, 10):
            cards.extend(UnoCard(color=color, number=number) for _ in range(2))

        for action in (UnoAction.SKIP, UnoAction.REVERSE, UnoAction.DRAW_TWO):
            cards.extend(UnoCard(color=color, action=action) for _ in range(2))

    for _ in range(4):
        cards.append(UnoCard(color=UnoColor.WILD, action=UnoAction.WILD))
        cards.append(UnoCard(color=UnoColor.WILD, action=UnoAction.WILD_DRAW_FOUR))

    return cards
