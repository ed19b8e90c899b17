"""Formatters for game log output."""

from typing import Sequence

from cardtable.models.card import Card, Rank, Suit, UnoAction, UnoCard, UnoColor
from cardtable.models.player import Player

# Suit codes for log output
SUIT_CODES: dict[Suit, str] = {
    Suit.SPADES: "S",
    Suit.HEARTS: "H",
    Suit.DIAMONDS: "D",
    Suit.CLUBS: "C",
}

RANK_CODES: dict[Rank, str] = {
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

COLOR_CODES: dict[UnoColor, str] = {
    UnoColor.RED: "R",
    UnoColor.BLUE: "B",
    UnoColor.GREEN: "G",
    UnoColor.YELLOW: "Y",
    UnoColor.WILD: "W",
}

ACTION_CODES: dict[UnoAction, str] = {
    UnoAction.SKIP: "S",
    UnoAction.REVERSE: "R",
    UnoAction.DRAW_TWO: "D2",
    UnoAction.WILD: "",
    UnoAction.WILD_DRAW_FOUR: "4",
}


def format_card(card: Card) -> str:
    """Format a single card to string.

    Args:
        card: Card to format.

    Returns:
        Formatted string (e.g., "SA" for the ace of spades, "R5" for a red
        five, "W4" for a wild draw four).
    """
    if isinstance(card, UnoCard):
        if card.action == UnoAction.NONE:
            return f"{COLOR_CODES[card.color]}{card.number}"
        return f"{COLOR_CODES[card.color]}{ACTION_CODES[card.action]}"
    return f"{SUIT_CODES[card.suit]}{RANK_CODES[card.rank]}"


def format_cards(cards: Sequence[Card]) -> str:
    """Format cards to comma-separated string.

    Returns:
        Comma-separated card strings (e.g., "SA,HK"). Empty string if no
        cards.
    """
    return ",".join(format_card(c) for c in cards)


def format_hands(players: Sequence[Player]) -> dict[str, str]:
    """Format all players' full hands, keyed by player id."""
    return {p.player_id: format_cards(p.hand) for p in players}
