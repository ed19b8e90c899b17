"""Game models."""

from .card import (
    AnyCard,
    BlackjackCard,
    Card,
    PokerCard,
    Rank,
    Suit,
    UnoAction,
    UnoCard,
    UnoColor,
    create_blackjack_deck,
    create_poker_deck,
    create_uno_deck,
)
from .deck import Deck
from .game_state import GamePhase, GameState, GameType
from .hand import BlackjackHandDetail, HandCategory, HandRank, PokerHandDetail
from .player import HeldCard, Player, PlayerState
from .result import (
    BlackjackSettlement,
    GameResult,
    HandOutcome,
    PokerSettlement,
    UnoSettlement,
)
from .snapshot import GameSnapshot
from .table import BlackjackTable, PokerTable, UnoTable
from .values import (
    BetAmount,
    BlackjackOptions,
    GameOptions,
    PokerOptions,
    Points,
    UnoOptions,
)

__all__ = [
    "AnyCard",
    "BlackjackCard",
    "Card",
    "PokerCard",
    "Rank",
    "Suit",
    "UnoAction",
    "UnoCard",
    "UnoColor",
    "create_blackjack_deck",
    "create_poker_deck",
    "create_uno_deck",
    "Deck",
    "GamePhase",
    "GameState",
    "GameType",
    "BlackjackHandDetail",
    "HandCategory",
    "HandRank",
    "PokerHandDetail",
    "HeldCard",
    "Player",
    "PlayerState",
    "BlackjackSettlement",
    "GameResult",
    "HandOutcome",
    "PokerSettlement",
    "UnoSettlement",
    "GameSnapshot",
    "BlackjackTable",
    "PokerTable",
    "UnoTable",
    "BetAmount",
    "BlackjackOptions",
    "GameOptions",
    "PokerOptions",
    "Points",
    "UnoOptions",
]
