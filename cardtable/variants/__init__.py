"""Concrete games."""

from .blackjack import (
    DEALER_STAND_VALUE,
    BlackjackGame,
    BlackjackHandEvaluator,
    BlackjackRules,
    create_blackjack_game,
)
from .poker import PokerGame, PokerHandEvaluator, PokerRules, create_poker_game
from .uno import (
    UnoEffectHandler,
    UnoGame,
    UnoHandEvaluator,
    UnoRules,
    create_uno_game,
)

__all__ = [
    "DEALER_STAND_VALUE",
    "BlackjackGame",
    "BlackjackHandEvaluator",
    "BlackjackRules",
    "create_blackjack_game",
    "PokerGame",
    "PokerHandEvaluator",
    "PokerRules",
    "create_poker_game",
    "UnoEffectHandler",
    "UnoGame",
    "UnoHandEvaluator",
    "UnoRules",
    "create_uno_game",
]
