"""Game lifecycle, rules and evaluation contracts."""

from .context import CardEffectHandler, GameContext
from .engine import Game
from .evaluator import HandEvaluator
from .rules import DEFAULT_TRANSITIONS, GameRules

__all__ = [
    "CardEffectHandler",
    "DEFAULT_TRANSITIONS",
    "Game",
    "GameContext",
    "GameRules",
    "HandEvaluator",
]
