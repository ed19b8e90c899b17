"""Strategy module for automated seats."""

from cardtable.strategy.base import Action, Decision, Strategy
from cardtable.strategy.simple import (
    CheckOrFoldStrategy,
    FirstPlayableStrategy,
    ThresholdStrategy,
)

__all__ = [
    "Action",
    "CheckOrFoldStrategy",
    "Decision",
    "FirstPlayableStrategy",
    "Strategy",
    "ThresholdStrategy",
]
