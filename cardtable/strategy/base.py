"""Base strategy class for automated seats.

Defines the interface that all seat strategies must implement.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from cardtable.game.engine import Game
from cardtable.models.card import Card, UnoColor
from cardtable.models.player import Player


class Action(str, Enum):
    """Turn action a strategy can choose."""

    HIT = "hit"
    STAND = "stand"
    PLAY = "play"
    DRAW = "draw"
    CHECK = "check"
    FOLD = "fold"


@dataclass
class Decision:
    """Chosen action, with the card and wild color for plays."""

    action: Action
    card: Card | None = None
    color: UnoColor | None = None


class Strategy(ABC):
    """Abstract base class for seat strategies.

    A strategy looks at the game only through what its player may see.
    """

    @abstractmethod
    def decide(self, player: Player, game: Game) -> Decision:
        """Choose the next action for `player`.

        Args:
            player: Seat whose turn it is
            game: Game in progress

        Returns:
            Decision to apply
        """
        pass
