"""Game result models."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .player import Player


class HandOutcome(str, Enum):
    """Outcome of one player's hand against the dealer."""

    WIN = "win"
    LOSS = "loss"
    PUSH = "push"
    BUST = "bust"


class BlackjackSettlement(BaseModel):
    """Per-seat outcomes of a house-dealer round.

    `outcomes` is keyed by player id and excludes the dealer. With no
    winners and `dealer_bust` False the house swept the table.
    """

    kind: Literal["blackjack"] = "blackjack"
    outcomes: dict[str, HandOutcome] = Field(default_factory=dict)
    dealer_total: int = 0
    dealer_bust: bool = False

    @property
    def house_sweep(self) -> bool:
        return not self.dealer_bust and HandOutcome.WIN not in self.outcomes.values()


class UnoSettlement(BaseModel):
    """Points earned by each player who emptied their hand."""

    kind: Literal["uno"] = "uno"
    winner_points: dict[str, int] = Field(default_factory=dict)


class PokerSettlement(BaseModel):
    """Showdown hand description per player still in the hand."""

    kind: Literal["poker"] = "poker"
    hands: dict[str, str] = Field(default_factory=dict)


Settlement = Annotated[
    Union[BlackjackSettlement, UnoSettlement, PokerSettlement],
    Field(discriminator="kind"),
]


class GameResult(BaseModel):
    """Winners, losers and scores of a finished game."""

    winners: list[Player] = Field(default_factory=list)
    losers: list[Player] = Field(default_factory=list)
    scores: dict[str, int] = Field(default_factory=dict)  # player_id -> score
    settlement: Settlement | None = None

    @property
    def winner_ids(self) -> list[str]:
        return [p.player_id for p in self.winners]
