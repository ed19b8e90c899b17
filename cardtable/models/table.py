"""Variant-specific table state carried by the game state."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .card import PokerCard, UnoColor


class BlackjackTable(BaseModel):
    """House-dealer table."""

    kind: Literal["blackjack"] = "blackjack"
    dealer_revealed: bool = False


class UnoTable(BaseModel):
    """Color/action table. The top card is the top of the discard pile."""

    kind: Literal["uno"] = "uno"
    current_color: UnoColor | None = None  # None: any color may follow


class PokerTable(BaseModel):
    """Community-card table."""

    kind: Literal["poker"] = "poker"
    community_cards: list[PokerCard] = Field(default_factory=list)
    acted: list[str] = Field(default_factory=list)  # Player ids done on this street


TableState = Annotated[
    Union[BlackjackTable, UnoTable, PokerTable],
    Field(discriminator="kind"),
]
