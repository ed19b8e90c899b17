"""Value types and game options.

All of these validate at construction time; an out-of-range value never
reaches the game.
"""

from dataclasses import dataclass
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, field_validator, model_validator


@dataclass(frozen=True, order=True)
class Points:
    """Non-negative point total."""

    value: int = 0

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Points cannot be negative")

    def __add__(self, other: "Points") -> "Points":
        return Points(self.value + other.value)

    def __sub__(self, other: "Points") -> "Points":
        # Subtraction floors at zero instead of failing
        return Points(max(0, self.value - other.value))

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True, order=True)
class BetAmount:
    """Strictly positive bet."""

    value: int = 1

    def __post_init__(self) -> None:
        if self.value <= 0:
            raise ValueError("Bet amount must be positive")

    def __add__(self, other: "BetAmount") -> "BetAmount":
        return BetAmount(self.value + other.value)

    def __int__(self) -> int:
        return self.value


class BlackjackOptions(BaseModel, frozen=True):
    """House-dealer table options."""

    kind: Literal["blackjack"] = "blackjack"
    # When False, a player's five-card charlie only beats a dealer charlie
    # on a higher total
    charlie_beats_dealer_charlie: bool = False


class UnoOptions(BaseModel, frozen=True):
    """Color/action table options."""

    kind: Literal["uno"] = "uno"
    recycle_discards: bool = True


class PokerOptions(BaseModel, frozen=True):
    """Community-card table options."""

    kind: Literal["poker"] = "poker"
    burn_cards: bool = True


VariantOptions = Annotated[
    Union[BlackjackOptions, UnoOptions, PokerOptions],
    Field(discriminator="kind"),
]


class GameOptions(BaseModel, frozen=True):
    """Immutable table configuration."""

    min_players: int
    max_players: int
    initial_points: Points = Points(0)
    min_bet: BetAmount = BetAmount(1)
    max_bet: BetAmount = BetAmount(1)
    variant: VariantOptions | None = None

    @field_validator("initial_points", mode="before")
    @classmethod
    def _coerce_points(cls, v: Any) -> Any:
        if isinstance(v, int):
            return Points(v)
        return v

    @field_validator("min_bet", "max_bet", mode="before")
    @classmethod
    def _coerce_bet(cls, v: Any) -> Any:
        if isinstance(v, int):
            return BetAmount(v)
        return v

    @model_validator(mode="after")
    def _check_bounds(self) -> "GameOptions":
        if self.min_players <= 0:
            raise ValueError("Minimum players must be positive")
        if self.max_players < self.min_players:
            raise ValueError(
                "Maximum players must be greater than or equal to minimum players"
            )
        if self.max_bet < self.min_bet:
            raise ValueError(
                "Maximum bet must be greater than or equal to minimum bet"
            )
        return self
