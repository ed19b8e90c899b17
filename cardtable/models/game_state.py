"""Game state models."""

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from .player import Player
from .table import TableState


class GameType(str, Enum):
    """Variant tag selected when a session is created."""

    BLACKJACK = "blackjack"
    UNO = "uno"
    POKER = "poker"


class GamePhase(str, Enum):
    """Lifecycle phase."""

    SETUP = "setup"
    DEALING = "dealing"
    BETTING = "betting"
    PLAYING = "playing"
    SCORING = "scoring"
    GAME_OVER = "game_over"


# Declaration order is the forward direction of the lifecycle
PHASE_ORDER = list(GamePhase)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GameState(BaseModel):
    """Mutable per-session state.

    `players` is in seating order. `current_index` always points into
    `players` once players are set.
    """

    game_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    game_type: GameType
    phase: GamePhase = GamePhase.SETUP
    players: list[Player] = Field(default_factory=list)
    current_index: int = 0
    clockwise: bool = True
    turn_number: int = 0
    last_update: datetime = Field(default_factory=utcnow)
    table: TableState | None = None

    @property
    def current_player(self) -> Player | None:
        """Player whose turn it is, or None before players are seated."""
        if not self.players:
            return None
        return self.players[self.current_index]

    def seat_of(self, player: Player) -> int:
        """Seat index of a player (matched by id).

        Raises:
            ValueError: If the player is not seated.
        """
        for i, seated in enumerate(self.players):
            if seated.player_id == player.player_id:
                return i
        raise ValueError(f"{player.name} is not seated at this table")

    def touch(self) -> None:
        """Record a mutation."""
        self.last_update = utcnow()

    def __str__(self) -> str:
        current = self.current_player
        turn = f", {current.name}'s turn" if current else ""
        direction = "" if self.clockwise else " [REVERSED]"
        return f"{self.game_type.value} {self.phase.value}{turn}{direction}"
