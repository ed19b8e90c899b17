"""Point-in-time capture of a game session."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from .card import AnyCard
from .game_state import GamePhase, GameType, utcnow
from .player import Player
from .table import TableState


class GameSnapshot(BaseModel):
    """Everything needed to restore a session.

    Players are deep copies, so a snapshot never shares mutable state with
    the live game.
    """

    snapshot_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    game_id: str
    game_type: GameType
    phase: GamePhase
    current_player_index: int
    clockwise: bool
    turn_number: int = 0
    players: list[Player]
    deck: list[AnyCard]
    discard_pile: list[AnyCard] = Field(default_factory=list)
    table: TableState | None = None
    created_at: datetime = Field(default_factory=utcnow)
