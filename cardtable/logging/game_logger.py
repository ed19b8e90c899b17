"""Game logger for detailed game replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence, TextIO

from pydantic import BaseModel

from cardtable.models.card import Card
from cardtable.models.game_state import GameType
from cardtable.models.player import Player
from cardtable.models.result import GameResult

from .formatters import format_cards, format_hands


class GameLogConfig(BaseModel):
    """Configuration for game logging."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


class GameLogger:
    """Logger for detailed game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    Hands are written in full, so the file allows step-by-step replay.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_session_start(self, game_type: GameType, players: Sequence[Player]) -> None:
        """Log session start with player information."""
        self._write({
            "type": "session_start",
            "timestamp": datetime.now().isoformat(),
            "game": game_type.value,
            "players": [
                {"id": p.player_id, "name": p.name}
                for p in players
            ],
        })

    def log_game_start(
        self,
        game_num: int,
        game_type: GameType,
        players: Sequence[Player],
        first_player: Player | None,
    ) -> None:
        """Log game start with initial hands.

        Args:
            game_num: Game number.
            game_type: Variant being played.
            players: Seated players, in seating order.
            first_player: Player who acts first.
        """
        self._write({
            "type": "game_start",
            "game": game_num,
            "variant": game_type.value,
            "hands": format_hands(players),
            "first_player": first_player.player_id if first_player else None,
        })

    def log_turn(
        self,
        game_num: int,
        turn_num: int,
        player: Player,
        action: str,
        cards: Sequence[Card],
        players: Sequence[Player],
    ) -> None:
        """Log a single turn.

        Args:
            game_num: Game number.
            turn_num: Turn number within the game.
            player: Player who took the action.
            action: Variant action name ("hit", "stand", "play", "draw", ...).
            cards: Cards drawn or played (empty if none).
            players: All players, for their hands after the action.
        """
        self._write({
            "type": "turn",
            "game": game_num,
            "turn": turn_num,
            "player": player.player_id,
            "action": action,
            "cards": format_cards(cards),
            "hands": format_hands(players),
        })

    def log_special(
        self,
        game_num: int,
        turn_num: int,
        event: str,
        player: Player | None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        """Log a special event.

        Args:
            game_num: Game number.
            turn_num: Turn number when the event occurred.
            event: Event type (e.g., "bust", "five_card_charlie", "reverse").
            player: Player who triggered the event, None for table events.
            detail: Additional event details.
        """
        record: dict[str, Any] = {
            "type": "special",
            "game": game_num,
            "turn": turn_num,
            "event": event,
            "player": player.player_id if player else None,
        }
        if detail:
            record["detail"] = detail
        self._write(record)

    def log_game_end(self, game_num: int, result: GameResult) -> None:
        """Log game end with results."""
        record: dict[str, Any] = {
            "type": "game_end",
            "game": game_num,
            "winners": result.winner_ids,
            "losers": [p.player_id for p in result.losers],
            "scores": result.scores,
        }
        if result.settlement is not None:
            record["settlement"] = result.settlement.model_dump(mode="json")
        self._write(record)

    def log_session_end(
        self,
        total_games: int,
        tally: dict[str, int],
        ranking: list[str],
    ) -> None:
        """Log session end with final results.

        Args:
            total_games: Total number of games played.
            tally: Player id to games won.
            ranking: Player ids in ranking order (best first).
        """
        self._write({
            "type": "session_end",
            "total_games": total_games,
            "tally": tally,
            "ranking": ranking,
        })
