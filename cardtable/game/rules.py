"""Rules contract shared by every variant."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from cardtable.models.card import Card
from cardtable.models.game_state import GamePhase
from cardtable.models.player import Player, PlayerState

if TYPE_CHECKING:
    from .context import GameContext

# Legal transitions of the generic lifecycle. Betting is optional.
DEFAULT_TRANSITIONS: dict[GamePhase, frozenset[GamePhase]] = {
    GamePhase.SETUP: frozenset({GamePhase.DEALING}),
    GamePhase.DEALING: frozenset({GamePhase.BETTING, GamePhase.PLAYING}),
    GamePhase.BETTING: frozenset({GamePhase.PLAYING}),
    GamePhase.PLAYING: frozenset({GamePhase.SCORING}),
    GamePhase.SCORING: frozenset({GamePhase.GAME_OVER}),
    GamePhase.GAME_OVER: frozenset(),
}


class GameRules(ABC):
    """Legality checks, scoring and winner selection for one variant.

    Every method is a pure query over the context it is given.
    """

    min_players: int = 2
    max_players: int = 4
    initial_hand_size: int = 5

    def can_player_act(self, player: Player, context: GameContext) -> bool:
        """Whether `player` may take a turn action now."""
        current = context.current_player
        if current is None or current.player_id != player.player_id:
            return False
        return player.state == PlayerState.PLAYING

    def is_valid_turn(self, player: Player, context: GameContext) -> bool:
        return context.state.phase == GamePhase.PLAYING and self.can_player_act(
            player, context
        )

    @abstractmethod
    def is_valid_move(self, player: Player, card: Card, context: GameContext) -> bool:
        """Whether `player` may play `card` onto the table."""

    def is_valid_play(self, player: Player, card: Card, context: GameContext) -> bool:
        """Full legality of a card play: a valid turn, a held card, a valid move."""
        if not self.is_valid_turn(player, context):
            return False
        if card not in player.hand:
            return False
        return self.is_valid_move(player, card, context)

    def can_transition_state(
        self, from_phase: GamePhase, to_phase: GamePhase, context: GameContext
    ) -> bool:
        return to_phase in DEFAULT_TRANSITIONS[from_phase]

    @abstractmethod
    def is_game_over(self, context: GameContext) -> bool:
        """Whether the game has reached its end condition."""

    @abstractmethod
    def calculate_score(self, player: Player, context: GameContext) -> int:
        """Score of `player` as it stands."""

    def determine_winners(self, players: list[Player], context: GameContext) -> list[Player]:
        """Players with the highest score (all of them on a tie)."""
        if not players:
            return []
        scores = {p.player_id: self.calculate_score(p, context) for p in players}
        best = max(scores.values())
        return [p for p in players if scores[p.player_id] == best]
