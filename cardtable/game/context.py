"""Per-session game context."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Protocol

from cardtable.errors import InvalidStateError
from cardtable.models.card import Card
from cardtable.models.deck import Deck
from cardtable.models.game_state import GamePhase, GameState, GameType
from cardtable.models.player import Player
from cardtable.models.snapshot import GameSnapshot

if TYPE_CHECKING:
    from cardtable.models.table import TableState

logger = logging.getLogger(__name__)


class CardEffectHandler(Protocol):
    """Applies the side effects of a played card."""

    def handle_card_played(self, card: Card, context: GameContext) -> None: ...


class GameContext:
    """Owns the mutable state of one game session.

    Rules and evaluators receive the context explicitly; there is no shared
    global instance. The deck, the players' hands and the discard pile
    together hold every card exactly once.
    """

    def __init__(
        self,
        game_type: GameType,
        deck: Deck,
        effect_handler: CardEffectHandler | None = None,
    ):
        """Initialize context.

        Args:
            game_type: Variant tag for this session
            deck: Draw pile owned by this session
            effect_handler: Applies card effects on play (variant specific)
        """
        self.state = GameState(game_type=game_type)
        self.deck = deck
        self.effect_handler = effect_handler
        self.discard_pile: list[Card] = []

    @property
    def players(self) -> list[Player]:
        return self.state.players

    @property
    def current_player(self) -> Player | None:
        return self.state.current_player

    @property
    def table(self) -> TableState | None:
        return self.state.table

    @property
    def top_card(self) -> Card | None:
        """Top of the discard pile."""
        return self.discard_pile[-1] if self.discard_pile else None

    def set_phase(self, phase: GamePhase) -> None:
        """Set the lifecycle phase without a legality check.

        Rule-checked transitions go through `Game.transition_to`.
        """
        if phase != self.state.phase:
            logger.debug(f"Phase {self.state.phase.value} -> {phase.value}")
        self.state.phase = phase
        self.state.touch()

    def set_players(self, players: Iterable[Player]) -> None:
        """Replace the seated players and reset turn bookkeeping."""
        self.state.players = list(players)
        self.state.current_index = 0
        self.state.clockwise = True
        self.state.turn_number = 0
        self.state.touch()

    def set_table(self, table: TableState | None) -> None:
        self.state.table = table
        self.state.touch()

    def set_current_player(self, player: Player) -> None:
        """Hand the turn to a seated player.

        Raises:
            ValueError: If the player is not seated.
        """
        self.state.current_index = self.state.seat_of(player)
        self.state.touch()

    def _next_index(self) -> int:
        step = 1 if self.state.clockwise else -1
        return (self.state.current_index + step) % len(self.state.players)

    def peek_next_player(self) -> Player:
        """Player who would act after the current one."""
        if not self.state.players:
            raise InvalidStateError("No players are seated")
        return self.state.players[self._next_index()]

    def advance_next_player(self) -> Player:
        """Pass the turn in the current play direction."""
        if not self.state.players:
            raise InvalidStateError("No players are seated")
        self.state.current_index = self._next_index()
        self.state.turn_number += 1
        self.state.touch()
        return self.state.players[self.state.current_index]

    def reverse_direction(self) -> None:
        self.state.clockwise = not self.state.clockwise
        self.state.touch()

    def deal_cards(self, player: Player, count: int, face_up: bool = True) -> list[Card]:
        """Move `count` cards from the deck into a player's hand."""
        cards = self.deck.draw_many(count)
        for card in cards:
            player.add_card(card, face_up=face_up)
        self.state.touch()
        return cards

    def play_card(self, player: Player, card: Card) -> None:
        """Move a card from a hand to the discard pile and apply its effect."""
        played = player.remove_card(card)
        self.discard_pile.append(played)
        self.state.touch()
        if self.effect_handler is not None:
            self.effect_handler.handle_card_played(played, self)

    def discard(self, cards: Iterable[Card]) -> None:
        self.discard_pile.extend(cards)
        self.state.touch()

    def create_snapshot(self) -> GameSnapshot:
        """Capture the session so it can be restored later."""
        state = self.state
        return GameSnapshot(
            game_id=state.game_id,
            game_type=state.game_type,
            phase=state.phase,
            current_player_index=state.current_index,
            clockwise=state.clockwise,
            turn_number=state.turn_number,
            players=[p.model_copy(deep=True) for p in state.players],
            deck=list(self.deck.cards),
            discard_pile=list(self.discard_pile),
            table=state.table.model_copy(deep=True) if state.table else None,
        )

    def restore_snapshot(self, snapshot: GameSnapshot) -> None:
        """Replace the session state with a snapshot.

        Raises:
            InvalidStateError: If the snapshot belongs to another variant or
                its current-player index does not point at a seated player.
        """
        if snapshot.game_type != self.state.game_type:
            raise InvalidStateError(
                f"Cannot restore a {snapshot.game_type.value} snapshot "
                f"into a {self.state.game_type.value} game"
            )
        if snapshot.players and not 0 <= snapshot.current_player_index < len(snapshot.players):
            raise InvalidStateError(
                f"Snapshot current player index {snapshot.current_player_index} "
                f"is out of range for {len(snapshot.players)} players"
            )

        self.state = GameState(
            game_id=snapshot.game_id,
            game_type=snapshot.game_type,
            phase=snapshot.phase,
            players=[p.model_copy(deep=True) for p in snapshot.players],
            current_index=snapshot.current_player_index if snapshot.players else 0,
            clockwise=snapshot.clockwise,
            turn_number=snapshot.turn_number,
            table=snapshot.table.model_copy(deep=True) if snapshot.table else None,
        )
        self.deck.restore(snapshot.deck)
        self.discard_pile = list(snapshot.discard_pile)
        logger.info(
            f"Restored {snapshot.game_type.value} game {snapshot.game_id} "
            f"in phase {snapshot.phase.value}"
        )
