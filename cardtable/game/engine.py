"""Game lifecycle engine."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Sequence

from cardtable.errors import InvalidConfigurationError, InvalidStateError
from cardtable.models.card import Card
from cardtable.models.game_state import GamePhase, GameState, GameType
from cardtable.models.hand import HandRank
from cardtable.models.player import Player, PlayerState
from cardtable.models.result import GameResult
from cardtable.models.snapshot import GameSnapshot
from cardtable.models.values import GameOptions

from .context import GameContext
from .evaluator import HandEvaluator
from .rules import GameRules

if TYPE_CHECKING:
    from cardtable.logging import GameLogger

logger = logging.getLogger(__name__)


class Game(ABC):
    """Lifecycle of one game session.

    The engine enforces entry preconditions of each lifecycle operation and
    leaves the flow inside a round (dealing, turns, phase changes) to the
    concrete variant. Every variant pairs the engine with its own
    `HandEvaluator` and `GameRules`.
    """

    game_type: GameType

    def __init__(
        self,
        context: GameContext,
        evaluator: HandEvaluator,
        rules: GameRules,
        options: GameOptions,
        game_logger: GameLogger | None = None,
    ):
        """Initialize game.

        Args:
            context: Session state, deck and discard pile
            evaluator: Hand evaluator for this variant
            rules: Rules for this variant
            options: Validated table options
            game_logger: GameLogger instance for detailed logging
        """
        self.context = context
        self.evaluator = evaluator
        self.rules = rules
        self.options = options
        self.game_logger = game_logger
        self.game_number = 0

    @property
    def state(self) -> GameState:
        return self.context.state

    @property
    def phase(self) -> GamePhase:
        return self.context.state.phase

    @property
    def players(self) -> list[Player]:
        return self.context.players

    @property
    def player_bounds(self) -> tuple[int, int]:
        """Seat count range allowed by both the options and the rules."""
        low = max(self.options.min_players, self.rules.min_players)
        high = min(self.options.max_players, self.rules.max_players)
        return low, high

    def initialize(self, players: Sequence[Player]) -> None:
        """Seat players and prepare a fresh deck.

        Args:
            players: Players in seating order

        Raises:
            InvalidConfigurationError: If the player count is out of bounds.
                Nothing is mutated in that case.
        """
        low, high = self.player_bounds
        if not low <= len(players) <= high:
            logger.warning(
                f"Refusing to seat {len(players)} players (allowed {low}-{high})"
            )
            raise InvalidConfigurationError(
                f"{self.game_type.value} needs {low} to {high} players, "
                f"got {len(players)}"
            )

        self.context.deck.reset()
        self.context.discard_pile.clear()
        for player in players:
            player.clear_hand()
        self.context.set_players(players)
        self.context.set_table(None)
        self.context.set_phase(GamePhase.SETUP)
        self.context.set_current_player(self.players[0])
        self._initialize_game_state()

        logger.info(
            f"Initialized {self.game_type.value} with "
            f"{', '.join(p.name for p in self.players)}"
        )

    def _initialize_game_state(self) -> None:
        """Seed per-player state before the first deal."""
        for player in self.players:
            player.points = self.options.initial_points
            player.state = PlayerState.PLAYING

    def start_game(self) -> None:
        """Deal the opening hands and set up the first turn.

        Raises:
            InvalidStateError: If the game is not in Setup or nobody is seated.
        """
        self._require_phase(GamePhase.SETUP)
        if not self.players:
            raise InvalidStateError("No players are seated; call initialize first")
        self.game_number += 1
        self._deal_initial_cards()
        self._start_first_turn()

        logger.info(f"Game {self.game_number} started ({self.game_type.value})")
        if self.game_logger:
            self.game_logger.log_game_start(
                self.game_number, self.game_type, self.players, self.context.current_player
            )

    @abstractmethod
    def _deal_initial_cards(self) -> None:
        """Deal the opening hands."""

    def _start_first_turn(self) -> None:
        self.context.set_current_player(self.players[0])

    def end_game(self) -> GameResult | None:
        """Close the session.

        If the game reached its end condition the result is computed and
        winners and losers are marked before the cards are collected.
        Otherwise the session is abandoned with no result.

        Returns:
            GameResult, or None for an abandoned game

        Raises:
            InvalidStateError: If the game is already over.
        """
        if self.phase == GamePhase.GAME_OVER:
            logger.warning("end_game called on a finished game")
            raise InvalidStateError("Game is already over")

        result = None
        if self.phase != GamePhase.SETUP and self.is_game_over():
            result = self.get_game_result()
            self._apply_result(result)
        else:
            logger.info(f"Game abandoned in phase {self.phase.value}")

        self._cleanup_game()
        self.context.set_phase(GamePhase.GAME_OVER)

        if result is not None:
            names = ", ".join(p.name for p in result.winners) or "none"
            logger.info(f"Game {self.game_number} over. Winners: {names}")
            if self.game_logger:
                self.game_logger.log_game_end(self.game_number, result)
        return result

    def _apply_result(self, result: GameResult) -> None:
        winners = set(result.winner_ids)
        losers = {p.player_id for p in result.losers}
        for player in self.players:
            if player.player_id in winners:
                player.state = PlayerState.WON
            elif player.player_id in losers:
                player.state = PlayerState.LOST
            else:
                player.state = PlayerState.WAITING

    def _cleanup_game(self) -> None:
        """Collect every held card onto the discard pile."""
        for player in self.players:
            self.context.discard(player.clear_hand())

    def is_game_over(self) -> bool:
        """Poll the rules' end condition. Nothing is over before the deal."""
        if self.phase == GamePhase.GAME_OVER:
            return True
        if self.phase == GamePhase.SETUP:
            return False
        return self.rules.is_game_over(self.context)

    def get_game_result(self) -> GameResult:
        """Winners, losers and scores as they stand."""
        winners = self.rules.determine_winners(self.players, self.context)
        winner_ids = {p.player_id for p in winners}
        return GameResult(
            winners=winners,
            losers=[p for p in self.players if p.player_id not in winner_ids],
            scores=self._scores(),
        )

    def _scores(self) -> dict[str, int]:
        return {
            p.player_id: self.rules.calculate_score(p, self.context)
            for p in self.players
        }

    def transition_to(self, phase: GamePhase) -> None:
        """Move to `phase` if the rules allow it.

        Raises:
            InvalidStateError: If the transition is not legal for this variant.
        """
        current = self.phase
        if not self.rules.can_transition_state(current, phase, self.context):
            logger.warning(f"Illegal transition {current.value} -> {phase.value}")
            raise InvalidStateError(
                f"Cannot move from {current.value} to {phase.value}"
            )
        self.context.set_phase(phase)

    def evaluate_player(self, player: Player, viewer: Player | None = None) -> HandRank:
        """Evaluate the part of a player's hand `viewer` can see.

        Args:
            player: Hand owner
            viewer: Who is asking. None evaluates the full hand.
        """
        return self.evaluator.evaluate_hand(player.visible_cards(viewer), self.context)

    def snapshot(self) -> GameSnapshot:
        return self.context.create_snapshot()

    def restore(self, snapshot: GameSnapshot) -> None:
        self.context.restore_snapshot(snapshot)

    def _require_phase(self, *phases: GamePhase) -> None:
        if self.phase not in phases:
            expected = " or ".join(p.value for p in phases)
            raise InvalidStateError(
                f"Operation requires phase {expected}, game is in {self.phase.value}"
            )

    def _log_turn(self, player: Player, action: str, cards: Sequence[Card] = ()) -> None:
        if self.game_logger:
            self.game_logger.log_turn(
                self.game_number,
                self.state.turn_number,
                player,
                action,
                cards,
                self.players,
            )

    def _log_special(
        self,
        event: str,
        player: Player | None = None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        if self.game_logger:
            self.game_logger.log_special(
                self.game_number, self.state.turn_number, event, player, detail
            )
