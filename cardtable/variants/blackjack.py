"""House-dealer variant (blackjack).

The dealer always sits in the last seat. Players act in seating order,
then the dealer reveals and draws until standing on 17.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Sequence

from cardtable.errors import InvalidMoveError
from cardtable.game.context import GameContext
from cardtable.game.engine import Game
from cardtable.game.evaluator import HandEvaluator
from cardtable.game.rules import GameRules
from cardtable.models.card import Card, Rank, create_blackjack_deck
from cardtable.models.deck import Deck
from cardtable.models.game_state import PHASE_ORDER, GamePhase, GameType
from cardtable.models.hand import (
    BLACKJACK,
    FIVE_CARD_CHARLIE_SIZE,
    BlackjackHandDetail,
    HandRank,
)
from cardtable.models.player import Player, PlayerState
from cardtable.models.result import BlackjackSettlement, GameResult, HandOutcome
from cardtable.models.table import BlackjackTable
from cardtable.models.values import BlackjackOptions, GameOptions

if TYPE_CHECKING:
    from cardtable.logging import GameLogger

logger = logging.getLogger(__name__)

DEALER_STAND_VALUE = 17
SOFT_ACE_ADJUSTMENT = 10  # Ace counted as 1 instead of 11


class BlackjackHandEvaluator(HandEvaluator):
    """Totals a hand with soft/hard ace handling."""

    def evaluate_hand(
        self, cards: Sequence[Card], context: GameContext | None = None
    ) -> HandRank:
        total = 0
        soft_aces = 0
        for card in cards:
            total += card.value(context)
            if getattr(card, "rank", None) == Rank.ACE:
                soft_aces += 1

        # Demote aces from 11 to 1 while the hand would bust
        while total > BLACKJACK and soft_aces > 0:
            total -= SOFT_ACE_ADJUSTMENT
            soft_aces -= 1

        count = len(cards)
        detail = BlackjackHandDetail(
            total=total,
            card_count=count,
            soft=soft_aces > 0,
            is_natural=count == 2 and total == BLACKJACK,
            is_bust=total > BLACKJACK,
            is_five_card_charlie=count == FIVE_CARD_CHARLIE_SIZE and total <= BLACKJACK,
        )

        if detail.is_five_card_charlie:
            description = "5-Card Charlie!"
        elif detail.is_natural:
            description = "Blackjack!"
        elif detail.is_bust:
            description = "Bust"
        else:
            description = f"Total: {total}"

        return HandRank(value=total, description=description, detail=detail)

    def detail(
        self, cards: Sequence[Card], context: GameContext | None = None
    ) -> BlackjackHandDetail:
        """Typed scoring breakdown of a hand."""
        detail = self.evaluate_hand(cards, context).detail
        assert isinstance(detail, BlackjackHandDetail)
        return detail

    def is_valid_hand(
        self, cards: Sequence[Card | None], context: GameContext | None = None
    ) -> bool:
        """Valid if not bust. A five-card charlie is valid even though it
        compares above 21 against the dealer."""
        if not super().is_valid_hand(cards, context):
            return False
        detail = self.detail(cards, context)
        return detail.comparison_value <= BLACKJACK or detail.is_five_card_charlie


class BlackjackRules(GameRules):
    """House-dealer rules. Seat counts include the dealer."""

    min_players = 2
    max_players = 8
    initial_hand_size = 2

    def __init__(
        self,
        evaluator: BlackjackHandEvaluator | None = None,
        options: BlackjackOptions | None = None,
    ):
        self.evaluator = evaluator or BlackjackHandEvaluator()
        self.options = options or BlackjackOptions()

    def _detail(self, player: Player, context: GameContext) -> BlackjackHandDetail:
        return self.evaluator.detail(player.hand, context)

    @staticmethod
    def is_dealer(player: Player, context: GameContext) -> bool:
        players = context.players
        return bool(players) and players[-1].player_id == player.player_id

    def can_player_act(self, player: Player, context: GameContext) -> bool:
        if not super().can_player_act(player, context):
            return False
        if self.is_dealer(player, context):
            return False
        return not self._detail(player, context).is_bust

    def is_valid_move(self, player: Player, card: Card, context: GameContext) -> bool:
        # Cards are only ever received
        return False

    def is_valid_play(self, player: Player, card: Card, context: GameContext) -> bool:
        return False

    def can_transition_state(
        self, from_phase: GamePhase, to_phase: GamePhase, context: GameContext
    ) -> bool:
        return PHASE_ORDER.index(to_phase) > PHASE_ORDER.index(from_phase)

    def is_game_over(self, context: GameContext) -> bool:
        """All players bust, or the dealer stands (17 or more) or busts."""
        players = context.players
        if not players:
            return True

        *seats, dealer = players
        if all(self._detail(p, context).is_bust for p in seats):
            return True
        return self._detail(dealer, context).total >= DEALER_STAND_VALUE

    def calculate_score(self, player: Player, context: GameContext) -> int:
        return self._detail(player, context).total

    def outcome(
        self, hand: BlackjackHandDetail, dealer: BlackjackHandDetail
    ) -> HandOutcome:
        """Settle one player hand against the dealer hand.

        Precedence: bust, five-card charlie, dealer bust, natural, totals.
        """
        if hand.is_bust:
            return HandOutcome.BUST

        if hand.is_five_card_charlie:
            if not dealer.is_five_card_charlie:
                return HandOutcome.WIN
            if self.options.charlie_beats_dealer_charlie:
                return HandOutcome.WIN
            return _compare(hand.total, dealer.total)

        if dealer.is_bust:
            return HandOutcome.WIN

        if hand.is_natural:
            return HandOutcome.PUSH if dealer.is_natural else HandOutcome.WIN

        return _compare(hand.comparison_value, dealer.comparison_value)

    def settle(self, players: list[Player], context: GameContext) -> BlackjackSettlement:
        """Outcome of every non-dealer seat. The dealer is `players[-1]`."""
        if not players:
            return BlackjackSettlement()

        *seats, dealer = players
        dealer_hand = self._detail(dealer, context)
        return BlackjackSettlement(
            outcomes={
                p.player_id: self.outcome(self._detail(p, context), dealer_hand)
                for p in seats
            },
            dealer_total=dealer_hand.total,
            dealer_bust=dealer_hand.is_bust,
        )

    def determine_winners(self, players: list[Player], context: GameContext) -> list[Player]:
        """Players who beat the dealer. The dealer is never a winner."""
        settlement = self.settle(players, context)
        return [
            p for p in players[:-1]
            if settlement.outcomes[p.player_id] == HandOutcome.WIN
        ]


def _compare(player_value: int, dealer_value: int) -> HandOutcome:
    if player_value > dealer_value:
        return HandOutcome.WIN
    if player_value == dealer_value:
        return HandOutcome.PUSH
    return HandOutcome.LOSS


class BlackjackGame(Game):
    """House-dealer game flow."""

    game_type = GameType.BLACKJACK
    rules: BlackjackRules
    evaluator: BlackjackHandEvaluator

    @property
    def dealer(self) -> Player:
        return self.players[-1]

    @property
    def seats(self) -> list[Player]:
        """Non-dealer players in seating order."""
        return self.players[:-1]

    @property
    def table(self) -> BlackjackTable:
        table = self.context.table
        assert isinstance(table, BlackjackTable)
        return table

    def _initialize_game_state(self) -> None:
        super()._initialize_game_state()
        self.context.set_table(BlackjackTable())

    def _deal_initial_cards(self) -> None:
        self.transition_to(GamePhase.DEALING)
        dealer = self.dealer
        for player in self.players:
            for i in range(self.rules.initial_hand_size):
                # Dealer shows only the first card
                face_up = player is not dealer or i == 0
                self.context.deal_cards(player, 1, face_up=face_up)
            logger.debug(f"Dealt {player.name}: {player.hand_labels(viewer=player)}")

    def _start_first_turn(self) -> None:
        self.transition_to(GamePhase.PLAYING)
        self.context.set_current_player(self.players[0])

    def is_game_over(self) -> bool:
        """Over once play has passed to the dealer and the dealer is done."""
        if self.phase == GamePhase.GAME_OVER:
            return True
        if self.phase != GamePhase.SCORING:
            return False
        return super().is_game_over()

    def _require_turn(self, player: Player) -> None:
        if not self.rules.can_player_act(player, self.context):
            logger.warning(f"{player.name} tried to act out of turn")
            raise InvalidMoveError(f"{player.name} cannot act now")

    def hit(self, player: Player) -> HandRank:
        """Draw one face-up card for the acting player.

        A bust or a five-card charlie ends the player's turn.

        Raises:
            InvalidStateError: If the game is not in Playing.
            InvalidMoveError: If the player may not act.
        """
        self._require_phase(GamePhase.PLAYING)
        self._require_turn(player)

        cards = self.context.deal_cards(player, 1)
        rank = self.evaluator.evaluate_hand(player.hand, self.context)
        detail = rank.detail
        assert isinstance(detail, BlackjackHandDetail)
        logger.debug(f"{player.name} hits {cards[0].label}: {rank.description}")
        self._log_turn(player, "hit", cards)

        if detail.is_bust:
            player.state = PlayerState.LOST
            logger.info(f"{player.name} busts with {detail.total}")
            self._log_special("bust", player, {"total": detail.total})
            self._end_turn()
        elif detail.is_five_card_charlie:
            logger.info(f"{player.name} makes a five-card charlie ({detail.total})")
            self._log_special("five_card_charlie", player, {"total": detail.total})
            self._end_turn()
        return rank

    def stand(self, player: Player) -> None:
        """End the acting player's turn.

        Raises:
            InvalidStateError: If the game is not in Playing.
            InvalidMoveError: If the player may not act.
        """
        self._require_phase(GamePhase.PLAYING)
        self._require_turn(player)
        logger.debug(f"{player.name} stands")
        self._log_turn(player, "stand")
        self._end_turn()

    def _end_turn(self) -> None:
        next_player = self.context.advance_next_player()
        if next_player.player_id == self.dealer.player_id:
            self.transition_to(GamePhase.SCORING)

    def play_dealer(self) -> HandRank:
        """Reveal the dealer hand and draw until the game is over.

        Raises:
            InvalidStateError: If play has not reached the dealer.
        """
        self._require_phase(GamePhase.SCORING)
        dealer = self.dealer
        dealer.reveal_hand()
        self.table.dealer_revealed = True
        self.state.touch()
        self._log_special("dealer_reveal", dealer)

        drawn: list[Card] = []
        while not self.rules.is_game_over(self.context):
            drawn.extend(self.context.deal_cards(dealer, 1))
        if drawn:
            self._log_turn(dealer, "dealer_draw", drawn)

        rank = self.evaluator.evaluate_hand(dealer.hand, self.context)
        logger.info(f"Dealer finishes with {rank.description}")
        return rank

    def get_game_result(self) -> GameResult:
        settlement = self.rules.settle(self.players, self.context)
        winners = [
            p for p in self.seats
            if settlement.outcomes[p.player_id] == HandOutcome.WIN
        ]
        losers = [
            p for p in self.seats
            if settlement.outcomes[p.player_id] in (HandOutcome.LOSS, HandOutcome.BUST)
        ]
        if settlement.house_sweep:
            logger.info("House sweeps the table")
        return GameResult(
            winners=winners,
            losers=losers,
            scores=self._scores(),
            settlement=settlement,
        )


def create_blackjack_game(
    options: GameOptions | None = None,
    rng: random.Random | None = None,
    game_logger: GameLogger | None = None,
) -> BlackjackGame:
    """Build a house-dealer game with its own deck and context."""
    options = options or GameOptions(
        min_players=BlackjackRules.min_players,
        max_players=BlackjackRules.max_players,
        variant=BlackjackOptions(),
    )
    variant = options.variant if isinstance(options.variant, BlackjackOptions) else None

    evaluator = BlackjackHandEvaluator()
    rules = BlackjackRules(evaluator, variant)
    context = GameContext(GameType.BLACKJACK, Deck(create_blackjack_deck, rng))
    return BlackjackGame(context, evaluator, rules, options, game_logger)
