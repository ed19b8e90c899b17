"""Community-card variant (hold'em style showdown, no betting)."""

from __future__ import annotations

import logging
import random
from collections import Counter
from itertools import combinations
from typing import TYPE_CHECKING, Sequence

from cardtable.errors import InvalidMoveError, InvalidStateError
from cardtable.game.context import GameContext
from cardtable.game.engine import Game
from cardtable.game.evaluator import HandEvaluator
from cardtable.game.rules import GameRules
from cardtable.models.card import Card, PokerCard, create_poker_deck
from cardtable.models.deck import Deck
from cardtable.models.game_state import GamePhase, GameType
from cardtable.models.hand import CATEGORY_NAMES, HandCategory, HandRank, PokerHandDetail
from cardtable.models.player import Player, PlayerState
from cardtable.models.result import GameResult, PokerSettlement
from cardtable.models.table import PokerTable
from cardtable.models.values import GameOptions, PokerOptions

if TYPE_CHECKING:
    from cardtable.logging import GameLogger

logger = logging.getLogger(__name__)

HAND_SIZE = 5
BOARD_SIZE = 5
ACE_HIGH = 14
WHEEL = [ACE_HIGH, 5, 4, 3, 2]  # A-2-3-4-5, the five-high straight

# Base for packing category and tiebreakers into one integer (card values < 15)
VALUE_BASE = 15

# Community cards dealt on each street after the hole cards
STREETS = (("flop", 3), ("turn", 1), ("river", 1))


def _poker_table(context: GameContext | None) -> PokerTable | None:
    table = context.table if context else None
    return table if isinstance(table, PokerTable) else None


def _straight_high(values: list[int]) -> int | None:
    """High card of a straight made by five distinct values, if any."""
    distinct = sorted(set(values), reverse=True)
    if len(distinct) != HAND_SIZE:
        return None
    if distinct[0] - distinct[-1] == HAND_SIZE - 1:
        return distinct[0]
    if distinct == WHEEL:
        return 5
    return None


def _classify(cards: Sequence[PokerCard]) -> tuple[HandCategory, tuple[int, ...]]:
    """Category and tiebreakers of up to five cards."""
    values = sorted((c.value() for c in cards), reverse=True)
    counts = Counter(values)
    # Bigger groups first, then higher values
    groups = sorted(counts.items(), key=lambda item: (item[1], item[0]), reverse=True)
    shape = [count for _, count in groups]
    ranked = tuple(value for value, _ in groups)

    full = len(cards) == HAND_SIZE
    is_flush = full and len({c.suit for c in cards}) == 1
    straight = _straight_high(values) if full else None

    if straight and is_flush:
        return HandCategory.STRAIGHT_FLUSH, (straight,)
    if shape[0] == 4:
        return HandCategory.FOUR_OF_A_KIND, ranked
    if shape[:2] == [3, 2]:
        return HandCategory.FULL_HOUSE, ranked
    if is_flush:
        return HandCategory.FLUSH, ranked
    if straight:
        return HandCategory.STRAIGHT, (straight,)
    if shape[0] == 3:
        return HandCategory.THREE_OF_A_KIND, ranked
    if shape[:2] == [2, 2]:
        return HandCategory.TWO_PAIR, ranked
    if shape[0] == 2:
        return HandCategory.ONE_PAIR, ranked
    return HandCategory.HIGH_CARD, ranked


def _encode(category: HandCategory, tiebreakers: tuple[int, ...]) -> int:
    value = int(category)
    for i in range(HAND_SIZE):
        value = value * VALUE_BASE + (tiebreakers[i] if i < len(tiebreakers) else 0)
    return value


class PokerHandEvaluator(HandEvaluator):
    """Ranks the best five-card hand from hole and community cards.

    `cards` are the holder's own cards; the board is taken from the
    context's table, so the same hole cards rank differently street by
    street.
    """

    def evaluate_hand(
        self, cards: Sequence[Card], context: GameContext | None = None
    ) -> HandRank:
        table = _poker_table(context)
        pool = [c for c in cards if isinstance(c, PokerCard)]
        if table:
            pool.extend(table.community_cards)
        if not pool:
            return HandRank(value=0, description="No Cards")

        size = min(HAND_SIZE, len(pool))
        best: tuple[int, HandCategory, tuple[int, ...], tuple[PokerCard, ...]] | None = None
        for combo in combinations(pool, size):
            category, tiebreakers = _classify(combo)
            value = _encode(category, tiebreakers)
            if best is None or value > best[0]:
                best = (value, category, tiebreakers, combo)

        assert best is not None
        value, category, tiebreakers, combo = best
        description = CATEGORY_NAMES[category]
        if category == HandCategory.STRAIGHT_FLUSH and tiebreakers[0] == ACE_HIGH:
            description = "Royal Flush"

        return HandRank(
            value=value,
            description=description,
            detail=PokerHandDetail(
                category=category,
                tiebreakers=tiebreakers,
                best_cards=tuple(sorted(combo, key=lambda c: c.value(), reverse=True)),
            ),
        )

    def is_valid_hand(
        self, cards: Sequence[Card | None], context: GameContext | None = None
    ) -> bool:
        if not super().is_valid_hand(cards, context):
            return False
        return all(isinstance(card, PokerCard) for card in cards)


class PokerRules(GameRules):
    """Showdown rules. Cards are dealt, never played."""

    min_players = 2
    max_players = 10
    initial_hand_size = 2

    def __init__(self, evaluator: PokerHandEvaluator | None = None):
        self.evaluator = evaluator or PokerHandEvaluator()

    @staticmethod
    def active_players(context: GameContext) -> list[Player]:
        return [p for p in context.players if p.state == PlayerState.PLAYING]

    def is_valid_move(self, player: Player, card: Card, context: GameContext) -> bool:
        return False

    def is_game_over(self, context: GameContext) -> bool:
        """Board complete, or at most one player still in the hand."""
        if len(self.active_players(context)) <= 1:
            return True
        table = _poker_table(context)
        return table is not None and len(table.community_cards) >= BOARD_SIZE

    def calculate_score(self, player: Player, context: GameContext) -> int:
        if player.state == PlayerState.FOLDED:
            return 0
        return self.evaluator.evaluate_hand(player.hand, context).value


class PokerGame(Game):
    """Deal, act street by street, show down."""

    game_type = GameType.POKER
    rules: PokerRules

    @property
    def table(self) -> PokerTable:
        table = _poker_table(self.context)
        assert table is not None
        return table

    @property
    def street(self) -> str:
        """Name of the street being played."""
        dealt = len(self.table.community_cards)
        if dealt == 0:
            return "preflop"
        total = 0
        for name, count in STREETS:
            total += count
            if dealt <= total:
                return name
        return "river"

    @property
    def street_complete(self) -> bool:
        """Whether every player still in the hand has acted on this street."""
        acted = set(self.table.acted)
        return all(p.player_id in acted for p in self.rules.active_players(self.context))

    def _initialize_game_state(self) -> None:
        super()._initialize_game_state()
        self.context.set_table(PokerTable())

    def _deal_initial_cards(self) -> None:
        self.transition_to(GamePhase.DEALING)
        for player in self.players:
            self.context.deal_cards(player, self.rules.initial_hand_size, face_up=False)

    def _start_first_turn(self) -> None:
        self.transition_to(GamePhase.PLAYING)
        self.context.set_current_player(self.players[0])

    def _act(self, player: Player, action: str) -> None:
        self._require_phase(GamePhase.PLAYING)
        if not self.rules.can_player_act(player, self.context):
            logger.warning(f"{player.name} tried to {action} out of turn")
            raise InvalidMoveError(f"{player.name} cannot act now")
        if player.player_id in self.table.acted:
            raise InvalidMoveError(f"{player.name} already acted on the {self.street}")

    def check(self, player: Player) -> None:
        """Stay in the hand for this street."""
        self._act(player, "check")
        self.table.acted.append(player.player_id)
        self._log_turn(player, "check")
        self._advance_to_active()

    def fold(self, player: Player) -> None:
        """Leave the hand. A lone remaining player ends the game."""
        self._act(player, "fold")
        player.state = PlayerState.FOLDED
        self.table.acted.append(player.player_id)
        logger.debug(f"{player.name} folds on the {self.street}")
        self._log_turn(player, "fold")

        if len(self.rules.active_players(self.context)) <= 1:
            self._showdown()
            return
        self._advance_to_active()

    def _advance_to_active(self) -> None:
        for _ in range(len(self.players)):
            player = self.context.advance_next_player()
            if player.state == PlayerState.PLAYING:
                return

    def deal_next_street(self) -> list[PokerCard]:
        """Deal the flop, turn or river once everyone has acted.

        Raises:
            InvalidStateError: If not in Playing, the street is still being
                played, or the board is complete.
        """
        self._require_phase(GamePhase.PLAYING)
        if not self.street_complete:
            raise InvalidStateError(f"Players still to act on the {self.street}")

        dealt = len(self.table.community_cards)
        total = 0
        for name, count in STREETS:
            if dealt == total:
                break
            total += count
        else:
            raise InvalidStateError("The board is already complete")

        variant = self.options.variant
        if not isinstance(variant, PokerOptions) or variant.burn_cards:
            self.context.discard([self.context.deck.draw()])

        cards: list[PokerCard] = []
        for card in self.context.deck.draw_many(count):
            assert isinstance(card, PokerCard)
            cards.append(card)
        self.table.community_cards.extend(cards)
        self.table.acted.clear()
        self.state.touch()

        logger.info(f"{name.capitalize()}: {' '.join(c.label for c in cards)}")
        self._log_special("street", None, {"street": name, "cards": [c.label for c in cards]})

        if len(self.table.community_cards) >= BOARD_SIZE:
            self._showdown()
        else:
            first = self.rules.active_players(self.context)[0]
            self.context.set_current_player(first)
        return cards

    def _showdown(self) -> None:
        for player in self.rules.active_players(self.context):
            player.reveal_hand()
        self.transition_to(GamePhase.SCORING)

    def get_game_result(self) -> GameResult:
        result = super().get_game_result()
        result.settlement = PokerSettlement(
            hands={
                p.player_id: self.evaluator.evaluate_hand(p.hand, self.context).description
                for p in self.rules.active_players(self.context)
            }
        )
        return result


def create_poker_game(
    options: GameOptions | None = None,
    rng: random.Random | None = None,
    game_logger: GameLogger | None = None,
) -> PokerGame:
    """Build a community-card game with its own deck and context."""
    options = options or GameOptions(
        min_players=PokerRules.min_players,
        max_players=PokerRules.max_players,
        variant=PokerOptions(),
    )
    evaluator = PokerHandEvaluator()
    rules = PokerRules(evaluator)
    context = GameContext(GameType.POKER, Deck(create_poker_deck, rng))
    return PokerGame(context, evaluator, rules, options, game_logger)
