"""Color/action variant (uno)."""

from __future__ import annotations

import logging
import random
from collections import Counter
from typing import TYPE_CHECKING, Sequence

from cardtable.errors import InvalidMoveError
from cardtable.game.context import GameContext
from cardtable.game.engine import Game
from cardtable.game.evaluator import HandEvaluator
from cardtable.game.rules import GameRules
from cardtable.models.card import (
    PLAYABLE_COLORS,
    Card,
    UnoAction,
    UnoCard,
    UnoColor,
    create_uno_deck,
)
from cardtable.models.deck import Deck
from cardtable.models.game_state import GamePhase, GameType
from cardtable.models.hand import HandRank
from cardtable.models.player import Player
from cardtable.models.result import GameResult, UnoSettlement
from cardtable.models.table import UnoTable
from cardtable.models.values import GameOptions, UnoOptions

if TYPE_CHECKING:
    from cardtable.logging import GameLogger

logger = logging.getLogger(__name__)

# Cards the next player draws for each penalty action
DRAW_PENALTIES = {
    UnoAction.DRAW_TWO: 2,
    UnoAction.WILD_DRAW_FOUR: 4,
}


def _uno_table(context: GameContext) -> UnoTable | None:
    table = context.table
    return table if isinstance(table, UnoTable) else None


class UnoRules(GameRules):
    """Matching rules: color, number or action, wilds anytime."""

    min_players = 2
    max_players = 10
    initial_hand_size = 7

    def is_valid_move(self, player: Player, card: Card, context: GameContext) -> bool:
        if not isinstance(card, UnoCard):
            return False
        if card.is_wild:
            return True

        top = context.top_card
        table = _uno_table(context)
        color = table.current_color if table else None
        if not isinstance(top, UnoCard) or color is None:
            return True

        if card.color == color:
            return True
        if card.number is not None and card.number == top.number:
            return True
        return card.action != UnoAction.NONE and card.action == top.action

    def is_game_over(self, context: GameContext) -> bool:
        return any(not p.hand for p in context.players)

    def calculate_score(self, player: Player, context: GameContext) -> int:
        """Points earned: the value left in every other hand, for a player
        who went out. Zero otherwise."""
        if player.hand:
            return 0
        return sum(
            card.value(context)
            for other in context.players
            if other.player_id != player.player_id
            for card in other.hand
        )

    def determine_winners(self, players: list[Player], context: GameContext) -> list[Player]:
        return [p for p in players if not p.hand]


class UnoHandEvaluator(HandEvaluator):
    """Sums card values; playable cards come from the rules."""

    def __init__(self, rules: UnoRules | None = None):
        self.rules = rules or UnoRules()

    def evaluate_hand(
        self, cards: Sequence[Card], context: GameContext | None = None
    ) -> HandRank:
        total = sum(card.value(context) for card in cards)
        return HandRank(value=total, description=f"Total Value: {total}")

    def is_valid_hand(
        self, cards: Sequence[Card | None], context: GameContext | None = None
    ) -> bool:
        if not super().is_valid_hand(cards, context):
            return False
        return all(isinstance(card, UnoCard) for card in cards)

    def get_playable_cards(
        self, cards: Sequence[Card], context: GameContext | None = None
    ) -> list[Card]:
        if context is None or context.top_card is None:
            return list(cards)
        player = context.current_player
        assert player is not None
        return [c for c in cards if self.rules.is_valid_move(player, c, context)]


class UnoEffectHandler:
    """Applies skip, reverse and draw penalties.

    Effects run right after the card reaches the discard pile, while the
    player who played it is still current. The game then passes the turn
    once more, so advancing here skips the next seat.
    """

    def __init__(self, recycle_discards: bool = True):
        self.recycle_discards = recycle_discards

    def handle_card_played(self, card: Card, context: GameContext) -> None:
        if not isinstance(card, UnoCard):
            return

        if card.action == UnoAction.SKIP:
            skipped = context.advance_next_player()
            logger.debug(f"{skipped.name} is skipped")
        elif card.action == UnoAction.REVERSE:
            context.reverse_direction()
            # Two players: reverse gives the turn straight back
            if len(context.players) == 2:
                context.advance_next_player()
            logger.debug("Play direction reversed")
        elif card.action in DRAW_PENALTIES:
            victim = context.peek_next_player()
            drawn = self.draw(context, victim, DRAW_PENALTIES[card.action])
            context.advance_next_player()
            logger.debug(f"{victim.name} draws {len(drawn)} and is skipped")

    def draw(self, context: GameContext, player: Player, count: int) -> list[Card]:
        """Deal up to `count` cards, refilling the stock from the discards.

        Returns the cards dealt, fewer than `count` only when both the stock
        and the recyclable discards run out.
        """
        if context.deck.remaining < count and self.recycle_discards:
            self._recycle(context)
        available = min(count, context.deck.remaining)
        if available < count:
            logger.warning(
                f"Stock exhausted: {player.name} draws {available} of {count}"
            )
        return context.deal_cards(player, available)

    @staticmethod
    def _recycle(context: GameContext) -> None:
        if len(context.discard_pile) < 2:
            return
        *recycled, top = context.discard_pile
        context.deck.restore(list(context.deck.cards) + recycled)
        context.deck.shuffle()
        context.discard_pile[:] = [top]
        logger.info(f"Recycled {len(recycled)} discards into the stock")


class UnoGame(Game):
    """Color/action game flow."""

    game_type = GameType.UNO
    rules: UnoRules

    def __init__(
        self,
        context: GameContext,
        evaluator: UnoHandEvaluator,
        rules: UnoRules,
        options: GameOptions,
        game_logger: GameLogger | None = None,
    ):
        super().__init__(context, evaluator, rules, options, game_logger)
        handler = context.effect_handler
        self.effects = handler if isinstance(handler, UnoEffectHandler) else UnoEffectHandler()

    @property
    def table(self) -> UnoTable:
        table = _uno_table(self.context)
        assert table is not None
        return table

    def _initialize_game_state(self) -> None:
        super()._initialize_game_state()
        self.context.set_table(UnoTable())

    def _deal_initial_cards(self) -> None:
        self.transition_to(GamePhase.DEALING)
        for player in self.players:
            self.context.deal_cards(player, self.rules.initial_hand_size)

        first = self.context.deck.draw()
        assert isinstance(first, UnoCard)
        self.context.discard([first])
        # A wild start leaves the color open
        self.table.current_color = None if first.is_wild else first.color
        logger.info(f"First discard: {first.label}")

    def _start_first_turn(self) -> None:
        self.transition_to(GamePhase.PLAYING)
        self.context.set_current_player(self.players[0])

    def playable_cards(self, player: Player) -> list[Card]:
        """Cards `player` could legally play right now."""
        return [
            c for c in player.hand
            if self.rules.is_valid_move(player, c, self.context)
        ]

    def play_card(
        self, player: Player, card: UnoCard, color: UnoColor | None = None
    ) -> None:
        """Play a card from the current player's hand.

        Args:
            player: Acting player
            card: Card to play
            color: Color named for a wild card

        Raises:
            InvalidStateError: If the game is not in Playing.
            InvalidMoveError: If the play is illegal or a wild lacks a color.
        """
        self._require_phase(GamePhase.PLAYING)
        if not self.rules.is_valid_play(player, card, self.context):
            logger.warning(f"{player.name} tried an illegal play: {card.label}")
            raise InvalidMoveError(f"{player.name} cannot play {card.label} now")
        if card.is_wild and color not in PLAYABLE_COLORS:
            raise InvalidMoveError(f"{card.label} needs a color, got {color}")

        self.context.play_card(player, card)
        self.table.current_color = color if card.is_wild else card.color
        self.state.touch()

        logger.debug(f"{player.name} plays {card.label}")
        self._log_turn(player, "play", [card])
        if card.action != UnoAction.NONE:
            detail = {"color": self.table.current_color.value} if card.is_wild else None
            self._log_special(card.action.value, player, detail)

        if not player.hand:
            logger.info(f"{player.name} has no cards left")
            self.transition_to(GamePhase.SCORING)
            return
        self.context.advance_next_player()

    def draw_card(self, player: Player) -> list[Card]:
        """Draw one card and pass the turn.

        Raises:
            InvalidStateError: If the game is not in Playing.
            InvalidMoveError: If the player may not act.
        """
        self._require_phase(GamePhase.PLAYING)
        if not self.rules.can_player_act(player, self.context):
            logger.warning(f"{player.name} tried to draw out of turn")
            raise InvalidMoveError(f"{player.name} cannot act now")

        cards = self.effects.draw(self.context, player, 1)
        self._log_turn(player, "draw", cards)
        self.context.advance_next_player()
        return cards

    def get_game_result(self) -> GameResult:
        result = super().get_game_result()
        result.settlement = UnoSettlement(
            winner_points={p.player_id: result.scores[p.player_id] for p in result.winners}
        )
        return result


def most_held_color(cards: Sequence[Card]) -> UnoColor:
    """Most common non-wild color in a hand (red when there is none)."""
    counts = Counter(
        c.color for c in cards if isinstance(c, UnoCard) and not c.is_wild
    )
    if not counts:
        return UnoColor.RED
    return counts.most_common(1)[0][0]


def create_uno_game(
    options: GameOptions | None = None,
    rng: random.Random | None = None,
    game_logger: GameLogger | None = None,
) -> UnoGame:
    """Build a color/action game with its own deck and context."""
    options = options or GameOptions(
        min_players=UnoRules.min_players,
        max_players=UnoRules.max_players,
        variant=UnoOptions(),
    )
    variant = options.variant if isinstance(options.variant, UnoOptions) else UnoOptions()

    rules = UnoRules()
    evaluator = UnoHandEvaluator(rules)
    effects = UnoEffectHandler(recycle_discards=variant.recycle_discards)
    context = GameContext(GameType.UNO, Deck(create_uno_deck, rng), effects)
    return UnoGame(context, evaluator, rules, options, game_logger)
