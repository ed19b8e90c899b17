"""Simple strategy implementations.

- Blackjack: hit below a fixed total, otherwise stand
- Uno: play the first playable card, name the most held color for wilds
- Poker: fold weak unpaired hole cards pre-flop, otherwise check
"""

from cardtable.game.engine import Game
from cardtable.models.card import PokerCard, UnoCard
from cardtable.models.player import Player
from cardtable.models.table import PokerTable
from cardtable.strategy.base import Action, Decision, Strategy
from cardtable.variants.blackjack import DEALER_STAND_VALUE
from cardtable.variants.uno import most_held_color


class ThresholdStrategy(Strategy):
    """Hit until the hand reaches a threshold, the way the dealer does."""

    def __init__(self, hit_below: int = DEALER_STAND_VALUE):
        self.hit_below = hit_below

    def decide(self, player: Player, game: Game) -> Decision:
        total = game.evaluate_player(player, viewer=player).value
        if total < self.hit_below:
            return Decision(Action.HIT)
        return Decision(Action.STAND)


class FirstPlayableStrategy(Strategy):
    """Play the first legal card; draw when there is none."""

    def decide(self, player: Player, game: Game) -> Decision:
        playable = game.evaluator.get_playable_cards(player.hand, game.context)
        if not playable:
            return Decision(Action.DRAW)

        card = playable[0]
        color = None
        if isinstance(card, UnoCard) and card.is_wild:
            rest = player.hand
            rest.remove(card)
            color = most_held_color(rest)
        return Decision(Action.PLAY, card=card, color=color)


class CheckOrFoldStrategy(Strategy):
    """Stay in with a pair or a high card pre-flop, always check after."""

    def __init__(self, fold_below: int = 10):
        self.fold_below = fold_below

    def decide(self, player: Player, game: Game) -> Decision:
        table = game.context.table
        if isinstance(table, PokerTable) and table.community_cards:
            return Decision(Action.CHECK)

        values = [c.value() for c in player.hand if isinstance(c, PokerCard)]
        paired = len(values) != len(set(values))
        if not paired and values and max(values) < self.fold_below:
            return Decision(Action.FOLD)
        return Decision(Action.CHECK)
