"""Variant registry.

Maps each `GameType` to the rules, options and factory that build it. The
set of variants is closed; an unknown tag is a configuration error.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from cardtable.errors import InvalidConfigurationError
from cardtable.models.game_state import GameType
from cardtable.models.values import BlackjackOptions, GameOptions, PokerOptions, UnoOptions
from cardtable.variants.blackjack import BlackjackRules, create_blackjack_game
from cardtable.variants.poker import PokerRules, create_poker_game
from cardtable.variants.uno import UnoRules, create_uno_game

from .engine import Game
from .rules import GameRules

if TYPE_CHECKING:
    from cardtable.config import Config, RulesConfig
    from cardtable.logging import GameLogger

logger = logging.getLogger(__name__)


class GameFactory(Protocol):
    def __call__(
        self,
        options: GameOptions | None = None,
        rng: random.Random | None = None,
        game_logger: GameLogger | None = None,
    ) -> Game: ...


@dataclass(frozen=True)
class VariantSpec:
    """How to build one variant."""

    rules_class: type[GameRules]
    options_class: type[BlackjackOptions | UnoOptions | PokerOptions]
    factory: GameFactory


VARIANTS: dict[GameType, VariantSpec] = {
    GameType.BLACKJACK: VariantSpec(BlackjackRules, BlackjackOptions, create_blackjack_game),
    GameType.UNO: VariantSpec(UnoRules, UnoOptions, create_uno_game),
    GameType.POKER: VariantSpec(PokerRules, PokerOptions, create_poker_game),
}


def get_variant(game_type: GameType | str) -> VariantSpec:
    """Look up a variant.

    Raises:
        InvalidConfigurationError: If the tag names no known variant.
    """
    try:
        return VARIANTS[GameType(game_type)]
    except (KeyError, ValueError):
        raise InvalidConfigurationError(f"Unknown game type: {game_type}") from None


def build_options(game_type: GameType | str, rules_config: RulesConfig | None = None) -> GameOptions:
    """Validated table options for a variant.

    Player bounds come from the variant's rules; points, bets and variant
    options come from the rules config.
    """
    spec = get_variant(game_type)
    game_type = GameType(game_type)

    if rules_config is None:
        return GameOptions(
            min_players=spec.rules_class.min_players,
            max_players=spec.rules_class.max_players,
            variant=spec.options_class(),
        )
    return GameOptions(
        min_players=spec.rules_class.min_players,
        max_players=spec.rules_class.max_players,
        initial_points=rules_config.initial_points,
        min_bet=rules_config.min_bet,
        max_bet=rules_config.max_bet,
        variant=getattr(rules_config, game_type.value),
    )


def create_game(
    game_type: GameType | str,
    config: Config | None = None,
    rng: random.Random | None = None,
    game_logger: GameLogger | None = None,
) -> Game:
    """Build a game session for a variant.

    Args:
        game_type: Variant tag
        config: Root configuration (defaults if not provided)
        rng: Session random source. Seeded from `config.table.seed` if not
            provided.
        game_logger: GameLogger instance for detailed logging

    Raises:
        InvalidConfigurationError: Unknown variant.
    """
    spec = get_variant(game_type)
    options = build_options(game_type, config.rules if config else None)
    if rng is None and config is not None and config.table.seed is not None:
        rng = random.Random(config.table.seed)

    game = spec.factory(options=options, rng=rng, game_logger=game_logger)
    logger.debug(f"Created {GameType(game_type).value} game {game.state.game_id}")
    return game
