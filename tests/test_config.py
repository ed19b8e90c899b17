"""Tests for configuration loading and the variant registry."""

import random

import pytest

from cardtable.config import Config, RulesConfig, load_config
from cardtable.errors import InvalidConfigurationError
from cardtable.game.registry import build_options, create_game, get_variant
from cardtable.models.game_state import GameType
from cardtable.models.player import Player
from cardtable.models.values import BlackjackOptions, PokerOptions, Points
from cardtable.variants import BlackjackGame, PokerGame, UnoGame, UnoRules

CONFIG_YAML = """\
table:
  game: uno
  players: [Ann, Ben, Cat]
  num_rounds: 3
  seed: 42
rules:
  initial_points: 100
  blackjack:
    charlie_beats_dealer_charlie: true
strategy:
  hit_below: 15
logging:
  level: DEBUG
snapshots:
  enabled: true
  directory: saved
"""


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self):
        config = load_config()
        assert config.table.game == GameType.BLACKJACK
        assert config.table.players == ["Alice", "Bob"]
        assert config.table.seed is None
        assert not config.game_log.enabled
        assert not config.snapshots.enabled

    def test_missing_file(self, tmp_path):
        assert load_config(tmp_path / "nope.yaml") == Config()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == Config()

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG_YAML)
        config = load_config(path)

        assert config.table.game == GameType.UNO
        assert config.table.players == ["Ann", "Ben", "Cat"]
        assert config.table.num_rounds == 3
        assert config.table.seed == 42
        assert config.rules.initial_points == 100
        assert config.rules.blackjack.charlie_beats_dealer_charlie
        assert config.strategy.hit_below == 15
        assert config.strategy.fold_below == 10
        assert config.logging.level == "DEBUG"
        assert config.snapshots.directory == "saved"

    def test_unknown_game_rejected(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("table:\n  game: baccarat\n")
        with pytest.raises(ValueError):
            load_config(path)


class TestRegistry:
    """Tests for variant lookup and game construction."""

    def test_get_variant(self):
        assert get_variant("uno").rules_class is UnoRules
        assert get_variant(GameType.POKER).options_class is PokerOptions

    def test_unknown_variant(self):
        with pytest.raises(InvalidConfigurationError):
            get_variant("baccarat")

    def test_build_options_defaults(self):
        options = build_options(GameType.BLACKJACK)
        assert (options.min_players, options.max_players) == (2, 8)
        assert options.variant == BlackjackOptions()

    def test_build_options_from_rules_config(self):
        rules = RulesConfig(
            initial_points=25,
            min_bet=2,
            max_bet=10,
            blackjack=BlackjackOptions(charlie_beats_dealer_charlie=True),
        )
        options = build_options("blackjack", rules)

        assert options.initial_points == Points(25)
        assert int(options.max_bet) == 10
        assert options.variant.charlie_beats_dealer_charlie

    def test_bad_bets_rejected(self):
        with pytest.raises(ValueError):
            build_options("uno", RulesConfig(min_bet=10, max_bet=5))

    @pytest.mark.parametrize(
        "game_type,game_class",
        [
            (GameType.BLACKJACK, BlackjackGame),
            (GameType.UNO, UnoGame),
            (GameType.POKER, PokerGame),
        ],
    )
    def test_create_game(self, game_type, game_class):
        game = create_game(game_type)
        assert isinstance(game, game_class)
        assert game.game_type == game_type

    def test_charlie_option_reaches_rules(self):
        config = Config()
        config.rules.blackjack = BlackjackOptions(charlie_beats_dealer_charlie=True)
        game = create_game("blackjack", config)
        assert game.rules.options.charlie_beats_dealer_charlie

    def test_seed_makes_deals_repeatable(self):
        """Test two sessions from the same seed deal identical hands."""
        config = Config()
        config.table.seed = 99

        hands = []
        for _ in range(2):
            game = create_game("poker", config)
            game.initialize([Player(name="Ann"), Player(name="Ben")])
            game.start_game()
            hands.append([p.hand for p in game.players])
        assert hands[0] == hands[1]

    def test_explicit_rng_wins_over_seed(self):
        config = Config()
        config.table.seed = 99
        a = create_game("poker", config, rng=random.Random(1))
        b = create_game("poker", rng=random.Random(1))
        for game in (a, b):
            game.initialize([Player(name="Ann"), Player(name="Ben")])
        assert a.context.deck.cards == b.context.deck.cards
