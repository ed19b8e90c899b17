"""Tests for the automated table driver."""

import json
import random
import sys

import pytest

from cardtable.config import Config
from cardtable.errors import InvalidMoveError
from cardtable.main import (
    DEALER_NAME,
    apply_decision,
    generate_log_filename,
    main,
    make_strategy,
    play_round,
    seat_players,
)
from cardtable.models.game_state import GamePhase, GameType
from cardtable.models.player import Player
from cardtable.storage import MemorySnapshotStore
from cardtable.strategy import Action, CheckOrFoldStrategy, Decision, ThresholdStrategy
from cardtable.utils.logger import GameDisplay
from cardtable.variants.blackjack import create_blackjack_game
from cardtable.variants.poker import create_poker_game


def config_for(game_type, players=("Ann", "Ben")):
    config = Config()
    config.table.game = game_type
    config.table.players = list(players)
    return config


class TestSeating:
    """Tests for seat and strategy selection."""

    def test_blackjack_adds_dealer(self):
        players = seat_players(config_for(GameType.BLACKJACK))
        assert [p.name for p in players] == ["Ann", "Ben", DEALER_NAME]

    def test_poker_has_no_dealer(self):
        players = seat_players(config_for(GameType.POKER))
        assert [p.name for p in players] == ["Ann", "Ben"]

    def test_make_strategy(self):
        config = config_for(GameType.BLACKJACK)
        config.strategy.hit_below = 15
        strategy = make_strategy(config)
        assert isinstance(strategy, ThresholdStrategy)
        assert strategy.hit_below == 15
        assert isinstance(make_strategy(config_for(GameType.POKER)), CheckOrFoldStrategy)

    def test_generate_log_filename(self):
        players = [Player(name="Zed"), Player(name="Amy")]
        filename = generate_log_filename("logs", GameType.UNO, players)
        assert filename.startswith("logs")
        assert filename.endswith("_uno_Amy_Zed.jsonl")


class TestPlayRound:
    """Tests for play_round."""

    def test_blackjack_round(self, capsys):
        config = config_for(GameType.BLACKJACK)
        players = seat_players(config)
        game = create_blackjack_game(rng=random.Random(21))
        store = MemorySnapshotStore()

        result = play_round(game, players, make_strategy(config), GameDisplay(), store)

        assert result is not None
        assert players[-1] not in result.winners
        assert game.phase == GamePhase.GAME_OVER
        assert store.list(GameType.BLACKJACK) == [game.state.game_id]
        assert "Results:" in capsys.readouterr().out

    def test_poker_round(self):
        config = config_for(GameType.POKER, ("Ann", "Ben", "Cat"))
        players = seat_players(config)
        game = create_poker_game(rng=random.Random(5))

        result = play_round(game, players, make_strategy(config), GameDisplay())

        assert result is not None
        assert result.winners
        assert game.phase == GamePhase.GAME_OVER

    def test_wrong_action_for_variant(self):
        game = create_poker_game(rng=random.Random(5))
        players = [Player(name="Ann"), Player(name="Ben")]
        game.initialize(players)
        game.start_game()
        with pytest.raises(InvalidMoveError):
            apply_decision(game, players[0], Decision(Action.HIT))


class TestMain:
    """Tests for the command-line entry point."""

    def test_runs_rounds_and_logs(self, tmp_path, monkeypatch, capsys):
        log_dir = tmp_path / "logs"
        monkeypatch.setattr(
            sys,
            "argv",
            [
                "cardtable",
                "-g", "blackjack",
                "-p", "Ann",
                "-p", "Ben",
                "-n", "2",
                "--seed", "3",
                "--game-log", str(log_dir),
                "--snapshot-dir", str(tmp_path / "snaps"),
            ],
        )

        assert main() == 0

        out = capsys.readouterr().out
        assert "FINAL RESULTS" in out
        (log_file,) = log_dir.glob("*.jsonl")
        with open(log_file, encoding="utf-8") as f:
            events = [json.loads(line) for line in f]
        assert events[0]["type"] == "session_start"
        assert events[-1]["type"] == "session_end"
        assert events[-1]["total_games"] == 2
        assert len(list((tmp_path / "snaps").glob("*.json"))) == 1

    def test_bad_seat_count(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["cardtable", "-g", "poker", "-p", "Solo", "-n", "1"])
        assert main() == 1
