"""Tests for the generic lifecycle engine and game context."""

import random

import pytest

from cardtable.errors import InvalidConfigurationError, InvalidStateError
from cardtable.game.context import GameContext
from cardtable.game.engine import Game
from cardtable.game.evaluator import HandEvaluator
from cardtable.game.rules import GameRules
from cardtable.models.card import PokerCard, Rank, Suit, create_poker_deck
from cardtable.models.deck import Deck
from cardtable.models.game_state import GamePhase, GameType
from cardtable.models.hand import HandRank
from cardtable.models.player import Player, PlayerState
from cardtable.models.values import GameOptions, Points


class HighCardRules(GameRules):
    """One card each, highest card wins."""

    initial_hand_size = 1

    def is_valid_move(self, player, card, context):
        return True

    def is_game_over(self, context):
        return all(p.hand for p in context.players)

    def calculate_score(self, player, context):
        return sum(c.value(context) for c in player.hand)


class HighCardEvaluator(HandEvaluator):
    def evaluate_hand(self, cards, context=None):
        total = sum(c.value(context) for c in cards)
        return HandRank(value=total, description=f"High {total}")


class HighCardGame(Game):
    game_type = GameType.POKER

    def _deal_initial_cards(self):
        self.transition_to(GamePhase.DEALING)
        for player in self.players:
            self.context.deal_cards(player, self.rules.initial_hand_size)
        self.transition_to(GamePhase.PLAYING)


def card(rank, suit=Suit.SPADES):
    return PokerCard(suit=suit, rank=rank)


@pytest.fixture
def game():
    context = GameContext(GameType.POKER, Deck(create_poker_deck, random.Random(5)))
    options = GameOptions(min_players=2, max_players=4, initial_points=50)
    return HighCardGame(context, HighCardEvaluator(), HighCardRules(), options)


@pytest.fixture
def players():
    return [Player(name="Alice"), Player(name="Bob"), Player(name="Carol")]


class RecordingHandler:
    def __init__(self):
        self.played = []

    def handle_card_played(self, card, context):
        self.played.append(card)


class TestLifecycle:
    """Tests for initialize, start_game and end_game."""

    def test_initialize(self, game, players):
        """Test seating resets the deck and seeds player state."""
        game.initialize(players)

        assert game.phase == GamePhase.SETUP
        assert game.players == players
        assert game.context.current_player is players[0]
        assert game.context.deck.remaining == 52
        assert all(p.points == Points(50) for p in players)
        assert all(p.state == PlayerState.PLAYING for p in players)

    def test_initialize_out_of_bounds_keeps_state(self, game, players):
        game.initialize(players[:2])
        with pytest.raises(InvalidConfigurationError):
            game.initialize([Player()] * 5)
        assert game.players == players[:2]

    def test_configuration_error_is_value_error(self, game):
        with pytest.raises(ValueError):
            game.initialize([Player()])

    def test_start_game(self, game, players):
        game.initialize(players)
        game.start_game()

        assert game.phase == GamePhase.PLAYING
        assert all(len(p.hand) == 1 for p in players)
        assert game.context.deck.remaining == 49

    def test_start_outside_setup(self, game, players):
        game.initialize(players)
        game.start_game()
        with pytest.raises(InvalidStateError):
            game.start_game()

    def test_state_error_is_runtime_error(self, game, players):
        game.initialize(players)
        game.start_game()
        with pytest.raises(RuntimeError):
            game.start_game()

    def test_end_game_settles(self, game, players):
        """Test the highest card wins and everyone else loses."""
        game.initialize(players)
        game.context.deck.restore([card(Rank.KING), card(Rank.ACE), card(Rank.TWO)])
        game.start_game()
        assert game.is_game_over()

        result = game.end_game()
        assert result.winners == [players[1]]
        assert result.losers == [players[0], players[2]]
        assert result.scores == {
            players[0].player_id: 13,
            players[1].player_id: 14,
            players[2].player_id: 2,
        }
        assert players[1].state == PlayerState.WON
        assert players[0].state == PlayerState.LOST
        assert game.phase == GamePhase.GAME_OVER
        assert len(game.context.discard_pile) == 3

    def test_tied_winners(self, game, players):
        game.initialize(players[:2])
        game.context.deck.restore([card(Rank.KING), card(Rank.KING, Suit.HEARTS)])
        game.start_game()

        result = game.end_game()
        assert result.winners == players[:2]
        assert result.losers == []

    def test_abandon_in_setup(self, game, players):
        """Test a game ended before the deal has no result."""
        game.initialize(players)
        assert not game.is_game_over()
        assert game.end_game() is None
        assert game.phase == GamePhase.GAME_OVER
        assert game.is_game_over()

    def test_end_game_twice(self, game, players):
        game.initialize(players)
        game.start_game()
        game.end_game()
        with pytest.raises(InvalidStateError):
            game.end_game()

    def test_evaluate_player(self, game, players):
        game.initialize(players)
        game.context.deck.restore([card(Rank.QUEEN), card(Rank.TWO), card(Rank.THREE)])
        game.start_game()
        assert game.evaluate_player(players[0]).description == "High 12"


class TestTransitions:
    """Tests for the default phase graph."""

    @pytest.mark.parametrize(
        "from_phase,to_phase",
        [
            (GamePhase.SETUP, GamePhase.DEALING),
            (GamePhase.DEALING, GamePhase.BETTING),
            (GamePhase.DEALING, GamePhase.PLAYING),
            (GamePhase.BETTING, GamePhase.PLAYING),
            (GamePhase.PLAYING, GamePhase.SCORING),
            (GamePhase.SCORING, GamePhase.GAME_OVER),
        ],
    )
    def test_forward_chain(self, game, from_phase, to_phase):
        assert game.rules.can_transition_state(from_phase, to_phase, game.context)

    @pytest.mark.parametrize(
        "from_phase,to_phase",
        [
            (GamePhase.SETUP, GamePhase.PLAYING),
            (GamePhase.PLAYING, GamePhase.DEALING),
            (GamePhase.SCORING, GamePhase.PLAYING),
            (GamePhase.GAME_OVER, GamePhase.SETUP),
        ],
    )
    def test_illegal(self, game, from_phase, to_phase):
        assert not game.rules.can_transition_state(from_phase, to_phase, game.context)

    def test_transition_to_illegal_phase(self, game, players):
        game.initialize(players)
        with pytest.raises(InvalidStateError):
            game.transition_to(GamePhase.SCORING)
        assert game.phase == GamePhase.SETUP


class TestGameContext:
    """Tests for GameContext turn order and card movement."""

    @pytest.fixture
    def context(self, players):
        ctx = GameContext(GameType.POKER, Deck(create_poker_deck, random.Random(1)))
        ctx.deck.reset()
        ctx.set_players(players)
        return ctx

    def test_advance_clockwise(self, context, players):
        assert context.peek_next_player() is players[1]
        assert context.advance_next_player() is players[1]
        assert context.advance_next_player() is players[2]
        assert context.advance_next_player() is players[0]
        assert context.state.turn_number == 3

    def test_advance_reversed(self, context, players):
        context.reverse_direction()
        assert not context.state.clockwise
        assert context.advance_next_player() is players[2]
        assert context.advance_next_player() is players[1]

    def test_set_current_player_must_be_seated(self, context):
        with pytest.raises(ValueError):
            context.set_current_player(Player(name="Stranger"))

    def test_no_players(self):
        ctx = GameContext(GameType.POKER, Deck(create_poker_deck))
        assert ctx.current_player is None
        with pytest.raises(InvalidStateError):
            ctx.advance_next_player()

    def test_mutation_refreshes_timestamp(self, context):
        before = context.state.last_update
        context.advance_next_player()
        assert context.state.last_update >= before

    def test_deal_and_play(self, players):
        """Test cards move deck -> hand -> discard and trigger the handler."""
        handler = RecordingHandler()
        ctx = GameContext(GameType.POKER, Deck(create_poker_deck, random.Random(1)), handler)
        ctx.deck.reset()
        ctx.set_players(players)

        dealt = ctx.deal_cards(players[0], 3)
        assert players[0].hand == dealt
        assert ctx.deck.remaining == 49

        ctx.play_card(players[0], dealt[1])
        assert ctx.top_card == dealt[1]
        assert players[0].hand == [dealt[0], dealt[2]]
        assert handler.played == [dealt[1]]

    def test_deal_face_down(self, context, players):
        context.deal_cards(players[0], 2, face_up=False)
        assert players[0].visible_cards(players[1]) == []


class TestSnapshots:
    """Tests for snapshot capture and restore."""

    def test_restore_round_trip(self, game, players):
        game.initialize(players)
        game.start_game()
        game.context.advance_next_player()
        snap = game.snapshot()
        hands = [list(p.hand) for p in players]
        remaining = game.context.deck.cards

        game.context.deal_cards(players[0], 5)
        game.context.reverse_direction()
        game.restore(snap)

        assert [p.hand for p in game.players] == hands
        assert game.context.deck.cards == remaining
        assert game.context.current_player.player_id == players[1].player_id
        assert game.state.clockwise
        assert game.state.game_id == snap.game_id

    def test_snapshot_is_independent(self, game, players):
        game.initialize(players)
        game.start_game()
        snap = game.snapshot()

        players[0].clear_hand()
        assert len(snap.players[0].hand) == 1

    def test_restore_wrong_variant(self, game, players):
        game.initialize(players)
        snap = game.snapshot().model_copy(update={"game_type": GameType.UNO})
        with pytest.raises(InvalidStateError):
            game.restore(snap)

    def test_restore_bad_current_index(self, game, players):
        game.initialize(players)
        snap = game.snapshot().model_copy(update={"current_player_index": 7})
        with pytest.raises(InvalidStateError):
            game.restore(snap)
        assert game.players == players


class TestHandRank:
    """Tests for HandRank ordering."""

    def test_compares_value_only(self):
        low = HandRank(value=10, description="zzz")
        high = HandRank(value=20, description="aaa")
        assert high > low
        assert low < high
        assert high >= HandRank(value=20, description="other")
        assert low <= high
        assert str(high) == "aaa"
