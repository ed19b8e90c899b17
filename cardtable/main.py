"""Main entry point for the card table."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from cardtable.config import Config, load_config
from cardtable.errors import GameError, InvalidMoveError
from cardtable.game.engine import Game
from cardtable.game.registry import create_game
from cardtable.logging import GameLogConfig, GameLogger
from cardtable.models.game_state import GamePhase, GameType
from cardtable.models.player import Player
from cardtable.models.result import GameResult
from cardtable.storage import FileSnapshotStore, SnapshotStore
from cardtable.strategy import (
    Action,
    CheckOrFoldStrategy,
    Decision,
    FirstPlayableStrategy,
    Strategy,
    ThresholdStrategy,
)
from cardtable.utils.logger import GameDisplay, setup_logging
from cardtable.variants.blackjack import BlackjackGame
from cardtable.variants.poker import PokerGame
from cardtable.variants.uno import UnoGame

logger = logging.getLogger(__name__)

DEALER_NAME = "Dealer"

# Turn cap per round; a round that hits it is abandoned
MAX_TURNS = 500


def generate_log_filename(log_dir: str, game_type: GameType, players: list[Player]) -> str:
    """Generate log filename with timestamp, variant and player names.

    Format: {ISO timestamp}_{variant}_{player1}_..._{playerN}.jsonl
    Player names are sorted alphabetically.
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    player_names = "_".join(sorted(p.name for p in players))
    filename = f"{timestamp}_{game_type.value}_{player_names}.jsonl"
    return str(Path(log_dir) / filename)


def seat_players(config: Config) -> list[Player]:
    """Players from the table config, with the dealer last for blackjack."""
    players = [Player(name=name) for name in config.table.players]
    if config.table.game == GameType.BLACKJACK:
        players.append(Player(name=DEALER_NAME))
    return players


def make_strategy(config: Config) -> Strategy:
    """Strategy used by every automated seat."""
    game_type = config.table.game
    if game_type == GameType.BLACKJACK:
        return ThresholdStrategy(config.strategy.hit_below)
    if game_type == GameType.UNO:
        return FirstPlayableStrategy()
    return CheckOrFoldStrategy(config.strategy.fold_below)


def apply_decision(game: Game, player: Player, decision: Decision) -> None:
    """Carry out a strategy decision on the game.

    Raises:
        InvalidMoveError: If the decision does not fit the variant.
    """
    action = decision.action
    if isinstance(game, BlackjackGame) and action == Action.HIT:
        game.hit(player)
    elif isinstance(game, BlackjackGame) and action == Action.STAND:
        game.stand(player)
    elif isinstance(game, UnoGame) and action == Action.PLAY and decision.card is not None:
        game.play_card(player, decision.card, decision.color)
    elif isinstance(game, UnoGame) and action == Action.DRAW:
        game.draw_card(player)
    elif isinstance(game, PokerGame) and action == Action.CHECK:
        game.check(player)
    elif isinstance(game, PokerGame) and action == Action.FOLD:
        game.fold(player)
    else:
        raise InvalidMoveError(
            f"{action.value} is not an action of {game.game_type.value}"
        )


def play_round(
    game: Game,
    players: list[Player],
    strategy: Strategy,
    display: GameDisplay,
    store: SnapshotStore | None = None,
) -> GameResult | None:
    """Play one automated round from deal to settlement.

    Returns:
        GameResult, or None if the round hit the turn cap
    """
    game.initialize(players)
    game.start_game()
    display.print_hands(game)

    turns = 0
    while game.phase == GamePhase.PLAYING and turns < MAX_TURNS:
        if isinstance(game, PokerGame) and game.street_complete:
            cards = game.deal_next_street()
            print(f"  Board: {' '.join(c.label for c in game.table.community_cards)}")
            logger.debug(f"Dealt {len(cards)} community cards")
            continue

        player = game.context.current_player
        assert player is not None
        decision = strategy.decide(player, game)
        before = len(player.hand)
        apply_decision(game, player, decision)

        if decision.card is not None:
            display.print_action(player, decision.action.value, [decision.card])
        elif len(player.hand) > before:
            display.print_action(player, decision.action.value, player.hand[before:])
        else:
            display.print_action(player, decision.action.value)
        turns += 1

    if isinstance(game, BlackjackGame) and game.phase == GamePhase.SCORING:
        rank = game.play_dealer()
        display.print_action(game.dealer, f"dealer {rank.description}", game.dealer.hand)

    display.print_hands(game)
    if store is not None:
        store.save(game.snapshot())

    result = game.end_game()
    display.print_result(result, game)
    return result


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    parser = argparse.ArgumentParser(description="Automated card table")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "-g",
        "--game",
        choices=[t.value for t in GameType],
        help="Variant to play (overrides config)",
    )
    parser.add_argument(
        "-p",
        "--player",
        action="append",
        dest="players",
        help="Seat name, repeatable (overrides config)",
    )
    parser.add_argument(
        "-n",
        "--num-rounds",
        type=int,
        help="Number of rounds to play (overrides config)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Shuffle seed (overrides config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--show-hands",
        action="store_true",
        help="Show face-down cards in output",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )
    parser.add_argument(
        "--snapshot-dir",
        type=Path,
        help="Save a snapshot of every round to this directory",
    )

    args = parser.parse_args()

    # Load config
    config = load_config(args.config)

    # Apply command-line overrides
    if args.game:
        config.table.game = GameType(args.game)
    if args.players:
        config.table.players = args.players
    if args.num_rounds:
        config.table.num_rounds = args.num_rounds
    if args.seed is not None:
        config.table.seed = args.seed
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_hands:
        config.logging.show_hands = True
    if args.snapshot_dir:
        config.snapshots.enabled = True
        config.snapshots.directory = str(args.snapshot_dir)

    # Determine game log directory (CLI argument overrides config file)
    game_log_enabled = args.game_log is not None or config.game_log.enabled
    game_log_dir = str(args.game_log) if args.game_log else config.game_log.output_path

    setup_logging(config.logging.level)
    display = GameDisplay(show_hands=config.logging.show_hands)

    game_type = config.table.game
    players = seat_players(config)
    num_rounds = config.table.num_rounds

    print(f"Game: {game_type.value}")
    print(f"Rounds: {num_rounds}")
    print(f"Players: {', '.join(p.name for p in players)}")
    if game_log_enabled:
        print(f"Game log dir: {game_log_dir}")
    print()

    store = FileSnapshotStore(config.snapshots.directory) if config.snapshots.enabled else None

    if game_log_enabled:
        log_path = generate_log_filename(game_log_dir, game_type, players)
        game_log_config = GameLogConfig(enabled=True, output_path=log_path)
        print(f"Game log: {log_path}")
    else:
        game_log_config = GameLogConfig(enabled=False)

    try:
        with GameLogger(game_log_config) as game_logger:
            game = create_game(game_type, config, game_logger=game_logger)
            strategy = make_strategy(config)
            tally = {p.player_id: 0 for p in players}

            game_logger.log_session_start(game_type, players)
            for round_number in range(1, num_rounds + 1):
                display.print_round_start(round_number, num_rounds, game)
                result = play_round(game, players, strategy, display, store)
                if result is None:
                    logger.warning(f"Round {round_number} abandoned")
                    continue
                for player_id in result.winner_ids:
                    tally[player_id] += 1

            ranking = sorted(tally, key=lambda p: tally[p], reverse=True)
            game_logger.log_session_end(num_rounds, tally, ranking)
            display.print_final_results(tally, players)
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except GameError as e:
        logger.exception(f"Game error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
