"""Logging utilities and game display."""

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cardtable.game.engine import Game
    from cardtable.models.card import Card
    from cardtable.models.player import Player
    from cardtable.models.result import GameResult


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


class GameDisplay:
    """Display game progress to stdout."""

    def __init__(self, show_hands: bool = False):
        """Initialize display.

        Args:
            show_hands: Whether to show face-down cards
        """
        self.show_hands = show_hands

    def print_separator(self) -> None:
        print("=" * 60)

    def print_round_start(self, round_number: int, num_rounds: int, game: "Game") -> None:
        self.print_separator()
        print(f"ROUND {round_number}/{num_rounds} ({game.game_type.value})")
        self.print_separator()

    def print_hands(self, game: "Game", viewer: "Player | None" = None) -> None:
        """Print every hand as `viewer` sees it (everything with show_hands)."""
        print("\nHands:")
        for player in game.players:
            shown = player.hand_labels(None if self.show_hands else viewer)
            print(f"  {player.name}: {' '.join(shown) or '-'}")

    def print_action(
        self,
        player: "Player",
        action: str,
        cards: "list[Card] | None" = None,
    ) -> None:
        """Print a player's action."""
        if cards:
            print(f"  {player.name} -> {action}: {' '.join(c.label for c in cards)}")
        else:
            print(f"  {player.name} -> {action}")

    def print_result(self, result: "GameResult | None", game: "Game") -> None:
        """Print the outcome of a round."""
        if result is None:
            print("\nRound abandoned.")
            return

        names = {p.player_id: p.name for p in game.players}
        print("\nResults:")
        if result.winners:
            print(f"  Winners: {', '.join(p.name for p in result.winners)}")
        else:
            print("  Winners: none (house)")
        for player_id, score in result.scores.items():
            print(f"  {names.get(player_id, player_id)}: {score}")

    def print_final_results(self, tally: dict[str, int], players: "list[Player]") -> None:
        """Print rounds won per player."""
        self.print_separator()
        print("FINAL RESULTS")
        self.print_separator()

        names = {p.player_id: p.name for p in players}
        ranked = sorted(tally.items(), key=lambda x: x[1], reverse=True)
        for rank, (player_id, wins) in enumerate(ranked, 1):
            print(f"  #{rank}: {names[player_id]} - {wins} wins")
