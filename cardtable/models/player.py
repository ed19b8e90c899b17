"""Player model."""

import uuid
from enum import Enum

from pydantic import BaseModel, Field

from .card import AnyCard, Card
from .values import Points

HIDDEN_LABEL = "XX"


class PlayerState(str, Enum):
    """Coarse player lifecycle state."""

    WAITING = "waiting"
    PLAYING = "playing"
    FOLDED = "folded"
    WON = "won"
    LOST = "lost"


class HeldCard(BaseModel):
    """A card in a player's hand together with its visibility."""

    card: AnyCard
    face_up: bool = True


class Player(BaseModel):
    """Player seated at a table.

    The hand is an ordered list; each entry carries its own face-up flag.
    Who may see a card is decided by `visible_cards(viewer)`, never by whose
    turn it is.
    """

    player_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str = "Player"
    state: PlayerState = PlayerState.WAITING
    points: Points = Points(0)
    held: list[HeldCard] = Field(default_factory=list)

    @property
    def hand(self) -> list[Card]:
        """Cards in hand, in the order received."""
        return [h.card for h in self.held]

    def add_card(self, card: Card, face_up: bool = True) -> None:
        """Take ownership of a card."""
        self.held.append(HeldCard(card=card, face_up=face_up))

    def remove_card(self, card: Card) -> Card:
        """Give up the first held copy of a card.

        Raises:
            ValueError: If the card is not in hand.
        """
        for i, held in enumerate(self.held):
            if held.card == card:
                del self.held[i]
                return held.card
        raise ValueError(f"{card} is not in {self.name}'s hand")

    def clear_hand(self) -> list[Card]:
        """Remove and return every card in hand."""
        cards = self.hand
        self.held.clear()
        return cards

    def update_points(self, delta: int) -> None:
        """Add (or, for negative delta, subtract) points."""
        if delta >= 0:
            self.points = self.points + Points(delta)
        else:
            self.points = self.points - Points(-delta)

    def reveal_hand(self) -> None:
        """Turn every held card face up."""
        for held in self.held:
            held.face_up = True

    def can_see(self, viewer: "Player | None") -> bool:
        """Whether `viewer` may see this player's face-down cards."""
        return viewer is None or viewer.player_id == self.player_id

    def visible_cards(self, viewer: "Player | None" = None) -> list[Card]:
        """Cards of this hand that `viewer` can see.

        Args:
            viewer: Who is looking. None means the table referee, who sees
                every card.
        """
        if self.can_see(viewer):
            return self.hand
        return [h.card for h in self.held if h.face_up]

    def hand_labels(self, viewer: "Player | None" = None) -> list[str]:
        """Display labels with hidden cards masked for `viewer`."""
        if self.can_see(viewer):
            return [h.card.label for h in self.held]
        return [h.card.label if h.face_up else HIDDEN_LABEL for h in self.held]

    def __str__(self) -> str:
        return f"{self.name}[{self.state.value}]"

    def __repr__(self) -> str:
        return (
            f"Player(id={self.player_id[:8]}, name={self.name!r}, "
            f"state={self.state.name}, points={self.points.value})"
        )
