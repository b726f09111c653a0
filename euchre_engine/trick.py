"""
Trick management for Euchre
"""

from typing import List, Optional, Tuple
from .card import Card, Suit
from .exceptions import InvariantViolation


class Trick:
    """One rotation of cards; 4 participants, or 3 when someone is alone"""

    def __init__(self, lead_player_position: int, trump: Suit, required_size: int = 4):
        """
        Initialize a trick.

        Args:
            lead_player_position: Position of the player who leads
            trump: The trump suit for this hand
            required_size: Number of cards that completes the trick
        """
        self.lead_position = lead_player_position
        self.trump = trump
        self.required_size = required_size
        self.cards: List[Tuple[int, Card]] = []  # (player_position, card)
        self.lead_suit: Optional[Suit] = None

    def add_card(self, player_position: int, card: Card):
        """Add a card played by a player to this trick"""
        if len(self.cards) >= self.required_size:
            raise InvariantViolation(f"Trick already has {self.required_size} cards")

        # First card determines lead suit
        if not self.cards:
            self.lead_suit = card.effective_suit(self.trump)

        self.cards.append((player_position, card))

    def is_complete(self) -> bool:
        return len(self.cards) == self.required_size

    def current_winner(self) -> Optional[Tuple[int, Card]]:
        """(position, card) currently taking the trick, or None if empty"""
        if not self.cards:
            return None
        return max(self.cards, key=lambda pc: pc[1].power(self.trump, self.lead_suit))

    def get_winner(self) -> int:
        """
        Determine which player won the trick.
        Returns the position of the winning player.
        """
        if not self.is_complete():
            raise ValueError("Cannot determine winner - trick not complete")
        return self.current_winner()[0]

    def get_card_for_position(self, position: int) -> Optional[Card]:
        """Get the card played by a specific player position"""
        for pos, card in self.cards:
            if pos == position:
                return card
        return None

    @property
    def positions(self) -> List[int]:
        return [pos for pos, _ in self.cards]

    def __len__(self):
        return len(self.cards)

    def __str__(self):
        cards_str = ", ".join(f"P{pos}: {card}" for pos, card in self.cards)
        return f"Trick(lead={self.lead_position}, trump={self.trump}, cards=[{cards_str}])"

    def to_dict(self):
        """Convert trick to dictionary for JSON serialization"""
        return {
            "lead_position": self.lead_position,
            "trump": self.trump.value,
            "lead_suit": self.lead_suit.value if self.lead_suit else None,
            "cards": [{"position": pos, "card": str(card)} for pos, card in self.cards],
            "is_complete": self.is_complete(),
            "winner": self.get_winner() if self.is_complete() else None,
        }
