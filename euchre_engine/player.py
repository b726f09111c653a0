"""
Seats, players and the follow-suit rule
"""

from enum import Enum
from typing import Iterable, List, Optional
from .card import Card, Suit

SEATS = 4


class PlayerType(Enum):
    """Who controls a seat"""
    HUMAN = "human"
    HEURISTIC_AI = "heuristic_ai"


def team_of(position: int) -> int:
    """Seats 0 & 2 are team 0, seats 1 & 3 are team 1"""
    return position % 2


def partner_of(position: int) -> int:
    return (position + 2) % SEATS


def left_of(position: int) -> int:
    return (position + 1) % SEATS


def legal_cards(hand: Iterable[Card], trump: Optional[Suit], lead_suit: Optional[Suit]) -> List[Card]:
    """
    Cards that may be played from hand.

    Leading (no lead suit): anything. Otherwise the cards whose effective
    suit matches the lead; if there are none, anything. Bowers count as
    trump here, so the left bower follows trump and not its printed suit.
    """
    hand = list(hand)
    if lead_suit is None:
        return hand

    follows = [card for card in hand if card.effective_suit(trump) == lead_suit]
    return follows if follows else hand


class Player:
    """Represents a player in a Euchre game"""

    def __init__(self, name: str, player_type: PlayerType, position: int):
        """
        Initialize a player.

        Args:
            name: Player's display name
            player_type: Human or bot
            position: Seat at table (0-3)
        """
        self.name = name
        self.player_type = player_type
        self.position = position
        self.hand: List[Card] = []
        self.tricks_won = 0

    @property
    def team(self) -> int:
        return team_of(self.position)

    @property
    def is_human(self) -> bool:
        return self.player_type == PlayerType.HUMAN

    def add_cards(self, cards: List[Card]):
        """Add cards to player's hand"""
        self.hand.extend(cards)

    def remove_card(self, card: Card) -> Card:
        """Remove and return a card from the player's hand"""
        if card not in self.hand:
            raise ValueError(f"Card {card} not in hand")
        self.hand.remove(card)
        return card

    def has_card(self, card: Card) -> bool:
        """Check if player has a specific card"""
        return card in self.hand

    def clear_hand(self):
        """Remove all cards from hand"""
        self.hand = []

    def get_valid_cards(self, lead_suit: Optional[Suit], trump: Optional[Suit]) -> List[Card]:
        return legal_cards(self.hand, trump, lead_suit)

    def sorted_hand(self, trump: Optional[Suit] = None) -> List[Card]:
        """Hand grouped by effective suit, trump last, low to high"""
        def key(card: Card):
            suit = card.effective_suit(trump)
            is_trump = trump is not None and suit == trump
            return (is_trump, suit.value, card.power(trump, suit))
        return sorted(self.hand, key=key)

    def __str__(self):
        return f"{self.name} ({self.player_type.value})"

    def __repr__(self):
        return f"Player(name={self.name}, type={self.player_type}, pos={self.position})"

    def to_dict(self):
        """Convert player to dictionary for JSON serialization"""
        return {
            "name": self.name,
            "type": self.player_type.value,
            "position": self.position,
            "team": self.team,
            "hand_size": len(self.hand),
            "tricks_won": self.tricks_won,
        }
