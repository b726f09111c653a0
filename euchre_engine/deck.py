"""
Deck implementation for Euchre
"""

import random
from typing import List, Optional
from .card import Card, Suit, Rank
from .config import DECK_SIZE
from .exceptions import InvariantViolation


def full_deck() -> List[Card]:
    """All 24 cards, suit by suit"""
    return [Card(suit, rank) for suit in Suit for rank in Rank]


class Deck:
    """A Euchre deck (24 cards: 9-A in each suit)"""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.cards: List[Card] = []
        self.reset()

    def reset(self):
        """Reset the deck to a full, ordered euchre deck"""
        self.cards = full_deck()
        self.check_integrity()

    def check_integrity(self):
        """A fresh deck must hold every suit x rank pair exactly once"""
        if len(self.cards) != DECK_SIZE or set(self.cards) != set(full_deck()):
            raise InvariantViolation(
                f"Deck must hold {DECK_SIZE} distinct cards, has {len(self.cards)}"
            )

    def shuffle(self):
        """Shuffle the deck"""
        self.rng.shuffle(self.cards)

    def deal_round_robin(self, first_seat: int, hand_size: int, seats: int = 4) -> List[List[Card]]:
        """
        Deal one card at a time to each seat, starting at first_seat,
        until every seat holds hand_size cards. Returns hands indexed by seat.
        """
        hands: List[List[Card]] = [[] for _ in range(seats)]
        for i in range(hand_size * seats):
            hands[(first_seat + i) % seats].append(self.draw())
        return hands

    def draw(self) -> Card:
        """Draw a single card from the top of the deck"""
        if not self.cards:
            raise ValueError("Deck is empty")
        return self.cards.pop(0)

    def __len__(self):
        return len(self.cards)

    def __str__(self):
        return f"Deck({len(self.cards)} cards)"

    def __repr__(self):
        return f"Deck(cards={[str(c) for c in self.cards]})"
