"""
Card, suit and rank definitions plus trump evaluation.

Bower detection, effective suit and card power all live on Card so that
bidding, trick resolution and the bots rank cards the same way.
"""

from enum import Enum
from typing import Optional


class Suit(Enum):
    """Card suits in Euchre"""
    SPADES = "S"
    HEARTS = "H"
    DIAMONDS = "D"
    CLUBS = "C"

    def __str__(self):
        symbols = {
            "C": "♣",
            "D": "♦",
            "H": "♥",
            "S": "♠"
        }
        return symbols[self.value]

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)

    def same_color(self, other: "Suit") -> bool:
        return self.is_red == other.is_red

    @classmethod
    def from_string(cls, s: str) -> "Suit":
        """Create Suit from a letter (C/D/H/S) or its symbol"""
        mapping = {
            "C": cls.CLUBS,
            "D": cls.DIAMONDS,
            "H": cls.HEARTS,
            "S": cls.SPADES,
            "♣": cls.CLUBS,
            "♦": cls.DIAMONDS,
            "♥": cls.HEARTS,
            "♠": cls.SPADES,
        }
        return mapping[s.strip().upper()]


class Rank(Enum):
    """Card ranks in Euchre (9 through Ace)"""
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self):
        names = {
            9: "9",
            10: "10",
            11: "J",
            12: "Q",
            13: "K",
            14: "A"
        }
        return names[self.value]

    @property
    def order(self) -> int:
        """Base rank value used for card power: 9=1 ... A=6"""
        return self.value - 8

    @classmethod
    def from_string(cls, s: str) -> "Rank":
        """Create Rank from string representation"""
        mapping = {
            "9": cls.NINE,
            "10": cls.TEN,
            "J": cls.JACK,
            "Q": cls.QUEEN,
            "K": cls.KING,
            "A": cls.ACE,
        }
        return mapping[s.strip().upper()]


RIGHT_BOWER_POWER = 200
LEFT_BOWER_POWER = 190
TRUMP_BONUS = 100
FOLLOW_BONUS = 50


class Card:
    """A single immutable Euchre card; equality is by (rank, suit)"""

    __slots__ = ("_suit", "_rank")

    def __init__(self, suit: Suit, rank: Rank):
        object.__setattr__(self, "_suit", suit)
        object.__setattr__(self, "_rank", rank)

    @property
    def suit(self) -> Suit:
        return self._suit

    @property
    def rank(self) -> Rank:
        return self._rank

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    def __str__(self):
        return f"{self.rank}{self.suit}"

    def __repr__(self):
        return f"Card({self.suit.name}, {self.rank.name})"

    def __eq__(self, other):
        if not isinstance(other, Card):
            return False
        return self.suit == other.suit and self.rank == other.rank

    def __hash__(self):
        return hash((self.suit, self.rank))

    def __reduce__(self):
        return (Card, (self.suit, self.rank))

    @property
    def code(self) -> str:
        """Ascii form, e.g. 'JH', '10S'"""
        return f"{self.rank}{self.suit.value}"

    def is_bower(self, trump: Optional[Suit]) -> bool:
        """Check if this card is either bower"""
        return self.is_right_bower(trump) or self.is_left_bower(trump)

    def is_right_bower(self, trump: Optional[Suit]) -> bool:
        """Jack of the trump suit"""
        return trump is not None and self.rank == Rank.JACK and self.suit == trump

    def is_left_bower(self, trump: Optional[Suit]) -> bool:
        """Jack of the other suit of trump's color"""
        return (
            trump is not None
            and self.rank == Rank.JACK
            and self.suit != trump
            and self.suit.same_color(trump)
        )

    def effective_suit(self, trump: Optional[Suit]) -> Suit:
        """Suit the card counts as when following; both bowers count as trump"""
        if trump is not None and self.is_bower(trump):
            return trump
        return self.suit

    def is_trump(self, trump: Optional[Suit]) -> bool:
        return trump is not None and self.effective_suit(trump) == trump

    def power(self, trump: Optional[Suit], lead_suit: Optional[Suit] = None) -> int:
        """
        Rank this card within a trick. Higher wins.

        Right bower 200, left bower 190, other trump 100 + rank order,
        cards following the lead 50 + rank order. A card that neither
        follows the lead nor is trump scores 0 and can never win.
        """
        if self.is_right_bower(trump):
            return RIGHT_BOWER_POWER
        if self.is_left_bower(trump):
            return LEFT_BOWER_POWER

        is_trump = self.is_trump(trump)
        follows = lead_suit is not None and self.effective_suit(trump) == lead_suit

        if lead_suit is not None and not is_trump and not follows:
            return 0

        return (TRUMP_BONUS if is_trump else FOLLOW_BONUS) + self.rank.order

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """
        Create a Card from string like '9C', 'AS', '10H' or 'J♦'.
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        try:
            rank = Rank.from_string(rank_str)
            suit = Suit.from_string(suit_str)
        except KeyError:
            raise ValueError(f"Invalid card string: {s}") from None

        return cls(suit, rank)
