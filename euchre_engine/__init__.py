"""
Euchre rules engine and heuristic bots
"""

from .card import Card, Suit, Rank
from .deck import Deck
from .player import Player, PlayerType, legal_cards
from .trick import Trick
from .game import EuchreGame, GameState, GamePhase, SeatView, hand_points
from .ai import HeuristicAI
from .driver import BotDriver
from .exceptions import InvalidAction, InvariantViolation

__version__ = "0.2.0"

__all__ = [
    "Card",
    "Suit",
    "Rank",
    "Deck",
    "Player",
    "PlayerType",
    "legal_cards",
    "Trick",
    "EuchreGame",
    "GameState",
    "GamePhase",
    "SeatView",
    "hand_points",
    "HeuristicAI",
    "BotDriver",
    "InvalidAction",
    "InvariantViolation",
]
