"""Shared fixtures for engine tests."""

import pytest

from euchre_engine import Card, EuchreGame, PlayerType
from euchre_engine.deck import full_deck


def cards(*codes):
    return [Card.from_string(code) for code in codes]


def rig_deal(game, hands, upcard, dealer=3):
    """
    Deal a hand, then replace every seat's cards and the upcard with known
    ones. The kitty is rebuilt from what is left so all 24 cards are
    accounted for.
    """
    game.deal_new_hand(dealer)
    state = game.state
    for player, codes in zip(state.players, hands):
        player.hand = cards(*codes)
    state.turned_up_card = Card.from_string(upcard)
    used = {c for p in state.players for c in p.hand} | {state.turned_up_card}
    state.kitty = [c for c in full_deck() if c not in used]
    state.check_card_conservation()
    return game


@pytest.fixture
def game():
    """Four human seats, seeded shuffle, seat 3 deals first"""
    game = EuchreGame("test-game", seed=1234)
    game.add_player("Player 1", PlayerType.HUMAN)
    game.add_player("Player 2", PlayerType.HUMAN)
    game.add_player("Player 3", PlayerType.HUMAN)
    game.add_player("Player 4", PlayerType.HUMAN)
    return game


@pytest.fixture
def bot_game():
    """All four seats driven by bots"""
    return EuchreGame.with_seats(game_id="bot-game", human_positions=(), seed=99)


# Seat 1 has no spades, so J♦ is its only way to win a spade lead once
# hearts are trump. Dealer is seat 3; seat 0 leads.
TRICK_EXAMPLE_HANDS = [
    ["AS", "9S", "10S", "QC", "KC"],
    ["JD", "9D", "10D", "QD", "KD"],
    ["10H", "QH", "AC", "10C", "JC"],
    ["KS", "QS", "JS", "AD", "AH"],
]
TRICK_EXAMPLE_UPCARD = "9C"


def play_out_hand(game):
    """Play the first legal card for whoever is on turn until the hand ends"""
    results = []
    while game.state.phase.value == "playing":
        position = game.state.current_player_position
        valid = game.get_valid_moves(position)
        results.append(game.play_card(position, valid[0]))
    return results
