"""
Test follow-suit enforcement
"""

import random

import pytest
from euchre_engine import Card, GamePhase, Player, PlayerType, Suit, legal_cards
from euchre_engine.deck import full_deck

from conftest import cards, rig_deal, TRICK_EXAMPLE_HANDS, TRICK_EXAMPLE_UPCARD


class TestLegalCards:
    """legal_cards on bare hands"""

    def test_leading_allows_everything(self):
        hand = cards("9H", "AS", "JD")
        assert legal_cards(hand, Suit.HEARTS, None) == hand

    def test_must_follow_suit_when_able(self):
        hand = cards("KH", "KC", "9S")
        assert legal_cards(hand, Suit.SPADES, Suit.HEARTS) == cards("KH")

    def test_void_allows_everything(self):
        hand = cards("9C", "10C", "9S")
        assert legal_cards(hand, Suit.HEARTS, Suit.DIAMONDS) == hand

    def test_left_bower_must_follow_trump(self):
        hand = cards("JD", "9C")
        assert legal_cards(hand, Suit.HEARTS, Suit.HEARTS) == cards("JD")

    def test_left_bower_does_not_follow_printed_suit(self):
        # Diamonds led, hearts trump: J♦ is a heart, so a void-in-diamonds hand may play anything
        hand = cards("JD", "9C")
        assert legal_cards(hand, Suit.HEARTS, Suit.DIAMONDS) == hand

    def test_before_trump_is_set(self):
        hand = cards("JD", "9D", "AC")
        assert legal_cards(hand, None, Suit.DIAMONDS) == cards("JD", "9D")

    @pytest.mark.parametrize("seed", range(20))
    def test_follow_subset_property(self, seed):
        rng = random.Random(seed)
        deck = full_deck()
        rng.shuffle(deck)
        hand = deck[:5]
        trump, lead = rng.choice(list(Suit)), rng.choice(list(Suit))
        followers = [c for c in hand if c.effective_suit(trump) == lead]

        legal = legal_cards(hand, trump, lead)

        if followers:
            assert legal == followers
        else:
            assert legal == hand


class TestGetValidMoves:
    """Valid moves through the engine"""

    def _start_hearts(self, game):
        rig_deal(game, TRICK_EXAMPLE_HANDS, TRICK_EXAMPLE_UPCARD)
        for _ in range(4):
            game.pass_bid()
        game.call_suit(Suit.HEARTS)
        return game

    def test_no_moves_before_trump_called(self, game):
        game.deal_new_hand()
        assert game.get_valid_moves() == []

    def test_leader_may_play_anything(self, game):
        self._start_hearts(game)
        assert game.state.current_player_position == 0
        assert len(game.get_valid_moves(0)) == 5

    def test_follower_restricted_to_lead_suit(self, game):
        self._start_hearts(game)
        game.play_card(0, Card.from_string("AS"))
        game.play_card(1, Card.from_string("JD"))
        game.play_card(2, Card.from_string("10H"))
        assert game.get_valid_moves(3) == cards("KS", "QS", "JS")

    def test_void_follower_may_trump(self, game):
        self._start_hearts(game)
        game.play_card(0, Card.from_string("AS"))
        assert len(game.get_valid_moves(1)) == 5

    def test_moves_for_other_perspective(self, game):
        self._start_hearts(game)
        assert game.state.phase == GamePhase.PLAYING
        assert set(game.get_valid_moves(2)) == set(cards(*TRICK_EXAMPLE_HANDS[2]))


class TestSortedHand:
    """Display order of a player's hand"""

    def _player(self, *codes):
        player = Player("Player 1", PlayerType.HUMAN, 0)
        player.add_cards(cards(*codes))
        return player

    def test_trump_last_bowers_on_top(self):
        player = self._player("JD", "9H", "AS", "KC", "10S")
        assert player.sorted_hand(Suit.HEARTS) == cards("KC", "10S", "AS", "9H", "JD")

    def test_before_trump_groups_printed_suits(self):
        player = self._player("JD", "9H", "AS", "KC", "10S")
        assert player.sorted_hand() == cards("KC", "JD", "9H", "10S", "AS")

    def test_sorting_leaves_hand_untouched(self):
        player = self._player("JD", "9H", "AS")
        player.sorted_hand(Suit.HEARTS)
        assert player.hand == cards("JD", "9H", "AS")
