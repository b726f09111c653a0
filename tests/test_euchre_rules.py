"""
Comprehensive tests for Euchre game rules
"""

import pytest
from euchre_engine import Card, GamePhase, InvalidAction, Suit, hand_points
from euchre_engine.exceptions import InvariantViolation

from conftest import rig_deal, TRICK_EXAMPLE_HANDS, TRICK_EXAMPLE_UPCARD


class TestDealingRules:
    """Test dealing rules"""

    def test_each_player_gets_5_cards(self, game):
        game.deal_new_hand()

        for player in game.state.players:
            assert len(player.hand) == 5, f"{player.name} should have 5 cards"

    def test_turned_up_card_and_kitty(self, game):
        game.deal_new_hand()

        assert isinstance(game.state.turned_up_card, Card)
        assert len(game.state.kitty) == 3
        assert game.state.card_count() == 24

    def test_bidding_starts_left_of_dealer(self, game):
        game.deal_new_hand(1)

        assert game.state.phase == GamePhase.TRUMP_SELECTION_ROUND1
        assert game.state.dealer_position == 1
        assert game.state.current_player_position == 2
        assert game.state.trump is None

    def test_all_dealt_cards_distinct(self, game):
        game.deal_new_hand()
        dealt = [c for p in game.state.players for c in p.hand]
        dealt += game.state.kitty + [game.state.turned_up_card]
        assert len(set(dealt)) == 24

    def test_cannot_deal_without_four_players(self):
        from euchre_engine import EuchreGame
        game = EuchreGame("short")
        game.add_player("Solo")
        with pytest.raises(InvalidAction):
            game.deal_new_hand()

    def test_upcard_logged(self, game):
        game.deal_new_hand()
        assert str(game.state.turned_up_card) in game.state.bid_log[0]


class TestDealerDiscard:
    """Test dealer discard after ordering up in round 1"""

    def test_dealer_has_6_cards_after_pickup(self, game):
        game.deal_new_hand()
        game.order_up()

        dealer = game.state.get_player(game.state.dealer_position)
        assert len(dealer.hand) == 6
        assert game.state.phase == GamePhase.DEALER_DISCARD
        assert game.state.current_player_position == game.state.dealer_position
        assert game.state.trump == game.state.turned_up_card.suit

    def test_dealer_has_5_cards_after_discard(self, game):
        game.deal_new_hand()
        game.order_up()

        dealer = game.state.get_player(game.state.dealer_position)
        discard = dealer.hand[0]
        game.dealer_discard(discard)

        assert len(dealer.hand) == 5
        assert discard in game.state.buried
        assert game.state.card_count() == 24

    def test_game_phase_after_discard(self, game):
        game.deal_new_hand()
        game.order_up()
        dealer = game.state.get_player(game.state.dealer_position)
        game.dealer_discard(dealer.hand[0])

        assert game.state.phase == GamePhase.PLAYING
        assert game.state.current_player_position == (game.state.dealer_position + 1) % 4

    def test_dealer_may_discard_the_upcard(self, game):
        game.deal_new_hand()
        upcard = game.state.turned_up_card
        game.order_up()
        game.dealer_discard(upcard)

        assert upcard not in game.state.get_player(game.state.dealer_position).hand

    def test_cannot_discard_card_not_held(self, game):
        rig_deal(game, TRICK_EXAMPLE_HANDS, TRICK_EXAMPLE_UPCARD)
        game.order_up()
        with pytest.raises(InvalidAction):
            game.dealer_discard(Card.from_string("AS"))

    def test_only_dealer_discards(self, game):
        game.deal_new_hand()
        game.order_up()
        with pytest.raises(InvalidAction):
            game.dealer_discard(game.state.players[0].hand[0], position=0)

    def test_round2_no_discard_needed(self, game):
        game.deal_new_hand()

        for _ in range(4):
            game.pass_bid()

        turned_up_suit = game.state.turned_up_card.suit
        other_suit = next(s for s in Suit if s != turned_up_suit)
        game.call_suit(other_suit)

        assert game.state.phase == GamePhase.PLAYING
        dealer = game.state.get_player(game.state.dealer_position)
        assert len(dealer.hand) == 5
        assert game.state.turned_up_card in game.state.buried


class TestTrumpSelectionRules:
    """Test trump selection rules"""

    def test_order_up_sets_maker(self, game):
        game.deal_new_hand()
        game.pass_bid()
        game.order_up()

        assert game.state.trump_caller_position == 1
        assert game.state.maker_team == 1

    def test_four_passes_move_to_round2(self, game):
        game.deal_new_hand()
        for _ in range(4):
            game.pass_bid()

        assert game.state.phase == GamePhase.TRUMP_SELECTION_ROUND2
        assert game.state.current_player_position == 0

    def test_round_detection_from_any_dealer(self, game):
        game.deal_new_hand(0)
        for expected in (1, 2, 3, 0):
            assert game.state.current_player_position == expected
            game.pass_bid()
        assert game.state.phase == GamePhase.TRUMP_SELECTION_ROUND2
        assert game.state.current_player_position == 1

    def test_cannot_call_turned_up_suit_in_round2(self, game):
        game.deal_new_hand()
        turned_up_suit = game.state.turned_up_card.suit
        for _ in range(4):
            game.pass_bid()

        with pytest.raises(InvalidAction, match="Cannot call turned up suit in round 2"):
            game.call_suit(turned_up_suit)

    def test_cannot_call_suit_in_round1(self, game):
        game.deal_new_hand()
        with pytest.raises(InvalidAction):
            game.call_suit(Suit.HEARTS)

    def test_cannot_order_up_in_round2(self, game):
        game.deal_new_hand()
        for _ in range(4):
            game.pass_bid()
        with pytest.raises(InvalidAction):
            game.order_up()

    def test_screw_the_dealer(self, game):
        game.deal_new_hand()
        for _ in range(4):
            game.pass_bid()
        for _ in range(3):
            game.pass_bid()
        assert not game.state.forced_dealer_pick

        # Dealer passes, everyone has now passed twice
        game.pass_bid()

        assert game.state.phase == GamePhase.TRUMP_SELECTION_ROUND2
        assert game.state.forced_dealer_pick is True
        assert game.state.current_player_position == game.state.dealer_position
        with pytest.raises(InvalidAction, match="Dealer cannot pass"):
            game.pass_bid()

    def test_forced_dealer_calls(self, game):
        game.deal_new_hand()
        for _ in range(8):
            game.pass_bid()

        suit = next(s for s in Suit if s != game.state.turned_up_card.suit)
        game.call_suit(suit)

        assert game.state.phase == GamePhase.PLAYING
        assert game.state.trump_caller_position == game.state.dealer_position
        assert game.state.forced_dealer_pick is False

    def test_acting_out_of_turn_rejected(self, game):
        game.deal_new_hand()
        with pytest.raises(InvalidAction):
            game.order_up(position=2)
        with pytest.raises(InvalidAction):
            game.pass_bid(position=3)

    def test_rejected_action_leaves_state_unchanged(self, game):
        game.deal_new_hand()
        for _ in range(4):
            game.pass_bid()
        before = game.state.to_dict(include_hands=True)

        with pytest.raises(InvalidAction):
            game.call_suit(game.state.turned_up_card.suit)
        with pytest.raises(InvalidAction):
            game.play_card(0, game.state.players[0].hand[0])

        assert game.state.to_dict(include_hands=True) == before

    def test_bid_log_records_accepted_actions_only(self, game):
        game.deal_new_hand()
        game.pass_bid()
        game.pass_bid()
        with pytest.raises(InvalidAction):
            game.call_suit(Suit.HEARTS)
        game.order_up(go_alone=True)

        log = game.state.bid_log
        assert len(log) == 4
        assert "passes" in log[1]
        assert "orders up" in log[3] and "(alone)" in log[3]

    def test_upcard_hidden_once_play_starts(self, game):
        game.deal_new_hand()
        assert game.get_state()["turned_up_card"] is not None
        game.order_up()
        assert game.get_state()["turned_up_card"] is not None
        game.dealer_discard(game.state.get_player(game.state.dealer_position).hand[0])
        assert game.get_state()["turned_up_card"] is None


class TestTrickResolution:
    """Trick winners"""

    def _start_hearts(self, game):
        rig_deal(game, TRICK_EXAMPLE_HANDS, TRICK_EXAMPLE_UPCARD)
        for _ in range(4):
            game.pass_bid()
        game.call_suit(Suit.HEARTS)

    def test_left_bower_wins_spade_lead(self, game):
        self._start_hearts(game)

        game.play_card(0, Card.from_string("AS"))
        game.play_card(1, Card.from_string("JD"))
        game.play_card(2, Card.from_string("10H"))
        result = game.play_card(3, Card.from_string("KS"))

        assert result["trick_complete"] is True
        assert result["trick_winner"] == 1
        assert game.state.team_tricks == [0, 1]
        assert game.state.players[1].tricks_won == 1
        assert game.state.current_player_position == 1
        assert len(game.state.current_trick) == 0

    def test_must_follow_suit(self, game):
        self._start_hearts(game)
        game.play_card(0, Card.from_string("AS"))
        game.play_card(1, Card.from_string("JD"))
        game.play_card(2, Card.from_string("10H"))

        with pytest.raises(InvalidAction, match="Must follow suit"):
            game.play_card(3, Card.from_string("AH"))

    def test_play_out_of_turn_rejected(self, game):
        self._start_hearts(game)
        with pytest.raises(InvalidAction):
            game.play_card(1, Card.from_string("JD"))

    def test_card_not_in_hand_rejected(self, game):
        self._start_hearts(game)
        with pytest.raises(InvalidAction):
            game.play_card(0, Card.from_string("JD"))

    def test_overfull_trick_is_invariant_violation(self, game):
        self._start_hearts(game)
        trick = game.state.current_trick
        for position, code in enumerate(("9D", "10D", "QD", "KD")):
            trick.add_card(position, Card.from_string(code))
        with pytest.raises(InvariantViolation):
            trick.add_card(0, Card.from_string("AD"))


class TestPausedTricks:
    """Deferred trick resolution"""

    def test_completed_trick_waits_for_resolve(self, game):
        game.pause_after_trick = True
        rig_deal(game, TRICK_EXAMPLE_HANDS, TRICK_EXAMPLE_UPCARD)
        for _ in range(4):
            game.pass_bid()
        game.call_suit(Suit.HEARTS)

        for position, code in enumerate(("AS", "JD", "10H")):
            game.play_card(position, Card.from_string(code))
        result = game.play_card(3, Card.from_string("KS"))

        assert result["trick_pending"] is True
        assert result["trick_winner"] == 1
        assert game.state.trick_pending
        assert len(game.state.current_trick) == 4
        assert game.get_valid_moves(1) == []
        with pytest.raises(InvalidAction, match="being resolved"):
            game.play_card(1, Card.from_string("9D"))

        resolved = game.resolve_trick()

        assert resolved["trick_winner"] == 1
        assert not game.state.trick_pending
        assert game.state.current_player_position == 1
        assert game.state.card_count() == 24

    def test_resolve_without_pending_trick_rejected(self, game):
        game.deal_new_hand()
        with pytest.raises(InvalidAction):
            game.resolve_trick()


class TestScoringRules:
    """Test scoring rules"""

    @pytest.mark.parametrize("tricks,alone,expected", [
        (5, False, (True, 2)),
        (4, False, (True, 1)),
        (3, False, (True, 1)),
        (2, False, (False, 2)),
        (0, False, (False, 2)),
        (5, True, (True, 4)),
        (4, True, (True, 1)),
        (3, True, (True, 1)),
        (1, True, (False, 2)),
    ])
    def test_hand_points_table(self, tricks, alone, expected):
        assert hand_points(tricks, alone) == expected

    def _finish(self, game, caller, maker_tricks, going_alone=False):
        game.deal_new_hand()
        game.state.trump = Suit.HEARTS
        game.state.trump_caller_position = caller
        game.state.going_alone = going_alone
        game.state.alone_player_position = caller if going_alone else None
        maker_team = caller % 2
        game.state.team_tricks[maker_team] = maker_tricks
        game.state.team_tricks[1 - maker_team] = 5 - maker_tricks
        return game._score_hand()

    def test_winning_team_gets_1_point_for_3_or_4_tricks(self, game):
        result = self._finish(game, caller=0, maker_tricks=3)

        assert result["winning_team"] == 0
        assert result["points_awarded"] == 1
        assert game.state.phase == GamePhase.HAND_COMPLETE

    def test_march_gives_2_points(self, game):
        result = self._finish(game, caller=0, maker_tricks=5)

        assert result["winning_team"] == 0
        assert result["points_awarded"] == 2
        assert result["march"] is True

    def test_euchre_gives_2_points(self, game):
        result = self._finish(game, caller=1, maker_tricks=2)

        assert result["winning_team"] == 0
        assert result["points_awarded"] == 2
        assert result["euchred"] is True
        assert game.state.team_scores == [2, 0]

    def test_alone_march_gives_4_points(self, game):
        result = self._finish(game, caller=1, maker_tricks=5, going_alone=True)

        assert result["winning_team"] == 1
        assert result["points_awarded"] == 4

    def test_alone_euchred_gives_defenders_2(self, game):
        result = self._finish(game, caller=1, maker_tricks=1, going_alone=True)

        assert result["winning_team"] == 0
        assert result["points_awarded"] == 2

    def test_trump_cleared_after_scoring(self, game):
        result = self._finish(game, caller=0, maker_tricks=4)

        assert game.state.trump is None
        assert result["trump"] == "H"
        assert game.state.last_hand_result is result
