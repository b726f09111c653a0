"""
Heuristic bot for non-human seats.

Every decision is made from a SeatView: the bot's own hand plus public
table state (upcard, trump, dealer, the cards in the current trick).
"""

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .card import Card, Rank, Suit
from .config import AIThresholds
from .game import BIDDING_PHASES, EuchreGame, GamePhase, SeatView
from .player import legal_cards, partner_of

logger = logging.getLogger(__name__)

SUIT_ORDER = [Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS]


def hand_strength_for_trump(hand: Sequence[Card], trump: Suit) -> float:
    """
    Heuristic value of a hand if trump were the given suit.

    Right bower 9, left bower 7, other trump 2 + 0.35 x rank order,
    side aces 1.2, side kings 0.4. Not a probability.
    """
    score = 0.0
    for card in hand:
        if card.is_right_bower(trump):
            score += 9
        elif card.is_left_bower(trump):
            score += 7
        elif card.effective_suit(trump) == trump:
            score += 2 + 0.35 * card.rank.order
        elif card.rank == Rank.ACE:
            score += 1.2
        elif card.rank == Rank.KING:
            score += 0.4
    return score


def best_suit_choice(hand: Sequence[Card], forbidden_suit: Optional[Suit] = None) -> Tuple[Suit, float]:
    """Strongest trump candidate other than forbidden_suit, with its score"""
    candidates = [s for s in SUIT_ORDER if s != forbidden_suit]
    scores = np.array([hand_strength_for_trump(hand, s) for s in candidates])
    best = int(np.argmax(scores))
    return candidates[best], float(scores[best])


def keep_value(card: Card, trump: Suit) -> int:
    """How much a card is worth holding once trump is known"""
    value = card.power(trump, card.effective_suit(trump))
    if card.is_trump(trump):
        value += 50
    return value


def choose_discard(hand: Sequence[Card], trump: Suit) -> Card:
    """Card with the lowest keep value; weak side cards go before any trump"""
    return min(hand, key=lambda c: (keep_value(c, trump), c.rank.order))


def simulate_pickup(hand: Sequence[Card], upcard: Card) -> List[Card]:
    """Dealer's hand after taking the upcard and discarding the weakest card"""
    with_upcard = list(hand) + [upcard]
    discard = choose_discard(with_upcard, upcard.suit)
    with_upcard.remove(discard)
    return with_upcard


def should_order_up(hand: Sequence[Card], upcard_suit: Suit, seat_is_dealer: bool,
                    seat_is_dealer_partner: bool, thresholds: AIThresholds) -> bool:
    score = hand_strength_for_trump(hand, upcard_suit)
    if seat_is_dealer:
        threshold = thresholds.order_up_dealer
    elif seat_is_dealer_partner:
        threshold = thresholds.order_up_dealer_partner
    else:
        threshold = thresholds.order_up
    return score >= threshold


def should_call_suit_round2(hand: Sequence[Card], forbidden_suit: Suit, must_pick: bool,
                            thresholds: AIThresholds) -> Tuple[bool, Suit, float]:
    suit, score = best_suit_choice(hand, forbidden_suit)
    if must_pick:
        return True, suit, score
    return score >= thresholds.call_round2, suit, score


def should_go_alone(hand: Sequence[Card], trump: Suit, seat_is_dealer: bool,
                    thresholds: AIThresholds) -> bool:
    """
    Deliberately rare. The right bower is mandatory, the hand must clear a
    high strength bar, and it needs either 4+ trump, 3 trump backed by the
    left bower or a side ace, or both bowers with a side ace.
    """
    if not any(c.is_right_bower(trump) for c in hand):
        return False

    base = thresholds.alone_dealer if seat_is_dealer else thresholds.alone
    if hand_strength_for_trump(hand, trump) < base:
        return False

    has_left = any(c.is_left_bower(trump) for c in hand)
    trump_count = sum(1 for c in hand if c.is_trump(trump))
    side_aces = sum(1 for c in hand if c.rank == Rank.ACE and not c.is_trump(trump))

    if trump_count >= 4:
        return True
    if trump_count >= 3 and (has_left or side_aces >= 1):
        return True
    return trump_count >= 2 and has_left and side_aces >= 1


def choose_lead(legal: Sequence[Card], trump: Suit) -> Card:
    trump_cards = [c for c in legal if c.is_trump(trump)]
    has_top_trump = any(c.is_bower(trump) or c.rank == Rank.ACE for c in trump_cards)
    if has_top_trump:
        return max(trump_cards, key=lambda c: c.power(trump, trump))

    side_aces = [c for c in legal if c.rank == Rank.ACE and not c.is_trump(trump)]
    if side_aces:
        return side_aces[0]

    return min(legal, key=lambda c: c.power(trump, c.effective_suit(trump)))


def _dump_score(card: Card, trump: Suit, lead_suit: Suit) -> Tuple[int, int]:
    power = card.power(trump, lead_suit)
    if card.is_trump(trump):
        power += 50
    return power, card.rank.order


def choose_play_card(hand: Sequence[Card], trump: Suit, trick_cards: Sequence[Tuple[int, Card]],
                     position: Optional[int] = None, active_player_count: int = 4) -> Card:
    """
    Pick a card to play.

    Leading: top trump if holding a bower or the trump ace, else a side ace,
    else the weakest card. Following: the cheapest card that beats the
    current best, else shed the weakest card, side suits before trump.
    Playing last behind a partner who is already winning: never overtake,
    whether the partner's card is trump or not, and shed the lowest side
    card if one is legal.
    """
    if not trick_cards:
        return choose_lead(legal_cards(hand, trump, None), trump)

    lead_suit = trick_cards[0][1].effective_suit(trump)
    legal = legal_cards(hand, trump, lead_suit)

    winner_position, winner_card = max(trick_cards, key=lambda pc: pc[1].power(trump, lead_suit))
    best_power = winner_card.power(trump, lead_suit)

    plays_last = len(trick_cards) == active_player_count - 1
    if position is not None and plays_last and winner_position == partner_of(position):
        side_cards = [c for c in legal if not c.is_trump(trump)]
        return min(side_cards or legal, key=lambda c: _dump_score(c, trump, lead_suit))

    winners = [c for c in legal if c.power(trump, lead_suit) > best_power]
    if winners:
        return min(winners, key=lambda c: c.power(trump, lead_suit))

    return min(legal, key=lambda c: _dump_score(c, trump, lead_suit))


class HeuristicAI:
    """Turns a SeatView into one engine action"""

    def __init__(self, thresholds: Optional[AIThresholds] = None):
        self.thresholds = thresholds or AIThresholds.from_env()

    def decide_bid(self, view: SeatView) -> Tuple[str, Optional[Suit], bool]:
        """
        Returns (action, suit, go_alone) with action one of
        'order_up', 'call', 'pass'.
        """
        hand = view.hand
        upcard = view.upcard

        if view.phase == GamePhase.TRUMP_SELECTION_ROUND1:
            trump = upcard.suit
            score = hand_strength_for_trump(hand, trump)
            logger.debug("Seat %d round 1: %.2f for %s", view.position, score, trump)
            if should_order_up(hand, trump, view.is_dealer, view.is_dealer_partner, self.thresholds):
                alone_hand = simulate_pickup(hand, upcard) if view.is_dealer else hand
                alone = should_go_alone(alone_hand, trump, view.is_dealer, self.thresholds)
                return "order_up", trump, alone
            return "pass", None, False

        must_pick = view.forced_dealer_pick and view.is_dealer
        call, suit, score = should_call_suit_round2(hand, upcard.suit, must_pick, self.thresholds)
        logger.debug("Seat %d round 2: best %s at %.2f", view.position, suit, score)
        if call:
            return "call", suit, should_go_alone(hand, suit, view.is_dealer, self.thresholds)
        return "pass", None, False

    def decide_discard(self, view: SeatView) -> Card:
        return choose_discard(view.hand, view.trump)

    def decide_play(self, view: SeatView) -> Card:
        return choose_play_card(view.hand, view.trump, view.trick_cards,
                                view.position, view.active_player_count)

    def act(self, game: EuchreGame, position: int):
        """Apply this bot's action for the seat whose turn it is"""
        view = game.get_view(position)

        if view.phase in BIDDING_PHASES:
            action, suit, alone = self.decide_bid(view)
            if action == "order_up":
                game.order_up(go_alone=alone, position=position)
            elif action == "call":
                game.call_suit(suit, go_alone=alone, position=position)
            else:
                game.pass_bid(position=position)
        elif view.phase == GamePhase.DEALER_DISCARD:
            game.dealer_discard(self.decide_discard(view), position=position)
        elif view.phase == GamePhase.PLAYING:
            game.play_card(position, self.decide_play(view))
        else:
            raise ValueError(f"No bot action during {view.phase.value}")
