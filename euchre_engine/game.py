"""
Main Euchre Game Engine

EuchreGame owns a single GameState and is the only thing that mutates it.
Every input operation either applies completely or raises InvalidAction
and leaves the state untouched.
"""

import logging
import random
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from .card import Card, Suit
from .config import DECK_SIZE, HAND_SIZE, TRICKS_PER_HAND, WINNING_SCORE
from .deck import Deck
from .exceptions import InvalidAction, InvariantViolation
from .player import SEATS, Player, PlayerType, left_of, partner_of, team_of
from .trick import Trick

logger = logging.getLogger(__name__)


class GamePhase(Enum):
    """Phases of a Euchre game"""
    IDLE = "idle"
    TRUMP_SELECTION_ROUND1 = "bid1"  # Can order up the turned up card
    DEALER_DISCARD = "dealer_discard"
    TRUMP_SELECTION_ROUND2 = "bid2"  # Can call any suit except turned up
    PLAYING = "playing"
    HAND_COMPLETE = "hand_over"
    GAME_OVER = "game_over"


BIDDING_PHASES = (GamePhase.TRUMP_SELECTION_ROUND1, GamePhase.TRUMP_SELECTION_ROUND2)
ACTIVE_PHASES = BIDDING_PHASES + (GamePhase.DEALER_DISCARD, GamePhase.PLAYING)


def hand_points(maker_tricks: int, going_alone: bool) -> Tuple[bool, int]:
    """
    Score one hand from the makers' trick count.

    Returns (makers_scored, points). Makers take 1 point for 3 or 4 tricks
    and 2 for a march (4 when alone). Fewer than 3 tricks is a euchre:
    the defenders take 2.
    """
    if maker_tricks == TRICKS_PER_HAND:
        return True, 4 if going_alone else 2
    if maker_tricks >= 3:
        return True, 1
    return False, 2


class SeatView(NamedTuple):
    """What a single seat is allowed to see"""
    position: int
    phase: GamePhase
    dealer_position: int
    current_player_position: int
    hand: Tuple[Card, ...]
    upcard: Optional[Card]
    trump: Optional[Suit]
    trump_caller_position: Optional[int]
    alone_player_position: Optional[int]
    inactive_position: Optional[int]
    forced_dealer_pick: bool
    trick_cards: Tuple[Tuple[int, Card], ...]
    lead_suit: Optional[Suit]
    active_player_count: int
    team_scores: Tuple[int, int]
    team_tricks: Tuple[int, int]

    @property
    def is_dealer(self) -> bool:
        return self.position == self.dealer_position

    @property
    def is_dealer_partner(self) -> bool:
        return self.position == partner_of(self.dealer_position)


class GameState:
    """Represents the current state of a Euchre game"""

    def __init__(self, game_id: str, rng: Optional[random.Random] = None):
        self.game_id = game_id
        self.phase = GamePhase.IDLE
        self.players: List[Player] = []
        self.deck = Deck(rng)
        self.dealer_position = 3
        self.current_player_position = 0

        # Trump selection
        self.turned_up_card: Optional[Card] = None
        self.upcard_on_table = False
        self.kitty: List[Card] = []
        self.buried: List[Card] = []
        self.trump: Optional[Suit] = None
        self.trump_caller_position: Optional[int] = None
        self.going_alone = False
        self.alone_player_position: Optional[int] = None
        self.forced_dealer_pick = False

        # Score tracking, indexed by team (seat % 2)
        self.team_scores = [0, 0]
        self.team_tricks = [0, 0]

        # Current hand
        self.current_trick: Optional[Trick] = None
        self.tricks_played: List[Trick] = []
        self.trick_pending = False
        self.hand_number = 0
        self.bid_log: List[str] = []
        self.last_hand_result: Optional[Dict[str, Any]] = None

    def add_player(self, name: str, player_type: PlayerType):
        """Add a player to the game"""
        if len(self.players) >= SEATS:
            raise ValueError("Game already has 4 players")

        position = len(self.players)
        player = Player(name, player_type, position)
        self.players.append(player)

    def get_player(self, position: int) -> Player:
        """Get player at a specific position"""
        return self.players[position]

    def get_current_player(self) -> Player:
        """Get the player whose turn it is"""
        return self.players[self.current_player_position]

    @property
    def maker_team(self) -> Optional[int]:
        if self.trump_caller_position is None:
            return None
        return team_of(self.trump_caller_position)

    @property
    def inactive_position(self) -> Optional[int]:
        """Partner of a lone player sits out the hand"""
        if self.alone_player_position is None:
            return None
        return partner_of(self.alone_player_position)

    @property
    def active_player_count(self) -> int:
        return SEATS - 1 if self.alone_player_position is not None else SEATS

    @property
    def tricks_completed(self) -> int:
        return len(self.tricks_played)

    @property
    def last_trick(self) -> Optional[Trick]:
        return self.tricks_played[-1] if self.tricks_played else None

    @property
    def upcard_visible(self) -> bool:
        return self.phase in BIDDING_PHASES + (GamePhase.DEALER_DISCARD,)

    @property
    def winning_team(self) -> Optional[int]:
        for team, score in enumerate(self.team_scores):
            if score >= WINNING_SCORE:
                return team
        return None

    def next_position(self, position: int) -> int:
        """Clockwise neighbour, skipping a lone player's partner"""
        nxt = left_of(position)
        if nxt == self.inactive_position:
            nxt = left_of(nxt)
        return nxt

    def normalize_position(self, position: int) -> int:
        if position == self.inactive_position:
            return self.next_position(position)
        return position

    def card_count(self) -> int:
        """Every card the hand session accounts for"""
        count = sum(len(p.hand) for p in self.players)
        count += len(self.kitty) + len(self.buried)
        count += sum(len(t) for t in self.tricks_played)
        if self.current_trick is not None and self.current_trick not in self.tricks_played:
            count += len(self.current_trick)
        if self.upcard_on_table:
            count += 1
        return count

    def check_card_conservation(self):
        count = self.card_count()
        if count != DECK_SIZE:
            raise InvariantViolation(f"Hand session accounts for {count} cards, expected {DECK_SIZE}")

    def to_dict(self, include_hands: bool = False, perspective_position: Optional[int] = None) -> Dict[str, Any]:
        """
        Convert game state to dictionary for JSON serialization.

        Args:
            include_hands: Whether to include all player hands
            perspective_position: If set, only show that player's hand
        """
        upcard = self.turned_up_card if self.upcard_visible else None
        state = {
            "game_id": self.game_id,
            "phase": self.phase.value,
            "hand_number": self.hand_number,
            "dealer_position": self.dealer_position,
            "current_player_position": self.current_player_position,
            "turned_up_card": str(upcard) if upcard else None,
            "trump": self.trump.value if self.trump else None,
            "trump_caller_position": self.trump_caller_position,
            "maker_team": self.maker_team,
            "going_alone": self.going_alone,
            "alone_player_position": self.alone_player_position,
            "inactive_position": self.inactive_position,
            "forced_dealer_pick": self.forced_dealer_pick,
            "team_scores": list(self.team_scores),
            "team_tricks": list(self.team_tricks),
            "winning_team": self.winning_team,
            "players": [],
            "current_trick": self.current_trick.to_dict() if self.current_trick else None,
            "trick_pending": self.trick_pending,
            "last_trick": self.last_trick.to_dict() if self.last_trick else None,
            "tricks_completed": self.tricks_completed,
            "bid_log": list(self.bid_log),
            "last_hand_result": self.last_hand_result,
        }

        for player in self.players:
            player_dict = player.to_dict()

            # Add hand information based on parameters
            if include_hands or (perspective_position is not None and player.position == perspective_position):
                player_dict["hand"] = [str(card) for card in player.hand]

            state["players"].append(player_dict)

        return state


class EuchreGame:
    """Main Euchre game controller"""

    def __init__(
        self,
        game_id: str = "local",
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        pause_after_trick: bool = False,
        initial_dealer: int = 3,
    ):
        """
        Args:
            game_id: Identifier echoed in state snapshots
            seed: Seed for a private random.Random (ignored if rng is given)
            rng: Random source used for shuffling
            pause_after_trick: Hold each completed trick until resolve_trick()
            initial_dealer: Dealer of the first hand
        """
        self.rng = rng or random.Random(seed)
        self.pause_after_trick = pause_after_trick
        self.initial_dealer = initial_dealer
        self.state = GameState(game_id, self.rng)
        self.state.dealer_position = initial_dealer

    @classmethod
    def with_seats(cls, names: Optional[List[str]] = None, human_positions=(0,), **kwargs) -> "EuchreGame":
        """Create a game with four seats filled; seats not listed as human are bots"""
        game = cls(**kwargs)
        names = names or ["You", "West", "North", "East"]
        for position, name in enumerate(names):
            player_type = PlayerType.HUMAN if position in human_positions else PlayerType.HEURISTIC_AI
            game.add_player(name, player_type)
        return game

    def add_player(self, name: str, player_type: PlayerType = PlayerType.HUMAN):
        """Add a player to the game"""
        self.state.add_player(name, player_type)

    def _log(self, message: str):
        self.state.bid_log.append(message)
        logger.info("[%s] %s", self.state.game_id, message)

    def _name(self, position: int) -> str:
        return self.state.get_player(position).name

    def _require_phase(self, *phases: GamePhase, action: str):
        if self.state.phase not in phases:
            logger.debug("Rejected %s during %s", action, self.state.phase.value)
            raise InvalidAction(f"Cannot {action} during {self.state.phase.value}")

    def _acting_position(self, position: Optional[int]) -> int:
        if position is not None and position != self.state.current_player_position:
            raise InvalidAction(f"Not player {position}'s turn")
        return self.state.current_player_position

    def _reset_hand_state(self):
        state = self.state
        state.trump = None
        state.trump_caller_position = None
        state.turned_up_card = None
        state.upcard_on_table = False
        state.kitty = []
        state.buried = []
        state.going_alone = False
        state.alone_player_position = None
        state.forced_dealer_pick = False
        state.team_tricks = [0, 0]
        state.tricks_played = []
        state.current_trick = None
        state.trick_pending = False
        state.bid_log = []
        for player in state.players:
            player.clear_hand()
            player.tricks_won = 0

    def deal_new_hand(self, dealer_position: Optional[int] = None):
        """
        Shuffle, deal 5 cards to each seat starting left of the dealer and
        turn up the next card. Supersedes any hand in progress.
        """
        state = self.state
        if len(state.players) != SEATS:
            raise InvalidAction("Need 4 players to deal")
        if state.phase == GamePhase.GAME_OVER:
            raise InvalidAction("Game is over")

        if dealer_position is not None:
            state.dealer_position = dealer_position % SEATS

        self._reset_hand_state()
        state.hand_number += 1

        state.deck.reset()
        state.deck.shuffle()

        first = left_of(state.dealer_position)
        hands = state.deck.deal_round_robin(first, HAND_SIZE, SEATS)
        for player, cards in zip(state.players, hands):
            player.add_cards(cards)

        state.turned_up_card = state.deck.draw()
        state.upcard_on_table = True
        state.kitty = list(state.deck.cards)
        state.check_card_conservation()

        state.current_player_position = first
        state.phase = GamePhase.TRUMP_SELECTION_ROUND1
        self._log(f"New hand. {self._name(state.dealer_position)} deals; upcard is {state.turned_up_card}.")

    def advance_after_hand(self):
        """Move the deal one seat clockwise and deal the next hand"""
        if self.state.phase == GamePhase.GAME_OVER:
            raise InvalidAction("Game is over")
        self._require_phase(GamePhase.HAND_COMPLETE, action="advance to the next hand")
        self.deal_new_hand(left_of(self.state.dealer_position))

    def reset_game(self):
        """Clear scores and hands and return to idle"""
        self._reset_hand_state()
        self.state.team_scores = [0, 0]
        self.state.hand_number = 0
        self.state.last_hand_result = None
        self.state.dealer_position = self.initial_dealer
        self.state.current_player_position = 0
        self.state.phase = GamePhase.IDLE
        logger.info("[%s] Game reset", self.state.game_id)

    def _set_contract(self, caller: int, trump: Suit, go_alone: bool):
        state = self.state
        state.trump = trump
        state.trump_caller_position = caller
        state.going_alone = go_alone
        state.alone_player_position = caller if go_alone else None
        state.upcard_on_table = False

    def pass_bid(self, position: Optional[int] = None):
        """Current player passes on naming trump"""
        self._require_phase(*BIDDING_PHASES, action="pass")
        state = self.state
        passer = self._acting_position(position)

        if state.phase == GamePhase.TRUMP_SELECTION_ROUND2 and state.forced_dealer_pick:
            raise InvalidAction("Dealer cannot pass in round 2 (screw the dealer)")

        self._log(f"{self._name(passer)} passes.")

        first = left_of(state.dealer_position)
        nxt = left_of(passer)
        if nxt != first:
            state.current_player_position = nxt
            return

        if state.phase == GamePhase.TRUMP_SELECTION_ROUND1:
            state.phase = GamePhase.TRUMP_SELECTION_ROUND2
            state.current_player_position = first
            self._log(f"Round 2: name a suit other than {state.turned_up_card.suit}, or pass.")
        else:
            state.forced_dealer_pick = True
            state.current_player_position = state.dealer_position
            self._log(f"Screw the dealer: {self._name(state.dealer_position)} must name trump.")

    def order_up(self, go_alone: bool = False, position: Optional[int] = None):
        """
        Current player orders the upcard's suit as trump (round 1).

        The dealer picks the upcard up and must discard, unless the caller
        is going alone with the dealer as partner; then the upcard is buried.
        """
        self._require_phase(GamePhase.TRUMP_SELECTION_ROUND1, action="order up")
        state = self.state
        caller = self._acting_position(position)
        upcard = state.turned_up_card

        self._set_contract(caller, upcard.suit, go_alone)
        alone_note = " (alone)" if go_alone else ""
        self._log(f"{self._name(caller)} orders up {upcard}{alone_note}. Trump is {upcard.suit}.")

        if state.inactive_position == state.dealer_position:
            state.buried.append(upcard)
            self._log(f"{self._name(state.dealer_position)} sits out; the upcard is turned down.")
            self._begin_play()
            return

        state.get_player(state.dealer_position).add_cards([upcard])
        state.phase = GamePhase.DEALER_DISCARD
        state.current_player_position = state.dealer_position
        state.check_card_conservation()

    def dealer_discard(self, card: Card, position: Optional[int] = None):
        """Dealer lays one card from a 6-card hand face down"""
        self._require_phase(GamePhase.DEALER_DISCARD, action="discard")
        state = self.state
        dealer_position = self._acting_position(position)
        dealer = state.get_player(dealer_position)

        if not dealer.has_card(card):
            raise InvalidAction(f"Dealer does not have card {card}")

        dealer.remove_card(card)
        state.buried.append(card)
        self._log(f"{dealer.name} picked up and discarded.")
        self._begin_play()

    def call_suit(self, suit: Suit, go_alone: bool = False, position: Optional[int] = None):
        """Current player names trump in round 2; the upcard stays buried"""
        self._require_phase(GamePhase.TRUMP_SELECTION_ROUND2, action="call a suit")
        state = self.state
        caller = self._acting_position(position)

        if suit is None:
            raise InvalidAction("Must specify suit in round 2")
        if suit == state.turned_up_card.suit:
            raise InvalidAction("Cannot call turned up suit in round 2")

        self._set_contract(caller, suit, go_alone)
        state.buried.append(state.turned_up_card)
        alone_note = " (alone)" if go_alone else ""
        self._log(f"{self._name(caller)} calls {suit}{alone_note}. Trump is {suit}.")
        self._begin_play()

    def _begin_play(self):
        state = self.state
        state.forced_dealer_pick = False
        state.phase = GamePhase.PLAYING
        self._start_new_trick(left_of(state.dealer_position))
        state.check_card_conservation()

    def _start_new_trick(self, lead_position: int):
        state = self.state
        lead_position = state.normalize_position(lead_position)
        state.current_trick = Trick(lead_position, state.trump, state.active_player_count)
        state.current_player_position = lead_position

    def play_card(self, position: int, card: Card) -> Dict[str, Any]:
        """
        Player at position plays a card.
        Returns information about what happened.
        """
        self._require_phase(GamePhase.PLAYING, action="play a card")
        state = self.state

        if state.trick_pending:
            raise InvalidAction("Trick is being resolved")
        if position == state.inactive_position:
            raise InvalidAction(f"Player {position} sits out this hand")
        if position != state.current_player_position:
            raise InvalidAction(f"Not player {position}'s turn")

        player = state.get_player(position)
        if not player.has_card(card):
            raise InvalidAction(f"Player does not have card {card}")

        trick = state.current_trick
        valid_cards = player.get_valid_cards(trick.lead_suit, state.trump)
        if card not in valid_cards:
            raise InvalidAction(f"Must follow suit. Valid cards: {[str(c) for c in valid_cards]}")

        player.remove_card(card)
        trick.add_card(position, card)
        logger.debug("[%s] %s plays %s", state.game_id, player.name, card)

        result = {
            "card_played": str(card),
            "player_position": position,
            "trick_complete": False,
            "trick_pending": False,
            "trick_winner": None,
            "hand_complete": False,
            "hand_result": None,
        }

        if not trick.is_complete():
            state.current_player_position = state.next_position(position)
            return result

        if self.pause_after_trick:
            state.trick_pending = True
            result["trick_complete"] = True
            result["trick_pending"] = True
            result["trick_winner"] = trick.get_winner()
            return result

        result.update(self._finish_trick())
        return result

    def resolve_trick(self) -> Dict[str, Any]:
        """Clear a completed trick held by pause_after_trick"""
        self._require_phase(GamePhase.PLAYING, action="resolve a trick")
        if not self.state.trick_pending:
            raise InvalidAction("No completed trick to resolve")
        self.state.trick_pending = False
        return self._finish_trick()

    def _finish_trick(self) -> Dict[str, Any]:
        state = self.state
        trick = state.current_trick
        if len(trick) != state.active_player_count:
            raise InvariantViolation(f"Resolving a trick of {len(trick)} cards")

        winner_position = trick.get_winner()
        state.team_tricks[team_of(winner_position)] += 1
        state.get_player(winner_position).tricks_won += 1
        state.tricks_played.append(trick)
        self._log(f"{self._name(winner_position)} takes the trick.")

        result = {
            "trick_complete": True,
            "trick_pending": False,
            "trick_winner": winner_position,
            "hand_complete": False,
            "hand_result": None,
        }

        if state.tricks_completed == TRICKS_PER_HAND:
            state.current_trick = None
            result["hand_complete"] = True
            result["hand_result"] = self._score_hand()
        else:
            self._start_new_trick(winner_position)

        state.check_card_conservation()
        return result

    def _score_hand(self) -> Dict[str, Any]:
        """Award points for the finished hand and check for game over"""
        state = self.state
        maker_team = state.maker_team
        defending_team = 1 - maker_team
        maker_tricks = state.team_tricks[maker_team]

        makers_scored, points = hand_points(maker_tricks, state.going_alone)
        winning_team = maker_team if makers_scored else defending_team
        state.team_scores[winning_team] += points

        hand_result = {
            "hand_number": state.hand_number,
            "trump": state.trump.value,
            "maker_position": state.trump_caller_position,
            "maker_team": maker_team,
            "maker_tricks": maker_tricks,
            "going_alone": state.going_alone,
            "winning_team": winning_team,
            "points_awarded": points,
            "euchred": not makers_scored,
            "march": maker_tricks == TRICKS_PER_HAND,
            "team_scores": list(state.team_scores),
            "game_over": state.winning_team is not None,
        }
        state.last_hand_result = hand_result

        if makers_scored:
            self._log(f"Makers take {maker_tricks} tricks: team {winning_team} scores {points}.")
        else:
            self._log(f"Makers euchred with {maker_tricks} tricks: team {winning_team} scores {points}.")

        state.trump = None
        if hand_result["game_over"]:
            state.phase = GamePhase.GAME_OVER
            self._log(f"Game over. Team {state.winning_team} wins {state.team_scores[0]}-{state.team_scores[1]}.")
        else:
            state.phase = GamePhase.HAND_COMPLETE
        return hand_result

    def get_valid_moves(self, position: Optional[int] = None) -> List[Card]:
        """Get valid moves for a player"""
        state = self.state
        if position is None:
            position = state.current_player_position

        if state.phase != GamePhase.PLAYING or state.trick_pending:
            return []
        if position == state.inactive_position:
            return []

        player = state.get_player(position)
        lead_suit = state.current_trick.lead_suit if state.current_trick else None
        return player.get_valid_cards(lead_suit, state.trump)

    def get_view(self, position: int) -> SeatView:
        """The acting seat's own hand plus public table state"""
        state = self.state
        trick = state.current_trick
        return SeatView(
            position=position,
            phase=state.phase,
            dealer_position=state.dealer_position,
            current_player_position=state.current_player_position,
            hand=tuple(state.get_player(position).hand),
            upcard=state.turned_up_card if state.upcard_visible else None,
            trump=state.trump,
            trump_caller_position=state.trump_caller_position,
            alone_player_position=state.alone_player_position,
            inactive_position=state.inactive_position,
            forced_dealer_pick=state.forced_dealer_pick,
            trick_cards=tuple(trick.cards) if trick else (),
            lead_suit=trick.lead_suit if trick else None,
            active_player_count=state.active_player_count,
            team_scores=tuple(state.team_scores),
            team_tricks=tuple(state.team_tricks),
        )

    def get_state(self, perspective_position: Optional[int] = None) -> Dict[str, Any]:
        """Get game state, optionally from a specific player's perspective"""
        return self.state.to_dict(include_hands=False, perspective_position=perspective_position)
