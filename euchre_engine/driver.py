"""
Runs bot seats after each state transition
"""

import logging
import time
from typing import Callable, Optional

from .ai import HeuristicAI
from .config import HAND_PAUSE_MS, TRICK_PAUSE_MS
from .game import ACTIVE_PHASES, EuchreGame, GamePhase

logger = logging.getLogger(__name__)


class BotDriver:
    """
    Drives non-human seats synchronously.

    Call run() after every human action. It lets bots act until a human
    seat must act, the hand is over, or max_iterations is reached. A trick
    held by pause_after_trick is resolved after trick_pause_ms.
    """

    def __init__(
        self,
        game: EuchreGame,
        ai: Optional[HeuristicAI] = None,
        auto_next_hand: bool = False,
        trick_pause_ms: int = TRICK_PAUSE_MS,
        hand_pause_ms: int = HAND_PAUSE_MS,
        sleep: Callable[[float], None] = time.sleep,
        on_action: Optional[Callable[[EuchreGame], None]] = None,
    ):
        self.game = game
        self.ai = ai or HeuristicAI()
        self.auto_next_hand = auto_next_hand
        self.trick_pause_ms = trick_pause_ms
        self.hand_pause_ms = hand_pause_ms
        self.sleep = sleep
        self.on_action = on_action

    def _pause(self, ms: int):
        if ms > 0:
            self.sleep(ms / 1000.0)

    def _notify(self):
        if self.on_action is not None:
            self.on_action(self.game)

    def step(self) -> bool:
        """
        Perform at most one automatic transition.
        Returns True if something happened.
        """
        state = self.game.state

        if state.phase == GamePhase.HAND_COMPLETE and self.auto_next_hand:
            self._pause(self.hand_pause_ms)
            self.game.advance_after_hand()
            return True

        if state.phase not in ACTIVE_PHASES:
            return False

        if state.trick_pending:
            self._pause(self.trick_pause_ms)
            self.game.resolve_trick()
            return True

        current_player = state.get_current_player()
        if current_player.is_human:
            return False

        self.ai.act(self.game, current_player.position)
        return True

    def run(self, max_iterations: int = 200) -> int:
        """Process bot turns; returns the number of transitions made"""
        actions = 0
        while actions < max_iterations and self.step():
            actions += 1
            self._notify()

        if actions == max_iterations:
            logger.warning("Bot driver stopped after %d actions", max_iterations)
        return actions
