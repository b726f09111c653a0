"""
Engine configuration: rule constants, timings and AI tuning values
"""

import os

# Rule constants
WINNING_SCORE = 10
HAND_SIZE = 5
TRICKS_PER_HAND = 5
DECK_SIZE = 24

LOG_LEVEL = os.getenv("EUCHRE_LOG_LEVEL", "WARNING")

# Presentation timings (milliseconds)
BOT_DELAY_MS = int(os.getenv("EUCHRE_BOT_DELAY_MS", "320"))
TRICK_PAUSE_MS = int(os.getenv("EUCHRE_TRICK_PAUSE_MS", "220"))
HAND_PAUSE_MS = int(os.getenv("EUCHRE_HAND_PAUSE_MS", "150"))


class AIThresholds:
    """Tuning values for the heuristic bots"""

    def __init__(
        self,
        order_up: float = 7.7,
        order_up_dealer: float = 7.4,
        order_up_dealer_partner: float = 7.2,
        call_round2: float = 7.55,
        alone: float = 13.0,
        alone_dealer: float = 12.2,
    ):
        self.order_up = order_up
        self.order_up_dealer = order_up_dealer
        self.order_up_dealer_partner = order_up_dealer_partner
        self.call_round2 = call_round2
        self.alone = alone
        self.alone_dealer = alone_dealer

    @classmethod
    def from_env(cls) -> "AIThresholds":
        """
        Build thresholds from EUCHRE_AI_<NAME> environment variables,
        e.g. EUCHRE_AI_ORDER_UP=8.0. Unset values keep their defaults.
        """
        defaults = cls()
        values = {}
        for name, default in vars(defaults).items():
            values[name] = float(os.getenv(f"EUCHRE_AI_{name.upper()}", default))
        return cls(**values)

    def __repr__(self):
        fields = ", ".join(f"{k}={v}" for k, v in vars(self).items())
        return f"AIThresholds({fields})"
