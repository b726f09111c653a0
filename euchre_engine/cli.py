"""
Euchre CLI - Terminal table for one human against three bots
"""

import logging
import os
import sys
from colorama import init, Fore, Style
from euchre_engine import BotDriver, Card, EuchreGame, GamePhase, InvalidAction, Suit
from euchre_engine.config import BOT_DELAY_MS, LOG_LEVEL

# Initialize colorama
init(autoreset=True)

SUITS_DISPLAY = {
    'C': f'{Fore.GREEN}♣{Style.RESET_ALL}',
    'D': f'{Fore.RED}♦{Style.RESET_ALL}',
    'H': f'{Fore.RED}♥{Style.RESET_ALL}',
    'S': f'{Fore.GREEN}♠{Style.RESET_ALL}',
}

HUMAN_POSITION = 0


class EuchreCLI:
    def __init__(self, seed=None):
        self.game = EuchreGame.with_seats(
            game_id="cli-game", human_positions=(HUMAN_POSITION,), seed=seed, pause_after_trick=True
        )
        self.driver = BotDriver(self.game, on_action=self.after_bot_action)

    def clear_screen(self):
        os.system('clear' if os.name != 'nt' else 'cls')

    def print_banner(self):
        print(f"{Fore.CYAN}{'='*60}{Style.RESET_ALL}")
        print(f"{Fore.YELLOW}                    🃏 EUCHRE 🃏{Style.RESET_ALL}")
        print(f"{Fore.CYAN}{'='*60}{Style.RESET_ALL}\n")

    def format_card(self, card: Card) -> str:
        """Format a card for display"""
        suit_symbol = SUITS_DISPLAY.get(card.suit.value, card.suit.value)
        return f"{card.rank}{suit_symbol}"

    def format_suit(self, suit: Suit) -> str:
        return SUITS_DISPLAY.get(suit.value, suit.value)

    def display_scoreboard(self):
        """Display current scores"""
        state = self.game.state
        print(f"\n{Fore.YELLOW}╔═══════════ SCOREBOARD ═══════════╗{Style.RESET_ALL}")
        print(f"{Fore.CYAN}  Us (P0 & P2): {state.team_scores[0]:2d}  |  Them (P1 & P3): {state.team_scores[1]:2d}{Style.RESET_ALL}")
        print(f"{Fore.CYAN}  Tricks this hand: {state.team_tricks[0]} - {state.team_tricks[1]}{Style.RESET_ALL}")
        print(f"{Fore.YELLOW}╚═══════════════════════════════════╝{Style.RESET_ALL}\n")

    def human_hand(self):
        """Human's hand as displayed; menu numbers index into this list"""
        state = self.game.state
        return state.players[HUMAN_POSITION].sorted_hand(state.trump)

    def display_game_state(self):
        """Display current game state"""
        state = self.game.state

        self.clear_screen()
        self.print_banner()
        self.display_scoreboard()

        print(f"{Fore.MAGENTA}Phase: {state.phase.value}{Style.RESET_ALL}")
        print(f"{Fore.MAGENTA}Hand: {state.hand_number}{Style.RESET_ALL}")
        print(f"{Fore.MAGENTA}Dealer: {state.players[state.dealer_position].name}{Style.RESET_ALL}\n")

        if state.trump:
            print(f"{Fore.GREEN}Trump: {self.format_suit(state.trump)}{Style.RESET_ALL}")
            if state.trump_caller_position is not None:
                print(f"{Fore.GREEN}Called by: {state.players[state.trump_caller_position].name}{Style.RESET_ALL}")
            if state.going_alone:
                print(f"{Fore.YELLOW}{state.players[state.alone_player_position].name} is going alone!{Style.RESET_ALL}")
                if state.inactive_position == HUMAN_POSITION:
                    print(f"{Fore.YELLOW}You sit out this hand.{Style.RESET_ALL}")
            print()

        if state.turned_up_card and state.upcard_visible:
            print(f"{Fore.CYAN}Turned up card: {self.format_card(state.turned_up_card)}{Style.RESET_ALL}\n")

        if state.current_trick and state.current_trick.cards:
            print(f"{Fore.YELLOW}Current Trick:{Style.RESET_ALL}")
            for pos, card in state.current_trick.cards:
                print(f"  {state.players[pos].name}: {self.format_card(card)}")
            print()

        if state.bid_log:
            print(f"{Fore.YELLOW}Log:{Style.RESET_ALL}")
            for entry in state.bid_log[-6:]:
                print(f"  {entry}")
            print()

        print(f"{Fore.CYAN}Your Hand:{Style.RESET_ALL}")
        hand_str = "  ".join(f"[{i}] {self.format_card(card)}" for i, card in enumerate(self.human_hand()))
        print(f"  {hand_str}\n")

        if state.phase in (GamePhase.HAND_COMPLETE, GamePhase.GAME_OVER):
            return
        if state.current_player_position == HUMAN_POSITION and not state.trick_pending:
            print(f"{Fore.GREEN}>>> YOUR TURN <<<{Style.RESET_ALL}\n")
        else:
            current_player_name = state.players[state.current_player_position].name
            print(f"{Fore.YELLOW}Waiting for {current_player_name}...{Style.RESET_ALL}\n")

    def after_bot_action(self, game):
        self.display_game_state()
        self.driver.sleep(BOT_DELAY_MS / 1000.0)

    def ask_alone(self) -> bool:
        return input("Go alone? (y/n): ").strip().lower() == 'y'

    def handle_trump_selection(self):
        """Handle trump selection phase"""
        state = self.game.state

        if state.phase == GamePhase.TRUMP_SELECTION_ROUND1:
            print(f"\n{Fore.YELLOW}Trump Selection - Round 1{Style.RESET_ALL}")
            print(f"Order up the {self.format_card(state.turned_up_card)}?")
            print("  [1] Order up")
            print("  [2] Pass")

            choice = input("\nYour choice: ").strip()
            if choice == '1':
                self.game.order_up(go_alone=self.ask_alone(), position=HUMAN_POSITION)
            else:
                self.game.pass_bid(position=HUMAN_POSITION)
            return

        upcard_suit = state.turned_up_card.suit
        print(f"\n{Fore.YELLOW}Trump Selection - Round 2{Style.RESET_ALL}")
        print(f"Call a suit (not {self.format_suit(upcard_suit)}):")
        for suit in Suit:
            if suit != upcard_suit:
                print(f"  [{suit.value}] {self.format_suit(suit)} {suit.name.title()}")
        if not state.forced_dealer_pick:
            print("  [P] Pass")
        else:
            print(f"{Fore.RED}Screw the dealer: you must name trump.{Style.RESET_ALL}")

        choice = input("\nYour choice: ").strip().upper()
        if choice == 'P':
            self.game.pass_bid(position=HUMAN_POSITION)
        else:
            suit = Suit.from_string(choice)
            self.game.call_suit(suit, go_alone=self.ask_alone(), position=HUMAN_POSITION)

    def handle_dealer_discard(self):
        hand = self.human_hand()
        print(f"\n{Fore.YELLOW}You picked up the upcard. Choose a card to discard:{Style.RESET_ALL}")
        idx = int(input(f"Card number (0-{len(hand) - 1}): ").strip())
        self.game.dealer_discard(hand[idx], position=HUMAN_POSITION)

    def handle_play_card(self):
        """Handle playing a card"""
        hand = self.human_hand()
        valid = self.game.get_valid_moves(HUMAN_POSITION)
        playable = ", ".join(str(hand.index(c)) for c in valid)

        print(f"\n{Fore.YELLOW}Select a card to play ({playable}):{Style.RESET_ALL}")
        idx = int(input("Card number: ").strip())
        card = hand[idx]
        result = self.game.play_card(HUMAN_POSITION, card)
        print(f"\n{Fore.GREEN}You played: {self.format_card(card)}{Style.RESET_ALL}")
        if result['trick_complete']:
            winner = self.game.state.players[result['trick_winner']].name
            print(f"{Fore.CYAN}Trick won by {winner}!{Style.RESET_ALL}")

    def show_hand_result(self):
        hand_result = self.game.state.last_hand_result
        print(f"\n{Fore.YELLOW}{'='*50}{Style.RESET_ALL}")
        print(f"{Fore.GREEN}Hand Complete!{Style.RESET_ALL}")
        if hand_result['euchred']:
            print(f"{Fore.RED}Makers euchred!{Style.RESET_ALL}")
        print(f"Points Awarded: {hand_result['points_awarded']} to team {hand_result['winning_team']}")
        print(f"Score: {hand_result['team_scores'][0]} - {hand_result['team_scores'][1]}")
        print(f"{Fore.YELLOW}{'='*50}{Style.RESET_ALL}")

    def human_turn(self):
        state = self.game.state
        if state.phase in (GamePhase.TRUMP_SELECTION_ROUND1, GamePhase.TRUMP_SELECTION_ROUND2):
            self.handle_trump_selection()
        elif state.phase == GamePhase.DEALER_DISCARD:
            self.handle_dealer_discard()
        elif state.phase == GamePhase.PLAYING:
            self.handle_play_card()

    def run(self):
        """Main game loop"""
        self.clear_screen()
        self.print_banner()
        input("Press Enter to start the game...")
        self.game.deal_new_hand()

        while self.game.state.phase != GamePhase.GAME_OVER:
            self.driver.run()
            self.display_game_state()

            if self.game.state.phase == GamePhase.GAME_OVER:
                break

            if self.game.state.phase == GamePhase.HAND_COMPLETE:
                self.show_hand_result()
                input("Starting new hand... (Press Enter)")
                self.game.advance_after_hand()
                continue

            try:
                self.human_turn()
            except (InvalidAction, ValueError, IndexError, KeyError) as e:
                print(f"{Fore.RED}Invalid choice: {e}{Style.RESET_ALL}")
                input("Press Enter to continue...")

        self.show_hand_result()
        print(f"\n{Fore.MAGENTA}GAME OVER!{Style.RESET_ALL}")
        print(f"{Fore.GREEN}Team {self.game.state.winning_team} wins!{Style.RESET_ALL}")


def main():
    logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(message)s')
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else None
    cli = EuchreCLI(seed=seed)
    try:
        cli.run()
    except KeyboardInterrupt:
        print(f"\n\n{Fore.YELLOW}Game interrupted. Thanks for playing!{Style.RESET_ALL}")
        sys.exit(0)


if __name__ == "__main__":
    main()
