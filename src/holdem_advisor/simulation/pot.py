"""Pot management for a single hand."""

from typing import Dict

from holdem_advisor.models.simulation import ShowdownResult


class PotManager:
    """Tracks chips committed to the pot and pays out showdown shares.

    Folding never refunds anything: a folded seat's contributions stay in
    the pot and go to the winners.
    """

    def __init__(self):
        """Initialize an empty pot manager."""
        self.main_pot: float = 0.0
        # Track bets per player for current street
        self.current_bets: Dict[int, float] = {}
        # Track total invested per player
        self.total_invested: Dict[int, float] = {}

    def add_bet(self, seat: int, amount: float):
        """Add a bet from a player.

        Args:
            seat: The player's seat number.
            amount: The amount to add to the pot.
        """
        if amount < 0:
            raise ValueError(f"Bet amount must be non-negative, got {amount}")
        self.current_bets[seat] = self.current_bets.get(seat, 0.0) + amount
        self.total_invested[seat] = self.total_invested.get(seat, 0.0) + amount
        self.main_pot += amount

    def get_player_bet(self, seat: int) -> float:
        """Get the current bet amount for a player in this street."""
        return self.current_bets.get(seat, 0.0)

    def get_total_invested(self, seat: int) -> float:
        """Get the total amount a player has invested in the hand."""
        return self.total_invested.get(seat, 0.0)

    @property
    def highest_bet(self) -> float:
        """Largest amount any seat has put in on this street."""
        return max(self.current_bets.values(), default=0.0)

    def to_call(self, seat: int) -> float:
        """Amount ``seat`` must add to match the highest bet on this street."""
        return self.highest_bet - self.get_player_bet(seat)

    def reset_street(self):
        """Reset current bets for a new street."""
        self.current_bets.clear()

    def reset_hand(self):
        """Reset everything for a new hand."""
        self.main_pot = 0.0
        self.current_bets.clear()
        self.total_invested.clear()

    @property
    def total_pot(self) -> float:
        return self.main_pot

    def distribute(self, result: ShowdownResult) -> Dict[int, float]:
        """Pay the pot out according to a showdown result and empty it.

        Returns:
            Mapping from seat to amount won.
        """
        payouts = result.payouts(self.main_pot)
        self.main_pot = 0.0
        return payouts

    def __repr__(self) -> str:
        return f"PotManager(main={self.main_pot:.2f}, seats={len(self.total_invested)})"
