"""Showdown resolution across the players still in the hand."""

import logging
from fractions import Fraction
from typing import Iterable, List

from holdem_advisor.errors import InvalidHand
from holdem_advisor.models.simulation import PlayerState, ShowdownResult

logger = logging.getLogger(__name__)


class ShowdownResolver:
    """Picks the winner(s) of a hand.

    Resolution narrows the field in two passes: best category first, then
    the highest tie-break key within that category. Whoever survives both
    passes shares the pot equally, whether that is one, two, three or four
    players.
    """

    @staticmethod
    def resolve(players: Iterable[PlayerState]) -> ShowdownResult:
        """Resolve a showdown.

        Args:
            players: Players at the table; folded players are ignored.

        Returns:
            ShowdownResult with the winning seats and their pot shares.

        Raises:
            ValueError: If nobody is left in the hand.
            InvalidHand: If a contested showdown involves an unscored player.
        """
        contenders: List[PlayerState] = [p for p in players if p.is_active]
        if not contenders:
            raise ValueError("Cannot resolve a showdown with no active players")

        if len(contenders) == 1:
            seat = contenders[0].seat
            logger.info("Seat %d wins uncontested", seat)
            return ShowdownResult(frozenset({seat}), {seat: Fraction(1)}, contenders[0].score)

        for p in contenders:
            if p.score is None:
                raise InvalidHand(f"Seat {p.seat} has no evaluated hand at showdown")

        winning_category = max(p.score.category for p in contenders)
        contenders = [p for p in contenders if p.score.category == winning_category]

        if len(contenders) > 1:
            best_key = max(p.score.tiebreak for p in contenders)
            contenders = [p for p in contenders if p.score.tiebreak == best_key]

        share = Fraction(1, len(contenders))
        winners = frozenset(p.seat for p in contenders)
        if len(winners) > 1:
            logger.info("Split pot between seats %s with %s", sorted(winners), contenders[0].score)
        else:
            logger.info("Seat %d wins with %s", contenders[0].seat, contenders[0].score)
        return ShowdownResult(winners, {seat: share for seat in winners}, contenders[0].score)
