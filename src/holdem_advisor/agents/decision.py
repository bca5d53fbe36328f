"""Betting heuristic for the computer-controlled seats."""

from collections import Counter
from typing import Iterable, List, Sequence

from holdem_advisor.models.card import Card
from holdem_advisor.models.hand import HandCategory
from holdem_advisor.models.simulation import GamePhase, PlayerState, PlayerStatus
from holdem_advisor.simulation.evaluator import ACE, WHEEL_ACE, HandEvaluator

# Ten or better counts as a high card for the heuristic
HIGH_CARD_MIN = 8


def longest_run(cards: Sequence[Card]) -> int:
    """Length of the longest run of consecutive ranks, ace playing high or low."""
    present = {c.rank.order for c in cards}
    if ACE in present:
        present.add(WHEEL_ACE)
    best = 0
    for start in present:
        if start - 1 in present:
            continue
        length = 1
        while start + length in present:
            length += 1
        best = max(best, length)
    return best


class OpponentPolicy:
    """Decides whether an opponent keeps betting or checks on a street.

    A checking opponent is folded at the end of the round whenever someone
    else is betting, so "checking" here is the weak-hand signal.
    """

    def decide(self, player: PlayerState, community: Sequence[Card], phase: GamePhase,
               max_bet_hit: bool = False) -> PlayerStatus:
        cards = list(player.hole_cards) + list(community)
        score = HandEvaluator.score(cards)
        category = score.category
        has_pair = score.is_made_hand
        run = longest_run(cards)
        high_cards = sum(1 for c in cards if c.rank.order >= HIGH_CARD_MIN)
        max_suit = max(Counter(c.suit for c in cards).values())

        if phase == GamePhase.PREFLOP:
            betting = (has_pair or run >= 2 or high_cards > 0 or max_suit > 1
                       or any(c.rank.order == ACE for c in cards))
        elif phase == GamePhase.FLOP:
            betting = has_pair or run >= 3 or high_cards > 1 or max_suit > 1
        else:
            betting = has_pair or run >= 3 or max_suit >= 3
            if max_bet_hit and run < 3 and category <= HandCategory.TWO_PAIR and max_suit < 4:
                betting = False

        return PlayerStatus.BETTING if betting else PlayerStatus.CHECKING

    def settle_round(self, players: Iterable[PlayerState]) -> List[int]:
        """Fold every checking player if anyone is betting.

        Returns:
            Seats folded by this call.
        """
        players = [p for p in players if p.is_active]
        if not any(p.status is PlayerStatus.BETTING for p in players):
            return []
        folded = []
        for p in players:
            if p.status is PlayerStatus.CHECKING:
                p.status = PlayerStatus.FOLDED
                folded.append(p.seat)
        return folded
