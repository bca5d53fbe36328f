"""Plain text formatting for terminal output."""

from typing import Iterable, List, Sequence

from holdem_advisor.agents.regret import Recommendation
from holdem_advisor.models.card import Card
from holdem_advisor.models.hand import HandScore
from holdem_advisor.models.simulation import PlayerState, ShowdownResult
from holdem_advisor.simulation.evaluator import HandEvaluator


class TextFormatter:
    """Format hands, showdowns and advice as plain text."""

    def format_cards(self, cards: Iterable[Card]) -> str:
        return " ".join(str(c) for c in cards)

    def format_score(self, score: HandScore) -> str:
        """Category name plus kicker description, e.g. 'One Pair, Kings, ...'."""
        return HandEvaluator.describe(score)

    def format_recommendation(self, rec: Recommendation) -> str:
        """Suggested action with its confidence to two decimals."""
        return f"Suggested: {rec.action.label} ({rec.confidence})"

    def format_showdown(self, result: ShowdownResult, players: Sequence[PlayerState],
                        payouts: dict) -> str:
        """Format the players' final hands and who won what."""
        lines: List[str] = ["=== Showdown ==="]
        for p in players:
            cards = self.format_cards(p.hole_cards)
            if p.is_folded:
                lines.append(f"  Seat {p.seat}: {cards}  (folded)")
            elif p.score is not None:
                lines.append(f"  Seat {p.seat}: {cards}  {self.format_score(p.score)}")
            else:
                lines.append(f"  Seat {p.seat}: {cards}")

        lines.append("")
        if result.is_split:
            lines.append(f"Split pot between seats {', '.join(str(s) for s in sorted(result.winners))}")
        for seat in sorted(result.winners):
            lines.append(f"  Winner: Seat {seat} (${payouts.get(seat, 0.0):.2f})")
        return "\n".join(lines)
