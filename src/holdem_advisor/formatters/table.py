"""Rich table formatting for terminal output."""

from typing import List, Optional, Sequence

from rich.console import Console
from rich.table import Table

from holdem_advisor.agents.regret import Recommendation, RegretState
from holdem_advisor.models.card import Card
from holdem_advisor.models.simulation import PlayerState
from holdem_advisor.simulation.evaluator import HandEvaluator


class TableFormatter:
    """Format advisor and table state as Rich tables."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def print_strategy(self, rec: Recommendation, state: Optional[RegretState] = None) -> None:
        """Print the average strategy, highlighting the recommended action."""
        table = Table(title="Advisor Strategy")
        table.add_column("Action", style="cyan")
        table.add_column("Probability", justify="right", style="green")
        if state is not None:
            table.add_column("Regret", justify="right")

        for action, prob in rec.strategy.items():
            name = f"[bold]{action.label}[/bold]" if action is rec.action else action.label
            row = [name, f"{prob * 100:.2f}%"]
            if state is not None:
                row.append(f"{state.regret_sum[action]:.2f}")
            table.add_row(*row)

        self.console.print(table)
        self.console.print(f"Suggested: [bold green]{rec.action.label}[/bold green] "
                           f"({rec.confidence})")

    def print_players(self, players: Sequence[PlayerState], community: Sequence[Card],
                      reveal: bool = False) -> None:
        """Print every seat's status and current hand."""
        board = " ".join(str(c) for c in community) or "-"
        table = Table(title=f"Board: {board}")
        table.add_column("Seat", justify="right")
        table.add_column("Cards")
        table.add_column("Status")
        table.add_column("Hand")
        table.add_column("Stack", justify="right")

        for p in players:
            show = reveal or p.is_hero
            cards = " ".join(str(c) for c in p.hole_cards) if show else "?? ??"
            hand = HandEvaluator.describe(p.score) if (show and p.score) else ""
            status = p.status.value
            style = "dim" if p.is_folded else ("bold" if p.is_hero else "")
            table.add_row(str(p.seat), cards, status, hand, f"${p.stack:.2f}", style=style)

        self.console.print(table)

    def print_advisors(self, advisors: List[dict]) -> None:
        """Print stored advisors."""
        if not advisors:
            self.console.print("[dim]No stored advisors.[/dim]")
            return
        table = Table(title="Stored Advisors")
        table.add_column("Name", style="cyan")
        table.add_column("Updated")
        table.add_column("Iterations", justify="right")
        for a in advisors:
            table.add_row(a["name"], str(a["updated_at"]), f"{a['mass']:.0f}")
        self.console.print(table)
