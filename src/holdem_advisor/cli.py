"""Hold'em Advisor CLI: Typer-based command line interface."""

import logging
import random
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from holdem_advisor import config
from holdem_advisor.errors import HoldemError

app = typer.Typer(
    name="holdem-advisor",
    help="Texas Hold'em hand evaluator and regret-matching advisor",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Configure logging for every command."""
    level = logging.DEBUG if verbose else config.LOG_LEVEL
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _get_repo():
    from holdem_advisor.storage import Database, RegretRepository
    return RegretRepository(Database())


def _parse(text: str):
    from holdem_advisor.models.card import parse_cards
    try:
        return parse_cards(text)
    except HoldemError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _rng(seed: Optional[int]) -> random.Random:
    return random.Random(seed if seed is not None else config.SEED)


@app.command()
def evaluate(
    cards: List[str] = typer.Argument(..., help="Cards such as As Kd 7h (2-7 cards)"),
):
    """Evaluate a hand and describe its category and kickers."""
    from holdem_advisor.simulation.evaluator import HandEvaluator

    hand = _parse(" ".join(cards))
    try:
        score = HandEvaluator.score(hand)
    except HoldemError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    label = "Preliminary" if len(hand) < 5 else "Hand"
    console.print(f"{label}: [bold]{HandEvaluator.describe(score)}[/bold]")
    console.print(f"Category: {int(score.category)} ({score.category.label})")
    console.print(f"Tiebreak: {list(score.tiebreak)}")
    console.print(f"Strength: {HandEvaluator.hand_strength(hand):.3f}")


@app.command()
def advise(
    hole: str = typer.Option(..., "--hole", help="Hole cards, e.g. 'As Ks'"),
    board: str = typer.Option("", "--board", "-b", help="Community cards"),
    pot: float = typer.Option(100.0, help="Current pot size"),
    bet: float = typer.Option(10.0, help="Chips you already have in the pot"),
    players: int = typer.Option(3, help="Players still in the hand"),
    raise_amount: float = typer.Option(config.DEFAULT_RAISE, "--raise", help="Raise size"),
    stack: float = typer.Option(config.DEFAULT_STACK, help="Your remaining stack"),
    can_check: bool = typer.Option(True, "--can-check/--no-check"),
    can_call: bool = typer.Option(False, "--can-call/--no-call"),
    can_raise: bool = typer.Option(True, "--can-raise/--no-raise"),
    can_all_in: bool = typer.Option(True, "--can-all-in/--no-all-in"),
    can_fold: bool = typer.Option(True, "--can-fold/--no-fold"),
    iterations: int = typer.Option(config.TRAINING_ITERATIONS, "--iterations", "-n", min=0,
                                   help="Training iterations per decision"),
    advisor: Optional[str] = typer.Option(None, "--advisor", "-a",
                                          help="Stored advisor to continue and save"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
):
    """Train the advisor on one decision and print its suggestion."""
    from holdem_advisor.agents.regret import RegretMatchingEngine, RegretState
    from holdem_advisor.agents.rewards import DecisionContext
    from holdem_advisor.formatters.table import TableFormatter

    context = DecisionContext(
        hole_cards=_parse(hole),
        community_cards=_parse(board),
        pot_size=pot,
        player_bet=bet,
        remaining_players=players,
        raise_amount=raise_amount,
        player_stack=stack,
        can_check=can_check,
        can_call=can_call,
        can_raise=can_raise,
        can_all_in=can_all_in,
        can_fold=can_fold,
    )
    if not context.legal_actions:
        console.print("[red]At least one action must be allowed.[/red]")
        raise typer.Exit(1)

    repo = _get_repo() if advisor else None
    state = repo.load_or_create(advisor) if repo else RegretState()
    engine = RegretMatchingEngine(state, _rng(seed))
    try:
        engine.train(context, iterations)
    except HoldemError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    TableFormatter(console).print_strategy(engine.recommend_action(context.legal_actions), engine.state)
    if repo:
        repo.save(advisor, engine.state)
        console.print(f"Saved advisor [cyan]{advisor}[/cyan].")


@app.command()
def play(
    seats: int = typer.Option(config.SEATS, help="Players at the table (2-4)"),
    iterations: int = typer.Option(config.TRAINING_ITERATIONS, "--iterations", "-n", min=0,
                                   help="Training iterations per decision"),
    advisor: str = typer.Option(config.DEFAULT_ADVISOR, "--advisor", "-a"),
    save: bool = typer.Option(True, "--save/--no-save", help="Persist advisor regrets"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
):
    """Play one hand where seat 0 follows the advisor."""
    from holdem_advisor.agents.regret import RegretMatchingEngine
    from holdem_advisor.formatters.table import TableFormatter
    from holdem_advisor.formatters.text import TextFormatter
    from holdem_advisor.simulation.engine import HandSession

    repo = _get_repo()
    engine = RegretMatchingEngine(repo.load_or_create(advisor), _rng(seed))
    try:
        session = HandSession(seats=seats, rng=_rng(seed))
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    table = TableFormatter(console)
    text = TextFormatter()

    def show(rec):
        if rec is not None:
            console.print(f"[cyan]{session.phase.value}[/cyan] {text.format_recommendation(rec)}")
        table.print_players(session.players, session.community)

    result = session.play_hand(engine, iterations, on_street=show)
    console.print(text.format_showdown(result.showdown, session.players, result.payouts))
    if save:
        repo.save(advisor, engine.state)


@app.command()
def train(
    hands: int = typer.Option(20, "--hands", help="Hands to play"),
    seats: int = typer.Option(config.SEATS, help="Players at the table (2-4)"),
    iterations: int = typer.Option(config.TRAINING_ITERATIONS, "--iterations", "-n", min=0,
                                   help="Training iterations per decision"),
    advisor: str = typer.Option(config.DEFAULT_ADVISOR, "--advisor", "-a"),
    seed: Optional[int] = typer.Option(None, help="Random seed"),
):
    """Train a stored advisor by playing hands without output."""
    from holdem_advisor.agents.regret import RegretMatchingEngine
    from holdem_advisor.formatters.table import TableFormatter
    from holdem_advisor.simulation.engine import HandSession

    if hands < 1:
        console.print("[red]--hands must be at least 1.[/red]")
        raise typer.Exit(1)
    repo = _get_repo()
    engine = RegretMatchingEngine(repo.load_or_create(advisor), _rng(seed))
    try:
        session = HandSession(seats=seats, rng=_rng(seed))
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    won = 0
    with console.status(f"Training {advisor} over {hands} hands..."):
        for _ in range(hands):
            result = session.play_hand(engine, iterations)
            if session.hero_seat in result.showdown.winners:
                won += 1
            for p in session.players:
                if p.stack <= 0:
                    p.stack = config.DEFAULT_STACK

    repo.save(advisor, engine.state)
    console.print(f"Hero won {won}/{hands} hands. Saved advisor [cyan]{advisor}[/cyan].")
    TableFormatter(console).print_strategy(engine.recommend_action(), engine.state)


@app.command()
def advisors():
    """List stored advisors."""
    from holdem_advisor.formatters.table import TableFormatter

    TableFormatter(console).print_advisors(_get_repo().list_advisors())


@app.command()
def reset_advisor(
    name: str = typer.Argument(..., help="Advisor to delete"),
):
    """Delete a stored advisor's regrets."""
    if _get_repo().delete(name):
        console.print(f"[green]Deleted advisor {name}.[/green]")
    else:
        console.print(f"[yellow]No advisor named {name}.[/yellow]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
