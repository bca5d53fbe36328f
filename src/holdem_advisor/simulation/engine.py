"""Hand session: deal, betting streets and showdown around the core."""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from holdem_advisor import config
from holdem_advisor.agents.decision import OpponentPolicy
from holdem_advisor.agents.regret import Recommendation, RegretMatchingEngine
from holdem_advisor.agents.rewards import DecisionContext
from holdem_advisor.errors import StreetOrderError
from holdem_advisor.models.action import ActionType
from holdem_advisor.models.card import Card
from holdem_advisor.models.simulation import (
    GamePhase, PlayerState, PlayerStatus, ShowdownResult
)
from holdem_advisor.simulation.deck import Deck
from holdem_advisor.simulation.evaluator import HandEvaluator
from holdem_advisor.simulation.pot import PotManager
from holdem_advisor.simulation.showdown import ShowdownResolver

logger = logging.getLogger(__name__)

# Street to deal and the phase that must come before it
STREETS = {
    GamePhase.FLOP: GamePhase.PREFLOP,
    GamePhase.TURN: GamePhase.FLOP,
    GamePhase.RIVER: GamePhase.TURN,
}


def street_bets(rng: random.Random, hands_played: int, ante: float) -> Dict[GamePhase, float]:
    """Bet size per street; later streets and later hands bet more."""
    base = 50
    step = hands_played * 10
    caps = [base + step, base * 2 + step, base * 3 + step]
    return {
        GamePhase.PREFLOP: ante,
        GamePhase.FLOP: float(rng.randint(10, caps[0])),
        GamePhase.TURN: float(rng.randint(caps[0], caps[1])),
        GamePhase.RIVER: float(rng.randint(caps[1], caps[2])),
    }


@dataclass
class HandResult:
    """Outcome of a finished hand."""
    showdown: ShowdownResult
    payouts: Dict[int, float]
    pot: float


class HandSession:
    """Runs one hand at a time for a small table.

    The session owns the deck, the community cards, the pot and the
    per-seat state. Scores are recomputed each time cards are dealt.
    """

    def __init__(self, seats: int = config.SEATS, rng: Optional[random.Random] = None,
                 ante: float = config.ANTE, stack: float = config.DEFAULT_STACK,
                 hero_seat: int = 0, policy: Optional[OpponentPolicy] = None):
        if not 2 <= seats <= 4:
            raise ValueError(f"Table supports 2-4 seats, got {seats}")
        self.rng = rng or random.Random(config.SEED)
        self.ante = ante
        self.hero_seat = hero_seat
        self.policy = policy or OpponentPolicy()
        self.deck = Deck(self.rng, shuffle=False)
        self.pot = PotManager()
        self.players: List[PlayerState] = [
            PlayerState(seat=i, stack=stack, is_hero=(i == hero_seat)) for i in range(seats)
        ]
        self.community: List[Card] = []
        self.phase = GamePhase.WAITING
        self.hands_played = 0
        self.bets: Dict[GamePhase, float] = {}
        self.max_bet_hit = False

    # Dealing

    def deal(self):
        """Start a new hand: fresh deck, two hole cards each, antes posted."""
        self.deck.reset()
        self.pot.reset_hand()
        self.community = []
        self.max_bet_hit = False
        self.bets = street_bets(self.rng, self.hands_played, self.ante)
        for p in self.players:
            p.hole_cards = self.deck.deal(2)
            p.status = PlayerStatus.ACTIVE
            p.score = None
            p.total_bet = 0.0
            p.best_hole_ranks = HandEvaluator.best_hole_ranks(p.hole_cards)
        for p in self.players:
            self.bet(p.seat, self.ante)
        self.hands_played += 1
        self.phase = GamePhase.PREFLOP
        self.rescore()
        logger.info("Hand %d dealt to %d seats", self.hands_played, len(self.players))

    def _deal_street(self, street: GamePhase) -> List[Card]:
        if self.phase != STREETS[street]:
            raise StreetOrderError(f"Cannot deal the {street.value} during {self.phase.value}")
        cards = self.deck.deal(street.community_count - len(self.community))
        self.community.extend(cards)
        self.pot.reset_street()
        for p in self.players:
            if p.status is not PlayerStatus.FOLDED and p.status is not PlayerStatus.ALL_IN:
                p.status = PlayerStatus.ACTIVE
        self.phase = street
        self.rescore()
        logger.debug("%s: %s", street.value, " ".join(str(c) for c in cards))
        return cards

    def deal_flop(self) -> List[Card]:
        return self._deal_street(GamePhase.FLOP)

    def deal_turn(self) -> List[Card]:
        return self._deal_street(GamePhase.TURN)

    def deal_river(self) -> List[Card]:
        return self._deal_street(GamePhase.RIVER)

    def rescore(self):
        """Re-evaluate every player still in the hand against the board."""
        for p in self.active_players:
            p.score = HandEvaluator.score(p.hole_cards + self.community)

    # Betting

    @property
    def active_players(self) -> List[PlayerState]:
        return [p for p in self.players if p.is_active]

    def player(self, seat: int) -> PlayerState:
        for p in self.players:
            if p.seat == seat:
                return p
        raise ValueError(f"No player in seat {seat}")

    def bet(self, seat: int, amount: float):
        """Move chips from a seat's stack into the pot."""
        p = self.player(seat)
        amount = min(amount, p.stack)
        p.stack -= amount
        p.total_bet += amount
        self.pot.add_bet(seat, amount)
        if p.stack <= 0 and p.is_active:
            p.status = PlayerStatus.ALL_IN

    def fold(self, seat: int):
        """Remove a seat from the hand. Its chips stay in the pot."""
        p = self.player(seat)
        p.status = PlayerStatus.FOLDED
        logger.debug("Seat %d folds, leaving %.2f in the pot", seat, p.total_bet)

    def act(self, seat: int, action: ActionType, raise_amount: float = config.DEFAULT_RAISE):
        """Apply a player's action to the table."""
        p = self.player(seat)
        to_call = self.pot.to_call(seat)
        if action is ActionType.FOLD:
            self.fold(seat)
        elif action is ActionType.CHECK:
            if to_call > 0:
                raise ValueError(f"Seat {seat} cannot check facing {to_call:.2f}")
            p.status = PlayerStatus.CHECKING
        elif action is ActionType.CALL:
            self.bet(seat, to_call)
            if p.status is not PlayerStatus.ALL_IN:
                p.status = PlayerStatus.BETTING
        elif action is ActionType.RAISE:
            self.bet(seat, to_call + raise_amount)
            if p.status is not PlayerStatus.ALL_IN:
                p.status = PlayerStatus.BETTING
        else:
            self.bet(seat, p.stack)
            self.max_bet_hit = True

    def play_opponents(self) -> List[int]:
        """Let every computer seat bet or check, then fold the checkers.

        Returns:
            Seats that folded this round.
        """
        street_bet = self.bets.get(self.phase, 0.0)
        opponents = [p for p in self.active_players if not p.is_hero]
        for p in opponents:
            if p.status is PlayerStatus.ALL_IN:
                continue
            p.status = self.policy.decide(p, self.community, self.phase, self.max_bet_hit)
            if p.status is PlayerStatus.BETTING:
                self.bet(p.seat, max(street_bet - self.pot.get_player_bet(p.seat), 0.0))
        folded = self.policy.settle_round(opponents)
        if folded:
            logger.info("Seats %s fold on the %s", folded, self.phase.value)
        return folded

    # Advice

    def context_for(self, seat: int, raise_amount: float = config.DEFAULT_RAISE) -> DecisionContext:
        """Build the advisor's view of the table for one seat."""
        p = self.player(seat)
        to_call = self.pot.to_call(seat)
        return DecisionContext(
            hole_cards=list(p.hole_cards),
            community_cards=list(self.community),
            pot_size=self.pot.total_pot,
            player_bet=self.pot.get_total_invested(seat),
            remaining_players=len(self.active_players),
            raise_amount=raise_amount,
            player_stack=p.stack,
            cards_dealt=len(p.hole_cards) + len(self.community),
            can_check=to_call <= 0,
            can_call=0 < to_call <= p.stack,
            can_raise=p.stack > to_call + raise_amount,
            can_all_in=p.stack > 0,
            can_fold=True,
        )

    def advise(self, seat: int, engine: RegretMatchingEngine,
               iterations: int = config.TRAINING_ITERATIONS,
               raise_amount: float = config.DEFAULT_RAISE) -> Recommendation:
        """Train ``engine`` on this seat's situation and return its advice."""
        context = self.context_for(seat, raise_amount)
        engine.train(context, iterations)
        return engine.recommend_action(context.legal_actions)

    def hero_turn(self, engine: RegretMatchingEngine,
                  iterations: int = config.TRAINING_ITERATIONS) -> Optional[Recommendation]:
        """Let the hero act on the engine's advice, if the hero can still act."""
        hero = self.player(self.hero_seat)
        if not hero.is_active or hero.stack <= 0:
            return None
        rec = self.advise(hero.seat, engine, iterations)
        self.act(hero.seat, rec.action)
        return rec

    def play_hand(self, engine: RegretMatchingEngine,
                  iterations: int = config.TRAINING_ITERATIONS,
                  on_street: Optional[Callable[[Optional[Recommendation]], None]] = None
                  ) -> HandResult:
        """Deal and play a full hand with the hero following ``engine``.

        On every street the hero acts first, then the opponents. If they bet
        into the hero, the hero gets one more decision facing that bet.
        ``on_street`` receives the hero's last recommendation, or None.
        """
        self.deal()
        for deal_street in (None, self.deal_flop, self.deal_turn, self.deal_river):
            if deal_street is not None:
                deal_street()
            rec = self.hero_turn(engine, iterations)
            self.play_opponents()
            if self.pot.to_call(self.hero_seat) > 0:
                rec = self.hero_turn(engine, iterations) or rec
            if on_street is not None:
                on_street(rec)
            if len(self.active_players) == 1:
                break
        return self.showdown()

    # Showdown

    def showdown(self) -> HandResult:
        """Resolve the hand and pay the pot out.

        Raises:
            StreetOrderError: If more than one player remains before the river.
        """
        active = self.active_players
        if len(active) > 1 and self.phase != GamePhase.RIVER:
            raise StreetOrderError(
                f"Showdown needs the river or a single player left ({len(active)} active "
                f"during {self.phase.value})"
            )
        pot = self.pot.total_pot
        result = ShowdownResolver.resolve(self.players)
        payouts = self.pot.distribute(result)
        for seat, amount in payouts.items():
            self.player(seat).stack += amount
        self.phase = GamePhase.COMPLETE
        logger.info("Hand %d complete: pot %.2f to seats %s", self.hands_played, pot,
                    sorted(result.winners))
        return HandResult(result, payouts, pot)
