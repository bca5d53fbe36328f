"""Table data models for a four-seat hand."""

from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from typing import Dict, FrozenSet, List, Optional, Tuple

from holdem_advisor.models.card import Card
from holdem_advisor.models.hand import HandScore


class GamePhase(str, Enum):
    """Game phase enumeration."""
    WAITING = "waiting"
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"
    COMPLETE = "complete"

    @property
    def community_count(self) -> int:
        """Community cards on the board once this street has been dealt."""
        return {"flop": 3, "turn": 4, "river": 5}.get(self.value, 0)


class PlayerStatus(str, Enum):
    """Where a player stands in the current betting round."""
    ACTIVE = "active"
    CHECKING = "checking"
    BETTING = "betting"
    FOLDED = "folded"
    ALL_IN = "all_in"

    @property
    def in_hand(self) -> bool:
        return self is not PlayerStatus.FOLDED


@dataclass
class PlayerState:
    """Player state during a hand."""
    seat: int
    hole_cards: List[Card] = field(default_factory=list)
    status: PlayerStatus = PlayerStatus.ACTIVE
    score: Optional[HandScore] = None
    best_hole_ranks: Optional[Tuple[int, int]] = None
    total_bet: float = 0.0
    stack: float = 0.0
    is_hero: bool = False

    @property
    def is_active(self) -> bool:
        return self.status.in_hand

    @property
    def is_folded(self) -> bool:
        return self.status is PlayerStatus.FOLDED


@dataclass(frozen=True)
class ShowdownResult:
    """Winners of a hand and the fraction of the pot each receives."""
    winners: FrozenSet[int]
    shares: Dict[int, Fraction]
    winning_score: Optional[HandScore] = None

    @property
    def is_split(self) -> bool:
        return len(self.winners) > 1

    def payouts(self, pot: float) -> Dict[int, float]:
        """Translate shares into chip amounts for a pot of ``pot``."""
        return {seat: float(share * Fraction(pot)) for seat, share in self.shares.items()}
