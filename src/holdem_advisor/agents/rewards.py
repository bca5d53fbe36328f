"""Heuristic reward model used by the regret-matching advisor."""

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from holdem_advisor.models.action import ADVISOR_ACTIONS, ActionType
from holdem_advisor.models.card import Card
from holdem_advisor.simulation.evaluator import HandEvaluator

DECK_SIZE = 52
ILLEGAL = -math.inf


@dataclass
class DecisionContext:
    """Everything the advisor needs to know at one decision point.

    The capability flags come from whoever runs the betting round; the
    advisor never works out legality on its own.
    """
    hole_cards: List[Card]
    community_cards: List[Card] = field(default_factory=list)
    pot_size: float = 0.0
    player_bet: float = 0.0
    remaining_players: int = 2
    raise_amount: float = 0.0
    player_stack: float = 0.0
    cards_dealt: Optional[int] = None
    can_check: bool = False
    can_call: bool = False
    can_raise: bool = False
    can_all_in: bool = False
    can_fold: bool = True
    hand_strength: Optional[float] = None

    def can(self, action: ActionType) -> bool:
        return {
            ActionType.CHECK: self.can_check,
            ActionType.CALL: self.can_call,
            ActionType.RAISE: self.can_raise,
            ActionType.ALL_IN: self.can_all_in,
            ActionType.FOLD: self.can_fold,
        }[action]

    @property
    def legal_actions(self) -> List[ActionType]:
        return [a for a in ADVISOR_ACTIONS if self.can(a)]

    @property
    def visible_cards(self) -> List[Card]:
        return list(self.hole_cards) + list(self.community_cards)

    @property
    def strength(self) -> float:
        """Caller-supplied strength, or one estimated from the visible cards."""
        if self.hand_strength is not None:
            return self.hand_strength
        return HandEvaluator.hand_strength(self.visible_cards)

    @property
    def unseen_cards(self) -> int:
        dealt = self.cards_dealt if self.cards_dealt is not None else len(self.visible_cards)
        return DECK_SIZE - dealt


def calculate_outs(cards: Sequence[Card]) -> int:
    """Rough count of cards that improve the hand, based on flush draws."""
    if not cards:
        return 0
    max_suit = max(Counter(c.suit for c in cards).values())
    if max_suit == 4:
        return 9
    if max_suit == 3:
        # backdoor flush plus straight possibilities
        return 10
    return 0


def improvement_factor(context: DecisionContext) -> float:
    """Chance-of-improving multiplier: outs over unseen cards, doubled, capped at 1."""
    remaining = context.unseen_cards
    if remaining <= 0:
        return 0.0
    outs = calculate_outs(context.visible_cards)
    return min(outs / remaining * 2, 1.0)


def estimate_reward(context: DecisionContext, action: ActionType) -> float:
    """Estimate the value of taking ``action``.

    Illegal actions score negative infinity. Folding always costs exactly
    the chips already committed. Every other reward is discounted by the
    number of players still in the hand and scaled by the improvement
    factor.
    """
    if not context.can(action):
        return ILLEGAL

    if action is ActionType.FOLD:
        return -context.player_bet

    strength = context.strength
    pot = context.pot_size
    bet = context.player_bet

    if action is ActionType.CHECK:
        reward = strength * 0.5
    elif action is ActionType.CALL:
        reward = strength * pot - bet
    elif action is ActionType.RAISE:
        reward = strength * (pot + context.raise_amount) - bet
    else:
        reward = strength * (pot + context.player_stack) - bet

    if context.remaining_players > 1:
        reward *= 2 / context.remaining_players

    return reward * improvement_factor(context)


def counterfactual_rewards(context: DecisionContext,
                           actions: Sequence[ActionType] = ADVISOR_ACTIONS) -> Dict[ActionType, float]:
    """Reward estimate for every action, legal or not."""
    return {action: estimate_reward(context, action) for action in actions}
