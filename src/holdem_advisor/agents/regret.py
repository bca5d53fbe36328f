"""Regret-matching decision engine.

The engine keeps one :class:`RegretState` per advisory session. Reading a
strategy (:func:`compute_strategy`) is kept apart from recording it
(:func:`accumulate`) so the current strategy can be inspected without
changing the running average.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from holdem_advisor.agents.rewards import DecisionContext, counterfactual_rewards, estimate_reward
from holdem_advisor.models.action import ADVISOR_ACTIONS, ActionType

logger = logging.getLogger(__name__)

Strategy = Dict[ActionType, float]


@dataclass
class RegretState:
    """Cumulative regrets and strategy mass per action."""
    actions: Tuple[ActionType, ...] = ADVISOR_ACTIONS
    regret_sum: Dict[ActionType, float] = field(default_factory=dict)
    strategy_sum: Dict[ActionType, float] = field(default_factory=dict)

    def __post_init__(self):
        self.actions = tuple(self.actions)
        for action in self.actions:
            self.regret_sum.setdefault(action, 0.0)
            self.strategy_sum.setdefault(action, 0.0)

    def reset(self):
        """Forget all accumulated regret and strategy mass."""
        for action in self.actions:
            self.regret_sum[action] = 0.0
            self.strategy_sum[action] = 0.0

    @property
    def iterations(self) -> float:
        """Total strategy mass recorded, one unit per accumulated strategy."""
        return sum(self.strategy_sum.values())


def _uniform(actions: Sequence[ActionType]) -> Strategy:
    return {a: 1.0 / len(actions) for a in actions}


def compute_strategy(state: RegretState) -> Strategy:
    """Current strategy from positive regrets, uniform when none are positive."""
    weights = {a: max(state.regret_sum[a], 0.0) for a in state.actions}
    total = sum(weights.values())
    if total > 0:
        return {a: w / total for a, w in weights.items()}
    return _uniform(state.actions)


def accumulate(state: RegretState, strategy: Mapping[ActionType, float]):
    """Add a strategy into the running strategy sum."""
    for action in state.actions:
        state.strategy_sum[action] += strategy.get(action, 0.0)


def average_strategy(state: RegretState) -> Strategy:
    """Time-averaged strategy, uniform before anything was accumulated."""
    total = sum(state.strategy_sum.values())
    if total > 0:
        return {a: state.strategy_sum[a] / total for a in state.actions}
    return _uniform(state.actions)


def restrict_strategy(strategy: Mapping[ActionType, float],
                      legal: Iterable[ActionType]) -> Strategy:
    """Zero out illegal actions and renormalize over the legal ones."""
    allowed = set(legal)
    legal = [a for a in strategy if a in allowed]
    if not legal:
        raise ValueError("No legal actions to choose from")
    mass = sum(strategy[a] for a in legal)
    if mass <= 0:
        weights = {a: 1.0 / len(legal) for a in legal}
    else:
        weights = {a: strategy[a] / mass for a in legal}
    return {a: weights.get(a, 0.0) for a in strategy}


@dataclass(frozen=True)
class Recommendation:
    """Suggested action with its average-strategy probability."""
    action: ActionType
    probability: float
    strategy: Dict[ActionType, float]

    @property
    def confidence(self) -> str:
        return f"{self.probability * 100:.2f}%"


class RegretMatchingEngine:
    """Regret-matching advisor over a fixed, ordered set of actions."""

    def __init__(self, state: Optional[RegretState] = None,
                 rng: Optional[random.Random] = None):
        """Initialize the engine.

        Args:
            state: Regret state to continue from; a fresh one if omitted.
            rng: Random source for action sampling.
        """
        self.state = state or RegretState()
        self.rng = rng or random.Random()

    @property
    def actions(self) -> Tuple[ActionType, ...]:
        return self.state.actions

    def compute_strategy(self) -> Strategy:
        return compute_strategy(self.state)

    def accumulate(self, strategy: Mapping[ActionType, float]):
        accumulate(self.state, strategy)

    def current_strategy(self) -> Strategy:
        """Compute the current strategy and record it in the strategy sum."""
        strategy = self.compute_strategy()
        self.accumulate(strategy)
        return strategy

    def average_strategy(self) -> Strategy:
        return average_strategy(self.state)

    def select_action(self, strategy: Mapping[ActionType, float]) -> ActionType:
        """Sample an action by walking cumulative probability in declared order.

        When rounding leaves the draw unmatched, falls back to the last
        action that has any probability, so zeroed actions are never chosen.
        """
        r = self.rng.random()
        cumulative = 0.0
        for action in self.actions:
            cumulative += strategy.get(action, 0.0)
            if r < cumulative:
                return action
        for action in reversed(self.actions):
            if strategy.get(action, 0.0) > 0:
                return action
        return self.actions[-1]

    def estimate_reward(self, context: DecisionContext, action: ActionType) -> float:
        return estimate_reward(context, action)

    def counterfactual_rewards(self, context: DecisionContext) -> Dict[ActionType, float]:
        return counterfactual_rewards(context, self.actions)

    def update_regrets(self, action_taken: ActionType, reward: float,
                       counterfactual: Mapping[ActionType, float]):
        """Add ``counterfactual[a] - reward`` to every action's regret.

        Illegal actions (negative infinite reward) lose any positive regret
        instead of going to negative infinity, so they drop out of the
        strategy while the sums stay finite.

        Raises:
            ValueError: If the taken action's reward is not finite.
        """
        if not math.isfinite(reward):
            raise ValueError(f"Reward for taken action {action_taken.value} must be finite")
        for action in self.actions:
            value = counterfactual[action]
            if math.isfinite(value):
                self.state.regret_sum[action] += value - reward
            else:
                self.state.regret_sum[action] = min(self.state.regret_sum[action], 0.0)
        logger.debug("Regrets after %s: %s", action_taken.value,
                     {a.value: round(v, 4) for a, v in self.state.regret_sum.items()})

    def train(self, context: DecisionContext, iterations: int) -> Strategy:
        """Run regret-matching iterations against one decision point.

        Each iteration samples from the current strategy restricted to the
        legal actions, records that strategy, and updates regrets from the
        counterfactual rewards.

        Returns:
            The average strategy after training.
        """
        if iterations < 0:
            raise ValueError(f"iterations must be non-negative, got {iterations}")
        legal = context.legal_actions
        counterfactual = self.counterfactual_rewards(context)
        for _ in range(iterations):
            strategy = restrict_strategy(self.compute_strategy(), legal)
            self.accumulate(strategy)
            action = self.select_action(strategy)
            self.update_regrets(action, counterfactual[action], counterfactual)
        logger.info("Trained %d iterations over %s", iterations, [a.value for a in legal])
        return self.average_strategy()

    def recommend_action(self, legal: Optional[Iterable[ActionType]] = None) -> Recommendation:
        """Most probable action under the average strategy.

        Ties go to the action declared first. When ``legal`` is given the
        choice is limited to those actions; the reported distribution is
        still the full average strategy.
        """
        strategy = self.average_strategy()
        candidates = [a for a in self.actions if legal is None or a in set(legal)]
        if not candidates:
            raise ValueError("No legal actions to recommend")
        best = candidates[0]
        for action in candidates[1:]:
            if strategy[action] > strategy[best]:
                best = action
        return Recommendation(best, strategy[best], strategy)
