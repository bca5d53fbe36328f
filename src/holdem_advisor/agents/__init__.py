"""Regret-matching advisor and opponent heuristics."""

from holdem_advisor.agents.rewards import DecisionContext, estimate_reward
from holdem_advisor.agents.regret import RegretState, RegretMatchingEngine, Recommendation
from holdem_advisor.agents.decision import OpponentPolicy

__all__ = ["DecisionContext", "estimate_reward", "RegretState",
           "RegretMatchingEngine", "Recommendation", "OpponentPolicy"]
