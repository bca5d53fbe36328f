"""Cards, evaluation and showdown for a single hand."""

from holdem_advisor.simulation.deck import Deck
from holdem_advisor.simulation.pot import PotManager
from holdem_advisor.simulation.evaluator import HandEvaluator
from holdem_advisor.simulation.showdown import ShowdownResolver

__all__ = ["Deck", "PotManager", "HandEvaluator", "ShowdownResolver"]
