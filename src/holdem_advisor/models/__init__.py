"""Data models for the hold'em advisor."""

from holdem_advisor.models.card import Card, Rank, Suit
from holdem_advisor.models.action import ActionType, ADVISOR_ACTIONS
from holdem_advisor.models.hand import HandCategory, HandScore
from holdem_advisor.models.simulation import (
    GamePhase, PlayerStatus, PlayerState, ShowdownResult
)

__all__ = [
    "Card", "Rank", "Suit",
    "ActionType", "ADVISOR_ACTIONS",
    "HandCategory", "HandScore",
    "GamePhase", "PlayerStatus", "PlayerState", "ShowdownResult",
]
