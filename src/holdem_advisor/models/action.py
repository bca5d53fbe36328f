"""Action models."""

from enum import Enum


class ActionType(str, Enum):
    """Advisor actions, in their declared order.

    The order matters: strategy sampling walks actions in this order and
    recommendation ties go to the earlier action.
    """
    CHECK = "check"
    CALL = "call"
    RAISE = "raise"
    ALL_IN = "allin"
    FOLD = "fold"

    @property
    def label(self) -> str:
        return "All-in" if self is ActionType.ALL_IN else self.value.capitalize()


ADVISOR_ACTIONS = tuple(ActionType)
