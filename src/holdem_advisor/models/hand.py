"""Hand category and score models."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple


class HandCategory(IntEnum):
    """Hand rankings from worst to best."""
    HIGH_CARD = 0
    ONE_PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


@dataclass(frozen=True, order=True)
class HandScore:
    """Evaluated hand: category first, then rank indices for tie-breaking.

    Rank indices run from 0 (two) to 12 (ace). Scores order naturally, so
    ``max(scores)`` is the best hand and equal scores are an exact tie.
    """
    category: HandCategory
    tiebreak: Tuple[int, ...] = ()

    @property
    def is_made_hand(self) -> bool:
        return self.category > HandCategory.HIGH_CARD

    def __str__(self) -> str:
        return self.category.label
