"""Deck management for a single hand."""

import logging
import random
from typing import Iterable, List, Optional, Set

from holdem_advisor.errors import ExhaustedDeck
from holdem_advisor.models.card import Card, Rank, Suit

logger = logging.getLogger(__name__)


def new_deck() -> List[Card]:
    """Return the 52 unique cards in suit-major order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def is_duplicate(card: Card, used: Set[str]) -> bool:
    """Check a card against a set of already-dealt card titles."""
    return card.title in used


class Deck:
    """A standard 52-card deck with used-card tracking.

    Cards are drawn from a shrinking pool, so every draw is uniform over the
    cards not yet dealt and the deck can never hand out the same card twice
    in one hand.
    """

    def __init__(self, rng: Optional[random.Random] = None, shuffle: bool = True):
        """Initialize a new deck.

        Args:
            rng: Random source used for shuffling. Inject a seeded
                ``random.Random`` for reproducible deals.
            shuffle: Whether to shuffle straight away.
        """
        self.rng = rng or random.Random()
        self.cards: List[Card] = []
        self.used: Set[str] = set()
        self._reset()
        if shuffle:
            self.shuffle()

    def _reset(self):
        self.cards = new_deck()
        self.used = set()

    def shuffle(self):
        """Shuffle the undealt cards in place."""
        self.rng.shuffle(self.cards)

    def draw(self, excluding: Optional[Iterable[Card]] = None) -> Card:
        """Draw one fresh card.

        Args:
            excluding: Extra cards that must not be returned (e.g. cards
                known to be held elsewhere).

        Returns:
            The drawn card, now marked as used.

        Raises:
            ExhaustedDeck: If every remaining card is excluded.
        """
        skip = {c.title for c in excluding} if excluding else set()
        for i, card in enumerate(self.cards):
            if card.title in skip:
                continue
            del self.cards[i]
            self.used.add(card.title)
            logger.debug("Drew %s (%d left)", card.title, len(self.cards))
            return card
        raise ExhaustedDeck(
            f"No unused cards left to draw ({len(self.cards)} remaining, "
            f"{len(skip)} excluded)"
        )

    def deal(self, count: int = 1) -> List[Card]:
        """Deal cards from the top of the deck.

        Args:
            count: Number of cards to deal.

        Returns:
            List of dealt cards.

        Raises:
            ExhaustedDeck: If fewer than ``count`` cards remain.
        """
        if count > len(self.cards):
            raise ExhaustedDeck(f"Not enough cards in deck. Need {count}, have {len(self.cards)}")
        return [self.draw() for _ in range(count)]

    def is_duplicate(self, card: Card) -> bool:
        """Whether ``card`` has already been dealt from this deck."""
        return is_duplicate(card, self.used)

    def reset(self):
        """Reset to all 52 cards with nothing used, then shuffle."""
        self._reset()
        self.shuffle()

    @property
    def remaining(self) -> int:
        """Get the number of remaining cards."""
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __repr__(self) -> str:
        return f"Deck(remaining={len(self.cards)}, used={len(self.used)})"
