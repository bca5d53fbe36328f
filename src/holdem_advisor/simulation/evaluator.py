"""Hand evaluation: category detection, tie-break keys and hand strength."""

from collections import Counter
from typing import Dict, List, Optional, Sequence, Tuple

from holdem_advisor.errors import DuplicateCard, InvalidHand
from holdem_advisor.models.card import Card, Rank
from holdem_advisor.models.hand import HandCategory, HandScore

ACE = Rank.ACE.order
WHEEL_ACE = -1

# Normalized strength per category before the high-card bonus
CATEGORY_STRENGTH: Dict[HandCategory, float] = {
    HandCategory.HIGH_CARD: 0.2,
    HandCategory.ONE_PAIR: 0.3,
    HandCategory.TWO_PAIR: 0.4,
    HandCategory.THREE_OF_A_KIND: 0.5,
    HandCategory.STRAIGHT: 0.6,
    HandCategory.FLUSH: 0.7,
    HandCategory.FULL_HOUSE: 0.8,
    HandCategory.FOUR_OF_A_KIND: 0.9,
    HandCategory.STRAIGHT_FLUSH: 1.0,
    HandCategory.ROYAL_FLUSH: 1.0,
}

_PLURALS = {"six": "Sixes"}


def _plural(order: int) -> str:
    name = Rank.from_index(order).long_name
    return _PLURALS.get(name, name.title() + "s")


def _single(order: int) -> str:
    return Rank.from_index(order).long_name.title()


class HandEvaluator:
    """Evaluates poker hands."""

    @staticmethod
    def evaluate(cards: Sequence[Card]) -> HandScore:
        """Evaluate the best poker hand in 5 to 7 cards.

        Categories are checked strictly from royal flush down to high card
        and the first match wins.

        Args:
            cards: Hole cards plus visible community cards.

        Returns:
            The HandScore of the best five-card hand.

        Raises:
            InvalidHand: If fewer than 5 or more than 7 cards are given.
            DuplicateCard: If a card appears more than once.
        """
        HandEvaluator._validate(cards, minimum=5)

        orders = sorted((c.rank.order for c in cards), reverse=True)
        rank_counts = Counter(orders)
        suit_counts = Counter(c.suit for c in cards)

        flush_orders: List[int] = []
        for suit, count in suit_counts.items():
            if count >= 5:
                flush_orders = sorted((c.rank.order for c in cards if c.suit == suit),
                                      reverse=True)

        # Royal / straight flush
        if flush_orders:
            top = HandEvaluator._straight_top(flush_orders)
            if top == ACE:
                return HandScore(HandCategory.ROYAL_FLUSH, (ACE,))
            if top is not None:
                return HandScore(HandCategory.STRAIGHT_FLUSH, (top,))

        quads = [r for r, n in rank_counts.items() if n == 4]
        triples = sorted((r for r, n in rank_counts.items() if n == 3), reverse=True)
        pairs = sorted((r for r, n in rank_counts.items() if n == 2), reverse=True)

        # Four of a kind
        if quads:
            quad = max(quads)
            kicker = max(r for r in orders if r != quad)
            return HandScore(HandCategory.FOUR_OF_A_KIND, (quad, kicker))

        # Full house; a second triple only contributes a pair
        if triples and (len(triples) > 1 or pairs):
            triple = triples[0]
            pair = max(triples[1:] + pairs)
            return HandScore(HandCategory.FULL_HOUSE, (triple, pair))

        if flush_orders:
            return HandScore(HandCategory.FLUSH, tuple(flush_orders[:5]))

        top = HandEvaluator._straight_top(orders)
        if top is not None:
            return HandScore(HandCategory.STRAIGHT, (top,))

        if triples:
            triple = triples[0]
            kickers = [r for r in orders if r != triple][:2]
            return HandScore(HandCategory.THREE_OF_A_KIND, (triple, *kickers))

        if len(pairs) >= 2:
            high, low = pairs[0], pairs[1]
            kicker = max(r for r in orders if r not in (high, low))
            return HandScore(HandCategory.TWO_PAIR, (high, low, kicker))

        if pairs:
            pair = pairs[0]
            kickers = [r for r in orders if r != pair][:3]
            return HandScore(HandCategory.ONE_PAIR, (pair, *kickers))

        return HandScore(HandCategory.HIGH_CARD, tuple(orders[:5]))

    @staticmethod
    def preliminary(cards: Sequence[Card]) -> HandScore:
        """Reduced-precision score for fewer than five cards.

        Only pairs and sets are recognised. Used for pre-flop betting
        heuristics, never at showdown.
        """
        HandEvaluator._validate(cards, minimum=1, maximum=4)
        orders = sorted((c.rank.order for c in cards), reverse=True)
        rank_counts = Counter(orders)
        grouped = sorted(rank_counts, key=lambda r: (-rank_counts[r], -r))
        counts = sorted(rank_counts.values(), reverse=True)

        if counts[0] == 4:
            return HandScore(HandCategory.FOUR_OF_A_KIND, (grouped[0],))
        if counts[0] == 3:
            return HandScore(HandCategory.THREE_OF_A_KIND, tuple(grouped))
        if counts[0] == 2 and len(counts) > 1 and counts[1] == 2:
            return HandScore(HandCategory.TWO_PAIR, tuple(grouped[:2]))
        if counts[0] == 2:
            return HandScore(HandCategory.ONE_PAIR, tuple(grouped))
        return HandScore(HandCategory.HIGH_CARD, tuple(orders))

    @staticmethod
    def score(cards: Sequence[Card]) -> HandScore:
        """Full evaluation when five or more cards are known, else preliminary."""
        if len(cards) >= 5:
            return HandEvaluator.evaluate(cards)
        return HandEvaluator.preliminary(cards)

    @staticmethod
    def best_hole_ranks(hole_cards: Sequence[Card]) -> Tuple[int, int]:
        """Rank indices of the two hole cards, highest first."""
        if len(hole_cards) != 2:
            raise InvalidHand(f"Expected 2 hole cards, got {len(hole_cards)}")
        high, low = sorted((c.rank.order for c in hole_cards), reverse=True)
        return high, low

    @staticmethod
    def hand_strength(cards: Sequence[Card]) -> float:
        """Approximate strength in [0, 1] from whatever cards are known.

        The category sets the base value and the highest rank held adds up
        to 0.1 on top.
        """
        score = HandEvaluator.score(cards)
        high = max(c.rank.order for c in cards)
        return HandEvaluator.strength(score, high)

    @staticmethod
    def strength(score: HandScore, high_card: Optional[int] = None) -> float:
        """Map a HandScore to a normalized strength in [0, 1]."""
        if high_card is None:
            high_card = max(score.tiebreak) if score.tiebreak else 0
        value = CATEGORY_STRENGTH[score.category] + (high_card / 13) * 0.1
        return min(value, 1.0)

    @staticmethod
    def _straight_top(orders: Sequence[int]) -> Optional[int]:
        """Top rank index of the highest straight, or None.

        An ace is also counted as -1 so that A-2-3-4-5 is a straight with
        the five on top.
        """
        present = set(orders)
        if ACE in present:
            present.add(WHEEL_ACE)
        for top in range(ACE, Rank.FIVE.order - 1, -1):
            if all(top - step in present for step in range(5)):
                return top
        return None

    @staticmethod
    def _validate(cards: Sequence[Card], minimum: int, maximum: int = 7):
        if len(cards) < minimum:
            raise InvalidHand(f"Need at least {minimum} cards to evaluate, got {len(cards)}")
        if len(cards) > maximum:
            raise InvalidHand(f"Cannot evaluate more than {maximum} cards, got {len(cards)}")
        seen = set()
        for card in cards:
            if not isinstance(card, Card):
                raise InvalidHand(f"Not a card: {card!r}")
            if card in seen:
                raise DuplicateCard(f"Duplicate card in hand: {card.title}")
            seen.add(card)

    @staticmethod
    def compare(cards1: Sequence[Card], cards2: Sequence[Card]) -> int:
        """Compare two hands.

        Returns:
            1 if cards1 wins, -1 if cards2 wins, 0 if tie.
        """
        score1 = HandEvaluator.evaluate(cards1)
        score2 = HandEvaluator.evaluate(cards2)
        if score1 > score2:
            return 1
        if score1 < score2:
            return -1
        return 0

    @staticmethod
    def describe(score: HandScore) -> str:
        """Human-readable category plus kicker description."""
        c = score.category
        k = score.tiebreak
        if c == HandCategory.ROYAL_FLUSH:
            return "Royal Flush"
        if c in (HandCategory.STRAIGHT_FLUSH, HandCategory.STRAIGHT):
            return f"{c.label}, {_single(k[0])} high"
        if c == HandCategory.FOUR_OF_A_KIND:
            text = f"Four of a Kind, {_plural(k[0])}"
            return text + (f", {_single(k[1])} kicker" if len(k) > 1 else "")
        if c == HandCategory.FULL_HOUSE:
            return f"Full House, {_plural(k[0])} full of {_plural(k[1])}"
        if c == HandCategory.FLUSH:
            return f"Flush, {_single(k[0])} high"
        if c == HandCategory.THREE_OF_A_KIND:
            text = f"Three of a Kind, {_plural(k[0])}"
        elif c == HandCategory.TWO_PAIR:
            text = f"Two Pair, {_plural(k[0])} and {_plural(k[1])}"
            k = k[1:]
        elif c == HandCategory.ONE_PAIR:
            text = f"One Pair, {_plural(k[0])}"
        else:
            return f"High Card, {_single(k[0])}" + (
                f" with {', '.join(_single(r) for r in k[1:])}" if len(k) > 1 else "")
        kickers = k[1:]
        if not kickers:
            return text
        word = "kicker" if len(kickers) == 1 else "kickers"
        return f"{text}, {', '.join(_single(r) for r in kickers)} {word}"
