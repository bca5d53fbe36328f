"""Tests for card parsing and the card, hand and action models."""

import pytest

from holdem_advisor.errors import HoldemError, InvalidCard
from holdem_advisor.models.action import ADVISOR_ACTIONS, ActionType
from holdem_advisor.models.card import Card, Rank, Suit, parse_cards
from holdem_advisor.models.hand import HandCategory, HandScore


class TestCardParsing:
    """Tests for Card.parse and parse_cards."""

    def test_short_form(self):
        card = Card.parse("As")
        assert card == Card(Rank.ACE, Suit.SPADES)

    def test_ten_forms(self):
        assert Card.parse("Th") == Card.parse("10h") == Card(Rank.TEN, Suit.HEARTS)

    def test_lowercase_rank(self):
        assert Card.parse("kd") == Card(Rank.KING, Suit.DIAMONDS)

    def test_unicode_suit(self):
        assert Card.parse("Q♣") == Card(Rank.QUEEN, Suit.CLUBS)

    def test_title_form(self):
        assert Card.parse("ace-spades") == Card(Rank.ACE, Suit.SPADES)
        assert Card.parse("Queen-Hearts") == Card(Rank.QUEEN, Suit.HEARTS)

    def test_parse_cards_separators(self):
        cards = parse_cards("As Kd, 7h,2c")
        assert [repr(c) for c in cards] == ["As", "Kd", "7h", "2c"]

    def test_parse_cards_empty(self):
        assert parse_cards("") == []

    @pytest.mark.parametrize("text", ["Zs", "Ax", "A", "ace-spoons", "11h", "AKs"])
    def test_invalid_cards(self, text):
        with pytest.raises(InvalidCard):
            Card.parse(text)

    def test_invalid_card_is_value_error(self):
        with pytest.raises(ValueError):
            Card.parse("1s")
        assert issubclass(InvalidCard, HoldemError)


class TestCardModel:
    """Tests for Card, Rank and Suit properties."""

    def test_title(self):
        assert Card.parse("As").title == "ace-spades"
        assert Card.parse("Td").title == "ten-diamonds"

    def test_str_and_repr(self):
        card = Card.parse("Ah")
        assert str(card) == "A♥"
        assert repr(card) == "Ah"

    def test_rank_order(self):
        assert Rank.TWO.order == 0
        assert Rank.ACE.order == 12
        assert Rank.from_index(8) is Rank.TEN

    def test_rank_from_index_out_of_range(self):
        with pytest.raises(InvalidCard):
            Rank.from_index(13)

    def test_ordering(self):
        cards = parse_cards("Ks 2h As 9d")
        assert [repr(c) for c in sorted(cards)] == ["2h", "9d", "Ks", "As"]

    def test_cards_are_hashable(self):
        assert len({Card.parse("As"), Card.parse("ace-spades"), Card.parse("Ks")}) == 2

    def test_suit_names(self):
        assert Suit.SPADES.symbol == "♠"
        assert Suit.from_symbol("Diamonds") is Suit.DIAMONDS


class TestHandScore:
    """Tests for HandScore ordering."""

    def test_category_dominates_tiebreak(self):
        pair = HandScore(HandCategory.ONE_PAIR, (0, 1, 2, 3))
        high = HandScore(HandCategory.HIGH_CARD, (12, 11, 10, 9, 7))
        assert pair > high

    def test_tiebreak_compared_lexicographically(self):
        a = HandScore(HandCategory.TWO_PAIR, (12, 7, 2))
        b = HandScore(HandCategory.TWO_PAIR, (12, 7, 11))
        assert a < b

    def test_labels(self):
        assert HandCategory.FULL_HOUSE.label == "Full House"
        assert str(HandScore(HandCategory.ROYAL_FLUSH, (12,))) == "Royal Flush"
        assert HandScore(HandCategory.ONE_PAIR, (3,)).is_made_hand
        assert not HandScore(HandCategory.HIGH_CARD, (3,)).is_made_hand


class TestActionType:
    """Tests for the advisor's action set."""

    def test_declared_order(self):
        assert ADVISOR_ACTIONS == (
            ActionType.CHECK, ActionType.CALL, ActionType.RAISE,
            ActionType.ALL_IN, ActionType.FOLD,
        )

    def test_values(self):
        assert ActionType("allin") is ActionType.ALL_IN
        assert ActionType.ALL_IN.label == "All-in"
