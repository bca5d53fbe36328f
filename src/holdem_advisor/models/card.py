"""Card, Rank, and Suit models."""

from dataclasses import dataclass
from enum import Enum

from holdem_advisor.errors import InvalidCard


class Suit(str, Enum):
    DIAMONDS = "d"
    HEARTS = "h"
    CLUBS = "c"
    SPADES = "s"

    @classmethod
    def from_symbol(cls, s: str) -> "Suit":
        mapping = {
            "h": cls.HEARTS, "hearts": cls.HEARTS, "♥": cls.HEARTS,
            "d": cls.DIAMONDS, "diamonds": cls.DIAMONDS, "♦": cls.DIAMONDS,
            "c": cls.CLUBS, "clubs": cls.CLUBS, "♣": cls.CLUBS,
            "s": cls.SPADES, "spades": cls.SPADES, "♠": cls.SPADES,
        }
        key = s.strip().lower()
        if key in mapping:
            return mapping[key]
        raise InvalidCard(f"Unknown suit: {s!r}")

    @property
    def symbol(self) -> str:
        return {"h": "♥", "d": "♦", "c": "♣", "s": "♠"}[self.value]

    @property
    def long_name(self) -> str:
        return {"h": "hearts", "d": "diamonds", "c": "clubs", "s": "spades"}[self.value]


_RANK_NAMES = [
    "two", "three", "four", "five", "six", "seven", "eight",
    "nine", "ten", "jack", "queen", "king", "ace",
]


class Rank(str, Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "T"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def order(self) -> int:
        """Position in the rank order: 0 for a two up to 12 for an ace."""
        return _RANK_ORDER.index(self)

    @property
    def long_name(self) -> str:
        return _RANK_NAMES[self.order]

    @classmethod
    def from_index(cls, index: int) -> "Rank":
        if not 0 <= index <= 12:
            raise InvalidCard(f"Rank index must be 0-12, got {index}")
        return _RANK_ORDER[index]

    @classmethod
    def from_char(cls, c: str) -> "Rank":
        token = c.strip()
        for r in cls:
            if r.value == token.upper():
                return r
        if token == "10":
            return cls.TEN
        if token.lower() in _RANK_NAMES:
            return _RANK_ORDER[_RANK_NAMES.index(token.lower())]
        raise InvalidCard(f"Unknown rank: {c!r}")


_RANK_ORDER = list(Rank)


@dataclass(frozen=True)
class Card:
    """A single playing card."""
    rank: Rank
    suit: Suit

    @classmethod
    def parse(cls, s: str) -> "Card":
        """Parse a card string like 'Ah', 'Ts', '10c', 'A♠' or 'ace-spades'."""
        s = s.strip()
        if "-" in s:
            rank_name, _, suit_name = s.partition("-")
            return cls.from_name_and_suit(rank_name, suit_name)
        if len(s) == 2:
            return cls(Rank.from_char(s[0]), Suit.from_symbol(s[1]))
        elif len(s) == 3 and s[:2] == "10":
            return cls(Rank.TEN, Suit.from_symbol(s[2]))
        raise InvalidCard(f"Cannot parse card: {s!r}")

    @classmethod
    def from_name_and_suit(cls, rank_name: str, suit_name: str) -> "Card":
        """Build from names like rank_name='queen' suit_name='hearts'."""
        return cls(Rank.from_char(rank_name), Suit.from_symbol(suit_name))

    @property
    def title(self) -> str:
        """Identifier used for used-card tracking, e.g. 'ace-spades'."""
        return f"{self.rank.long_name}-{self.suit.long_name}"

    def __lt__(self, other: "Card") -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return (self.rank.order, self.suit.value) < (other.rank.order, other.suit.value)

    def __repr__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.symbol}"


def parse_cards(text: str) -> list:
    """Parse whitespace or comma separated cards, e.g. 'As Kd, 7h'."""
    tokens = text.replace(",", " ").split()
    return [Card.parse(t) for t in tokens]
