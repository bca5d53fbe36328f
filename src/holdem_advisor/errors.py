"""Error kinds raised by the card model, evaluator and hand session."""


class HoldemError(ValueError):
    """Base class for all holdem_advisor errors."""


class InvalidCard(HoldemError):
    """A rank or suit token could not be recognised."""


class ExhaustedDeck(HoldemError):
    """More unused cards were requested than remain in the deck."""


class InvalidHand(HoldemError):
    """A hand cannot be evaluated (wrong card count, missing score)."""


class DuplicateCard(InvalidHand):
    """The same card appears more than once in a hand."""


class StreetOrderError(HoldemError):
    """A street was dealt out of order or showdown was called too early."""
