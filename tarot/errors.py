"""
Error taxonomy for the draw engine.

All errors are locally recoverable: callers re-prompt or disable the
affordance that triggered them. None of them should take down a session.
"""


class TarotError(ValueError):
    """Base class for every error raised by the draw engine."""


class InvalidConfiguration(TarotError):
    """Deck configuration or settings value rejected."""


class InvalidCount(TarotError):
    """Requested draw count is below 1 or above the session ceiling."""


class EmptyDeck(TarotError):
    """Sampling attempted against a deck with no members."""


class HaltCardPresent(TarotError):
    """Bonus draw requested after the halt card was drawn."""


class NoBonusDrawAvailable(TarotError):
    """Bonus draw requested with every bonus occurrence already spent."""


class InvalidSelection(TarotError):
    """Selection refers to an unknown occurrence or an unknown label."""


class UnparseableDiceExpression(TarotError):
    """Token looks like dice notation but cannot be rolled."""
