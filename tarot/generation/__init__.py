"""
Generation module - deck sampling and draw resolution.
"""

from .deck import Deck, DeckConfiguration
from .draw import (
    DrawnCard,
    DrawOutcome,
    DrawPhase,
    DrawResolver,
    truncate_at_halt,
)

__all__ = [
    "Deck",
    "DeckConfiguration",
    "DrawnCard",
    "DrawOutcome",
    "DrawPhase",
    "DrawResolver",
    "truncate_at_halt",
]
