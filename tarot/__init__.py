"""
Tarot draw engine.

Deck sampling, the halt/extend/bonus draw state machine, and aggregation of
drawn cards into stacking effect records with embedded dice notation.
"""

from .errors import (
    TarotError,
    InvalidConfiguration,
    InvalidCount,
    EmptyDeck,
    HaltCardPresent,
    NoBonusDrawAvailable,
    InvalidSelection,
    UnparseableDiceExpression,
)
from .state.rng import Random, XorShift128, seed_to_long, long_to_seed
from .state.session import DrawSession
from .content.cards import DeckMode, FULL_DECK, REDUCED_DECK
from .generation.deck import Deck, DeckConfiguration
from .generation.draw import DrawOutcome, DrawnCard, DrawResolver
from .effects.aggregate import aggregate_effects, AggregatedEffects
from .calc.dice import DiceExpression, DiceRoller
from .calc.durations import compute_resistance_durations

__all__ = [
    # Errors
    "TarotError",
    "InvalidConfiguration",
    "InvalidCount",
    "EmptyDeck",
    "HaltCardPresent",
    "NoBonusDrawAvailable",
    "InvalidSelection",
    "UnparseableDiceExpression",
    # RNG
    "Random", "XorShift128", "seed_to_long", "long_to_seed",
    # Session
    "DrawSession",
    # Content
    "DeckMode", "FULL_DECK", "REDUCED_DECK",
    # Drawing
    "Deck", "DeckConfiguration", "DrawOutcome", "DrawnCard", "DrawResolver",
    # Effects
    "aggregate_effects", "AggregatedEffects",
    # Calc
    "DiceExpression", "DiceRoller", "compute_resistance_durations",
]
