"""
State module - RNG, player selections and the draw session.

Contains:
- RNG system (XorShift128, seed management)
- Selection state for resistance and reward choices
- DrawSession, the entry point hosts talk to
"""

# RNG System
from .rng import XorShift128, Random, seed_to_long, long_to_seed

# Selections
from .selections import SelectionState, ResistanceSelection

# Session
from .session import DrawSession

__all__ = [
    # RNG
    "XorShift128", "Random", "seed_to_long", "long_to_seed",
    # Selections
    "SelectionState", "ResistanceSelection",
    # Session
    "DrawSession",
]
