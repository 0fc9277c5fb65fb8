"""
Calculation module - dice evaluation and resistance durations.
"""

from .dice import (
    DiceExpression,
    DiceRoller,
    DICE_TOKEN,
    KEEP_HIGHEST_SUFFIX,
    MAX_DICE_QUANTITY,
    parse_dice,
    find_dice,
)
from .durations import (
    compute_resistance_durations,
    duration_dice,
    duration_notation,
    duration_lines,
)

__all__ = [
    "DiceExpression",
    "DiceRoller",
    "DICE_TOKEN",
    "KEEP_HIGHEST_SUFFIX",
    "MAX_DICE_QUANTITY",
    "parse_dice",
    "find_dice",
    "compute_resistance_durations",
    "duration_dice",
    "duration_notation",
    "duration_lines",
]
