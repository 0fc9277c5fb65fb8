"""
Resistance Duration Calculator.

Each resistance selection adds one d12 of duration (in days) to its damage
type. A type picked once is shown as "1d12kh1", which rolls exactly like a
plain 1d12; a type picked N > 1 times is the sum "Nd12".
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from ..content.cards import RESISTANCE_DURATION_SIDES
from .dice import DiceExpression


def compute_resistance_durations(selections: Iterable[str]) -> Dict[str, int]:
    """
    Tally selections per damage type (first-selected order kept).

    >>> compute_resistance_durations(["acid", "cold", "acid"])
    {'acid': 2, 'cold': 1}
    """
    durations: Dict[str, int] = {}
    for damage_type in selections:
        durations[damage_type] = durations.get(damage_type, 0) + 1
    return durations


def duration_dice(tally: int) -> DiceExpression:
    """Dice rolled for a damage type selected `tally` times."""
    return DiceExpression(
        quantity=tally,
        sides=RESISTANCE_DURATION_SIDES,
        keep_highest_one=tally == 1,
    )


def duration_notation(tally: int) -> str:
    return duration_dice(tally).notation()


def duration_lines(durations: Dict[str, int]) -> List[str]:
    """Display lines like "Acid: 2d12 days"."""
    return [
        f"{damage_type.capitalize()}: {duration_notation(tally)} days"
        for damage_type, tally in durations.items()
    ]
