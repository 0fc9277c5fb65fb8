"""
Presentation helpers - effect records as display text.

`describe()` flattens an EffectRecord plus the current selections into an
EffectView; `roll_all()` is the "roll dice" pass that replaces every dice
expression in the views with rolled totals.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional

from ..calc.dice import DiceRoller
from ..calc.durations import compute_resistance_durations, duration_lines
from ..content.cards import ROLL_EXEMPT_CARDS, RewardOption, get_reward_option
from ..state.selections import SelectionState
from .aggregate import AggregatedEffects
from .registry import (
    BonusDrawOffer,
    EffectRecord,
    ResistanceChoice,
    RewardChoice,
    Standard,
)


@dataclass(frozen=True)
class EffectView:
    """Display form of one effect."""
    card: str
    title: str
    is_curse: bool
    description: Optional[str] = None
    lines: List[str] = field(default_factory=list)
    bonus_enabled: bool = False


def display_name(card: str, count: int) -> str:
    """Capitalized card name, with "(xN)" when drawn more than once."""
    name = card.capitalize()
    if count > 1:
        return f"{name} (x{count})"
    return name


def reward_description(option: RewardOption, count: int) -> str:
    total_quantity = option.quantity * count
    total_worth = total_quantity * option.worth
    return (
        f"{total_quantity} {option.label.lower()}, each worth {option.worth} gp, "
        f"appear at your feet. (total: {total_worth} gp)"
    )


def describe(record: EffectRecord, selections: Optional[SelectionState] = None) -> EffectView:
    """Build the view for `record` using `selections` for choice effects."""
    selections = selections or SelectionState()
    title = display_name(record.card, record.count)
    payload = record.payload

    if isinstance(payload, Standard):
        return EffectView(record.card, title, record.is_curse, description=payload.text)

    if isinstance(payload, ResistanceChoice):
        chosen = selections.selections_for(record.card)
        lines = [
            f"Resistance {i}: {damage_type.capitalize()}"
            for i, damage_type in enumerate(chosen, 1)
        ]
        lines += duration_lines(compute_resistance_durations(chosen))
        return EffectView(record.card, title, record.is_curse, lines=lines)

    if isinstance(payload, RewardChoice):
        option = get_reward_option(selections.reward)
        return EffectView(
            record.card, title, record.is_curse,
            description=reward_description(option, record.count),
            lines=[f"Reward type: {option.label}"],
        )

    if isinstance(payload, BonusDrawOffer):
        return EffectView(
            record.card, title, record.is_curse,
            description=payload.text, bonus_enabled=payload.enabled,
        )

    raise TypeError(f"Unknown effect payload: {payload!r}")


def describe_all(
    effects: AggregatedEffects, selections: Optional[SelectionState] = None,
) -> List[EffectView]:
    """Views for regular effects first, then curses."""
    return [describe(record, selections) for record in effects.records]


def roll_all(views: List[EffectView], roller: DiceRoller) -> List[EffectView]:
    """
    Roll every dice expression in `views`.

    Exempt cards (the monster curse, rolled by the player on each saving
    throw) keep their notation.
    """
    rolled = []
    for view in views:
        if view.card in ROLL_EXEMPT_CARDS:
            rolled.append(view)
            continue
        description = view.description
        if description is not None:
            description = roller.evaluate_in_text(description)
        lines = [roller.evaluate_in_text(line) for line in view.lines]
        rolled.append(replace(view, description=description, lines=lines, bonus_enabled=False))
    return rolled
