"""
Selection State - player choices attached to one draw outcome.

Resistance selections are keyed by the draw-sequence number of the card
occurrence they belong to, never by list position. A SelectionState is
built for exactly one outcome and is discarded, not patched, when that
outcome is replaced.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..content.cards import (
    DEFAULT_REWARD,
    RESISTANCE_CARDS,
    RESISTANCE_DAMAGE_TYPES,
    REWARD_OPTIONS,
    default_damage_type,
)
from ..errors import InvalidSelection
from ..generation.draw import DrawOutcome


@dataclass
class ResistanceSelection:
    """Damage type chosen for one resistance card occurrence."""
    card: str
    damage_type: str


@dataclass
class SelectionState:
    outcome: Optional[DrawOutcome] = None
    resistances: Dict[int, ResistanceSelection] = field(default_factory=dict)
    reward: str = DEFAULT_REWARD

    @classmethod
    def for_outcome(cls, outcome: Optional[DrawOutcome]) -> SelectionState:
        """Fresh selections with defaults for every resistance occurrence."""
        state = cls(outcome=outcome)
        if outcome is None:
            return state
        for drawn in outcome.draws:
            if drawn.card in RESISTANCE_CARDS:
                state.resistances[drawn.seq] = ResistanceSelection(
                    drawn.card, default_damage_type(drawn.card)
                )
        return state

    def is_for(self, outcome: Optional[DrawOutcome]) -> bool:
        return self.outcome is outcome

    def select_resistance(self, seq: int, damage_type: str) -> None:
        """
        Choose the damage type for the occurrence drawn as `seq`.

        Raises:
            InvalidSelection: no resistance card was drawn as `seq`, or the
                damage type isn't offered by that card
        """
        current = self.resistances.get(seq)
        if current is None:
            raise InvalidSelection(f"No resistance card at draw #{seq}")
        if damage_type not in RESISTANCE_DAMAGE_TYPES[current.card]:
            raise InvalidSelection(
                f"{current.card} doesn't offer {damage_type!r} resistance"
            )
        current.damage_type = damage_type

    def select_reward(self, value: str) -> None:
        if value not in {o.value for o in REWARD_OPTIONS}:
            raise InvalidSelection(f"Unknown reward type: {value!r}")
        self.reward = value

    def selections_for(self, card: str) -> List[str]:
        """Damage types chosen for `card`, in draw order."""
        return [
            sel.damage_type
            for _, sel in sorted(self.resistances.items())
            if sel.card == card
        ]

    def occurrences(self, card: str) -> List[Tuple[int, str]]:
        """(seq, damage_type) pairs for `card`, in draw order."""
        return [
            (seq, sel.damage_type)
            for seq, sel in sorted(self.resistances.items())
            if sel.card == card
        ]
