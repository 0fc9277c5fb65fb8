"""
Effect Aggregator - tallies a drawn sequence into stacking effect records.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..content.cards import BONUS_CARD, HALT_CARD
from .registry import EffectRecord, RuleContext, get_rule
from . import cards as _cards  # noqa: F401  (registers the rule table)

logger = logging.getLogger(__name__)


@dataclass
class AggregatedEffects:
    """Records split into regular effects and curses."""
    regular: List[EffectRecord] = field(default_factory=list)
    curses: List[EffectRecord] = field(default_factory=list)
    # Drawn identifiers with no rule, and how often they came up
    unmapped: Dict[str, int] = field(default_factory=dict)

    @property
    def records(self) -> List[EffectRecord]:
        return self.regular + self.curses

    def find(self, card: str) -> Optional[EffectRecord]:
        for record in self.records:
            if record.card == card:
                return record
        return None

    def total_count(self) -> int:
        """Cards accounted for, mapped or not."""
        return sum(r.count for r in self.records) + sum(self.unmapped.values())


def count_cards(drawn: Iterable[str]) -> Counter:
    """Tally card identifiers (first-seen order is kept)."""
    return Counter(drawn)


def aggregate_effects(drawn: Iterable[str]) -> AggregatedEffects:
    """
    Turn a drawn sequence into effect records.

    Args:
        drawn: DrawOutcome or any iterable of card identifiers

    Returns:
        AggregatedEffects with `regular` and `curses` in first-drawn order
    """
    counts = count_cards(drawn)
    result = AggregatedEffects()
    if not counts:
        return result

    halt_drawn = HALT_CARD in counts

    for card, count in counts.items():
        card_rule = get_rule(card)
        if card_rule is None:
            result.unmapped[card] = count
            continue

        record = card_rule(RuleContext(card=card, count=count, halt_drawn=halt_drawn))
        if record.is_curse:
            result.curses.append(record)
        else:
            result.regular.append(record)

    if result.unmapped:
        logger.debug("No effect rule for %s", sorted(result.unmapped))

    return result


def restate_bonus(
    effects: AggregatedEffects, remaining: int, halt_drawn: bool = False,
) -> AggregatedEffects:
    """
    Copy of `effects` with the bonus card's record rebuilt for `remaining`
    unspent occurrences, or dropped when none are left.

    Tallies in `effects` itself are left alone.
    """
    regular = []
    for record in effects.regular:
        if record.card != BONUS_CARD:
            regular.append(record)
        elif remaining > 0:
            bonus_rule = get_rule(BONUS_CARD)
            regular.append(bonus_rule(
                RuleContext(card=BONUS_CARD, count=remaining, halt_drawn=halt_drawn)
            ))
    return AggregatedEffects(
        regular=regular,
        curses=list(effects.curses),
        unmapped=dict(effects.unmapped),
    )
