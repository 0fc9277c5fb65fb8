"""
Effect Rule Registry.

Each card identifier maps to one rule that turns (card, count) into an
EffectRecord. Rules are registered with decorators:

    @stacking_rule("champion", per_card=1)
    def champion(bonus: int, count: int) -> str:
        return f"You gain a +{bonus} bonus ..."

    fixed_rule("night", "You gain darkvision ...")

    @rule("coin")
    def coin(ctx: RuleContext) -> EffectRecord:
        ...

A card with no registered rule produces no record at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Union

from ..content.cards import RewardOption


# =============================================================================
# Payloads
# =============================================================================

@dataclass(frozen=True)
class Standard:
    """Plain effect text."""
    text: str


@dataclass(frozen=True)
class ResistanceChoice:
    """One damage-type selection per occurrence, from `damage_types`."""
    damage_types: Tuple[str, ...]


@dataclass(frozen=True)
class RewardChoice:
    """Pick one option; totals scale with the card count."""
    options: Tuple[RewardOption, ...]


@dataclass(frozen=True)
class BonusDrawOffer:
    """Effect text plus whether the extra draw can still be taken."""
    text: str
    enabled: bool


EffectPayload = Union[Standard, ResistanceChoice, RewardChoice, BonusDrawOffer]

PAYLOAD_TYPES = (Standard, ResistanceChoice, RewardChoice, BonusDrawOffer)


def payload_kind(payload: EffectPayload) -> str:
    """Stable tag for a payload variant (used for serialization)."""
    if isinstance(payload, Standard):
        return "standard"
    if isinstance(payload, ResistanceChoice):
        return "resistance_choice"
    if isinstance(payload, RewardChoice):
        return "reward_choice"
    if isinstance(payload, BonusDrawOffer):
        return "bonus_draw_offer"
    raise TypeError(f"Unknown effect payload: {payload!r}")


@dataclass(frozen=True)
class EffectRecord:
    """Aggregated effect of every occurrence of one card."""
    card: str
    count: int
    payload: EffectPayload
    is_curse: bool = False
    magnitude: Optional[int] = None  # None for effects that don't scale


@dataclass(frozen=True)
class RuleContext:
    """Inputs available to a rule."""
    card: str
    count: int
    halt_drawn: bool = False


RuleFn = Callable[[RuleContext], EffectRecord]


# =============================================================================
# Registry
# =============================================================================

_RULE_REGISTRY: Dict[str, RuleFn] = {}


def rule(card: str):
    """
    Decorator to register a full rule for `card`.

    The function receives a RuleContext and returns the EffectRecord.
    """
    def decorator(func: RuleFn) -> RuleFn:
        _RULE_REGISTRY[card] = func
        return func

    return decorator


def fixed_rule(card: str, text: str, curse: bool = False) -> RuleFn:
    """Register a non-stacking rule: the text ignores count beyond presence."""
    def fixed(ctx: RuleContext) -> EffectRecord:
        return EffectRecord(
            card=ctx.card, count=ctx.count, payload=Standard(text), is_curse=curse,
        )

    _RULE_REGISTRY[card] = fixed
    return fixed


def stacking_rule(card: str, per_card: int, curse: bool = False):
    """
    Decorator for linearly stacking rules.

    The decorated function gets (magnitude, count) where
    magnitude = per_card * count, and returns the effect text.
    """
    def decorator(func: Callable[[int, int], str]) -> Callable[[int, int], str]:
        def stacking(ctx: RuleContext) -> EffectRecord:
            magnitude = per_card * ctx.count
            return EffectRecord(
                card=ctx.card,
                count=ctx.count,
                payload=Standard(func(magnitude, ctx.count)),
                is_curse=curse,
                magnitude=magnitude,
            )

        _RULE_REGISTRY[card] = stacking
        return func

    return decorator


def get_rule(card: str) -> Optional[RuleFn]:
    return _RULE_REGISTRY.get(card)


def list_registered_rules() -> List[str]:
    """List all card identifiers with a rule."""
    return list(_RULE_REGISTRY.keys())


def plural(count: int, singular: str, plural_form: Optional[str] = None) -> str:
    """Word form for `count`: singular when count == 1."""
    if count == 1:
        return singular
    return plural_form if plural_form is not None else singular + "s"
