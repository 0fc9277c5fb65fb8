"""
Effects module - per-card rules, aggregation and display.

Importing this package registers the full rule table.
"""

from .registry import (
    Standard,
    ResistanceChoice,
    RewardChoice,
    BonusDrawOffer,
    EffectPayload,
    EffectRecord,
    RuleContext,
    rule,
    fixed_rule,
    stacking_rule,
    get_rule,
    list_registered_rules,
    payload_kind,
)
from .aggregate import AggregatedEffects, aggregate_effects, count_cards, restate_bonus
from .render import EffectView, describe, describe_all, display_name, roll_all

__all__ = [
    "Standard",
    "ResistanceChoice",
    "RewardChoice",
    "BonusDrawOffer",
    "EffectPayload",
    "EffectRecord",
    "RuleContext",
    "rule",
    "fixed_rule",
    "stacking_rule",
    "get_rule",
    "list_registered_rules",
    "payload_kind",
    "AggregatedEffects",
    "aggregate_effects",
    "count_cards",
    "restate_bonus",
    "EffectView",
    "describe",
    "describe_all",
    "display_name",
    "roll_all",
]
