"""
Content module - static card vocabulary and per-card constants.
"""

from .cards import (
    DeckMode,
    FULL_DECK,
    REDUCED_DECK,
    DECK_LISTS,
    MAX_DRAW,
    HALT_CARD,
    EXTEND_CARD,
    BONUS_CARD,
    BONUS_DRAW_SIZE,
    RESISTANCE_CARDS,
    RESISTANCE_DAMAGE_TYPES,
    RESISTANCE_DURATION_SIDES,
    REWARD_CARD,
    REWARD_OPTIONS,
    RewardOption,
    DEFAULT_REWARD,
    ROLL_EXEMPT_CARDS,
    deck_list,
    default_damage_type,
    get_reward_option,
)

__all__ = [
    "DeckMode",
    "FULL_DECK",
    "REDUCED_DECK",
    "DECK_LISTS",
    "MAX_DRAW",
    "HALT_CARD",
    "EXTEND_CARD",
    "BONUS_CARD",
    "BONUS_DRAW_SIZE",
    "RESISTANCE_CARDS",
    "RESISTANCE_DAMAGE_TYPES",
    "RESISTANCE_DURATION_SIDES",
    "REWARD_CARD",
    "REWARD_OPTIONS",
    "RewardOption",
    "DEFAULT_REWARD",
    "ROLL_EXEMPT_CARDS",
    "deck_list",
    "default_damage_type",
    "get_reward_option",
]
