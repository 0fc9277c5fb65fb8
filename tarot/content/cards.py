"""
Card Vocabulary - static deck content.

Defines:
- The 22-card FULL deck and the 13-card REDUCED deck (display order)
- Deck modes
- The cards that change the draw process itself (halt, extend, bonus)
- Resistance cards and their damage-type vocabularies
- The reward card and its options
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple


class DeckMode(Enum):
    """Which member set a deck is built from."""
    FULL = "full"
    REDUCED = "reduced"
    CUSTOM = "custom"


# =============================================================================
# Deck Lists
# =============================================================================

FULL_DECK: Tuple[str, ...] = (
    "beginning",
    "champion",
    "chancellor",
    "chaos",
    "coin",
    "crown",
    "dawn",
    "day",
    "destiny",
    "dusk",
    "end",
    "isolation",
    "justice",
    "knife",
    "lock",
    "mischief",
    "monster",
    "mystery",
    "night",
    "order",
    "student",
    "vulture",
)

REDUCED_DECK: Tuple[str, ...] = (
    "day",
    "night",
    "dawn",
    "crown",
    "lock",
    "champion",
    "chaos",
    "order",
    "beginning",
    "end",
    "monster",
    "knife",
    "mischief",
)

DECK_LISTS: Dict[DeckMode, Tuple[str, ...]] = {
    DeckMode.FULL: FULL_DECK,
    DeckMode.REDUCED: REDUCED_DECK,
}

# Requested draws are capped here regardless of deck size
MAX_DRAW = 20


# =============================================================================
# Draw-Process Cards
# =============================================================================

HALT_CARD = "isolation"
"""Ends all further automatic and opportunistic drawing."""

EXTEND_CARD = "mystery"
"""Appends one extra draw per occurrence, bypassing the ceiling."""

BONUS_CARD = "mischief"
"""Offers the player an optional draw of two more cards."""

BONUS_DRAW_SIZE = 2


# =============================================================================
# Choice Cards
# =============================================================================

RESISTANCE_DAMAGE_TYPES: Dict[str, Tuple[str, ...]] = {
    "chaos": ("acid", "cold", "fire", "lightning", "thunder"),
    "order": ("force", "necrotic", "poison", "psychic", "radiant"),
}

RESISTANCE_CARDS: Tuple[str, ...] = tuple(RESISTANCE_DAMAGE_TYPES)

# Die rolled per selection to get a resistance duration in days
RESISTANCE_DURATION_SIDES = 12


@dataclass(frozen=True)
class RewardOption:
    """One branch of a reward choice: `quantity` items per card, each worth `worth` gp."""
    value: str
    label: str
    quantity: int
    worth: int


REWARD_CARD = "coin"

REWARD_OPTIONS: Tuple[RewardOption, ...] = (
    RewardOption(value="jewelry", label="Jewelry", quantity=5, worth=100),
    RewardOption(value="gemstones", label="Gemstones", quantity=10, worth=50),
)

DEFAULT_REWARD = REWARD_OPTIONS[0].value


# Cards whose dice are rolled later by the player, never by "roll all dice"
ROLL_EXEMPT_CARDS: Tuple[str, ...] = ("monster",)


def deck_list(mode: DeckMode) -> List[str]:
    """Member list for a predefined mode."""
    if mode not in DECK_LISTS:
        raise KeyError(f"{mode} has no predefined member list")
    return list(DECK_LISTS[mode])


def default_damage_type(card: str) -> str:
    """First damage type in the card's vocabulary."""
    return RESISTANCE_DAMAGE_TYPES[card][0]


def get_reward_option(value: str) -> RewardOption:
    for option in REWARD_OPTIONS:
        if option.value == value:
            return option
    raise KeyError(value)
