"""
Card Effect Rules.

Registers one rule per card identifier. Effects are organized by shape:
- Fixed effects (count only matters for presence)
- Stacking effects (a magnitude of per_card x count)
- Curses of either shape
- Choice effects (resistances, reward)
- The bonus draw offer
"""

from __future__ import annotations

from ..content.cards import (
    BONUS_CARD,
    RESISTANCE_DAMAGE_TYPES,
    REWARD_CARD,
    REWARD_OPTIONS,
)
from .registry import (
    BonusDrawOffer,
    EffectRecord,
    ResistanceChoice,
    RewardChoice,
    RuleContext,
    fixed_rule,
    plural,
    rule,
    stacking_rule,
)


# =============================================================================
# Fixed Effects
# =============================================================================

fixed_rule(
    "chancellor",
    "Within 8 hours of drawing this card, you can cast Augury once as an action, "
    "requiring no material components. Use your Intelligence, Wisdom, or Charisma "
    "as the spellcasting ability (your choice).",
)

fixed_rule(
    "crown",
    "You learn the Friends cantrip. Use your Intelligence, Wisdom, or Charisma as "
    "the spellcasting ability (your choice). If you already know this cantrip, the "
    "card has no effect.",
)

fixed_rule(
    "dawn",
    "This card invigorates you. For the next 8 hours, you can add your proficiency "
    "bonus to your initiative rolls.",
)

fixed_rule(
    "destiny",
    "This card protects you against an untimely demise. The first time after drawing "
    "this card that you would drop to 0 hit points from taking damage, you instead "
    "drop to 1 hit point.",
)

fixed_rule(
    "justice",
    "You momentarily gain the ability to balance the scales of fate. For the next 8 "
    "hours, whenever you or a creature within 60 feet of you is about to roll a d20 "
    "with advantage or disadvantage, you can use your reaction to prevent the roll "
    "from being affected by advantage or disadvantage.",
)

fixed_rule(
    "night",
    "You gain darkvision within a range of 300 feet. This darkvision lasts for 8 hours.",
)

fixed_rule(
    "student",
    "You gain proficiency in Wisdom saving throws. If you already have this "
    "proficiency, you instead gain proficiency in Intelligence or Charisma saving "
    "throws (your choice).",
)


# =============================================================================
# Stacking Effects
# =============================================================================

@stacking_rule("beginning", per_card=2)
def beginning(d10s: int, count: int) -> str:
    return (
        f"Your hit point maximum and current hit points increase by {d10s}d10. "
        "Your hit point maximum remains increased in this way for the next 8 hours."
    )


@stacking_rule("champion", per_card=1)
def champion(bonus: int, count: int) -> str:
    return (
        f"You gain a +{bonus} bonus to weapon attack and damage rolls. "
        "This bonus lasts for 8 hours."
    )


@stacking_rule("day", per_card=1)
def day(bonus: int, count: int) -> str:
    return (
        f"You gain a +{bonus} bonus to saving throws. "
        "This benefit lasts until you finish a long rest."
    )


@stacking_rule("knife", per_card=1)
def knife(weapons: int, count: int) -> str:
    amount = "An" if weapons == 1 else str(weapons)
    noun = plural(weapons, "weapon")
    verb = plural(weapons, "appears", "appear")
    return (
        f"{amount} uncommon magic {noun} you're proficient with {verb} in your hands. "
        f"The DM chooses the {noun}."
    )


@stacking_rule("lock", per_card=1)
def lock(d3s: int, count: int) -> str:
    return (
        f"You gain the ability to cast Knock {d3s}d3 times. Use your Intelligence, "
        "Wisdom, or Charisma as the spellcasting ability (your choice)."
    )


# =============================================================================
# Curses
# =============================================================================

fixed_rule(
    "dusk",
    "This card supernaturally saps your energy. You have disadvantage on initiative "
    "rolls. This effect lasts until you finish a long rest, but it can be ended early "
    "by a Remove Curse spell or similar magic.",
    curse=True,
)

fixed_rule(
    "isolation",
    "You disappear, along with anything you are wearing or carrying, and become "
    "trapped in a harmless extradimensional space for 1d4 minutes. You draw no more "
    "cards. You then reappear in the space you left or the nearest unoccupied space. "
    "When you reappear, you must succeed on a DC 11 Constitution saving throw or have "
    "the poisoned condition for 1 hour as your body reels from the extradimensional "
    "travel.",
    curse=True,
)

# The extra draw itself is handled by the draw resolver
fixed_rule(
    "mystery",
    "You have disadvantage on Intelligence saving throws for 1 hour. Discard this card "
    "and draw from the deck again; together, the two draws count as one of your "
    "declared draws.",
    curse=True,
)


@stacking_rule("end", per_card=2, curse=True)
def end(d10s: int, count: int) -> str:
    return (
        f"This card is an omen of death. You take {d10s}d10 necrotic damage, and your "
        "hit point maximum is reduced by an amount equal to the damage taken. This "
        "effect can't reduce your hit point maximum below 10 hit points. This reduction "
        "lasts until you finish a long rest, but it can be ended early by a Remove Curse "
        "spell or similar magic."
    )


@stacking_rule("monster", per_card=1, curse=True)
def monster(d4s: int, count: int) -> str:
    return (
        "This card's monstrous visage curses you. While cursed in this way, whenever "
        f"you make a saving throw, you must roll {d4s}d4 and subtract the number rolled "
        "from the total. The curse lasts until you finish a long rest, but it can be "
        "ended early with a Remove Curse spell or similar magic."
    )


@stacking_rule("vulture", per_card=1, curse=True)
def vulture(items: int, count: int) -> str:
    one = items == 1
    amount = "One" if one else str(items)
    return (
        f"{amount} nonmagical {plural(items, 'item or piece of equipment', 'items or pieces of equipment')} "
        f"in your possession (chosen by the DM) {'disappears' if one else 'disappear'}. "
        f"The {plural(items, 'item')} remain nearby but concealed for a short time, "
        f"so {'it can' if one else 'they can'} be found with a successful DC 15 Wisdom "
        f"(Perception) check. If the {'item isn' if one else 'items aren'}'t recovered "
        f"within 1 hour, {'it disappears' if one else 'they disappear'} forever."
    )


# =============================================================================
# Choice Effects
# =============================================================================

def _resistance(ctx: RuleContext) -> EffectRecord:
    return EffectRecord(
        card=ctx.card,
        count=ctx.count,
        payload=ResistanceChoice(RESISTANCE_DAMAGE_TYPES[ctx.card]),
        magnitude=ctx.count,
    )


for _card in RESISTANCE_DAMAGE_TYPES:
    rule(_card)(_resistance)


@rule(REWARD_CARD)
def coin(ctx: RuleContext) -> EffectRecord:
    return EffectRecord(
        card=ctx.card,
        count=ctx.count,
        payload=RewardChoice(REWARD_OPTIONS),
        magnitude=ctx.count,
    )


# =============================================================================
# Bonus Draw
# =============================================================================

@rule(BONUS_CARD)
def mischief(ctx: RuleContext) -> EffectRecord:
    count = ctx.count
    extra_cards = 2 * count
    text = (
        f"You receive {'an' if count == 1 else count} uncommon wondrous "
        f"{plural(count, 'item')} (chosen by the DM), or you can draw {extra_cards} "
        f"additional {plural(extra_cards, 'card')} beyond your declared draws."
    )
    return EffectRecord(
        card=ctx.card,
        count=count,
        payload=BonusDrawOffer(text=text, enabled=not ctx.halt_drawn),
        magnitude=extra_cards,
    )
