"""
Draw Resolver Tests

Tests:
1. Halt rule - truncation at the first halt card
2. Extend rule - one extra draw per extend card, single pass
3. Halt during extension
4. Count validation and empty decks
5. Bonus sub-resolver
6. Seeded reproducibility
"""

import pytest

from conftest import ScriptedRandom, card_indices
from tarot.content.cards import EXTEND_CARD, FULL_DECK, HALT_CARD, DeckMode
from tarot.errors import EmptyDeck, HaltCardPresent, InvalidCount
from tarot.generation.deck import Deck
from tarot.generation.draw import (
    DrawnCard,
    DrawOutcome,
    DrawPhase,
    DrawResolver,
    truncate_at_halt,
)
from tarot.state.rng import Random, seed_to_long


def scripted_resolver(*cards: str):
    """Resolver over the FULL deck that will draw exactly `cards`."""
    rng = ScriptedRandom(card_indices(*cards))
    deck = Deck(rng)
    deck.configure(DeckMode.FULL)
    return DrawResolver(deck), rng


def reference_resolve(seed: int, requested: int):
    """Independent replay of the draw rules on a fresh RNG."""
    rng = Random(seed)
    drawn = [FULL_DECK[rng.random_int_range(0, len(FULL_DECK) - 1)] for _ in range(requested)]
    if HALT_CARD in drawn:
        return drawn[:drawn.index(HALT_CARD) + 1]
    for _ in range(drawn.count(EXTEND_CARD)):
        card = FULL_DECK[rng.random_int_range(0, len(FULL_DECK) - 1)]
        drawn.append(card)
        if card == HALT_CARD:
            break
    return drawn


# =============================================================================
# Halt Rule
# =============================================================================

class TestHaltRule:

    def test_truncates_after_first_halt(self):
        resolver, rng = scripted_resolver("champion", "isolation", "champion", "dawn", "night")

        outcome = resolver.resolve(5)

        assert outcome.cards == ["champion", "isolation"]
        # The full requested count is still drawn before truncation
        assert rng.counter == 5
        assert resolver.last_phase is DrawPhase.TRUNCATED

    def test_isolation_first_hides_next_natural_draw(self):
        resolver, _ = scripted_resolver("isolation", "champion", "dawn", "day", "night")

        outcome = resolver.resolve(5)

        assert outcome.cards == ["isolation"]

    def test_halt_as_last_card(self):
        resolver, _ = scripted_resolver("dawn", "day", "isolation")
        assert resolver.resolve(3).cards == ["dawn", "day", "isolation"]

    def test_two_halt_cards_cut_at_first(self):
        resolver, _ = scripted_resolver("dawn", "isolation", "day", "isolation")
        assert resolver.resolve(4).cards == ["dawn", "isolation"]

    def test_extend_card_before_halt_does_not_extend(self):
        resolver, rng = scripted_resolver("mystery", "isolation", "mystery")

        outcome = resolver.resolve(3)

        assert outcome.cards == ["mystery", "isolation"]
        assert rng.counter == 3
        assert rng.script == []

    def test_truncate_helper(self):
        draws = [DrawnCard(0, "dawn"), DrawnCard(1, "isolation"), DrawnCard(2, "day")]
        kept, halted = truncate_at_halt(draws)
        assert halted
        assert [d.card for d in kept] == ["dawn", "isolation"]

        kept, halted = truncate_at_halt(draws[:1])
        assert not halted
        assert len(kept) == 1

    @pytest.mark.parametrize("seed", range(40))
    def test_nothing_follows_halt(self, seed):
        deck = Deck(Random(seed))
        deck.configure(DeckMode.FULL)
        outcome = DrawResolver(deck).resolve(20)

        if HALT_CARD in outcome:
            assert outcome.cards.index(HALT_CARD) == len(outcome) - 1


# =============================================================================
# Extend Rule
# =============================================================================

class TestExtendRule:

    def test_one_extra_per_extend_card(self):
        resolver, rng = scripted_resolver("mystery", "champion", "dawn")

        outcome = resolver.resolve(2)

        assert outcome.cards == ["mystery", "champion", "dawn"]
        assert rng.script == []
        assert resolver.last_phase is DrawPhase.EXTENDING

    def test_multiple_extend_cards(self):
        resolver, _ = scripted_resolver("mystery", "mystery", "day", "night", "dawn")

        outcome = resolver.resolve(3)

        assert outcome.cards == ["mystery", "mystery", "day", "night", "dawn"]

    def test_extension_is_not_recursive(self):
        resolver, rng = scripted_resolver("mystery", "mystery", "champion")

        outcome = resolver.resolve(1)

        # The extra mystery does not trigger another draw
        assert outcome.cards == ["mystery", "mystery"]
        assert rng.script == card_indices("champion")
        assert rng.counter == 2

    def test_halt_during_extension_stops_remaining(self):
        resolver, rng = scripted_resolver("mystery", "mystery", "isolation", "dawn")

        outcome = resolver.resolve(2)

        assert outcome.cards == ["mystery", "mystery", "isolation"]
        assert rng.counter == 3
        assert resolver.last_phase is DrawPhase.TRUNCATED

    def test_extension_ignores_requested_count(self):
        resolver, _ = scripted_resolver("mystery", "mystery", "mystery", "day", "day", "day")

        outcome = resolver.resolve(3)

        assert len(outcome) == 6

    def test_no_special_cards_draws_exactly_n(self):
        deck = Deck(Random(seed_to_long("PLAIN")))
        deck.configure(DeckMode.REDUCED)  # no halt or extend card
        resolver = DrawResolver(deck)

        for n in range(1, 21):
            outcome = resolver.resolve(n)
            assert len(outcome) == n
            assert resolver.last_phase is DrawPhase.DRAWING


# =============================================================================
# Validation
# =============================================================================

class TestValidation:

    @pytest.mark.parametrize("count", [0, -1, -20])
    def test_non_positive_count(self, count):
        resolver, _ = scripted_resolver()
        with pytest.raises(InvalidCount):
            resolver.resolve(count)

    @pytest.mark.parametrize("count", [2.5, "3", None, True])
    def test_non_integer_count(self, count):
        resolver, _ = scripted_resolver()
        with pytest.raises(InvalidCount):
            resolver.resolve(count)

    def test_invalid_count_consumes_no_rng(self):
        resolver, rng = scripted_resolver()
        with pytest.raises(InvalidCount):
            resolver.resolve(0)
        assert rng.counter == 0

    def test_empty_deck(self):
        resolver = DrawResolver(Deck(Random(1)))
        with pytest.raises(EmptyDeck):
            resolver.resolve(3)

    def test_resolver_has_no_ceiling(self):
        deck = Deck(Random(5))
        deck.configure(DeckMode.REDUCED)
        assert len(DrawResolver(deck).resolve(50)) == 50


# =============================================================================
# Draw Outcome
# =============================================================================

class TestDrawOutcome:

    def test_sequence_numbers_increase_across_resolutions(self):
        resolver, _ = scripted_resolver("dawn", "day", "night", "dusk")

        first = resolver.resolve(2)
        second = resolver.resolve(2)

        assert [d.seq for d in first.draws] == [0, 1]
        assert [d.seq for d in second.draws] == [2, 3]

    def test_truncated_draws_still_use_sequence_numbers(self):
        resolver, _ = scripted_resolver("isolation", "dawn", "day")

        resolver.resolve(2)
        outcome = resolver.resolve(1)

        assert outcome.draws == (DrawnCard(2, "day"),)

    def test_from_cards(self):
        outcome = DrawOutcome.from_cards(["chaos", "dawn", "chaos"])
        assert outcome.cards == ["chaos", "dawn", "chaos"]
        assert outcome.occurrences("chaos") == [0, 2]
        assert outcome.last_seq == 2
        assert outcome.tally()["chaos"] == 2
        assert "dawn" in outcome
        assert not outcome.has_halt

    def test_iterates_card_ids(self):
        outcome = DrawOutcome.from_cards(["dawn", "isolation"])
        assert list(outcome) == ["dawn", "isolation"]
        assert outcome.has_halt


# =============================================================================
# Bonus Draw
# =============================================================================

class TestBonusDraw:

    def test_appends_two_cards(self):
        resolver, rng = scripted_resolver("mischief", "dawn", "day")
        outcome = resolver.resolve(1)

        updated = resolver.resolve_bonus(outcome)

        assert updated.cards == ["mischief", "dawn", "day"]
        assert [d.seq for d in updated.draws] == [0, 1, 2]
        assert rng.counter == 3

    def test_halt_present_raises_and_leaves_outcome(self):
        resolver, rng = scripted_resolver("mischief", "isolation")
        outcome = resolver.resolve(2)
        before = outcome.cards

        with pytest.raises(HaltCardPresent):
            resolver.resolve_bonus(outcome)

        assert outcome.cards == before
        assert rng.counter == 2

    def test_first_bonus_card_halt_skips_second(self):
        resolver, rng = scripted_resolver("mischief", "isolation", "dawn")
        outcome = resolver.resolve(1)

        updated = resolver.resolve_bonus(outcome)

        assert updated.cards == ["mischief", "isolation"]
        assert rng.counter == 2
        assert rng.script == card_indices("dawn")

    def test_second_bonus_card_halt_kept(self):
        resolver, _ = scripted_resolver("mischief", "dawn", "isolation")
        outcome = resolver.resolve(1)

        updated = resolver.resolve_bonus(outcome)

        assert updated.cards == ["mischief", "dawn", "isolation"]

    def test_bonus_does_not_trigger_extension(self):
        resolver, rng = scripted_resolver("mischief", "mystery", "mystery")
        outcome = resolver.resolve(1)

        updated = resolver.resolve_bonus(outcome)

        assert updated.cards == ["mischief", "mystery", "mystery"]
        assert rng.script == []

    def test_input_outcome_not_mutated(self):
        resolver, _ = scripted_resolver("mischief", "dawn", "day")
        outcome = resolver.resolve(1)

        resolver.resolve_bonus(outcome)

        assert outcome.cards == ["mischief"]


# =============================================================================
# Seeded Reproducibility
# =============================================================================

class TestSeededDraws:

    def test_full_deck_five_cards_recorded(self):
        deck = Deck(Random(seed_to_long("ABC")))
        deck.configure(DeckMode.FULL)

        outcome = DrawResolver(deck).resolve(5)

        # Drawn: coin, isolation, dusk, mischief, destiny; cut after isolation
        assert outcome.cards == ["coin", "isolation"]
        assert deck.rng.counter == 5

    def test_full_deck_five_cards_recorded_without_halt(self):
        deck = Deck(Random(seed_to_long("TAROT")))
        deck.configure(DeckMode.FULL)

        outcome = DrawResolver(deck).resolve(5)

        assert outcome.cards == ["end", "beginning", "end", "chancellor", "crown"]
        assert deck.rng.counter == 5

    @pytest.mark.parametrize("seed_string", ["ABC", "4YUHY81W7GRHT", "TAROT", "1"])
    def test_full_deck_five_cards_matches_rule_replay(self, seed_string):
        seed = seed_to_long(seed_string)
        deck = Deck(Random(seed))
        deck.configure(DeckMode.FULL)

        outcome = DrawResolver(deck).resolve(5)

        assert outcome.cards == reference_resolve(seed, 5)

    def test_same_seed_same_outcome(self):
        def draw(seed):
            deck = Deck(Random(seed))
            deck.configure(DeckMode.FULL)
            return DrawResolver(deck).resolve(5).cards

        assert draw(1234) == draw(1234)
