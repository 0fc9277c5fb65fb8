"""
Shared pytest fixtures for the tarot draw test suite.

This module provides reusable fixtures for:
- RNG with known seeds
- Scripted RNG that returns forced values (exact draws and dice rolls)
- Sessions over each deck mode
"""

import os
import sys
from typing import Iterable, List

import pytest

# Ensure project root is in path
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _project_root)

from tarot.content.cards import FULL_DECK, DeckMode
from tarot.state.rng import Random, seed_to_long
from tarot.state.session import DrawSession


class ScriptedRandom(Random):
    """
    Random that hands out pre-recorded integers.

    Every `random_int_range` call pops the next value and checks it lies in
    the requested range; running out of script is a test failure.
    """

    def __init__(self, values: Iterable[int] = ()):
        super().__init__(0)
        self.script: List[int] = list(values)
        self.requests = []

    def feed(self, values: Iterable[int]) -> None:
        self.script.extend(values)

    def random_int_range(self, start: int, end: int) -> int:
        self.requests.append((start, end))
        if not self.script:
            raise AssertionError(f"RNG script exhausted (asked for [{start}, {end}])")
        value = self.script.pop(0)
        assert start <= value <= end, f"scripted {value} outside [{start}, {end}]"
        self.counter += 1
        return value


def card_indices(*cards: str) -> List[int]:
    """Scripted values that make a FULL deck draw exactly `cards`."""
    return [FULL_DECK.index(card) for card in cards]


# =============================================================================
# RNG Fixtures
# =============================================================================


@pytest.fixture
def rng_seed_42():
    """RNG initialized with seed 42 for deterministic tests."""
    return Random(42)


@pytest.fixture
def rng_abc():
    """RNG initialized with seed 'ABC'."""
    return Random(seed_to_long("ABC"))


@pytest.fixture
def scripted_rng():
    """Scripted RNG with an empty script; feed() values before use."""
    return ScriptedRandom()


# =============================================================================
# Session Fixtures
# =============================================================================


@pytest.fixture
def full_session(rng_abc):
    """Seeded session over the 22-card deck."""
    return DrawSession(rng_abc, mode=DeckMode.FULL)


@pytest.fixture
def reduced_session(rng_abc):
    """Seeded session over the 13-card deck."""
    return DrawSession(rng_abc, mode=DeckMode.REDUCED)


@pytest.fixture
def scripted_session(scripted_rng):
    """FULL deck session whose draws come from `scripted_rng`."""
    return DrawSession(scripted_rng, mode=DeckMode.FULL)
