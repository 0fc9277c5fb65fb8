"""
Draw Session - one player's deck, current outcome and choices.

The session owns the injected RNG and serializes every operation that can
touch it, so deck sampling, extension draws, bonus draws and dice rolls
consume the stream in one strict order even when a threaded host (the
HTTP server) calls in concurrently.

Usage:
    session = DrawSession(Random(seed_to_long("ABC")))
    outcome = session.resolve_draw(5)
    effects = session.aggregate_effects()
    if session.bonus_credits:
        session.resolve_bonus_draw()
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, Optional, Set, Union

from ..calc.dice import DiceRoller
from ..calc.durations import compute_resistance_durations
from ..content.cards import BONUS_CARD, MAX_DRAW, RESISTANCE_CARDS, DeckMode
from ..effects.aggregate import AggregatedEffects, aggregate_effects, restate_bonus
from ..effects.render import EffectView, describe_all, roll_all
from ..errors import (
    HaltCardPresent,
    InvalidCount,
    InvalidSelection,
    NoBonusDrawAvailable,
)
from ..generation.deck import Deck, DeckConfiguration
from ..generation.draw import DrawOutcome, DrawResolver
from .rng import Random
from .selections import SelectionState

logger = logging.getLogger(__name__)


class DrawSession:
    """
    Session state machine around the draw engine.

    Replacing the outcome (new draw, bonus draw, deck change) always builds a
    fresh SelectionState; selections are never carried across outcomes.
    """

    def __init__(
        self,
        rng: Random,
        mode: Union[DeckMode, str] = DeckMode.FULL,
        custom_members: Optional[Iterable[str]] = None,
        max_draw: int = MAX_DRAW,
    ):
        if max_draw < 1:
            raise InvalidCount(f"max_draw must be at least 1, got {max_draw}")
        self.rng = rng
        self.deck = Deck(rng)
        self.deck.configure(mode, custom_members)
        self.resolver = DrawResolver(self.deck)
        self.dice = DiceRoller(rng)
        self.draw_limit = max_draw

        self._lock = threading.RLock()
        self._outcome: Optional[DrawOutcome] = None
        self._spent_bonus: Set[int] = set()
        self._selections = SelectionState.for_outcome(None)

    @classmethod
    def from_settings(cls, settings) -> DrawSession:
        """Build a session from `tarot.config.Settings`."""
        rng = Random(settings.seed) if settings.seed is not None else Random.from_time()
        return cls(rng, mode=settings.deck_mode, max_draw=settings.max_draw)

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def outcome(self) -> Optional[DrawOutcome]:
        return self._outcome

    @property
    def selections(self) -> SelectionState:
        if not self._selections.is_for(self._outcome):
            # Unreachable unless the outcome was swapped behind our back
            raise InvalidSelection("Selections are stale for the current outcome")
        return self._selections

    @property
    def configuration(self) -> DeckConfiguration:
        return self.deck.configuration

    @property
    def max_draw(self) -> int:
        """Largest count `resolve_draw` accepts for the current deck."""
        return min(self.deck.size(), self.draw_limit)

    @property
    def bonus_credits(self) -> List[int]:
        """Sequence numbers of bonus cards whose extra draw is still unused."""
        if self._outcome is None:
            return []
        return [
            seq for seq in self._outcome.occurrences(BONUS_CARD)
            if seq not in self._spent_bonus
        ]

    # =========================================================================
    # Operations
    # =========================================================================

    def configure_deck(
        self,
        mode: Union[DeckMode, str],
        custom_members: Optional[Iterable[str]] = None,
    ) -> DeckConfiguration:
        """Replace the deck configuration and clear the current outcome."""
        with self._lock:
            config = self.deck.configure(mode, custom_members)
            self._set_outcome(None, set())
            return config

    def resolve_draw(self, requested_count: int) -> DrawOutcome:
        """
        Draw `requested_count` cards (plus any extensions).

        Raises:
            InvalidCount: count < 1 or above `max_draw`
            EmptyDeck: the deck has no members
        """
        with self._lock:
            if (
                isinstance(requested_count, int)
                and not isinstance(requested_count, bool)
                and requested_count > self.max_draw
            ):
                raise InvalidCount(
                    f"Can draw at most {self.max_draw} cards, got {requested_count}"
                )
            outcome = self.resolver.resolve(requested_count)
            logger.info("Drew %d cards: %s", len(outcome), ", ".join(outcome))
            self._set_outcome(outcome, set())
            return outcome

    def resolve_bonus_draw(self) -> DrawOutcome:
        """
        Spend one bonus card to draw two more.

        Raises:
            HaltCardPresent: the halt card has been drawn
            NoBonusDrawAvailable: no outcome, or every bonus card already used
        """
        with self._lock:
            if self._outcome is None:
                raise NoBonusDrawAvailable("Nothing has been drawn yet")
            outcome = self._outcome
            if outcome.has_halt:
                raise HaltCardPresent("No more cards can be drawn after the halt card")
            credits = self.bonus_credits
            if not credits:
                raise NoBonusDrawAvailable("Every bonus draw has already been used")

            new_outcome = self.resolver.resolve_bonus(outcome)
            logger.info("Bonus draw: %s", ", ".join(new_outcome.cards[len(outcome):]))
            # Earliest unused bonus card pays for this draw
            self._set_outcome(new_outcome, self._spent_bonus | {credits[0]})
            return new_outcome

    def aggregate_effects(self, outcome: Optional[Iterable[str]] = None) -> AggregatedEffects:
        """Effect records for `outcome` (default: the current outcome)."""
        with self._lock:
            if outcome is None:
                outcome = self._outcome or ()
            return aggregate_effects(outcome)

    def compute_resistance_durations(self, selections: Iterable[str]) -> Dict[str, int]:
        return compute_resistance_durations(selections)

    def resistance_durations(self) -> Dict[str, Dict[str, int]]:
        """Durations for each resistance card in the current outcome."""
        with self._lock:
            selections = self.selections
            return {
                card: compute_resistance_durations(selections.selections_for(card))
                for card in RESISTANCE_CARDS
                if selections.selections_for(card)
            }

    def evaluate_dice_text(self, text: str) -> str:
        with self._lock:
            return self.dice.evaluate_in_text(text)

    def select_resistance(self, seq: int, damage_type: str) -> None:
        with self._lock:
            self.selections.select_resistance(seq, damage_type)

    def select_reward(self, value: str) -> None:
        with self._lock:
            self.selections.select_reward(value)

    # =========================================================================
    # Presentation
    # =========================================================================

    def effect_views(self) -> List[EffectView]:
        """
        Display views for the current outcome.

        The bonus card's view covers only its unspent occurrences: a spent
        one was traded for its draw, so its item and offer are gone.
        """
        with self._lock:
            halted = self._outcome is not None and self._outcome.has_halt
            effects = restate_bonus(
                self.aggregate_effects(), len(self.bonus_credits), halted,
            )
            return describe_all(effects, self.selections)

    def roll_effects(self) -> List[EffectView]:
        """Views with every dice expression rolled."""
        with self._lock:
            return roll_all(self.effect_views(), self.dice)

    # =========================================================================
    # Internal
    # =========================================================================

    def _set_outcome(self, outcome: Optional[DrawOutcome], spent: Set[int]) -> None:
        self._outcome = outcome
        self._spent_bonus = spent
        self._selections = SelectionState.for_outcome(outcome)
