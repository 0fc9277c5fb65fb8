"""
Draw Resolver - turns a requested draw count into a final outcome.

State machine:
    DRAWING -> TRUNCATED | EXTENDING | FINAL
    EXTENDING -> TRUNCATED | FINAL

1. Draw `requested_count` cards.
2. Halt rule: if the halt card appears, cut the sequence right after its
   first occurrence. Nothing is drawn afterwards.
3. Extend rule: otherwise draw one extra card per extend card in that
   sequence, ignoring any ceiling. Extra cards are checked against the halt
   rule as they arrive; extend cards among them do not extend again.

The bonus sub-resolver draws up to two cards on player request and
re-applies the halt rule to the combined sequence.

Every drawn card gets a sequence number from a counter that only ever
increases, so later bookkeeping (selections, bonus credits) can key on a
specific occurrence instead of on its position in a list.
"""

from __future__ import annotations

import itertools
import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from ..content.cards import BONUS_DRAW_SIZE, EXTEND_CARD, HALT_CARD
from ..errors import HaltCardPresent, InvalidCount
from .deck import Deck

logger = logging.getLogger(__name__)


class DrawPhase(Enum):
    """States of a single resolution pass."""
    DRAWING = "drawing"
    TRUNCATED = "truncated"
    EXTENDING = "extending"
    FINAL = "final"


@dataclass(frozen=True)
class DrawnCard:
    """One card occurrence, tagged with its draw-sequence number."""
    seq: int
    card: str


@dataclass(frozen=True)
class DrawOutcome:
    """
    Ordered result of one resolution pass.

    Iterating yields card identifiers in draw order; `draws` keeps the
    sequence numbers alongside them.
    """
    draws: Tuple[DrawnCard, ...]

    @classmethod
    def from_cards(cls, cards, start_seq: int = 0) -> DrawOutcome:
        """Build an outcome from bare identifiers (sequence numbers assigned in order)."""
        return cls(tuple(DrawnCard(seq, card) for seq, card in enumerate(cards, start_seq)))

    @property
    def cards(self) -> List[str]:
        return [d.card for d in self.draws]

    @property
    def has_halt(self) -> bool:
        return HALT_CARD in self

    @property
    def last_seq(self) -> int:
        return max((d.seq for d in self.draws), default=-1)

    def occurrences(self, card: str) -> List[int]:
        """Sequence numbers of every occurrence of `card`, in draw order."""
        return [d.seq for d in self.draws if d.card == card]

    def tally(self) -> Counter:
        return Counter(self.cards)

    def __len__(self) -> int:
        return len(self.draws)

    def __iter__(self) -> Iterator[str]:
        return (d.card for d in self.draws)

    def __contains__(self, card: object) -> bool:
        return any(d.card == card for d in self.draws)


def truncate_at_halt(draws: List[DrawnCard]) -> Tuple[List[DrawnCard], bool]:
    """
    Apply the halt rule.

    Returns:
        (draws ending at and including the first halt card, whether one was found)
    """
    for i, drawn in enumerate(draws):
        if drawn.card == HALT_CARD:
            return draws[:i + 1], True
    return draws, False


class DrawResolver:
    """
    Resolves draw requests against a deck.

    The resolver owns the draw-sequence counter; use one resolver per session
    so sequence numbers stay unique for that session's lifetime.
    """

    def __init__(self, deck: Deck, start_seq: int = 0):
        self.deck = deck
        self._seq = itertools.count(start_seq)
        # Phase the last resolution was in when it became final
        self.last_phase: Optional[DrawPhase] = None

    def _draw(self) -> DrawnCard:
        return DrawnCard(next(self._seq), self.deck.sample_one())

    def resolve(self, requested_count: int) -> DrawOutcome:
        """
        Draw `requested_count` cards and apply the halt and extend rules.

        Raises:
            InvalidCount: requested_count is not an integer >= 1
            EmptyDeck: the deck has no members
        """
        if isinstance(requested_count, bool) or not isinstance(requested_count, int):
            raise InvalidCount(f"Draw count must be an integer, got {requested_count!r}")
        if requested_count < 1:
            raise InvalidCount(f"Draw count must be at least 1, got {requested_count}")

        with self.deck.hold():
            phase = DrawPhase.DRAWING
            draws = [self._draw() for _ in range(requested_count)]

            draws, halted = truncate_at_halt(draws)
            if halted:
                phase = DrawPhase.TRUNCATED
            else:
                # Single pass: only extend cards already in the sequence count
                extensions = sum(1 for d in draws if d.card == EXTEND_CARD)
                if extensions:
                    phase = DrawPhase.EXTENDING
                for _ in range(extensions):
                    extra = self._draw()
                    draws.append(extra)
                    if extra.card == HALT_CARD:
                        phase = DrawPhase.TRUNCATED
                        break

        logger.debug(
            "Resolved draw of %d -> %d cards (%s)",
            requested_count, len(draws), phase.value,
        )
        self.last_phase = phase
        return DrawOutcome(tuple(draws))

    def resolve_bonus(self, outcome: DrawOutcome) -> DrawOutcome:
        """
        Draw the bonus cards and append them to `outcome`.

        If the first bonus card is the halt card the second is never drawn.

        Raises:
            HaltCardPresent: the halt card is already in `outcome`
        """
        if outcome.has_halt:
            raise HaltCardPresent("No more cards can be drawn after the halt card")

        new_draws: List[DrawnCard] = []
        with self.deck.hold():
            for _ in range(BONUS_DRAW_SIZE):
                drawn = self._draw()
                new_draws.append(drawn)
                if drawn.card == HALT_CARD:
                    break

        draws, halted = truncate_at_halt(list(outcome.draws) + new_draws)
        logger.debug(
            "Bonus draw added %s%s",
            [d.card for d in new_draws], " (halted)" if halted else "",
        )
        return DrawOutcome(tuple(draws))
