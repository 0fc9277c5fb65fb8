"""
Deck - the active member set and uniform sampling with replacement.

A configuration is replaced wholesale by `configure()`; it is never mutated
in place and cannot be swapped while a draw resolution holds the deck.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple, Union

from ..content.cards import DeckMode, FULL_DECK, deck_list
from ..errors import EmptyDeck, InvalidConfiguration
from ..state.rng import Random

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeckConfiguration:
    """Validated, immutable member set for a deck."""
    mode: DeckMode
    members: Tuple[str, ...]

    @classmethod
    def build(
        cls,
        mode: Union[DeckMode, str],
        custom_members: Optional[Iterable[str]] = None,
    ) -> DeckConfiguration:
        """
        Validate and build a configuration.

        Args:
            mode: DeckMode or its string value ("full", "reduced", "custom")
            custom_members: Members for a CUSTOM deck (ignored otherwise)

        Raises:
            InvalidConfiguration: unknown mode, empty custom set, duplicate
                or unknown card identifiers
        """
        try:
            mode = DeckMode(mode)
        except ValueError:
            raise InvalidConfiguration(f"Unknown deck mode: {mode!r}") from None

        if mode is not DeckMode.CUSTOM:
            return cls(mode=mode, members=tuple(deck_list(mode)))

        members = tuple(custom_members or ())
        if not members:
            raise InvalidConfiguration("Custom deck needs at least one card")

        unknown = [m for m in members if m not in FULL_DECK]
        if unknown:
            raise InvalidConfiguration(f"Unknown cards: {', '.join(map(str, unknown))}")

        if len(set(members)) != len(members):
            raise InvalidConfiguration("Custom deck members must be unique")

        return cls(mode=mode, members=members)

    def __len__(self) -> int:
        return len(self.members)


class Deck:
    """
    Card pool sampled with replacement.

    Drawing never removes a card: the same identifier may come up any number
    of times within one resolution or across resolutions.
    """

    def __init__(self, rng: Random, configuration: Optional[DeckConfiguration] = None):
        self.rng = rng
        self._config = configuration
        self._held = False

    @property
    def configuration(self) -> Optional[DeckConfiguration]:
        return self._config

    @property
    def members(self) -> Tuple[str, ...]:
        return self._config.members if self._config else ()

    def configure(
        self,
        mode: Union[DeckMode, str],
        custom_members: Optional[Iterable[str]] = None,
    ) -> DeckConfiguration:
        """Validate and atomically replace the active configuration."""
        if self._held:
            raise InvalidConfiguration("Deck cannot be reconfigured mid-resolution")

        config = DeckConfiguration.build(mode, custom_members)
        self._config = config
        logger.info("Deck configured: %s (%d cards)", config.mode.value, len(config))
        return config

    def size(self) -> int:
        """Current member count."""
        return len(self.members)

    def sample_one(self) -> str:
        """One uniformly chosen member; the deck is unchanged."""
        members = self.members
        if not members:
            raise EmptyDeck("Cannot draw from an empty deck")
        return self.rng.choice(members)

    @contextmanager
    def hold(self) -> Iterator[Deck]:
        """Pin the configuration for the duration of a resolution."""
        if self.size() == 0:
            raise EmptyDeck("Cannot draw from an empty deck")
        self._held = True
        try:
            yield self
        finally:
            self._held = False
