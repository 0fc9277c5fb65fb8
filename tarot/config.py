"""
Settings loaded from the environment (and a local .env file).

    TAROT_SEED        int or base-35 seed string; unset -> time-based
    TAROT_DECK_MODE   full | reduced (default full)
    TAROT_MAX_DRAW    ceiling for requested draws (default 20)
    TAROT_LOG_LEVEL   logging level name (default INFO)
    TAROT_HOST        server bind host (default 127.0.0.1)
    TAROT_PORT        server port (default 8080)
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .content.cards import MAX_DRAW, DeckMode
from .errors import InvalidConfiguration
from .state.rng import seed_to_long

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    seed: Optional[int] = None
    deck_mode: DeckMode = DeckMode.FULL
    max_draw: int = MAX_DRAW
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8080


def _int_setting(env: Mapping[str, str], name: str, default: int, minimum: int = 1) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise InvalidConfiguration(f"{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise InvalidConfiguration(f"{name} must be >= {minimum}, got {value}")
    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Read settings.

    Args:
        env: Mapping to read from. Defaults to os.environ after loading .env.

    Raises:
        InvalidConfiguration: a value can't be used
    """
    if env is None:
        load_dotenv()
        env = os.environ

    raw_seed = env.get("TAROT_SEED", "").strip()
    seed = seed_to_long(raw_seed) if raw_seed else None

    raw_mode = env.get("TAROT_DECK_MODE", DeckMode.FULL.value).strip().lower()
    try:
        deck_mode = DeckMode(raw_mode)
    except ValueError:
        raise InvalidConfiguration(f"Unknown TAROT_DECK_MODE: {raw_mode!r}") from None
    if deck_mode is DeckMode.CUSTOM:
        raise InvalidConfiguration("TAROT_DECK_MODE must be full or reduced")

    log_level = env.get("TAROT_LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise InvalidConfiguration(f"Unknown TAROT_LOG_LEVEL: {log_level!r}")

    return Settings(
        seed=seed,
        deck_mode=deck_mode,
        max_draw=_int_setting(env, "TAROT_MAX_DRAW", MAX_DRAW),
        log_level=log_level,
        host=env.get("TAROT_HOST", "127.0.0.1"),
        port=_int_setting(env, "TAROT_PORT", 8080),
    )


def configure_logging(level: str = "INFO") -> None:
    """Entry-point logging setup."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
