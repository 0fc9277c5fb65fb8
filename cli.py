#!/usr/bin/env python3
"""
Tarot Draw - Command Line Interface

Draw cards, inspect effects, roll dice and run the HTTP API.

Usage:
    uv run python cli.py draw --seed ABC123 --count 5
    uv run python cli.py draw --seed ABC123 --count 5 --deck reduced --bonus 1 --roll
    uv run python cli.py draw --count 3 --deck custom --cards champion mystery isolation
    uv run python cli.py dice "You take 2d6 damage" --seed ABC123
    uv run python cli.py deck --deck reduced
    uv run python cli.py rng --seed ABC123 --count 10
    uv run python cli.py serve --port 8080
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from tarot.config import Settings, configure_logging, load_settings
from tarot.content.cards import FULL_DECK, DeckMode, deck_list
from tarot.effects.render import EffectView
from tarot.errors import InvalidSelection, TarotError
from tarot.server.api import session_state
from tarot.state.rng import Random, XorShift128, seed_to_long
from tarot.state.session import DrawSession

logger = logging.getLogger("tarot.cli")


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def format_seed_info(seed_string: str, numeric_seed: int) -> str:
    """Format seed information header."""
    return f"Seed: {seed_string} (numeric: {numeric_seed})"


def format_view(view: EffectView) -> List[str]:
    """Format a single effect for the terminal."""
    marker = " [CURSE]" if view.is_curse else ""
    lines = [f"{view.title}{marker}"]
    if view.description:
        lines.append(f"  {view.description}")
    lines.extend(f"  {line}" for line in view.lines)
    if view.bonus_enabled:
        lines.append("  (bonus draw available: --bonus)")
    return lines


def format_effects(views: List[EffectView]) -> str:
    regular = [v for v in views if not v.is_curse]
    curses = [v for v in views if v.is_curse]
    lines = []
    if regular:
        lines.append("Effects:")
        for view in regular:
            lines.extend(format_view(view))
    if curses:
        if lines:
            lines.append("")
        lines.append("Curses:")
        for view in curses:
            lines.extend(format_view(view))
    return "\n".join(lines) if lines else "No effects."


# =============================================================================
# SESSION SETUP
# =============================================================================

def resolve_seed(raw: Optional[str], settings: Settings) -> Optional[int]:
    if raw:
        return seed_to_long(raw.upper())
    return settings.seed


def build_session(args, settings: Settings) -> DrawSession:
    seed = resolve_seed(getattr(args, "seed", None), settings)
    rng = Random(seed) if seed is not None else Random.from_time()
    mode = getattr(args, "deck", None) or settings.deck_mode.value
    return DrawSession(
        rng,
        mode=mode,
        custom_members=getattr(args, "cards", None),
        max_draw=settings.max_draw,
    )


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_draw(args, settings: Settings) -> int:
    """Draw cards and print the resulting effects."""
    session = build_session(args, settings)

    session.resolve_draw(args.count)
    for _ in range(args.bonus):
        session.resolve_bonus_draw()

    for choice in args.resist or []:
        seq, _, damage_type = choice.partition("=")
        if not seq.isdigit():
            raise InvalidSelection(f"Expected SEQ=TYPE, got {choice!r}")
        session.select_resistance(int(seq), damage_type)
    if args.reward:
        session.select_reward(args.reward)

    if args.json:
        print(json.dumps(session_state(session), indent=2))
        return 0

    views = session.roll_effects() if args.roll else session.effect_views()
    drawn = ", ".join(f"#{d.seq} {d.card}" for d in session.outcome.draws)
    print(f"Drew {len(session.outcome)} cards: {drawn}")
    print()
    print(format_effects(views))
    return 0


def cmd_dice(args, settings: Settings) -> int:
    """Roll every dice expression in a piece of text."""
    seed = resolve_seed(args.seed, settings)
    rng = Random(seed) if seed is not None else Random.from_time()
    session = DrawSession(rng, max_draw=settings.max_draw)
    print(session.evaluate_dice_text(args.text))
    return 0


def cmd_deck(args, settings: Settings) -> int:
    """List the cards in a predefined deck."""
    mode = DeckMode(args.deck or settings.deck_mode.value)
    cards = deck_list(mode)
    print(f"{mode.value} deck ({len(cards)} cards):")
    for card in cards:
        print(f"  {card}")
    return 0


def cmd_rng(args, settings: Settings) -> int:
    """Display RNG sequence for verification."""
    seed_string = args.seed.upper()
    seed = seed_to_long(seed_string)

    print(format_seed_info(seed_string, seed))
    print()

    rng = XorShift128(seed)
    print("XorShift128 Initial State:")
    print(f"  seed0: {rng.seed0}")
    print(f"  seed1: {rng.seed1}")
    print()

    stream = Random(seed)
    print(f"First {args.count} card indices (full deck):")
    for i in range(args.count):
        print(f"  {i}: {stream.random_int(len(FULL_DECK) - 1)}")
    print(f"\nRNG counter after {args.count} calls: {stream.counter}")
    return 0


def cmd_serve(args, settings: Settings) -> int:
    """Run the HTTP API."""
    import uvicorn

    from tarot.server.api import create_app

    seed = resolve_seed(args.seed, settings)
    settings = Settings(
        seed=seed,
        deck_mode=settings.deck_mode,
        max_draw=settings.max_draw,
        log_level=settings.log_level,
        host=args.host or settings.host,
        port=args.port or settings.port,
    )
    app = create_app(settings)
    logger.info("Serving on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Tarot Draw - draw cards and resolve their effects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s draw --seed ABC123 --count 5
  %(prog)s draw --seed ABC123 --count 5 --roll
  %(prog)s draw --count 2 --deck custom --cards chaos mischief --resist 0=fire
  %(prog)s dice "You take 2d6 damage"
  %(prog)s serve --port 8080
        """
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    decks = [m.value for m in DeckMode]

    # Draw command
    draw_parser = subparsers.add_parser("draw", help="Draw cards and show effects")
    draw_parser.add_argument("--seed", "-s", help="Seed (e.g., ABC123); default from TAROT_SEED or clock")
    draw_parser.add_argument("--count", "-n", type=int, default=1, help="Cards to draw")
    draw_parser.add_argument("--deck", "-d", choices=decks, help="Deck to draw from")
    draw_parser.add_argument("--cards", nargs="+", help="Members of a custom deck")
    draw_parser.add_argument("--bonus", "-b", type=int, default=0, help="Bonus draws to take")
    draw_parser.add_argument("--resist", action="append", metavar="SEQ=TYPE",
                             help="Resistance choice for draw #SEQ (repeatable)")
    draw_parser.add_argument("--reward", help="Reward type (jewelry or gemstones)")
    draw_parser.add_argument("--roll", "-r", action="store_true", help="Roll dice in effects")
    draw_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    # Dice command
    dice_parser = subparsers.add_parser("dice", help="Roll dice expressions in text")
    dice_parser.add_argument("text", help="Text containing dice like 2d6 or 3d10kh1")
    dice_parser.add_argument("--seed", "-s", help="Seed")

    # Deck command
    deck_parser = subparsers.add_parser("deck", help="List deck members")
    deck_parser.add_argument("--deck", "-d", choices=["full", "reduced"], help="Deck to list")

    # RNG command
    rng_parser = subparsers.add_parser("rng", help="Show RNG sequence")
    rng_parser.add_argument("--seed", "-s", required=True, help="Seed")
    rng_parser.add_argument("--count", "-n", type=int, default=10, help="Values to show")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--seed", "-s", help="Seed")
    serve_parser.add_argument("--host", help="Bind host")
    serve_parser.add_argument("--port", "-p", type=int, help="Port")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        settings = load_settings()
    except TarotError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    configure_logging("DEBUG" if args.verbose else settings.log_level)

    # Dispatch to command handler
    commands = {
        "draw": cmd_draw,
        "dice": cmd_dice,
        "deck": cmd_deck,
        "rng": cmd_rng,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if not handler:
        parser.print_help()
        return 1

    try:
        return handler(args, settings)
    except TarotError as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
