"""
HTTP API for the draw engine.

JSON endpoints for a rendering front end. One DrawSession per app.

Usage:
    uv run python cli.py serve --seed ABC123

Then:
    curl -X POST localhost:8080/api/draw -H 'content-type: application/json' -d '{"count": 5}'
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import Settings
from ..effects.aggregate import AggregatedEffects
from ..effects.registry import (
    BonusDrawOffer,
    EffectRecord,
    ResistanceChoice,
    RewardChoice,
    Standard,
    payload_kind,
)
from ..effects.render import EffectView
from ..errors import HaltCardPresent, NoBonusDrawAvailable, TarotError
from ..generation.draw import DrawOutcome
from ..state.session import DrawSession

logger = logging.getLogger(__name__)


# =============================================================================
# Request Models
# =============================================================================

class DeckRequest(BaseModel):
    mode: str
    members: Optional[List[str]] = None


class DrawRequest(BaseModel):
    count: int


class SelectionRequest(BaseModel):
    resistances: Dict[int, str] = {}
    reward: Optional[str] = None


class DiceRequest(BaseModel):
    text: str


# =============================================================================
# Serialization
# =============================================================================

def outcome_to_json(outcome: Optional[DrawOutcome]) -> List[Dict[str, Any]]:
    if outcome is None:
        return []
    return [{"seq": d.seq, "card": d.card} for d in outcome.draws]


def payload_to_json(payload) -> Dict[str, Any]:
    data: Dict[str, Any] = {"kind": payload_kind(payload)}
    if isinstance(payload, Standard):
        data["text"] = payload.text
    elif isinstance(payload, ResistanceChoice):
        data["damage_types"] = list(payload.damage_types)
    elif isinstance(payload, RewardChoice):
        data["options"] = [
            {"value": o.value, "label": o.label, "quantity": o.quantity, "worth": o.worth}
            for o in payload.options
        ]
    elif isinstance(payload, BonusDrawOffer):
        data["text"] = payload.text
        data["enabled"] = payload.enabled
    return data


def record_to_json(record: EffectRecord) -> Dict[str, Any]:
    return {
        "card": record.card,
        "count": record.count,
        "is_curse": record.is_curse,
        "magnitude": record.magnitude,
        "payload": payload_to_json(record.payload),
    }


def view_to_json(view: EffectView) -> Dict[str, Any]:
    return {
        "card": view.card,
        "title": view.title,
        "is_curse": view.is_curse,
        "description": view.description,
        "lines": list(view.lines),
        "bonus_enabled": view.bonus_enabled,
    }


def effects_to_json(effects: AggregatedEffects) -> Dict[str, Any]:
    return {
        "regular": [record_to_json(r) for r in effects.regular],
        "curses": [record_to_json(r) for r in effects.curses],
    }


def session_state(session: DrawSession) -> Dict[str, Any]:
    """Full snapshot returned after every state change."""
    selections = session.selections
    return {
        "outcome": outcome_to_json(session.outcome),
        "effects": effects_to_json(session.aggregate_effects()),
        "views": [view_to_json(v) for v in session.effect_views()],
        "selections": {
            "resistances": {
                str(seq): {"card": sel.card, "damage_type": sel.damage_type}
                for seq, sel in sorted(selections.resistances.items())
            },
            "reward": selections.reward,
        },
        "durations": session.resistance_durations(),
        "bonus_credits": len(session.bonus_credits),
    }


# =============================================================================
# App
# =============================================================================

def create_app(settings: Optional[Settings] = None, session: Optional[DrawSession] = None) -> FastAPI:
    """Build an app around `session` (or one made from `settings`)."""
    settings = settings or Settings()
    session = session or DrawSession.from_settings(settings)

    app = FastAPI(title="Tarot Draw")
    app.state.session = session

    @app.exception_handler(TarotError)
    async def tarot_error_handler(request: Request, exc: TarotError):
        status = 409 if isinstance(exc, (HaltCardPresent, NoBonusDrawAvailable)) else 400
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
        return JSONResponse(
            {"error": type(exc).__name__, "detail": str(exc)},
            status_code=status,
        )

    # Routes are plain defs: session calls block on the session lock
    @app.get("/api/deck")
    def get_deck():
        """Current deck configuration."""
        config = session.configuration
        return JSONResponse({
            "mode": config.mode.value,
            "members": list(config.members),
            "max_draw": session.max_draw,
        })

    @app.post("/api/deck")
    def configure_deck(body: DeckRequest):
        """Replace the deck; clears the current draw."""
        config = session.configure_deck(body.mode, body.members)
        return JSONResponse({
            "mode": config.mode.value,
            "members": list(config.members),
            "max_draw": session.max_draw,
        })

    @app.post("/api/draw")
    def draw(body: DrawRequest):
        session.resolve_draw(body.count)
        return JSONResponse(session_state(session))

    @app.post("/api/bonus")
    def bonus_draw():
        session.resolve_bonus_draw()
        return JSONResponse(session_state(session))

    @app.get("/api/effects")
    def get_effects():
        return JSONResponse(session_state(session))

    @app.post("/api/selections")
    def select(body: SelectionRequest):
        for seq, damage_type in body.resistances.items():
            session.select_resistance(seq, damage_type)
        if body.reward is not None:
            session.select_reward(body.reward)
        return JSONResponse(session_state(session))

    @app.post("/api/dice")
    def roll_text(body: DiceRequest):
        return JSONResponse({"text": session.evaluate_dice_text(body.text)})

    @app.post("/api/roll")
    def roll_effects():
        """Roll every dice expression in the current effects."""
        return JSONResponse({"views": [view_to_json(v) for v in session.roll_effects()]})

    return app
