"""Draw routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from lottery.models.wager import Wager
from lottery.runtime import get_context
from lottery.schemas.draw import DrawRequestSchema, DrawSchema
from lottery.utils.responses import ok

draws_bp = Blueprint("draws", __name__)

_request_schema = DrawRequestSchema()
_draw_schema = DrawSchema()
_draws_schema = DrawSchema(many=True)


@draws_bp.get("/draws")
def list_draws():
    """All finalized draws in order."""

    engine = get_context().engine
    return ok(_draws_schema.dump(engine.draws()))


@draws_bp.get("/draws/<int:draw_number>")
def get_draw(draw_number: int):
    engine = get_context().engine
    return ok(_draw_schema.dump(engine.get_draw(draw_number)))


@draws_bp.post("/draws")
def run_draw():
    """Execute the next draw, optionally with operator-supplied winning numbers."""

    payload = request.get_json(silent=True) or {}
    data = _request_schema.load(payload)

    numbers = data.get("winning_numbers")
    winning = Wager(frozenset(numbers)) if numbers else None

    draw = get_context().engine.run_draw(winning)
    return ok(_draw_schema.dump(draw), status_code=201)
