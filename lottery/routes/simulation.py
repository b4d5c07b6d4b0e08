"""Simulation routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from lottery.runtime import get_context
from lottery.schemas.simulation import SimulationRequestSchema, SimulationResponseSchema
from lottery.services.simulation_service import SimulationService
from lottery.utils.responses import ok

simulation_bp = Blueprint("simulation", __name__)

_request_schema = SimulationRequestSchema()
_response_schema = SimulationResponseSchema()


@simulation_bp.post("/simulation")
def run_simulation():
    """Add players and run a number of buy / draw / collect steps.

    Body:
    - players_per_strategy: new players of each strategy kind (default 10)
    - draws: number of time-steps to run (default 10)
    """

    payload = request.get_json(silent=True) or {}
    data = _request_schema.load(payload)

    ctx = get_context()
    service = SimulationService(ctx.engine)

    per_strategy = int(data["players_per_strategy"])
    if per_strategy:
        ctx.players.extend(service.create_players(per_strategy))

    report = service.run(ctx.players, int(data["draws"]))
    return ok(_response_schema.dump(report))
