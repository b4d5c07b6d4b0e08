"""Schemas for running simulations over HTTP."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from lottery.schemas.draw import DrawSchema


class SimulationRequestSchema(Schema):
    players_per_strategy = fields.Integer(
        required=False,
        load_default=10,
        validate=validate.Range(min=0, max=500),
    )

    draws = fields.Integer(
        required=False,
        load_default=10,
        validate=validate.Range(min=1, max=500),
    )


class PlayerSummarySchema(Schema):
    name = fields.Function(lambda p: p.personal_info.display_name)
    id_number = fields.Function(lambda p: p.personal_info.id_number)
    strategy = fields.Function(lambda p: getattr(p.strategy, "name", None))
    balance = fields.Integer()


class SimulationResponseSchema(Schema):
    draws = fields.List(fields.Nested(DrawSchema))
    operator_balance = fields.Integer()
    rollover = fields.Integer()
    treasury_income = fields.Integer()
    treasury_subsidies = fields.Integer()
    players = fields.Integer()
    millionaires = fields.List(fields.Nested(PlayerSummarySchema))
