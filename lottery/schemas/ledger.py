"""Schema for the ledger summary."""

from __future__ import annotations

from marshmallow import Schema, fields


class LedgerSchema(Schema):
    last_draw_number = fields.Integer(required=True)
    operator_balance = fields.Integer(required=True)
    rollover = fields.Integer(required=True)
    next_draw_revenue = fields.Integer(required=True)
    treasury_income = fields.Integer(required=True)
    treasury_subsidies = fields.Integer(required=True)
    outlets = fields.Integer(required=True)
    players = fields.Integer(required=True)
