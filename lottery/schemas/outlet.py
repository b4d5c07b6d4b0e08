"""Schema for outlet summaries."""

from __future__ import annotations

from marshmallow import Schema, fields


class OutletSchema(Schema):
    outlet_number = fields.Integer(attribute="number")
    outstanding_tickets = fields.Integer(attribute="outstanding_count")
    claimed_tickets = fields.Integer(attribute="claimed_count")
