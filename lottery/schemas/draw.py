"""Schemas for draw execution and draw reports."""

from __future__ import annotations

from marshmallow import Schema, ValidationError, fields, validate, validates

from lottery.models.wager import MAX_NUMBER, NUMBERS_PER_WAGER


class DrawRequestSchema(Schema):
    winning_numbers = fields.List(
        fields.Integer(validate=validate.Range(min=1, max=MAX_NUMBER)),
        required=False,
        load_default=None,
        validate=validate.Length(equal=NUMBERS_PER_WAGER),
    )

    @validates("winning_numbers")
    def _validate_unique(self, value, **kwargs):  # type: ignore[no-untyped-def]
        if value is not None and len(set(value)) != len(value):
            raise ValidationError("Numbers must be unique")


class DrawSchema(Schema):
    """Serialize a finalized Draw. Money values are integer cents."""

    draw_number = fields.Integer(attribute="number")
    winning_numbers = fields.Function(lambda draw: draw.winning.sorted_numbers())
    winners = fields.Function(lambda draw: list(draw.winners))
    pools = fields.Function(lambda draw: list(draw.pools))
    prizes = fields.Function(lambda draw: list(draw.prizes))
