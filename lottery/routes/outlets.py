"""Outlet routes."""

from __future__ import annotations

from flask import Blueprint

from lottery.runtime import get_context
from lottery.schemas.outlet import OutletSchema
from lottery.utils.responses import ok

outlets_bp = Blueprint("outlets", __name__)

_outlet_schema = OutletSchema()
_outlets_schema = OutletSchema(many=True)


@outlets_bp.get("/outlets")
def list_outlets():
    return ok(_outlets_schema.dump(get_context().engine.outlets))


@outlets_bp.get("/outlets/<int:outlet_number>")
def get_outlet(outlet_number: int):
    """Ticket counts of one outlet; unknown numbers are 404."""

    return ok(_outlet_schema.dump(get_context().engine.get_outlet(outlet_number)))
