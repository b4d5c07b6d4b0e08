"""Health check routes."""

from __future__ import annotations

from flask import Blueprint

from lottery.runtime import get_context
from lottery.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Health check endpoint; reports the last executed draw."""

    return ok({"status": "ok", "last_draw_number": get_context().engine.last_draw_number})
