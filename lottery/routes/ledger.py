"""Ledger routes."""

from __future__ import annotations

from flask import Blueprint

from lottery.runtime import get_context
from lottery.schemas.ledger import LedgerSchema
from lottery.utils.responses import ok

ledger_bp = Blueprint("ledger", __name__)

_schema = LedgerSchema()


@ledger_bp.get("/ledger")
def get_ledger():
    """Operator balance, rollover and treasury totals."""

    ctx = get_context()
    engine = ctx.engine
    return ok(
        _schema.dump(
            {
                "last_draw_number": engine.last_draw_number,
                "operator_balance": engine.balance,
                "rollover": engine.rollover,
                "next_draw_revenue": engine.pending_revenue(engine.last_draw_number + 1),
                "treasury_income": ctx.treasury.income,
                "treasury_subsidies": ctx.treasury.subsidies,
                "outlets": len(engine.outlets),
                "players": len(ctx.players),
            }
        )
    )


@ledger_bp.post("/reset")
def reset_ledger():
    """Clear the ledger and reopen the configured outlets."""

    ctx = get_context()
    ctx.reset()
    return ok({"outlets": len(ctx.engine.outlets)})
