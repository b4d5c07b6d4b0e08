"""Process-wide lottery services.

One treasury, one engine and the configured outlets are built at startup and
shared by reference; ``reset()`` rebuilds a clean ledger for tests and replays.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Mapping

from flask import Flask, current_app

from lottery.config import rules_from_config
from lottery.errors import InvalidInputError
from lottery.models.player import Player
from lottery.services.outlet_service import Outlet
from lottery.services.settlement_service import SettlementEngine
from lottery.services.treasury_service import Treasury


@dataclass
class LotteryContext:
    treasury: Treasury
    engine: SettlementEngine
    outlet_count: int
    players: list[Player] = field(default_factory=list)

    def open_outlets(self) -> list[Outlet]:
        return [Outlet(self.engine) for _ in range(self.outlet_count)]

    def reset(self) -> None:
        self.treasury.reset()
        self.engine.reset()
        self.players.clear()
        self.open_outlets()


def build_context(config: Mapping[str, Any]) -> LotteryContext:
    """Create the services described by ``config``."""

    outlet_count = int(config.get("LOTTERY_OUTLETS") or 0)
    if outlet_count < 1:
        raise InvalidInputError(
            message="Invalid LOTTERY_OUTLETS",
            details={"LOTTERY_OUTLETS": ["Must be >= 1"]},
        )

    seed = config.get("LOTTERY_SEED")
    rng = random.Random(seed) if seed is not None else random.Random()

    treasury = Treasury()
    engine = SettlementEngine(
        treasury,
        rules_from_config(config),
        rng=rng,
        tally_workers=int(config.get("LOTTERY_TALLY_WORKERS") or 0),
    )
    ctx = LotteryContext(treasury=treasury, engine=engine, outlet_count=outlet_count)
    ctx.open_outlets()
    return ctx


def init_lottery(app: Flask) -> None:
    """Attach the lottery services to the app."""

    app.extensions["lottery"] = build_context(app.config)


def get_context() -> LotteryContext:
    """Get the lottery services of the current app."""

    ctx: LotteryContext | None = current_app.extensions.get("lottery")
    if ctx is None:
        raise RuntimeError("Lottery services not initialized")
    return ctx
