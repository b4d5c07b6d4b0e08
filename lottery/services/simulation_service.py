"""Simulation driver: populates players and runs buy / draw / collect steps."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Sequence

from lottery.errors import InvalidInputError
from lottery.models.draw import Draw
from lottery.models.persona import PersonalInfo
from lottery.models.player import Player
from lottery.models.slip import MAX_BETS, MAX_DRAWS, Slip
from lottery.models.wager import Wager
from lottery.services.outlet_service import Outlet
from lottery.services.settlement_service import SettlementEngine
from lottery.services.strategies import (
    MinimalistStrategy,
    RandomStrategy,
    SameNumbersStrategy,
    SameSlipStrategy,
)

logger = logging.getLogger(__name__)

MAX_START_BALANCE = 1_000_000_00
MILLIONAIRE_BALANCE = 1_000_000_00
MAX_SLIP_DELAY = 5


@dataclass(frozen=True)
class SimulationReport:
    draws: list[Draw]
    operator_balance: int
    rollover: int
    treasury_income: int
    treasury_subsidies: int
    players: int
    millionaires: list[Player] = field(default_factory=list)


class SimulationService:
    """Runs the purchase / draw / collect loop against one engine."""

    def __init__(self, engine: SettlementEngine, rng: random.Random | None = None) -> None:
        self._engine = engine
        self._rng = rng or engine.rng

    def _random_outlets(self, outlets: Sequence[Outlet]) -> list[Outlet]:
        shuffled = list(outlets)
        self._rng.shuffle(shuffled)
        return shuffled[: self._rng.randint(1, len(shuffled))]

    def _balance(self) -> int:
        return self._rng.randrange(MAX_START_BALANCE)

    def create_players(self, per_strategy: int) -> list[Player]:
        """Create ``per_strategy`` players of each strategy kind."""

        if per_strategy < 1:
            raise InvalidInputError(
                message="Invalid players_per_strategy",
                details={"players_per_strategy": ["Must be >= 1"]},
            )
        outlets = self._engine.outlets
        if not outlets:
            raise InvalidInputError(
                message="No outlets open",
                details={"outlets": ["At least one outlet is required"]},
            )

        players: list[Player] = []
        for _ in range(per_strategy):
            players.append(
                Player(
                    PersonalInfo.generate(self._rng),
                    self._balance(),
                    RandomStrategy(self._engine, self._rng),
                )
            )
            players.append(
                Player(
                    PersonalInfo.generate(self._rng),
                    self._balance(),
                    MinimalistStrategy(self._rng.choice(outlets)),
                )
            )
            players.append(
                Player(
                    PersonalInfo.generate(self._rng),
                    self._balance(),
                    SameNumbersStrategy(Wager.random(self._rng), self._random_outlets(outlets)),
                )
            )
            slip = Slip(
                tuple(Wager.random_list(self._rng.randint(1, MAX_BETS), self._rng)),
                self._rng.randint(1, MAX_DRAWS),
            )
            players.append(
                Player(
                    PersonalInfo.generate(self._rng),
                    self._balance(),
                    SameSlipStrategy(
                        self._engine,
                        slip,
                        self._random_outlets(outlets),
                        self._rng.randint(1, MAX_SLIP_DELAY),
                    ),
                )
            )
        return players

    def step(self, players: Sequence[Player]) -> Draw:
        """One time-step: every player buys, one draw runs, finished tickets are collected."""

        for player in players:
            player.buy_tickets()

        draw = self._engine.run_draw()

        for player in players:
            player.collect_finished_tickets(self._engine)
        return draw

    def run(self, players: Sequence[Player], draw_count: int) -> SimulationReport:
        if draw_count < 1:
            raise InvalidInputError(
                message="Invalid draws",
                details={"draws": ["Must be >= 1"]},
            )

        for _ in range(draw_count):
            self.step(players)

        logger.info(
            "Simulation ran %d draws for %d players; operator balance %d",
            draw_count,
            len(players),
            self._engine.balance,
        )
        treasury = self._engine.treasury
        return SimulationReport(
            draws=self._engine.draws(),
            operator_balance=self._engine.balance,
            rollover=self._engine.rollover,
            treasury_income=treasury.income,
            treasury_subsidies=treasury.subsidies,
            players=len(players),
            millionaires=[p for p in players if p.balance > MILLIONAIRE_BALANCE],
        )
