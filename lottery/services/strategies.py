"""Player purchase strategies.

A strategy decides what its player buys in one time-step. The set is closed:
random, minimalist, same numbers and same slip.
"""

from __future__ import annotations

import random
from typing import Sequence

from lottery.errors import InvalidInputError
from lottery.models.player import Player
from lottery.models.slip import MAX_BETS, MAX_DRAWS, Slip
from lottery.models.wager import Wager
from lottery.services.outlet_service import Outlet
from lottery.services.settlement_service import SettlementEngine

MAX_RANDOM_TICKETS = 100


class RandomStrategy:
    """Buy 1-100 random tickets at a random outlet."""

    name = "random"

    def __init__(self, engine: SettlementEngine, rng: random.Random | None = None) -> None:
        self._engine = engine
        self._rng = rng or engine.rng

    def buy(self, player: Player) -> None:
        outlets = self._engine.outlets
        if not outlets:
            return
        outlet = self._rng.choice(outlets)
        for _ in range(self._rng.randint(1, MAX_RANDOM_TICKETS)):
            bet_count = self._rng.randint(1, MAX_BETS)
            draw_count = self._rng.randint(1, MAX_DRAWS)
            outlet.sell_random(player, bet_count, draw_count)


class MinimalistStrategy:
    """One random single-bet, single-draw ticket at the favourite outlet."""

    name = "minimalist"

    def __init__(self, favorite_outlet: Outlet) -> None:
        self._outlet = favorite_outlet

    def buy(self, player: Player) -> None:
        self._outlet.sell_random(player, 1, 1)


class _RotatingStrategy:
    """Fixed slip bought at favourite outlets in turn."""

    def __init__(self, slip: Slip, favorite_outlets: Sequence[Outlet]) -> None:
        if not favorite_outlets:
            raise InvalidInputError(
                message="Invalid favorite outlets",
                details={"favorite_outlets": ["At least one favorite outlet is required"]},
            )
        self.slip = slip
        self._outlets = list(favorite_outlets)
        self._next_index = 0

    def next_outlet(self) -> Outlet:
        self._next_index %= len(self._outlets)
        outlet = self._outlets[self._next_index]
        self._next_index += 1
        return outlet


class SameNumbersStrategy(_RotatingStrategy):
    """Play favourite numbers over the maximum number of draws.

    A new ticket is bought only once every held ticket has finished.
    """

    name = "same_numbers"

    def __init__(self, favorite_numbers: Wager, favorite_outlets: Sequence[Outlet]) -> None:
        super().__init__(Slip((favorite_numbers,), MAX_DRAWS), favorite_outlets)

    def buy(self, player: Player) -> None:
        if any(not ticket.all_draws_done() for ticket in player.tickets):
            return
        self.next_outlet().sell(player, self.slip)


class SameSlipStrategy(_RotatingStrategy):
    """Buy the same slip every ``delay`` draws."""

    name = "same_slip"

    def __init__(
        self,
        engine: SettlementEngine,
        slip: Slip,
        favorite_outlets: Sequence[Outlet],
        delay: int,
    ) -> None:
        super().__init__(slip, favorite_outlets)
        if delay < 1:
            raise InvalidInputError(
                message="Invalid delay",
                details={"delay": ["Must be >= 1"]},
            )
        self._engine = engine
        self.delay = delay
        self._last_purchase_draw = 0

    def buy(self, player: Player) -> None:
        current = self._engine.last_draw_number
        if self._last_purchase_draw != 0 and current % self.delay != self._last_purchase_draw % self.delay:
            return
        self._last_purchase_draw = current
        self.next_outlet().sell(player, self.slip)
