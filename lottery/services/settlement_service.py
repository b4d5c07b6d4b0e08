"""Settlement engine: draw history, revenue buffer, operator ledger and payouts."""

from __future__ import annotations

import logging
import random
from concurrent.futures import ThreadPoolExecutor
from contextlib import contextmanager
from threading import RLock
from typing import TYPE_CHECKING, Iterator, Protocol

from lottery.config import DEFAULT_RULES, SettlementRules
from lottery.errors import InvalidInputError, NotFoundError
from lottery.models.draw import Draw, prize_grade
from lottery.models.slip import MAX_DRAWS
from lottery.models.ticket import Ticket
from lottery.models.wager import Wager
from lottery.services.prize_allocation import (
    allocate_pools,
    apply_prize_tax,
    draw_budget,
    split_prizes,
    split_sale,
)
from lottery.services.treasury_service import Treasury

if TYPE_CHECKING:
    from lottery.services.outlet_service import Outlet

logger = logging.getLogger(__name__)

# One slot per draw a ticket may cover.
REVENUE_SLOTS = MAX_DRAWS


class Payee(Protocol):
    def receive_amount(self, amount: int) -> None: ...


class SettlementEngine:
    """Authoritative ledger and draw executor.

    Every mutation of engine state runs under one re-entrant lock, which is
    the single sequence point between ticket sales, draws and payouts.
    """

    def __init__(
        self,
        treasury: Treasury,
        rules: SettlementRules = DEFAULT_RULES,
        *,
        rng: random.Random | None = None,
        tally_workers: int = 1,
    ) -> None:
        if tally_workers < 1:
            raise InvalidInputError(
                message="Invalid tally_workers",
                details={"tally_workers": ["Must be >= 1"]},
            )
        self._treasury = treasury
        self._rules = rules
        self._rng = rng or random.Random()
        self._tally_workers = tally_workers
        self._lock = RLock()

        self._balance = 0
        self._rollover = 0
        self._pending_revenue = [0] * REVENUE_SLOTS
        self._draws: list[Draw] = []
        self._outlets: list[Outlet] = []
        self._last_draw_number = 0
        self._last_ticket_number = 0
        self._last_outlet_number = 0

    # -- state -------------------------------------------------------------

    @property
    def rules(self) -> SettlementRules:
        return self._rules

    @property
    def treasury(self) -> Treasury:
        return self._treasury

    @property
    def rng(self) -> random.Random:
        return self._rng

    @property
    def balance(self) -> int:
        return self._balance

    @property
    def rollover(self) -> int:
        return self._rollover

    @property
    def last_draw_number(self) -> int:
        return self._last_draw_number

    @property
    def last_ticket_number(self) -> int:
        return self._last_ticket_number

    @property
    def outlets(self) -> list[Outlet]:
        return list(self._outlets)

    @contextmanager
    def sequence_point(self) -> Iterator[None]:
        with self._lock:
            yield

    def reset(self) -> None:
        """Drop all ledger state, history and outlets."""

        with self._lock:
            self._balance = 0
            self._rollover = 0
            self._pending_revenue = [0] * REVENUE_SLOTS
            self._draws.clear()
            self._outlets.clear()
            self._last_draw_number = 0
            self._last_ticket_number = 0
            self._last_outlet_number = 0

    # -- registration ------------------------------------------------------

    def register_outlet(self, outlet: Outlet) -> int:
        with self._lock:
            self._last_outlet_number += 1
            self._outlets.append(outlet)
            return self._last_outlet_number

    def get_outlet(self, outlet_number: int) -> Outlet:
        for outlet in self._outlets:
            if outlet.number == outlet_number:
                return outlet
        raise NotFoundError(message=f"Outlet {outlet_number} not found")

    def next_ticket_number(self) -> int:
        with self._lock:
            self._last_ticket_number += 1
            return self._last_ticket_number

    # -- reporting ---------------------------------------------------------

    def draws(self) -> list[Draw]:
        return list(self._draws)

    def get_draw(self, draw_number: int) -> Draw:
        if draw_number < 1 or draw_number > self._last_draw_number:
            raise InvalidInputError(
                message="This draw hasn't happened yet",
                details={"draw_number": [f"Must be within 1..{self._last_draw_number}"]},
            )
        return self._draws[draw_number - 1]

    def pending_revenue(self, draw_number: int) -> int:
        """Revenue buffered in the slot that ``draw_number`` will drain."""

        return self._pending_revenue[draw_number % REVENUE_SLOTS]

    # -- money in ----------------------------------------------------------

    def receive_sale(self, ticket: Ticket) -> int:
        """Book a ticket sale; returns the operator's net revenue."""

        net, sales_tax, per_draw = split_sale(ticket.price, ticket.draw_count, self._rules)
        with self._lock:
            self._treasury.receive_tax(sales_tax)
            for draw_number in ticket.draw_numbers():
                self._pending_revenue[draw_number % REVENUE_SLOTS] += per_draw
            self._balance += net
        return net

    # -- draws -------------------------------------------------------------

    def run_draw(self, winning: Wager | None = None) -> Draw:
        """Execute the next draw and append it to the history.

        ``winning`` replaces the random drawing, e.g. to replay an official
        result; it must be a valid wager.
        """

        if winning is not None and not winning.is_valid():
            raise InvalidInputError(
                message="Invalid winning numbers",
                details={"winning_numbers": ["Must be 6 unique numbers within 1..49"]},
            )

        with self._lock:
            self._last_draw_number += 1
            draw = Draw(self._last_draw_number, winning or Wager.random(self._rng))

            slot = draw.number % REVENUE_SLOTS
            budget = draw_budget(self._pending_revenue[slot], self._rules)
            self._pending_revenue[slot] = 0

            self._tally(draw)

            winners = draw.winners
            pools = allocate_pools(budget, winners, self._rollover, self._rules)
            split = split_prizes(pools, winners)
            self._rollover = split.rollover

            draw.finalize(pools, split.prizes)
            self._draws.append(draw)

        logger.info(
            "Draw %d finalized: numbers=[%s] budget=%d winners=%s rollover=%d",
            draw.number,
            draw.winning,
            budget,
            tuple(winners),
            self._rollover,
        )
        return draw

    def _tally(self, draw: Draw) -> None:
        if self._tally_workers == 1 or len(self._outlets) < 2:
            for outlet in self._outlets:
                outlet.tally(draw)
            return

        with ThreadPoolExecutor(max_workers=self._tally_workers) as pool:
            # list() joins every outlet tally and re-raises worker errors.
            list(pool.map(lambda outlet: outlet.tally(draw), self._outlets))

    # -- money out ---------------------------------------------------------

    def give_prize(self, payee: Payee, bet: Wager, draw_number: int) -> int:
        """Pay ``payee`` for one bet in one draw. Returns the net amount paid."""

        if not bet.is_valid():
            raise InvalidInputError(
                message="Bad set of numbers",
                details={"bet": bet.sorted_numbers()},
            )

        with self._lock:
            draw = self.get_draw(draw_number)
            grade = prize_grade(bet.hit_count(draw.winning))
            if grade is None:
                return 0

            prize = draw.prizes.grade(grade)
            self._debit(prize)

            net, tax = apply_prize_tax(prize, self._rules)
            if tax:
                self._treasury.receive_tax(tax)

        payee.receive_amount(net)
        return net

    def _debit(self, amount: int) -> None:
        self._balance -= amount
        if self._balance < 0:
            self._treasury.give_subsidy(-self._balance)
            self._balance = 0
