"""Retail outlet: sells tickets, tallies them for draws and pays out prizes."""

from __future__ import annotations

import logging
from typing import Protocol

from lottery.errors import AlreadyClaimedError, UnauthorizedError
from lottery.models.draw import Draw
from lottery.models.slip import Slip
from lottery.models.ticket import Ticket, TicketId
from lottery.models.wager import Wager
from lottery.services.settlement_service import SettlementEngine

logger = logging.getLogger(__name__)


class Buyer(Protocol):
    def try_to_pay(self, amount: int) -> bool: ...

    def receive_amount(self, amount: int) -> None: ...

    def add_ticket(self, ticket: Ticket) -> None: ...

    def remove_ticket(self, ticket: Ticket) -> None: ...


class Outlet:
    """Selling and paying agent between players and the settlement engine.

    The outlet owns the canonical record of every ticket it sold, split into
    outstanding and claimed tickets.
    """

    def __init__(self, engine: SettlementEngine) -> None:
        self._engine = engine
        self._outstanding: dict[TicketId, Ticket] = {}
        self._claimed: dict[TicketId, Ticket] = {}
        self._number = engine.register_outlet(self)

    @property
    def number(self) -> int:
        return self._number

    @property
    def outstanding_count(self) -> int:
        return len(self._outstanding)

    @property
    def claimed_count(self) -> int:
        return len(self._claimed)

    def sold(self, ticket: Ticket) -> bool:
        tid = ticket.ticket_id
        return tid in self._outstanding or tid in self._claimed

    def is_claimed(self, ticket: Ticket) -> bool:
        return ticket.ticket_id in self._claimed

    def sell(self, buyer: Buyer, slip: Slip) -> Ticket | None:
        """Sell ``slip`` to ``buyer``.

        Returns ``None`` when the buyer can't afford the slip; nothing is
        issued and no balance changes in that case.
        """

        price = slip.price(self._engine.rules.bet_price)
        with self._engine.sequence_point():
            if not buyer.try_to_pay(price):
                logger.debug("Outlet %d declined a sale of %d cents", self._number, price)
                return None

            ticket = Ticket(self._engine, self._number, slip)
            self._engine.receive_sale(ticket)
            self._outstanding[ticket.ticket_id] = ticket

        buyer.add_ticket(ticket)
        return ticket

    def sell_random(self, buyer: Buyer, bet_count: int, draw_count: int) -> Ticket | None:
        bets = Wager.random_list(bet_count, self._engine.rng)
        return self.sell(buyer, Slip(tuple(bets), draw_count))

    def tally(self, draw: Draw) -> None:
        for ticket in self._outstanding.values():
            ticket.count_hits(draw)

    def claim(self, buyer: Buyer, ticket: Ticket) -> int:
        """Pay every bet of ``ticket`` for each covered draw that already ran.

        Returns the total net amount paid to ``buyer``.
        """

        tid = ticket.ticket_id
        with self._engine.sequence_point():
            total = self._pay_out(buyer, ticket)

        buyer.remove_ticket(ticket)
        logger.debug("Outlet %d paid %d cents for ticket %s", self._number, total, tid)
        return total

    def _pay_out(self, buyer: Buyer, ticket: Ticket) -> int:
        tid = ticket.ticket_id
        if not self.sold(ticket):
            raise UnauthorizedError(
                message="Ticket was sold by a different outlet",
                details={"ticket_id": str(tid), "outlet": self._number},
            )
        if tid in self._claimed:
            raise AlreadyClaimedError(
                message="Ticket prize was already claimed",
                details={"ticket_id": str(tid)},
            )

        total = 0
        last_draw = self._engine.last_draw_number
        for draw_number in ticket.draw_numbers():
            if draw_number > last_draw:
                break
            for bet in ticket.bets:
                total += self._engine.give_prize(buyer, bet, draw_number)

        self._claimed[tid] = self._outstanding.pop(tid)
        return total
