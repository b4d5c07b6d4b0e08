"""Ticket-holding player.

The player is authoritative for holding or forgetting tickets; the outlet that
sold a ticket is authoritative for paying it out.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from lottery.errors import InvalidInputError
from lottery.models.persona import PersonalInfo
from lottery.models.ticket import Ticket, TicketId

if TYPE_CHECKING:
    from lottery.services.settlement_service import SettlementEngine


class PurchaseStrategy(Protocol):
    """Decides what a player buys in one time-step."""

    name: str

    def buy(self, player: Player) -> None: ...


class Player:
    def __init__(
        self,
        personal_info: PersonalInfo,
        balance: int,
        strategy: PurchaseStrategy | None = None,
    ) -> None:
        if balance < 0:
            raise InvalidInputError(
                message="Invalid balance",
                details={"balance": ["Player can't start with a negative balance"]},
            )
        self.personal_info = personal_info
        self.strategy = strategy
        self._balance = int(balance)
        self._tickets: dict[TicketId, Ticket] = {}

    @property
    def balance(self) -> int:
        return self._balance

    @property
    def tickets(self) -> list[Ticket]:
        return list(self._tickets.values())

    def try_to_pay(self, amount: int) -> bool:
        """Debit ``amount`` if affordable. Returns ``False`` and changes nothing otherwise."""

        if amount < 0:
            raise InvalidInputError(
                message="Invalid amount",
                details={"amount": ["Amount can't be negative"]},
            )
        if amount > self._balance:
            return False
        self._balance -= amount
        return True

    def receive_amount(self, amount: int) -> None:
        self._balance += int(amount)

    def add_ticket(self, ticket: Ticket) -> None:
        self._tickets[ticket.ticket_id] = ticket

    def remove_ticket(self, ticket: Ticket) -> None:
        self._tickets.pop(ticket.ticket_id, None)

    def buy_tickets(self) -> None:
        if self.strategy is not None:
            self.strategy.buy(self)

    def collect_ticket(self, engine: SettlementEngine, ticket: Ticket) -> int:
        """Claim ``ticket`` at the outlet that issued it. Returns the net amount paid."""

        return engine.get_outlet(ticket.outlet_number).claim(self, ticket)

    def collect_all_tickets(self, engine: SettlementEngine) -> int:
        return sum(self.collect_ticket(engine, t) for t in self.tickets)

    def collect_finished_tickets(self, engine: SettlementEngine) -> int:
        finished = [t for t in self.tickets if t.all_draws_done()]
        return sum(self.collect_ticket(engine, t) for t in finished)

    def __repr__(self) -> str:
        strategy = getattr(self.strategy, "name", None)
        return f"Player({self.personal_info.display_name!r}, balance={self._balance}, strategy={strategy!r})"
