"""Issued tickets and their identities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from lottery.models.draw import Draw, prize_grade
from lottery.models.slip import Slip
from lottery.models.wager import Wager

if TYPE_CHECKING:
    from lottery.services.settlement_service import SettlementEngine

MARKER_LIMIT = 1_000_000_000


def _digit_sum(number: int) -> int:
    return sum(int(d) for d in str(abs(int(number))))


def ticket_checksum(ticket_number: int, outlet_number: int, random_marker: int) -> int:
    return (_digit_sum(ticket_number) + _digit_sum(outlet_number) + _digit_sum(random_marker)) % 100


@dataclass(frozen=True)
class TicketId:
    """Global ticket identity: sequence, outlet, random marker and checksum."""

    ticket_number: int
    outlet_number: int
    random_marker: int
    checksum: int

    @classmethod
    def issue(cls, ticket_number: int, outlet_number: int, random_marker: int) -> TicketId:
        return cls(
            ticket_number=ticket_number,
            outlet_number=outlet_number,
            random_marker=random_marker,
            checksum=ticket_checksum(ticket_number, outlet_number, random_marker),
        )

    def is_consistent(self) -> bool:
        return self.checksum == ticket_checksum(
            self.ticket_number, self.outlet_number, self.random_marker
        )

    def __str__(self) -> str:
        return f"{self.ticket_number}-{self.outlet_number}-{self.random_marker:09d}-{self.checksum:02d}"


class Ticket:
    """A purchased slip bound to its issuing outlet and first covered draw.

    The outlet is referenced by number only; the outlet that sold the ticket
    keeps the canonical record and is the only one allowed to pay it out.
    """

    def __init__(self, engine: SettlementEngine, outlet_number: int, slip: Slip) -> None:
        self._engine = engine
        self._ticket_id = TicketId.issue(
            engine.next_ticket_number(),
            outlet_number,
            engine.rng.randrange(MARKER_LIMIT),
        )
        self._first_draw = engine.last_draw_number + 1
        self._draw_count = slip.draw_count
        self._bets = tuple(slip.bets)
        self._price = slip.price(engine.rules.bet_price)
        self._tallied_draws: set[int] = set()

    @property
    def ticket_id(self) -> TicketId:
        return self._ticket_id

    @property
    def outlet_number(self) -> int:
        return self._ticket_id.outlet_number

    @property
    def first_draw(self) -> int:
        return self._first_draw

    @property
    def last_draw(self) -> int:
        return self._first_draw + self._draw_count - 1

    @property
    def draw_count(self) -> int:
        return self._draw_count

    @property
    def bets(self) -> tuple[Wager, ...]:
        return self._bets

    @property
    def price(self) -> int:
        return self._price

    def draw_numbers(self) -> range:
        return range(self._first_draw, self.last_draw + 1)

    def covers(self, draw_number: int) -> bool:
        return self._first_draw <= draw_number <= self.last_draw

    def count_hits(self, draw: Draw) -> None:
        """Register this ticket's winning bets in ``draw``.

        Draws outside the covered range are ignored, and so is a second call
        for a draw that was already counted.
        """

        if not self.covers(draw.number) or draw.number in self._tallied_draws:
            return
        self._tallied_draws.add(draw.number)

        for bet in self._bets:
            grade = prize_grade(bet.hit_count(draw.winning))
            if grade is not None:
                draw.register_hit(grade)

    def all_draws_done(self) -> bool:
        return self.last_draw <= self._engine.last_draw_number

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ticket):
            return NotImplemented
        return self._ticket_id == other._ticket_id

    def __hash__(self) -> int:
        return hash(self._ticket_id)

    def __repr__(self) -> str:
        return f"Ticket(id={self._ticket_id}, draws={self._first_draw}..{self.last_draw})"
