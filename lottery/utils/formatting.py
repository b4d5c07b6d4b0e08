"""Display helpers. The core only deals in integer cents; rendering lives here."""

from __future__ import annotations

from lottery.models.draw import Draw
from lottery.models.ticket import Ticket

GRADE_LABELS = ("I.   ", "II.  ", "III. ", "IV.  ")


def cents_to_string(cents: int) -> str:
    sign = "-" if cents < 0 else ""
    dollars, rest = divmod(abs(int(cents)), 100)
    return f"{sign}${dollars}.{rest:02d}"


def format_draw(draw: Draw) -> str:
    lines = [f"Draw no. {draw.number}", f"Results: {draw.winning}", "Combined prize pools:"]
    lines += [label + cents_to_string(pool) for label, pool in zip(GRADE_LABELS, draw.pools)]
    lines.append("Number of winners:")
    lines += [label + str(count) for label, count in zip(GRADE_LABELS, draw.winners)]
    lines.append("Prize amounts:")
    lines += [
        label + (cents_to_string(prize) if prize else "no hit")
        for label, prize in zip(GRADE_LABELS, draw.prizes)
    ]
    return "\n".join(lines)


def format_ticket(ticket: Ticket) -> str:
    lines = [f"TICKET NO. {ticket.ticket_id}"]
    lines += [f"{i}: {bet}" for i, bet in enumerate(ticket.bets, start=1)]
    lines.append(f"DRAW COUNT: {ticket.draw_count}")
    lines.append("DRAWS' NUMBERS:")
    lines.append(" ".join(f" {n} " for n in ticket.draw_numbers()))
    lines.append(f"PRICE: {cents_to_string(ticket.price)}")
    return "\n".join(lines)


def format_ledger(balance: int, income: int, subsidies: int) -> str:
    return (
        f"Lottery headquarters have {cents_to_string(balance)}\n"
        f"The state received {cents_to_string(income)}\n"
        f"The state gave the lottery headquarters {cents_to_string(subsidies)} in subsidies."
    )
