"""Betting slip: up to 8 wagers played over 1-10 consecutive draws."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from lottery.config import DEFAULT_RULES
from lottery.errors import InvalidInputError
from lottery.models.wager import Wager

MAX_BETS = 8
MAX_DRAWS = 10


@dataclass(frozen=True)
class Slip:
    """Immutable bundle of valid wagers plus a draw count.

    Invalid wagers are dropped silently; the slip itself is rejected when
    nothing valid remains or when the limits are exceeded. Without an
    explicit ``unit_price`` the slip is priced at the selling engine's bet
    price.
    """

    bets: tuple[Wager, ...]
    draw_count: int
    unit_price: int | None = None

    def __post_init__(self) -> None:
        verified = tuple(bet for bet in self.bets if bet.is_valid())
        if not verified:
            raise InvalidInputError(
                message="No valid bet was given",
                details={"bets": ["At least one valid wager is required"]},
            )
        if len(verified) > MAX_BETS:
            raise InvalidInputError(
                message="Too many bets",
                details={"bets": [f"Must be <= {MAX_BETS} valid wagers"]},
            )
        if not 1 <= int(self.draw_count) <= MAX_DRAWS:
            raise InvalidInputError(
                message="Invalid draw count",
                details={"draw_count": [f"Must be within 1..{MAX_DRAWS}"]},
            )
        object.__setattr__(self, "bets", verified)
        object.__setattr__(self, "draw_count", int(self.draw_count))

    @classmethod
    def from_numbers(cls, bets: Iterable[Iterable[int]], draw_count: int, **kwargs) -> Slip:
        return cls(tuple(Wager(frozenset(b)) for b in bets), draw_count, **kwargs)

    def price(self, default_unit_price: int = DEFAULT_RULES.bet_price) -> int:
        unit = default_unit_price if self.unit_price is None else self.unit_price
        return len(self.bets) * self.draw_count * unit
