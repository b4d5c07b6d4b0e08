"""Business logic for splitting a draw's budget into grade pools and prizes.

All arithmetic is integer cents with floor division at every step. Remainders
of the floor divisions are not redistributed.
"""

from __future__ import annotations

from dataclasses import dataclass

from lottery.config import DEFAULT_RULES, SettlementRules
from lottery.models.draw import GradeVector


@dataclass(frozen=True)
class PrizeSplit:
    prizes: GradeVector
    rollover: int


def draw_budget(revenue: int, rules: SettlementRules = DEFAULT_RULES) -> int:
    """Share of a draw's buffered revenue that goes to prizes."""

    return revenue * rules.prize_share_pct // 100


def allocate_pools(
    budget: int,
    winners: GradeVector,
    rollover: int,
    rules: SettlementRules = DEFAULT_RULES,
) -> GradeVector:
    """Compute the four grade pools for one draw.

    The third grade gets whatever is left of the budget after the first,
    second and fourth grade shares, but at least the guaranteed minimum per
    winner. The first grade share deducted here is the unclamped percentage:
    the guaranteed minimum and the rollover only raise what first grade
    winners receive.
    """

    first_share = budget * rules.first_grade_pct // 100
    first = max(first_share, rules.min_first_grade_pool) + rollover
    second = budget * rules.second_grade_pct // 100
    fourth = rules.fourth_grade_prize * winners.fourth
    remainder = budget - first_share - second - fourth
    third = max(remainder, rules.min_third_grade_prize * winners.third)
    return GradeVector(first, second, third, fourth)


def split_prizes(pools: GradeVector, winners: GradeVector) -> PrizeSplit:
    """Divide each pool among its winners.

    Without a first grade winner the whole first pool rolls over to the next
    draw. Lower grades without winners pay nothing and are not rolled over.
    """

    if winners.first == 0:
        first, rollover = 0, pools.first
    else:
        first, rollover = pools.first // winners.first, 0

    lower = [
        pool // count if count else 0
        for pool, count in zip(pools[1:], winners[1:])
    ]
    return PrizeSplit(prizes=GradeVector(first, *lower), rollover=rollover)


def apply_prize_tax(prize: int, rules: SettlementRules = DEFAULT_RULES) -> tuple[int, int]:
    """Return ``(net, tax)`` for a gross prize.

    Prizes at or above the threshold are taxed on the gross amount. Tax and
    net are floored separately, so a cent may be lost.
    """

    if prize < rules.taxed_prize_threshold:
        return prize, 0
    tax = prize * rules.prize_tax_pct // 100
    return prize * (100 - rules.prize_tax_pct) // 100, tax


def split_sale(price: int, draw_count: int, rules: SettlementRules = DEFAULT_RULES) -> tuple[int, int, int]:
    """Return ``(net, sales_tax, per_draw)`` for a ticket sale."""

    sales_tax = price * rules.sales_tax_pct // 100
    net = price * (100 - rules.sales_tax_pct) // 100
    return net, sales_tax, net // draw_count
