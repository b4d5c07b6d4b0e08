from __future__ import annotations

import unittest

from lottery.config import DEFAULT_RULES, SettlementRules
from lottery.errors import InvalidInputError
from lottery.models import GradeVector, prize_grade
from lottery.services.prize_allocation import (
    allocate_pools,
    apply_prize_tax,
    draw_budget,
    split_prizes,
    split_sale,
)


class PoolAllocationTests(unittest.TestCase):
    def test_small_budget_uses_first_grade_minimum(self) -> None:
        pools = allocate_pools(1_000_00, GradeVector(), rollover=0)
        self.assertEqual(pools.first, DEFAULT_RULES.min_first_grade_pool)
        self.assertEqual(pools.second, 80_00)
        self.assertEqual(pools.fourth, 0)
        # 1000.00 - 440.00 - 80.00, the unclamped first share is deducted
        self.assertEqual(pools.third, 480_00)

    def test_large_budget_and_rollover(self) -> None:
        budget = 10_000_000_00
        pools = allocate_pools(budget, GradeVector(1, 2, 3, 4), rollover=5_00)
        self.assertEqual(pools.first, budget * 44 // 100 + 5_00)
        self.assertEqual(pools.second, budget * 8 // 100)
        self.assertEqual(pools.fourth, 4 * 24_00)
        self.assertEqual(pools.third, budget - budget * 44 // 100 - budget * 8 // 100 - 4 * 24_00)

    def test_third_grade_minimum_per_winner(self) -> None:
        pools = allocate_pools(100_00, GradeVector(0, 0, 10, 1), rollover=0)
        self.assertEqual(pools.third, 10 * 36_00)

    def test_integer_floor_division(self) -> None:
        pools = allocate_pools(999, GradeVector(), rollover=0)
        self.assertEqual(pools.second, 79)
        self.assertEqual(pools.third, 999 - 439 - 79)


class PrizeSplitTests(unittest.TestCase):
    def test_no_first_grade_winner_rolls_over(self) -> None:
        pools = GradeVector(2_000_000_00, 80_00, 480_00, 0)
        split = split_prizes(pools, GradeVector())
        self.assertEqual(split.prizes, GradeVector(0, 0, 0, 0))
        self.assertEqual(split.rollover, 2_000_000_00)

    def test_first_grade_winner_resets_rollover(self) -> None:
        pools = GradeVector(3_000_000_00, 90_00, 500_00, 48_00)
        split = split_prizes(pools, GradeVector(2, 3, 7, 2))
        self.assertEqual(split.rollover, 0)
        self.assertEqual(split.prizes, GradeVector(1_500_000_00, 30_00, 500_00 // 7, 24_00))

    def test_lower_grades_without_winners_are_forfeited(self) -> None:
        pools = GradeVector(100, 200, 300, 0)
        split = split_prizes(pools, GradeVector(1, 0, 0, 0))
        self.assertEqual(split.prizes, GradeVector(100, 0, 0, 0))
        self.assertEqual(split.rollover, 0)


class GradeMappingTests(unittest.TestCase):
    def test_hits_to_grade(self) -> None:
        self.assertEqual(prize_grade(6), 1)
        self.assertEqual(prize_grade(5), 2)
        self.assertEqual(prize_grade(4), 3)
        self.assertEqual(prize_grade(3), 4)
        for hits in range(3):
            self.assertIsNone(prize_grade(hits))

    def test_grade_accessor(self) -> None:
        vector = GradeVector(1, 2, 3, 4)
        self.assertEqual([vector.grade(g) for g in (1, 2, 3, 4)], [1, 2, 3, 4])
        with self.assertRaises(ValueError):
            vector.grade(5)


class TaxTests(unittest.TestCase):
    def test_prize_at_threshold_is_taxed(self) -> None:
        net, tax = apply_prize_tax(2280_00)
        self.assertEqual(tax, 228_00)
        self.assertEqual(net, 2052_00)

    def test_net_prize_and_tax_are_floored_separately(self) -> None:
        self.assertEqual(apply_prize_tax(2280_01), (2052_00, 228_00))
        self.assertEqual(apply_prize_tax(1_333_333_33), (1_199_999_99, 133_333_33))

    def test_sale_split_floors_net_separately(self) -> None:
        rules = SettlementRules(bet_price=3_01)
        net, tax, per_draw = split_sale(3_01, 1, rules)
        self.assertEqual((net, tax, per_draw), (240, 60, 240))

    def test_prize_below_threshold_is_untaxed(self) -> None:
        self.assertEqual(apply_prize_tax(2279_99), (2279_99, 0))

    def test_sale_split(self) -> None:
        net, tax, per_draw = split_sale(7200, 3)
        self.assertEqual((net, tax, per_draw), (5760, 1440, 1920))

    def test_sale_split_loses_remainder(self) -> None:
        net, _, per_draw = split_sale(3_00, 7)
        self.assertEqual(net, 240)
        self.assertEqual(per_draw, 34)

    def test_budget(self) -> None:
        self.assertEqual(draw_budget(1_920_000), 979_200)


class RulesTests(unittest.TestCase):
    def test_non_positive_rules_are_rejected(self) -> None:
        with self.assertRaises(InvalidInputError) as ctx:
            SettlementRules(bet_price=0)
        self.assertIn("bet_price", ctx.exception.details)
        with self.assertRaises(InvalidInputError):
            SettlementRules(prize_share_pct=-1)

    def test_percentages_over_100_are_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            SettlementRules(prize_tax_pct=101)
        with self.assertRaises(InvalidInputError):
            SettlementRules(first_grade_pct=90, second_grade_pct=20)

    def test_custom_rules_flow_into_allocation(self) -> None:
        rules = SettlementRules(min_first_grade_pool=1, first_grade_pct=50, second_grade_pct=10)
        pools = allocate_pools(1000, GradeVector(), rollover=0, rules=rules)
        self.assertEqual(pools, GradeVector(500, 100, 400, 0))


if __name__ == "__main__":
    unittest.main()
