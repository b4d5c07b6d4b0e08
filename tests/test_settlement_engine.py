from __future__ import annotations

import random
import unittest

from lottery.config import SettlementRules
from lottery.errors import AlreadyClaimedError, InvalidInputError, NotFoundError, UnauthorizedError
from lottery.models import GradeVector, PersonalInfo, Player, Slip, Wager
from lottery.services.outlet_service import Outlet
from lottery.services.settlement_service import SettlementEngine
from lottery.services.strategies import SameSlipStrategy
from lottery.services.treasury_service import Treasury

NO_HITS = Wager.of(40, 41, 42, 43, 44, 45)
JACKPOT = Wager.of(1, 2, 3, 4, 5, 6)


class EngineTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.rng = random.Random(42)
        self.treasury = Treasury()
        self.engine = SettlementEngine(self.treasury, rng=self.rng)
        self.outlet = Outlet(self.engine)

    def make_player(self, balance: int = 1_000_000_00, strategy=None) -> Player:
        return Player(PersonalInfo.generate(self.rng), balance, strategy)


class EndToEndScenarioTests(EngineTestCase):
    def test_thousand_identical_tickets(self) -> None:
        bets = tuple(Wager.of(*range(1 + i, 7 + i)) for i in range(8))
        slip = Slip(bets, 3)
        player = self.make_player(
            strategy=SameSlipStrategy(self.engine, slip, [self.outlet], delay=1)
        )
        for _ in range(1000):
            player.buy_tickets()

        self.assertEqual(len(player.tickets), 1000)
        self.assertEqual(player.balance, 1_000_000_00 - 3_00 * 1000 * 8 * 3)
        self.assertEqual(self.engine.balance, 1000 * 8 * 3 * 2_40)
        self.assertEqual(self.treasury.income, 60 * 1000 * 8 * 3)

        self.engine.run_draw(NO_HITS)
        self.assertEqual(
            self.engine.get_draw(1).pools.second,
            1000 * 8 * 2_40 * 51 // 100 * 8 // 100,
        )
        self.engine.run_draw(NO_HITS)
        self.engine.run_draw(NO_HITS)
        self.assertEqual(
            self.engine.get_draw(3).pools.third,
            1000 * 8 * 2_40 * 51 // 100 * 48 // 100,
        )
        self.assertTrue(all(t.all_draws_done() for t in player.tickets))

        poor = self.make_player(balance=2_90)
        self.assertIsNone(self.outlet.sell(poor, slip))
        self.assertEqual(poor.balance, 2_90)
        self.assertEqual(poor.tickets, [])

        other_outlet = Outlet(self.engine)
        ticket = player.tickets[1]
        with self.assertRaises(UnauthorizedError):
            other_outlet.claim(player, ticket)

        self.assertEqual(self.outlet.claim(player, ticket), 0)
        self.assertEqual(len(player.tickets), 999)
        with self.assertRaises(UnauthorizedError):
            other_outlet.claim(player, ticket)
        with self.assertRaises(AlreadyClaimedError):
            self.outlet.claim(player, ticket)


class SaleTests(EngineTestCase):
    def test_slip_is_priced_by_engine_rules(self) -> None:
        engine = SettlementEngine(Treasury(), SettlementRules(bet_price=5_00), rng=self.rng)
        outlet = Outlet(engine)
        player = self.make_player(balance=10_00)

        ticket = outlet.sell(player, Slip((JACKPOT,), 1))
        self.assertEqual(ticket.price, 5_00)
        self.assertEqual(player.balance, 5_00)
        self.assertEqual(engine.balance, 4_00)
        self.assertEqual(engine.treasury.income, 1_00)

    def test_explicit_unit_price_wins(self) -> None:
        engine = SettlementEngine(Treasury(), SettlementRules(bet_price=5_00), rng=self.rng)
        ticket = Outlet(engine).sell(self.make_player(), Slip((JACKPOT,), 2, unit_price=4_00))
        self.assertEqual(ticket.price, 8_00)

    def test_sell_random_uses_engine_price(self) -> None:
        engine = SettlementEngine(Treasury(), SettlementRules(bet_price=5_00), rng=self.rng)
        ticket = Outlet(engine).sell_random(self.make_player(), 2, 3)
        self.assertEqual(ticket.price, 2 * 3 * 5_00)

    def test_unknown_outlet(self) -> None:
        self.assertIs(self.engine.get_outlet(1), self.outlet)
        with self.assertRaises(NotFoundError):
            self.engine.get_outlet(2)


class DrawExecutionTests(EngineTestCase):
    def test_draw_numbers_are_sequential(self) -> None:
        numbers = [self.engine.run_draw().number for _ in range(3)]
        self.assertEqual(numbers, [1, 2, 3])
        self.assertEqual([d.number for d in self.engine.draws()], [1, 2, 3])
        self.assertTrue(all(d.finalized for d in self.engine.draws()))

    def test_random_winning_numbers_are_valid(self) -> None:
        for _ in range(20):
            self.assertTrue(self.engine.run_draw().winning.is_valid())

    def test_invalid_explicit_winning_numbers(self) -> None:
        with self.assertRaises(InvalidInputError):
            self.engine.run_draw(Wager.of(1, 2, 3))
        self.assertEqual(self.engine.last_draw_number, 0)

    def test_rollover_propagates_to_next_draw(self) -> None:
        first = self.engine.run_draw()
        self.assertEqual(first.winners.first, 0)
        self.assertEqual(first.prizes.first, 0)
        self.assertEqual(self.engine.rollover, first.pools.first)

        second = self.engine.run_draw()
        self.assertEqual(second.pools.first, 2_000_000_00 + first.pools.first)
        self.assertEqual(self.engine.rollover, second.pools.first)

    def test_jackpot_resets_rollover(self) -> None:
        self.engine.run_draw(NO_HITS)
        player = self.make_player()
        self.outlet.sell(player, Slip((JACKPOT,), 1))

        draw = self.engine.run_draw(JACKPOT)
        self.assertEqual(draw.winners, GradeVector(1, 0, 0, 0))
        self.assertEqual(draw.prizes.first, 4_000_000_00)
        self.assertEqual(self.engine.rollover, 0)

    def test_get_draw_rejects_unexecuted(self) -> None:
        self.engine.run_draw()
        with self.assertRaises(InvalidInputError):
            self.engine.get_draw(2)
        with self.assertRaises(InvalidInputError):
            self.engine.get_draw(0)

    def test_revenue_buffer_wraps(self) -> None:
        player = self.make_player()
        ticket = self.outlet.sell(player, Slip((JACKPOT,), 10))
        self.assertEqual(ticket.first_draw, 1)
        for n in range(1, 11):
            self.assertEqual(self.engine.pending_revenue(n), 240)

        for n in range(1, 11):
            draw = self.engine.run_draw(NO_HITS)
            self.assertEqual(draw.pools.second, 240 * 51 // 100 * 8 // 100)
            self.assertEqual(self.engine.pending_revenue(n), 0)
        self.assertTrue(ticket.all_draws_done())

        later = self.outlet.sell(player, Slip((JACKPOT,), 2))
        self.assertEqual(later.first_draw, 11)
        self.assertEqual(self.engine.pending_revenue(11), 480 // 2)
        self.assertEqual(self.engine.pending_revenue(12), 480 // 2)

        draw = self.engine.run_draw(NO_HITS)
        self.assertEqual(draw.number, 11)
        self.assertEqual(draw.pools.second, 240 * 51 // 100 * 8 // 100)
        self.assertEqual(self.engine.pending_revenue(11), 0)
        self.assertEqual(self.engine.pending_revenue(12), 240)

    def test_parallel_tally_counts_each_ticket_once(self) -> None:
        engine = SettlementEngine(Treasury(), rng=random.Random(1), tally_workers=4)
        outlets = [Outlet(engine) for _ in range(3)]
        player = Player(PersonalInfo.generate(), 1_000_000_00)
        for outlet in outlets:
            for _ in range(5):
                outlet.sell(player, Slip((JACKPOT,), 2))

        draw = engine.run_draw(JACKPOT)
        self.assertEqual(draw.winners.first, 15)
        self.assertEqual(draw.prizes.first, draw.pools.first // 15)

    def test_tally_workers_must_be_positive(self) -> None:
        with self.assertRaises(InvalidInputError):
            SettlementEngine(Treasury(), tally_workers=0)

    def test_reset(self) -> None:
        player = self.make_player()
        self.outlet.sell(player, Slip((JACKPOT,), 2))
        self.engine.run_draw()
        self.engine.reset()
        self.assertEqual(self.engine.last_draw_number, 0)
        self.assertEqual(self.engine.balance, 0)
        self.assertEqual(self.engine.rollover, 0)
        self.assertEqual(self.engine.draws(), [])
        self.assertEqual(self.engine.outlets, [])
        self.assertEqual(self.engine.pending_revenue(2), 0)


class PrizeClaimTests(EngineTestCase):
    def test_grade_mapping_and_payouts(self) -> None:
        bets = (
            Wager.of(1, 2, 3, 4, 5, 6),
            Wager.of(1, 2, 3, 4, 5, 40),
            Wager.of(1, 2, 3, 4, 40, 41),
            Wager.of(1, 2, 3, 40, 41, 42),
            Wager.of(1, 2, 40, 41, 42, 43),
        )
        player = self.make_player()
        self.outlet.sell(player, Slip(bets, 1))
        draw = self.engine.run_draw(JACKPOT)

        self.assertEqual(draw.winners, GradeVector(1, 1, 1, 1))
        # budget: 1500 * 80% * 51% = 612
        self.assertEqual(draw.pools, GradeVector(2_000_000_00, 48, 36_00, 24_00))
        self.assertEqual(draw.prizes, GradeVector(2_000_000_00, 48, 36_00, 24_00))

        payee = self.make_player(balance=0)
        paid = [self.engine.give_prize(payee, bet, 1) for bet in bets]
        self.assertEqual(paid, [1_800_000_00, 48, 36_00, 24_00, 0])
        self.assertEqual(payee.balance, sum(paid))

    def test_jackpot_claim_is_taxed_and_subsidized(self) -> None:
        player = self.make_player(balance=10_00)
        ticket = self.outlet.sell(player, Slip((JACKPOT,), 1))
        self.assertEqual(self.engine.balance, 2_40)
        self.assertEqual(self.treasury.income, 60)

        self.engine.run_draw(JACKPOT)
        paid = player.collect_ticket(self.engine, ticket)

        self.assertEqual(paid, 1_800_000_00)
        self.assertEqual(player.balance, 10_00 - 3_00 + 1_800_000_00)
        self.assertEqual(self.engine.balance, 0)
        self.assertEqual(self.treasury.subsidies, 2_000_000_00 - 2_40)
        self.assertEqual(self.treasury.income, 60 + 200_000_00)
        self.assertTrue(self.outlet.is_claimed(ticket))

    def test_early_claim_stops_tallying(self) -> None:
        player = self.make_player()
        ticket = self.outlet.sell(player, Slip((JACKPOT,), 2))
        self.assertEqual(self.outlet.outstanding_count, 1)

        self.engine.run_draw(JACKPOT)
        self.assertEqual(self.outlet.claim(player, ticket), 1_800_000_00)
        self.assertEqual(self.outlet.outstanding_count, 0)
        self.assertEqual(self.outlet.claimed_count, 1)

        draw = self.engine.run_draw(JACKPOT)
        self.assertEqual(draw.winners.first, 0)
        self.assertEqual(self.engine.rollover, draw.pools.first)

    def test_give_prize_rejects_invalid_bet(self) -> None:
        self.engine.run_draw()
        with self.assertRaises(InvalidInputError):
            self.engine.give_prize(self.make_player(), Wager.of(1, 2, 3), 1)

    def test_give_prize_rejects_future_draw(self) -> None:
        with self.assertRaises(InvalidInputError):
            self.engine.give_prize(self.make_player(), JACKPOT, 1)

    def test_losing_bet_is_a_silent_no_op(self) -> None:
        self.engine.run_draw(NO_HITS)
        balance = self.engine.balance
        player = self.make_player(balance=0)
        self.assertEqual(self.engine.give_prize(player, JACKPOT, 1), 0)
        self.assertEqual(player.balance, 0)
        self.assertEqual(self.engine.balance, balance)


if __name__ == "__main__":
    unittest.main()
