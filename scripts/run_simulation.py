"""Run a console lottery simulation and print the results.

Players of every strategy buy tickets, a draw runs, and finished tickets are
collected, once per simulated draw.

Usage:
  python scripts/run_simulation.py --outlets 10 --players 200 --draws 20 --seed 7
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import random
import sys
from collections.abc import Sequence

from dotenv import load_dotenv

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from lottery.config import rules_from_config
from lottery.logging_config import configure_log_level
from lottery.services.outlet_service import Outlet
from lottery.services.settlement_service import SettlementEngine
from lottery.services.simulation_service import SimulationService
from lottery.services.treasury_service import Treasury
from lottery.utils.formatting import cents_to_string, format_draw, format_ledger, format_ticket


logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Simulate lottery draws and settlement")
    parser.add_argument("--outlets", type=int, default=10)
    parser.add_argument(
        "--players",
        dest="players_per_strategy",
        type=int,
        default=200,
        help="Players of each strategy kind",
    )
    parser.add_argument("--draws", type=int, default=20)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--tally-workers", dest="tally_workers", type=int, default=1)
    parser.add_argument("--log-level", dest="log_level", type=str, default="WARNING")
    parser.add_argument(
        "--show-tickets",
        action="store_true",
        help="Also print the tickets each millionaire still holds",
    )
    args = parser.parse_args(argv)

    load_dotenv()
    configure_log_level(args.log_level)

    if args.outlets < 1:
        raise SystemExit("--outlets must be >= 1")

    treasury = Treasury()
    engine = SettlementEngine(
        treasury,
        rules_from_config({}),
        rng=random.Random(args.seed),
        tally_workers=args.tally_workers,
    )
    for _ in range(args.outlets):
        Outlet(engine)

    service = SimulationService(engine)
    players = service.create_players(args.players_per_strategy)
    report = service.run(players, args.draws)
    logger.info("Simulated %d draws with %d players", len(report.draws), report.players)

    for draw in report.draws:
        print(format_draw(draw))
        print()

    print(format_ledger(report.operator_balance, report.treasury_income, report.treasury_subsidies))
    print()

    print("Millionaires:")
    if not report.millionaires:
        print("nobody became a millionaire :(")
    for player in report.millionaires:
        print(player.personal_info)
        print(f"Balance: {cents_to_string(player.balance)}")
        if args.show_tickets:
            for ticket in player.tickets:
                print(format_ticket(ticket))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
