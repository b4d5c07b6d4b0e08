"""State treasury ledger: taxes in, subsidies out."""

from __future__ import annotations

import logging
from threading import Lock

from lottery.errors import InvalidInputError

logger = logging.getLogger(__name__)


class Treasury:
    """Additive ledger of tax income and subsidies paid to the operator."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._income = 0
        self._subsidies = 0

    @property
    def income(self) -> int:
        return self._income

    @property
    def subsidies(self) -> int:
        return self._subsidies

    @staticmethod
    def _check(amount: int) -> int:
        if amount < 0:
            raise InvalidInputError(
                message="Invalid amount",
                details={"amount": ["Must be >= 0"]},
            )
        return int(amount)

    def receive_tax(self, amount: int) -> None:
        amount = self._check(amount)
        with self._lock:
            self._income += amount

    def give_subsidy(self, amount: int) -> None:
        """Cover an operator shortfall. There is no cap."""

        amount = self._check(amount)
        with self._lock:
            self._subsidies += amount
        logger.info("Treasury subsidy of %d cents granted", amount)

    def reset(self) -> None:
        with self._lock:
            self._income = 0
            self._subsidies = 0
