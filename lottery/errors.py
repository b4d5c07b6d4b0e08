"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None

    def __str__(self) -> str:
        return self.message


class InvalidInputError(AppError):
    """Malformed numbers, slips, configuration values or draw references."""

    def __init__(self, message: str = "Invalid input", details: Any | None = None) -> None:
        super().__init__(code="invalid_input", message=message, status_code=400, details=details)


class UnauthorizedError(AppError):
    """Ticket presented at an outlet that did not sell it."""

    def __init__(self, message: str = "Unauthorized", details: Any | None = None) -> None:
        super().__init__(code="unauthorized", message=message, status_code=403, details=details)


class AlreadyClaimedError(AppError):
    """Ticket prize has already been paid out."""

    def __init__(self, message: str = "Already claimed", details: Any | None = None) -> None:
        super().__init__(code="already_claimed", message=message, status_code=409, details=details)


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)
