"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any, Mapping

from lottery.errors import InvalidInputError


def _env_int(name: str, default: int | None) -> int | None:
    """Read an integer environment variable, falling back to ``default``."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class SettlementRules:
    """Money constants of the draw algorithm. All amounts are in cents."""

    bet_price: int = 3_00
    prize_share_pct: int = 51
    first_grade_pct: int = 44
    second_grade_pct: int = 8
    min_first_grade_pool: int = 2_000_000_00
    fourth_grade_prize: int = 24_00
    min_third_grade_prize: int = 36_00
    taxed_prize_threshold: int = 2280_00
    sales_tax_pct: int = 20
    prize_tax_pct: int = 10

    def __post_init__(self) -> None:
        bad = [f.name for f in fields(self) if int(getattr(self, f.name)) <= 0]
        if bad:
            raise InvalidInputError(
                message="Settlement rules must be positive",
                details={name: ["Must be > 0"] for name in bad},
            )
        for name in ("prize_share_pct", "sales_tax_pct", "prize_tax_pct"):
            if getattr(self, name) > 100:
                raise InvalidInputError(
                    message="Settlement rules out of range",
                    details={name: ["Must be <= 100"]},
                )
        if self.first_grade_pct + self.second_grade_pct > 100:
            raise InvalidInputError(
                message="Settlement rules out of range",
                details={"second_grade_pct": ["Grade shares must not exceed 100"]},
            )


DEFAULT_RULES = SettlementRules()

_RULE_ENV = {
    "bet_price": "LOTTERY_BET_PRICE",
    "prize_share_pct": "LOTTERY_PRIZE_SHARE_PCT",
    "first_grade_pct": "LOTTERY_FIRST_GRADE_PCT",
    "second_grade_pct": "LOTTERY_SECOND_GRADE_PCT",
    "min_first_grade_pool": "LOTTERY_MIN_FIRST_GRADE_POOL",
    "fourth_grade_prize": "LOTTERY_FOURTH_GRADE_PRIZE",
    "min_third_grade_prize": "LOTTERY_MIN_THIRD_GRADE_PRIZE",
    "taxed_prize_threshold": "LOTTERY_TAXED_PRIZE_THRESHOLD",
}


def resolve_rule_overrides() -> dict[str, int]:
    """Collect settlement rule overrides from ``LOTTERY_*`` env vars."""

    overrides: dict[str, int] = {}
    for field_name, env_name in _RULE_ENV.items():
        value = _env_int(env_name, None)
        if value is not None:
            overrides[field_name] = value
    return overrides


def rules_from_config(config: Mapping[str, Any]) -> SettlementRules:
    """Build :class:`SettlementRules` from env overrides and ``RULE_OVERRIDES``.

    Explicit ``RULE_OVERRIDES`` entries win over environment variables.
    """

    overrides = resolve_rule_overrides()
    overrides.update(config.get("RULE_OVERRIDES") or {})
    return SettlementRules(**overrides)


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Simulation
    LOTTERY_SEED: int | None = _env_int("LOTTERY_SEED", None)
    LOTTERY_OUTLETS: int = _env_int("LOTTERY_OUTLETS", 10) or 0
    LOTTERY_TALLY_WORKERS: int = _env_int("LOTTERY_TALLY_WORKERS", 1) or 0

    RULE_OVERRIDES: Mapping[str, int] | None = None


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


@dataclass(frozen=True)
class TestingConfig(BaseConfig):
    """Configuration for the test suite: fixed seed, few outlets."""

    TESTING: bool = True
    LOTTERY_SEED: int | None = 1234
    LOTTERY_OUTLETS: int = 3


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
