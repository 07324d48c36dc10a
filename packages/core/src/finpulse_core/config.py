"""Configuration system for Finpulse.

This module provides Pydantic Settings-based configuration with environment
variable support. Defaults come from ``standards``; every policy
number can be overridden.

Usage:
    from finpulse_core.config import FinpulseConfig

    # Load from environment variables and .env file
    config = FinpulseConfig()

    # Access policy settings
    print(config.policy.on_track_tolerance)
    print(config.policy.weights.max_points)
"""

import logging
import sys
from decimal import Decimal
from enum import Enum

import structlog
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import standards
from .exceptions import ConfigurationError


class CategoryMatching(str, Enum):
    """How budget category names are compared with transaction categories."""

    EXACT = "exact"  # case-sensitive string equality
    NORMALIZED = "normalized"  # surrounding whitespace stripped, case-folded

    def key(self, name: str) -> str:
        """Comparison key for a category name under this mode."""
        if self is CategoryMatching.NORMALIZED:
            return name.strip().casefold()
        return name


class HealthScoreWeights(BaseModel):
    """Point table for the composite health score.

    Tiers are (threshold, points) pairs checked from the first to the last;
    the first threshold the metric reaches wins.
    """

    savings_rate_max: int = Field(default=standards.SAVINGS_RATE_MAX_POINTS, ge=0)
    savings_rate_tiers: tuple[tuple[Decimal, int], ...] = standards.SAVINGS_RATE_TIERS

    net_income_max: int = Field(default=standards.NET_INCOME_MAX_POINTS, ge=0)
    net_income_deficit_floor: Decimal = standards.NET_INCOME_DEFICIT_FLOOR
    net_income_deficit_points: int = Field(default=standards.NET_INCOME_DEFICIT_POINTS, ge=0)

    target_progress_max: int = Field(default=standards.TARGET_PROGRESS_MAX_POINTS, ge=0)
    target_progress_tiers: tuple[tuple[Decimal, int], ...] = standards.TARGET_PROGRESS_TIERS

    budget_adherence_max: int = Field(default=standards.BUDGET_ADHERENCE_MAX_POINTS, ge=0)
    budget_partial_points: int = Field(default=standards.BUDGET_PARTIAL_POINTS, ge=0)
    budget_over_ratio_limit: Decimal = Field(default=standards.BUDGET_OVER_RATIO_LIMIT, ge=0)

    trend_max: int = Field(default=standards.TREND_MAX_POINTS, ge=0)
    trend_decreasing_points: int = Field(default=standards.TREND_DECREASING_POINTS, ge=0)
    trend_stable_points: int = Field(default=standards.TREND_STABLE_POINTS, ge=0)
    trend_increasing_points: int = Field(default=standards.TREND_INCREASING_POINTS, ge=0)

    @field_validator("savings_rate_tiers", "target_progress_tiers")
    @classmethod
    def validate_tiers(cls, v: tuple[tuple[Decimal, int], ...]) -> tuple[tuple[Decimal, int], ...]:
        """Tiers must be ordered from the highest threshold down."""
        thresholds = [threshold for threshold, _ in v]
        if thresholds != sorted(thresholds, reverse=True):
            raise ValueError("Tiers must be ordered by descending threshold")
        return v

    @property
    def max_points(self) -> int:
        """Sum of the maximum achievable points of every factor."""
        return (
            self.savings_rate_max
            + self.net_income_max
            + self.target_progress_max
            + self.budget_adherence_max
            + self.trend_max
        )


class AnalysisPolicy(BaseSettings):
    """Thresholds used by the analysis stages.

    Environment Variables:
        FINPULSE_POLICY_ON_TRACK_TOLERANCE: Share of expected progress needed to be on track
        FINPULSE_POLICY_LOW_SAVINGS_RATE: Savings rate (%) below which savings are flagged
        FINPULSE_POLICY_STRONG_SAVINGS_RATE: Savings rate (%) above which it is a strength
        FINPULSE_POLICY_BUDGET_WARNING_RATIO: Budget share above which a category is near its limit
        FINPULSE_POLICY_NEEDS_FALLBACK_RATIO: Share of unclassified spend counted as needs
        FINPULSE_POLICY_CATEGORY_MATCHING: exact or normalized
        FINPULSE_POLICY_BUDGET_SPEND_IN_PERIOD_ONLY: Limit budget spend to the budget month
    """

    model_config = SettingsConfigDict(
        env_prefix="FINPULSE_POLICY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    on_track_tolerance: Decimal = Field(
        default=standards.ON_TRACK_TOLERANCE,
        ge=0,
        le=1,
        description="Fraction of linearly expected progress that still counts as on track",
    )
    low_savings_rate: Decimal = Field(
        default=standards.LOW_SAVINGS_RATE,
        description="Savings rate (%) below which an increase is recommended",
    )
    strong_savings_rate: Decimal = Field(
        default=standards.STRONG_SAVINGS_RATE,
        description="Savings rate (%) above which savings count as a strength",
    )
    budget_warning_ratio: Decimal = Field(
        default=standards.BUDGET_WARNING_RATIO,
        ge=0,
        le=1,
        description="Spent/budget ratio above which a category is close to its limit",
    )
    needs_fallback_ratio: Decimal = Field(
        default=standards.NEEDS_FALLBACK_RATIO,
        ge=0,
        le=1,
        description="Share of unclassified expense counted as needs",
    )
    needs_keywords: tuple[str, ...] = standards.NEEDS_KEYWORDS
    wants_keywords: tuple[str, ...] = standards.WANTS_KEYWORDS
    category_matching: CategoryMatching = Field(
        default=CategoryMatching.EXACT,
        description="How budget categories are matched to transaction categories",
    )
    budget_spend_in_period_only: bool = Field(
        default=False,
        description="Compare budgets only with expenses dated in the budget month",
    )
    weights: HealthScoreWeights = Field(default_factory=HealthScoreWeights)


class FinpulseConfig(BaseSettings):
    """Root configuration for Finpulse.

    Environment Variables:
        FINPULSE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        FINPULSE_CURRENCY_SYMBOL: Symbol used in report text

    Example:
        config = FinpulseConfig(
            currency_symbol="$",
            policy=AnalysisPolicy(on_track_tolerance=Decimal("0.9")),
        )
    """

    model_config = SettingsConfigDict(
        env_prefix="FINPULSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    currency_symbol: str = Field(
        default=standards.DEFAULT_CURRENCY_SYMBOL,
        description="Currency symbol used in summary and recommendation text",
    )

    policy: AnalysisPolicy = Field(default_factory=AnalysisPolicy)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @field_validator("currency_symbol")
    @classmethod
    def validate_currency_symbol(cls, v: str) -> str:
        """Currency symbol cannot be blank."""
        if not v or not v.strip():
            raise ValueError("Currency symbol cannot be empty")
        return v.strip()


def load_config(**overrides) -> FinpulseConfig:
    """Build a FinpulseConfig, converting validation failures to ConfigurationError."""
    try:
        return FinpulseConfig(**overrides)
    except PydanticValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first["loc"])
        raise ConfigurationError(
            f"Invalid configuration: {first['msg']}",
            setting=key,
            value=first.get("input"),
            details={"error_count": e.error_count()},
        ) from e


def configure_logging(level: str = "INFO") -> None:
    """Send structlog output to stderr, dropping events below ``level``."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
