"""Input data models for the financial analysis engine.

This module provides the collections the engine consumes:
- Transactions (income, expense and investment facts)
- Savings targets
- Per-category monthly budgets
- Category definitions used when provisioning a new account

All models are immutable. Field names are snake_case in Python and
camelCase on the wire; either spelling is accepted on input.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

import structlog
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..money import to_decimal

logger = structlog.get_logger()

UNCATEGORIZED = "Uncategorized"


def _coerce_amount(value: Any, field_name: str) -> Decimal:
    """Coerce a raw amount to Decimal, logging when it had to be zeroed."""
    amount = to_decimal(value)
    if amount == 0 and value is not None and not _is_literal_zero(value):
        logger.warning("malformed_amount_coerced", field=field_name, value=repr(value))
    return amount


def _is_literal_zero(value: Any) -> bool:
    try:
        return Decimal(str(value).strip()) == 0
    except ArithmeticError:
        return False


def _narrow_to_date(value: Any) -> Any:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return dt.datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    return value


class EngineModel(BaseModel):
    """Base for every engine model: frozen, camelCase on the wire."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TransactionType(str, Enum):
    """Kinds of money movement tracked by the engine."""

    INCOME = "income"
    EXPENSE = "expense"
    INVESTMENT = "investment"


class CategoryKind(str, Enum):
    """Which side of the ledger a category belongs to."""

    INCOME = "income"
    EXPENSE = "expense"


class Transaction(EngineModel):
    """A single financial transaction.

    Amounts are non-negative; the direction of the money is carried by
    ``type``. A missing or empty ``category`` is reported as
    ``"Uncategorized"``.
    """

    date: dt.date = Field(description="Calendar date of the transaction")
    amount: Decimal = Field(
        default=Decimal("0"),
        description="Non-negative amount; malformed values count as 0",
    )
    type: TransactionType = Field(description="income, expense or investment")
    category: Optional[str] = Field(
        default=None,
        description="Free-text category label",
    )
    description: Optional[str] = Field(default=None)
    target_id: Optional[int] = Field(
        default=None,
        description="Savings target an investment contributes to",
    )
    id: Optional[int] = Field(default=None)

    @property
    def category_label(self) -> str:
        """Category used for grouping, with the Uncategorized default."""
        if self.category is None or not self.category.strip():
            return UNCATEGORIZED
        return self.category

    @property
    def month_key(self) -> str:
        """Calendar month bucket, ``YYYY-MM``."""
        return f"{self.date.year:04d}-{self.date.month:02d}"

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount_to_decimal(cls, v):
        """Coerce amounts to Decimal; non-numeric values become 0."""
        return _coerce_amount(v, "transaction.amount")

    @field_validator("date", mode="before")
    @classmethod
    def narrow_datetime(cls, v):
        """Accept datetimes and ISO timestamps by keeping the date part."""
        return _narrow_to_date(v)


class Target(EngineModel):
    """A savings goal.

    Targets without a ``target_date`` still count toward totals and the
    completed count, but are left out of the on-track/behind split.
    """

    title: Optional[str] = Field(default=None)
    target_amount: Decimal = Field(description="Amount to reach")
    current_amount: Decimal = Field(
        default=Decimal("0"),
        description="Amount saved so far",
    )
    target_date: Optional[dt.date] = Field(default=None, description="Deadline")
    created_at: dt.date = Field(description="Date the target was set")
    id: Optional[int] = Field(default=None)

    @property
    def is_completed(self) -> bool:
        return self.target_amount <= self.current_amount

    @field_validator("target_amount", "current_amount", mode="before")
    @classmethod
    def coerce_amount_to_decimal(cls, v, info):
        """Coerce amounts to Decimal; non-numeric values become 0."""
        return _coerce_amount(v, f"target.{info.field_name}")

    @field_validator("target_date", "created_at", mode="before")
    @classmethod
    def narrow_datetime(cls, v):
        """Accept datetimes and ISO timestamps by keeping the date part."""
        return _narrow_to_date(v)


class Budget(EngineModel):
    """A spending ceiling for one category in one calendar month."""

    category_name: str = Field(
        description="Category label, matched against Transaction.category",
    )
    amount: Decimal = Field(default=Decimal("0"), description="Monthly ceiling")
    month: int = Field(ge=1, le=12, description="Calendar month, 1-12")
    year: int = Field(description="Calendar year")
    category_id: Optional[int] = Field(default=None)
    id: Optional[int] = Field(default=None)

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount_to_decimal(cls, v):
        """Coerce amounts to Decimal; non-numeric values become 0."""
        return _coerce_amount(v, "budget.amount")

    def covers(self, month: int, year: int) -> bool:
        """True when this budget applies to the given period."""
        return self.month == month and self.year == year


class CategoryDefinition(EngineModel):
    """A named category offered to a newly provisioned account."""

    name: str
    kind: CategoryKind


class AnalysisInput(EngineModel):
    """The three collections the engine consumes, as one document."""

    transactions: list[Transaction] = Field(default_factory=list)
    targets: list[Target] = Field(default_factory=list)
    budgets: list[Budget] = Field(default_factory=list)
