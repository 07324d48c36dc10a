"""Needs versus wants split of expense categories."""

from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Sequence

from .models import NeedsVsWants
from .money import ZERO, percentage, round_money, round_whole
from .standards import NEEDS_FALLBACK_RATIO, NEEDS_KEYWORDS, WANTS_KEYWORDS


class SpendingBucket(str, Enum):
    NEEDS = "needs"
    WANTS = "wants"


def _matches(category: str, keywords: Iterable[str]) -> bool:
    name = category.lower()
    return any(k.lower() in name or name in k.lower() for k in keywords)


def classify_category(
    category: str,
    needs_keywords: Sequence[str] = NEEDS_KEYWORDS,
    wants_keywords: Sequence[str] = WANTS_KEYWORDS,
) -> Optional[SpendingBucket]:
    """Bucket for a category name, or None when no keyword matches.

    Matching is case-insensitive substring containment in either
    direction. Needs keywords win when both lists match.
    """
    if _matches(category, needs_keywords):
        return SpendingBucket.NEEDS
    if _matches(category, wants_keywords):
        return SpendingBucket.WANTS
    return None


def classify_needs_wants(
    category_totals: Iterable[tuple[str, Decimal]],
    needs_keywords: Sequence[str] = NEEDS_KEYWORDS,
    wants_keywords: Sequence[str] = WANTS_KEYWORDS,
    fallback_needs_ratio: Decimal = NEEDS_FALLBACK_RATIO,
) -> NeedsVsWants:
    """
    Split expense spend into needs and wants.

    Args:
        category_totals: (category, amount) pairs for expenses
        needs_keywords: Keywords marking essential categories
        wants_keywords: Keywords marking discretionary categories
        fallback_needs_ratio: Share of unmatched spend counted as needs;
            the rest counts as wants

    Returns:
        NeedsVsWants with amounts and whole-number percentages
    """
    needs = ZERO
    wants = ZERO
    unmatched = ZERO

    for category, amount in category_totals:
        bucket = classify_category(category, needs_keywords, wants_keywords)
        if bucket is SpendingBucket.NEEDS:
            needs += amount
        elif bucket is SpendingBucket.WANTS:
            wants += amount
        else:
            unmatched += amount

    needs += unmatched * fallback_needs_ratio
    wants += unmatched * (Decimal("1") - fallback_needs_ratio)
    total = needs + wants

    if total == 0:
        return NeedsVsWants(needs=round_money(needs), wants=round_money(wants))

    needs_pct = round_whole(percentage(needs, total))
    return NeedsVsWants(
        needs=round_money(needs),
        wants=round_money(wants),
        needs_percentage=needs_pct,
        wants_percentage=100 - needs_pct,
    )
