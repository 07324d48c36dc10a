"""Tests for the needs versus wants split."""

from decimal import Decimal

import pytest

from finpulse_core.classification import (
    SpendingBucket,
    classify_category,
    classify_needs_wants,
)


class TestClassifyCategory:
    """Tests for keyword matching."""

    @pytest.mark.parametrize(
        ("category", "expected"),
        [
            ("Rent", SpendingBucket.NEEDS),
            ("rent", SpendingBucket.NEEDS),
            ("Bills & Utilities", SpendingBucket.NEEDS),
            ("Healthcare", SpendingBucket.NEEDS),
            ("Food & Dining", SpendingBucket.WANTS),
            ("Online Shopping", SpendingBucket.WANTS),
            ("Travel", SpendingBucket.WANTS),
            ("Other Expenses", None),
        ],
    )
    def test_default_keywords(self, category, expected):
        assert classify_category(category) is expected

    def test_category_inside_keyword(self):
        """A short category contained in a keyword still matches."""
        assert classify_category("Health") is SpendingBucket.NEEDS

    def test_needs_win_over_wants(self):
        assert classify_category("Rent Travel") is SpendingBucket.NEEDS

    def test_custom_keywords(self):
        assert classify_category(
            "Gym", needs_keywords=("gym",), wants_keywords=()
        ) is SpendingBucket.NEEDS


class TestClassifyNeedsWants:
    """Tests for the aggregate split."""

    def test_matched_only(self):
        result = classify_needs_wants([("Rent", Decimal("750")), ("Shopping", Decimal("250"))])

        assert result.needs == Decimal("750.00")
        assert result.wants == Decimal("250.00")
        assert result.needs_percentage == 75
        assert result.wants_percentage == 25

    def test_unmatched_split_by_fallback(self):
        result = classify_needs_wants([("Misc", Decimal("100"))])

        assert result.needs == Decimal("70.00")
        assert result.wants == Decimal("30.00")
        assert result.needs_percentage == 70
        assert result.wants_percentage == 30

    def test_custom_fallback_ratio(self):
        result = classify_needs_wants(
            [("Misc", Decimal("100"))], fallback_needs_ratio=Decimal("0.5")
        )
        assert result.needs_percentage == 50

    def test_each_category_counted_once(self):
        """A category matching both lists is counted as needs only."""
        result = classify_needs_wants([("Rent Travel", Decimal("100"))])
        assert result.needs == Decimal("100.00")
        assert result.wants == Decimal("0.00")

    def test_percentages_sum_to_100(self):
        result = classify_needs_wants([
            ("Rent", Decimal("1")),
            ("Shopping", Decimal("1")),
            ("Travel", Decimal("1")),
        ])
        assert result.needs_percentage == 33
        assert result.needs_percentage + result.wants_percentage == 100

    def test_no_spend(self):
        result = classify_needs_wants([])

        assert result.needs == Decimal("0")
        assert result.wants == Decimal("0")
        assert result.needs_percentage == 0
        assert result.wants_percentage == 0
