"""Tests for input document loading."""

import json
from decimal import Decimal

import pytest

from finpulse_core.exceptions import FinpulseError, ValidationError
from finpulse_core.loader import load_analysis_input, parse_analysis_input


@pytest.fixture
def document() -> dict:
    return {
        "transactions": [
            {"date": "2024-06-01", "amount": "5000", "type": "income", "category": "Salary"},
            {"date": "2024-06-03T09:15:00Z", "amount": 1500, "type": "expense", "category": "Rent"},
        ],
        "targets": [
            {"title": "Car", "targetAmount": 20000, "currentAmount": 2500, "createdAt": "2024-01-01"},
        ],
        "budgets": [
            {"categoryName": "Rent", "amount": 1500, "month": 6, "year": 2024},
        ],
    }


class TestParseAnalysisInput:
    def test_valid_document(self, document):
        data = parse_analysis_input(document)

        assert len(data.transactions) == 2
        assert data.transactions[1].amount == Decimal("1500")
        assert data.targets[0].title == "Car"
        assert data.budgets[0].month == 6

    def test_missing_sections_default_to_empty(self):
        data = parse_analysis_input({"transactions": []})
        assert data.targets == []
        assert data.budgets == []

    def test_not_an_object(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_analysis_input([1, 2, 3])
        assert exc_info.value.details["actual_type"] == "list"

    def test_invalid_field_location_reported(self, document):
        document["budgets"][0]["month"] = 13

        with pytest.raises(ValidationError) as exc_info:
            parse_analysis_input(document)

        error = exc_info.value
        assert error.location == "budgets.0.month"
        assert error.details["location"] == "budgets.0.month"
        assert error.recoverable is True
        assert "budgets.0.month" in str(error)


class TestLoadAnalysisInput:
    def test_reads_file(self, tmp_path, document):
        path = tmp_path / "input.json"
        path.write_text(json.dumps(document), encoding="utf-8")

        data = load_analysis_input(path)
        assert len(data.transactions) == 2

    def test_accepts_string_path(self, tmp_path, document):
        path = tmp_path / "input.json"
        path.write_text(json.dumps(document), encoding="utf-8")
        assert len(load_analysis_input(str(path)).budgets) == 1

    def test_missing_file(self, tmp_path):
        with pytest.raises(ValidationError) as exc_info:
            load_analysis_input(tmp_path / "absent.json")

        assert exc_info.value.recoverable is False
        assert exc_info.value.details["location"] == "path"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValidationError, match="not valid JSON"):
            load_analysis_input(path)

    def test_errors_are_finpulse_errors(self, tmp_path):
        with pytest.raises(FinpulseError):
            load_analysis_input(tmp_path / "absent.json")
