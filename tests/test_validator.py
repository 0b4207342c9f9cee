"""Tests for add-form validation and record creation."""

import re
from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.validation import ExpenseValidator, format_record_date, parse_amount


@pytest.fixture
def validator():
    return ExpenseValidator(today=lambda: date(2024, 7, 1))


class TestParseAmount:

    @pytest.mark.parametrize("raw, expected", [
        ("12.50", Decimal("12.50")),
        ("12,50", Decimal("12.50")),
        (" 7 ", Decimal("7")),
        (3, Decimal("3")),
        (5.5, Decimal("5.5")),
        (Decimal("1.25"), Decimal("1.25")),
    ])
    def test_valid(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "1,000.50", "nan", "inf", None, True])
    def test_invalid(self, raw):
        assert parse_amount(raw) is None


class TestValidate:

    def test_valid_input(self, validator):
        result = validator.validate("10", "Compras", "Pão")
        assert result.is_valid
        assert result.amount == Decimal("10")

    @pytest.mark.parametrize("amount, issue_type", [
        ("0", "not_positive"),
        ("-5", "not_positive"),
        ("abc", "not_a_number"),
        ("", "not_a_number"),
    ])
    def test_bad_amount(self, validator, amount, issue_type):
        result = validator.validate(amount, "Compras", "Pão")
        assert not result.is_valid
        assert [(i.field, i.issue_type) for i in result.issues] == [("amount", issue_type)]

    def test_missing_category_and_description(self, validator):
        result = validator.validate("10", "", None)
        assert result.error_count == 2
        assert {i.field for i in result.issues} == {"category", "description"}


class TestCreate:

    def test_create_builds_record(self, validator):
        record = validator.create("25,50", "Alimentação", "Lanche")
        assert record.amount == Decimal("25.50")
        assert record.category == "Alimentação"
        assert record.description == "Lanche"
        assert record.date == "01/07/2024"

    @pytest.mark.parametrize("amount, category, description", [
        ("0", "Compras", "Pão"),
        ("-1", "Compras", "Pão"),
        ("abc", "Compras", "Pão"),
        ("10", "", "Pão"),
        ("10", "Compras", ""),
    ])
    def test_create_rejects(self, validator, amount, category, description):
        assert validator.create(amount, category, description) is None

    def test_ids_are_unique(self):
        validator = ExpenseValidator()
        ids = {validator.create("1", "A", "b").id for _ in range(50)}
        assert len(ids) == 50

    def test_default_date_format(self):
        record = ExpenseValidator().create("1", "A", "b")
        assert re.fullmatch(r"\d{2}/\d{2}/\d{4}", record.date)

    def test_injected_id_factory(self):
        validator = ExpenseValidator(id_factory=lambda: "fixed")
        assert validator.create("1", "A", "b").id == "fixed"


class TestFormatRecordDate:

    def test_zero_padded(self):
        assert format_record_date(date(2024, 3, 5)) == "05/03/2024"


class TestEvaluate:

    def test_valid_input_returns_result_and_record(self, validator):
        result, record = validator.evaluate("3,25", "Lazer", "Cinema")
        assert result.is_valid
        assert record.amount == result.amount == Decimal("3.25")

    def test_rejected_input_returns_issues_only(self, validator):
        result, record = validator.evaluate("abc", "", "Cinema")
        assert record is None
        assert {i.field for i in result.issues} == {"amount", "category"}

    def test_one_id_per_submission(self):
        calls = []
        validator = ExpenseValidator(id_factory=lambda: calls.append(1) or "x")
        validator.create("1", "A", "b")
        assert len(calls) == 1

    def test_huge_amount_is_valid(self, validator):
        assert validator.create("1e30", "Compras", "Casa").amount == Decimal("1e30")
