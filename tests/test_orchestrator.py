"""Tests for the tracker facade and the session state."""

from datetime import date
from decimal import Decimal
from itertools import count

import pytest

from expense_tracker.audit import AuditLogger
from expense_tracker.models.expense import CategoryTotal
from expense_tracker.queries import format_amount
from expense_tracker.orchestrator import (
    ExpenseSession,
    ExpenseTracker,
    View,
    create_app_components,
)
from expense_tracker.services.storage import ExpenseRepository, InMemoryPreferencesStore
from expense_tracker.validation import ExpenseValidator


class RecordingLogger:
    """Stands in for a structlog bound logger."""

    def __init__(self):
        self.lines = []

    def _record(self, level):
        return lambda event, **kw: self.lines.append((level, kw["event_type"]))

    def __getattr__(self, level):
        return self._record(level)


@pytest.fixture
def store():
    return InMemoryPreferencesStore()


@pytest.fixture
def tracker(store):
    ids = count(1)
    validator = ExpenseValidator(
        today=lambda: date(2024, 7, 2),
        id_factory=lambda: f"id-{next(ids)}",
    )
    return ExpenseTracker(ExpenseRepository(store), validator=validator)


@pytest.fixture
def session(tracker):
    session = ExpenseSession(tracker)
    session.start()
    return session


def stored_blob(store):
    return store.get_string("expense_prefs", "expenses")


class TestExpenseTracker:

    def test_load_all_first_run_is_seed(self, tracker):
        assert [r.id for r in tracker.load_all()] == ["1", "2", "3"]

    def test_create_valid(self, tracker):
        record = tracker.create("9,90", "Lazer", "Cinema")
        assert record.id == "id-1"
        assert record.amount == Decimal("9.90")
        assert record.date == "02/07/2024"

    def test_create_invalid_returns_none(self, tracker):
        assert tracker.create("0", "Lazer", "Cinema") is None

    def test_create_does_not_persist(self, tracker, store):
        tracker.create("1", "Lazer", "Cinema")
        assert stored_blob(store) is None

    def test_total_and_top_category(self, tracker):
        records = tracker.load_all()
        assert tracker.total(records) == Decimal("255.50")
        assert tracker.top_category(records) == CategoryTotal(
            category="Compras", amount=Decimal("150.00")
        )

    def test_create_is_audited(self, store):
        logger = RecordingLogger()
        tracker = ExpenseTracker(ExpenseRepository(store), audit_logger=AuditLogger(logger))
        tracker.create("1", "A", "b")
        tracker.create("", "A", "b")
        assert logger.lines == [
            ("info", "record_created"),
            ("warning", "creation_rejected"),
        ]

    def test_create_huge_amount(self, tracker):
        record = tracker.create("1e30", "Compras", "Casa")
        assert record.amount == Decimal("1e30")

    def test_create_long_category_is_audited(self, store):
        logger = RecordingLogger()
        tracker = ExpenseTracker(ExpenseRepository(store), audit_logger=AuditLogger(logger))
        record = tracker.create("10", "C" * 600, "x")
        assert record.category == "C" * 600
        assert logger.lines == [("info", "record_created")]

    def test_evaluate_returns_result_and_record(self, tracker):
        result, record = tracker.evaluate("2", "Lazer", "Cinema")
        assert result.is_valid
        assert record.amount == Decimal("2")

    def test_evaluate_rejected(self, tracker):
        result, record = tracker.evaluate("abc", "Lazer", "")
        assert record is None
        assert {i.field for i in result.issues} == {"amount", "description"}


class TestExpenseSession:

    def test_start_loads_seed(self, session):
        assert session.count == 3
        assert session.total == Decimal("255.50")
        assert session.view == View.LIST

    def test_add_appends_and_persists(self, session, store):
        record = session.add("10", "Saúde", "Remédio")
        assert session.records[-1] == record
        assert session.count == 4
        assert stored_blob(store).endswith(";;;id-1|10|Saúde|Remédio|02/07/2024")

    def test_rejected_add_changes_nothing(self, session, store):
        assert session.add("-1", "Saúde", "Remédio") is None
        assert session.count == 3
        assert stored_blob(store) is None

    def test_remove_deletes_one_and_keeps_order(self, session, store):
        assert session.remove("2") is True
        assert [r.id for r in session.records] == ["1", "3"]
        assert stored_blob(store) == (
            "1|25.50|Alimentação|Lanche|01/07/2024;;;3|150.00|Compras|Supermercado|30/06/2024"
        )

    def test_remove_unknown_id(self, session, store):
        assert session.remove("missing") is False
        assert session.count == 3
        assert stored_blob(store) is None

    def test_remove_only_first_duplicate_id(self, tracker, store):
        store.put_string(
            "expense_prefs", "expenses",
            "x|1|A|a|01/01/2024;;;y|2|B|b|01/01/2024;;;x|3|C|c|01/01/2024",
        )
        session = ExpenseSession(tracker)
        session.start()
        session.remove("x")
        assert [(r.id, r.category) for r in session.records] == [("y", "B"), ("x", "C")]

    def test_records_is_a_snapshot(self, session):
        session.records.clear()
        assert session.count == 3

    def test_top_category_updates(self, session):
        session.add("200", "Lazer", "Show")
        assert session.top_category == CategoryTotal(category="Lazer", amount=Decimal("200"))

    def test_empty_session(self, session):
        for record in session.records:
            session.remove(record.id)
        assert session.total == 0
        assert session.top_category is None

    def test_show_switches_view(self, session):
        session.show(View.TOP_CATEGORY)
        assert session.view == View.TOP_CATEGORY
        session.show("list")
        assert session.view == View.LIST

    def test_show_rejects_unknown_view(self, session):
        with pytest.raises(ValueError):
            session.show("settings")

    def test_reload_sees_persisted_state(self, session, tracker):
        session.add("5", "Outros", "Café")
        session.remove("1")

        reloaded = ExpenseSession(tracker)
        reloaded.start()
        assert [r.id for r in reloaded.records] == ["2", "3", "id-1"]

    def test_last_validation_after_rejected_add(self, session):
        assert session.last_validation is None
        session.add("0", "", "Remédio")
        assert [i.field for i in session.last_validation.issues] == ["amount", "category"]

    def test_last_validation_after_valid_add(self, session):
        session.add("3", "Saúde", "Remédio")
        assert session.last_validation.is_valid
        assert session.last_validation.issues == []

    def test_huge_persisted_amount_formats(self, tracker, store):
        store.put_string("expense_prefs", "expenses", "1|1e30|A|b|01/01/2024")
        session = ExpenseSession(tracker)
        session.start()
        assert format_amount(session.total) == "1000000000000000000000000000000.00"


class TestCreateAppComponents:

    def test_in_memory_components(self):
        tracker, session = create_app_components(use_storage=False)
        assert isinstance(tracker, ExpenseTracker)
        assert session.count == 3
