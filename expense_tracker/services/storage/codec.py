"""
Expense Blob Codec

The whole collection is persisted as one string:

    id|amount|category|description|date;;;id|amount|category|description|date

This layout is shared with existing installs and must not change.
Fields are NOT escaped. A field containing "|" or ";;;" corrupts its
record on the way back; that is a known limitation of the format.

Parsing is best-effort per record. A fragment with the wrong number of
fields or a non-numeric amount is dropped and the rest of the
collection survives.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from expense_tracker.models.expense import ExpenseRecord


FIELD_SEPARATOR = "|"
RECORD_SEPARATOR = ";;;"
FIELD_COUNT = 5


def serialize_record(record: ExpenseRecord) -> str:
    """Convert one record to its pipe-delimited form."""
    return FIELD_SEPARATOR.join([
        record.id,
        str(record.amount),
        record.category,
        record.description,
        record.date,
    ])


def deserialize_record(fragment: str) -> Optional[ExpenseRecord]:
    """
    Parse one pipe-delimited fragment.

    Returns None if the fragment does not have exactly five fields or
    its amount is not a finite number.
    """
    parts = fragment.split(FIELD_SEPARATOR)
    if len(parts) != FIELD_COUNT:
        return None

    amount = parse_decimal(parts[1])
    if amount is None:
        return None

    return ExpenseRecord(
        id=parts[0],
        amount=amount,
        category=parts[2],
        description=parts[3],
        date=parts[4],
    )


def serialize_collection(records: list[ExpenseRecord]) -> str:
    """Join every record in collection order."""
    return RECORD_SEPARATOR.join(serialize_record(r) for r in records)


def deserialize_collection(blob: str) -> tuple[list[ExpenseRecord], list[str]]:
    """
    Parse a whole blob.

    Returns:
        (records, rejected_fragments)
    """
    records = []
    rejected = []
    for fragment in blob.split(RECORD_SEPARATOR):
        record = deserialize_record(fragment)
        if record is None:
            rejected.append(fragment)
        else:
            records.append(record)
    return records, rejected


def parse_decimal(text: str) -> Optional[Decimal]:
    """Parse a finite decimal number, or return None."""
    try:
        value = Decimal(text.strip())
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    return value
