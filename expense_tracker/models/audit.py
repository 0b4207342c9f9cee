"""
Audit Models for Expense Tracker

Every mutation of the expense collection, and every time persisted data
is silently repaired on load, produces an audit event. Events are only
written to the structured log; they are never persisted next to the
expenses themselves.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Creation workflow
    RECORD_CREATED = "record_created"
    CREATION_REJECTED = "creation_rejected"
    RECORD_DELETED = "record_deleted"

    # Persistence
    COLLECTION_LOADED = "collection_loaded"
    COLLECTION_SAVED = "collection_saved"
    SEED_USED = "seed_used"
    FRAGMENT_DROPPED = "fragment_dropped"
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'expense', 'collection')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


MAX_TEXT_LENGTH = 200


def clip(text: str, limit: int = MAX_TEXT_LENGTH) -> str:
    """Cut user-supplied text so it always fits an event description."""
    return text[:limit]


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.record_created(record_id, category, "25.50")
        event = AuditEventBuilder.fragment_dropped(fragment)
    """

    @staticmethod
    def record_created(
        record_id: str,
        category: str,
        amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_CREATED,
            entity_type="expense",
            entity_id=record_id,
            description=f"Expense created: {clip(category)} - {clip(amount)}",
            details={
                "category": clip(category),
                "amount": clip(amount),
            },
            is_user_action=True,
        )

    @staticmethod
    def creation_rejected(issues: list[dict]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CREATION_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="expense",
            description=f"Expense rejected with {len(issues)} issues",
            details={
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def record_deleted(record_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RECORD_DELETED,
            entity_type="expense",
            entity_id=record_id,
            description="Expense deleted",
            is_user_action=True,
        )

    @staticmethod
    def collection_loaded(count: int, dropped: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COLLECTION_LOADED,
            entity_type="collection",
            description=f"Loaded {count} expenses",
            details={
                "count": count,
                "dropped": dropped,
            },
        )

    @staticmethod
    def collection_saved(count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COLLECTION_SAVED,
            entity_type="collection",
            description=f"Saved {count} expenses",
            details={
                "count": count,
            },
        )

    @staticmethod
    def seed_used(count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SEED_USED,
            entity_type="collection",
            description="No persisted expenses found, using the seed set",
            details={
                "count": count,
            },
        )

    @staticmethod
    def fragment_dropped(fragment: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FRAGMENT_DROPPED,
            severity=AuditSeverity.WARNING,
            entity_type="collection",
            description="Dropped unparseable expense fragment",
            details={
                "fragment": clip(fragment),
            },
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"Storage error during {clip(operation)}",
            error_message=clip(error_message, 1000),
            details={
                "operation": clip(operation),
            },
        )
