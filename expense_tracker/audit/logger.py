"""
Audit Logger

DESIGN DECISION: Every mutation of the expense collection is logged, and
so is every silent repair made while loading persisted data (dropped
fragments, seed fallback, storage errors). The expense core never fails
loudly, so the log is the only place those repairs become visible.

The audit logger:
- Is synchronous, like the rest of the core
- Gracefully handles failures (doesn't crash the app if logging fails)
"""

import logging
from typing import Any, Callable, Optional

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(debug: bool = False) -> None:
    """Route structlog output through the stdlib root logger."""
    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if debug else logging.INFO,
    )


class AuditLogger:
    """
    Central audit logging service.

    Writes AuditEvents to the structured local log at their severity.
    """

    def __init__(self, logger: Optional[Any] = None):
        """
        Initialize audit logger.

        Args:
            logger: Bound logger to write to. Defaults to a structlog logger.
        """
        self._logger = logger or structlog.get_logger("expense_tracker.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Returns True if the event was written.
        """
        return self._write(event.severity, "audit_event", **event.to_log_dict())

    def _write(self, severity: AuditSeverity, name: str, /, **fields: Any) -> bool:
        try:
            if severity == AuditSeverity.ERROR:
                self._logger.error(name, **fields)
            elif severity == AuditSeverity.WARNING:
                self._logger.warning(name, **fields)
            elif severity == AuditSeverity.DEBUG:
                self._logger.debug(name, **fields)
            else:
                self._logger.info(name, **fields)
        except Exception:
            # A broken log sink must never break the expense flow
            return False

        return True

    def _emit(self, build: Callable[..., AuditEvent], **kwargs: Any) -> bool:
        """Build an event and log it; a bad event is reported, never raised."""
        try:
            event = build(**kwargs)
        except Exception as e:
            self._write(
                AuditSeverity.ERROR,
                "audit_event_build_failed",
                builder=getattr(build, "__name__", repr(build)),
                error=str(e)[:500],
            )
            return False
        return self.log(event)

    def log_record_created(self, record_id: str, category: str, amount: str) -> None:
        """Log expense creation."""
        self._emit(
            AuditEventBuilder.record_created,
            record_id=record_id,
            category=category,
            amount=amount,
        )

    def log_creation_rejected(self, issues: list[dict]) -> None:
        """Log rejected add-form input."""
        self._emit(AuditEventBuilder.creation_rejected, issues=issues)

    def log_record_deleted(self, record_id: str) -> None:
        self._emit(AuditEventBuilder.record_deleted, record_id=record_id)

    def log_collection_loaded(self, count: int, dropped: int) -> None:
        self._emit(AuditEventBuilder.collection_loaded, count=count, dropped=dropped)

    def log_collection_saved(self, count: int) -> None:
        self._emit(AuditEventBuilder.collection_saved, count=count)

    def log_seed_used(self, count: int) -> None:
        self._emit(AuditEventBuilder.seed_used, count=count)

    def log_fragment_dropped(self, fragment: str) -> None:
        """Log a persisted fragment that could not be parsed."""
        self._emit(AuditEventBuilder.fragment_dropped, fragment=fragment)

    def log_storage_error(self, operation: str, error_message: str) -> None:
        """Log a storage backend failure that was degraded."""
        self._emit(
            AuditEventBuilder.storage_error,
            operation=operation,
            error_message=error_message,
        )
