"""
AuditRecorder.

Best-effort side channel that appends one entry per activation decision.
A failed append is logged and counted, never raised to the caller.
"""

import asyncio
import logging
from typing import Optional

from audit.domain.entries import AuditEntry
from audit.ports.audit_log_repository import AuditLogRepository
from core.metrics import audit_write_failures_total

logger = logging.getLogger(__name__)


class AuditRecorder:
    """Records audit entries through an AuditLogRepository."""

    def __init__(self, repository: AuditLogRepository, timeout: Optional[float] = None):
        """
        Initialize recorder.

        Args:
            repository: Append-only audit log store
            timeout: Seconds allowed for one append (None waits indefinitely)
        """
        self.repository = repository
        self.timeout = timeout

    async def record(self, entry: AuditEntry) -> None:
        """
        Append an audit entry.

        Args:
            entry: Entry describing one activation decision
        """
        try:
            await asyncio.wait_for(self.repository.append(entry), timeout=self.timeout)
        except asyncio.TimeoutError:
            audit_write_failures_total.labels(reason="timeout").inc()
            logger.error(
                "Audit append timed out after %ss",
                self.timeout,
                extra={"serial_no": entry.serial_no, "audit_kind": entry.kind.value},
            )
            return
        except Exception as e:  # pylint: disable=broad-exception-caught
            audit_write_failures_total.labels(reason=type(e).__name__).inc()
            logger.error(
                "Audit append failed: %s",
                e,
                extra={"serial_no": entry.serial_no, "audit_kind": entry.kind.value},
                exc_info=True,
            )
            return

        logger.debug(
            "Audit entry recorded",
            extra={
                "serial_no": entry.serial_no,
                "machine_id": entry.machine_id,
                "audit_kind": entry.kind.value,
                "timestamp_ms": entry.timestamp_ms,
            },
        )
