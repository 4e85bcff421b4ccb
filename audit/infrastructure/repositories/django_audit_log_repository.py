"""
Django implementation of AuditLogRepository port.
"""

import logging

from asgiref.sync import sync_to_async
from django.db import DatabaseError, IntegrityError, transaction

from audit.domain.entries import ActivationConflicted, ActivationFailed, AuditEntry
from audit.infrastructure.models import AuditLogEntry
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.exceptions import StoreError

logger = logging.getLogger(__name__)


class DjangoAuditLogRepository(AuditLogRepository):
    """
    Django ORM implementation of AuditLogRepository.

    ``(serial_no, timestamp)`` is unique. When two entries for the same serial
    land in the same millisecond, the later one is shifted forward by one
    millisecond, up to ``max_collisions`` times.
    """

    max_collisions = 5

    @staticmethod
    def _details(entry: AuditEntry) -> dict:
        if isinstance(entry, ActivationConflicted):
            return {"bound_machine_ids": list(entry.bound_machine_ids)}
        if isinstance(entry, ActivationFailed):
            return {"error_code": entry.error_code}
        return {}

    def _append(self, entry: AuditEntry) -> None:
        row = entry.to_dict()
        row["details"] = self._details(entry)
        for attempt in range(self.max_collisions + 1):
            try:
                with transaction.atomic():
                    AuditLogEntry(**row).save()  # pylint: disable=no-member
                return
            except IntegrityError as e:
                if attempt == self.max_collisions:
                    raise StoreError(f"Audit timestamp collision for {entry.serial_no}") from e
                logger.debug(
                    "Audit timestamp collision, shifting by 1ms",
                    extra={"serial_no": entry.serial_no, "timestamp_ms": row["timestamp"]},
                )
                row["timestamp"] += 1
            except DatabaseError as e:
                raise StoreError(str(e)) from e

    async def append(self, entry: AuditEntry) -> None:
        """
        Append an entry to the audit log.

        Args:
            entry: Audit entry to persist
        """
        await sync_to_async(self._append)(entry)
