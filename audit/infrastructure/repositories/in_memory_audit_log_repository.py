"""
In-memory implementation of AuditLogRepository port.
"""

from typing import List

from audit.domain.entries import AuditEntry
from audit.ports.audit_log_repository import AuditLogRepository


class InMemoryAuditLogRepository(AuditLogRepository):
    """Keeps appended entries in a list, in append order."""

    def __init__(self):
        self.entries: List[AuditEntry] = []

    async def append(self, entry: AuditEntry) -> None:
        self.entries.append(entry)

    def for_serial(self, serial_no: str) -> List[AuditEntry]:
        """Entries recorded for one serial."""
        return [entry for entry in self.entries if entry.serial_no == serial_no]
