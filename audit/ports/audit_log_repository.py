"""
Audit log repository port (interface).

The audit log is append-only: there is no read, update or delete
operation in this contract.
"""
from abc import ABC, abstractmethod

from audit.domain.entries import AuditEntry


class AuditLogRepository(ABC):
    """Abstract append-only store for audit entries."""

    @abstractmethod
    async def append(self, entry: AuditEntry) -> None:
        """
        Append an entry to the log.

        Args:
            entry: Audit entry to persist

        Raises:
            StoreError: If the entry could not be written
        """
        pass
