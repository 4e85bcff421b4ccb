"""
Audit log entries.

Each activation decision produces exactly one entry. Entries are immutable
value objects; every outcome has its own variant carrying its own payload
instead of overloading a free-text description.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Dict, Tuple

from core.domain.clock import to_epoch_millis, truncate_to_millis
from core.domain.exceptions import CONFLICT_MESSAGE
from core.domain.value_objects import ClientContext


class AuditKind(Enum):
    """Decision outcome recorded by an entry."""

    ADD = "add"
    UPDATE = "update"
    CONFLICT = "conflict"
    FAILURE = "failure"

    def __str__(self) -> str:
        return self.value


class AuditOperation(Enum):
    """Operation column of the audit log."""

    ADD = "Add"
    UPDATE = "Update"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AuditEntry(ABC):
    """
    Base class for audit log entries.

    ``timestamp`` is a millisecond-precision UTC instant and also
    discriminates entries within a serial's log.
    """

    serial_no: str
    machine_id: str
    client: ClientContext
    timestamp: datetime

    kind: ClassVar[AuditKind]
    operation: ClassVar[AuditOperation] = AuditOperation.ADD

    def __post_init__(self):
        """Normalize the timestamp to millisecond precision."""
        object.__setattr__(self, "timestamp", truncate_to_millis(self.timestamp))

    @property
    def description(self) -> str:
        """Human-readable description; empty for successful outcomes."""
        return ""

    @property
    def timestamp_ms(self) -> int:
        return to_epoch_millis(self.timestamp)

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to a flat dictionary for persistence and logging."""
        return {
            "serial_no": self.serial_no,
            "timestamp": self.timestamp_ms,
            "machine_id": self.machine_id,
            "kind": self.kind.value,
            "operation": self.operation.value,
            "description": self.description,
            "client_time": self.client.client_time,
            "client_address": self.client.client_address,
            "client_os": self.client.client_os,
            "client_machine": self.client.machine_name,
            "client_user": self.client.user_name,
        }


@dataclass(frozen=True)
class DeviceAdded(AuditEntry):
    """A new device was bound to the serial."""

    kind: ClassVar[AuditKind] = AuditKind.ADD


@dataclass(frozen=True)
class DeviceUpdated(AuditEntry):
    """An already bound device re-registered."""

    kind: ClassVar[AuditKind] = AuditKind.UPDATE
    operation: ClassVar[AuditOperation] = AuditOperation.UPDATE


@dataclass(frozen=True)
class ActivationConflicted(AuditEntry):
    """A third device was refused because both slots are taken."""

    kind: ClassVar[AuditKind] = AuditKind.CONFLICT

    bound_machine_ids: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def description(self) -> str:
        return CONFLICT_MESSAGE


@dataclass(frozen=True)
class ActivationFailed(AuditEntry):
    """The request could not be resolved."""

    kind: ClassVar[AuditKind] = AuditKind.FAILURE

    reason: str = ""
    error_code: str = ""

    @property
    def description(self) -> str:
        return self.reason
