"""
Activation decision DTOs for API responses.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class DecisionStatus(Enum):
    """Outcome of an activation request."""

    CREATED = "created"
    UPDATED = "updated"
    CONFLICT = "conflict"
    FAILED = "failed"

    @property
    def http_status(self) -> int:
        """HTTP status code reported to the caller."""
        return _HTTP_STATUS[self]

    def __str__(self) -> str:
        return self.value


_HTTP_STATUS = {
    DecisionStatus.CREATED: 201,
    DecisionStatus.UPDATED: 200,
    DecisionStatus.CONFLICT: 409,
    DecisionStatus.FAILED: 400,
}


@dataclass
class DecisionDTO:
    """Result of resolving an activation request."""

    status: DecisionStatus
    serial_no: str
    machine_id: str
    last_update_time: datetime
    description: Optional[str] = None

    @property
    def status_code(self) -> int:
        """HTTP status code of this decision."""
        return self.status.http_status
