"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass

MAX_IDENTIFIER_LENGTH = 255


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


def _check_identifier(value: str, label: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{label} cannot be empty")
    if len(value) > MAX_IDENTIFIER_LENGTH:
        raise ValueError(f"{label} too long")


@dataclass(frozen=True)
class SerialNumber(ValueObject):
    """Product serial number, the partition key for bindings and audit entries."""

    value: str

    def __post_init__(self):
        """Validate serial number."""
        _check_identifier(self.value, "Serial number")

    def __str__(self) -> str:
        """Return serial as string."""
        return self.value


@dataclass(frozen=True)
class MachineId(ValueObject):
    """Opaque device identifier."""

    value: str

    def __post_init__(self):
        """Validate machine identifier."""
        _check_identifier(self.value, "Machine ID")

    def __str__(self) -> str:
        """Return machine ID as string."""
        return self.value


@dataclass(frozen=True)
class ClientContext(ValueObject):
    """
    Descriptive metadata reported by (or observed about) the requesting client.

    None of these fields carry semantic constraints; they are captured
    for bindings and audit entries only.
    """

    client_time: str = ""
    client_address: str = ""
    os_name: str = ""
    os_version: str = ""
    machine_name: str = ""
    user_name: str = ""

    @property
    def client_os(self) -> str:
        """OS name and version as a single string."""
        return f"{self.os_name} {self.os_version}".strip()
