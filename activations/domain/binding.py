"""
Binding domain entity.

A Binding is the persisted record that a device is currently
activated against a serial. It is independent of infrastructure.
"""

from dataclasses import dataclass, replace
from datetime import datetime

from core.domain.value_objects import ClientContext, MachineId, SerialNumber


@dataclass(frozen=True)
class Binding:
    """
    Binding domain entity.

    One instance per (serial, device) pair actually registered.
    Re-binding the same pair replaces the metadata and timestamp in place.
    """

    serial_no: SerialNumber
    machine_id: MachineId
    client_address: str
    client_os: str
    client_time: str
    last_update_time: datetime

    def __post_init__(self):
        """Validate binding entity."""
        if self.last_update_time is None:
            raise ValueError("Last update time is required")

    @classmethod
    def create(
        cls,
        serial_no: str,
        machine_id: str,
        client: ClientContext,
        now: datetime,
    ) -> "Binding":
        """
        Create a new Binding entity.

        Args:
            serial_no: Product serial number
            machine_id: Device identifier
            client: Client metadata captured at bind time
            now: Server-assigned update time (UTC)

        Returns:
            Binding entity instance
        """
        return cls(
            serial_no=SerialNumber(serial_no),
            machine_id=MachineId(machine_id),
            client_address=client.client_address,
            client_os=client.os_name,
            client_time=client.client_time,
            last_update_time=now,
        )

    def refreshed(self, client: ClientContext, now: datetime) -> "Binding":
        """
        Return a copy carrying new client metadata and update time.

        The (serial, device) identity is preserved.
        """
        return replace(
            self,
            client_address=client.client_address,
            client_os=client.os_name,
            client_time=client.client_time,
            last_update_time=now,
        )

    def belongs_to(self, machine_id: str) -> bool:
        """Check whether this binding is held by the given device."""
        return self.machine_id.value == machine_id
