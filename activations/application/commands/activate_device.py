"""
ActivationRequest command.

Command to bind a device to a product serial.
"""

from dataclasses import dataclass

from core.domain.value_objects import ClientContext


@dataclass
class ActivationRequest:
    """Command to bind a device to a serial."""

    serial_no: str
    machine_id: str
    client_time: str = ""
    client_address: str = ""
    os_name: str = ""
    os_version: str = ""
    machine_name: str = ""
    user_name: str = ""

    @property
    def client(self) -> ClientContext:
        """Descriptive client metadata carried by the request."""
        return ClientContext(
            client_time=self.client_time or "",
            client_address=self.client_address or "",
            os_name=self.os_name or "",
            os_version=self.os_version or "",
            machine_name=self.machine_name or "",
            user_name=self.user_name or "",
        )
