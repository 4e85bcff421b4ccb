"""
Binding repository port (interface).

This defines the contract for binding persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from activations.domain.binding import Binding


class BindingRepository(ABC):
    """
    Abstract repository for Binding entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    Adding a device is a conditional write: implementations must make the
    capacity check and the insert a single atomic step.

    Writes accept a ``deadline`` on the ``time.monotonic()`` clock. A write
    that cannot commit before the deadline must leave nothing behind and
    raise ``StoreTimeoutError``.
    """

    @abstractmethod
    async def find_by_serial(self, serial_no: str) -> List[Binding]:
        """
        Find all bindings for a serial.

        Args:
            serial_no: Product serial number

        Returns:
            List of Binding entities (possibly empty)
        """
        pass

    @abstractmethod
    async def add_if_capacity(
        self, binding: Binding, max_devices: int, deadline: Optional[float] = None
    ) -> bool:
        """
        Insert a binding only if fewer than ``max_devices`` are bound.

        Args:
            binding: New binding for a device not yet bound to the serial
            max_devices: Device limit for the serial
            deadline: Monotonic time by which the write must commit

        Returns:
            True if the binding was stored, False if no slot was free

        Raises:
            DuplicateBindingError: If the device is already bound to the serial
            StoreTimeoutError: If the deadline passed; nothing was written
            StoreError: If the store cannot complete the write
        """
        pass

    @abstractmethod
    async def update(self, binding: Binding, deadline: Optional[float] = None) -> Binding:
        """
        Overwrite an existing binding in place.

        Args:
            binding: Binding carrying the new metadata
            deadline: Monotonic time by which the write must commit

        Returns:
            Stored binding

        Raises:
            BindingNotFoundError: If the pair is not bound
            StoreTimeoutError: If the deadline passed; nothing was written
            StoreError: If the store cannot complete the write
        """
        pass
