"""
In-memory implementation of BindingRepository port.

Used by tests. Bindings are kept per serial, and each serial has its own
asyncio lock so that the capacity check and the insert happen as one step.
Locks are created on first use of a serial and never released, so the store
grows without bound.
"""

import asyncio
import time
from collections import defaultdict
from typing import Dict, List, Optional

from activations.domain.binding import Binding
from activations.ports.binding_repository import BindingRepository
from core.domain.exceptions import (
    BindingNotFoundError,
    DuplicateBindingError,
    StoreTimeoutError,
)


def _check_deadline(deadline: Optional[float]) -> None:
    if deadline is not None and time.monotonic() >= deadline:
        raise StoreTimeoutError("Binding store deadline passed before the write")


class InMemoryBindingRepository(BindingRepository):
    """In-memory BindingRepository keyed by serial, then machine ID."""

    def __init__(self):
        """Initialize an empty store."""
        self._bindings: Dict[str, Dict[str, Binding]] = defaultdict(dict)
        self._locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def find_by_serial(self, serial_no: str) -> List[Binding]:
        return sorted(
            self._bindings.get(serial_no, {}).values(),
            key=lambda binding: binding.last_update_time,
        )

    async def add_if_capacity(
        self, binding: Binding, max_devices: int, deadline: Optional[float] = None
    ) -> bool:
        serial_no = binding.serial_no.value
        async with self._locks[serial_no]:
            _check_deadline(deadline)
            devices = self._bindings[serial_no]
            if binding.machine_id.value in devices:
                raise DuplicateBindingError(
                    f"Machine {binding.machine_id} is already bound to serial {serial_no}"
                )
            if len(devices) >= max_devices:
                return False
            devices[binding.machine_id.value] = binding
            return True

    async def update(self, binding: Binding, deadline: Optional[float] = None) -> Binding:
        serial_no = binding.serial_no.value
        async with self._locks[serial_no]:
            _check_deadline(deadline)
            devices = self._bindings.get(serial_no, {})
            if binding.machine_id.value not in devices:
                raise BindingNotFoundError(
                    f"No binding for machine {binding.machine_id} on serial {serial_no}"
                )
            devices[binding.machine_id.value] = binding
            return binding

    def count(self, serial_no: str) -> int:
        """Number of devices bound to a serial."""
        return len(self._bindings.get(serial_no, {}))
