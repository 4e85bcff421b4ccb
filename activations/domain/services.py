"""
Activation domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

from enum import Enum
from typing import Optional, Sequence

from activations.domain.binding import Binding

MAX_DEVICES_PER_SERIAL = 2


class BindingAction(Enum):
    """What the policy decided to do with a bind request."""

    ADD = "add"
    UPDATE = "update"
    REJECT = "reject"

    def __str__(self) -> str:
        return self.value


class BindingPolicy:
    """Domain service deciding how a device may bind to a serial."""

    max_devices = MAX_DEVICES_PER_SERIAL

    @staticmethod
    def find_binding(bindings: Sequence[Binding], machine_id: str) -> Optional[Binding]:
        """
        Find the binding held by a device.

        Args:
            bindings: Current bindings of a serial
            machine_id: Device identifier

        Returns:
            Matching Binding or None
        """
        for binding in bindings:
            if binding.belongs_to(machine_id):
                return binding
        return None

    @classmethod
    def has_free_slot(cls, bindings: Sequence[Binding]) -> bool:
        """Check whether another device may still bind."""
        return len(bindings) < cls.max_devices

    @classmethod
    def plan(cls, bindings: Sequence[Binding], machine_id: str) -> BindingAction:
        """
        Decide the action for a device against a snapshot of bindings.

        A device that already holds a binding is always allowed to update it,
        regardless of how many devices are bound. More than the maximum
        number of bindings is treated the same as exactly the maximum.

        Args:
            bindings: Current bindings of the serial
            machine_id: Requesting device identifier

        Returns:
            BindingAction to perform
        """
        if cls.find_binding(bindings, machine_id) is not None:
            return BindingAction.UPDATE
        if cls.has_free_slot(bindings):
            return BindingAction.ADD
        return BindingAction.REJECT
