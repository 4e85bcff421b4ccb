"""
Django implementation of BindingRepository port.

This adapter converts between domain entities and Django ORM models.
"""

import time
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import DatabaseError, IntegrityError, OperationalError, connection, transaction
from django.db.models import F

from activations.domain.binding import Binding
from activations.infrastructure.models import Binding as BindingModel
from activations.infrastructure.models import SerialSlot
from activations.ports.binding_repository import BindingRepository
from core.domain.exceptions import (
    BindingNotFoundError,
    DuplicateBindingError,
    StoreError,
    StoreTimeoutError,
)
from core.domain.value_objects import MachineId, SerialNumber

# PostgreSQL SQLSTATE raised when statement_timeout cancels a query
QUERY_CANCELED = "57014"


def _check_deadline(deadline: Optional[float]) -> None:
    if deadline is not None and time.monotonic() >= deadline:
        raise StoreTimeoutError("Binding store deadline passed before commit")


def _bound_transaction(deadline: Optional[float]) -> None:
    """
    Bound the current transaction by the deadline.

    On PostgreSQL the remaining time becomes the transaction's
    ``statement_timeout``, so a stalled statement is cancelled and rolled back.
    """
    if deadline is None:
        return
    _check_deadline(deadline)
    if connection.vendor == "postgresql":
        remaining_ms = max(1, int((deadline - time.monotonic()) * 1000))
        with connection.cursor() as cursor:
            cursor.execute("SET LOCAL statement_timeout = %s", [remaining_ms])


def _store_error(error: DatabaseError) -> StoreError:
    if isinstance(error, OperationalError):
        if getattr(error.__cause__, "pgcode", None) == QUERY_CANCELED:
            return StoreTimeoutError("Binding store statement timed out")
    return StoreError(str(error))


class DjangoBindingRepository(BindingRepository):
    """
    Django ORM implementation of BindingRepository.

    New devices are admitted with a compare-and-swap on
    ``SerialSlot.device_count`` inside the same transaction as the
    binding insert, so the slot claim and the row appear together or not at all.
    Writes re-check their deadline before commit and roll back once it has passed.
    """

    def _to_domain(self, model: BindingModel) -> Binding:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Binding model

        Returns:
            Binding domain entity
        """
        return Binding(
            serial_no=SerialNumber(model.serial_no),
            machine_id=MachineId(model.machine_id),
            client_address=model.client_address,
            client_os=model.client_os,
            client_time=model.client_time,
            last_update_time=model.last_update_time,
        )

    def _find_by_serial(self, serial_no: str) -> List[Binding]:
        # pylint: disable=no-member
        models = BindingModel.objects.filter(serial_no=serial_no).order_by("last_update_time")
        return [self._to_domain(model) for model in models]

    def _add_if_capacity(
        self, binding: Binding, max_devices: int, deadline: Optional[float] = None
    ) -> bool:
        serial_no = binding.serial_no.value
        try:
            with transaction.atomic():
                _bound_transaction(deadline)
                # pylint: disable=no-member
                SerialSlot.objects.get_or_create(serial_no=serial_no)
                claimed = SerialSlot.objects.filter(
                    serial_no=serial_no, device_count__lt=max_devices
                ).update(device_count=F("device_count") + 1)
                if not claimed:
                    return False
                BindingModel.objects.create(
                    serial_no=serial_no,
                    machine_id=binding.machine_id.value,
                    client_address=binding.client_address,
                    client_os=binding.client_os,
                    client_time=binding.client_time,
                    last_update_time=binding.last_update_time,
                )
                _check_deadline(deadline)
                return True
        except IntegrityError as e:
            raise DuplicateBindingError(
                f"Machine {binding.machine_id} is already bound to serial {serial_no}"
            ) from e
        except DatabaseError as e:
            raise _store_error(e) from e

    def _update(self, binding: Binding, deadline: Optional[float] = None) -> Binding:
        try:
            with transaction.atomic():
                _bound_transaction(deadline)
                # pylint: disable=no-member
                updated = BindingModel.objects.filter(
                    serial_no=binding.serial_no.value,
                    machine_id=binding.machine_id.value,
                ).update(
                    client_address=binding.client_address,
                    client_os=binding.client_os,
                    client_time=binding.client_time,
                    last_update_time=binding.last_update_time,
                )
                if updated:
                    _check_deadline(deadline)
        except DatabaseError as e:
            raise _store_error(e) from e
        if not updated:
            raise BindingNotFoundError(
                f"No binding for machine {binding.machine_id} on serial {binding.serial_no}"
            )
        return binding

    async def find_by_serial(self, serial_no: str) -> List[Binding]:
        """
        Find all bindings for a serial.

        Args:
            serial_no: Product serial number

        Returns:
            List of Binding entities, oldest first
        """
        try:
            return await sync_to_async(self._find_by_serial)(serial_no)
        except DatabaseError as e:
            raise _store_error(e) from e

    async def add_if_capacity(
        self, binding: Binding, max_devices: int, deadline: Optional[float] = None
    ) -> bool:
        """
        Insert a binding only if the serial has a free device slot.

        Args:
            binding: New binding
            max_devices: Device limit for the serial
            deadline: Monotonic time by which the write must commit

        Returns:
            True if stored, False if every slot is taken
        """
        return await sync_to_async(self._add_if_capacity)(binding, max_devices, deadline)

    async def update(self, binding: Binding, deadline: Optional[float] = None) -> Binding:
        """
        Overwrite an existing binding in place.

        Args:
            binding: Binding carrying the new metadata
            deadline: Monotonic time by which the write must commit

        Returns:
            Stored binding
        """
        return await sync_to_async(self._update)(binding, deadline)
