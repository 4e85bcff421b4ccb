"""
Binding Django ORM models.

This is the infrastructure layer model for bindings.
Domain entities are in activations.domain.binding.
"""
import uuid

from django.db import models


class SerialSlot(models.Model):
    """
    Per-serial device counter.

    ``device_count`` is only ever incremented through a conditional
    UPDATE so that concurrent binds cannot exceed the device limit.
    """

    serial_no = models.CharField(max_length=255, primary_key=True)
    device_count = models.PositiveSmallIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "activation_serials"

    def __str__(self):
        return f"{self.serial_no} ({self.device_count} devices)"


class Binding(models.Model):
    """
    Represents a device bound to a product serial.
    Consumes one of the serial's device slots.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    serial_no = models.CharField(max_length=255, db_index=True)
    machine_id = models.CharField(max_length=255, help_text="Opaque device identifier")
    client_address = models.CharField(max_length=64, blank=True, default="")
    client_os = models.CharField(max_length=255, blank=True, default="")
    client_time = models.CharField(max_length=64, blank=True, default="")
    last_update_time = models.DateTimeField()

    class Meta:
        db_table = "activation_bindings"
        unique_together = [["serial_no", "machine_id"]]
        ordering = ["serial_no", "last_update_time"]

    def clean(self):
        """Validate binding fields."""
        from django.core.exceptions import ValidationError

        if not self.serial_no or not self.serial_no.strip():
            raise ValidationError("Serial number cannot be empty")
        if not self.machine_id or not self.machine_id.strip():
            raise ValidationError("Machine ID cannot be empty")

    def __str__(self):
        return f"{self.serial_no} @ {self.machine_id}"
