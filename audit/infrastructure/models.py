"""
Audit log Django ORM model.

Rows are written once and never changed; the model refuses
updates and deletes.
"""

from django.db import models


class ImmutableAuditEntryError(Exception):
    """Raised on an attempt to modify or delete an audit log row."""


class AuditLogEntry(models.Model):
    """One activation decision as recorded in the audit log."""

    KIND_CHOICES = [
        ("add", "Add"),
        ("update", "Update"),
        ("conflict", "Conflict"),
        ("failure", "Failure"),
    ]
    OPERATION_CHOICES = [
        ("Add", "Add"),
        ("Update", "Update"),
    ]

    id = models.BigAutoField(primary_key=True)
    serial_no = models.CharField(max_length=255, blank=True, db_index=True)
    timestamp = models.BigIntegerField(help_text="Milliseconds since the Unix epoch (UTC)")
    machine_id = models.CharField(max_length=255, blank=True)
    kind = models.CharField(max_length=16, choices=KIND_CHOICES)
    operation = models.CharField(max_length=16, choices=OPERATION_CHOICES)
    description = models.TextField(blank=True, default="")
    client_time = models.CharField(max_length=64, blank=True, default="")
    client_address = models.CharField(max_length=64, blank=True, default="")
    client_os = models.CharField(max_length=255, blank=True, default="")
    client_machine = models.CharField(max_length=255, blank=True, default="")
    client_user = models.CharField(max_length=255, blank=True, default="")
    details = models.JSONField(default=dict, blank=True)
    recorded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "activation_audit_log"
        unique_together = [["serial_no", "timestamp"]]
        ordering = ["serial_no", "timestamp"]
        indexes = [
            models.Index(fields=["serial_no", "timestamp"]),
            models.Index(fields=["kind"]),
        ]

    def save(self, *args, **kwargs):
        """Insert only; existing rows are immutable."""
        if not self._state.adding:
            raise ImmutableAuditEntryError("Audit log entries cannot be modified")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ImmutableAuditEntryError("Audit log entries cannot be deleted")

    def __str__(self):
        return f"{self.serial_no} {self.operation} @ {self.timestamp}"
