"""
Django admin configuration for audit app.
"""

from django.contrib import admin
from django.utils.html import format_html

from audit.infrastructure.models import AuditLogEntry


@admin.register(AuditLogEntry)
class AuditLogEntryAdmin(admin.ModelAdmin):
    """Read-only admin interface for the audit log."""

    list_display = [
        "serial_no",
        "timestamp",
        "machine_id",
        "operation",
        "kind_display",
        "client_address",
        "recorded_at",
    ]
    list_filter = ["kind", "operation", "recorded_at"]
    search_fields = ["serial_no", "machine_id", "client_address", "client_user"]
    ordering = ["-recorded_at"]

    def kind_display(self, obj):
        """Display outcome with color."""
        colors = {"add": "green", "update": "blue", "conflict": "orange", "failure": "red"}
        return format_html(
            '<span style="color: {}; font-weight: bold;">{}</span>',
            colors.get(obj.kind, "black"),
            obj.get_kind_display(),
        )

    kind_display.short_description = "Outcome"

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
