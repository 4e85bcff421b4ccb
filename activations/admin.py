"""
Django admin configuration for activations app.
"""

from django.contrib import admin

from activations.infrastructure.models import Binding, SerialSlot


@admin.register(Binding)
class BindingAdmin(admin.ModelAdmin):
    """Admin interface for Binding model."""

    list_display = [
        "serial_no",
        "machine_id",
        "client_address",
        "client_os",
        "last_update_time",
    ]
    list_filter = ["last_update_time"]
    search_fields = ["serial_no", "machine_id", "client_address"]
    readonly_fields = ["id", "serial_no", "machine_id", "last_update_time"]
    fieldsets = (
        (
            "Binding",
            {
                "fields": ("id", "serial_no", "machine_id"),
            },
        ),
        (
            "Client Information",
            {
                "fields": ("client_address", "client_os", "client_time"),
            },
        ),
        (
            "Timestamps",
            {
                "fields": ("last_update_time",),
                "classes": ("collapse",),
            },
        ),
    )

    def has_add_permission(self, request):
        """Bindings are only created through activation requests."""
        return False

    def has_delete_permission(self, request, obj=None):
        """Binding rows and their serial's device count change together."""
        return False


@admin.register(SerialSlot)
class SerialSlotAdmin(admin.ModelAdmin):
    """Read-only view of per-serial device counters."""

    list_display = ["serial_no", "device_count", "updated_at"]
    search_fields = ["serial_no"]
    readonly_fields = ["serial_no", "device_count", "updated_at"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        """Counters change only together with binding rows."""
        return False
