"""
Core views for health checks.
"""

from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from activations.infrastructure.models import Binding
from audit.infrastructure.models import AuditLogEntry


@method_decorator(csrf_exempt, name="dispatch")
class HealthView(View):
    """Liveness endpoint."""

    def get(self, _request):
        """Return service health status."""
        return JsonResponse({"status": "healthy", "service": "license-binding-service"})


@method_decorator(csrf_exempt, name="dispatch")
class ReadyView(View):
    """Readiness endpoint: both stores must be reachable."""

    def get(self, _request):
        """Check the binding store and the audit store."""
        checks = {
            "database": self._check_database(),
            "binding_store": self._check_table(Binding),
            "audit_store": self._check_table(AuditLogEntry),
        }
        all_healthy = all(checks.values())
        return JsonResponse(
            {"status": "ready" if all_healthy else "not_ready", "checks": checks},
            status=200 if all_healthy else 503,
        )

    @staticmethod
    def _check_database() -> bool:
        try:
            with connection.cursor() as cursor:
                cursor.execute("SELECT 1")
            return True
        except DatabaseError:
            return False

    @staticmethod
    def _check_table(model) -> bool:
        try:
            model.objects.exists()  # pylint: disable=no-member
            return True
        except DatabaseError:
            return False
