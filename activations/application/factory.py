"""
Wiring for the activation resolver.

Builds a resolver backed by the Django repositories and configured
from Django settings.
"""

from django.conf import settings

from activations.application.handlers.activation_resolver import ActivationResolver
from activations.infrastructure.repositories.django_binding_repository import (
    DjangoBindingRepository,
)
from audit.application.recorder import AuditRecorder
from audit.infrastructure.repositories.django_audit_log_repository import (
    DjangoAuditLogRepository,
)
from core.domain.clock import SystemClock


def build_activation_resolver() -> ActivationResolver:
    """
    Create an ActivationResolver for the running Django project.

    Returns:
        ActivationResolver using the database-backed stores
    """
    recorder = AuditRecorder(
        DjangoAuditLogRepository(),
        timeout=getattr(settings, "AUDIT_STORE_TIMEOUT_SECONDS", None),
    )
    return ActivationResolver(
        binding_repository=DjangoBindingRepository(),
        audit_recorder=recorder,
        clock=SystemClock(),
        store_timeout=getattr(settings, "ACTIVATION_STORE_TIMEOUT_SECONDS", None),
    )
