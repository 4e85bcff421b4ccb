"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timezone

import pytest

from activations.application.commands.activate_device import ActivationRequest
from activations.application.handlers.activation_resolver import ActivationResolver
from activations.infrastructure.repositories.django_binding_repository import (
    DjangoBindingRepository,
)
from activations.infrastructure.repositories.in_memory_binding_repository import (
    InMemoryBindingRepository,
)
from audit.application.recorder import AuditRecorder
from audit.infrastructure.repositories.django_audit_log_repository import (
    DjangoAuditLogRepository,
)
from audit.infrastructure.repositories.in_memory_audit_log_repository import (
    InMemoryAuditLogRepository,
)
from core.domain.clock import FixedClock
from core.domain.value_objects import ClientContext


@pytest.fixture
def fixed_clock():
    """Fixture for a clock pinned to a known instant."""
    return FixedClock(datetime(2024, 3, 5, 9, 15, 30, 123456, tzinfo=timezone.utc))


@pytest.fixture
def binding_repository():
    """Fixture for an in-memory BindingRepository."""
    return InMemoryBindingRepository()


@pytest.fixture
def audit_repository():
    """Fixture for an in-memory AuditLogRepository."""
    return InMemoryAuditLogRepository()


@pytest.fixture
def audit_recorder(audit_repository):
    """Fixture for an AuditRecorder writing to the in-memory log."""
    return AuditRecorder(audit_repository, timeout=1.0)


@pytest.fixture
def resolver(binding_repository, audit_recorder, fixed_clock):
    """Fixture for an ActivationResolver wired to in-memory stores."""
    return ActivationResolver(
        binding_repository,
        audit_recorder,
        clock=fixed_clock,
        store_timeout=1.0,
    )


@pytest.fixture
def client_context():
    """Fixture for sample client metadata."""
    return ClientContext(
        client_time="2024-03-05T10:15:29+01:00",
        client_address="203.0.113.7",
        os_name="Windows",
        os_version="10.0.19045",
        machine_name="WORKSTATION-01",
        user_name="alice",
    )


@pytest.fixture
def make_request():
    """Factory fixture building ActivationRequest commands."""

    def _make(serial_no="SN001", machine_id="M1", **overrides):
        fields = {
            "client_time": "2024-03-05T10:15:29+01:00",
            "client_address": "203.0.113.7",
            "os_name": "Windows",
            "os_version": "10.0.19045",
            "machine_name": "WORKSTATION-01",
            "user_name": "alice",
        }
        fields.update(overrides)
        return ActivationRequest(serial_no=serial_no, machine_id=machine_id, **fields)

    return _make


@pytest.fixture
def django_binding_repository():
    """Fixture for the Django BindingRepository."""
    return DjangoBindingRepository()


@pytest.fixture
def django_audit_repository():
    """Fixture for the Django AuditLogRepository."""
    return DjangoAuditLogRepository()


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()
