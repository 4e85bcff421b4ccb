"""
Integration tests for the activation API endpoint.
"""

import re

import pytest
from django.urls import reverse

from activations.infrastructure.models import Binding
from audit.infrastructure.models import AuditLogEntry
from core.domain.exceptions import CONFLICT_MESSAGE

UPDATE_TIME_PATTERN = re.compile(r"^\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2}$")


def _payload(serial_no="SN001", machine_id="M1", **extra):
    payload = {
        "serialNo": serial_no,
        "machineId": machine_id,
        "clientTime": "2024-03-05T10:15:29+01:00",
        "osName": "Windows",
        "osVersion": "11",
        "machineName": "WORKSTATION-01",
        "userName": "alice",
    }
    payload.update(extra)
    return payload


@pytest.mark.django_db
@pytest.mark.integration
class TestActivationAPI:
    """Integration tests for the activation API."""

    url = "/api/v1/activations/"

    def _activate(self, api_client, payload, **headers):
        return api_client.post(self.url, payload, format="json", **headers)

    def test_url_name(self):
        assert reverse("activation:activate-device") == self.url

    def test_first_device_created(self, api_client):
        """Test binding the first device to a serial."""
        response = self._activate(api_client, _payload())

        assert response.status_code == 201
        data = response.json()
        assert data["serialNo"] == "SN001"
        assert data["machineId"] == "M1"
        assert UPDATE_TIME_PATTERN.match(data["lastUpdateTime"])
        assert "description" not in data
        assert Binding.objects.filter(serial_no="SN001").count() == 1

    def test_serial_lifecycle(self, api_client):
        """Test two devices bind, a third is refused and the first re-registers."""
        assert self._activate(api_client, _payload(machine_id="M1")).status_code == 201
        assert self._activate(api_client, _payload(machine_id="M2")).status_code == 201

        conflict = self._activate(api_client, _payload(machine_id="M3"))
        assert conflict.status_code == 409
        assert conflict.json()["description"] == CONFLICT_MESSAGE
        assert conflict.json()["machineId"] == "M3"

        update = self._activate(api_client, _payload(machine_id="M1"))
        assert update.status_code == 200

        bound = set(Binding.objects.filter(serial_no="SN001").values_list("machine_id", flat=True))
        assert bound == {"M1", "M2"}
        kinds = list(
            AuditLogEntry.objects.filter(serial_no="SN001")
            .order_by("timestamp")
            .values_list("kind", flat=True)
        )
        assert kinds == ["add", "add", "conflict", "update"]

    def test_update_operation_recorded(self, api_client):
        self._activate(api_client, _payload())
        self._activate(api_client, _payload())

        operations = list(
            AuditLogEntry.objects.filter(serial_no="SN001")
            .order_by("timestamp")
            .values_list("operation", flat=True)
        )
        assert operations == ["Add", "Update"]

    def test_missing_machine_id(self, api_client):
        """Test a request without a device identifier fails and is audited."""
        payload = _payload()
        del payload["machineId"]

        response = self._activate(api_client, payload)

        assert response.status_code == 400
        data = response.json()
        assert data["description"] == "machineId is required"
        assert data["serialNo"] == "SN001"
        assert data["machineId"] is None
        assert not Binding.objects.exists()
        row = AuditLogEntry.objects.get(serial_no="SN001")
        assert row.kind == "failure"
        assert row.details == {"error_code": "VALIDATION_ERROR"}

    def test_malformed_body(self, api_client):
        response = api_client.post(self.url, data="{not json", content_type="application/json")

        assert response.status_code == 400
        assert response.json()["description"] == "serialNo is required"
        assert AuditLogEntry.objects.filter(kind="failure").count() == 1

    def test_client_address_from_forwarded_header(self, api_client):
        self._activate(
            api_client, _payload(), HTTP_X_FORWARDED_FOR="203.0.113.9, 10.0.0.1"
        )

        assert Binding.objects.get(serial_no="SN001").client_address == "203.0.113.9"
        row = AuditLogEntry.objects.get(serial_no="SN001")
        assert row.client_address == "203.0.113.9"
        assert row.client_os == "Windows 11"
        assert row.client_user == "alice"

    def test_binding_stores_os_name(self, api_client):
        self._activate(api_client, _payload())

        assert Binding.objects.get(serial_no="SN001").client_os == "Windows"

    def test_correlation_id_header(self, api_client):
        response = self._activate(api_client, _payload(), HTTP_X_CORRELATION_ID="corr-123")

        assert response["X-Correlation-ID"] == "corr-123"

    def test_get_not_allowed(self, api_client):
        response = api_client.get(self.url)

        assert response.status_code == 405
