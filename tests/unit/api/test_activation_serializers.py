"""
Unit tests for activation API serializers and helpers.
"""

from datetime import datetime, timezone

from rest_framework.test import APIRequestFactory

from activations.application.dto.decision_dto import DecisionDTO, DecisionStatus
from api.v1.activation.serializers import (
    ActivationRequestSerializer,
    ActivationResponseSerializer,
)
from api.v1.activation.views import get_client_address
from core.domain.exceptions import CONFLICT_MESSAGE

WHEN = datetime(2024, 3, 5, 9, 15, 30, 987654, tzinfo=timezone.utc)


class TestActivationRequestSerializer:
    """Tests for ActivationRequestSerializer."""

    def test_all_fields_optional(self):
        serializer = ActivationRequestSerializer(data={})
        assert serializer.is_valid()
        assert serializer.validated_data == {}

    def test_camel_case_fields(self):
        serializer = ActivationRequestSerializer(
            data={"serialNo": "SN001", "machineId": "M1", "osName": "Windows", "userName": None}
        )
        assert serializer.is_valid()
        assert serializer.validated_data["serialNo"] == "SN001"
        assert serializer.validated_data["machineId"] == "M1"
        assert serializer.validated_data["userName"] is None


class TestActivationResponseSerializer:
    """Tests for ActivationResponseSerializer."""

    def test_success_response_has_no_description(self):
        decision = DecisionDTO(DecisionStatus.CREATED, "SN001", "M1", WHEN)

        data = ActivationResponseSerializer(decision).data

        assert data == {
            "serialNo": "SN001",
            "lastUpdateTime": "2024/03/05 09:15:30",
            "machineId": "M1",
        }

    def test_conflict_response_has_description(self):
        decision = DecisionDTO(
            DecisionStatus.CONFLICT, "SN001", "M3", WHEN, description=CONFLICT_MESSAGE
        )

        data = ActivationResponseSerializer(decision).data

        assert data["description"] == CONFLICT_MESSAGE


class TestClientAddress:
    """Tests for get_client_address."""

    def test_remote_addr(self):
        request = APIRequestFactory().post("/", REMOTE_ADDR="192.0.2.1")
        assert get_client_address(request) == "192.0.2.1"

    def test_forwarded_for_first_hop(self):
        request = APIRequestFactory().post(
            "/", REMOTE_ADDR="10.0.0.1", HTTP_X_FORWARDED_FOR="203.0.113.9, 10.0.0.1"
        )
        assert get_client_address(request) == "203.0.113.9"
