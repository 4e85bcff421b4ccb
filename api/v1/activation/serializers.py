"""
Serializers for Activation API endpoints.

Field names follow the wire format used by installed clients (camelCase).
"""

from rest_framework import serializers

from core.domain.clock import format_update_time


class ActivationRequestSerializer(serializers.Serializer):
    """
    Serializer for an activation request.

    Every field is optional here: missing identifiers are reported by the
    resolver as a failed, audited decision rather than rejected up front.
    """

    serialNo = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    machineId = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    clientTime = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    osName = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    osVersion = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    machineName = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    userName = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class ActivationResponseSerializer(serializers.Serializer):
    """Serializer for DecisionDTO."""

    serialNo = serializers.CharField(source="serial_no", allow_null=True)
    lastUpdateTime = serializers.SerializerMethodField()
    machineId = serializers.CharField(source="machine_id", allow_null=True)
    description = serializers.CharField(required=False)

    def get_lastUpdateTime(self, obj) -> str:  # pylint: disable=invalid-name
        """UTC update time as ``yyyy/MM/dd HH:mm:ss``."""
        return format_update_time(obj.last_update_time)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if instance.description is None:
            data.pop("description", None)
        return data
