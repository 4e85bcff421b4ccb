"""
Activation API views.

Installed products call this endpoint to bind the device they run on
to their serial number.
"""

from typing import Any, Dict

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.exceptions import ParseError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from activations.application.commands.activate_device import ActivationRequest
from activations.application.factory import build_activation_resolver
from api.v1.activation.serializers import (
    ActivationRequestSerializer,
    ActivationResponseSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer

_resolver = build_activation_resolver()

tracer = get_tracer(__name__)


def get_client_address(request: Request) -> str:
    """
    Network origin of the caller.

    Uses the first hop of X-Forwarded-For when a proxy set it,
    otherwise REMOTE_ADDR.
    """
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR", "") or ""


def _read_payload(request: Request) -> Dict[str, Any]:
    """Request body as a dict; an unparseable or non-object body is empty."""
    try:
        data = request.data
    except ParseError:
        return {}
    return data if isinstance(data, dict) else {}


class ActivateDeviceView(APIView):
    """View for binding a device to a serial."""

    @extend_schema(
        operation_id="activate_device",
        summary="Activate Device",
        description=(
            "Bind a device to a product serial. At most two devices may be bound "
            "to a serial; re-activating an already bound device refreshes it."
        ),
        tags=["Activation API"],
        request=ActivationRequestSerializer,
        responses={
            200: OpenApiResponse(ActivationResponseSerializer, "Bound device updated"),
            201: OpenApiResponse(ActivationResponseSerializer, "New device bound"),
            400: OpenApiResponse(ActivationResponseSerializer, "Invalid request or store failure"),
            409: OpenApiResponse(ActivationResponseSerializer, "Two other devices already bound"),
        },
    )
    def post(self, request: Request) -> Response:
        """Bind a device to a serial."""
        return async_to_sync(self._handle_activate_device)(request)

    async def _handle_activate_device(self, request: Request) -> Response:
        """Async handler for activate device."""
        with tracer.start_as_current_span("activate_device") as span:
            span.set_attribute("operation", "activate_device")

            payload = _read_payload(request)
            serializer = ActivationRequestSerializer(data=payload)
            if serializer.is_valid():
                data = serializer.validated_data
            else:
                span.set_attribute("validation.errors", ",".join(sorted(serializer.errors)))
                data = {key: value for key, value in payload.items() if isinstance(value, str)}

            command = ActivationRequest(
                serial_no=data.get("serialNo"),
                machine_id=data.get("machineId"),
                client_time=data.get("clientTime") or "",
                client_address=get_client_address(request),
                os_name=data.get("osName") or "",
                os_version=data.get("osVersion") or "",
                machine_name=data.get("machineName") or "",
                user_name=data.get("userName") or "",
            )
            span.set_attribute("serial_no", command.serial_no or "")
            span.set_attribute("machine_id", command.machine_id or "")

            decision = await _resolver.resolve(command)

            span.set_attribute("activation.status", decision.status.value)
            if decision.status_code >= 400:
                span.set_status(Status(StatusCode.ERROR, decision.description or ""))
            else:
                span.set_status(Status(StatusCode.OK))

            response_serializer = ActivationResponseSerializer(decision)
            return Response(response_serializer.data, status=decision.status_code)
