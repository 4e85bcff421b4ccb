"""
ActivationResolver.

Decides whether a device may bind to a serial, performs the single
conditional write for that decision and records an audit entry.
"""

import asyncio
import logging
import time
from typing import Awaitable, List, Optional, TypeVar

from activations.application.commands.activate_device import ActivationRequest
from activations.application.dto.decision_dto import DecisionDTO, DecisionStatus
from activations.domain.binding import Binding
from activations.domain.services import BindingAction, BindingPolicy
from activations.ports.binding_repository import BindingRepository
from audit.application.recorder import AuditRecorder
from audit.domain.entries import (
    ActivationConflicted,
    ActivationFailed,
    AuditEntry,
    DeviceAdded,
    DeviceUpdated,
)
from core.domain.clock import Clock, SystemClock
from core.domain.exceptions import (
    ActivationConflictError,
    DomainException,
    DuplicateBindingError,
    StoreError,
    StoreTimeoutError,
    ValidationError,
)
from core.domain.value_objects import MAX_IDENTIFIER_LENGTH
from core.metrics import activation_decisions_total, binding_store_duration_seconds

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ActivationResolver:
    """Resolves ActivationRequest commands into decisions."""

    def __init__(
        self,
        binding_repository: BindingRepository,
        audit_recorder: AuditRecorder,
        clock: Optional[Clock] = None,
        store_timeout: Optional[float] = None,
    ):
        """
        Initialize resolver with its collaborators.

        Args:
            binding_repository: Store holding the bindings of every serial
            audit_recorder: Recorder receiving one entry per decision
            clock: UTC time source (system clock by default)
            store_timeout: Seconds allowed for each binding store call
        """
        self.binding_repository = binding_repository
        self.audit_recorder = audit_recorder
        self.clock = clock or SystemClock()
        self.store_timeout = store_timeout

    async def resolve(self, request: ActivationRequest) -> DecisionDTO:
        """
        Resolve an activation request.

        Never raises: validation and store failures become a FAILED decision.
        Every outcome is audited before the decision is returned.

        Args:
            request: ActivationRequest command

        Returns:
            DecisionDTO describing the outcome
        """
        now = self.clock.now()
        try:
            self._validate(request)
            decision, entry = await self._decide(request, now)
        except DomainException as e:
            decision, entry = self._failure(request, now, e.message, e.code)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error(
                "Unexpected error resolving activation: %s",
                e,
                extra={"serial_no": request.serial_no, "machine_id": request.machine_id},
                exc_info=True,
            )
            decision, entry = self._failure(request, now, str(e), "INTERNAL_ERROR")

        await self.audit_recorder.record(entry)

        activation_decisions_total.labels(outcome=decision.status.value).inc()
        logger.info(
            "Activation resolved: %s",
            decision.status.value,
            extra={
                "serial_no": decision.serial_no,
                "machine_id": decision.machine_id,
                "status_code": decision.status_code,
                "client_address": request.client_address,
            },
        )
        return decision

    @staticmethod
    def _validate(request: ActivationRequest) -> None:
        """Reject requests missing the serial or device identifier."""
        for field, value in (("serialNo", request.serial_no), ("machineId", request.machine_id)):
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(f"{field} is required", field=field)
            if not isinstance(value, str):
                raise ValidationError(f"{field} must be a string", field=field)
            if len(value) > MAX_IDENTIFIER_LENGTH:
                raise ValidationError(
                    f"{field} must be at most {MAX_IDENTIFIER_LENGTH} characters", field=field
                )

    async def _decide(self, request: ActivationRequest, now):
        bindings = await self._call_store(
            "find_by_serial", self.binding_repository.find_by_serial(request.serial_no)
        )
        action = BindingPolicy.plan(bindings, request.machine_id)

        if action is BindingAction.UPDATE:
            existing = BindingPolicy.find_binding(bindings, request.machine_id)
            return await self._update(request, existing, now)

        if action is BindingAction.REJECT:
            return self._conflict(request, bindings, now)

        binding = Binding.create(request.serial_no, request.machine_id, request.client, now)
        try:
            added = await self._call_store(
                "add_if_capacity",
                self.binding_repository.add_if_capacity(
                    binding, BindingPolicy.max_devices, deadline=self._deadline()
                ),
                write=True,
            )
        except DuplicateBindingError:
            # Same device bound concurrently; re-registration is always allowed.
            logger.info(
                "Device bound concurrently, updating instead",
                extra={"serial_no": request.serial_no, "machine_id": request.machine_id},
            )
            return await self._update(request, binding, now)

        if not added:
            # The snapshot showed a free slot but another device claimed it first.
            latest = await self._call_store(
                "find_by_serial", self.binding_repository.find_by_serial(request.serial_no)
            )
            return self._conflict(request, latest, now)

        return (
            self._decision(DecisionStatus.CREATED, request, now),
            DeviceAdded(request.serial_no, request.machine_id, request.client, now),
        )

    async def _update(self, request: ActivationRequest, existing: Binding, now):
        refreshed = existing.refreshed(request.client, now)
        await self._call_store(
            "update",
            self.binding_repository.update(refreshed, deadline=self._deadline()),
            write=True,
        )
        return (
            self._decision(DecisionStatus.UPDATED, request, now),
            DeviceUpdated(request.serial_no, request.machine_id, request.client, now),
        )

    def _conflict(self, request: ActivationRequest, bindings: List[Binding], now):
        error = ActivationConflictError()
        return (
            self._decision(DecisionStatus.CONFLICT, request, now, description=error.message),
            ActivationConflicted(
                request.serial_no,
                request.machine_id,
                request.client,
                now,
                bound_machine_ids=tuple(b.machine_id.value for b in bindings),
            ),
        )

    def _failure(self, request: ActivationRequest, now, reason: str, code: str):
        logger.warning(
            "Activation failed: %s - %s",
            code,
            reason,
            extra={"serial_no": request.serial_no, "machine_id": request.machine_id},
        )
        entry: AuditEntry = ActivationFailed(
            _as_text(request.serial_no),
            _as_text(request.machine_id),
            request.client,
            now,
            reason=reason,
            error_code=code,
        )
        return self._decision(DecisionStatus.FAILED, request, now, description=reason), entry

    @staticmethod
    def _decision(
        status: DecisionStatus,
        request: ActivationRequest,
        now,
        description: Optional[str] = None,
    ) -> DecisionDTO:
        return DecisionDTO(
            status=status,
            serial_no=request.serial_no,
            machine_id=request.machine_id,
            last_update_time=now,
            description=description,
        )

    def _deadline(self) -> Optional[float]:
        """Monotonic time by which a binding write must commit."""
        if self.store_timeout is None:
            return None
        return time.monotonic() + self.store_timeout

    async def _call_store(self, operation: str, call: Awaitable[T], write: bool = False) -> T:
        """
        Await a binding store call within the store timeout.

        A read that overruns is abandoned. A write is never abandoned: once the
        timeout passes the write is still awaited and its own outcome is
        reported. Stores roll back any write that misses its deadline.

        Raises:
            StoreTimeoutError: If the call exceeds the timeout
            StoreError: If the store raised anything other than a domain exception
        """
        started = time.perf_counter()
        task = asyncio.ensure_future(call)
        try:
            if not write:
                return await asyncio.wait_for(task, timeout=self.store_timeout)
            try:
                return await asyncio.wait_for(asyncio.shield(task), timeout=self.store_timeout)
            except asyncio.TimeoutError:
                logger.warning(
                    "Binding store %s exceeded %ss, waiting for its outcome",
                    operation,
                    self.store_timeout,
                )
                return await task
        except asyncio.TimeoutError as e:
            raise StoreTimeoutError(
                f"Binding store {operation} timed out after {self.store_timeout}s"
            ) from e
        except DomainException:
            raise
        except Exception as e:
            raise StoreError(str(e) or type(e).__name__) from e
        finally:
            binding_store_duration_seconds.labels(operation=operation).observe(
                time.perf_counter() - started
            )


def _as_text(value) -> str:
    return "" if value is None else str(value)
