"""
Unit tests for the in-memory BindingRepository.
"""

import asyncio
import time
from datetime import timedelta

import pytest

from activations.domain.binding import Binding
from core.domain.exceptions import (
    BindingNotFoundError,
    DuplicateBindingError,
    StoreTimeoutError,
)


@pytest.mark.asyncio
class TestInMemoryBindingRepository:
    """Tests for InMemoryBindingRepository."""

    async def test_add_and_find(self, binding_repository, client_context, fixed_clock):
        binding = Binding.create("SN001", "M1", client_context, fixed_clock.now())

        assert await binding_repository.add_if_capacity(binding, 2) is True

        found = await binding_repository.find_by_serial("SN001")
        assert found == [binding]
        assert await binding_repository.find_by_serial("OTHER") == []

    async def test_add_when_full(self, binding_repository, client_context, fixed_clock):
        for machine_id in ("M1", "M2"):
            binding = Binding.create("SN001", machine_id, client_context, fixed_clock.now())
            assert await binding_repository.add_if_capacity(binding, 2) is True

        third = Binding.create("SN001", "M3", client_context, fixed_clock.now())

        assert await binding_repository.add_if_capacity(third, 2) is False
        assert binding_repository.count("SN001") == 2

    async def test_add_duplicate_raises(self, binding_repository, client_context, fixed_clock):
        binding = Binding.create("SN001", "M1", client_context, fixed_clock.now())
        await binding_repository.add_if_capacity(binding, 2)

        with pytest.raises(DuplicateBindingError):
            await binding_repository.add_if_capacity(binding, 2)

    async def test_update(self, binding_repository, client_context, fixed_clock):
        binding = Binding.create("SN001", "M1", client_context, fixed_clock.now())
        await binding_repository.add_if_capacity(binding, 2)
        refreshed = binding.refreshed(client_context, fixed_clock.now() + timedelta(hours=1))

        await binding_repository.update(refreshed)

        assert await binding_repository.find_by_serial("SN001") == [refreshed]

    async def test_update_missing_raises(self, binding_repository, client_context, fixed_clock):
        binding = Binding.create("SN001", "M1", client_context, fixed_clock.now())
        with pytest.raises(BindingNotFoundError):
            await binding_repository.update(binding)

    async def test_concurrent_adds_respect_capacity(
        self, binding_repository, client_context, fixed_clock
    ):
        """Test only two of many concurrent new devices are admitted."""
        bindings = [
            Binding.create("SN001", f"M{i}", client_context, fixed_clock.now()) for i in range(6)
        ]

        results = await asyncio.gather(
            *(binding_repository.add_if_capacity(binding, 2) for binding in bindings)
        )

        assert results.count(True) == 2
        assert binding_repository.count("SN001") == 2

    async def test_add_after_deadline_raises(
        self, binding_repository, client_context, fixed_clock
    ):
        binding = Binding.create("SN001", "M1", client_context, fixed_clock.now())

        with pytest.raises(StoreTimeoutError):
            await binding_repository.add_if_capacity(binding, 2, deadline=time.monotonic() - 1)

        assert binding_repository.count("SN001") == 0

    async def test_update_after_deadline_raises(
        self, binding_repository, client_context, fixed_clock
    ):
        binding = Binding.create("SN001", "M1", client_context, fixed_clock.now())
        await binding_repository.add_if_capacity(binding, 2)
        refreshed = binding.refreshed(client_context, fixed_clock.now() + timedelta(hours=1))

        with pytest.raises(StoreTimeoutError):
            await binding_repository.update(refreshed, deadline=time.monotonic() - 1)

        assert await binding_repository.find_by_serial("SN001") == [binding]
