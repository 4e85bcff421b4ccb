"""
Integration tests for the activation admin registrations.
"""

import pytest
from django.contrib import admin
from django.contrib.auth.models import User
from django.test import RequestFactory

from activations.infrastructure.models import Binding as BindingModel
from activations.infrastructure.models import SerialSlot


@pytest.fixture
def admin_request():
    request = RequestFactory().get("/admin/")
    request.user = User(username="root", is_staff=True, is_superuser=True)
    return request


@pytest.mark.integration
class TestActivationAdmin:
    """Superusers cannot desynchronise bindings from their slot counters."""

    def test_bindings_cannot_be_added_or_deleted(self, admin_request):
        binding_admin = admin.site._registry[BindingModel]

        assert binding_admin.has_add_permission(admin_request) is False
        assert binding_admin.has_delete_permission(admin_request) is False
        assert "delete_selected" not in binding_admin.get_actions(admin_request)

    def test_serial_slots_are_read_only(self, admin_request):
        slot_admin = admin.site._registry[SerialSlot]

        assert slot_admin.has_add_permission(admin_request) is False
        assert slot_admin.has_change_permission(admin_request) is False
        assert slot_admin.has_delete_permission(admin_request) is False
