"""
Unit tests for core value objects.
"""
import pytest

from core.domain.value_objects import (
    MAX_IDENTIFIER_LENGTH,
    ClientContext,
    MachineId,
    SerialNumber,
)


class TestSerialNumber:
    """Tests for SerialNumber value object."""

    def test_valid_serial(self):
        """Test valid serial creation."""
        serial = SerialNumber("SN001")
        assert str(serial) == "SN001"
        assert serial.value == "SN001"

    def test_empty_serial(self):
        """Test empty serial is rejected."""
        with pytest.raises(ValueError, match="cannot be empty"):
            SerialNumber("")

    def test_blank_serial(self):
        """Test whitespace-only serial is rejected."""
        with pytest.raises(ValueError, match="cannot be empty"):
            SerialNumber("   ")

    def test_serial_too_long(self):
        """Test serial longer than the column is rejected."""
        with pytest.raises(ValueError, match="too long"):
            SerialNumber("S" * (MAX_IDENTIFIER_LENGTH + 1))

    def test_equality_and_hash(self):
        """Test serials compare by value."""
        assert SerialNumber("SN001") == SerialNumber("SN001")
        assert SerialNumber("SN001") != SerialNumber("SN002")
        assert len({SerialNumber("SN001"), SerialNumber("SN001")}) == 1


class TestMachineId:
    """Tests for MachineId value object."""

    def test_valid_machine_id(self):
        machine_id = MachineId("M1")
        assert str(machine_id) == "M1"

    def test_empty_machine_id(self):
        with pytest.raises(ValueError, match="Machine ID cannot be empty"):
            MachineId("")

    def test_not_equal_to_serial_with_same_value(self):
        assert MachineId("X") != SerialNumber("X")


class TestClientContext:
    """Tests for ClientContext value object."""

    def test_defaults_are_empty(self):
        context = ClientContext()
        assert context.client_address == ""
        assert context.client_os == ""

    def test_client_os_joins_name_and_version(self):
        context = ClientContext(os_name="Windows", os_version="11")
        assert context.client_os == "Windows 11"

    def test_client_os_without_version(self):
        context = ClientContext(os_name="Linux")
        assert context.client_os == "Linux"
