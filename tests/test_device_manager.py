"""
Tests for DeviceManager.
"""

import pytest

from rockblockpy.exceptions import ProtocolMismatchError


def test_ping(modem, mock_transport):
    """Test ping."""
    mock_transport.add_response(["AT", "OK"])

    modem.device.ping()

    assert mock_transport.written == [b"AT\r"]


def test_ping_failure(modem, mock_transport):
    """Test ping with an error reply."""
    mock_transport.add_response(["AT", "ERROR"])

    with pytest.raises(ProtocolMismatchError) as exc_info:
        modem.device.ping()

    assert exc_info.value.command == "AT"
    assert exc_info.value.actual == "ERROR"


def test_get_serial_identifier(modem, mock_transport):
    """Test getting the serial identifier."""
    mock_transport.add_response(["AT+GSN", "300234063904190", "OK"])

    serial_id = modem.device.get_serial_identifier()

    assert serial_id == "300234063904190"
    assert mock_transport.pending_lines() == 0


def test_initialize(modem, mock_transport):
    """Test initialize sends setup commands in order."""
    for cmd in ("AT", "ATE1", "AT+SBDMTA=0", "AT&K0"):
        mock_transport.add_response([cmd, "OK"])

    modem.device.initialize()

    assert mock_transport.written_commands() == ["AT", "ATE1", "AT+SBDMTA=0", "AT&K0"]


def test_disable_ring_alerts_failure(modem, mock_transport):
    """Test a setup command that is not acknowledged."""
    mock_transport.add_response(["AT+SBDMTA=0", "ERROR"])

    with pytest.raises(ProtocolMismatchError):
        modem.device.disable_ring_alerts()
