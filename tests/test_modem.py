"""
Tests for RockBlockModem facade and configuration.
"""

import pytest

from rockblockpy import RockBlockModem, SBDConfig, TraceHandler, ValidationError


def test_requires_port_or_transport():
    """Test a port or transport is required."""
    with pytest.raises(ValueError):
        RockBlockModem()


def test_repr(modem):
    """Test string representation."""
    assert repr(modem) == "<RockBlockModem status=open>"
    modem.close()
    assert repr(modem) == "<RockBlockModem status=closed>"


def test_default_config(mock_transport):
    """Test default limits."""
    modem = RockBlockModem(transport=mock_transport)

    assert modem.config == SBDConfig()
    assert modem.config.time_attempts == 20
    assert modem.config.time_delay == 1.0
    assert modem.config.signal_attempts == 10
    assert modem.config.signal_delay == 10.0
    assert modem.config.signal_threshold == 2
    assert modem.config.session_attempts == 3
    assert modem.config.max_message_length == 340


@pytest.mark.parametrize("kwargs", [
    {"time_attempts": 0},
    {"session_attempts": 0},
    {"signal_delay": -1},
    {"signal_threshold": 6},
    {"max_drain_sessions": -1},
])
def test_config_validation(kwargs):
    """Test invalid configuration is rejected."""
    with pytest.raises(ValueError):
        SBDConfig(**kwargs)


def test_send_message(modem, mock_transport, mock_time_response, mock_signal_response,
                      mock_clear_response):
    """Test queue, connect and session in one call."""
    mock_transport.add_response(["AT+SBDWB=2", "READY", "0", "OK"])
    mock_transport.add_response(mock_time_response)
    mock_transport.add_response(mock_signal_response)
    mock_transport.add_response(["AT+SBDIX", "+SBDIX: 0, 3, 0, -1, 0, 0", "OK"])
    mock_transport.add_response(mock_clear_response)

    outcome = modem.send_message(b"hi")

    assert outcome.success is True
    assert outcome.replies[0].msn == 3
    assert mock_transport.written_commands() == [
        "AT+SBDWB=2", "AT-MSSTM", "AT+CSQ", "AT+SBDIX", "AT+SBDD0"
    ]


def test_send_message_too_long(modem, mock_transport):
    """Test oversized messages never reach the modem."""
    with pytest.raises(ValidationError):
        modem.send_message(b"x" * 400)

    assert mock_transport.written == []


def test_check_mailbox(modem, mock_transport, mock_time_response, mock_signal_response,
                       mock_clear_response):
    """Test collecting MT messages."""
    mock_transport.add_response(mock_time_response)
    mock_transport.add_response(mock_signal_response)
    mock_transport.add_response(["AT+SBDIX", "+SBDIX: 0, 3, 1, 4, 5, 0", "OK"])
    mock_transport.add_response(mock_clear_response)
    mock_transport.add_response([b"AT+SBDRB\r\x00\x05hello\x02\x14", "OK"])

    outcome = modem.check_mailbox()

    assert outcome.payloads == [b"hello"]


def test_trace_callbacks(mock_transport):
    """Test trace observers registered through the facade."""
    trace = TraceHandler(log_traffic=False)
    modem = RockBlockModem(transport=mock_transport, trace=trace)
    events = []

    modem.register_trace_callback("collect", events.append)
    mock_transport.add_response(["AT", "OK"])
    modem.device.ping()

    assert [str(e) for e in events] == ["> 'AT'", "# 'AT'", "# 'OK'"]
    assert modem.unregister_trace_callback("collect") is True
