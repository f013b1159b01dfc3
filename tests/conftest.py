"""
Pytest configuration and fixtures.

Provides shared test fixtures for RockBlockPy tests.
"""

import pytest
import logging

from rockblockpy.core import MockTransport, CommandChannel
from rockblockpy import RockBlockModem, SBDConfig


# Enable logging for tests
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture
def mock_transport():
    """
    Create a MockTransport instance for testing.

    The modem runs with echo on, so scripts start with the echoed command.

    Example:
        def test_something(mock_transport):
            mock_transport.add_response(["AT", "OK"])
            # ... test code ...
    """
    transport = MockTransport()
    yield transport
    transport.close()


@pytest.fixture
def fast_config():
    """SBDConfig with the default counts but no delays."""
    return SBDConfig(time_delay=0.0, signal_delay=0.0, session_retry_delay=0.0)


@pytest.fixture
def channel(mock_transport):
    """
    Create a CommandChannel over MockTransport.

    Example:
        def test_reply(channel, mock_transport):
            mock_transport.add_response(["AT+CSQ", "+CSQ:5", "OK"])
            assert channel.send_and_read_reply("AT+CSQ") == "+CSQ:5"
    """
    return CommandChannel(mock_transport)


@pytest.fixture
def modem(mock_transport, fast_config):
    """
    Create a RockBlockModem instance with MockTransport.

    Example:
        def test_signal(modem, mock_transport):
            mock_transport.add_response(["AT+CSQ", "+CSQ:4", "OK"])
            assert modem.network.get_signal_strength() == 4
    """
    modem_instance = RockBlockModem(transport=mock_transport, config=fast_config)
    yield modem_instance
    modem_instance.close()


@pytest.fixture
def mock_signal_response():
    """Mock response for AT+CSQ command."""
    return ["AT+CSQ", "+CSQ:5", "OK"]


@pytest.fixture
def mock_time_response():
    """Mock response for AT-MSSTM command once the modem has network time."""
    return ["AT-MSSTM", "-MSSTM: 00000000", "OK"]


@pytest.fixture
def mock_no_time_response():
    """Mock response for AT-MSSTM command before the modem has network time."""
    return ["AT-MSSTM", "-MSSTM: no network service", "OK"]


@pytest.fixture
def mock_clear_response():
    """Mock response for AT+SBDD0 command."""
    return ["AT+SBDD0", "0", "OK"]
