"""
Tests for reply parsers.
"""

from datetime import datetime, timezone
from typing import get_args

import pytest

from rockblockpy import parse_sbdix, SbdixReply
from rockblockpy.parsers import (
    SbdixParser,
    parse_decimal,
    SignalStrengthParser,
    NetworkTimeParser,
    MtFrameParser,
    ticks_to_unix,
    ticks_to_datetime,
    IRIDIUM_EPOCH_MS,
)
from rockblockpy.exceptions import ParseError, ProtocolMismatchError


def test_parse_sbdix():
    """Test parsing a session status line."""
    reply = parse_sbdix("+SBDIX:0, 1, 0, 0, 0, 0")

    assert reply == SbdixReply(
        mo_status=0, msn=1, mt_status=0, mt_msn=0, mt_length=0, mt_queued=0
    )
    assert reply.mo_success is True
    assert reply.has_mt_message is False


def test_parse_sbdix_with_space_and_negative():
    """Test the spaced prefix and -1 MTMSN the modem sends."""
    reply = parse_sbdix("+SBDIX: 32, 12, 0, -1, 0, 0")

    assert reply.mo_status == 32
    assert reply.msn == 12
    assert reply.mt_msn == -1
    assert reply.mo_success is False
    assert reply.mo_status_text == "NO_NETWORK_SERVICE"


def test_parse_sbdix_mt_waiting():
    """Test a reply announcing an MT message."""
    reply = parse_sbdix("+SBDIX: 0, 5, 1, 7, 10, 1")

    assert reply.has_mt_message is True
    assert reply.mt_length == 10
    assert reply.mt_queued == 1


@pytest.mark.parametrize("line", [
    "+SBDIX: 0, 1, 0, 0, 0",
    "+SBDIX: 0, 1, 0, 0, 0, 0, 0",
    "+SBDIX: 0, 1, x, 0, 0, 0",
    "+SBDIX: 0,1,0,0,0,0",
    "+SBDIX:",
    "SBDIX: 0, 1, 0, 0, 0, 0",
    "",
])
def test_parse_sbdix_rejects_malformed(line):
    """Test malformed lines raise ParseError and nothing else."""
    with pytest.raises(ParseError):
        parse_sbdix(line)


def test_unknown_mo_status_text():
    """Test unknown MO codes still get a name."""
    reply = parse_sbdix("+SBDIX: 99, 0, 0, 0, 0, 0")
    assert reply.mo_status_text == "UNKNOWN_99"


def test_signal_parser():
    """Test parsing signal strength."""
    parser = SignalStrengthParser()

    assert parser.parse("+CSQ:5") == 5
    assert parser.parse("+CSQ:0") == 0


@pytest.mark.parametrize("line", ["+CSQ:55", "+CSQ:", "CSQ:5", "+CSQ: 5"])
def test_signal_parser_rejects_shape(line):
    """Test replies of the wrong shape are rejected."""
    with pytest.raises(ProtocolMismatchError):
        SignalStrengthParser().parse(line)


def test_signal_parser_rejects_non_digit():
    """Test a non-digit signal value raises ParseError."""
    with pytest.raises(ParseError):
        SignalStrengthParser().parse("+CSQ:x")


@pytest.mark.parametrize("line", ["+CSQ:\u00b2", "+CSQ:\u00b3", "+CSQ:\u00b9"])
def test_signal_parser_rejects_superscript_digit(line):
    """Test latin-1 superscript digits raise ParseError, not ValueError."""
    with pytest.raises(ParseError):
        SignalStrengthParser().parse(line)


def test_network_time_parser():
    """Test converting system time ticks to Unix seconds."""
    parser = NetworkTimeParser()

    assert parser.parse("-MSSTM: 00000000") == IRIDIUM_EPOCH_MS // 1000
    # 0x64 = 100 ticks = 9 seconds
    assert parser.parse("-MSSTM: 00000064") == 1399818235 + 9
    assert parser.is_valid("-MSSTM: 1a2b3c4d") is True
    assert parser.is_valid("-MSSTM: no network service") is False


def test_network_time_parser_no_fix():
    """Test the placeholder reply raises ParseError."""
    with pytest.raises(ParseError):
        NetworkTimeParser().parse("-MSSTM: no network service")


def test_network_time_parser_missing_prefix():
    """Test a reply without the prefix is a protocol mismatch."""
    with pytest.raises(ProtocolMismatchError):
        NetworkTimeParser().parse("+CSQ:5")


def test_ticks_conversion():
    """Test tick helpers."""
    assert ticks_to_unix(0) == 1399818235
    assert ticks_to_datetime(0) == datetime(2014, 5, 11, 14, 23, 55, tzinfo=timezone.utc)
    assert ticks_to_datetime(1).microsecond == 90000


def test_frame_parser_strips_echo_header_and_checksum():
    """Test payload extraction from a binary frame."""
    parser = MtFrameParser()

    assert parser.parse(b"AT+SBDRB\r\x00\x05hello\x02\x14") == b"hello"
    assert parser.parse(b"AT+SBDRB\x00\x02hi\x00\xd1") == b"hi"
    assert parser.parse(b"\x00\x02hi\x00\xd1") == b"hi"


def test_frame_parser_short_frame_is_empty():
    """Test frames of four bytes or fewer hold no payload."""
    parser = MtFrameParser()

    assert parser.parse(b"AT+SBDRB\r\x00\x00\x00\x00") == b""
    assert parser.parse(b"") == b""


def test_frame_parser_does_not_verify_checksum():
    """Test a wrong checksum is passed through."""
    assert MtFrameParser().parse(b"\x00\x02hi\xff\xff") == b"hi"


def test_parser_line_types():
    """Test each parser declares the line type it accepts."""
    assert get_args(SbdixParser.__orig_bases__[0]) == (str, SbdixReply)
    assert get_args(SignalStrengthParser.__orig_bases__[0]) == (str, int)
    assert get_args(NetworkTimeParser.__orig_bases__[0]) == (str, int)
    assert get_args(MtFrameParser.__orig_bases__[0]) == (bytes, bytes)


@pytest.mark.parametrize("token", ["²", "٣", "1¹"])
def test_parse_decimal_rejects_non_ascii_digits(token):
    """Test only ASCII digits are accepted as decimal integers."""
    with pytest.raises(ParseError):
        parse_decimal(token)
