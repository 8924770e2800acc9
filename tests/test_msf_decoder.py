#!/usr/bin/env python3
"""
Tests for the MSF time code decoder
"""

from datetime import datetime

import pytest

from timecode_replay.decoders import MSFDecoder
from timecode_replay.interfaces import DST_SUMMER
from timecode_replay.telegram_encoder import encode_msf_minute

PAIRS = {
    '0': (False, False),
    '1': (True, False),
    '2': (False, True),
    '3': (True, True),
    '_': (None, None),
}

# Captured minutes
LINE_60 = "4 00000000 22000000 00100000 00011 101000 110 100011 1011001 01133110"
LINE_59 = "4 00000000 0000000 00100011 10000 100011 001 100011 0010110 01131330"
LINE_61 = "4 00000000 000000000 00100011 10000 100011 001 100011 0010110 01131330"


def receive(decoder, line):
    """Feed one log line, then decode"""
    for c in line.replace(' ', ''):
        if c == '4':
            decoder.begin_minute()
        else:
            decoder.set_current_bits(*PAIRS[c])
        decoder.increase_second()
    assert decoder.second == decoder.minute_length
    decoder.decode_time()
    decoder.force_new_minute()
    decoder.increase_second()


def fields(decoder):
    rdt = decoder.radio_datetime
    return (rdt.year, rdt.month, rdt.day, rdt.weekday, rdt.hour, rdt.minute)


@pytest.fixture
def decoder():
    return MSFDecoder()


class TestMSFDecode:
    """Tests for decoding single minutes"""

    def test_captured_minute(self, decoder):
        receive(decoder, LINE_60)
        assert fields(decoder) == (20, 3, 28, 6, 23, 59)
        assert decoder.radio_datetime.dst == 0
        assert decoder.dut1 == -2
        assert decoder.minute_length == 60
        assert (decoder.parity_1, decoder.parity_2, decoder.parity_3, decoder.parity_4) == \
            (True, True, True, True)
        assert decoder.end_of_minute_marker_present
        assert not decoder.first_minute

    def test_short_minute(self, decoder):
        """Test fields move back by one second in a 59 second minute"""
        receive(decoder, LINE_59)
        assert decoder.minute_length == 59
        assert fields(decoder) == (23, 10, 23, 1, 23, 16)
        assert decoder.radio_datetime.dst == DST_SUMMER
        assert decoder.dut1 == 0

    def test_long_minute(self, decoder):
        """Test fields move forward by one second in a 61 second minute"""
        receive(decoder, LINE_61)
        assert decoder.minute_length == 61
        assert fields(decoder) == (23, 10, 23, 1, 23, 16)
        assert decoder.dut1 == 0

    def test_missing_marker(self, decoder):
        line = list(LINE_60.replace(' ', ''))
        line[55] = '_'
        receive(decoder, ''.join(line))
        assert not decoder.end_of_minute_marker_present
        assert decoder.minute_length == 60

    def test_invalid_dut1(self, decoder):
        line = list(LINE_60.replace(' ', ''))
        line[1] = '2'
        line[3] = '2'
        receive(decoder, ''.join(line))
        assert decoder.dut1 is None
        assert fields(decoder) == (20, 3, 28, 6, 23, 59)

    def test_bad_parity(self, decoder):
        line = list(LINE_60.replace(' ', ''))
        # Flip 55B (month/day parity): '3' -> '1'
        line[55] = '1'
        receive(decoder, ''.join(line))
        assert decoder.parity_2 is False
        assert decoder.radio_datetime.month is None
        assert decoder.radio_datetime.day is None
        assert decoder.first_minute


class TestMSFSequence:
    """Tests for consecutive minutes"""

    def test_next_day_without_jumps(self, decoder):
        receive(decoder, LINE_60)
        receive(decoder, encode_msf_minute(datetime(2020, 3, 29, 0, 0), dut1=-2))
        assert fields(decoder) == (20, 3, 29, 0, 0, 0)
        assert not decoder.radio_datetime.jumps.any()

    def test_begin_of_minute_resynchronizes(self, decoder):
        """Test the marker restarts the minute after stray seconds"""
        decoder.set_current_bits(True, True)
        decoder.increase_second()
        decoder.increase_second()
        receive(decoder, LINE_60)
        assert fields(decoder) == (20, 3, 28, 6, 23, 59)

    def test_marker_state_reset_per_minute(self, decoder):
        receive(decoder, LINE_59)
        assert decoder.minute_length == 60
        assert not decoder.end_of_minute_marker_present
