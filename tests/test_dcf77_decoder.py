#!/usr/bin/env python3
"""
Tests for the DCF77 time code decoder
"""

from datetime import datetime

import pytest

from timecode_replay.decoders import DCF77Decoder
from timecode_replay.interfaces import DST_ANNOUNCED, DST_PROCESSED, DST_SUMMER, LEAP_PROCESSED
from timecode_replay.telegram_encoder import encode_dcf77_minute

BITS = {'0': False, '1': True, '_': None}

# 1999-12-31 Friday 23:58 CET, captured
LINE_1999 = "0 00000000000000 0 001 0 1 0001101 1 110001 1 100011 101 01001 10011001 1".replace(' ', '')


def receive(decoder, line):
    """Feed one log line plus the untransmitted last second, then decode"""
    for c in line:
        decoder.set_current_bit(BITS[c])
        decoder.increase_second()
    decoder.set_current_bit(None)
    decoder.increase_second()
    assert decoder.second == decoder.minute_length
    decoder.decode_time()
    decoder.force_new_minute()
    decoder.increase_second()


@pytest.fixture
def decoder():
    return DCF77Decoder()


class TestDCF77Decode:
    """Tests for decoding single minutes"""

    def test_captured_minute(self, decoder):
        receive(decoder, LINE_1999)
        rdt = decoder.radio_datetime
        assert (rdt.year, rdt.month, rdt.day) == (99, 12, 31)
        assert rdt.weekday == 5
        assert (rdt.hour, rdt.minute) == (23, 58)
        assert rdt.dst == 0
        assert (decoder.parity_1, decoder.parity_2, decoder.parity_3) == (True, True, True)
        assert decoder.bit_0_ok is True
        assert decoder.bit_20_ok is True
        assert decoder.call_bit is False
        assert decoder.third_party_buffer == 0
        assert not decoder.first_minute

    def test_counter_restarts(self, decoder):
        receive(decoder, LINE_1999)
        assert decoder.second == 0
        assert decoder.bits == [None] * 61

    def test_status_bits(self, decoder):
        line = encode_dcf77_minute(datetime(2011, 10, 19, 11, 35), summer=True,
                                   call_bit=True, third_party=0x1234)
        receive(decoder, line)
        assert decoder.call_bit is True
        assert decoder.third_party_buffer == 0x1234
        assert decoder.radio_datetime.dst == DST_SUMMER

    def test_parity_error_keeps_prediction(self, decoder):
        receive(decoder, LINE_1999)
        bad = list(encode_dcf77_minute(datetime(1999, 12, 31, 23, 59)))
        bad[21] = '0' if bad[21] == '1' else '1'
        receive(decoder, ''.join(bad))
        assert decoder.parity_1 is False
        assert decoder.radio_datetime.minute == 59
        assert not decoder.radio_datetime.jumps.minute

    def test_undetermined_parity(self, decoder):
        line = list(LINE_1999)
        line[30] = '_'
        receive(decoder, ''.join(line))
        assert decoder.parity_2 is None
        assert decoder.radio_datetime.hour is None
        assert decoder.first_minute

    def test_check_bits(self, decoder):
        line = list(LINE_1999)
        line[0] = '1'
        line[20] = '_'
        receive(decoder, ''.join(line))
        assert decoder.bit_0_ok is False
        assert decoder.bit_20_ok is None


class TestDCF77Sequence:
    """Tests for consecutive minutes"""

    def test_rollover_without_jumps(self, decoder):
        receive(decoder, LINE_1999)
        receive(decoder, encode_dcf77_minute(datetime(1999, 12, 31, 23, 59)))
        receive(decoder, encode_dcf77_minute(datetime(2000, 1, 1, 0, 0)))
        rdt = decoder.radio_datetime
        assert (rdt.year, rdt.month, rdt.day, rdt.weekday) == (0, 1, 1, 6)
        assert not rdt.jumps.any()

    def test_jump(self, decoder):
        receive(decoder, LINE_1999)
        receive(decoder, encode_dcf77_minute(datetime(1999, 12, 31, 10, 0)))
        jumps = decoder.radio_datetime.jumps
        assert jumps.hour and jumps.minute
        assert not (jumps.year or jumps.month or jumps.day or jumps.weekday)

    def test_summer_time_start(self, decoder):
        receive(decoder, encode_dcf77_minute(datetime(2011, 3, 27, 1, 58), dst_announced=True))
        assert decoder.radio_datetime.dst == DST_ANNOUNCED
        receive(decoder, encode_dcf77_minute(datetime(2011, 3, 27, 1, 59), dst_announced=True))
        receive(decoder, encode_dcf77_minute(datetime(2011, 3, 27, 3, 0), summer=True,
                                             dst_announced=True))
        rdt = decoder.radio_datetime
        assert rdt.dst == DST_SUMMER | DST_PROCESSED
        assert (rdt.hour, rdt.minute) == (3, 0)
        assert not rdt.jumps.any()

    def test_leap_second(self, decoder):
        receive(decoder, encode_dcf77_minute(datetime(2017, 1, 1, 0, 58), leap_announced=True))
        assert decoder.next_minute_length == 60
        receive(decoder, encode_dcf77_minute(datetime(2017, 1, 1, 0, 59), leap_announced=True))
        assert decoder.next_minute_length == 61
        assert decoder.minute_length == 61

        receive(decoder, encode_dcf77_minute(datetime(2017, 1, 1, 1, 0), leap_second=0))
        assert decoder.radio_datetime.leap_second == LEAP_PROCESSED
        assert decoder.leap_second_is_one is False
        assert decoder.next_minute_length == 60
        assert decoder.minute_length == 60

    def test_counter_saturates(self, decoder):
        for _ in range(61):
            assert decoder.increase_second()
        assert decoder.second == 61
        assert not decoder.increase_second()
        assert decoder.second == 61
