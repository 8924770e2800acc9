#!/usr/bin/env python3
"""
Tests for the DCF77/MSF telegram encoder
"""

from datetime import datetime

import pytest

from timecode_replay.engine import replay_buffer
from timecode_replay.telegram_encoder import (
    DCF77TelegramEncoder,
    MSFTelegramEncoder,
    encode_dcf77_minute,
    encode_msf_minute,
    synthesize_log,
)


class TestDCF77Encoder:
    """Tests for DCF77 log lines"""

    def test_matches_captured_minute(self):
        line = encode_dcf77_minute(datetime(1999, 12, 31, 23, 58))
        assert line == "0 00000000000000 0 001 0 1 0001101 1 110001 1 100011 101 01001 10011001 1".replace(' ', '')

    def test_status_bits(self):
        line = DCF77TelegramEncoder().encode_minute(
            datetime(2011, 3, 27, 1, 59), summer=False, dst_announced=True,
            leap_announced=True, call_bit=True, third_party=1
        )
        assert line[1] == '1'
        assert line[15:21] == '110111'

    def test_leap_second_bit(self):
        line = encode_dcf77_minute(datetime(2017, 1, 1, 1, 0), leap_second=1)
        assert len(line) == 60
        assert line[59] == '1'


class TestMSFEncoder:
    """Tests for MSF log lines"""

    def test_matches_captured_minute(self):
        line = encode_msf_minute(datetime(2020, 3, 28, 23, 59), dut1=-2)
        assert line == "4 00000000 22000000 00100000 00011 101000 110 100011 1011001 01133110".replace(' ', '')

    def test_summer_and_positive_dut1(self):
        line = MSFTelegramEncoder().encode_minute(datetime(2023, 10, 23, 23, 16), summer=True, dut1=3)
        assert line[1:9] == '22200000'
        assert line[58] == '3'

    @pytest.mark.parametrize("length", [59, 61])
    def test_minute_length(self, length):
        line = encode_msf_minute(datetime(2023, 10, 23, 23, 16), summer=True, minute_length=length)
        assert len(line) == length
        assert line.endswith('01131330')

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            encode_msf_minute(datetime(2020, 1, 1), dut1=9)
        with pytest.raises(ValueError):
            encode_msf_minute(datetime(2020, 1, 1), minute_length=62)


class TestSynthesizeLog:
    """Tests for multi-minute logs"""

    def test_line_count(self):
        log = synthesize_log("msf", datetime(2020, 3, 28, 23, 58), 4)
        lines = log.splitlines()
        assert len(lines) == 4
        assert all(line.startswith('4') for line in lines)
        assert log.endswith('\n')

    def test_zero_minutes(self):
        assert synthesize_log("dcf77", datetime(2020, 1, 1), 0) == ''

    def test_negative_minutes(self):
        with pytest.raises(ValueError):
            synthesize_log("dcf77", datetime(2020, 1, 1), -1)

    def test_replays_cleanly(self):
        """Test a synthesized hour decodes without parity errors or jumps"""
        log = synthesize_log("dcf77", datetime(2011, 10, 19, 23, 30), 60, summer=True)
        lines = replay_buffer("dcf77", log)
        assert not any("parity" in line or "jumped" in line for line in lines)
        assert "11-10-20 Thursday 00:29 [summer] [] []" in lines
