#!/usr/bin/env python3
"""
DCF77/MSF Telegram Encoder

Generates log lines in the recorder's character format for a given civil
time, one line per minute:

- DCF77: 59 characters '0'/'1' (60 in a leap second minute), BCD least
  significant bit first, even parities
- MSF: '4' begin-of-minute marker followed by 59 bit pair characters
  ('0'..'3' = bit A + 2 * bit B), BCD most significant bit first, odd
  parities, end-of-minute marker 01111110 in the A bits

A telegram describes the minute that starts at the next minute marker, so
a line encoded for 00:00 is the one received during 23:59.

Used to build test logs and by the `synth` command.
"""

from datetime import datetime, timedelta
from typing import List, Optional, Union
import logging

from .stations import NOMINAL_MINUTE_LENGTH, StationType

logger = logging.getLogger(__name__)


class DCF77TelegramEncoder:
    """Encoder for DCF77 minute telegrams"""

    def encode_minute(
        self,
        dt: datetime,
        summer: bool = False,
        dst_announced: bool = False,
        leap_announced: bool = False,
        call_bit: bool = False,
        third_party: int = 0,
        leap_second: Optional[int] = None
    ) -> str:
        """
        Generate the log line for one minute

        Args:
            dt: Civil time the telegram announces
            summer: CEST instead of CET
            dst_announced: Set bit 16
            leap_announced: Set bit 19
            call_bit: Set bit 15
            third_party: 14-bit value for bits 1-14
            leap_second: None for a 60 second minute, else the value (0 or 1)
                of the inserted bit 59

        Returns:
            59 (or 60) characters, no newline
        """
        code = self._generate_pattern(
            dt.minute, dt.hour, dt.day, dt.isoweekday(), dt.month, dt.year % 100,
            summer, dst_announced, leap_announced, call_bit, third_party
        )
        if leap_second is not None:
            code.append(leap_second & 1)
        return ''.join(str(b) for b in code)

    def _generate_pattern(
        self,
        minute: int,
        hour: int,
        day: int,
        weekday: int,
        month: int,
        year: int,
        summer: bool,
        dst_announced: bool,
        leap_announced: bool,
        call_bit: bool,
        third_party: int
    ) -> List[int]:
        """
        Generate 59-element bit pattern (one element per second)

        BCD encoding is LITTLE-ENDIAN (LSB first), units then tens.
        """
        code = [0] * 59

        # Helper function: encode BCD value in little-endian format (lsb first)
        def encode_bcd(value, start_index, width):
            units, tens = value % 10, value // 10
            for i in range(min(4, width)):
                code[start_index + i] = (units >> i) & 1
            for i in range(width - 4):
                code[start_index + 4 + i] = (tens >> i) & 1

        # Seconds 1-14: third-party bits
        for i in range(14):
            code[1 + i] = (third_party >> i) & 1

        code[15] = int(call_bit)
        code[16] = int(dst_announced)
        code[17] = int(summer)
        code[18] = int(not summer)
        code[19] = int(leap_announced)

        # Second 20: start of time, always 1
        code[20] = 1

        encode_bcd(minute, 21, 7)
        code[28] = sum(code[21:28]) % 2

        encode_bcd(hour, 29, 6)
        code[35] = sum(code[29:35]) % 2

        encode_bcd(day, 36, 6)
        encode_bcd(weekday, 42, 3)
        encode_bcd(month, 45, 5)
        encode_bcd(year, 50, 8)
        code[58] = sum(code[36:58]) % 2

        return code


class MSFTelegramEncoder:
    """Encoder for MSF minute telegrams"""

    END_OF_MINUTE_MARKER = [0, 1, 1, 1, 1, 1, 1, 0]

    def encode_minute(
        self,
        dt: datetime,
        summer: bool = False,
        dst_announced: bool = False,
        dut1: int = 0,
        minute_length: int = NOMINAL_MINUTE_LENGTH
    ) -> str:
        """
        Generate the log line for one minute

        Args:
            dt: Civil time the telegram announces
            summer: Set bit 58B
            dst_announced: Set bit 53B
            dut1: UT1 - UTC in tenths of a second, -8..8
            minute_length: 59, 60 or 61; bit 16 is dropped or repeated

        Returns:
            minute_length characters starting with '4', no newline
        """
        if not -8 <= dut1 <= 8:
            raise ValueError(f"DUT1 must be within -8..8, got {dut1}")
        if minute_length not in (59, 60, 61):
            raise ValueError(f"Minute length must be 59, 60 or 61, got {minute_length}")

        bits_a, bits_b = self._generate_pattern(
            dt.year % 100, dt.month, dt.day, dt.isoweekday() % 7, dt.hour, dt.minute,
            summer, dst_announced, dut1
        )
        chars = ['4'] + [str(a + 2 * b) for a, b in zip(bits_a[1:], bits_b[1:])]
        if minute_length == 61:
            chars.insert(17, chars[16])
        elif minute_length == 59:
            del chars[16]
        return ''.join(chars)

    def _generate_pattern(
        self,
        year: int,
        month: int,
        day: int,
        weekday: int,
        hour: int,
        minute: int,
        summer: bool,
        dst_announced: bool,
        dut1: int
    ) -> tuple:
        """
        Generate the 60-element A and B bit patterns of a nominal minute

        BCD encoding is BIG-ENDIAN (MSB first), tens then units.
        """
        bits_a = [0] * 60
        bits_b = [0] * 60

        # Helper function: encode BCD value in big-endian format (msb first)
        def encode_bcd(value, start_index, width):
            bcd = ((value // 10) << 4) | (value % 10)
            for i in range(width):
                bits_a[start_index + i] = (bcd >> (width - 1 - i)) & 1

        # Seconds 1-16 (B): DUT1 in unary, positive then negative
        for i in range(abs(dut1)):
            bits_b[(1 if dut1 > 0 else 9) + i] = 1

        encode_bcd(year, 17, 8)
        encode_bcd(month, 25, 5)
        encode_bcd(day, 30, 6)
        encode_bcd(weekday, 36, 3)
        encode_bcd(hour, 39, 6)
        encode_bcd(minute, 45, 7)

        bits_a[52:60] = self.END_OF_MINUTE_MARKER

        bits_b[53] = int(dst_announced)
        # Odd parities
        bits_b[54] = (sum(bits_a[17:25]) + 1) % 2
        bits_b[55] = (sum(bits_a[25:36]) + 1) % 2
        bits_b[56] = (sum(bits_a[36:39]) + 1) % 2
        bits_b[57] = (sum(bits_a[39:52]) + 1) % 2
        bits_b[58] = int(summer)

        return bits_a, bits_b


def encode_dcf77_minute(dt: datetime, **kwargs) -> str:
    """Log line for one DCF77 minute; see DCF77TelegramEncoder.encode_minute"""
    return DCF77TelegramEncoder().encode_minute(dt, **kwargs)


def encode_msf_minute(dt: datetime, **kwargs) -> str:
    """Log line for one MSF minute; see MSFTelegramEncoder.encode_minute"""
    return MSFTelegramEncoder().encode_minute(dt, **kwargs)


def synthesize_log(
    station: Union[str, StationType],
    start: datetime,
    minutes: int,
    summer: bool = False
) -> str:
    """
    Build a log of consecutive minutes.

    Args:
        station: Station name or StationType (NPL uses the MSF format)
        start: Time announced by the first line
        minutes: Number of lines
        summer: Mark every minute as summer time

    Returns:
        Log text, one newline-terminated line per minute
    """
    if not isinstance(station, StationType):
        station = StationType.from_name(station)
    if minutes < 0:
        raise ValueError(f"Number of minutes must not be negative, got {minutes}")

    if station is StationType.DCF77:
        encode = DCF77TelegramEncoder().encode_minute
    else:
        encode = MSFTelegramEncoder().encode_minute

    lines = []
    for i in range(minutes):
        lines.append(encode(start + timedelta(minutes=i), summer=summer) + '\n')
    logger.debug(f"Synthesized {minutes} {station.value} minutes from {start}")
    return ''.join(lines)
