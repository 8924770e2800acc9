"""
MSF time code decoder

Two bits (A and B) per second, most significant bit first. Positions are
those of a 60 second minute; from second 17 on they move by -1 in a 59
second minute and by +1 in a 61 second minute:

    0       begin-of-minute marker (500 ms off)
    1B-8B   DUT1 positive, unary
    9B-16B  DUT1 negative, unary
    17A-24A year, 25A-29A month, 30A-35A day of month,
    36A-38A weekday (0 = Sunday), 39A-44A hour, 45A-51A minute
    52A-59A end-of-minute marker 01111110
    53B     DST change imminent
    54B     odd parity over 17A-24A
    55B     odd parity over 25A-35A
    56B     odd parity over 36A-38A
    57B     odd parity over 39A-51A
    58B     summer time
"""

import logging
from typing import List, Optional

from ..stations import BIT_BUFFER_SIZE, NOMINAL_MINUTE_LENGTH
from .base import TimeCodeDecoder
from .bits import decode_bcd, decode_unary, odd_parity

logger = logging.getLogger(__name__)

END_OF_MINUTE_MARKER = (False, True, True, True, True, True, True, False)

# First shifted position
SHIFT_START = 17

YEAR_WEIGHTS = (80, 40, 20, 10, 8, 4, 2, 1)
MONTH_WEIGHTS = (10, 8, 4, 2, 1)
DAY_WEIGHTS = (20, 10, 8, 4, 2, 1)
WEEKDAY_WEIGHTS = (4, 2, 1)
HOUR_WEIGHTS = (20, 10, 8, 4, 2, 1)
MINUTE_WEIGHTS = (40, 20, 10, 8, 4, 2, 1)


class MSFDecoder(TimeCodeDecoder):
    """
    Stateful MSF decoder fed one bit pair per second.

    The minute length is learned from the end-of-minute marker: when its
    last bit lands on second 58, 59 or 60 the minute is 59, 60 or 61 seconds
    long. Without a marker it stays 60.
    """

    def __init__(self):
        super().__init__(sunday=0)
        self.bits_a: List[Optional[bool]] = [None] * BIT_BUFFER_SIZE
        self.bits_b: List[Optional[bool]] = [None] * BIT_BUFFER_SIZE
        self.end_of_minute_marker_present = False

        self.parity_1: Optional[bool] = None
        self.parity_2: Optional[bool] = None
        self.parity_3: Optional[bool] = None
        self.parity_4: Optional[bool] = None
        self.dut1: Optional[int] = None

    def set_current_bits(self, bit_a: Optional[bool], bit_b: Optional[bool]):
        """Store the bit pair of the current second and look for the end-of-minute marker"""
        if self.second >= BIT_BUFFER_SIZE:
            return
        self.bits_a[self.second] = bit_a
        self.bits_b[self.second] = bit_b
        self._check_end_of_minute_marker()

    def _check_end_of_minute_marker(self):
        if not 58 <= self.second <= 60:
            return
        window = tuple(self.bits_a[self.second - 7:self.second + 1])
        if window == END_OF_MINUTE_MARKER:
            self.minute_length = self.second + 1
            self.end_of_minute_marker_present = True

    def begin_minute(self):
        """Begin-of-minute marker seen: the current second becomes second 0"""
        self.new_minute = False
        self.second = 0
        self.reset_minute()

    def reset_minute(self):
        self.bits_a = [None] * BIT_BUFFER_SIZE
        self.bits_b = [None] * BIT_BUFFER_SIZE
        self.minute_length = NOMINAL_MINUTE_LENGTH
        self.end_of_minute_marker_present = False

    def _a(self, start: int, stop: int) -> List[Optional[bool]]:
        offset = self.minute_length - NOMINAL_MINUTE_LENGTH
        return self.bits_a[start + offset:stop + offset]

    def _b(self, position: int) -> Optional[bool]:
        if position >= SHIFT_START:
            position += self.minute_length - NOMINAL_MINUTE_LENGTH
        return self.bits_b[position]

    def decode_time(self):
        rdt = self.radio_datetime
        added_minute = False
        if not self.first_minute:
            added_minute = rdt.add_minute()

        positive = decode_unary(self.bits_b[1:9])
        negative = decode_unary(self.bits_b[9:17])
        if positive is None or negative is None or (positive and negative):
            self.dut1 = None
        else:
            self.dut1 = positive - negative

        self.parity_1 = odd_parity(self._a(17, 25) + [self._b(54)])
        self.parity_2 = odd_parity(self._a(25, 36) + [self._b(55)])
        self.parity_3 = odd_parity(self._a(36, 39) + [self._b(56)])
        self.parity_4 = odd_parity(self._a(39, 52) + [self._b(57)])

        rdt.set_year(decode_bcd(self._a(17, 25), YEAR_WEIGHTS),
                     self.parity_1 is True, added_minute)
        rdt.set_month(decode_bcd(self._a(25, 30), MONTH_WEIGHTS),
                      self.parity_2 is True, added_minute)
        rdt.set_day(decode_bcd(self._a(30, 36), DAY_WEIGHTS),
                    self.parity_2 is True, added_minute)
        rdt.set_weekday(decode_bcd(self._a(36, 39), WEEKDAY_WEIGHTS),
                        self.parity_3 is True, added_minute)
        rdt.set_hour(decode_bcd(self._a(39, 45), HOUR_WEIGHTS),
                     self.parity_4 is True, added_minute)
        rdt.set_minute(decode_bcd(self._a(45, 52), MINUTE_WEIGHTS),
                       self.parity_4 is True, added_minute)

        rdt.set_dst(self._b(58), self._b(53), added_minute)
        rdt.set_leap_second(False, self.minute_length)

        logger.debug(
            f"MSF decoded {rdt.year}-{rdt.month}-{rdt.day} {rdt.hour}:{rdt.minute} "
            f"length={self.minute_length} marker={self.end_of_minute_marker_present}"
        )
        self._finish_decode()
