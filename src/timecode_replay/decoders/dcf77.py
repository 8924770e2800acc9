"""
DCF77 time code decoder

One bit per second, least significant bit first within each BCD field:

    0       start of minute, always 0
    1-14    third-party (civil warning) bits
    15      call bit (transmitter irregularity)
    16      DST change announced
    17, 18  CEST / CET
    19      leap second announced
    20      start of time, always 1
    21-27   minute, 28 even parity over 21-28
    29-34   hour, 35 even parity over 29-35
    36-41   day of month, 42-44 weekday (1 = Monday), 45-49 month,
    50-57   year, 58 even parity over 36-58
    59      leap second bit (only in 61 second minutes)

The 59th second (60th in a leap second minute) carries no pulse.
"""

import logging
from typing import List, Optional

from ..interfaces.data_models import LEAP_ANNOUNCED
from ..stations import BIT_BUFFER_SIZE, NOMINAL_MINUTE_LENGTH
from .base import TimeCodeDecoder
from .bits import decode_bcd, decode_lsb_first, even_parity

logger = logging.getLogger(__name__)

MINUTE_WEIGHTS = (1, 2, 4, 8, 10, 20, 40)
HOUR_WEIGHTS = (1, 2, 4, 8, 10, 20)
DAY_WEIGHTS = (1, 2, 4, 8, 10, 20)
WEEKDAY_WEIGHTS = (1, 2, 4)
MONTH_WEIGHTS = (1, 2, 4, 8, 10)
YEAR_WEIGHTS = (1, 2, 4, 8, 10, 20, 40, 80)


class DCF77Decoder(TimeCodeDecoder):
    """
    Stateful DCF77 decoder fed one bit per second.

    minute_length is the expected length of the minute being received,
    next_minute_length the expectation for the one after it (61 when a
    leap second is announced and the decoded minute is 59).
    """

    def __init__(self):
        super().__init__(sunday=7)
        self.bits: List[Optional[bool]] = [None] * BIT_BUFFER_SIZE
        self.next_minute_length = NOMINAL_MINUTE_LENGTH

        self.parity_1: Optional[bool] = None
        self.parity_2: Optional[bool] = None
        self.parity_3: Optional[bool] = None
        self.bit_0_ok: Optional[bool] = None
        self.bit_20_ok: Optional[bool] = None
        self.call_bit: Optional[bool] = None
        self.third_party_buffer: Optional[int] = None
        self.leap_second_is_one: Optional[bool] = None

    def set_current_bit(self, value: Optional[bool]):
        """Store the bit of the current second; ignored past the buffer end"""
        if self.second < BIT_BUFFER_SIZE:
            self.bits[self.second] = value

    def reset_minute(self):
        self.bits = [None] * BIT_BUFFER_SIZE

    def force_new_minute(self):
        super().force_new_minute()
        self.minute_length = self.next_minute_length
        self.next_minute_length = NOMINAL_MINUTE_LENGTH

    def decode_time(self):
        rdt = self.radio_datetime
        added_minute = False
        if not self.first_minute:
            added_minute = rdt.add_minute()

        b = self.bits
        self.bit_0_ok = None if b[0] is None else not b[0]
        self.bit_20_ok = b[20]
        self.call_bit = b[15]
        self.third_party_buffer = decode_lsb_first(b[1:15])

        self.parity_1 = even_parity(b[21:29])
        self.parity_2 = even_parity(b[29:36])
        self.parity_3 = even_parity(b[36:59])
        date_ok = self.parity_3 is True

        rdt.set_year(decode_bcd(b[50:58], YEAR_WEIGHTS), date_ok, added_minute)
        rdt.set_month(decode_bcd(b[45:50], MONTH_WEIGHTS), date_ok, added_minute)
        rdt.set_weekday(decode_bcd(b[42:45], WEEKDAY_WEIGHTS), date_ok, added_minute)
        rdt.set_day(decode_bcd(b[36:42], DAY_WEIGHTS), date_ok, added_minute)
        rdt.set_hour(decode_bcd(b[29:35], HOUR_WEIGHTS), self.parity_2 is True, added_minute)
        rdt.set_minute(decode_bcd(b[21:28], MINUTE_WEIGHTS), self.parity_1 is True, added_minute)

        summer = None
        if b[17] is not None and b[18] is not None and b[17] != b[18]:
            summer = b[17]
        rdt.set_dst(summer, b[16], added_minute)
        rdt.set_leap_second(b[19], self.minute_length)

        self.leap_second_is_one = b[59] if self.minute_length == 61 else None

        if rdt.leap_second is not None and rdt.leap_second & LEAP_ANNOUNCED and rdt.minute == 59:
            self.next_minute_length = 61
        else:
            self.next_minute_length = NOMINAL_MINUTE_LENGTH

        logger.debug(
            f"DCF77 decoded {rdt.year}-{rdt.month}-{rdt.day} {rdt.hour}:{rdt.minute} "
            f"parities={self.parity_1},{self.parity_2},{self.parity_3}"
        )
        self._finish_decode()
