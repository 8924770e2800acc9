"""
Radio date/time with minute prediction and jump tracking

Both stations broadcast the same kind of civil time: two-digit year, month,
day, weekday, hour, minute plus DST and leap second status. RadioDateTime
holds the last accepted values, predicts the next minute, and flags every
field that disagrees with the prediction.
"""

import calendar
import logging
from typing import Optional

from ..interfaces.data_models import (
    DST_ANNOUNCED,
    DST_JUMP,
    DST_PROCESSED,
    DST_SUMMER,
    LEAP_ANNOUNCED,
    LEAP_MISSING,
    LEAP_PROCESSED,
    JumpFlags,
)
from ..stations import NOMINAL_MINUTE_LENGTH

logger = logging.getLogger(__name__)


def last_day_of_month(year: int, month: int) -> int:
    """Days in the given month; two-digit years are taken as 20xx"""
    return calendar.monthrange(2000 + year, month)[1]


class RadioDateTime:
    """
    Date and time as decoded from a time signal.

    Fields stay None until a minute with valid parity supplies them. A
    field received with bad or undetermined parity never overwrites the
    prediction made by add_minute().

    Args:
        sunday: Weekday value the station uses for Sunday (7 for DCF77,
            0 for MSF); the other days are always 1 = Monday .. 6 = Saturday
    """

    def __init__(self, sunday: int = 7):
        if sunday not in (0, 7):
            raise ValueError(f"Sunday must be 0 or 7, got {sunday}")
        self.sunday = sunday

        self.year: Optional[int] = None
        self.month: Optional[int] = None
        self.day: Optional[int] = None
        self.weekday: Optional[int] = None
        self.hour: Optional[int] = None
        self.minute: Optional[int] = None

        self.dst: Optional[int] = None
        self.leap_second: Optional[int] = None
        self.jumps = JumpFlags()

    def is_complete(self) -> bool:
        """True once every date and time field is known"""
        return None not in (
            self.year, self.month, self.day, self.weekday, self.hour, self.minute
        )

    def add_minute(self) -> bool:
        """
        Advance the stored time by one minute.

        Carries into hour, day, month and year. An announced DST change is
        applied when the hour rolls over.

        Returns:
            False (and leaves everything untouched) unless all fields are known
        """
        if not self.is_complete():
            return False

        self.minute += 1
        if self.minute < 60:
            return True
        self.minute = 0

        self.hour += 1
        if self.dst is not None and self.dst & DST_ANNOUNCED:
            self.hour += -1 if self.dst & DST_SUMMER else 1
        if self.hour < 24:
            return True
        self.hour -= 24

        self._add_day()
        return True

    def _add_day(self):
        if self.weekday == self.sunday:
            self.weekday = 1
        elif self.weekday == 6:
            self.weekday = self.sunday
        else:
            self.weekday += 1

        self.day += 1
        if self.day <= last_day_of_month(self.year, self.month):
            return
        self.day = 1
        self.month += 1
        if self.month <= 12:
            return
        self.month = 1
        self.year = (self.year + 1) % 100

    # =========================================================================
    # FIELD SETTERS
    # =========================================================================

    def _set_field(self, name: str, value: Optional[int], low: int, high: int,
                   valid: bool, check_jump: bool):
        if value is None or not valid or not low <= value <= high:
            setattr(self.jumps, name, False)
            return
        old = getattr(self, name)
        setattr(self.jumps, name, check_jump and old is not None and old != value)
        setattr(self, name, value)

    def set_year(self, value: Optional[int], valid: bool, check_jump: bool):
        self._set_field('year', value, 0, 99, valid, check_jump)

    def set_month(self, value: Optional[int], valid: bool, check_jump: bool):
        self._set_field('month', value, 1, 12, valid, check_jump)

    def set_day(self, value: Optional[int], valid: bool, check_jump: bool):
        """Set the day of month; call after set_year() and set_month()"""
        high = 31
        if self.year is not None and self.month is not None:
            high = last_day_of_month(self.year, self.month)
        self._set_field('day', value, 1, high, valid, check_jump)

    def set_weekday(self, value: Optional[int], valid: bool, check_jump: bool):
        low, high = (1, 7) if self.sunday == 7 else (0, 6)
        self._set_field('weekday', value, low, high, valid, check_jump)

    def set_hour(self, value: Optional[int], valid: bool, check_jump: bool):
        self._set_field('hour', value, 0, 23, valid, check_jump)

    def set_minute(self, value: Optional[int], valid: bool, check_jump: bool):
        self._set_field('minute', value, 0, 59, valid, check_jump)

    # =========================================================================
    # STATUS
    # =========================================================================

    def set_dst(self, summer: Optional[bool], announced: Optional[bool], check_jump: bool):
        """
        Update the DST status; call after set_minute().

        Announcements are only counted outside minute 0. A season change at
        minute 0 that was announced becomes PROCESSED for one minute. An
        unannounced change is flagged as JUMP (when check_jump is set) and the
        old season is kept until the broadcast agrees with it again.

        Args:
            summer: Broadcast season, None if undetermined
            announced: Broadcast announcement bit, None if undetermined
            check_jump: Previous minute could be predicted
        """
        if summer is None:
            return

        if self.dst is None:
            self.dst = DST_SUMMER if summer else 0
            if announced and self.minute != 0:
                self.dst |= DST_ANNOUNCED
            return

        old = self.dst
        dst = old & (DST_SUMMER | DST_JUMP)
        if summer != bool(old & DST_SUMMER):
            if old & DST_ANNOUNCED and self.minute == 0:
                dst = ((dst & ~DST_JUMP) ^ DST_SUMMER) | DST_PROCESSED
            elif check_jump:
                dst |= DST_JUMP
                logger.debug(f"Unannounced DST change at minute {self.minute}")
            else:
                dst = (dst & ~DST_JUMP) ^ DST_SUMMER
        else:
            dst &= ~DST_JUMP

        if self.minute != 0 and not dst & DST_PROCESSED:
            if announced or (announced is None and old & DST_ANNOUNCED):
                dst |= DST_ANNOUNCED
        self.dst = dst

    def set_leap_second(self, announced: Optional[bool], minute_length: int):
        """
        Update the leap second status; call after set_minute().

        Args:
            announced: Broadcast announcement bit, None if undetermined
            minute_length: Length of the minute just received
        """
        old = self.leap_second or 0
        leap = 0
        if self.minute == 0:
            if minute_length != NOMINAL_MINUTE_LENGTH:
                leap = LEAP_PROCESSED
            elif old & LEAP_ANNOUNCED:
                leap = LEAP_MISSING
        elif announced or (announced is None and old & LEAP_ANNOUNCED):
            leap = LEAP_ANNOUNCED

        if self.leap_second is None and announced is None and not leap:
            return
        self.leap_second = leap
