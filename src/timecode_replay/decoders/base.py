"""
Second counter and minute bookkeeping common to all station decoders
"""

from abc import ABC, abstractmethod

from ..stations import BIT_BUFFER_SIZE, NOMINAL_MINUTE_LENGTH
from .radio_datetime import RadioDateTime


class TimeCodeDecoder(ABC):
    """
    Base class for the DCF77 and MSF decoders.

    Keeps the position within the minute (second), the first-minute state
    and the RadioDateTime all stations share. Subclasses own the bit
    storage and the telegram layout.
    """

    #: Highest value the second counter can reach
    capacity: int = BIT_BUFFER_SIZE

    def __init__(self, sunday: int):
        self.radio_datetime = RadioDateTime(sunday=sunday)
        self.second = 0
        self.first_minute = True
        self.new_minute = False
        self.minute_length = NOMINAL_MINUTE_LENGTH

    def increase_second(self) -> bool:
        """
        Move to the next second.

        Returns:
            False if the counter is already at capacity, True otherwise
        """
        if self.new_minute:
            self.new_minute = False
            self.second = 0
            self.reset_minute()
            return True
        if self.second >= self.capacity:
            return False
        self.second += 1
        return True

    def force_new_minute(self):
        """Restart the counter at 0 on the next increase_second() call"""
        self.new_minute = True

    def _finish_decode(self):
        if self.radio_datetime.is_complete():
            self.first_minute = False

    @abstractmethod
    def reset_minute(self):
        """Clear the per-minute bit storage"""

    @abstractmethod
    def decode_time(self):
        """Decode the bits of the minute just received"""
