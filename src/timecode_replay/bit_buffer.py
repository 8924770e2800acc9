"""
Per-minute echo buffer of raw log characters

Holds the characters received since the last minute boundary at the
decoder's second index, so the report can echo the minute as it appeared
in the log.
"""

import logging

import numpy as np

from .stations import BIT_BUFFER_SIZE

logger = logging.getLogger(__name__)


class MinuteBitBuffer:
    """
    Fixed-size character buffer indexed by second.

    Unwritten positions below the highest written one read back as spaces.

    Args:
        capacity: Number of positions; one more than the adapter's counter
            capacity so a saturated counter still has a slot
    """

    def __init__(self, capacity: int = BIT_BUFFER_SIZE + 1):
        self.capacity = capacity
        self._chars = np.full(capacity, ' ', dtype='<U1')
        self._length = 0

    def place(self, index: int, char: str) -> bool:
        """
        Store a character at a second index.

        Returns:
            False if the index is outside the buffer (the character is dropped)
        """
        if not 0 <= index < self.capacity:
            logger.debug(f"Dropping {char!r} at second {index}, buffer holds {self.capacity}")
            return False
        self._chars[index] = char
        self._length = max(self._length, index + 1)
        return True

    def clear(self):
        self._chars[:] = ' '
        self._length = 0

    def chars(self) -> str:
        """Characters of the current minute, in second order"""
        return ''.join(self._chars[:self._length].tolist())

    def __len__(self) -> int:
        return self._length
