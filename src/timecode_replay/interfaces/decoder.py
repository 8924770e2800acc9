"""
Decoder Adapter Interface

Defines the contract the replay engine programs against, whatever station
is being replayed. Each station wraps its own decoder behind it.
"""

from abc import ABC, abstractmethod

from .data_models import DecodedMinuteReport, SecondSlot


class DecoderAdapter(ABC):
    """
    Narrow facade over a per-station time code decoder.

    The engine pushes one slot per received second, advances the second
    counter, and at each end-of-minute sentinel compares the observed
    length with expected_minute_length() before asking for a decode.

    Design principle:
        The engine doesn't care about bit layouts, parity rules, DST or
        leap second bookkeeping. It only needs a second counter, a length
        expectation and a structured result.
    """

    #: Highest value current_second_index() can reach
    capacity: int = 61

    @abstractmethod
    def push_second(self, slot: SecondSlot) -> None:
        """
        Record the bit value(s) of the current second.

        Args:
            slot: Value of this second; undetermined bits are None

        Raises:
            ClassificationError: If the slot shape is impossible for this
                station (e.g. a bit pair pushed into a single-bit decoder)
        """
        pass

    @abstractmethod
    def advance_second(self) -> bool:
        """
        Finish the current second and move to the next one.

        After force_resynchronize() the next call restarts the counter at 0
        instead of incrementing it.

        Returns:
            False if the counter already sits at capacity (it saturates),
            True otherwise
        """
        pass

    @abstractmethod
    def current_second_index(self) -> int:
        """
        Get the decoder's position within the minute.

        Returns:
            Zero-based index of the second about to be pushed, which is also
            the number of seconds consumed since the last boundary
        """
        pass

    @abstractmethod
    def expected_minute_length(self) -> int:
        """
        Get the decoder's prediction for the current minute's length.

        Returns:
            60 nominally, 59 or 61 around leap seconds
        """
        pass

    @abstractmethod
    def decode_and_finalize(self) -> DecodedMinuteReport:
        """
        Decode the minute just received.

        Only called once the engine has confirmed the observed length
        matches expected_minute_length().

        Returns:
            Structured result for the report formatter
        """
        pass

    @abstractmethod
    def force_resynchronize(self) -> None:
        """
        Drop the partial minute and prepare for the next one.

        Called at every end-of-minute sentinel, decoded or not.
        """
        pass

    def begin_minute(self) -> None:
        """
        Treat the current second as the start of a fresh minute.

        Only stations with a begin-of-minute marker need this.
        """
        pass
