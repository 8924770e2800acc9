"""
Shared data structures for the replay pipeline

Raw log characters become Symbols (alphabet), data Symbols become
SecondSlots (pushed into a decoder adapter), and every validated minute
comes back as a DecodedMinuteReport for the report formatter.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

# =============================================================================
# DST / LEAP SECOND STATUS BITS
# =============================================================================

DST_ANNOUNCED = 1  # Change announced for the coming hour boundary
DST_PROCESSED = 2  # Change happened this minute (exclusive with ANNOUNCED)
DST_JUMP = 4       # Broadcast season changed without announcement
DST_SUMMER = 8     # Summer time in effect

LEAP_ANNOUNCED = 1  # Leap second announced for the coming hour boundary
LEAP_PROCESSED = 2  # This minute contained the leap second
LEAP_MISSING = 4    # Announced, but the minute came with nominal length


class ClassificationError(ValueError):
    """
    A log character or slot is impossible for the active station.

    Points at an inconsistent alphabet table or adapter wiring, not at a
    noisy log, so it is never recovered from mid-stream.
    """


class SymbolKind(Enum):
    """What a single log character means for the replay engine"""
    BIT = "bit"
    BIT_PAIR = "bit_pair"
    UNDETERMINED = "undetermined"
    BEGIN_OF_MINUTE = "begin_of_minute"
    END_OF_MINUTE = "end_of_minute"
    IGNORED = "ignored"


@dataclass(frozen=True)
class SecondSlot:
    """
    Logical value of one received second.

    Single-bit stations only use bit_a. Two-bit stations use both; each bit
    is independently None when it could not be determined.
    """
    bit_a: Optional[bool] = None
    bit_b: Optional[bool] = None

    @property
    def is_undetermined(self) -> bool:
        return self.bit_a is None and self.bit_b is None


@dataclass(frozen=True)
class Symbol:
    """Classified log character"""
    kind: SymbolKind
    char: str
    bit_a: Optional[bool] = None
    bit_b: Optional[bool] = None

    @property
    def is_data(self) -> bool:
        """True for symbols that carry a (possibly undetermined) second"""
        return self.kind in (SymbolKind.BIT, SymbolKind.BIT_PAIR, SymbolKind.UNDETERMINED)

    def to_slot(self) -> SecondSlot:
        """
        Convert a data symbol into the slot pushed into a decoder.

        Raises:
            ClassificationError: for control symbols, which carry no second
        """
        if not self.is_data:
            raise ClassificationError(
                f"Symbol {self.kind.value} for {self.char!r} does not carry a second"
            )
        return SecondSlot(bit_a=self.bit_a, bit_b=self.bit_b)


@dataclass
class JumpFlags:
    """Fields that differ from the previous minute's prediction"""
    year: bool = False
    month: bool = False
    day: bool = False
    weekday: bool = False
    hour: bool = False
    minute: bool = False

    def any(self) -> bool:
        return any((self.year, self.month, self.day, self.weekday, self.hour, self.minute))


@dataclass
class DecodedMinuteReport:
    """
    Result of decoding one minute whose length matched the expectation.

    Created by a decoder adapter at decode time and consumed straight away
    by the report formatter; nothing here is kept across minutes.

    Attributes:
        first_minute: No complete date/time had been decoded before this one
        second_count: Seconds observed in this minute
        minute_length: Length the decoder expected for this minute
        next_minute_length: Expectation for the coming minute (DCF77 only)
        parities: Ordered (label, ok) pairs, ok is None when undetermined
        check_bits: Ordered (label, ok) pairs for fixed-value bits
    """
    first_minute: bool
    second_count: int
    minute_length: int
    next_minute_length: Optional[int] = None

    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    weekday: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None

    dst: Optional[int] = None
    leap_second: Optional[int] = None
    jumps: JumpFlags = field(default_factory=JumpFlags)

    parities: List[Tuple[str, Optional[bool]]] = field(default_factory=list)
    check_bits: List[Tuple[str, Optional[bool]]] = field(default_factory=list)

    # DCF77
    leap_second_is_one: Optional[bool] = None
    call_bit: Optional[bool] = None
    third_party_buffer: Optional[int] = None

    # MSF
    dut1: Optional[int] = None
    end_of_minute_marker_present: bool = True
