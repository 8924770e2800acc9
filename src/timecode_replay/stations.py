#!/usr/bin/env python3
"""
DCF77/MSF Station Profiles

Centralizes the per-station tables used by the alphabet, the replay engine
and the report formatter: admissible log characters, symbol tables, the
bit-echo grouping positions, weekday numbering and the end-of-minute
sentinel policy.

Log format (one character per received second, one line per minute):
- DCF77: '0', '1', '_' (undetermined); the 59th second carries no pulse,
  so the newline stands in for it
- MSF: bit pairs as '0'..'3' (bit A + 2 * bit B), '_' (undetermined),
  '4' for the 500 ms begin-of-minute marker
- NPL: historical label for MSF captures, same format

Reference: PTB DCF77 time code description, NPL "MSF 60 kHz time and date
code" document
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Union

from .interfaces.data_models import Symbol, SymbolKind

# =============================================================================
# MINUTE LENGTHS
# =============================================================================

NOMINAL_MINUTE_LENGTH = 60
BIT_BUFFER_SIZE = 61  # Longest minute (positive leap second)


class StationType(Enum):
    """Supported time signal stations"""
    DCF77 = "dcf77"
    MSF = "msf"
    NPL = "npl"

    @classmethod
    def from_name(cls, name: str) -> 'StationType':
        """
        Resolve a station name as typed on the command line.

        Raises:
            ValueError: If the name is not a supported station
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            names = ", ".join(f"'{s.value}'" for s in cls)
            raise ValueError(f"logtype must be one of {names} but is '{name}'") from None


@dataclass(frozen=True)
class StationProfile:
    """
    Immutable per-station tables, resolved once at startup.

    Attributes:
        station: Station this profile describes
        admissible: Characters the classifier looks at; all others are ignored
        symbols: Classification of each admissible character
        fixed_space_indices: Bit-echo positions preceded by a space
        shifted_space_indices: Bit-echo positions that move with a 59/61
            second minute
        weekday_names: Weekday value -> English name
        sunday: Weekday value this station uses for Sunday
        feeds_missing_last_second: The sentinel replaces an untransmitted
            last second, so the engine force-feeds an undetermined one
    """
    station: StationType
    admissible: FrozenSet[str]
    symbols: Dict[str, Symbol]
    fixed_space_indices: FrozenSet[int]
    shifted_space_indices: FrozenSet[int]
    weekday_names: Dict[int, str]
    sunday: int
    feeds_missing_last_second: bool
    nominal_minute_length: int = NOMINAL_MINUTE_LENGTH

    @property
    def name(self) -> str:
        return self.station.value


# =============================================================================
# SYMBOL TABLES
# =============================================================================

END_OF_MINUTE = Symbol(SymbolKind.END_OF_MINUTE, '\n')
UNDETERMINED = Symbol(SymbolKind.UNDETERMINED, '_')

DCF77_SYMBOLS: Dict[str, Symbol] = {
    '0': Symbol(SymbolKind.BIT, '0', bit_a=False),
    '1': Symbol(SymbolKind.BIT, '1', bit_a=True),
    '_': UNDETERMINED,
    '\n': END_OF_MINUTE,
}

# Bit pair characters encode bit A + 2 * bit B
MSF_SYMBOLS: Dict[str, Symbol] = {
    '0': Symbol(SymbolKind.BIT_PAIR, '0', bit_a=False, bit_b=False),
    '1': Symbol(SymbolKind.BIT_PAIR, '1', bit_a=True, bit_b=False),
    '2': Symbol(SymbolKind.BIT_PAIR, '2', bit_a=False, bit_b=True),
    '3': Symbol(SymbolKind.BIT_PAIR, '3', bit_a=True, bit_b=True),
    '4': Symbol(SymbolKind.BEGIN_OF_MINUTE, '4'),
    '_': UNDETERMINED,
    '\n': END_OF_MINUTE,
}

# =============================================================================
# BIT ECHO GROUPING
# =============================================================================

# Start of: third-party bits, call bit, DST bits, leap announcement,
# start-of-time bit, minute, minute parity, hour, hour parity, day, weekday,
# month, year, date parity, leap second bit
DCF77_SPACE_INDICES: FrozenSet[int] = frozenset(
    {1, 15, 16, 19, 20, 21, 28, 29, 35, 36, 42, 45, 50, 58, 59}
)

# Start of positive DUT1, negative DUT1 (before the leap second position)
MSF_FIXED_SPACE_INDICES: FrozenSet[int] = frozenset({1, 9})

# Start of year, month, day, weekday, hour, minute, end-of-minute marker
MSF_SHIFTED_SPACE_INDICES: FrozenSet[int] = frozenset({17, 25, 30, 36, 39, 45, 52})

# =============================================================================
# WEEKDAYS
# =============================================================================

DCF77_WEEKDAYS: Dict[int, str] = {
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
    6: "Saturday",
    7: "Sunday",
}

MSF_WEEKDAYS: Dict[int, str] = {
    0: "Sunday",
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
    6: "Saturday",
}

# =============================================================================
# PROFILES
# =============================================================================

DCF77_PROFILE = StationProfile(
    station=StationType.DCF77,
    admissible=frozenset({'0', '1', '_', '\n'}),
    symbols=DCF77_SYMBOLS,
    fixed_space_indices=DCF77_SPACE_INDICES,
    shifted_space_indices=frozenset(),
    weekday_names=DCF77_WEEKDAYS,
    sunday=7,
    feeds_missing_last_second=True,
)

MSF_PROFILE = StationProfile(
    station=StationType.MSF,
    admissible=frozenset({'0', '1', '2', '3', '4', '_', '\n'}),
    symbols=MSF_SYMBOLS,
    fixed_space_indices=MSF_FIXED_SPACE_INDICES,
    shifted_space_indices=MSF_SHIFTED_SPACE_INDICES,
    weekday_names=MSF_WEEKDAYS,
    sunday=0,
    feeds_missing_last_second=False,
)

NPL_PROFILE = StationProfile(
    station=StationType.NPL,
    admissible=MSF_PROFILE.admissible,
    symbols=MSF_SYMBOLS,
    fixed_space_indices=MSF_FIXED_SPACE_INDICES,
    shifted_space_indices=MSF_SHIFTED_SPACE_INDICES,
    weekday_names=MSF_WEEKDAYS,
    sunday=0,
    feeds_missing_last_second=False,
)

PROFILES: Dict[StationType, StationProfile] = {
    StationType.DCF77: DCF77_PROFILE,
    StationType.MSF: MSF_PROFILE,
    StationType.NPL: NPL_PROFILE,
}


def get_profile(station: Union[str, StationType]) -> StationProfile:
    """
    Look up the profile for a station.

    Args:
        station: StationType or its (case-insensitive) name

    Returns:
        The station's immutable profile

    Raises:
        ValueError: If the name is not a supported station
    """
    if not isinstance(station, StationType):
        station = StationType.from_name(station)
    return PROFILES[station]
