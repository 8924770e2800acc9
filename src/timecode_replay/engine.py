#!/usr/bin/env python3
"""
Log Replay Engine

Folds a recorded time signal log, one character at a time, through the
station's decoder adapter and collects the human-readable report.

Per character:
- ignored characters are skipped entirely
- data characters are echoed into the minute buffer and pushed as a second
- the begin-of-minute marker restarts the minute
- the end-of-minute sentinel validates the observed minute length and
  either decodes the minute or reports the mismatch
- every non-ignored character advances the second counter
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from .adapters import create_adapter
from .alphabet import classify
from .bit_buffer import MinuteBitBuffer
from .interfaces.data_models import ClassificationError, SecondSlot, SymbolKind
from .interfaces.decoder import DecoderAdapter
from .report import ReportFormatter, create_formatter
from .stations import StationProfile, StationType, get_profile

logger = logging.getLogger(__name__)


@dataclass
class ReplayStats:
    """Counters collected over one replay"""
    characters: int = 0
    ignored: int = 0
    minutes_decoded: int = 0
    minutes_mismatched: int = 0
    counter_overflows: int = 0


class ReplayEngine:
    """
    Replays a log for one station.

    One engine per log: the adapter's decoder carries date/time state from
    minute to minute, so feeding a second log into the same engine continues
    where the first one stopped.

    Args:
        profile: Station profile of the log
        adapter: Decoder adapter (default: a fresh one for the station)
        formatter: Report formatter (default: the station's formatter)
    """

    def __init__(self, profile: StationProfile,
                 adapter: Optional[DecoderAdapter] = None,
                 formatter: Optional[ReportFormatter] = None):
        self.profile = profile
        self.adapter = adapter if adapter is not None else create_adapter(profile)
        self.formatter = formatter if formatter is not None else create_formatter(profile)
        self.buffer = MinuteBitBuffer(self.adapter.capacity + 1)
        self.lines: List[str] = []
        self.stats = ReplayStats()

    def replay(self, text: str) -> List[str]:
        """
        Replay a whole log.

        Args:
            text: Log contents

        Returns:
            Report lines collected so far (the engine's own list)

        Raises:
            ClassificationError: If a character is impossible for the station
        """
        for char in text:
            self.feed(char)
        logger.info(
            f"{self.profile.name}: {self.stats.minutes_decoded} minutes decoded, "
            f"{self.stats.minutes_mismatched} with wrong length, "
            f"{self.stats.ignored} characters ignored"
        )
        return self.lines

    def feed(self, char: str):
        """Process one log character"""
        self.stats.characters += 1
        try:
            symbol = classify(char, self.profile)
        except ClassificationError as e:
            logger.error(f"Cannot replay {self.profile.name} log: {e}")
            raise

        if symbol.kind is SymbolKind.IGNORED:
            self.stats.ignored += 1
            return

        if symbol.kind is SymbolKind.END_OF_MINUTE:
            self._end_minute()
        elif symbol.kind is SymbolKind.BEGIN_OF_MINUTE:
            self.adapter.begin_minute()
            self.buffer.clear()
            self.buffer.place(self.adapter.current_second_index(), symbol.char)
        else:
            self.buffer.place(self.adapter.current_second_index(), symbol.char)
            self.adapter.push_second(symbol.to_slot())
        self._advance()

    def _advance(self):
        if self.adapter.advance_second():
            return
        self.stats.counter_overflows += 1
        self.lines.append(self.formatter.format_counter_overflow(self.adapter.capacity))
        logger.warning(
            f"{self.profile.name}: second counter saturated at {self.adapter.capacity}"
        )

    def _end_minute(self):
        if self.profile.feeds_missing_last_second:
            self.adapter.push_second(SecondSlot())
            self._advance()

        actual = self.adapter.current_second_index()
        wanted = self.adapter.expected_minute_length()
        if actual == wanted:
            report = self.adapter.decode_and_finalize()
            self.lines.extend(self.formatter.format_minute(report, self.buffer.chars()))
            self.stats.minutes_decoded += 1
            logger.debug(
                f"{self.profile.name}: decoded minute of {actual} seconds, "
                f"first_minute={report.first_minute}"
            )
        else:
            self.lines.extend(self.formatter.format_mismatch(actual, wanted))
            self.stats.minutes_mismatched += 1
            logger.warning(
                f"{self.profile.name}: minute is {actual} seconds instead of {wanted}"
            )

        self.adapter.force_resynchronize()
        self.buffer.clear()
        self.lines.append('')


def replay_buffer(station: Union[str, StationType], text: str) -> List[str]:
    """
    Replay a log with a fresh engine.

    Args:
        station: Station name ('dcf77', 'msf', 'npl') or StationType
        text: Log contents

    Returns:
        Report lines

    Raises:
        ValueError: If the station is unknown
        ClassificationError: If a character is impossible for the station
    """
    return ReplayEngine(get_profile(station)).replay(text)
