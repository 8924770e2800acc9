"""
Decoder adapters

Wrap the stateful station decoders behind the DecoderAdapter interface the
replay engine drives, and turn their state into DecodedMinuteReports.
"""

import logging
from dataclasses import replace
from typing import Optional

from .decoders.base import TimeCodeDecoder
from .decoders.dcf77 import DCF77Decoder
from .decoders.msf import MSFDecoder
from .interfaces.data_models import ClassificationError, DecodedMinuteReport, SecondSlot
from .interfaces.decoder import DecoderAdapter
from .stations import BIT_BUFFER_SIZE, StationProfile, StationType

logger = logging.getLogger(__name__)


class _TimeCodeAdapter(DecoderAdapter):
    """Counter handling shared by both station adapters"""

    capacity = BIT_BUFFER_SIZE

    def __init__(self, decoder: TimeCodeDecoder):
        self.decoder = decoder

    def advance_second(self) -> bool:
        return self.decoder.increase_second()

    def current_second_index(self) -> int:
        return self.decoder.second

    def expected_minute_length(self) -> int:
        return self.decoder.minute_length

    def force_resynchronize(self) -> None:
        self.decoder.force_new_minute()

    def _base_report(self, first_minute: bool, second_count: int) -> DecodedMinuteReport:
        rdt = self.decoder.radio_datetime
        return DecodedMinuteReport(
            first_minute=first_minute,
            second_count=second_count,
            minute_length=self.decoder.minute_length,
            year=rdt.year,
            month=rdt.month,
            day=rdt.day,
            weekday=rdt.weekday,
            hour=rdt.hour,
            minute=rdt.minute,
            dst=rdt.dst,
            leap_second=rdt.leap_second,
            jumps=replace(rdt.jumps),
        )


class DCF77Adapter(_TimeCodeAdapter):
    """DecoderAdapter for single-bit DCF77 logs"""

    def __init__(self, decoder: Optional[DCF77Decoder] = None):
        super().__init__(decoder or DCF77Decoder())

    def push_second(self, slot: SecondSlot) -> None:
        if slot.bit_b is not None:
            raise ClassificationError(f"DCF77 cannot take a bit pair: {slot}")
        self.decoder.set_current_bit(slot.bit_a)

    def decode_and_finalize(self) -> DecodedMinuteReport:
        dec = self.decoder
        first_minute = dec.first_minute
        second_count = dec.second
        dec.decode_time()

        report = self._base_report(first_minute, second_count)
        report.next_minute_length = dec.next_minute_length
        report.parities = [
            ("Minute", dec.parity_1),
            ("Hour", dec.parity_2),
            ("Date", dec.parity_3),
        ]
        report.check_bits = [
            ("Bit 0", dec.bit_0_ok),
            ("Bit 20", dec.bit_20_ok),
        ]
        report.leap_second_is_one = dec.leap_second_is_one
        report.call_bit = dec.call_bit
        report.third_party_buffer = dec.third_party_buffer
        return report


class MSFAdapter(_TimeCodeAdapter):
    """DecoderAdapter for two-bit MSF (and NPL) logs"""

    def __init__(self, decoder: Optional[MSFDecoder] = None):
        super().__init__(decoder or MSFDecoder())

    def push_second(self, slot: SecondSlot) -> None:
        if slot.bit_a is None and slot.bit_b is None:
            self.decoder.set_current_bits(None, None)
            return
        if slot.bit_a is None or slot.bit_b is None:
            raise ClassificationError(f"MSF needs both bits of a pair: {slot}")
        self.decoder.set_current_bits(slot.bit_a, slot.bit_b)

    def begin_minute(self) -> None:
        self.decoder.begin_minute()

    def decode_and_finalize(self) -> DecodedMinuteReport:
        dec = self.decoder
        first_minute = dec.first_minute
        second_count = dec.second
        dec.decode_time()

        report = self._base_report(first_minute, second_count)
        report.parities = [
            ("Year", dec.parity_1),
            ("Month/day-of-month", dec.parity_2),
            ("Day-of-week", dec.parity_3),
            ("Hour/minute", dec.parity_4),
        ]
        report.dut1 = dec.dut1
        report.end_of_minute_marker_present = dec.end_of_minute_marker_present
        return report


def create_adapter(profile: StationProfile) -> DecoderAdapter:
    """
    Build a fresh adapter (with a fresh decoder) for a station.

    Args:
        profile: Station profile of the log being replayed

    Returns:
        DCF77Adapter for DCF77, MSFAdapter for MSF and NPL
    """
    if profile.station is StationType.DCF77:
        return DCF77Adapter()
    logger.debug(f"Using MSF decoder for {profile.name}")
    return MSFAdapter()
