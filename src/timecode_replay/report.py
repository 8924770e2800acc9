"""
Report formatting for decoded minutes

Turns a DecodedMinuteReport plus the minute's echo characters into the
text block the replay engine appends to its output. Pure: no state is
kept between minutes.
"""

from typing import List, Optional

from .interfaces.data_models import (
    DST_ANNOUNCED,
    DST_JUMP,
    DST_PROCESSED,
    DST_SUMMER,
    LEAP_ANNOUNCED,
    LEAP_MISSING,
    LEAP_PROCESSED,
    DecodedMinuteReport,
    JumpFlags,
)
from .stations import NOMINAL_MINUTE_LENGTH, StationProfile, StationType


def str_u8_02(value: Optional[int]) -> str:
    """Two-digit zero-padded number, '**' when unknown"""
    return '**' if value is None else f"{value:02d}"


def str_bool(value: bool) -> str:
    return 'true' if value else 'false'


def str_hex(value: Optional[int]) -> str:
    return '0x****' if value is None else f"0x{value:04x}"


def dst_info(dst: Optional[int]) -> str:
    """Comma-joined DST status, empty when unknown"""
    if dst is None:
        return ''
    parts = []
    if dst & DST_ANNOUNCED:
        parts.append('announced')
    if dst & DST_PROCESSED:
        parts.append('processed')
    if dst & DST_JUMP:
        parts.append('jump')
    parts.append('summer' if dst & DST_SUMMER else 'winter')
    return ','.join(parts)


def leap_second_info(leap_second: Optional[int], is_one: Optional[bool]) -> str:
    """Comma-joined leap second status, empty when unknown or quiet"""
    if leap_second is None:
        return ''
    parts = []
    if leap_second & LEAP_ANNOUNCED:
        parts.append('announced')
    if leap_second & LEAP_PROCESSED:
        parts.append('processed')
        if is_one:
            parts.append('one')
    if leap_second & LEAP_MISSING:
        parts.append('missing')
    return ','.join(parts)


def call_bit_info(call_bit: Optional[bool]) -> str:
    if call_bit is None:
        return '?'
    return 'call' if call_bit else ''


def jump_lines(jumps: JumpFlags) -> List[str]:
    """One line per jumped field, year first"""
    lines = []
    for flag, label in (
        (jumps.year, "Year"),
        (jumps.month, "Month"),
        (jumps.day, "Day-of-month"),
        (jumps.weekday, "Day-of-week"),
        (jumps.hour, "Hour"),
        (jumps.minute, "Minute"),
    ):
        if flag:
            lines.append(f"{label} jumped")
    return lines


class ReportFormatter:
    """
    Common report layout; subclasses supply the station specific lines.

    Args:
        profile: Station profile providing grouping positions and weekday names
    """

    def __init__(self, profile: StationProfile):
        self.profile = profile

    def format_minute(self, report: DecodedMinuteReport, chars: str) -> List[str]:
        """
        Render one decoded minute.

        Args:
            report: Decoder result for the minute
            chars: Echo buffer contents for the minute

        Returns:
            Bit echo, metadata, date/time, annotation and jump lines
            (the engine appends the blank separator)
        """
        lines = [
            self.bit_echo(chars, report.minute_length),
            self.metadata_line(report),
            self.datetime_line(report),
        ]
        lines.extend(self.annotation_lines(report))
        lines.extend(jump_lines(report.jumps))
        return lines

    def format_mismatch(self, actual: int, wanted: int) -> List[str]:
        return [f"Minute is {actual} seconds instead of {wanted} seconds long"]

    def format_counter_overflow(self, capacity: int) -> str:
        return f"Second counter cannot advance past {capacity}"

    def bit_echo(self, chars: str, minute_length: int) -> str:
        """Echo the minute's characters with a space before each field"""
        offset = minute_length - NOMINAL_MINUTE_LENGTH
        spaced = set(self.profile.fixed_space_indices)
        spaced.update(i + offset for i in self.profile.shifted_space_indices)
        out = []
        for i, c in enumerate(chars[:minute_length]):
            if i in spaced:
                out.append(' ')
            out.append(c)
        return ''.join(out)

    def weekday_name(self, weekday: Optional[int]) -> str:
        return self.profile.weekday_names.get(weekday, '?')

    def datetime_text(self, report: DecodedMinuteReport) -> str:
        return (
            f"{str_u8_02(report.year)}-{str_u8_02(report.month)}-{str_u8_02(report.day)} "
            f"{self.weekday_name(report.weekday)} "
            f"{str_u8_02(report.hour)}:{str_u8_02(report.minute)} "
            f"[{dst_info(report.dst)}]"
        )

    def parity_lines(self, report: DecodedMinuteReport) -> List[str]:
        lines = []
        for label, ok in report.parities:
            if ok is None:
                lines.append(f"{label} parity undetermined")
            elif not ok:
                lines.append(f"{label} parity bad")
        return lines

    def metadata_line(self, report: DecodedMinuteReport) -> str:
        raise NotImplementedError

    def datetime_line(self, report: DecodedMinuteReport) -> str:
        return self.datetime_text(report)

    def annotation_lines(self, report: DecodedMinuteReport) -> List[str]:
        return self.parity_lines(report)


class DCF77ReportFormatter(ReportFormatter):
    """DCF77 report: leap second and call bit status, check bits"""

    def metadata_line(self, report: DecodedMinuteReport) -> str:
        return (
            f"first_minute={str_bool(report.first_minute)} second={report.second_count} "
            f"this_minute_length={report.minute_length} "
            f"next_minute_length={report.next_minute_length}"
        )

    def datetime_line(self, report: DecodedMinuteReport) -> str:
        leap = leap_second_info(report.leap_second, report.leap_second_is_one)
        return f"{self.datetime_text(report)} [{leap}] [{call_bit_info(report.call_bit)}]"

    def annotation_lines(self, report: DecodedMinuteReport) -> List[str]:
        lines = [f"Third-party buffer={str_hex(report.third_party_buffer)}"]
        lines.extend(self.parity_lines(report))
        for label, ok in report.check_bits:
            if ok is None:
                lines.append(f"{label} is undetermined")
            elif not ok:
                lines.append(f"{label} is wrong")
        return lines


class MSFReportFormatter(ReportFormatter):
    """MSF report: DUT1 and end-of-minute marker"""

    def metadata_line(self, report: DecodedMinuteReport) -> str:
        return (
            f"first_minute={str_bool(report.first_minute)} seconds={report.second_count} "
            f"minute_length={report.minute_length}"
        )

    def datetime_line(self, report: DecodedMinuteReport) -> str:
        dut1 = '?' if report.dut1 is None else str(report.dut1)
        return f"{self.datetime_text(report)} DUT1={dut1}"

    def annotation_lines(self, report: DecodedMinuteReport) -> List[str]:
        lines = []
        if not report.end_of_minute_marker_present:
            lines.append("End-of-minute marker absent")
        lines.extend(self.parity_lines(report))
        return lines


def create_formatter(profile: StationProfile) -> ReportFormatter:
    """Formatter for a station; NPL logs share the MSF layout"""
    if profile.station is StationType.DCF77:
        return DCF77ReportFormatter(profile)
    return MSFReportFormatter(profile)
