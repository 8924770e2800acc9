#!/usr/bin/env python3
"""
Tests for log character classification and station profiles
"""

from dataclasses import replace

import pytest

from timecode_replay.alphabet import classify
from timecode_replay.interfaces import ClassificationError, SecondSlot, SymbolKind
from timecode_replay.stations import (
    DCF77_PROFILE,
    MSF_PROFILE,
    NPL_PROFILE,
    StationType,
    get_profile,
)


class TestDCF77Alphabet:
    """Tests for single-bit DCF77 logs"""

    def test_bits(self):
        assert classify('0', DCF77_PROFILE).to_slot() == SecondSlot(bit_a=False)
        assert classify('1', DCF77_PROFILE).to_slot() == SecondSlot(bit_a=True)

    def test_undetermined(self):
        symbol = classify('_', DCF77_PROFILE)
        assert symbol.kind is SymbolKind.UNDETERMINED
        assert symbol.to_slot().is_undetermined

    def test_newline_ends_minute(self):
        assert classify('\n', DCF77_PROFILE).kind is SymbolKind.END_OF_MINUTE

    @pytest.mark.parametrize("char", ['=', '4', '2', ' ', '\r', 'x'])
    def test_other_characters_ignored(self, char):
        symbol = classify(char, DCF77_PROFILE)
        assert symbol.kind is SymbolKind.IGNORED
        assert symbol.char == char


class TestMSFAlphabet:
    """Tests for two-bit MSF logs"""

    def test_bit_pairs(self):
        """Test pair characters encode bit A + 2 * bit B"""
        assert classify('0', MSF_PROFILE).to_slot() == SecondSlot(False, False)
        assert classify('1', MSF_PROFILE).to_slot() == SecondSlot(True, False)
        assert classify('2', MSF_PROFILE).to_slot() == SecondSlot(False, True)
        assert classify('3', MSF_PROFILE).to_slot() == SecondSlot(True, True)

    def test_begin_of_minute(self):
        symbol = classify('4', MSF_PROFILE)
        assert symbol.kind is SymbolKind.BEGIN_OF_MINUTE
        assert not symbol.is_data

    def test_control_symbol_has_no_slot(self):
        with pytest.raises(ClassificationError):
            classify('4', MSF_PROFILE).to_slot()
        with pytest.raises(ClassificationError):
            classify('\n', MSF_PROFILE).to_slot()

    def test_npl_uses_msf_format(self):
        for char in '01234_\n':
            assert classify(char, NPL_PROFILE) == classify(char, MSF_PROFILE)

    def test_separator_ignored(self):
        assert classify('=', MSF_PROFILE).kind is SymbolKind.IGNORED


class TestClassificationError:
    """Tests for admissible characters missing from the symbol table"""

    def test_missing_table_entry_raises(self):
        profile = replace(DCF77_PROFILE, admissible=DCF77_PROFILE.admissible | {'x'})
        with pytest.raises(ClassificationError, match="impossible character 'x'"):
            classify('x', profile)

    def test_is_value_error(self):
        assert issubclass(ClassificationError, ValueError)


class TestStationProfiles:
    """Tests for station lookup"""

    @pytest.mark.parametrize("name,station", [
        ("dcf77", StationType.DCF77),
        ("DCF77", StationType.DCF77),
        ("msf", StationType.MSF),
        (" npl ", StationType.NPL),
    ])
    def test_from_name(self, name, station):
        assert StationType.from_name(name) is station

    def test_unknown_station(self):
        with pytest.raises(ValueError) as excinfo:
            get_profile("wwvb")
        assert str(excinfo.value) == "logtype must be one of 'dcf77', 'msf', 'npl' but is 'wwvb'"

    def test_weekday_numbering(self):
        assert DCF77_PROFILE.weekday_names[7] == "Sunday"
        assert MSF_PROFILE.weekday_names[0] == "Sunday"
        assert DCF77_PROFILE.sunday == 7
        assert MSF_PROFILE.sunday == 0

    def test_only_dcf77_feeds_last_second(self):
        assert DCF77_PROFILE.feeds_missing_last_second
        assert not MSF_PROFILE.feeds_missing_last_second
        assert not NPL_PROFILE.feeds_missing_last_second
