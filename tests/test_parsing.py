"""Tests for SRT parsing and timecode conversion."""

import pytest
from pathlib import Path

from srtconform.models import Subtitle
from srtconform.parsing import parse_srt
from srtconform.parsing.base import (
    timecode_to_ms,
    ms_to_timecode,
    is_number_line,
    is_timecode_line,
)


def messages(result):
    return [p.message for p in result.problems]


class TestTimecodeConversion:
    """Tests for timecode conversion functions."""

    def test_timecode_to_ms_basic(self):
        assert timecode_to_ms(0, 0, 1, 0) == 1000
        assert timecode_to_ms("00", "01", "00", "000") == 60000
        assert timecode_to_ms("01", "00", "00", "000") == 3600000

    def test_timecode_to_ms_complex(self):
        assert timecode_to_ms("01", "23", "45", "678") == 5025678

    def test_timecode_to_ms_out_of_range(self):
        assert timecode_to_ms(0, 60, 0, 0) is None
        assert timecode_to_ms(0, 0, 60, 0) is None
        assert timecode_to_ms("00", "00", "00", "1000") is None

    def test_ms_to_timecode(self):
        assert ms_to_timecode(1000) == "00:00:01,000"
        assert ms_to_timecode(5025678) == "01:23:45,678"
        assert ms_to_timecode(0) == "00:00:00,000"

    def test_ms_to_timecode_long_hours(self):
        assert ms_to_timecode(100 * 3600000) == "100:00:00,000"

    def test_ms_to_timecode_negative(self):
        with pytest.raises(ValueError):
            ms_to_timecode(-1)


class TestLineGrammars:
    """Tests for the number and timing line grammars."""

    def test_number_line(self):
        assert is_number_line("12")
        assert is_number_line(" 3 ")
        assert not is_number_line("")
        assert not is_number_line("1a")

    @pytest.mark.parametrize("line", ["١", "１２", "٣"])
    def test_number_line_rejects_non_ascii_digits(self, line):
        assert not is_number_line(line)

    def test_timecode_line(self):
        assert is_timecode_line("00:00:01,000 --> 00:00:04,000")
        assert is_timecode_line("0:0:1,5->00:00:04,000")

    @pytest.mark.parametrize("line", [
        "٠٠:٠٠:٠١,٠٠٠ --> 00:00:03,000",
        "00:00:01,000 --> ００:００:０３,０００",
    ])
    def test_timecode_line_rejects_non_ascii_digits(self, line):
        assert not is_timecode_line(line)


class TestSRTParser:
    """Tests for parsing well-formed SRT files."""

    def test_minimal_file(self):
        result = parse_srt("1\n00:00:01,000 --> 00:00:03,000\nHello\n\n")

        assert result.records == [Subtitle(start_ms=1000, end_ms=3000, text="Hello")]
        assert result.problems == []

    def test_single_trailing_line_break(self):
        result = parse_srt("1\n00:00:01,000 --> 00:00:03,000\nHello\n")

        assert len(result.records) == 1
        assert result.problems == []

    def test_parse_multiline(self):
        content = """1
00:00:01,000 --> 00:00:04,000
Line one
Line two

2
00:00:05,000 --> 00:00:08,000
Goodbye world
"""
        result = parse_srt(content)

        assert len(result.records) == 2
        assert result.records[0].text == "Line one\nLine two"
        assert result.records[1].start_ms == 5000
        assert result.records[1].end_ms == 8000
        assert result.problems == []

    def test_parse_with_bom(self):
        result = parse_srt("\ufeff1\n00:00:01,000 --> 00:00:04,000\nHello\n")

        assert result.records[0].text == "Hello"
        assert result.normalized_text.startswith("1\n")
        assert result.problems == []

    def test_parse_fixture(self):
        fixture_path = Path(__file__).parent / "fixtures" / "sample.srt"
        content = fixture_path.read_text(encoding="utf-8")

        result = parse_srt(content)

        assert len(result.records) == 5
        assert result.records[0].text == "Hello, and welcome to\nour presentation today."
        assert result.records[4].start_ms == 16000
        assert result.records[4].end_ms == 20000
        assert result.problems == []


class TestFatalParseFailure:
    """Tests for files that cannot be parsed at all."""

    def test_invalid_first_line(self):
        result = parse_srt("x\n...\n")

        assert result.records is None
        assert result.failed
        assert len(result.problems) == 1
        assert result.problems[0].can_fix is False
        assert "first line" in result.problems[0].message
        assert result.normalized_text == "x\n...\n"

    def test_invalid_second_line(self):
        result = parse_srt("1\nnot a timecode\nHello\n")

        assert result.records is None
        assert len(result.problems) == 1
        assert "second line" in result.problems[0].message

    def test_empty_input(self):
        result = parse_srt("")

        assert result.records is None
        assert result.problems[-1].can_fix is False
        assert "first line" in result.problems[-1].message

    def test_number_only(self):
        result = parse_srt("1")

        assert result.records is None

    def test_leading_blank_lines_still_reported(self):
        result = parse_srt("\n\nx\n")

        assert result.records is None
        assert [p.can_fix for p in result.problems] == [True, False]

    def test_non_ascii_number_line(self):
        result = parse_srt("١\n00:00:01,000 --> 00:00:03,000\nHello\n")

        assert result.records is None
        assert len(result.problems) == 1
        assert result.problems[0].can_fix is False
        assert "first line" in result.problems[0].message

    def test_non_ascii_digits_throughout(self):
        result = parse_srt("١\n٠٠:٠٠:٠١,٠٠٠ --> 00:00:03,000\nHello\n")

        assert result.records is None
        assert messages(result) == ["Invalid first line: '١'"]

    def test_non_ascii_timecode_line(self):
        result = parse_srt("1\n٠٠:٠٠:٠١,٠٠٠ --> 00:00:03,000\nHello\n")

        assert result.records is None
        assert "second line" in result.problems[0].message


class TestLineBreaks:
    """Tests for line break normalization."""

    def test_crlf_only(self):
        result = parse_srt("1\r\n00:00:01,000 --> 00:00:03,000\r\nHello\r\n")

        assert result.records[0].text == "Hello"
        assert result.normalized_text == "1\n00:00:01,000 --> 00:00:03,000\nHello\n"
        assert result.problems == []

    def test_mixed_line_breaks(self):
        result = parse_srt("1\r\n00:00:01,000 --> 00:00:03,000\nHello\r\n")

        assert messages(result) == ["Inconsistent line breaks"]
        assert result.problems[0].index == 0
        assert result.problems[0].can_fix is True

    def test_leading_empty_lines(self):
        result = parse_srt("\n\n1\n00:00:01,000 --> 00:00:03,000\nHello\n")

        assert messages(result) == ["2 empty lines before first subtitle"]
        assert result.records[0].text == "Hello"


class TestNumberLine:
    """Tests for subtitle number diagnostics."""

    def test_excess_spacing(self):
        result = parse_srt(" 1 \n00:00:01,000 --> 00:00:03,000\nHello\n")

        assert messages(result) == ["Excess spacing around subtitle number: ' 1 '"]

    def test_zero_prefixed(self):
        result = parse_srt("01\n00:00:01,000 --> 00:00:03,000\nHello\n")

        assert messages(result) == ["Zero-prefixed subtitle number: 01"]

    def test_numbering_derived_from_position(self):
        content = (
            "5\n00:00:01,000 --> 00:00:03,000\nHello\n\n"
            "9\n00:00:04,000 --> 00:00:05,000\nWorld\n"
        )
        result = parse_srt(content)

        assert len(result.records) == 2
        assert messages(result) == [
            "Incorrect subtitle number: 5 not 1",
            "Incorrect subtitle number: 9 not 2",
        ]
        assert [p.index for p in result.problems] == [0, 1]
        assert all(p.can_fix for p in result.problems)


class TestTimingLine:
    """Tests for timing line validation and correction."""

    def test_malformed_arrow(self):
        result = parse_srt("1\n00:00:01,000->00:00:03,000\nHello\n")

        assert result.records[0].start_ms == 1000
        assert result.records[0].end_ms == 3000
        assert len(result.problems) == 1
        assert result.problems[0].message.startswith("Malformed timecode line")
        assert result.problems[0].can_fix is True

    def test_short_fields(self):
        result = parse_srt("1\n0:00:01,5 --> 00:00:03,000\nHello\n")

        assert result.records[0].start_ms == 1005
        assert messages(result)[0].startswith("Malformed timecode line")

    def test_invalid_start(self):
        result = parse_srt("1\n00:00:61,000 --> 00:00:03,000\nHello\n")

        assert result.records[0].start_ms == 0
        assert result.records[0].end_ms == 3000
        assert len(result.problems) == 1
        assert result.problems[0].message.startswith("Invalid timecode")
        assert result.problems[0].can_fix is False

    def test_invalid_end(self):
        result = parse_srt("1\n00:00:02,000 --> 00:99:00,000\nHello\n")

        assert result.records[0].start_ms == 2000
        assert result.records[0].end_ms == 3000
        assert len(result.problems) == 1
        assert result.problems[0].can_fix is False

    def test_end_same_as_start(self):
        result = parse_srt("1\n00:00:02,000 --> 00:00:02,000\nHello\n")

        assert result.records[0].end_ms == 3000
        assert messages(result) == ["Subtitle end time is same as start time (2000 ms)"]
        assert result.problems[0].can_fix is False

    def test_end_before_start(self):
        result = parse_srt("1\n00:00:05,000 --> 00:00:02,000\nHello\n")

        assert result.records[0].end_ms == 6000
        assert messages(result) == ["Subtitle end time (2000 ms) is before start time (5000 ms)"]

    def test_overlap_clamped(self):
        content = (
            "1\n00:00:01,000 --> 00:00:04,000\nFirst\n\n"
            "2\n00:00:03,000 --> 00:00:06,000\nSecond\n"
        )
        result = parse_srt(content)

        assert result.records[1].start_ms == 4000
        assert result.records[1].end_ms == 6000
        assert len(result.problems) == 1
        assert result.problems[0].index == 1
        assert result.problems[0].can_fix is False
        assert "3000" in result.problems[0].message

    def test_invalid_start_and_end(self):
        content = (
            "1\n00:00:01,000 --> 00:00:04,000\nFirst\n\n"
            "2\n00:00:61,000 --> 00:99:00,000\nSecond\n"
        )
        result = parse_srt(content)

        assert result.records[1].start_ms == 4000
        assert result.records[1].end_ms == 5000
        assert messages(result) == ["Invalid timecode: '00:00:61,000 --> 00:99:00,000'"]
        assert result.problems[0].index == 1
        assert result.problems[0].can_fix is False

    def test_overlap_rederives_end(self):
        content = (
            "1\n00:00:01,000 --> 00:00:04,000\nFirst\n\n"
            "2\n00:00:02,000 --> 00:00:03,500\nSecond\n"
        )
        result = parse_srt(content)

        assert result.records[1].start_ms == 4000
        assert result.records[1].end_ms == 5000

    def test_records_never_overlap(self):
        content = (
            "1\n00:00:05,000 --> 00:00:09,000\nA\n\n"
            "2\n00:00:01,000 --> 00:00:02,000\nB\n\n"
            "3\n00:00:03,000 --> 00:00:04,000\nC\n"
        )
        records = parse_srt(content).records

        for previous, current in zip(records, records[1:]):
            assert current.start_ms >= previous.end_ms
        for record in records:
            assert record.end_ms > record.start_ms


class TestTextLines:
    """Tests for blank line handling within subtitle text."""

    def test_missing_separator_before_next(self):
        content = (
            "1\n00:00:01,000 --> 00:00:02,000\nFirst\n"
            "2\n00:00:03,000 --> 00:00:04,000\nSecond\n"
        )
        result = parse_srt(content)

        assert len(result.records) == 2
        assert messages(result) == ["No line break after end of subtitle"]
        assert result.problems[0].index == 0

    def test_missing_final_line_break(self):
        result = parse_srt("1\n00:00:01,000 --> 00:00:02,000\nHello")

        assert messages(result) == ["No line break after end of subtitle"]

    def test_excess_separator(self):
        content = (
            "1\n00:00:01,000 --> 00:00:02,000\nFirst\n\n\n"
            "2\n00:00:03,000 --> 00:00:04,000\nSecond\n"
        )
        result = parse_srt(content)

        assert messages(result) == ["Too many line breaks after end of subtitle (2)"]

    def test_excess_trailing_blank_lines_at_end_of_file(self):
        result = parse_srt("1\n00:00:01,000 --> 00:00:02,000\nHello\n\n\n")

        assert messages(result) == ["Too many line breaks after end of subtitle (3)"]

    def test_empty_lines_at_start(self):
        result = parse_srt("1\n00:00:01,000 --> 00:00:02,000\n\nHello\n")

        assert result.records[0].text == "Hello"
        assert messages(result) == ["1 empty lines at start of subtitle"]

    def test_line_breaks_in_middle(self):
        result = parse_srt("1\n00:00:01,000 --> 00:00:02,000\nHello\n  \nWorld\n")

        assert result.records[0].text == "Hello\nWorld"
        assert messages(result) == ["Line breaks in middle of subtitle"]
        assert result.problems[0].can_fix is True

    def test_empty_subtitle(self):
        content = (
            "1\n00:00:01,000 --> 00:00:02,000\n\n"
            "2\n00:00:03,000 --> 00:00:04,000\nSecond\n"
        )
        result = parse_srt(content)

        assert result.records[0].text == "_"
        assert messages(result) == ["Empty subtitle"]
        assert result.problems[0].can_fix is False

    def test_number_inside_text_is_kept(self):
        result = parse_srt("1\n00:00:01,000 --> 00:00:02,000\nHello\n42\n")

        assert result.records[0].text == "Hello\n42"
        assert result.problems == []

    def test_non_ascii_digit_block_stays_text(self):
        content = (
            "1\n00:00:01,000 --> 00:00:03,000\nHello\n\n"
            "١\n٠٠:٠٠:٠٥,٠٠٠ --> ٠٠:٠٠:٠٦,٠٠٠\nWorld\n"
        )
        result = parse_srt(content)

        assert len(result.records) == 1
        assert result.records[0].text == "Hello\n١\n٠٠:٠٠:٠٥,٠٠٠ --> ٠٠:٠٠:٠٦,٠٠٠\nWorld"
        assert messages(result) == ["Line breaks in middle of subtitle"]
