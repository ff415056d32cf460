"""SRT subtitle file parser with error recovery."""

import logging
import re
from typing import List, Optional, Tuple

from ..models import ParseResult, Subtitle
from ..problems import ProblemLog
from .base import (
    CANONICAL_ARROW,
    NUM_REGEX,
    TC_REGEX,
    has_canonical_widths,
    is_number_line,
    is_timecode_line,
    timecode_to_ms,
)

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 1000
EMPTY_PLACEHOLDER = "_"


def normalize_line_breaks(content: str, log: ProblemLog) -> str:
    """
    Conform all line breaks to '\\n', reporting mixed styles.

    Args:
        content: Raw SRT text
        log: Problem log to report to

    Returns:
        Text with only '\\n' line breaks
    """
    if '\r' not in content:
        return content

    if re.search(r'(?<!\r)\n', content) or re.search(r'\r(?!\n)', content):
        log.fixed(0, "Inconsistent line breaks")
    return content.replace('\r\n', '\n').replace('\r', '\n')


def _parse_number_line(line: str, index: int, log: ProblemLog) -> None:
    """Check a subtitle number line. The number itself is not trusted."""
    space_before, num_str, space_after = NUM_REGEX.match(line).groups()
    if space_before or space_after:
        log.fixed(index, f"Excess spacing around subtitle number: '{line}'")
    if num_str.startswith('0'):
        log.fixed(index, f"Zero-prefixed subtitle number: {num_str}")
    num = int(num_str)
    if num != index + 1:
        log.fixed(index, f"Incorrect subtitle number: {num} not {index + 1}")


def _parse_timing_line(
    line: str,
    index: int,
    previous_end: int,
    log: ProblemLog
) -> Tuple[int, int]:
    """
    Parse, validate and correct a timing line.

    Args:
        line: Timing line matching TC_REGEX
        index: Subtitle position
        previous_end: End time of the previous subtitle (0 for the first)
        log: Problem log to report to

    Returns:
        Tuple of (start_ms, end_ms) with end > start and start >= previous_end
    """
    (
        space_before, start_h, start_m, start_s, start_ms, arrow,
        end_h, end_m, end_s, end_ms, space_after
    ) = TC_REGEX.match(line).groups()

    if (
        space_before or space_after or arrow != CANONICAL_ARROW
        or not has_canonical_widths(start_h, start_m, start_s, start_ms)
        or not has_canonical_widths(end_h, end_m, end_s, end_ms)
    ):
        log.fixed(index, f"Malformed timecode line: '{line}'")

    start = timecode_to_ms(start_h, start_m, start_s, start_ms)
    end = timecode_to_ms(end_h, end_m, end_s, end_ms)

    if start is None or end is None:
        if start is None:
            start = previous_end
        if end is None:
            end = start + DEFAULT_DURATION_MS
        log.manual(index, f"Invalid timecode: '{line.strip()}'")

    if end <= start:
        if end == start:
            log.manual(index, f"Subtitle end time is same as start time ({start} ms)")
        else:
            log.manual(index, f"Subtitle end time ({end} ms) is before start time ({start} ms)")
        end = start + DEFAULT_DURATION_MS

    if start < previous_end:
        log.manual(index, f"Subtitle starts at {start} ms before previous ends at {previous_end} ms")
        start = previous_end
        if end <= start:
            end = start + DEFAULT_DURATION_MS

    return start, end


def _starts_subtitle(lines: List[str], line_num: int) -> bool:
    """Peek whether a subtitle number + timing line pair starts at line_num."""
    return (
        line_num + 1 < len(lines)
        and is_number_line(lines[line_num])
        and is_timecode_line(lines[line_num + 1])
    )


def _collect_text_lines(lines: List[str], line_num: int) -> Tuple[List[str], int]:
    """
    Collect text lines up to the start of the next subtitle or end of input.

    Whitespace-only lines are returned as ''.

    Returns:
        Tuple of (text lines, line number after the text)
    """
    text_lines: List[str] = []
    while line_num < len(lines) and not _starts_subtitle(lines, line_num):
        line = lines[line_num]
        text_lines.append('' if not line.strip() else line)
        line_num += 1
    return text_lines, line_num


def _clean_text_lines(
    text_lines: List[str],
    index: int,
    is_last: bool,
    log: ProblemLog
) -> List[str]:
    """
    Strip blank lines around and inside subtitle text, reporting each case.

    A subtitle must be followed by exactly one blank line. The last subtitle
    may instead end with a single line break.
    """
    empty_at_start = 0
    while text_lines and text_lines[0] == '':
        text_lines = text_lines[1:]
        empty_at_start += 1

    empty_at_end = 0
    while text_lines and text_lines[-1] == '':
        text_lines = text_lines[:-1]
        empty_at_end += 1

    non_empty = [line for line in text_lines if line != '']
    if len(non_empty) != len(text_lines):
        text_lines = non_empty
        log.fixed(index, "Line breaks in middle of subtitle")

    if not text_lines:
        log.manual(index, "Empty subtitle")
        return [EMPTY_PLACEHOLDER]

    if empty_at_start:
        log.fixed(index, f"{empty_at_start} empty lines at start of subtitle")

    max_empty_at_end = 2 if is_last else 1
    if empty_at_end == 0:
        log.fixed(index, "No line break after end of subtitle")
    elif empty_at_end > max_empty_at_end:
        log.fixed(index, f"Too many line breaks after end of subtitle ({empty_at_end})")

    return text_lines


def parse_srt(content: str) -> ParseResult:
    """
    Parse SRT subtitle content into subtitle records.

    Errors which would prevent another program reading the file are corrected
    in the returned records and reported in ``problems``. Problems with
    ``can_fix=False`` were corrected too, but need checking by eye.

    If the file does not start with a subtitle number followed by a timing
    line it cannot be parsed at all, and ``records`` is None.

    SRT format:
    ```
    1
    00:00:01,000 --> 00:00:04,000
    First subtitle text

    2
    00:00:05,000 --> 00:00:08,000
    Second subtitle
    with multiple lines
    ```

    Args:
        content: Decoded SRT file content

    Returns:
        ParseResult with records, problems and the normalized input text
    """
    log = ProblemLog()

    # Remove BOM if present
    if content.startswith('\ufeff'):
        content = content[1:]

    content = normalize_line_breaks(content, log)
    lines = content.split('\n')

    line_num = 0
    while line_num < len(lines) and not lines[line_num].strip():
        line_num += 1
    if line_num > 0:
        log.fixed(0, f"{line_num} empty lines before first subtitle")

    first_line: Optional[str] = lines[line_num] if line_num < len(lines) else None
    if first_line is None or not is_number_line(first_line):
        log.manual(0, f"Invalid first line: '{first_line or ''}'")
        return ParseResult(records=None, problems=log.problems, normalized_text=content)

    second_line: Optional[str] = lines[line_num + 1] if line_num + 1 < len(lines) else None
    if second_line is None or not is_timecode_line(second_line):
        log.manual(0, f"Invalid second line: '{second_line or ''}'")
        return ParseResult(records=None, problems=log.problems, normalized_text=content)

    records: List[Subtitle] = []
    index = 0
    previous_end = 0
    while line_num < len(lines):
        _parse_number_line(lines[line_num], index, log)
        start, end = _parse_timing_line(lines[line_num + 1], index, previous_end, log)

        text_lines, line_num = _collect_text_lines(lines, line_num + 2)
        text_lines = _clean_text_lines(text_lines, index, line_num >= len(lines), log)

        records.append(Subtitle(start_ms=start, end_ms=end, text='\n'.join(text_lines)))
        index += 1
        previous_end = end

    if not records:
        log.manual(0, "File contains no subtitles")

    logger.debug("Parsed %d subtitles with %d problems", len(records), len(log))
    return ParseResult(records=records, problems=log.problems, normalized_text=content)
