"""Timecode conversion and line grammars for SRT parsing."""

import re
from typing import Optional, Union


# Subtitle number line, e.g. "12". Surrounding whitespace is captured so the
# parser can report it. Digits are ASCII only.
NUM_REGEX = re.compile(r"^(\s*)([0-9]+)(\s*)$")

# Timing line, e.g. "00:00:01,000 --> 00:00:04,000". Deliberately lenient on
# field widths, arrow form and spacing; deviations are reported by the parser.
TC_REGEX = re.compile(
    r"^(\s*)([0-9]+):([0-9]+):([0-9]+),([0-9]+)(\s*-?->\s*)([0-9]+):([0-9]+):([0-9]+),([0-9]+)(\s*)$"
)

CANONICAL_ARROW = " --> "


def is_number_line(line: str) -> bool:
    return NUM_REGEX.match(line) is not None


def is_timecode_line(line: str) -> bool:
    return TC_REGEX.match(line) is not None


def timecode_to_ms(
    hours: Union[int, str],
    minutes: Union[int, str],
    seconds: Union[int, str],
    millis: Union[int, str]
) -> Optional[int]:
    """
    Convert timecode fields to milliseconds.

    Args:
        hours: Hours (any non-negative value)
        minutes: Minutes, 0-59
        seconds: Seconds, 0-59
        millis: Milliseconds, 0-999

    Returns:
        Time in milliseconds, or None if a field is out of range
    """
    hours, minutes, seconds, millis = (int(n) for n in (hours, minutes, seconds, millis))
    if minutes > 59 or seconds > 59 or millis > 999:
        return None

    return (
        hours * 3600000 +
        minutes * 60000 +
        seconds * 1000 +
        millis
    )


def ms_to_timecode(ms: int) -> str:
    """
    Format milliseconds to SRT timestamp format (HH:MM:SS,mmm).

    Args:
        ms: Time in milliseconds

    Returns:
        Formatted timestamp string

    Raises:
        ValueError: If ms is negative
    """
    if ms < 0:
        raise ValueError(f"Cannot format negative time: {ms}")

    hours = ms // 3600000
    ms %= 3600000
    minutes = ms // 60000
    ms %= 60000
    seconds = ms // 1000
    millis = ms % 1000

    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{millis:03d}"


def has_canonical_widths(hours: str, minutes: str, seconds: str, millis: str) -> bool:
    """Whether timecode fields are exactly 2/2/2/3 digits wide."""
    return len(hours) == 2 and len(minutes) == 2 and len(seconds) == 2 and len(millis) == 3


__all__ = [
    "NUM_REGEX",
    "TC_REGEX",
    "CANONICAL_ARROW",
    "is_number_line",
    "is_timecode_line",
    "timecode_to_ms",
    "ms_to_timecode",
    "has_canonical_widths",
]
