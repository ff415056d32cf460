"""Structural style checks for subtitles.

These deviations have no safe automatic rewrite, so they are only reported.
"""

import re
from typing import List, Optional

from ..models import Problem, StyleGuide, Subtitle


ALLOWED_CHARS_REGEX = re.compile(r"[^A-Za-z0-9,.;:?!()\-'\"%/&♪ \n]")


def check_line_count(
    subtitle: Subtitle,
    index: int,
    max_lines: int
) -> Optional[Problem]:
    """
    Check if a subtitle has too many lines.

    Args:
        subtitle: The subtitle to check
        index: Position of the subtitle
        max_lines: Maximum allowed lines per subtitle

    Returns:
        Problem if violation found, None otherwise
    """
    line_count = len(subtitle.lines)
    if line_count > max_lines:
        return Problem(
            index=index,
            message=f"Subtitle has {line_count} lines, exceeds maximum {max_lines}",
            can_fix=False
        )

    return None


def check_line_length(
    subtitle: Subtitle,
    index: int,
    max_line_length: int
) -> Optional[Problem]:
    """
    Check if the longest line of a subtitle exceeds the character limit.

    Args:
        subtitle: The subtitle to check
        index: Position of the subtitle
        max_line_length: Maximum allowed characters per line

    Returns:
        Problem if violation found, None otherwise
    """
    longest = max(len(line) for line in subtitle.lines)
    if longest > max_line_length:
        return Problem(
            index=index,
            message=f"Line length {longest} exceeds recommended {max_line_length} max",
            can_fix=False
        )

    return None


def check_characters(subtitle: Subtitle, index: int) -> Optional[Problem]:
    """
    Check that a subtitle only uses the allowed character set.

    Returns:
        Problem listing the distinct offending characters, None if all allowed
    """
    found = ALLOWED_CHARS_REGEX.findall(subtitle.text)
    if found:
        distinct = ''.join(dict.fromkeys(found))
        return Problem(
            index=index,
            message=f"Subtitle contains non-ascii chars {distinct}",
            can_fix=False
        )

    return None


def run_structure_checks(
    subtitle: Subtitle,
    index: int,
    style: StyleGuide
) -> List[Problem]:
    """
    Run all structural checks on one subtitle.

    Args:
        subtitle: The subtitle to check (after text conformance)
        index: Position of the subtitle
        style: Style thresholds

    Returns:
        Problems found, in check order
    """
    problems: List[Problem] = []

    issue = check_line_count(subtitle, index, style.max_lines)
    if issue:
        problems.append(issue)

    issue = check_line_length(subtitle, index, style.max_line_length)
    if issue:
        problems.append(issue)

    issue = check_characters(subtitle, index)
    if issue:
        problems.append(issue)

    return problems


__all__ = ["check_line_count", "check_line_length", "check_characters", "run_structure_checks"]
