"""Subtitle Conformance Engine for the house style guide."""

import logging
from typing import List, Optional

from ..models import ConformResult, Problem, StyleGuide, Subtitle
from ..problems import ProblemLog
from ..qc.checks import run_structure_checks
from .rules import TEXT_RULES, TextRule, apply_text_rules

logger = logging.getLogger(__name__)

EMPTY_PLACEHOLDER = "_"


class ConformanceEngine:
    """
    Engine for bringing subtitles in line with the style guide.

    Text and short-timing deviations are corrected and reported with
    ``can_fix=True``. Deviations that need a human (too many lines, long
    lines, disallowed characters, durations that cannot be extended) are
    reported with ``can_fix=False``.
    """

    def __init__(self, style: Optional[StyleGuide] = None, rules: Optional[List[TextRule]] = None):
        self.style = style or StyleGuide()
        self.rules = rules if rules is not None else TEXT_RULES

    def conform(self, subtitles: List[Subtitle]) -> ConformResult:
        """
        Conform subtitles according to the style guide.

        Args:
            subtitles: Subtitles as returned by the parser. Not modified.

        Returns:
            ConformResult with new subtitle records and the problems found
        """
        log = ProblemLog()
        if not subtitles:
            return ConformResult(records=[], problems=[])

        first_start = subtitles[0].start_ms
        if first_start < self.style.first_start_min_ms:
            log.manual(
                0,
                f"First subtitle begins at {first_start} ms, "
                f"before {self.style.first_start_min_ms} ms"
            )

        conformed: List[Subtitle] = []
        for index, subtitle in enumerate(subtitles):
            next_start = subtitles[index + 1].start_ms if index + 1 < len(subtitles) else None
            conformed.append(self._conform_one(subtitle, index, next_start, log))

        logger.debug("Conformed %d subtitles with %d problems", len(conformed), len(log))
        return ConformResult(records=conformed, problems=log.problems)

    def validate(self, subtitles: List[Subtitle]) -> List[Problem]:
        """Report style deviations without returning corrected subtitles."""
        return self.conform(subtitles).problems

    def _conform_one(
        self,
        subtitle: Subtitle,
        index: int,
        next_start: Optional[int],
        log: ProblemLog
    ) -> Subtitle:
        text = self._conform_text(subtitle.text, index, log)
        end = self._conform_timing(subtitle, index, next_start, log)

        result = Subtitle(start_ms=subtitle.start_ms, end_ms=end, text=text)
        for problem in run_structure_checks(result, index, self.style):
            log.problems.append(problem)
        return result

    def _conform_text(self, text: str, index: int, log: ProblemLog) -> str:
        text, messages = apply_text_rules(text, self.rules)
        for message in messages:
            log.fixed(index, message)

        if not text:
            log.manual(index, "Empty subtitle")
            text = EMPTY_PLACEHOLDER
        return text

    def _conform_timing(
        self,
        subtitle: Subtitle,
        index: int,
        next_start: Optional[int],
        log: ProblemLog
    ) -> int:
        """
        Apply minimum duration and minimum gap rules.

        Returns:
            The corrected end time
        """
        min_duration = self.style.min_duration_ms
        end = subtitle.end_ms
        duration = subtitle.duration_ms
        if duration < min_duration:
            end = subtitle.start_ms + min_duration
            clamped = next_start is not None and end > next_start
            if clamped:
                end = next_start
            log.add(index, f"Subtitle duration {duration} ms under {min_duration} ms", can_fix=not clamped)

        min_gap = self.style.min_gap_ms
        if next_start is not None and end != next_start and end + min_gap > next_start:
            log.fixed(
                index,
                f"Short gap before next subtitle ({next_start - end} ms, less than {min_gap} ms)"
            )
            end = next_start

        return end


def conform_subtitles(
    subtitles: List[Subtitle],
    style: Optional[StyleGuide] = None
) -> ConformResult:
    """
    Conform subtitles according to the style guide.

    Args:
        subtitles: Subtitles as returned by the parser
        style: Style thresholds, house defaults if omitted

    Returns:
        ConformResult with corrected subtitles and problems
    """
    return ConformanceEngine(style).conform(subtitles)


def validate_subtitles(
    subtitles: List[Subtitle],
    style: Optional[StyleGuide] = None
) -> List[Problem]:
    """Return the problems ``conform_subtitles`` would report."""
    return conform_subtitles(subtitles, style).problems
