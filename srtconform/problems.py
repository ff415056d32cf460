"""Problem accumulation and summaries."""

from typing import List

from .models import Problem, ProblemReport, ProblemSummary


class ProblemLog:
    """
    Append-only accumulator of problems.

    Parsing and conformance steps receive the log explicitly and add to it;
    the collected list becomes part of their return value.
    """

    def __init__(self):
        self.problems: List[Problem] = []

    def add(self, index: int, message: str, can_fix: bool = True) -> None:
        self.problems.append(Problem(index=index, message=message, can_fix=can_fix))

    def fixed(self, index: int, message: str) -> None:
        self.add(index, message, can_fix=True)

    def manual(self, index: int, message: str) -> None:
        self.add(index, message, can_fix=False)

    def __len__(self) -> int:
        return len(self.problems)


def summarize_problems(problems: List[Problem], total_subtitles: int) -> ProblemReport:
    """
    Build a report with fixed/manual counts for a problem list.

    Args:
        problems: Problems from parsing and/or conformance
        total_subtitles: Number of subtitles the problems relate to

    Returns:
        ProblemReport with the problems and summary statistics
    """
    fixed = [p for p in problems if p.can_fix]
    manual = [p for p in problems if not p.can_fix]

    summary = ProblemSummary(
        total_subtitles=total_subtitles,
        problems_count=len(problems),
        fixed_count=len(fixed),
        manual_count=len(manual),
        passed=len(manual) == 0,
    )

    return ProblemReport(problems=list(problems), summary=summary)
