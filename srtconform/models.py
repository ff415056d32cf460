"""Pydantic models for the subtitle conformance toolkit."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class BomType(str, Enum):
    """Byte-order marks recognised at the start of a subtitle file."""
    UTF8 = "utf8"
    UTF16LE = "utf16le"
    UTF16BE = "utf16be"


class StyleGuide(BaseModel):
    """Thresholds of the house subtitle style."""
    max_lines: int = Field(default=2, ge=1, le=4, description="Maximum lines per subtitle")
    max_line_length: int = Field(default=45, ge=20, le=80, description="Maximum characters per line")
    min_duration_ms: int = Field(default=1000, ge=100, le=5000, description="Minimum subtitle duration in ms")
    min_gap_ms: int = Field(default=200, ge=0, le=2000, description="Minimum gap before the next subtitle in ms")
    first_start_min_ms: int = Field(
        default=500, ge=0, le=10000,
        description="Earliest allowed start of the first subtitle in ms"
    )


class Subtitle(BaseModel):
    """A single subtitle record. Its position in the list is its index."""
    start_ms: int = Field(..., ge=0, description="Start time in milliseconds")
    end_ms: int = Field(..., ge=0, description="End time in milliseconds")
    text: str = Field(..., description="Subtitle text, lines separated by '\\n'")

    @property
    def duration_ms(self) -> int:
        """Duration in milliseconds."""
        return self.end_ms - self.start_ms

    @property
    def lines(self) -> list[str]:
        return self.text.split('\n')


class Problem(BaseModel):
    """A single deviation found while parsing or conforming."""
    index: int = Field(..., ge=0, description="Subtitle position, 0 for file-level issues")
    message: str = Field(..., description="Human-readable description")
    can_fix: bool = Field(..., description="True if already corrected, False if manual review is needed")


class ParseResult(BaseModel):
    """Output of the SRT parser."""
    records: Optional[list[Subtitle]] = Field(
        default=None, description="Parsed subtitles, None if the file could not be parsed at all"
    )
    problems: list[Problem] = Field(default_factory=list, description="Problems found while parsing")
    normalized_text: str = Field(default="", description="Input with BOM removed and line breaks as '\\n'")

    @property
    def failed(self) -> bool:
        return self.records is None


class ConformResult(BaseModel):
    """Output of the conformance engine."""
    records: list[Subtitle] = Field(default_factory=list, description="Conformed subtitles")
    problems: list[Problem] = Field(default_factory=list, description="Problems found while conforming")


class ProblemSummary(BaseModel):
    """Summary of a problem list."""
    total_subtitles: int = Field(..., description="Total number of subtitles")
    problems_count: int = Field(..., description="Total number of problems")
    fixed_count: int = Field(..., description="Problems corrected automatically")
    manual_count: int = Field(..., description="Problems needing manual review")
    passed: bool = Field(..., description="Whether no manual review is needed")


class ProblemReport(BaseModel):
    """Full problem report."""
    problems: list[Problem] = Field(default_factory=list, description="All problems")
    summary: ProblemSummary = Field(..., description="Summary statistics")
