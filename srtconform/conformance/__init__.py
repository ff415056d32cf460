"""Subtitle conformance engine for the house style guide."""

from .engine import ConformanceEngine, conform_subtitles, validate_subtitles

__all__ = ["ConformanceEngine", "conform_subtitles", "validate_subtitles"]
