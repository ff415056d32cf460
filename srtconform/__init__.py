"""Parse, validate and conform SRT subtitle files."""

from .conformance import ConformanceEngine, conform_subtitles, validate_subtitles
from .export import export_srt
from .models import BomType, ConformResult, ParseResult, Problem, StyleGuide, Subtitle
from .parsing import decode_bytes, detect_bom, ms_to_timecode, parse_srt, read_srt_bytes, timecode_to_ms
from .problems import summarize_problems

parse = parse_srt
conform = conform_subtitles
validate = validate_subtitles
stringify = export_srt

__version__ = "1.0.0"

__all__ = [
    "parse",
    "conform",
    "validate",
    "stringify",
    "parse_srt",
    "conform_subtitles",
    "validate_subtitles",
    "export_srt",
    "ConformanceEngine",
    "detect_bom",
    "decode_bytes",
    "read_srt_bytes",
    "ms_to_timecode",
    "timecode_to_ms",
    "summarize_problems",
    "BomType",
    "ConformResult",
    "ParseResult",
    "Problem",
    "StyleGuide",
    "Subtitle",
]
