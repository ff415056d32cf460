from .base import ms_to_timecode, timecode_to_ms
from .bom import decode_bytes, detect_bom, read_srt_bytes
from .srt_parser import parse_srt

__all__ = [
    "parse_srt",
    "detect_bom",
    "decode_bytes",
    "read_srt_bytes",
    "ms_to_timecode",
    "timecode_to_ms",
]
