"""SRT subtitle file exporter."""

from typing import List

from ..exceptions import SerializationError
from ..models import Subtitle
from ..parsing.base import ms_to_timecode


def export_srt(subtitles: List[Subtitle]) -> str:
    """
    Export subtitles to SRT format.

    Subtitle numbers are always the 1-based position in the list. Blocks are
    separated by a blank line and the file ends with a single line break.

    Args:
        subtitles: List of subtitles, in order

    Returns:
        SRT file content as string, '' for an empty list

    Raises:
        SerializationError: If a subtitle does not end after it starts
    """
    if not subtitles:
        return ""

    blocks: List[str] = []
    for i, subtitle in enumerate(subtitles, 1):
        if subtitle.end_ms <= subtitle.start_ms:
            raise SerializationError(
                f"Subtitle {i} ends at {subtitle.end_ms} ms, not after its start at {subtitle.start_ms} ms"
            )

        start = ms_to_timecode(subtitle.start_ms)
        end = ms_to_timecode(subtitle.end_ms)
        blocks.append(f"{i}\n{start} --> {end}\n{subtitle.text}")

    return "\n\n".join(blocks) + "\n"
