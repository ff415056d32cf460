"""Byte-order mark detection and decoding of subtitle file bytes."""

from typing import Optional

from ..models import BomType


_BOM_LENGTHS = {
    BomType.UTF8: 3,
    BomType.UTF16LE: 2,
    BomType.UTF16BE: 2,
}


def detect_bom(data: bytes) -> Optional[BomType]:
    """
    Detect the byte-order mark at the start of a file.

    Args:
        data: Raw file bytes

    Returns:
        The BOM type, or None if no recognised BOM is present
    """
    if data[:2] == b"\xff\xfe":
        return BomType.UTF16LE
    if data[:2] == b"\xfe\xff":
        return BomType.UTF16BE
    if data[:3] == b"\xef\xbb\xbf":
        return BomType.UTF8
    return None


def _swap_byte_pairs(data: bytes) -> bytes:
    """Return a copy of data with every byte pair swapped."""
    swapped = bytearray(data)
    swapped[0:len(data) - 1:2] = data[1::2]
    swapped[1::2] = data[0:len(data) - 1:2]
    return bytes(swapped)


def decode_bytes(data: bytes, bom_type: Optional[BomType]) -> str:
    """
    Decode file bytes to text, removing the BOM.

    Big-endian UTF-16 is converted to little-endian in a new buffer before
    decoding; ``data`` itself is left untouched. Without a BOM the bytes are
    decoded as UTF-8. Undecodable sequences become U+FFFD.

    Args:
        data: Raw file bytes
        bom_type: BOM type as returned by ``detect_bom``

    Returns:
        File contents as text
    """
    if bom_type is None:
        return bytes(data).decode("utf-8", errors="replace")

    body = bytes(data[_BOM_LENGTHS[bom_type]:])
    if bom_type == BomType.UTF8:
        return body.decode("utf-8", errors="replace")
    if bom_type == BomType.UTF16BE:
        body = _swap_byte_pairs(body)
    return body.decode("utf-16-le", errors="replace")


def read_srt_bytes(data: bytes) -> str:
    """Detect the BOM of ``data`` and decode it to text."""
    return decode_bytes(data, detect_bom(data))


__all__ = ["detect_bom", "decode_bytes", "read_srt_bytes"]
