"""UTF-8 rune decoding for the cursor.

A rune is a single Unicode code point, returned as a one-character string.
Decoding works on raw bytes so the cursor can track byte offsets and widths.

Invalid encodings decode the way Go's utf8.DecodeRune does: the replacement
character U+FFFD with a width of one byte, so scanning always makes progress.

Example:
    >>> decode_rune("añb".encode(), 1)
    ('ñ', 2)
    >>> decode_rune(b"\\xff", 0)
    ('\\ufffd', 1)
"""

from __future__ import annotations

RUNE_ERROR = "�"


def _sequence_length(lead: int) -> int:
    """Expected byte length for a UTF-8 lead byte, 0 if it cannot lead."""
    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0


def decode_rune(data: bytes, pos: int) -> tuple[str, int]:
    """Decode the rune starting at byte offset pos.

    Args:
        data: UTF-8 encoded input
        pos: Byte offset of the rune; must be < len(data)

    Returns:
        (rune, width) where width is the number of bytes consumed
    """
    lead = data[pos]
    if lead < 0x80:
        return chr(lead), 1

    width = _sequence_length(lead)
    if width == 0 or pos + width > len(data):
        return RUNE_ERROR, 1

    try:
        # Strict decoding rejects overlongs, surrogates and values past U+10FFFF
        return data[pos : pos + width].decode("utf-8"), width
    except UnicodeDecodeError:
        return RUNE_ERROR, 1
