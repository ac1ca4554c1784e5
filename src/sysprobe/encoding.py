"""
Text encoding detection for subprocess output.

Command output on POSIX locales is UTF-8, while Windows hosts with a
simplified-Chinese locale emit GBK. This module decides which of the two a
raw byte buffer is and decodes it. Anything else decodes to an empty string;
there is no generic fallback.
"""

import logging

logger = logging.getLogger(__name__)

# GBK double-byte ranges: lead 0x81-0xFE, trail 0x40-0xFE except 0x7F.
_GBK_LEAD_MIN, _GBK_LEAD_MAX = 0x81, 0xFE
_GBK_TRAIL_MIN, _GBK_TRAIL_MAX = 0x40, 0xFE
_GBK_TRAIL_EXCLUDED = 0x7F

_CODECS = {
    "UTF8": "utf-8",
    "GBK": "gbk",
    "GB18030": "gb18030",
}

# Double-byte Chinese codecs keep readable text around unmapped pairs.
_REPLACING_CODECS = ("gbk", "gb18030")


def is_utf8(data: bytes) -> bool:
    """Return True if ``data`` is a valid UTF-8 byte sequence."""
    try:
        data.decode("utf-8")
    except UnicodeDecodeError:
        return False
    return True


def is_gbk(data: bytes) -> bool:
    """
    Check whether ``data`` follows the GBK byte structure.

    Single bytes up to 0x7F are ASCII. Every other byte must start a
    two-byte sequence whose lead and trail bytes fall in the GBK ranges.
    A truncated sequence at the end of the buffer is not GBK.

    Examples:
        >>> is_gbk("中文".encode("gbk"))
        True
        >>> is_gbk(b"\\xff\\xfe")
        False
    """
    i = 0
    length = len(data)
    while i < length:
        byte = data[i]
        if byte <= 0x7F:
            i += 1
            continue
        if not _GBK_LEAD_MIN <= byte <= _GBK_LEAD_MAX or i + 1 >= length:
            return False
        trail = data[i + 1]
        if not _GBK_TRAIL_MIN <= trail <= _GBK_TRAIL_MAX or trail == _GBK_TRAIL_EXCLUDED:
            return False
        i += 2
    return True


def byte_to_string(data: bytes, charset: str = "UTF8") -> str:
    """
    Convert ``data`` to text using the named charset.

    Args:
        data: Raw bytes to convert.
        charset: ``"UTF8"``, ``"GBK"`` or ``"GB18030"``. Unknown names are
            treated as UTF-8.

    Returns:
        The decoded text. Unmapped GBK and GB18030 pairs become U+FFFD;
        UTF-8 input the codec rejects yields an empty string.
    """
    codec = _CODECS.get(charset.upper(), "utf-8")
    if codec in _REPLACING_CODECS:
        return data.decode(codec, errors="replace")
    try:
        return data.decode(codec)
    except UnicodeDecodeError as e:
        logger.debug(f"Could not decode {len(data)} bytes as {codec}: {e}")
        return ""


def decode_output(data: bytes) -> str:
    """
    Decode captured subprocess output.

    1. Valid UTF-8 is returned as-is.
    2. Otherwise, bytes that follow the GBK structure are decoded as GBK.
    3. Anything else yields an empty string.

    Never raises for undecodable input.
    """
    if is_utf8(data):
        return byte_to_string(data, "UTF8")
    if is_gbk(data):
        return byte_to_string(data, "GBK")
    logger.debug(f"Output of {len(data)} bytes is neither UTF-8 nor GBK, discarding")
    return ""
