"""
Text to bytes transcoding for everything that ends up in the output buffer.

Python strings hold code points, so astral characters are encoded directly;
surrogate code units only show up when a caller built the string from UTF-16
halves, and are then combined pairwise.
"""

from .errors import EncodingError

_HIGH_SURROGATES = range(0xD800, 0xDC00)
_LOW_SURROGATES = range(0xDC00, 0xE000)


def encode_utf8(text: str) -> bytes:
    """
    Encode text into a UTF-8 byte sequence.

    Raises:
        EncodingError: when a high surrogate is the last character of the input,
            or is followed by something else than a low surrogate.
    """
    out = bytearray()
    i = 0
    length = len(text)
    while i < length:
        c = ord(text[i])
        if c < 0x80:
            out.append(c)
        elif c < 0x800:
            out.append(c >> 6 | 0xC0)
            out.append(c & 0x3F | 0x80)
        elif c in _HIGH_SURROGATES:
            i += 1
            if i == length:
                raise EncodingError("UTF-8 encode: incomplete surrogate pair")
            c2 = ord(text[i])
            if c2 not in _LOW_SURROGATES:
                raise EncodingError(
                    f"UTF-8 encode: second char code {c2:#x} at index {i} in surrogate pair out of range"
                )
            _append_4_bytes(out, 0x10000 + ((c & 0x03FF) << 10) + (c2 & 0x03FF))
        elif c < 0x10000:
            # lone low surrogates land here too, as 3-byte sequences
            out.append(c >> 12 | 0xE0)
            out.append(c >> 6 & 0x3F | 0x80)
            out.append(c & 0x3F | 0x80)
        else:
            _append_4_bytes(out, c)
        i += 1
    return bytes(out)


def _append_4_bytes(out: bytearray, c: int) -> None:
    out.append(c >> 18 | 0xF0)
    out.append(c >> 12 & 0x3F | 0x80)
    out.append(c >> 6 & 0x3F | 0x80)
    out.append(c & 0x3F | 0x80)


def decode_utf8(data: bytes) -> str:
    "Inverse of encode_utf8() for well-formed input"
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as error:
        raise EncodingError(f"UTF-8 decode: {error.reason} at byte {error.start}") from error
