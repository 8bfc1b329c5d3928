"""
Various utilities that could not be gathered logically in a specific module.
"""

import decimal
import math
from typing import TypeVar, Union, overload

Number = Union[int, float, decimal.Decimal]
NumberClass = (int, float, decimal.Decimal)
_StrBytes = TypeVar("_StrBytes", str, bytes)


@overload
def escape_parens(s: str) -> str: ...


@overload
def escape_parens(s: bytes) -> bytes: ...


def escape_parens(s: _StrBytes) -> _StrBytes:
    """Add a backslash character before \\, ( and )"""
    if isinstance(s, str):
        return (
            s.replace("\\", "\\\\")
            .replace(")", "\\)")
            .replace("(", "\\(")
            .replace("\r", "\\r")
        )
    return (
        s.replace(b"\\", b"\\\\")
        .replace(b")", b"\\)")
        .replace(b"(", b"\\(")
        .replace(b"\r", b"\\r")
    )


def number_to_str(number: Number) -> str:
    """
    Shortest round-trip representation of a number, without a trailing ".0"
    for integral values: 1.0 -> "1", 0.5019607843137255 -> "0.5019607843137255".
    """
    if isinstance(number, bool):
        raise TypeError(f"Expected a number, got {number!r}")
    if isinstance(number, int):
        return str(number)
    number = float(number)
    if number.is_integer():
        return str(int(number))
    text = repr(number)
    if "e" in text or "E" in text:
        # PDF numbers have no exponent notation
        return format_number(number, digits=10)
    return text


def format_number(x: float, digits: int = 8) -> str:
    # snap tiny values to zero to avoid "-0" and scientific notation
    if abs(x) < 1e-12:
        x = 0.0
    s = f"{x:.{digits}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    if s == "-0":
        s = "0"
    return s


def round_half_up(value: float, ndigits: int = 2) -> float:
    "Rounds .5 away from the lower value, unlike the builtin round() that rounds to even"
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor
