"""
Conversion of "#RRGGBB" colors into color operator operands.
"""

import logging
import re
from typing import Optional

from .errors import InvalidColorError
from .util import number_to_str

LOGGER = logging.getLogger(__name__)

HEX_COLOR_RE = re.compile(r"#[0-9a-fA-F]{6}")


def color_to_rgb(color: str) -> tuple[float, float, float]:
    "Parse a #RRGGBB color into 3 floats in the [0, 1] range"
    if not HEX_COLOR_RE.fullmatch(color):
        raise InvalidColorError(f"Invalid color {color!r}, expected #RRGGBB")
    value = int(color[1:], 16)
    return (
        ((value >> 16) & 0xFF) / 255,
        ((value >> 8) & 0xFF) / 255,
        (value & 0xFF) / 255,
    )


class ColorCache:
    """
    Memoizes the operand text of each distinct color.

    The formatting is a pure function of the color string, so a single cache
    can be shared by several documents. `decode_count` tells how many colors
    actually had to be parsed.
    """

    def __init__(self) -> None:
        self._operands: dict[str, str] = {}
        self.decode_count = 0

    def __len__(self) -> int:
        return len(self._operands)

    def __contains__(self, color: object) -> bool:
        return color in self._operands

    def operands(self, color: Optional[str]) -> str:
        """
        Returns the ' r g b' operand text of a color.
        An empty string is returned for a falsy color.
        """
        if not color:
            return ""
        operands = self._operands.get(color)
        if operands is None:
            r, g, b = color_to_rgb(color)
            self.decode_count += 1
            LOGGER.debug("Decoded color %s", color)
            operands = f" {number_to_str(r)} {number_to_str(g)} {number_to_str(b)}"
            self._operands[color] = operands
        return operands
