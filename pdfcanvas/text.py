"""
Mixin class measuring & placing single-line text with the standard fonts.
"""

from typing import TYPE_CHECKING, Any, Optional, Sequence, Union

from .errors import FontNotFoundError
from .fonts import STANDARD_METRICS, FontMetrics, FontMetricsTable
from .matrix import Box, Point
from .util import escape_parens, format_number, number_to_str

if TYPE_CHECKING:
    from .document import PDFObject

DEFAULT_FONT = "helvetica"

HORIZONTAL_ALIGNMENTS = ("l", "r", "c")
VERTICAL_ALIGNMENTS = ("t", "b", "c")


def parse_alignment(alignment: Optional[str]) -> tuple[str, str]:
    """
    Split a 2-character alignment code into its horizontal (l, r, c) and
    vertical (t, b, c) parts. Missing or unknown characters mean centered.
    """
    alignment = (alignment or "").lower()
    horizontal = alignment[:1]
    vertical = alignment[1:2]
    if horizontal not in HORIZONTAL_ALIGNMENTS:
        horizontal = "c"
    if vertical not in VERTICAL_ALIGNMENTS:
        vertical = "c"
    return horizontal, vertical


def text_origin(measured: Box, box: Box, alignment: Optional[str] = "cc") -> Point:
    """
    Origin to draw a text at, so that its measured bounding box is aligned
    on the matching edge, or on the center, of the destination box.
    """
    horizontal, vertical = parse_alignment(alignment)
    if horizontal == "l":
        x = box.minx - measured.minx
    elif horizontal == "r":
        x = box.maxx - measured.maxx
    else:
        x = box.center.x - measured.center.x
    if vertical == "t":
        y = box.maxy - measured.maxy
    elif vertical == "b":
        y = box.miny - measured.miny
    else:
        y = box.center.y - measured.center.y
    return Point(x, y)


def _to_box(box: Union[Box, Sequence[float], dict[str, float]]) -> Box:
    if isinstance(box, Box):
        return box
    if isinstance(box, dict):
        return Box(box["minx"], box["miny"], box["maxx"], box["maxy"])
    return Box(*box)


class TextMixin:
    """Mixin class for the text operations of a Document.

    Fonts are referred to by the logical name given to add_font(); their
    metrics are looked up by their base font name first, then by that name.
    """

    def __init__(self, *args: Any, metrics: Optional[FontMetricsTable] = None, **kwargs: Any) -> None:
        self.metrics = metrics if metrics is not None else STANDARD_METRICS
        self.font_name = DEFAULT_FONT
        super().__init__(*args, **kwargs)

    if TYPE_CHECKING:

        def _out(self, data: str) -> None: ...

        def _content_handle(self) -> Any: ...

        def _font_object(self, name: str) -> "PDFObject": ...

    def set_font(self, name: str) -> None:
        "Select the font used by the following measure_text() & add_text() calls"
        self._font_object(name)
        self.font_name = name

    def font_metrics(self, name: Optional[str] = None) -> FontMetrics:
        name = name or self.font_name
        font_obj = self._font_object(name)
        # metrics of the drawn font first
        metrics = self.metrics.find(font_obj.dictionary["BaseFont"]) or self.metrics.find(name)
        if metrics is None:
            raise FontNotFoundError(name)
        return metrics

    def measure_text(self, text: str, size: float, font: Optional[str] = None) -> Box:
        "Bounding box of the text at the given size, relative to its origin"
        return self.font_metrics(font).measure(text, size)

    def add_text(
        self,
        text: str,
        size: float,
        box: Union[Box, Sequence[float], dict[str, float]],
        alignment: Optional[str] = "cc",
        font: Optional[str] = None,
    ) -> Point:
        """
        Draw a single line of text, aligned inside a box.

        Args:
            text: the text to draw
            size: font size, in points
            box: destination box, as (minx, miny, maxx, maxy)
            alignment: 2 characters, horizontal (l, r, c) then vertical (t, b, c)
            font: logical font name, the current font by default

        Returns:
            the text origin
        """
        self._content_handle()
        font = font or self.font_name
        font_handle = self._font_object(font).extra["handle"]
        origin = text_origin(self.measure_text(text, size, font), _to_box(box), alignment)
        self._out(
            f"BT /{font_handle} {number_to_str(size)} Tf\n"
            f"{format_number(origin.x)} {format_number(origin.y)} Td\n"
            f"({escape_parens(text)}) Tj\nET\n"
        )
        return origin
