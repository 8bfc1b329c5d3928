"""
Mixin class generating path, shape, color & image painting operators.

The contents of this module are mixed in by pdfcanvas.Document, and all the
operators are appended to the content stream of its current page.
"""

import math
from typing import TYPE_CHECKING, Any, NamedTuple, Optional, Sequence, Union

from .colors import ColorCache
from .matrix import (
    Matrix,
    MatrixLike,
    PointLike,
    chain,
    map_points,
    rotate,
    scale,
    to_operator,
    translate,
)
from .util import format_number

if TYPE_CHECKING:
    from .document import ObjectHandle

# Control point distance, relative to the radius, of the cubic Bézier arcs
# approximating a quarter of circle:
KAPPA = 0.551915024494

UNIT_SQUARE = ((-0.5, -0.5), (0.5, -0.5), (0.5, 0.5), (-0.5, 0.5))


class ClipPath(NamedTuple):
    path: Sequence[PointLike]
    matrix: Optional[MatrixLike] = None


def paint_operator(stroke: bool, fill: bool, clip: bool = False, both: str = "B") -> str:
    """
    Operator terminating a path: set it as clipping path, fill & stroke it,
    fill it or stroke it. Stroking is the default.
    """
    if clip:
        return "W n"
    if fill and stroke:
        return both
    if fill:
        return "f"
    return "S"


def _n(value: float) -> str:
    return format_number(value)


class DrawingMixin:
    """Mixin class for the graphics primitives of a Document.

    It relies on the Document to provide `_out()`, that appends operators to
    the current page content stream, and raises NoCurrentPageError when no
    page has been added yet.
    """

    DEFAULT_LINE_WIDTH = 1

    def __init__(self, *args: Any, color_cache: Optional[ColorCache] = None, **kwargs: Any) -> None:
        self.color_cache = color_cache if color_cache is not None else ColorCache()
        self.line_width: float = self.DEFAULT_LINE_WIDTH
        super().__init__(*args, **kwargs)

    if TYPE_CHECKING:

        def _out(self, data: str) -> None: ...

        def _content_handle(self) -> Any: ...

        def _image_object(self, image: Union["ObjectHandle", str]) -> Any: ...

    def set_fill_color(self, color: Optional[str]) -> None:
        "Set the fill color from a '#RRGGBB' string, a falsy color is a no-op"
        operands = self.color_cache.operands(color)
        if operands:
            self._out(f"{operands} rg\n")

    def set_stroke_color(self, color: Optional[str]) -> None:
        "Set the stroke color from a '#RRGGBB' string, a falsy color is a no-op"
        operands = self.color_cache.operands(color)
        if operands:
            self._out(f"{operands} RG\n")

    def set_line_width(self, width: float) -> None:
        if width < 0:
            raise ValueError(f"Line width must be positive, got {width}")
        self._out(f"{_n(width)} w\n")
        self.line_width = width

    def add_line(
        self,
        path: Sequence[PointLike],
        matrix: Optional[MatrixLike] = None,
        closed: bool = False,
        clip: bool = False,
        save_state: bool = True,
    ) -> None:
        """
        Stroke a polyline, or set it as clipping path.

        The optional matrix is concatenated to the current transformation
        matrix, inside a saved graphics state unless save_state is False.
        """
        self._out(_line_operators(path, matrix, closed, clip, save_state))

    def add_polygon(
        self,
        path: Sequence[PointLike],
        matrix: Optional[MatrixLike] = None,
        closed: bool = True,
        fill: bool = False,
        stroke: bool = True,
        clip: bool = False,
    ) -> None:
        "Map every point of the path through the matrix, and paint the resulting polygon"
        self._content_handle()
        if not path:
            return
        points = map_points(matrix, path) if matrix is not None else path
        out = []
        for i, (x, y) in enumerate(points):
            out.append(f"{_n(x)} {_n(y)} {'l' if i else 'm'}")
        if closed:
            out.append("h")
        out.append(paint_operator(stroke, fill, clip))
        self._out(" ".join(out) + "\n")

    def add_circle(
        self,
        cx: float,
        cy: float,
        diameter: float,
        stroke: bool = True,
        fill: bool = False,
    ) -> None:
        "Circle approximated by 4 cubic Bézier arcs, one per quadrant"
        r = diameter * 0.5
        c = KAPPA * r
        end = paint_operator(stroke, fill, both="b")
        # Starting from the top, clockwise:
        # [0,1] [c,1] [1,c] [1,0]
        # [1,0] [1,-c] [c,-1] [0,-1]
        # [0,-1] [-c,-1] [-1,-c] [-1,0]
        # [-1,0] [-1,c] [-c,1] [0,1]
        # scaled by r and moved to the center.
        self._out(
            f"{_n(cx)} {_n(cy + r)} m"
            f" {_n(cx + c)} {_n(cy + r)} {_n(cx + r)} {_n(cy + c)} {_n(cx + r)} {_n(cy)} c"
            f" {_n(cx + r)} {_n(cy - c)} {_n(cx + c)} {_n(cy - r)} {_n(cx)} {_n(cy - r)} c"
            f" {_n(cx - c)} {_n(cy - r)} {_n(cx - r)} {_n(cy - c)} {_n(cx - r)} {_n(cy)} c"
            f" {_n(cx - r)} {_n(cy + c)} {_n(cx - c)} {_n(cy + r)} {_n(cx)} {_n(cy + r)} c"
            f" {end}\n"
        )

    def add_oval(
        self,
        cx: float,
        cy: float,
        width: float,
        height: float,
        angle: float = 0,
        stroke: bool = True,
        fill: bool = False,
    ) -> None:
        """
        Ellipse centered on (cx, cy), rotated by angle degrees.

        A unit circle is drawn through a scaling matrix, so the line width is
        divided by the largest dimension to keep the stroke close to the
        current line width.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Oval dimensions must be positive, got {width}x{height}")
        matrix = _footprint(cx, cy, width, height, angle)
        self._out(f" q{to_operator(matrix)} {_n(self.line_width / max(width, height))} w\n")
        self.add_circle(0, 0, 1, stroke=stroke, fill=fill)
        self._out(" Q\n")

    def add_rectangle(
        self,
        cx: float,
        cy: float,
        width: float,
        height: float,
        angle: float = 0,
        stroke: bool = True,
        fill: bool = False,
    ) -> None:
        "Rectangle centered on (cx, cy), rotated by angle degrees"
        matrix = _footprint(cx, cy, width, height, angle)
        self.add_polygon(UNIT_SQUARE, matrix, closed=True, fill=fill, stroke=stroke)

    def paint_image(
        self,
        matrix: MatrixLike,
        image: Union["ObjectHandle", str],
        clip_path: Optional[Union[ClipPath, Sequence[PointLike]]] = None,
    ) -> None:
        """
        Paint a registered image: the matrix maps the unit square onto the page.
        When a clip path is given, painting happens inside a saved graphics
        state, clipped by this closed polygon.
        """
        image_obj = self._image_object(image)
        paint = f" q{to_operator(matrix)} /{image_obj.extra['handle']} Do Q"
        if clip_path is None:
            self._out(paint + "\n")
            return
        if not isinstance(clip_path, ClipPath):
            clip_path = ClipPath(clip_path)
        clip = _line_operators(
            clip_path.path, clip_path.matrix, closed=True, clip=True, save_state=False
        )
        self._out(" q" + clip + paint + " Q\n")


def _footprint(cx: float, cy: float, width: float, height: float, angle: float) -> Matrix:
    "translate . rotate . scale: maps the unit shape centered on the origin onto the page"
    return chain(translate(cx, cy), rotate(math.radians(angle)), scale(width, height))


def _line_operators(
    path: Sequence[PointLike],
    matrix: Optional[MatrixLike],
    closed: bool,
    clip: bool,
    save_state: bool,
) -> str:
    out = [" q"] if save_state else []
    if matrix is not None:
        out.append(to_operator(matrix))
    out.append("\n")
    for i, (x, y) in enumerate(path):
        out.append(f" {format_number(x, 3)} {format_number(y, 3)} {'l' if i else 'm'}")
    if path:
        if closed:
            out.append(" h")
        out.append(" W n" if clip else " S")
    out.append(" Q\n" if save_state else "\n")
    return "".join(out)
