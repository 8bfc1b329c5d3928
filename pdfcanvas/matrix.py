"""
2D affine transformation matrices, in the PDF notation [a b c d e f].

The linear part is [[a, c], [b, d]] and (e, f) is the translation, so that
a point (x, y) maps to (a*x + c*y + e, b*x + d*y + f).
"""

import math
from numbers import Real
from typing import Iterable, NamedTuple, Sequence, Union

from .errors import InvalidMatrixError
from .util import format_number


class Point(NamedTuple):
    x: float
    y: float


class Box(NamedTuple):
    minx: float
    miny: float
    maxx: float
    maxy: float

    @property
    def width(self) -> float:
        return self.maxx - self.minx

    @property
    def height(self) -> float:
        return self.maxy - self.miny

    @property
    def center(self) -> Point:
        return Point((self.minx + self.maxx) * 0.5, (self.miny + self.maxy) * 0.5)


class Matrix(NamedTuple):
    a: float
    b: float
    c: float
    d: float
    e: float
    f: float

    @classmethod
    def from_sequence(cls, values: Union["Matrix", Sequence[float]]) -> "Matrix":
        if isinstance(values, Matrix):
            return values
        values = tuple(values)
        if len(values) != 6:
            raise InvalidMatrixError(
                f"A transformation matrix needs 6 components, got {len(values)}"
            )
        for value in values:
            if isinstance(value, bool) or not isinstance(value, Real):
                raise InvalidMatrixError(f"Invalid matrix component: {value!r}")
        return cls(*(float(v) for v in values))

    def __matmul__(self, other: "Matrix") -> "Matrix":
        return multiply(self, other)


MatrixLike = Union[Matrix, Sequence[float]]
PointLike = Union[Point, Sequence[float]]


def identity() -> Matrix:
    return Matrix(1, 0, 0, 1, 0, 0)


def scale(sx: float, sy: float) -> Matrix:
    return Matrix(sx, 0, 0, sy, 0, 0)


def rotate(angle: float) -> Matrix:
    "Counter-clockwise rotation, angle in radians"
    cos, sin = math.cos(angle), math.sin(angle)
    return Matrix(cos, sin, -sin, cos, 0, 0)


def translate(tx: float, ty: float) -> Matrix:
    return Matrix(1, 0, 0, 1, tx, ty)


def multiply(m1: MatrixLike, m2: MatrixLike) -> Matrix:
    """
    Compose two transforms: the result applies m2 first, then m1.
    This is the order used when concatenating to the current transformation matrix.
    """
    a, b, c, d, e, f = Matrix.from_sequence(m1)
    g, h, i, j, k, l = Matrix.from_sequence(m2)
    return Matrix(
        a * g + c * h,
        b * g + d * h,
        a * i + c * j,
        b * i + d * j,
        a * k + c * l + e,
        b * k + d * l + f,
    )


compose = multiply


def chain(*matrices: MatrixLike) -> Matrix:
    "chain(A, B, C) == compose(A, compose(B, C)): the last matrix is applied first"
    result = identity()
    for matrix in matrices:
        result = multiply(result, matrix)
    return result


def map_point(matrix: MatrixLike, point: PointLike) -> Point:
    a, b, c, d, e, f = Matrix.from_sequence(matrix)
    x, y = point
    return Point(a * x + c * y + e, b * x + d * y + f)


def map_points(matrix: MatrixLike, points: Iterable[PointLike]) -> list[Point]:
    matrix = Matrix.from_sequence(matrix)
    return [map_point(matrix, point) for point in points]


def box_to_destination(
    view_box: Sequence[float],
    cx: float,
    cy: float,
    width: float,
    height: float,
    angle: float = 0,
) -> Matrix:
    """
    Transform mapping the source view box onto a destination footprint,
    described by its center, size and rotation angle (radians).

    The source center is moved to the origin, then scaled to the destination
    size, rotated, and finally translated to the destination center.
    """
    source = Box(*view_box)
    return chain(
        translate(cx, cy),
        rotate(angle),
        scale(width / source.width, height / source.height),
        translate(-source.center.x, -source.center.y),
    )


def to_operator(matrix: MatrixLike) -> str:
    "Render the matrix as a 'cm' operator, with a leading space"
    matrix = Matrix.from_sequence(matrix)
    return "".join(f" {format_number(value)}" for value in matrix) + " cm"
