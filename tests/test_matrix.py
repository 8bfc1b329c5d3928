import math

import pytest

from pdfcanvas.errors import InvalidMatrixError
from pdfcanvas.matrix import (
    Box,
    Matrix,
    Point,
    box_to_destination,
    chain,
    compose,
    identity,
    map_point,
    multiply,
    rotate,
    scale,
    to_operator,
    translate,
)


def assert_matrix_equal(m1, m2):
    assert tuple(m1) == pytest.approx(tuple(m2), abs=1e-12)


class TestBuilders:
    def test_identity(self):
        assert identity() == Matrix(1, 0, 0, 1, 0, 0)
        assert map_point(identity(), (3, 4)) == Point(3, 4)

    def test_scale(self):
        assert map_point(scale(2, 3), (1, 1)) == Point(2, 3)

    def test_translate(self):
        assert map_point(translate(10, -5), (1, 1)) == Point(11, -4)

    def test_rotate_quarter_turn(self):
        p = map_point(rotate(math.pi / 2), (1, 0))
        assert p.x == pytest.approx(0, abs=1e-12)
        assert p.y == pytest.approx(1)


class TestComposition:
    def test_second_matrix_is_applied_first(self):
        m = compose(translate(10, 0), scale(2, 2))
        # scale first, then translate:
        assert map_point(m, (1, 1)) == Point(12, 2)
        m = compose(scale(2, 2), translate(10, 0))
        assert map_point(m, (1, 1)) == Point(22, 2)

    def test_not_commutative(self):
        a, b = translate(5, 0), rotate(math.pi / 4)
        assert multiply(a, b) != multiply(b, a)

    def test_associative(self):
        a, b, c = translate(3, 4), rotate(0.3), scale(2, 5)
        assert_matrix_equal(multiply(multiply(a, b), c), multiply(a, multiply(b, c)))

    def test_chain_and_matmul(self):
        a, b, c = translate(3, 4), rotate(0.3), scale(2, 5)
        assert_matrix_equal(chain(a, b, c), multiply(a, multiply(b, c)))
        assert_matrix_equal(a @ b, multiply(a, b))

    def test_identity_is_neutral(self):
        m = Matrix(1, 2, 3, 4, 5, 6)
        assert multiply(identity(), m) == m
        assert multiply(m, identity()) == m


class TestBoxToDestination:
    def test_maps_source_center_to_destination_center(self):
        m = box_to_destination((0, 0, 10, 20), cx=100, cy=200, width=30, height=40)
        assert map_point(m, (5, 10)) == Point(100, 200)
        assert map_point(m, (10, 20)) == Point(115, 220)

    def test_rotated_destination(self):
        m = box_to_destination((-1, -1, 1, 1), cx=0, cy=0, width=2, height=2, angle=math.pi)
        p = map_point(m, (1, 0))
        assert p.x == pytest.approx(-1)
        assert p.y == pytest.approx(0, abs=1e-12)


class TestValidation:
    def test_from_sequence(self):
        assert Matrix.from_sequence([1, 0, 0, 1, 5, 6]) == translate(5, 6)

    @pytest.mark.parametrize(
        "values", [[1, 2, 3], [1, 0, 0, 1, 0, 0, 0], [1, 0, 0, 1, 0, "x"], [1, 0, 0, 1, 0, None]]
    )
    def test_malformed_matrices(self, values):
        with pytest.raises(InvalidMatrixError):
            Matrix.from_sequence(values)

    def test_operator(self):
        assert to_operator(Matrix(1, 0, 0, 1, 10.5, -3)) == " 1 0 0 1 10.5 -3 cm"
        with pytest.raises(InvalidMatrixError):
            to_operator([1, 2])


class TestBox:
    def test_properties(self):
        box = Box(10, 20, 30, 60)
        assert box.width == 20
        assert box.height == 40
        assert box.center == Point(20, 40)
