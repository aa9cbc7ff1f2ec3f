import math

import pytest

from mzgeom.mat2 import Mat2

A = Mat2(1.5, -2.0, 0.25, 3.0)
B = Mat2(-1.0, 4.0, 2.0, 0.5)

IDENTITY = [1.0, 0.0, 0.0, 1.0]


def test_default_is_identity():
    assert Mat2() == Mat2.identity()


def test_identity_is_neutral():
    assert Mat2.identity() * A == A
    assert A * Mat2.identity() == A


def test_zero_matrix_elements():
    assert list(Mat2.zero()) == [0.0, 0.0, 0.0, 0.0]


def test_subscripts_are_row_major():
    m = Mat2(1, 2, 3, 4)
    assert m[0, 1] == m[1] == 2
    assert m[1, 0] == m[2] == 3


def test_bad_subscript_raises():
    with pytest.raises(IndexError):
        Mat2(1, 2, 3, 4)[2, 0]


def test_from_rows_and_cols_are_transposes():
    r0, r1 = (1.0, 2.0), (3.0, 4.0)
    assert Mat2.from_rows(r0, r1) == Mat2.from_cols(r0, r1).transpose()
    assert list(Mat2.from_rows(r0, r1)) == [1.0, 2.0, 3.0, 4.0]


def test_transpose_twice_is_identity_op():
    assert A.transpose().transpose() == A


def test_determinant_is_multiplicative():
    assert (A * B).determinant() == pytest.approx(A.determinant() * B.determinant())


def test_inverse_gives_identity():
    inv = A.inverse()
    assert list(A * inv) == pytest.approx(IDENTITY, abs=1e-12)
    assert list(inv * A) == pytest.approx(IDENTITY, abs=1e-12)


def test_singular_inverse_raises():
    with pytest.raises(ZeroDivisionError):
        Mat2(1, 2, 2, 4).inverse()


def test_rotation_matrix():
    r = Mat2.rot_mat(0.7)
    assert r.determinant() == pytest.approx(1.0)
    assert list(r.transpose()) == pytest.approx(list(r.inverse()), abs=1e-12)
    x, y = Mat2.rot_mat(math.pi / 2) * (1.0, 0.0)
    assert x == pytest.approx(0.0, abs=1e-12)
    assert y == pytest.approx(1.0)


def test_outer_product_is_rank_one():
    m = Mat2.outer((2.0, 3.0), (5.0, -7.0))
    assert m.determinant() == pytest.approx(0.0)
    assert m[1, 1] == -21.0


def test_vector_product_matches_matrix_product():
    v = (0.3, -1.2)
    direct = A * (B * v)
    composed = (A * B) * v
    assert tuple(direct) == pytest.approx(tuple(composed))


def test_scalar_multiplication_both_sides():
    assert 2 * A == A + A
    assert A * 2 == A + A


def test_negation_and_subtraction():
    assert A - A == Mat2.zero()
    assert A + (-A) == Mat2.zero()
    assert A - B == A + (-B)


def test_unsupported_operand():
    with pytest.raises(TypeError):
        Mat2.identity() + 1