import pytest

from mzgeom.mathutil import pwr2


def test_zero_maps_to_zero():
    assert pwr2(0) == 0


def test_one_maps_to_one():
    assert pwr2(1) == 1


@pytest.mark.parametrize("x", [2, 3, 5, 64, 65, 100, 1023, 1024, 1025, 123456])
def test_smallest_power_of_two_not_below(x):
    p = pwr2(x)
    assert p & (p - 1) == 0
    assert x <= p < 2 * x


@pytest.mark.parametrize("exponent", range(0, 20))
def test_powers_of_two_are_fixed_points(exponent):
    assert pwr2(1 << exponent) == 1 << exponent


def test_negative_raises():
    with pytest.raises(ValueError):
        pwr2(-3)