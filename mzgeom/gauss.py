"""Normally distributed samples drawn with the Ziggurat method."""

from __future__ import annotations

import math

from .mersenne import MersenneTwister

_LEVELS = 128
_FIXED_ONE = 1 << 24

# Position of the right-most step, where the exponential tail begins.
_TAIL_START = 3.44428647676

# Width of the bottom strip (right-most step plus the tail, as one rectangle).
_BASE_WIDTH = 2.22600839893e-7 * _FIXED_ONE


def _density(x: float) -> float:
    return math.exp(-0.5 * x * x)


def _inverse_density(y: float) -> float:
    return math.sqrt(-2.0 * math.log(y))


def _build_tables() -> tuple[tuple[float, ...], tuple[int, ...], tuple[float, ...]]:
    """Build level heights, fast-accept bounds and step scales.

    Every strip has the same area; heights are found from the bottom up.
    """
    strip_area = _BASE_WIDTH * _density(_TAIL_START)

    heights = [0.0] * _LEVELS
    heights[-1] = _density(_TAIL_START)
    for level in range(_LEVELS - 2, 0, -1):
        below = heights[level + 1]
        heights[level] = below + strip_area / _inverse_density(below)
    heights[0] = 1.0

    widths = [_inverse_density(y) for y in heights[1:]]
    widths.append(_BASE_WIDTH)

    bounds = [0]
    bounds.extend(
        int(_FIXED_ONE * inner / outer) for inner, outer in zip(widths, widths[1:])
    )
    scales = [w / _FIXED_ONE for w in widths]
    return tuple(heights), tuple(bounds), tuple(scales)


_LEVEL_HEIGHT, _ACCEPT_BOUND, _STEP_SCALE = _build_tables()


def _candidate(level: int, rng: MersenneTwister) -> tuple[float | None, float]:
    """Return an (x, y) pair for the slow acceptance test of ``level``.

    ``x`` is None when the sample keeps its original position.
    """
    if level < _LEVELS - 1:
        top = _LEVEL_HEIGHT[level]
        bottom = _LEVEL_HEIGHT[level + 1]
        return None, bottom + (top - bottom) * rng.genrand_real2()
    r = _TAIL_START
    x = r - math.log(1.0 - rng.genrand_real2()) / r
    y = math.exp(-r * (x - 0.5 * r)) * rng.genrand_real2()
    return x, y


def gauss_ziggurat(sigma: float, rng: MersenneTwister) -> float:
    """Return a sample from a zero-mean normal distribution with deviation ``sigma``.

    Random bits are drawn from ``rng``.
    """
    while True:
        bits = rng.genrand_int32()
        level = bits & 0x7F
        positive = bool(bits & 0x80)
        offset = bits >> 8

        x = offset * _STEP_SCALE[level]
        if offset < _ACCEPT_BOUND[level]:
            break

        tail_x, y = _candidate(level, rng)
        if tail_x is not None:
            x = tail_x
        if y < math.exp(-0.5 * x * x):
            break

    return sigma * x if positive else -sigma * x