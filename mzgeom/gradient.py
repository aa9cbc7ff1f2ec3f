"""Colour gradients defined by stops, with a few standard colour maps."""

from __future__ import annotations

from typing import Mapping

Color = tuple[float, float, float]


def _lerp(a: Color, b: Color, u: float) -> Color:
    return (
        a[0] + u * (b[0] - a[0]),
        a[1] + u * (b[1] - a[1]),
        a[2] + u * (b[2] - a[2]),
    )


class Gradient:
    """A piecewise linear map from a parameter to an RGB colour."""

    def __init__(self, stops: Mapping[float, Color] | None = None) -> None:
        self.stops: dict[float, Color] = dict(stops or {})

    def lookup(self, u: float) -> Color:
        """Return the colour at ``u``, clamped to the first and last stops."""
        if not self.stops:
            return (0.0, 0.0, 0.0)

        keys = sorted(self.stops)
        first = keys[0]
        if u < first or len(keys) == 1:
            return self.stops[first]

        for lo, hi in zip(keys, keys[1:]):
            if lo <= u <= hi:
                if hi == lo:
                    return self.stops[lo]
                t = (u - lo) / (hi - lo)
                return _lerp(self.stops[lo], self.stops[hi], t)

        return self.stops[keys[-1]]

    @staticmethod
    def rainbow() -> Gradient:
        """Purple through blue, cyan, green and yellow to red."""
        a = 1.0 / 7.0
        colors = [
            (0.5, 0.0, 1.0),
            (0.0, 0.0, 1.0),
            (0.0, 0.5, 1.0),
            (0.0, 1.0, 1.0),
            (0.0, 1.0, 0.0),
            (1.0, 1.0, 0.0),
            (1.0, 0.5, 0.0),
            (1.0, 0.0, 0.0),
        ]
        return Gradient({i * a: c for i, c in enumerate(colors)})

    @staticmethod
    def jet() -> Gradient:
        """The classic dark blue to dark red colour map."""
        a = 1.0 / 15.0
        colors = [
            (0.0000, 0.0000, 0.7500),
            (0.0000, 0.0000, 1.0000),
            (0.0000, 0.2500, 1.0000),
            (0.0000, 0.5000, 1.0000),
            (0.0000, 0.7500, 1.0000),
            (0.0000, 1.0000, 1.0000),
            (0.2500, 1.0000, 0.7500),
            (0.5000, 1.0000, 0.5000),
            (0.7500, 1.0000, 0.2500),
            (1.0000, 1.0000, 0.0000),
            (1.0000, 0.7500, 0.0000),
            (1.0000, 0.5000, 0.0000),
            (1.0000, 0.2500, 0.0000),
            (1.0000, 0.0000, 0.0000),
            (0.7500, 0.0000, 0.0000),
            (0.5000, 0.0000, 0.0000),
        ]
        return Gradient({a * i: c for i, c in enumerate(colors)})

    @staticmethod
    def bone() -> Gradient:
        """Grey scale with a blue tint."""

        def tinted(level: float, tint: Color) -> Color:
            return tuple((7 * level + t) / 8 for t in tint)  # type: ignore[return-value]

        return Gradient(
            {
                0.0: (0.0, 0.0, 0.0),
                1.0 / 3.0: tinted(1.0 / 3.0, (0.0, 0.0, 1.0)),
                2.0 / 3.0: tinted(2.0 / 3.0, (0.0, 1.0, 1.0)),
                1.0: (1.0, 1.0, 1.0),
            }
        )

    @staticmethod
    def summer() -> Gradient:
        """Green to yellow."""
        return Gradient({0.0: (0.0, 0.5, 0.4), 1.0: (1.0, 1.0, 0.4)})

    @staticmethod
    def hot() -> Gradient:
        """Black through red and yellow to white."""
        return Gradient(
            {
                0.0: (0.0, 0.0, 0.0),
                1.0 / 3.0: (1.0, 0.0, 0.0),
                2.0 / 3.0: (1.0, 1.0, 0.0),
                1.0: (1.0, 1.0, 1.0),
            }
        )

    @staticmethod
    def bw() -> Gradient:
        """Black to white."""
        return Gradient({0.0: (0.0, 0.0, 0.0), 1.0: (1.0, 1.0, 1.0)})