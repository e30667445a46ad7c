"""Partition of a canvas into a grid of pads sharing their inner edges."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import product
from typing import Iterator


@dataclass(frozen=True)
class Pad:
    """A pad in normalised canvas coordinates with relative margins."""

    name: str
    xlow: float
    ylow: float
    xup: float
    yup: float
    left_margin: float
    right_margin: float
    bottom_margin: float
    top_margin: float


def _segments(n: int, low_margin: float, high_margin: float) -> Iterator[tuple[float, float, float, float]]:
    """Yield (lower, upper, low margin, high margin) for each of n slices."""
    step = (1.0 - low_margin - high_margin) / n
    upper = 0.0
    for k in range(n):
        if k == 0:
            lower, upper = 0.0, low_margin + step
            yield lower, upper, low_margin / (upper - lower), 0.0
        elif k == n - 1:
            lower = upper
            upper = lower + step + high_margin
            yield lower, upper, 0.0, high_margin / (upper - lower)
        else:
            lower = upper
            upper = lower + step
            yield lower, upper, 0.0, 0.0


def pad_layout(
    name: str,
    nx: int,
    ny: int,
    left_margin: float,
    right_margin: float,
    bottom_margin: float,
    top_margin: float,
) -> list[Pad]:
    """Pads of an nx-by-ny grid, column by column, named ``<name>_<i>_<j>``.

    Outer margins are absorbed by the border pads only, so the plotting areas
    of all pads have the same size.
    """
    if nx < 1 or ny < 1:
        raise ValueError("the grid needs at least one column and one row")
    columns = list(_segments(nx, left_margin, right_margin))
    rows = list(_segments(ny, bottom_margin, top_margin))
    return [
        Pad(
            name=f"{name}_{i}_{j}",
            xlow=xl,
            ylow=yl,
            xup=xu,
            yup=yu,
            left_margin=ml,
            right_margin=mr,
            bottom_margin=mb,
            top_margin=mt,
        )
        for (i, (xl, xu, ml, mr)), (j, (yl, yu, mb, mt)) in product(enumerate(columns), enumerate(rows))
    ]