"""Binned 1D/2D histograms with under/overflow cells and spectrum utilities."""

from __future__ import annotations

import bisect
import copy as _copy
import math
from dataclasses import dataclass, field
from itertools import product
from typing import Optional, Union

import numpy as np

_DEFAULT_SIGMA = 1.0 / math.sqrt(2.0 * math.log(2.0))


@dataclass(frozen=True)
class Axis:
    """Bin edges of one axis; bin 0 is underflow and bin nbins+1 overflow."""

    edges: tuple[float, ...]
    uniform: bool = True

    def __post_init__(self) -> None:
        if len(self.edges) < 2:
            raise ValueError("an axis needs at least one bin")
        if any(b <= a for a, b in zip(self.edges, self.edges[1:])):
            raise ValueError("bin edges must increase")

    @classmethod
    def regular(cls, nbins: int, low: float, high: float) -> "Axis":
        if nbins < 1 or high <= low:
            raise ValueError("invalid regular axis")
        return cls(tuple(float(v) for v in np.linspace(low, high, nbins + 1)), True)

    @classmethod
    def variable(cls, edges) -> "Axis":
        return cls(tuple(float(v) for v in edges), False)

    @property
    def nbins(self) -> int:
        return len(self.edges) - 1

    @property
    def low(self) -> float:
        return self.edges[0]

    @property
    def high(self) -> float:
        return self.edges[-1]

    @property
    def _mean_width(self) -> float:
        return (self.high - self.low) / self.nbins

    def find_bin(self, x: float) -> int:
        if x < self.low:
            return 0
        if x >= self.high:
            return self.nbins + 1
        if self.uniform:
            return min(int(self.nbins * (x - self.low) / (self.high - self.low)) + 1, self.nbins)
        return bisect.bisect_right(self.edges, x)

    def bin_width(self, i: int) -> float:
        if self.uniform:
            return self._mean_width
        i = min(max(i, 1), self.nbins)
        return self.edges[i] - self.edges[i - 1]

    def bin_center(self, i: int) -> float:
        if self.uniform or i < 1 or i > self.nbins:
            return self.low + (i - 0.5) * self._mean_width
        return 0.5 * (self.edges[i - 1] + self.edges[i])


@dataclass
class Histogram1D:
    """One-dimensional histogram with per-bin sum of squared weights."""

    axis: Axis
    name: str = ""
    entries: float = 0.0
    contents: np.ndarray = field(init=False, repr=False)
    sumw2: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.contents = np.zeros(self.axis.nbins + 2)
        self.sumw2 = np.zeros(self.axis.nbins + 2)

    @property
    def errors(self) -> np.ndarray:
        return np.sqrt(self.sumw2)

    @errors.setter
    def errors(self, values) -> None:
        self.sumw2 = np.asarray(values, dtype=float) ** 2

    def fill(self, x: float, weight: float = 1.0) -> None:
        i = self.axis.find_bin(x)
        self.contents[i] += weight
        self.sumw2[i] += weight * weight
        self.entries += 1

    def copy(self, name: Optional[str] = None) -> "Histogram1D":
        clone = _copy.deepcopy(self)
        if name is not None:
            clone.name = name
        return clone


@dataclass
class Histogram2D:
    """Two-dimensional histogram indexed as contents[xbin, ybin]."""

    xaxis: Axis
    yaxis: Axis
    name: str = ""
    entries: float = 0.0
    contents: np.ndarray = field(init=False, repr=False)
    sumw2: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        shape = (self.xaxis.nbins + 2, self.yaxis.nbins + 2)
        self.contents = np.zeros(shape)
        self.sumw2 = np.zeros(shape)

    @property
    def errors(self) -> np.ndarray:
        return np.sqrt(self.sumw2)

    @errors.setter
    def errors(self, values) -> None:
        self.sumw2 = np.asarray(values, dtype=float) ** 2

    def fill(self, x: float, y: float, weight: float = 1.0) -> None:
        cell = (self.xaxis.find_bin(x), self.yaxis.find_bin(y))
        self.contents[cell] += weight
        self.sumw2[cell] += weight * weight
        self.entries += 1

    def copy(self, name: Optional[str] = None) -> "Histogram2D":
        clone = _copy.deepcopy(self)
        if name is not None:
            clone.name = name
        return clone

    def interpolate(self, x: float, y: float) -> float:
        """Bilinear interpolation between the centres of neighbouring bins."""
        nx, ny = self.xaxis.nbins, self.yaxis.nbins
        bx, by = self.xaxis.find_bin(x), self.yaxis.find_bin(y)
        if not (1 <= bx <= nx and 1 <= by <= ny):
            raise ValueError("cannot interpolate outside the histogram domain")

        def neighbours(axis: Axis, b: int, v: float) -> tuple[int, int]:
            return (b, b + 1) if v > axis.bin_center(b) else (b - 1, b)

        lx, hx = neighbours(self.xaxis, bx, x)
        ly, hy = neighbours(self.yaxis, by, y)
        x1, x2 = self.xaxis.bin_center(lx), self.xaxis.bin_center(hx)
        y1, y2 = self.yaxis.bin_center(ly), self.yaxis.bin_center(hy)

        def clamp(b: int, n: int) -> int:
            return min(max(b, 1), n)

        cx1, cx2 = clamp(lx, nx), clamp(hx, nx)
        cy1, cy2 = clamp(ly, ny), clamp(hy, ny)
        q11 = self.contents[cx1, cy1]
        q21 = self.contents[cx2, cy1]
        q12 = self.contents[cx1, cy2]
        q22 = self.contents[cx2, cy2]
        d = (x2 - x1) * (y2 - y1)
        return float(
            (
                q11 * (x2 - x) * (y2 - y)
                + q21 * (x - x1) * (y2 - y)
                + q12 * (x2 - x) * (y - y1)
                + q22 * (x - x1) * (y - y1)
            )
            / d
        )


Histogram = Union[Histogram1D, Histogram2D]


def gaussian_blur(hist: Histogram2D, kernel_size: int = 3, sigma: float = _DEFAULT_SIGMA) -> Histogram2D:
    """Smooth contents and errors with a normalised Gaussian kernel.

    Only in-range cells feed the kernel; each output cell is normalised by the
    weights of the cells that contributed. Cells with no contributors become 0.
    """
    if kernel_size < 1 or kernel_size % 2 != 1:
        raise ValueError("kernel size must be a positive odd number")
    half = (kernel_size - 1) // 2
    offsets = np.arange(kernel_size) - half
    gauss = np.exp(-0.5 * (offsets / sigma) ** 2) / (math.sqrt(2.0 * math.pi) * sigma)
    weights = np.outer(gauss, gauss)

    nx, ny = hist.xaxis.nbins, hist.yaxis.nbins
    shape = (nx + 2, ny + 2)
    mask = np.zeros(shape)
    mask[1 : nx + 1, 1 : ny + 1] = 1.0
    padded_mask = np.pad(mask, half)
    padded_cont = np.pad(hist.contents * mask, half)
    padded_err = np.pad(hist.errors * mask, half)

    total_w = np.zeros(shape)
    scont = np.zeros(shape)
    serr = np.zeros(shape)
    for a, b in product(range(kernel_size), repeat=2):
        window = (slice(a, a + nx + 2), slice(b, b + ny + 2))
        w = weights[a, b]
        total_w += w * padded_mask[window]
        scont += w * padded_cont[window]
        serr += w * padded_err[window]

    smoothed = hist.copy(f"{hist.name}_GaussBlur")
    smoothed.contents = np.divide(scont, total_w, out=np.zeros(shape), where=total_w > 0)
    smoothed.errors = np.divide(serr, total_w, out=np.zeros(shape), where=total_w > 0)
    return smoothed


def _resolve_entries(hist: Histogram, entries: float) -> float:
    if entries == -1:
        entries = hist.entries
    if entries == 0:
        raise ValueError("cannot normalise by zero entries")
    return entries


def normalize_per_width(hist: Histogram1D, entries: float = -1) -> None:
    """Divide every bin (in place) by its width and by the number of entries."""
    entries = _resolve_entries(hist, entries)
    widths = np.array([hist.axis.bin_width(i) for i in range(hist.axis.nbins + 2)])
    scale = 1.0 / widths / entries
    hist.contents = hist.contents * scale
    hist.sumw2 = hist.sumw2 * scale**2


def normalize_per_area(hist: Histogram2D, entries: float = -1) -> None:
    """Divide every cell (in place) by its area and by the number of entries."""
    entries = _resolve_entries(hist, entries)
    wx = np.array([hist.xaxis.bin_width(i) for i in range(hist.xaxis.nbins + 2)])
    wy = np.array([hist.yaxis.bin_width(j) for j in range(hist.yaxis.nbins + 2)])
    scale = 1.0 / np.outer(wx, wy) / entries
    hist.contents = hist.contents * scale
    hist.sumw2 = hist.sumw2 * scale**2


def integrate_pt(
    hist: Histogram2D, bin_low: int = 0, bin_up: int = -1, y_lower_limit: float = -1.0
) -> Histogram1D:
    """Project a (rapidity, pt) histogram on rapidity, weighting pt bins by width.

    Only rapidity bins above the bin holding ``y_lower_limit`` are filled.
    """
    nx, ny = hist.xaxis.nbins, hist.yaxis.nbins
    if bin_up == -1:
        bin_up = ny
    if bin_low < 0 or bin_up > ny + 1 or bin_up < bin_low:
        raise ValueError("pt bin range out of bounds")
    projection = Histogram1D(Axis.regular(nx, hist.xaxis.low, hist.xaxis.high), name="h1RapProj")
    widths = np.array([hist.yaxis.bin_width(j) for j in range(bin_low, bin_up + 1)])
    first = hist.xaxis.find_bin(y_lower_limit) + 1
    rows = slice(first, nx + 2)
    cols = slice(bin_low, bin_up + 1)
    projection.contents[rows] = hist.contents[rows, cols] @ widths
    projection.sumw2[rows] = hist.sumw2[rows, cols] @ (widths**2)
    return projection


def _interpolate_or_zero(hist: Histogram2D, x: float, y: float) -> float:
    try:
        return hist.interpolate(x, y)
    except ValueError:
        return 0.0


def embedding_weight(
    hw: Optional[Histogram2D],
    y: float,
    pt: float,
    hembed: Histogram2D,
    yfac: float = -1.0,
    ptfac: float = -1.0,
) -> float:
    """Reweighting factor of an embedded track from a target (y, pt) spectrum.

    Negative rapidities use the mirrored spectrum (fully below -0.75, averaged
    between -0.75 and 0). Infinite weights are returned as 0.
    """
    if hw is None:
        return 0.0
    y_w = y if yfac == -1 else yfac * y
    pt_w = pt if ptfac == -1 else ptfac * pt
    last_width = hw.xaxis.bin_width(hw.xaxis.nbins)
    y_w = min(max(y_w, hw.xaxis.low), hw.xaxis.high - 0.01 * last_width)
    pt_w = min(max(pt_w, hw.yaxis.low), hw.yaxis.high - 0.01 * last_width)

    econt = hembed.contents[hembed.xaxis.find_bin(y), hembed.yaxis.find_bin(pt)]
    if y < -0.75:
        numerator = _interpolate_or_zero(hw, -y_w, pt_w)
    elif y < 0.0:
        numerator = 0.5 * (_interpolate_or_zero(hw, y_w, pt_w) + _interpolate_or_zero(hw, -y_w, pt_w))
    else:
        numerator = _interpolate_or_zero(hw, y_w, pt_w)

    with np.errstate(divide="ignore", invalid="ignore"):
        w = np.float64(numerator) / np.float64(econt)
    if np.isinf(w):
        return 0.0
    return float(w)


def ratio(numerator: Histogram, denominator: Histogram) -> Histogram:
    """Bin-by-bin quotient with uncorrelated error propagation; 0 where the denominator is 0."""
    if type(numerator) is not type(denominator) or numerator.contents.shape != denominator.contents.shape:
        raise ValueError("histograms have different binning")
    result = numerator.copy(f"{numerator.name}_ratio")
    c1, c2 = numerator.contents, denominator.contents
    nonzero = c2 != 0
    c2sq = c2 * c2
    result.contents = np.divide(c1, c2, out=np.zeros_like(c1), where=nonzero)
    result.sumw2 = np.divide(
        numerator.sumw2 * c2sq + denominator.sumw2 * c1 * c1,
        c2sq * c2sq,
        out=np.zeros_like(c1),
        where=nonzero,
    )
    return result