"""Peak shapes used for mass-spectrum fits."""

from __future__ import annotations

import math
from typing import Sequence

from scipy.special import voigt_profile


def gauss(x: float, params: Sequence[float]) -> float:
    """Unnormalised Gaussian p0*exp(-((x-p1)/p2)^2/2)."""
    amplitude, mean, sigma = params[0], params[1], params[2]
    if sigma == 0:
        return 1.0e30
    return amplitude * math.exp(-0.5 * ((x - mean) / sigma) ** 2)


def triple_gauss(x: float, params: Sequence[float]) -> float:
    """Sum of three Gaussians with parameters in groups of three."""
    return sum(gauss(x, params[k : k + 3]) for k in (0, 3, 6))


def signal_to_total_gauss(x: float, params: Sequence[float]) -> float:
    """Fraction of the first Gaussian in the triple-Gaussian sum."""
    return gauss(x, params) / triple_gauss(x, params)


def voigt(x: float, sigma: float, lorentz_width: float) -> float:
    """Normalised Voigt profile; ``lorentz_width`` is the Lorentzian FWHM."""
    if sigma < 0 or lorentz_width < 0 or (sigma == 0 and lorentz_width == 0):
        return 0.0
    return float(voigt_profile(x, sigma, 0.5 * lorentz_width))


def triple_voigt(x: float, params: Sequence[float]) -> float:
    """Sum of three Voigt peaks, each with amplitude, position and common width."""
    return sum(
        params[k] * voigt(x - params[k + 1], params[k + 2], params[k + 2]) for k in (0, 3, 6)
    )


def signal_to_total_voigt(x: float, params: Sequence[float]) -> float:
    """Fraction of the first Voigt peak in the triple-Voigt sum."""
    return params[0] * voigt(x - params[1], params[2], params[2]) / triple_voigt(x, params)