"""Particle identification of TPC tracks from their mass."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

# PDG codes indexed by species: pi, p, d, t, 3He, 4He, 6He.
PDG_CODES = (211, 2212, 1000010020, 1000010030, 1000020030, 1000020040, 1000020060)
PROTON_INDEX = 1

PROTON_MAX_MOMENTUM = 2500.0

# (centre, width, lower sigma count, upper sigma count) per species.
MASS_REGION = (
    (127.2, 21.3, 4.0, 4.0),
    (911.044, 68.4656, 2.0, 2.0),
    (1874.76, 129.962, 1.5, 1.5),
    (2870.62, 212.896, 1.0, 1.0),
    (2760.47, 196.659, 1.0, 1.0),
    (3531.15, 278.23, 1.0, 1.0),
    (5751.97, 673.339, 0.5, 0.5),
)

# Half-open [low, high) mass windows per species.
MASS_REGION_LOOSE = (
    (0.0, 400.0),
    (500.0, 1300.0),
    (1400.0, 2300.0),
    (2350.0, 3300.0),
    (2200.0, 3050.0),
    (3100.0, 4200.0),
    (4200.0, 7000.0),
)

MASS_REGION_TIGHT = (
    (0.0, 250.0),
    (800.0, 1050.0),
    (1600.0, 2100.0),
    (2550.0, 3100.0),
    (2400.0, 2850.0),
    (3200.0, 4000.0),
    (4000.0, 7000.0),
)

# Rough mass windows of the fitted gates: p, d, t, 3He, 4He, 6He.
MASS_RANGE_FIT = (
    (700.0, 1200.0),
    (1500.0, 2300.0),
    (2400.0, 3400.0),
    (2565.0, 3200.0),
    (3212.0, 4307.0),
    (5200.0, 6000.0),
)

HELIUM_MIN_H_MASS = 3100.0
HELIUM_MAX_DEDX = 700.0
REGION_HELIUM_MASS_LIMIT = 2500.0
MIN_FIT_MOMENTUM = 100.0

# Azimuthal window (degrees) of the first phi bin of the mass gates.
PHI_BIN0_LOW = -30.0
PHI_BIN0_HIGH = 20.0

GateFunction = Callable[[float], float]
GateKey = tuple[int, int, int, int, int]

LOWER = 0
UPPER = 1


@dataclass(frozen=True)
class MassGateTable:
    """Momentum-dependent mass gates keyed by (pid, mbin, side, sigma_id, phibin).

    ``side`` is 0 for the lower and 1 for the upper edge of the gate; the gate
    is a function of the momentum magnitude returning a mass.
    """

    gates: Mapping[GateKey, GateFunction]

    def gate(self, pid: int, mbin: int, side: int, sigma_id: int, phibin: int) -> GateFunction:
        key = (pid, mbin, side, sigma_id, phibin)
        try:
            return self.gates[key]
        except KeyError:
            raise LookupError(f"no mass gate for {key}") from None

    def _accepts(self, pid: int, mbin: int, sigma_id: int, phibin: int, mass: float, momentum: float) -> bool:
        low = self.gate(pid, mbin, LOWER, sigma_id, phibin)(momentum)
        high = self.gate(pid, mbin, UPPER, sigma_id, phibin)(momentum)
        return low <= mass <= high


def pdg_code(index: int) -> int:
    """PDG code of a species index (0 = pion ... 6 = 6He)."""
    if not 0 <= index < len(PDG_CODES):
        raise ValueError(f"invalid species index {index}")
    return PDG_CODES[index]


def pid_by_region(mass_h: float, mass_he: float, momentum: float, dedx: float) -> int:
    """PDG code from mass windows of a few widths around each species' peak."""
    if mass_h == 0:
        return 0
    if mass_he < REGION_HELIUM_MASS_LIMIT and mass_h > 0:
        for i in range(4):
            centre, width, n_low, n_up = MASS_REGION[i]
            if centre - width * n_low <= mass_h <= centre + width * n_up:
                if i == PROTON_INDEX and momentum > PROTON_MAX_MOMENTUM:
                    continue
                return pdg_code(i)
    elif mass_h >= HELIUM_MIN_H_MASS and dedx <= HELIUM_MAX_DEDX:
        for i in range(4, 7):
            centre, width, n_low, n_up = MASS_REGION[i]
            if centre - width * n_low <= mass_he <= centre + width * n_up:
                return pdg_code(i)
    return 0


def _pid_by_windows(
    windows: Sequence[tuple[float, float]],
    hydrogen_order: Sequence[int],
    helium_order: Sequence[int],
    mass_h: float,
    mass_he: float,
    momentum: float,
    dedx: float,
) -> int:
    if mass_h == 0:
        return 0
    if mass_he < windows[4][0]:
        for i in hydrogen_order:
            low, high = windows[i]
            if low <= mass_h < high:
                if i == PROTON_INDEX and momentum > PROTON_MAX_MOMENTUM:
                    continue
                return pdg_code(i)
    elif mass_h >= HELIUM_MIN_H_MASS and dedx <= HELIUM_MAX_DEDX:
        for i in helium_order:
            low, high = windows[i]
            if low <= mass_he < high:
                return pdg_code(i)
    return 0


def pid_loose(mass_h: float, mass_he: float, momentum: float, dedx: float) -> int:
    """PDG code from wide mass windows, lightest species first."""
    return _pid_by_windows(
        MASS_REGION_LOOSE, range(4), range(4, 7), mass_h, mass_he, momentum, dedx
    )


def pid_tight(mass_h: float, mass_he: float, momentum: float, dedx: float) -> int:
    """PDG code from narrow mass windows, heaviest species first."""
    return _pid_by_windows(
        MASS_REGION_TIGHT, range(3, -1, -1), range(6, 3, -1), mass_h, mass_he, momentum, dedx
    )


def multiplicity_bin(mult: int) -> int:
    """Centrality bin of the mass gates: M>=56, 50<=M<56, 40<=M<50, other."""
    if mult >= 56:
        return 0
    if mult >= 50:
        return 1
    if mult >= 40:
        return 2
    return 3


def phi_bin(phi_deg: float) -> int:
    """Azimuthal bin of the mass gates: 0 for -30..20 degrees, else 1."""
    if PHI_BIN0_LOW <= phi_deg <= PHI_BIN0_HIGH:
        return 0
    return 1


def pid_fit(z: int, mass: float, momentum: Sequence[float], mult: int, gates: MassGateTable) -> int:
    """PDG code of a track from fitted, momentum-dependent mass gates.

    ``z`` is the charge hypothesis (1 or 2), ``momentum`` the (px, py, pz)
    rigidity vector at the target and ``mult`` the event multiplicity.
    Returns 0 when no species matches.
    """
    if mass <= 0:
        return 0
    px, py, pz = momentum
    p = math.sqrt(px * px + py * py + pz * pz)
    if p < MIN_FIT_MOMENTUM:
        return 0

    pbin = phi_bin(math.degrees(math.atan2(py, px)))
    mbin = multiplicity_bin(mult)

    def in_rough(i: int) -> bool:
        low, high = MASS_RANGE_FIT[i]
        return low <= mass <= high

    if z == 1:
        for i in (0, 1, 2):
            if in_rough(i) and gates._accepts(i, mbin, 3, pbin, mass, p):
                return pdg_code(i + 1)
    elif z == 2:
        p *= 2.0
        for i in (3, 4):
            if not in_rough(i):
                continue
            accepted = gates._accepts(i, mbin, 2, pbin, mass, p)
            if i == 3:
                accepted = accepted and mass >= 2850.0 - 0.35 * p / 2.0
            if accepted:
                return pdg_code(i + 1)
    return 0