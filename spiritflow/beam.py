"""Beam identification from the BigRIPS spectrometer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

_RUN_RANGES = (
    (2174, 2509, 108),
    (2520, 2653, 112),
    (2836, 3039, 132),
    (3058, 3184, 124),
)

_Z_LIMIT_132 = 50.536


@dataclass(frozen=True)
class PolygonCut:
    """Closed polygon in the (x, y) plane, such as a graphical PID cut."""

    points: tuple[tuple[float, float], ...]

    def __init__(self, points: Sequence[Sequence[float]]) -> None:
        pts = tuple((float(x), float(y)) for x, y in points)
        if len(pts) < 3:
            raise ValueError("a polygon cut needs at least three points")
        object.__setattr__(self, "points", pts)

    def contains(self, x: float, y: float) -> bool:
        """Even-odd test of whether (x, y) lies inside the polygon."""
        inside = False
        pts = self.points
        for (x1, y1), (x2, y2) in zip(pts, pts[1:] + pts[:1]):
            if (y1 > y) != (y2 > y):
                x_cross = x1 + (y - y1) * (x2 - x1) / (y2 - y1)
                if x < x_cross:
                    inside = not inside
        return inside


@dataclass
class BeamRecord:
    """Beam particle of one event: identification and tracking at the target."""

    run: int = 0
    event: int = 0
    sna: int = 0
    aoq: float = 0.0
    z: float = 0.0
    tof: float = 0.0
    beta: float = 0.0
    brho: float = 0.0
    is_good: float = 0.0
    int_z: float = 0.0
    int_a: float = 0.0
    bdcax: float = 0.0
    bdcby: float = 0.0
    proj_x: float = 0.0
    proj_y: float = 0.0
    proj_z: float = 0.0
    proj_p: float = 0.0
    proj_px: float = 0.0
    proj_py: float = 0.0
    proj_pz: float = 0.0
    proj_a: float = 0.0
    proj_b: float = 0.0
    beam_pid: int = 0


@dataclass
class BeamIdentifier:
    """Beam PID with one polygon cut in (A/Q, Z) per beam species."""

    cuts: Mapping[int, PolygonCut] = field(default_factory=dict)

    def pid(self, beam_a: int, aoq: float, z: float) -> int:
        """Mass number of the identified beam, or 0 when it fails the cut."""
        cut = self.cuts.get(beam_a)
        if cut is None or not cut.contains(aoq, z):
            return 0
        if beam_a == 132 and not z < _Z_LIMIT_132:
            return 0
        return beam_a


def beam_mass_number(run: int) -> int:
    """Mass number of the Sn beam used in a run."""
    for first, last, mass in _RUN_RANGES:
        if first <= run <= last:
            return mass
    raise ValueError(f"run {run} belongs to no beam period")


def beam_file_name(run: int) -> str:
    """BigRIPS data file of a run."""
    return f"beam_run{run:04d}.ridf.root"


def beam_cut_file_name(beam_a: int) -> str:
    """File holding the PID cut of one beam species."""
    if beam_a not in {mass for _, _, mass in _RUN_RANGES}:
        raise ValueError(f"no beam cut for A={beam_a}")
    return f"data/gcut{beam_a}Sn.ROOT"