"""Event and track quality selections of the TPC analysis."""

from __future__ import annotations

from typing import Sequence

PION_PDG = 211

# Mean vertex position (x, y, z) and z width of the four Sn + Sn systems.
VERTEX_MEAN = (
    (2.10312, -2.04848e02, -1.485675e01),
    (-8.25318e-01, -2.06242e02, -1.4847947e01),
    (-8.25318e-01, -2.06242e02, -1.4758978e01),
    (-8.25318e-01, -2.06242e02, -1.4421470e01),
)
VERTEX_SIGMA = (1.2932625, 1.3323066, 1.2022664, 0.98318320)

VERTEX_Z_SIGMAS = 3.0
VERTEX_X_WINDOW = 15.0
VERTEX_Y_WINDOW = 20.0
PROJ_MIN = -99.0
PROJ_XY_WINDOW = 20.0

# Momentum range per PID sequence number; only the lower edge is applied.
MOMENTUM_RANGE = (
    (0.0, 1000.0),
    (0.0, 1000.0),
    (100.0, 1400.0),
    (100.0, 2200.0),
    (200.0, 2800.0),
    (300.0, 1400.0),
    (400.0, 1800.0),
    (1300.0, 2500.0),
)
MOMENTUM_CUT_SPECIES = 7
MIN_NCL = 15

SIMULATION_BEAM_A = 100
SIMULATION_FILE_PREFIX = "sim"
SIMULATION_VERSION = "v1.04"
PROGRESS_STEPS = 200
MAX_SHORT_SEQUENCE = 10


def vertex_quality(
    vertex: Sequence[float],
    proj_a: float,
    proj_b: float,
    proj_x: float,
    proj_y: float,
    system_id: int,
) -> bool:
    """Whether the beam projection and vertex (x, y, z) make a good event."""
    if proj_a < PROJ_MIN or proj_a > 0:
        return False
    if proj_b < PROJ_MIN:
        return False
    if abs(proj_x) > PROJ_XY_WINDOW or abs(proj_y) > PROJ_XY_WINDOW:
        return False
    if not 0 <= system_id < len(VERTEX_MEAN):
        return False
    mx, my, mz = VERTEX_MEAN[system_id]
    x, y, z = vertex
    return (
        abs(z - mz) <= VERTEX_Z_SIGMAS * VERTEX_SIGMA[system_id]
        and abs(x - mx) <= VERTEX_X_WINDOW
        and abs(y - my) <= VERTEX_Y_WINDOW
    )


def momentum_passes(pid_index: int, momentum: float) -> bool:
    """Whether a track's momentum is above the minimum for its species."""
    if 0 <= pid_index < MOMENTUM_CUT_SPECIES:
        return momentum >= MOMENTUM_RANGE[pid_index][0]
    return True


def ncl_passes(ncl: int) -> bool:
    """Whether a track has enough clusters."""
    return ncl >= MIN_NCL


def assign_pid(fit_pid_h: int, fit_pid_he: int, loose_pid: int) -> tuple[int, int, bool, bool]:
    """Combine the fitted and loose identifications of a track.

    Returns ``(pid, loose_pid, mass_ok, uses_helium_mass)``: the assigned PDG
    code, the loose code kept when only it matched, whether the mass flag
    stays good, and whether the helium mass replaces the hydrogen one.
    """
    if fit_pid_he != 0:
        return fit_pid_he, 0, True, True
    if fit_pid_h != 0:
        return fit_pid_h, 0, True, False
    if loose_pid == PION_PDG:
        return PION_PDG, 0, False, False
    if loose_pid > 0:
        return 0, loose_pid, False, False
    return 0, 0, True, False


def match_tracks(reco_ids: Sequence[int], va_ids: Sequence[int]) -> list[tuple[int, int]]:
    """Pair reconstructed and vertex-constrained tracks by helix id.

    Returns index pairs ``(reco_index, va_index)``. When a vertex-constrained
    track has a larger id, reconstructed tracks are skipped until they catch up.
    """
    pairs: list[tuple[int, int]] = []
    reco = iter(enumerate(reco_ids))
    va = iter(enumerate(va_ids))
    for reco_index, reco_id in reco:
        try:
            va_index, va_id = next(va)
        except StopIteration:
            break
        while va_id - reco_id > 0:
            try:
                reco_index, reco_id = next(reco)
            except StopIteration:
                return pairs
        pairs.append((reco_index, va_index))
    return pairs


def reco_file_names(run: int, version: str, beam_a: int, max_sequence: int) -> list[tuple[str, ...]]:
    """Candidate file names of each reconstruction sequence, in search order."""
    if max_sequence < 0:
        raise ValueError("the number of sequences cannot be negative")
    candidates: list[tuple[str, ...]] = []
    for i in range(max_sequence):
        if beam_a == SIMULATION_BEAM_A:
            names = [f"{SIMULATION_FILE_PREFIX}_{run:06d}_s{i:02d}.reco.{SIMULATION_VERSION}.root"]
            if i < MAX_SHORT_SEQUENCE:
                names.append(f"{SIMULATION_FILE_PREFIX}_{run:06d}_s{i}.reco.{SIMULATION_VERSION}.root")
        else:
            names = [f"run{run:04d}_s{i:02d}.reco.{version}.root"]
            if i < MAX_SHORT_SEQUENCE:
                names.append(f"run{run:04d}_s{i}.reco.{version}.root")
        candidates.append(tuple(names))
    return candidates


def progress_interval(entries: int) -> int:
    """Number of events between two progress reports."""
    if entries < PROGRESS_STEPS:
        return 1
    return entries // PROGRESS_STEPS


def processing_count(requested: int, entries: int) -> int:
    """Number of events to process: the request, capped at the available entries."""
    return requested if requested < entries else entries