"""Beam/target kinematics for the Sn + Sn and p + p collision systems."""

from __future__ import annotations

import math
from dataclasses import dataclass

AMU = 931.4940954  # MeV/c^2
SPEED_OF_LIGHT = 299792458.0  # m/s
ELECTRON_MASS = 5.48579909065e-04  # amu


@dataclass(frozen=True)
class CollisionSystem:
    """Beam and target description of one reaction system."""

    label: str
    beam_a: float
    beam_mass: float  # amu, atomic mass
    beam_energy: float  # MeV per nucleon (per amu)
    target_mass: float  # amu
    beam_charge: float  # number of electrons removed from the beam mass

    @property
    def beam_nuclear_mass(self) -> float:
        """Beam mass in amu with the electrons removed."""
        return self.beam_mass - self.beam_charge * ELECTRON_MASS

    @property
    def beam_mass_mev(self) -> float:
        return self.beam_nuclear_mass * AMU

    @property
    def target_mass_mev(self) -> float:
        return self.target_mass * AMU

    @property
    def beam_kinetic_energy(self) -> float:
        """Total beam kinetic energy in the laboratory frame (MeV)."""
        return self.beam_energy * self.beam_nuclear_mass

    def beam_four_momentum(self) -> tuple[float, float]:
        """Return (E, pz) of the beam in the laboratory frame."""
        mass = self.beam_mass_mev
        energy = self.beam_kinetic_energy + mass
        return energy, math.sqrt(energy * energy - mass * mass)


_PROTON = 1.00727646688

SYSTEMS: tuple[CollisionSystem, ...] = (
    CollisionSystem("(132Sn + 124Sn)", 132.0, 131.917821719, 268.3, 123.905273581, 50.0),
    CollisionSystem("(108Sn + 112Sn)", 108.0, 107.911892833, 268.3, 111.904821807, 50.0),
    CollisionSystem("(124Sn + 112Sn)", 124.0, 123.905273581, 269.8, 111.904821807, 50.0),
    CollisionSystem("(112Sn + 124Sn)", 112.0, 111.904821807, 269.6, 123.905273581, 50.0),
    CollisionSystem("(p + p)132", 1.0, _PROTON, 268.3, _PROTON, 0.0),
    CollisionSystem("(p + p)108 ", 1.0, _PROTON, 268.3, _PROTON, 0.0),
    CollisionSystem("(p + p)124 ", 1.0, _PROTON, 269.8, _PROTON, 0.0),
    CollisionSystem("(p + p)112 ", 1.0, _PROTON, 269.6, _PROTON, 0.0),
)


def collision_system(system_id: int) -> CollisionSystem:
    """Return the system for an id; ids beyond the table mean simulation (system 0)."""
    if system_id < 0:
        raise ValueError(f"invalid system id {system_id}")
    if system_id >= len(SYSTEMS):
        system_id = 0
    return SYSTEMS[system_id]


def boost_vector(system_id: int = 4) -> tuple[float, float, float]:
    """Velocity (in units of c) of the centre-of-mass frame in the laboratory."""
    system = collision_system(system_id)
    energy, pz = system.beam_four_momentum()
    total_energy = energy + system.target_mass_mev
    return 0.0, 0.0, pz / total_energy


def rapidity(energy: float, pz: float) -> float:
    """Longitudinal rapidity of a particle with energy E and momentum pz."""
    if abs(pz) >= energy:
        raise ValueError("rapidity needs |pz| < E")
    return 0.5 * math.log((energy + pz) / (energy - pz))


def system_summary(system_id: int = 4) -> dict[str, object]:
    """Beam and target rapidities in the lab and centre-of-mass frames."""
    system = collision_system(system_id)
    beam_e, beam_pz = system.beam_four_momentum()
    target_e = system.target_mass_mev
    beta = boost_vector(system_id)[2]
    gamma = 1.0 / math.sqrt(1.0 - beta * beta)

    def boosted(energy: float, pz: float) -> float:
        return rapidity(gamma * (energy - beta * pz), gamma * (pz - beta * energy))

    return {
        "system": system.label,
        "beam_lab": rapidity(beam_e, beam_pz),
        "beam_cm": boosted(beam_e, beam_pz),
        "target_lab": rapidity(target_e, 0.0),
        "target_cm": boosted(target_e, 0.0),
        "y_cm": rapidity(beam_e + target_e, beam_pz),
    }