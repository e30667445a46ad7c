"""Kinematics, beam and particle identification, selections and histogram tools for heavy-ion TPC analysis."""

__version__ = "0.1.0"

__all__ = [
    "beam",
    "histogram",
    "kinematics",
    "layout",
    "naming",
    "pid",
    "selection",
    "shapes",
]