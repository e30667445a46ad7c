"""Object names, file names and event-selection expressions of the analysis."""

from __future__ import annotations

from functools import reduce
from typing import Sequence

BEAM_A = (132, 108, 112, 124)
TARGET_A = (124, 112, 124, 112)
BEAM_Z = (50, 50, 50, 50)
PID_NAMES = ("Proton", "Deuteron", "Triton", "3He", "4He", "6He", "6Li", "7Li")
MINBIAS_RUNS = ((3015, 3036), (2467, 2485), (2603, 2610), (3106, 3136))

EMBED_NAMES = ("embed132", "embed108", "embed112", "embed124")
PART_NAMES = ("proton", "deuteron", "triton", "he3")
EMBED_DATE = "20200907"
EMBED_EXT = ".left.vaprip"
OUT_EXT_NAME = EMBED_DATE + EMBED_EXT
EMBED_DIR = "embedding"

SYSTEM_LABELS = ("132", "108", "124", "112")
EFFICIENCY_PID_LABELS = ("1H", "2H", "3H", "3He", "4He", "N", "H")

PHI_CUT_NAMES = ("45or135", "45", "135", "45to135", "all")
PHI_CUT_ID = 4
CUT_NDF = 50
CUT_DIST = 20.0
FILE_FOOTER = f"_{PHI_CUT_NAMES[PHI_CUT_ID]}_ndf{CUT_NDF}_dis{int(CUT_DIST)}"

FILE_PATH = "rootfiles/LCPSpectra/"
ACCEPTANCE_PATH = "macros/data/"


def _lookup(table: Sequence, index: int, what: str):
    if not 0 <= index < len(table):
        raise ValueError(f"invalid {what} index {index}")
    return table[index]


def obj_name(beam_id: int = -1, part_id: int = -1, mult_id: int = -1) -> str:
    """Suffix such as ``_132Sn_Proton_mbin2``; -1 leaves a component out."""
    name = ""
    if beam_id != -1:
        name = f"_{_lookup(BEAM_A, beam_id, 'beam')}Sn"
    if part_id != -1:
        name = f"{name}_{_lookup(PID_NAMES, part_id, 'particle')}"
    if mult_id != -1:
        name = f"{name}_mbin{mult_id}"
    return name


def obj_name_eff(beam_id: int, part_id: int, mult_id: int, iteration: int) -> str:
    """Object name of one unfolding iteration."""
    return f"{obj_name(beam_id, part_id, mult_id)}_iter{iteration}"


def embed_file_name(system: int, particle: int) -> str:
    """Tree file of embedded tracks of one particle species."""
    path = f"{EMBED_DIR}/{EMBED_DATE}/treefiles.embed132.1M/"
    return (
        f"{path}tree_{_lookup(PART_NAMES, particle, 'particle')}_"
        f"{_lookup(EMBED_NAMES, system, 'system')}.root"
    )


def _data_mom_name(mom_name: str) -> str:
    return "va" if mom_name == "vapri" else mom_name


def data_file_name(
    system: int = 0, mom_name: str = "va", side: str = "left", corrected_elt: bool = False
) -> str:
    """Spectrum file of measured light charged particles."""
    stem = f"LCPSpectra{obj_name(system)}.{_data_mom_name(mom_name)}.{side}"
    suffix = ".corrELT.root" if corrected_elt else ".root"
    return FILE_PATH + stem + suffix


def data_sys_file_name(system: int = 0, mom_name: str = "va", side: str = "left") -> str:
    """Spectrum file holding systematic variations."""
    return f"{FILE_PATH}LCPSpectra{obj_name(system)}.{_data_mom_name(mom_name)}.{side}.systematics.root"


def data_run_sys_file_name(system: int = 0, mom_name: str = "va", side: str = "left") -> str:
    """Spectrum file built from half of the runs."""
    return f"{FILE_PATH}LCPSpectra{obj_name(system)}.{_data_mom_name(mom_name)}.{side}.halfrun.root"


def corr_file_name(mom_name: str = "va", bg_assign: str = "signal") -> str:
    """Unfolded spectrum file; Voigt background assignment has its own file."""
    stem = f"UnfoldedLCPSpectra.{mom_name}.{OUT_EXT_NAME}"
    suffix = ".Voigt.root" if bg_assign == "signalV" else ".root"
    return FILE_PATH + stem + suffix


def amd_corr_file_name(mom_name: str = "va") -> str:
    return f"{FILE_PATH}UnfoldedAMDLCPSpectra.{mom_name}.{OUT_EXT_NAME}.root"


def art_corr_file_name(mom_name: str = "va") -> str:
    return f"{FILE_PATH}UnfoldedArtLCPSpectra.{mom_name}.{OUT_EXT_NAME}.root"


def corr_sys_file_name(mom_name: str = "va") -> str:
    return f"{FILE_PATH}UnfoldedLCPSpectra.{mom_name}.{OUT_EXT_NAME}.systematics.root"


def corr_run_sys_file_name(mom_name: str = "va") -> str:
    return f"{FILE_PATH}UnfoldedLCPSpectra.{mom_name}.{OUT_EXT_NAME}.halfrun.root"


def corr_mass_gate_sys_file_name(mom_name: str = "va") -> str:
    return f"{FILE_PATH}UnfoldedLCPSpectra.{mom_name}.{OUT_EXT_NAME}.massgate.root"


def input_file_name(system: int = 1) -> str:
    """Acceptance file of one system."""
    return f"{ACCEPTANCE_PATH}Acceptance_{_lookup(SYSTEM_LABELS, system, 'system')}Sn{FILE_FOOTER}.root"


def hist_name(particle: int = 0, mult_label: str = "_55to80") -> str:
    """Name of an efficiency histogram."""
    return f"eff_{_lookup(EFFICIENCY_PID_LABELS, particle, 'particle')}{mult_label}"


def _and(lhs: str, rhs: str) -> str:
    if not lhs:
        return rhs
    if not rhs:
        return lhs
    return f"({lhs})&&({rhs})"


def _combine(*cuts: str) -> str:
    return reduce(_and, cuts, "")


def event_selection(
    system_id: int,
    vz_par: Sequence[float],
    vxbx_par: Sequence[float],
    vyby_par: Sequence[float],
    loose: bool = False,
    all_events: bool = False,
) -> str:
    """Tree selection expression of good events of one system.

    The parameter sequences are fitted Gaussian parameters (amplitude, mean,
    sigma) of the vertex distributions.
    """
    beam_a = _lookup(BEAM_A, system_id, "system")
    first, last = MINBIAS_RUNS[system_id]
    cut_runs = ""
    cut_minbias = f"!(run>={first}&&run<={last})"
    cut_beam = f"beam=={beam_a}&&sigma30"
    cut_gg_close = "!isGGClose"
    cut_vertex_z = f"TMath::Abs(raveVz-{vz_par[1]:f})<={vz_par[2] * 3.0:f}"
    cut_vertex_xy = "TMath::Abs(raveVx)<=15.&&TMath::Abs(raveVy+205)<=20."
    cut_vxbx = f"TMath::Abs(raveVx-bdcVx-{vxbx_par[1]:f})<={vxbx_par[2] * 3.0:f}"
    cut_vyby = f"TMath::Abs(raveVy-bdcVy-{vyby_par[1]:f})<={vyby_par[2] * 3.0:f}"

    if all_events:
        return _combine(cut_runs, cut_minbias)
    if loose:
        aoq = beam_a / BEAM_Z[system_id]
        cut_beam = f"beam=={beam_a}&&TMath::Abs(z-50)<=3&&TMath::Abs(aoq-{aoq:f})<=0.1"
        cut_vertex_z = f"TMath::Abs(raveVz-{vz_par[1]:f})<={vz_par[2] * 5.0:f}"
        return _combine(cut_runs, cut_minbias, cut_beam, cut_vertex_z, cut_vertex_xy)
    return _combine(
        cut_runs,
        cut_minbias,
        cut_beam,
        cut_gg_close,
        cut_vertex_z,
        cut_vertex_xy,
        cut_vxbx,
        cut_vyby,
    )