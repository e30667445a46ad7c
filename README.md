# spiritflow

Analysis helpers for Sn+Sn (and p+p) collision data recorded with a
time-projection chamber: collision kinematics, beam identification,
light-charged-particle identification, event and track selections, and
histogram utilities for efficiency correction and spectrum unfolding.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `spiritflow.kinematics`: the table of collision systems (`SYSTEMS`,
  `CollisionSystem`, `collision_system`). Ids beyond the table fall back to
  system 0. It also has the centre-of-mass velocity `boost_vector` and
  `rapidity`. `system_summary` returns a dict of beam and target rapidities
  in the laboratory and centre-of-mass frames.
- `spiritflow.histogram`: `Axis` (`Axis.regular`, `Axis.variable`,
  `find_bin`, `bin_width`, `bin_center`), `Histogram1D` and `Histogram2D`
  with under/overflow cells, `fill`, `copy`, `errors` and bilinear
  `Histogram2D.interpolate`. On top of these:
  - `gaussian_blur` returns a smoothed copy.
  - `normalize_per_width` and `normalize_per_area` scale in place.
  - `integrate_pt` projects a (rapidity, pt) histogram onto rapidity.
  - `embedding_weight` gives the reweighting factor of embedded tracks.
  - `ratio` divides bin by bin and propagates the errors.
- `spiritflow.shapes`: fit shapes `gauss`, `triple_gauss`,
  `signal_to_total_gauss`, `voigt`, `triple_voigt`, `signal_to_total_voigt`.
- `spiritflow.layout`: `pad_layout` returns the `Pad` rectangles and
  margins of an nx-by-ny grid of panels that share their inner edges.
- `spiritflow.naming`: object names (`obj_name`, `obj_name_eff`,
  `hist_name`) and file names (`data_file_name`, `corr_file_name`,
  `embed_file_name`, `input_file_name`, ...). `event_selection` builds the
  tree selection expression of good events.
- `spiritflow.beam`: `beam_mass_number` maps a run to its beam.
  `beam_file_name` and `beam_cut_file_name` give file names. `PolygonCut` is
  an even-odd polygon test. `BeamIdentifier.pid` identifies the beam in the
  (A/Q, Z) plane.
- `spiritflow.pid`: `pdg_code` maps a species index to its PDG code.
  Mass-window identification is done by `pid_by_region`, `pid_loose` and
  `pid_tight`. `pid_fit` uses momentum-dependent gates held in a
  `MassGateTable`, binned by `multiplicity_bin` and `phi_bin`.
- `spiritflow.selection`:
  - `vertex_quality` applies the beam-projection and vertex cuts.
  - `momentum_passes` and `ncl_passes` are track cuts.
  - `assign_pid` combines the fitted and loose identifications.
  - `match_tracks` pairs tracks by helix id.
  - `reco_file_names` lists reconstruction file-name candidates.
  - `progress_interval` and `processing_count` handle event counting.

## Example

```python
from spiritflow.beam import beam_mass_number
from spiritflow.kinematics import boost_vector
from spiritflow.pid import multiplicity_bin, pid_loose

print(beam_mass_number(2900))          # 132
print(multiplicity_bin(52))            # 1
print(pid_loose(938.0, 0.0, 1000.0, 100.0))  # 2212 (proton)
print(boost_vector(0))                 # (0.0, 0.0, beta_cm)
```

## What the package does not do

- It does not read or write data files. The naming functions only produce
  names and selection strings. Mass gates and polygon cuts must be supplied
  by the caller.
- It has no reaction-plane or collective-flow reconstruction.
- It has no command-line program.