import pytest

from spiritflow.beam import (
    BeamIdentifier,
    BeamRecord,
    PolygonCut,
    beam_cut_file_name,
    beam_file_name,
    beam_mass_number,
)

SQUARE = PolygonCut([(2.0, 49.0), (3.0, 49.0), (3.0, 52.0), (2.0, 52.0)])


def test_polygon_contains_inside_and_outside():
    assert SQUARE.contains(2.5, 50.0) is True
    assert SQUARE.contains(3.5, 50.0) is False
    assert SQUARE.contains(2.5, 53.0) is False


def test_polygon_needs_three_points():
    with pytest.raises(ValueError):
        PolygonCut([(0, 0), (1, 1)])


def test_polygon_concave():
    cut = PolygonCut([(0, 0), (4, 0), (4, 4), (2, 1), (0, 4)])
    assert cut.contains(1, 0.5)
    assert not cut.contains(2, 3)


@pytest.mark.parametrize(
    "run,expected",
    [(2174, 108), (2509, 108), (2520, 112), (2653, 112), (2836, 132), (3039, 132), (3058, 124), (3184, 124)],
)
def test_beam_mass_number_boundaries(run, expected):
    assert beam_mass_number(run) == expected


@pytest.mark.parametrize("run", [2173, 2515, 3050, 3185])
def test_beam_mass_number_outside(run):
    with pytest.raises(ValueError):
        beam_mass_number(run)


def test_beam_file_name_is_zero_padded():
    assert beam_file_name(42) == "beam_run0042.ridf.root"
    assert beam_file_name(3015) == "beam_run3015.ridf.root"


def test_beam_cut_file_name():
    assert beam_cut_file_name(132) == "data/gcut132Sn.ROOT"
    with pytest.raises(ValueError):
        beam_cut_file_name(100)


def test_pid_inside_cut():
    ident = BeamIdentifier({108: SQUARE})
    assert ident.pid(108, 2.5, 51.0) == 108
    assert ident.pid(108, 3.5, 51.0) == 0


def test_pid_132_has_upper_z_limit():
    ident = BeamIdentifier({132: SQUARE})
    assert ident.pid(132, 2.5, 50.0) == 132
    assert ident.pid(132, 2.5, 51.0) == 0


def test_pid_without_cut_is_zero():
    ident = BeamIdentifier({108: SQUARE})
    assert ident.pid(124, 2.5, 50.0) == 0


def test_beam_record_carries_pid():
    ident = BeamIdentifier({112: SQUARE})
    record = BeamRecord(run=2600, aoq=2.2, z=50.1, sna=beam_mass_number(2600))
    record.beam_pid = ident.pid(record.sna, record.aoq, record.z)
    assert record.beam_pid == 112
    assert record.proj_a == 0.0