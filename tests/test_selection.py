import pytest

from spiritflow.selection import (
    MIN_NCL,
    MOMENTUM_RANGE,
    VERTEX_MEAN,
    VERTEX_SIGMA,
    assign_pid,
    match_tracks,
    momentum_passes,
    ncl_passes,
    processing_count,
    progress_interval,
    reco_file_names,
    vertex_quality,
)


def test_vertex_at_mean_is_good():
    assert vertex_quality(VERTEX_MEAN[0], -10.0, -10.0, 0.0, 0.0, 0) is True


@pytest.mark.parametrize(
    "proj",
    [(1.0, -10.0, 0.0, 0.0), (-100.0, -10.0, 0.0, 0.0), (-10.0, -100.0, 0.0, 0.0), (-10.0, -10.0, 25.0, 0.0)],
)
def test_bad_projection_rejected(proj):
    assert vertex_quality(VERTEX_MEAN[1], *proj, 1) is False


def test_vertex_outside_z_window():
    x, y, z = VERTEX_MEAN[2]
    far = (x, y, z + 4 * VERTEX_SIGMA[2])
    assert vertex_quality(far, -10.0, -10.0, 0.0, 0.0, 2) is False


def test_unknown_system_rejected():
    assert vertex_quality(VERTEX_MEAN[0], -10.0, -10.0, 0.0, 0.0, 4) is False


def test_momentum_passes():
    low = MOMENTUM_RANGE[2][0]
    assert momentum_passes(2, low - 1) is False
    assert momentum_passes(2, low) is True
    assert momentum_passes(7, 0.0) is True


def test_ncl_passes():
    assert ncl_passes(MIN_NCL) is True
    assert ncl_passes(MIN_NCL - 1) is False


def test_assign_pid_cases():
    assert assign_pid(2212, 1000020030, 0) == (1000020030, 0, True, True)
    assert assign_pid(2212, 0, 0) == (2212, 0, True, False)
    assert assign_pid(0, 0, 211) == (211, 0, False, False)
    assert assign_pid(0, 0, 1000010020) == (0, 1000010020, False, False)
    assert assign_pid(0, 0, 0) == (0, 0, True, False)


def test_match_tracks_identical():
    ids = [1, 2, 3]
    assert match_tracks(ids, ids) == [(0, 0), (1, 1), (2, 2)]


def test_match_tracks_skips_reco():
    assert match_tracks([1, 2, 3, 4], [3, 4]) == [(2, 0), (3, 1)]


def test_match_tracks_reco_exhausted():
    assert match_tracks([1, 2], [5]) == []


def test_reco_file_names():
    names = reco_file_names(2900, "v1", 132, 11)
    assert names[0] == ("run2900_s00.reco.v1.root", "run2900_s0.reco.v1.root")
    assert names[10] == ("run2900_s10.reco.v1.root",)
    assert len(names) == 11


def test_reco_file_names_negative():
    with pytest.raises(ValueError):
        reco_file_names(2900, "v1", 132, -1)


def test_progress_interval():
    assert progress_interval(100) == 1
    assert progress_interval(400) * 200 == 400


def test_processing_count():
    assert processing_count(5, 10) == 5
    assert processing_count(20, 10) == 10