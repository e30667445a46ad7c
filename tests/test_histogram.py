import numpy as np
import pytest

from spiritflow.histogram import (
    Axis,
    Histogram1D,
    Histogram2D,
    embedding_weight,
    gaussian_blur,
    integrate_pt,
    normalize_per_area,
    normalize_per_width,
    ratio,
)


def _grid(nx=10, ny=10):
    return Histogram2D(Axis.regular(nx, 0.0, 1.0), Axis.regular(ny, 0.0, 1.0), name="h")


def test_find_bin_edges_and_flow():
    axis = Axis.regular(5, 0.0, 10.0)
    assert axis.find_bin(-0.1) == 0
    assert axis.find_bin(0.0) == 1
    assert axis.find_bin(10.0) == axis.nbins + 1
    assert axis.find_bin(9.999) == axis.nbins


def test_bin_center_round_trip():
    for axis in (Axis.regular(7, -1.0, 2.5), Axis.variable([0.0, 0.1, 0.5, 2.0, 2.2])):
        for i in range(1, axis.nbins + 1):
            assert axis.find_bin(axis.bin_center(i)) == i


def test_variable_width_is_clamped():
    edges = [0.0, 0.1, 0.5, 2.0]
    axis = Axis.variable(edges)
    assert [axis.bin_width(i) for i in (1, 2, 3)] == pytest.approx(np.diff(edges))
    assert axis.bin_width(0) == axis.bin_width(1)
    assert axis.bin_width(4) == axis.bin_width(3)


def test_invalid_axis():
    with pytest.raises(ValueError):
        Axis.variable([1.0, 1.0])


def test_fill_tracks_weights():
    h = Histogram1D(Axis.regular(4, 0.0, 4.0))
    h.fill(1.5, 3.0)
    h.fill(1.2, 1.0)
    h.fill(-2.0)
    assert h.entries == 3
    assert h.contents[2] == 4.0
    assert h.sumw2[2] == 10.0
    assert h.contents[0] == 1.0


def test_interpolate_reproduces_linear_function():
    h = _grid()
    cx = np.array([h.xaxis.bin_center(i) for i in range(1, 11)])
    cy = np.array([h.yaxis.bin_center(j) for j in range(1, 11)])
    h.contents[1:-1, 1:-1] = 2.0 * cx[:, None] - 3.0 * cy[None, :]
    for x, y in [(0.3, 0.7), (0.52, 0.18), (0.35, 0.45)]:
        assert h.interpolate(x, y) == pytest.approx(2.0 * x - 3.0 * y)


def test_interpolate_outside_raises():
    with pytest.raises(ValueError):
        _grid().interpolate(1.5, 0.5)


def test_blur_of_constant_is_constant():
    h = _grid(6, 5)
    h.contents[1:-1, 1:-1] = 4.0
    blurred = gaussian_blur(h)
    assert blurred.name == "h_GaussBlur"
    assert np.allclose(blurred.contents, 4.0)
    assert np.allclose(h.contents[0], 0.0)


def test_blur_even_kernel_rejected():
    with pytest.raises(ValueError):
        gaussian_blur(_grid(), kernel_size=4)


def test_blur_spreads_symmetrically():
    h = _grid()
    h.contents[5, 5] = 1.0
    b = gaussian_blur(h, kernel_size=5, sigma=1.0)
    assert b.contents[4, 5] == pytest.approx(b.contents[6, 5])
    assert b.contents[5, 3] == pytest.approx(b.contents[5, 7])
    assert b.contents[5, 5] > b.contents[4, 5] > b.contents[3, 5] > 0.0


def test_normalize_per_width_unit_integral():
    h = Histogram1D(Axis.regular(4, 0.0, 2.0))
    for x in (0.1, 0.6, 0.7, 1.9):
        h.fill(x)
    normalize_per_width(h)
    widths = np.array([h.axis.bin_width(i) for i in range(6)])
    assert np.sum(h.contents * widths) == pytest.approx(1.0)


def test_normalize_per_area_unit_integral():
    h = Histogram2D(Axis.regular(2, 0.0, 1.0), Axis.regular(4, 0.0, 2.0))
    for x, y in ((0.2, 0.1), (0.7, 1.5), (0.7, 1.6)):
        h.fill(x, y)
    normalize_per_area(h)
    area = h.xaxis.bin_width(1) * h.yaxis.bin_width(1)
    assert np.sum(h.contents) * area == pytest.approx(1.0)


def test_normalize_zero_entries_rejected():
    with pytest.raises(ValueError):
        normalize_per_width(Histogram1D(Axis.regular(2, 0.0, 1.0)))


def test_integrate_pt_weights_by_width_and_respects_limit():
    h = Histogram2D(Axis.regular(4, -1.0, 1.0), Axis.regular(5, 0.0, 1.0))
    h.fill(0.25, 0.3, 2.0)
    h.fill(-0.75, 0.3, 5.0)
    proj = integrate_pt(h)
    width = h.yaxis.bin_width(h.yaxis.find_bin(0.3))
    rap_bin = h.xaxis.find_bin(0.25)
    assert proj.name == "h1RapProj"
    assert proj.contents[rap_bin] == pytest.approx(2.0 * width)
    assert proj.errors[rap_bin] == pytest.approx(2.0 * width)
    assert proj.contents[h.xaxis.find_bin(-0.75)] == 0.0


def test_embedding_weight_constant_spectra():
    hw = _grid()
    hw.contents[:] = 1.0
    hembed = _grid()
    hembed.contents[:] = 2.0
    assert embedding_weight(hw, 0.4, 0.5, hembed) == pytest.approx(1.0 / 2.0)
    assert embedding_weight(hw, 5.0, 5.0, hembed) == pytest.approx(1.0 / 2.0)


def test_embedding_weight_degenerate_cases():
    hw = _grid()
    hw.contents[:] = 1.0
    empty = _grid()
    assert embedding_weight(None, 0.4, 0.5, empty) == 0.0
    assert embedding_weight(hw, 0.4, 0.5, empty) == 0.0


def test_ratio_with_itself():
    h = Histogram1D(Axis.regular(3, 0.0, 3.0), name="n")
    h.fill(0.5, 2.0)
    h.fill(2.5, 4.0)
    r = ratio(h, h)
    assert r.name == "n_ratio"
    assert r.contents[1] == 1.0 and r.contents[3] == 1.0
    assert r.contents[2] == 0.0


def test_ratio_with_unit_denominator_keeps_errors():
    num = Histogram1D(Axis.regular(3, 0.0, 3.0))
    num.fill(1.5, 3.0)
    num.fill(1.5, 1.0)
    den = Histogram1D(Axis.regular(3, 0.0, 3.0))
    den.contents[:] = 1.0
    r = ratio(num, den)
    assert np.allclose(r.contents, num.contents)
    assert np.allclose(r.errors, num.errors)


def test_ratio_binning_mismatch():
    with pytest.raises(ValueError):
        ratio(Histogram1D(Axis.regular(3, 0.0, 1.0)), Histogram1D(Axis.regular(4, 0.0, 1.0)))