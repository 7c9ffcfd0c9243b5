import numpy as np
import pytest

from photofix.hnorm import cumulative, equalize, h_fun, hnorm, value_counts
from photofix.photo import Photo


def test_value_counts_sorted_and_complete():
    ivals = [[3, 1], [2, 2]]
    assert value_counts(ivals) == [(1, 1), (2, 2), (3, 1)]


def test_value_counts_total_matches_size():
    rng = np.random.default_rng(1)
    img = rng.integers(0, 256, size=(9, 7), dtype=np.uint8)
    counts = value_counts(img)
    assert sum(c for _, c in counts) == img.size
    assert [v for v, _ in counts] == sorted(set(img.ravel().tolist()))


def test_cumulative_running_total():
    assert cumulative([(1, 1), (2, 2), (3, 1)]) == [(1, 1), (2, 3), (3, 4)]


def test_cumulative_empty():
    assert cumulative([]) == []


def test_h_fun_endpoints():
    assert h_fun(4, 10, 4) == 0
    assert h_fun(10, 10, 4) == 255


def test_h_fun_rounds_half_up():
    assert h_fun(3, 5, 1) == 128


def test_h_fun_degenerate_range():
    assert h_fun(7, 7, 7) == 0


def test_equalize_uses_mapping():
    ivals = np.array([[10, 20], [20, 30]], dtype=np.uint8)
    out = equalize(ivals, {10: 1, 20: 3, 30: 4}, 1)
    assert out[0, 0] == 0
    assert out[1, 1] == 255
    assert out[0, 1] == out[1, 0]


def test_hnorm_spans_full_range_and_keeps_order():
    rng = np.random.default_rng(5)
    img = rng.integers(40, 120, size=(16, 16), dtype=np.uint8)
    out = hnorm(Photo(img))
    assert out.shape == img.shape
    assert out.min() == 0
    assert out.max() == 255
    flat_in = img.ravel().astype(int)
    flat_out = out.ravel().astype(int)
    order = np.argsort(flat_in, kind="stable")
    assert np.all(np.diff(flat_out[order]) >= 0)


def test_hnorm_uses_value_channel_of_colour_image():
    gray = np.tile(np.arange(0, 200, 20, dtype=np.uint8), (4, 1))
    bgr = np.stack([gray, gray, gray], axis=-1)
    assert np.array_equal(hnorm(Photo(bgr)), hnorm(Photo(gray)))


def test_hnorm_uniform_image_is_zero():
    out = hnorm(Photo(np.full((5, 5), 77, dtype=np.uint8)))
    assert np.all(out == 0)


def test_hnorm_empty_raises():
    with pytest.raises(ValueError):
        hnorm(Photo(np.zeros((0, 0), dtype=np.uint8)))