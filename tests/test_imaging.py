import numpy as np
import pytest

from photofix import imaging


def test_read_write_round_trip(tmp_path):
    img = np.zeros((4, 5, 3), dtype=np.uint8)
    img[1, 2] = (10, 20, 30)
    path = tmp_path / "x.png"
    imaging.write_image(path, img)
    assert np.array_equal(imaging.read_image(path), img)


def test_read_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        imaging.read_image(tmp_path / "none.png")


def test_pure_red_hsv():
    img = np.array([[[0, 0, 255]]], dtype=np.uint8)
    assert imaging.to_hsv(img)[0, 0].tolist() == [0, 255, 255]


def test_hsv_round_trip():
    rng = np.random.default_rng(1)
    img = rng.integers(0, 256, size=(6, 6, 3), dtype=np.uint8)
    back = imaging.from_hsv(imaging.to_hsv(img))
    assert np.abs(back.astype(int) - img.astype(int)).max() <= 4


def test_histogram_counts():
    v = np.array([[0, 0, 5], [5, 5, 255]], dtype=np.uint8)
    h = imaging.histogram(v)
    assert h.shape == (256,)
    assert h[5] == 3 and h.sum() == v.size


def test_median_removes_speck():
    v = np.full((5, 5), 100, dtype=np.uint8)
    v[2, 2] = 255
    out = imaging.median_blur(v, 3)
    assert out.tolist() == [[100] * 5 for _ in range(5)]


def test_median_even_ksize():
    with pytest.raises(ValueError):
        imaging.median_blur(np.zeros((3, 3), dtype=np.uint8), 4)


def test_threshold():
    v = np.array([[60, 61]], dtype=np.uint8)
    assert imaging.threshold_binary(v, 60, 255).tolist() == [[0, 255]]


def test_equalize_two_levels():
    v = np.array([[10, 10], [200, 200]], dtype=np.uint8)
    assert imaging.equalize_hist(v).tolist() == [[0, 0], [255, 255]]


def test_equalize_monotone():
    v = np.arange(64, dtype=np.uint8).reshape(8, 8)
    out = imaging.equalize_hist(v).ravel().tolist()
    assert out == sorted(out)
    assert out[0] == 0
    assert out[-1] == 255


def test_constant_images_are_fixed_points():
    v = np.full((12, 12), 77, dtype=np.uint8)
    expected = [[77] * 12 for _ in range(12)]
    assert imaging.gaussian_blur(v, 5, 1.0).tolist() == expected
    assert imaging.bilateral_filter(v, 5, 10.0, 10.0).tolist() == expected
    assert imaging.nl_means_denoise(v, 5.0).tolist() == expected


def test_nl_means_rejects_non_positive_strength():
    with pytest.raises(ValueError):
        imaging.nl_means_denoise(np.zeros((4, 4), dtype=np.uint8), 0)


def test_clahe_shape_and_monotone():
    v = np.tile(np.arange(0, 256, 4, dtype=np.uint8), (16, 1))
    out = imaging.clahe(v, 2.0, (8, 8))
    assert out.shape == v.shape
    row = out[0].tolist()
    assert row == sorted(row)


def test_add_weighted_saturates():
    a = np.array([[200]], dtype=np.uint8)
    assert imaging.add_weighted(a, 2.0, a, 0.0, 0.0)[0, 0] == 255
    assert imaging.add_weighted(a, 1.0, a, -2.0, 0.0)[0, 0] == 0