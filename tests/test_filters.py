import numpy as np
import pytest

from photofix.filters import bilateral, denoise, gaussian, unsharp_mask
from photofix.photo import Photo


def _random_photo(seed=0, shape=(12, 12)):
    rng = np.random.default_rng(seed)
    return Photo(rng.integers(0, 256, size=shape, dtype=np.uint8))


def test_gaussian_uniform_unchanged():
    photo = Photo(np.full((10, 10), 80, dtype=np.uint8))
    assert np.array_equal(gaussian(photo, 5, 1.5), photo.value)


def test_gaussian_even_size_rounds_up():
    photo = _random_photo(2)
    assert np.array_equal(gaussian(photo, 4, 1.0), gaussian(photo, 5, 1.0))


def test_gaussian_smooths():
    photo = _random_photo(3)
    out = gaussian(photo, 5, 2.0)
    assert out.shape == photo.value.shape
    assert out.astype(float).std() < photo.value.astype(float).std()


def test_bilateral_uniform_unchanged():
    photo = Photo(np.full((9, 9), 140, dtype=np.uint8))
    assert np.array_equal(bilateral(photo, 5, 30.0), photo.value)


def test_bilateral_stays_within_input_range():
    photo = _random_photo(4)
    out = bilateral(photo, 5, 50.0)
    assert out.shape == photo.value.shape
    assert out.min() >= photo.value.min()
    assert out.max() <= photo.value.max()


def test_denoise_uniform_unchanged():
    photo = Photo(np.full((8, 8), 60, dtype=np.uint8))
    assert np.array_equal(denoise(photo, 5.0), photo.value)


def test_denoise_reduces_noise():
    rng = np.random.default_rng(7)
    noisy = np.clip(128 + rng.normal(0, 10, size=(16, 16)), 0, 255).astype(np.uint8)
    photo = Photo(noisy)
    out = denoise(photo, 10.0)
    assert out.astype(float).std() < noisy.astype(float).std()


def test_denoise_rejects_non_positive_strength():
    with pytest.raises(ValueError):
        denoise(Photo(np.full((4, 4), 10, dtype=np.uint8)), 0)


def test_unsharp_zero_sigma_is_identity():
    photo = _random_photo(8)
    assert np.array_equal(unsharp_mask(photo, 3, 0.0), photo.value)


def test_unsharp_uniform_unchanged():
    photo = Photo(np.full((10, 10), 90, dtype=np.uint8))
    assert np.array_equal(unsharp_mask(photo, 4, 1.0), photo.value)


def test_unsharp_overshoots_at_edge():
    img = np.zeros((10, 10), dtype=np.uint8)
    img[:, :5] = 50
    img[:, 5:] = 200
    out = unsharp_mask(Photo(img), 5, 1.0)
    assert out.min() < 50
    assert out.max() > 200