"""Filters applied to the brightness channel of a photo."""

from __future__ import annotations

import numpy as np

from photofix import imaging
from photofix.photo import Photo


def _odd(d: int) -> int:
    return d + 1 if d % 2 == 0 else d


def bilateral(photo: Photo, d: int, sigma: float) -> np.ndarray:
    """Bilateral filter of the value channel, same sigma for colour and space."""
    return imaging.bilateral_filter(photo.value, d, sigma, sigma)


def gaussian(photo: Photo, d: int, sigma: float) -> np.ndarray:
    """Gaussian blur of the value channel; an even size is raised to the next odd one."""
    return imaging.gaussian_blur(photo.value, _odd(d), sigma)


def denoise(photo: Photo, h: float) -> np.ndarray:
    """Non-local means denoising of the value channel with strength ``h``."""
    return imaging.nl_means_denoise(photo.value, h)


def unsharp_mask(photo: Photo, d: int, sigma: float) -> np.ndarray:
    """Sharpen the value channel by subtracting a weighted Gaussian blur."""
    value = photo.value
    blurred = imaging.gaussian_blur(value, _odd(d), sigma)
    return imaging.add_weighted(value, 1.0 + sigma, blurred, -sigma, 0.0)