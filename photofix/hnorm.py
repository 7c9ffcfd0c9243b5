"""Histogram normalisation of the brightness channel via its cumulative distribution."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping

import numpy as np

from photofix.photo import Photo


def value_counts(ivals) -> list[tuple[int, int]]:
    """Return (intensity, count) pairs for every intensity present, in ascending order."""
    arr = np.asarray(ivals, dtype=np.uint8)
    counts = np.bincount(arr.ravel(), minlength=256)
    return [(int(v), int(counts[v])) for v in np.flatnonzero(counts)]


def cumulative(counts: Iterable[tuple[int, int]]) -> list[tuple[int, int]]:
    """Turn (intensity, count) pairs into (intensity, running total) pairs."""
    total = 0
    dist = []
    for intensity, count in counts:
        total += count
        dist.append((intensity, total))
    return dist


def h_fun(amount: int, size: int, minimum: int) -> int:
    """Map a cumulative count onto 0..255, with ``minimum`` mapped to 0 and ``size`` to 255."""
    if size == minimum:
        return 0
    val = (amount - minimum) / (size - minimum) * 255
    return int(math.floor(val + 0.5)) % 256


def equalize(ivals, dist: Mapping[int, int], minimum: int) -> np.ndarray:
    """Replace every pixel with its normalised cumulative count."""
    arr = np.asarray(ivals, dtype=np.uint8)
    total = arr.size
    lut = np.zeros(256, dtype=np.uint8)
    for intensity, amount in dist.items():
        lut[intensity] = h_fun(amount, total, minimum)
    return lut[arr]


def hnorm(photo: Photo) -> np.ndarray:
    """Return the histogram-normalised value channel of a photo."""
    value = photo.value
    if value.size == 0:
        raise ValueError("cannot normalise an empty image")
    dist = cumulative(value_counts(value))
    return equalize(value, dict(dist), dist[0][1])