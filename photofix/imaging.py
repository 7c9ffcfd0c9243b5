"""Low-level image operations on numpy arrays (BGR / 8-bit single channel)."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image
from scipy import ndimage

_NLM_TEMPLATE = 7
_NLM_SEARCH = 21


def _u8(values: np.ndarray) -> np.ndarray:
    """Round and saturate to 8-bit."""
    return np.clip(np.rint(values), 0, 255).astype(np.uint8)


def read_image(path) -> np.ndarray:
    """Read an image file as a 3-channel BGR uint8 array."""
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"no such image: {path}")
    try:
        with Image.open(path) as img:
            rgb = np.asarray(img.convert("RGB"), dtype=np.uint8)
    except OSError as exc:
        raise ValueError(f"cannot decode image: {path}") from exc
    return np.ascontiguousarray(rgb[..., ::-1])


def write_image(path, image: np.ndarray) -> None:
    """Write a BGR or single-channel uint8 array to an image file."""
    arr = np.asarray(image, dtype=np.uint8)
    if arr.ndim == 3:
        pil = Image.fromarray(np.ascontiguousarray(arr[..., ::-1]), "RGB")
    elif arr.ndim == 2:
        pil = Image.fromarray(arr, "L")
    else:
        raise ValueError("image must be 2-D or 3-D")
    pil.save(Path(path))


def to_hsv(image: np.ndarray) -> np.ndarray:
    """Convert BGR uint8 to 8-bit HSV (H in 0..179, S and V in 0..255)."""
    bgr = np.asarray(image, dtype=np.float64)
    b, g, r = bgr[..., 0], bgr[..., 1], bgr[..., 2]
    v = bgr.max(axis=-1)
    diff = v - bgr.min(axis=-1)
    with np.errstate(divide="ignore", invalid="ignore"):
        s = np.where(v > 0, diff * 255.0 / v, 0.0)
        safe = np.where(diff > 0, diff, 1.0)
        h = np.where(
            v == r,
            (g - b) * 60.0 / safe,
            np.where(v == g, 120.0 + (b - r) * 60.0 / safe, 240.0 + (r - g) * 60.0 / safe),
        )
    h = np.where(diff > 0, h, 0.0)
    h = np.where(h < 0, h + 360.0, h)
    h = np.rint(h / 2.0)
    h = np.where(h >= 180, h - 180, h)
    return np.stack([h, _u8(s), v], axis=-1).astype(np.uint8)


def from_hsv(hsv: np.ndarray) -> np.ndarray:
    """Convert 8-bit HSV back to BGR uint8."""
    arr = np.asarray(hsv, dtype=np.float64)
    h = (arr[..., 0] * 2.0 % 360.0) / 60.0
    s = arr[..., 1] / 255.0
    v = arr[..., 2] / 255.0
    sector = np.floor(h).astype(int) % 6
    f = h - np.floor(h)
    p = v * (1 - s)
    q = v * (1 - s * f)
    t = v * (1 - s * (1 - f))
    choices_r = [v, q, p, p, t, v]
    choices_g = [t, v, v, q, p, p]
    choices_b = [p, p, t, v, v, q]
    r = np.choose(sector, choices_r)
    g = np.choose(sector, choices_g)
    b = np.choose(sector, choices_b)
    return _u8(np.stack([b, g, r], axis=-1) * 255.0)


def histogram(value: np.ndarray) -> np.ndarray:
    """Return a 256-bin float32 histogram of an 8-bit channel."""
    counts = np.bincount(np.asarray(value, dtype=np.uint8).ravel(), minlength=256)
    return counts.astype(np.float32)


def median_blur(value: np.ndarray, ksize: int) -> np.ndarray:
    """Median filter with a square odd aperture and replicated borders."""
    if ksize < 3 or ksize % 2 == 0:
        raise ValueError("ksize must be odd and greater than 1")
    return ndimage.median_filter(np.asarray(value, dtype=np.uint8), size=ksize, mode="nearest")


def threshold_binary(image: np.ndarray, thresh, maxval) -> np.ndarray:
    """Set pixels above thresh to maxval and the rest to zero."""
    arr = np.asarray(image)
    return np.where(arr > thresh, maxval, 0).astype(arr.dtype)


def equalize_hist(value: np.ndarray) -> np.ndarray:
    """Histogram equalisation of an 8-bit channel."""
    arr = np.asarray(value, dtype=np.uint8)
    hist = np.bincount(arr.ravel(), minlength=256)
    total = arr.size
    nonzero = np.flatnonzero(hist)
    if nonzero.size == 0:
        return arr.copy()
    first = nonzero[0]
    if hist[first] == total:
        return np.full_like(arr, first)
    scale = 255.0 / (total - hist[first])
    lut = np.zeros(256, dtype=np.uint8)
    running = np.cumsum(hist[first + 1:])
    lut[first + 1:] = _u8(running * scale)
    return lut[arr]


def _clip_histogram(hist: np.ndarray, limit: int) -> np.ndarray:
    hist = hist.copy()
    excess = int(np.maximum(hist - limit, 0).sum())
    hist = np.minimum(hist, limit)
    batch, residual = divmod(excess, 256)
    hist += batch
    if residual:
        step = max(256 // residual, 1)
        for i in range(0, 256, step):
            if residual <= 0:
                break
            hist[i] += 1
            residual -= 1
    return hist


def clahe(value: np.ndarray, clip_limit=2.0, tile_grid=(8, 8)) -> np.ndarray:
    """Contrast limited adaptive histogram equalisation of an 8-bit channel."""
    src = np.asarray(value, dtype=np.uint8)
    rows, cols = src.shape
    tiles_x, tiles_y = tile_grid
    pad_y = (-rows) % tiles_y
    pad_x = (-cols) % tiles_x
    padded = src
    if pad_y or pad_x:
        padded = np.pad(src, ((0, pad_y), (0, pad_x)), mode="reflect" if min(rows, cols) > 1 else "edge")
    tile_h = padded.shape[0] // tiles_y
    tile_w = padded.shape[1] // tiles_x
    area = tile_h * tile_w
    limit = max(int(clip_limit * area / 256), 1) if clip_limit > 0 else None

    luts = np.empty((tiles_y, tiles_x, 256), dtype=np.float64)
    scale = 255.0 / area
    for ty in range(tiles_y):
        for tx in range(tiles_x):
            tile = padded[ty * tile_h:(ty + 1) * tile_h, tx * tile_w:(tx + 1) * tile_w]
            hist = np.bincount(tile.ravel(), minlength=256).astype(np.int64)
            if limit is not None:
                hist = _clip_histogram(hist, limit)
            luts[ty, tx] = _u8(np.cumsum(hist) * scale)

    yf = np.arange(rows) / tile_h - 0.5
    xf = np.arange(cols) / tile_w - 0.5
    ty1 = np.floor(yf).astype(int)
    tx1 = np.floor(xf).astype(int)
    ya = (yf - ty1)[:, None]
    xa = (xf - tx1)[None, :]
    ty2 = np.minimum(ty1 + 1, tiles_y - 1)
    tx2 = np.minimum(tx1 + 1, tiles_x - 1)
    ty1 = np.maximum(ty1, 0)
    tx1 = np.maximum(tx1, 0)

    Y1, X1 = ty1[:, None], tx1[None, :]
    Y2, X2 = ty2[:, None], tx2[None, :]
    res = (
        (luts[Y1, X1, src] * (1 - xa) + luts[Y1, X2, src] * xa) * (1 - ya)
        + (luts[Y2, X1, src] * (1 - xa) + luts[Y2, X2, src] * xa) * ya
    )
    return _u8(res)


def _gaussian_kernel(ksize: int, sigma: float) -> np.ndarray:
    if sigma <= 0:
        sigma = 0.3 * ((ksize - 1) * 0.5 - 1) + 0.8
    x = np.arange(ksize) - (ksize - 1) / 2.0
    kernel = np.exp(-(x * x) / (2.0 * sigma * sigma))
    return kernel / kernel.sum()


def gaussian_blur(value: np.ndarray, ksize: int, sigma: float) -> np.ndarray:
    """Gaussian blur with a square odd kernel and reflected borders."""
    if ksize < 1 or ksize % 2 == 0:
        raise ValueError("ksize must be positive and odd")
    arr = np.asarray(value, dtype=np.float64)
    kernel = _gaussian_kernel(ksize, sigma)
    out = ndimage.correlate1d(arr, kernel, axis=0, mode="mirror")
    out = ndimage.correlate1d(out, kernel, axis=1, mode="mirror")
    return _u8(out)


def bilateral_filter(value: np.ndarray, d: int, sigma_color: float, sigma_space: float) -> np.ndarray:
    """Edge-preserving bilateral filter of an 8-bit channel."""
    arr = np.asarray(value, dtype=np.float64)
    if sigma_color <= 0:
        sigma_color = 1.0
    if sigma_space <= 0:
        sigma_space = 1.0
    radius = int(round(sigma_space * 1.5)) if d <= 0 else d // 2
    radius = max(radius, 1)
    mode = "reflect" if min(arr.shape) > radius else "edge"
    padded = np.pad(arr, radius, mode=mode)
    rows, cols = arr.shape
    color_coeff = -0.5 / (sigma_color * sigma_color)
    space_coeff = -0.5 / (sigma_space * sigma_space)
    acc = np.zeros_like(arr)
    weights = np.zeros_like(arr)
    for dy in range(-radius, radius + 1):
        for dx in range(-radius, radius + 1):
            dist2 = dy * dy + dx * dx
            if dist2 > radius * radius:
                continue
            shifted = padded[radius + dy:radius + dy + rows, radius + dx:radius + dx + cols]
            w = np.exp(dist2 * space_coeff + (shifted - arr) ** 2 * color_coeff)
            acc += w * shifted
            weights += w
    return _u8(acc / weights)


def nl_means_denoise(value: np.ndarray, h: float) -> np.ndarray:
    """Non-local means denoising of an 8-bit channel (7x7 patches, 21x21 search)."""
    if h <= 0:
        raise ValueError("filter strength must be positive")
    arr = np.asarray(value, dtype=np.float64)
    half_s = _NLM_SEARCH // 2
    mode = "reflect" if min(arr.shape) > half_s else "symmetric"
    padded = np.pad(arr, half_s, mode=mode)
    rows, cols = arr.shape
    acc = np.zeros_like(arr)
    weights = np.zeros_like(arr)
    for dy in range(-half_s, half_s + 1):
        for dx in range(-half_s, half_s + 1):
            shifted = padded[half_s + dy:half_s + dy + rows, half_s + dx:half_s + dx + cols]
            dist = ndimage.uniform_filter((arr - shifted) ** 2, size=_NLM_TEMPLATE, mode="mirror")
            w = np.exp(-dist / (h * h))
            acc += w * shifted
            weights += w
    return _u8(acc / weights)


def add_weighted(a: np.ndarray, alpha: float, b: np.ndarray, beta: float, gamma: float) -> np.ndarray:
    """Return saturate(a*alpha + b*beta + gamma) as uint8."""
    return _u8(np.asarray(a, dtype=np.float64) * alpha + np.asarray(b, dtype=np.float64) * beta + gamma)