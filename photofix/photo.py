"""A photo with its HSV form and brightness (value) channel."""

from __future__ import annotations

import numpy as np

from photofix import imaging


class Photo:
    """Holds an image and derives its HSV representation and value channel."""

    def __init__(self, image: np.ndarray):
        self.image = np.asarray(image, dtype=np.uint8)
        if self.image.ndim == 3 and self.image.shape[2] == 3:
            self.hsv = imaging.to_hsv(self.image)
            self.value = self.hsv[..., 2].copy()
        elif self.image.ndim == 2:
            self.hsv = None
            self.value = self.image.copy()
        else:
            raise ValueError("image must be single-channel or 3-channel")

    @classmethod
    def from_file(cls, path) -> "Photo":
        return cls(imaging.read_image(path))

    @property
    def is_gray(self) -> bool:
        return self.hsv is None

    def apply_new_value(self, value: np.ndarray) -> np.ndarray:
        """Return the image rebuilt with a replaced value channel."""
        if self.is_gray:
            return np.asarray(value, dtype=np.uint8)
        hsv = self.hsv.copy()
        hsv[..., 2] = value
        return imaging.from_hsv(hsv)

    def medium_value(self) -> int:
        return int(self.value.astype(np.int64).sum()) // self.value.size

    def hist(self) -> np.ndarray:
        return imaging.histogram(self.value)

    def hist_split(self) -> tuple[np.ndarray, np.ndarray]:
        hist = self.hist()
        low = np.arange(hist.size) < self.medium_value()
        return np.where(low, hist, 0).astype(np.float32), np.where(low, 0, hist).astype(np.float32)

    def hist_merge(self, hist1, hist2) -> np.ndarray:
        return (np.asarray(hist1, dtype=np.float32) + np.asarray(hist2, dtype=np.float32)).astype(np.float32)

    def value_split(self) -> tuple[np.ndarray, np.ndarray]:
        low = self.value < self.medium_value()
        zero = np.zeros_like(self.value)
        return np.where(low, self.value, zero), np.where(low, zero, self.value)

    def value_merge(self, value1, value2) -> np.ndarray:
        total = np.asarray(value1, dtype=np.int64) + np.asarray(value2, dtype=np.int64)
        return (total % 256).astype(np.uint8)

    @staticmethod
    def _speck_mask(value: np.ndarray, k: int) -> np.ndarray:
        diff = np.abs(value.astype(np.int16) - imaging.median_blur(value, k).astype(np.int16))
        return imaging.threshold_binary(diff.astype(np.uint8), 60, 255)

    def mask(self, k=3) -> np.ndarray:
        """Mark pixels that differ strongly from their median neighbourhood."""
        mask1 = self._speck_mask(self.value, k)
        gc = Photo(self.gc(20))
        mask2 = self._speck_mask(gc.value, k)
        return np.minimum(mask1.astype(np.int16) + mask2, 255).astype(np.uint8)

    def count_noise(self, k=3) -> int:
        return int(np.count_nonzero(self.mask(k) == 255))

    def average(self, x, y, k, img) -> int:
        """Mean of the (2k+1)^2 neighbourhood around (x, y), centre excluded."""
        img = np.asarray(img)
        y0, y1 = max(y - k, 0), min(y + k + 1, img.shape[0])
        x0, x1 = max(x - k, 0), min(x + k + 1, img.shape[1])
        window = img[y0:y1, x0:x1].astype(np.int64)
        n = window.size - 1
        if n <= 0:
            raise ZeroDivisionError("neighbourhood is empty")
        return (int(window.sum()) - int(img[y, x])) // n

    def temp(self, k, p) -> np.ndarray:
        res = self.value.copy()
        rows, cols = self.value.shape
        for y in range(rows):
            for x in range(cols):
                av = self.average(x, y, k, self.value)
                if int(self.value[y, x]) - av > p:
                    res[y, x] = av
        return res

    def pix_difference(self, other) -> int:
        return int(np.count_nonzero(self.value != np.asarray(other)))

    def he(self) -> np.ndarray:
        return self.apply_new_value(imaging.equalize_hist(self.value))

    def clahe(self) -> np.ndarray:
        return self.apply_new_value(imaging.clahe(self.value, 2.0, (8, 8)))

    def bhe(self) -> np.ndarray:
        value1, value2 = self.value_split()
        return self.value_merge(Photo(value1).clahe(), Photo(value2).clahe())

    def gc(self, gamma=0.8) -> np.ndarray:
        """Gamma correction of the value channel."""
        v = self.value.astype(np.float32)
        corrected = np.float32(255) * np.power(v / np.float32(255), np.float32(gamma))
        return self.apply_new_value(corrected.astype(np.uint8))

    @staticmethod
    def _box_sum(arr: np.ndarray, r: int) -> np.ndarray:
        rows, cols = arr.shape
        padded = np.pad(arr.astype(np.int64), r)
        integral = np.zeros((padded.shape[0] + 1, padded.shape[1] + 1), dtype=np.int64)
        integral[1:, 1:] = padded.cumsum(0).cumsum(1)
        w = 2 * r + 1
        return (
            integral[w:w + rows, w:w + cols]
            - integral[:rows, w:w + cols]
            - integral[w:w + rows, :cols]
            + integral[:rows, :cols]
        )

    def nr(self, count=5, k=3) -> np.ndarray:
        """Replace masked specks with the mean of unmasked pixels nearby, repeatedly."""
        if count == 0:
            return self.value
        masked = self.mask(k) == 255
        clean = ~masked
        radius = 15
        sums = self._box_sum(np.where(clean, self.value, 0), radius)
        counts = self._box_sum(clean.astype(np.int64), radius)
        averages = np.where(counts > 0, sums // np.maximum(counts, 1), 128)
        result = np.where(masked, averages, self.value).astype(np.uint8)
        return Photo(result).nr(count - 1)