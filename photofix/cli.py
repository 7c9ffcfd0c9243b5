"""Command-line entry point: pick an operation and process images."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import numpy as np

from photofix import imaging
from photofix.filters import bilateral, denoise, gaussian, unsharp_mask
from photofix.hnorm import hnorm
from photofix.photo import Photo

USAGE = "Usage: photofix <path to folder with images> <path to destination folder>"
MENU = (
    "Choose an operation:\n"
    "1 - remove specks\n"
    "2 - brightness histogram normalisation\n"
    "3 - bilateral filter\n"
    "4 - gaussian filter\n"
    "5 - noise removal by pixel averaging\n"
    "6 - sharpening with an unsharp mask"
)
PREFIX = "PTI_"
SEPARATOR = "=" * 76
MAX_APERTURE = 70
DIFF_PERCENT = 0.65

Ask = Callable[[str], str]


def _ask_int(ask: Ask, prompt: str) -> int:
    return int(ask(prompt).strip())


def _ask_float(ask: Ask, prompt: str) -> float:
    return float(ask(prompt).strip())


def _ask_size(ask: Ask, make_odd: bool) -> int:
    d = _ask_int(ask, "Input filter size (int x)\n")
    if make_odd and d % 2 == 0:
        d += 1
    print(f"Filter size = {d}")
    return d


def _ask_sigma(ask: Ask) -> float:
    sigma = _ask_float(ask, "Input sigma value (double  x.y)\n")
    print(f"sigma = {sigma:g}")
    return sigma


def _op_hnorm(photo: Photo, ask: Ask) -> np.ndarray:
    return hnorm(photo)


def _op_bilateral(photo: Photo, ask: Ask) -> np.ndarray:
    d = _ask_size(ask, make_odd=False)
    return bilateral(photo, d, _ask_sigma(ask))


def _op_gaussian(photo: Photo, ask: Ask) -> np.ndarray:
    d = _ask_size(ask, make_odd=True)
    return gaussian(photo, d, _ask_sigma(ask))


def _op_denoise(photo: Photo, ask: Ask) -> np.ndarray:
    h = _ask_float(ask, "Input filter strength (float x)\n")
    print(f"Filter strength = {h:g}")
    return denoise(photo, h)


def _op_unsharp(photo: Photo, ask: Ask) -> np.ndarray:
    d = _ask_size(ask, make_odd=True)
    return unsharp_mask(photo, d, _ask_sigma(ask))


_OPERATIONS: dict[str, Callable[[Photo, Ask], np.ndarray]] = {
    "2": _op_hnorm,
    "3": _op_bilateral,
    "4": _op_gaussian,
    "5": _op_denoise,
    "6": _op_unsharp,
}


def run_operation(input_path, output_path, choice: str, ask: Ask = input) -> bool:
    """Apply operation ``choice`` to one image and write the result.

    Returns False, writing nothing, when ``choice`` names no operation.
    """
    operation = _OPERATIONS.get(choice)
    if operation is None:
        return False
    photo = Photo.from_file(input_path)
    imaging.write_image(Path(output_path), operation(photo, ask))
    return True


def _clean_one(image: Photo) -> tuple[np.ndarray, int]:
    size = image.value.size
    n = 1
    pix_diff = 0
    while 100 * pix_diff / size < DIFF_PERCENT and n <= MAX_APERTURE:
        print("|", end="", flush=True)
        n += 2
        cleaned = Photo(image.nr(5, n))
        pix_diff = cleaned.pix_difference(image.value)
    print("-" * max(0, (MAX_APERTURE - n) // 2 + 1), end="")
    return image.nr(5, n), n


def remove_specks(input_path, output_path) -> list[Path]:
    """Remove specks from an image or every image in a folder; return the written paths."""
    input_path = Path(input_path)
    output_path = Path(output_path)
    if not input_path.exists():
        raise FileNotFoundError(f"no such file or directory: {input_path}")
    output_path.mkdir(parents=True, exist_ok=True)

    if not input_path.is_dir():
        imaging.write_image(output_path / input_path.name, imaging.read_image(input_path))
        input_path = output_path

    written = []
    print(SEPARATOR)
    print("START")
    entries = sorted(p for p in input_path.iterdir() if p.is_file())
    for index, entry in enumerate(entries, start=1):
        try:
            image = Photo.from_file(entry)
        except ValueError:
            print(f"skipping {entry.name}: not an image", file=sys.stderr)
            continue
        if image.value.size == 0:
            continue
        print(f"image {index} - {entry.name}: ", end="")
        result, n = _clean_one(image)
        target = output_path / f"{PREFIX}{entry.name}"
        imaging.write_image(target, result)
        written.append(target)
        print(f"\t\t{n}/{MAX_APERTURE + 1}")
    print("All images were processed.")
    print(SEPARATOR)
    return written


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        print(USAGE, file=sys.stderr)
        return 1
    input_path, output_path = Path(args[0]), Path(args[1])

    print(MENU)
    choice = input().strip()[:1]

    if choice != "1":
        try:
            run_operation(input_path, output_path, choice)
        except (FileNotFoundError, ValueError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        return 0

    try:
        remove_specks(input_path, output_path)
    except FileNotFoundError:
        print("Error: no such file or directory.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())