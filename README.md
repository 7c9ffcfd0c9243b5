# photofix

photofix cleans up photographs by working on their brightness. A colour
image is converted to 8-bit HSV and its value (V) channel is processed.
Images are NumPy `uint8` arrays: 3-channel arrays in BGR order, or 2-D
arrays for greyscale.

## Installation

```
pip install .
```

## Command line

```
photofix <input> <output>
```

The program prints a menu and reads one choice from standard input:

| Choice | Operation |
|--------|-----------|
| 1 | remove specks (small bright or dark blemishes) |
| 2 | brightness histogram normalisation |
| 3 | bilateral filter |
| 4 | Gaussian filter |
| 5 | noise removal by non-local means averaging |
| 6 | sharpening with an unsharp mask |

For choice **1**, `<input>` can be one image or a folder of images, and
`<output>` is a folder, created if it does not exist. A single input image
is first copied into the output folder, and that folder is then processed.
Each file is written to the output folder with the prefix `PTI_`; files that
cannot be decoded as images are skipped with a message. For each image the
mask aperture grows in steps of two until at least 0.65 % of the pixels have
changed or the aperture passes 70, and a progress bar and the final aperture
(`n/71`) are printed.

For choices **2** to **6**, `<input>` is one image and `<output>` is the
file to write; the format follows the file extension. The result is the
processed brightness channel, written as a greyscale image. Filters 3, 4
and 6 ask for a filter size and a sigma, filter 5 for a strength. For the
Gaussian filter and the unsharp mask an even filter size is raised to the
next odd number.

Any other choice writes nothing. The exit status is 1 when fewer than two
paths are given or the input cannot be found or read, otherwise 0.

## Library use

```python
from photofix.photo import Photo
from photofix import filters, hnorm
from photofix.imaging import write_image

photo = Photo.from_file("scan.png")

write_image("equalised.png", hnorm.hnorm(photo))
write_image("smooth.png", filters.gaussian(photo, 5, 1.2))
write_image("sharp.png", filters.unsharp_mask(photo, 3, 1.0))
write_image("clean.png", photo.nr(5, 3))
```

- `photofix.photo.Photo` holds an image, its HSV form (`hsv`, `None` for
  greyscale) and its value channel (`value`). It provides histogram
  equalisation (`he`), CLAHE (`clahe`), bi-histogram CLAHE (`bhe`), gamma
  correction (`gc`), speck removal on the value channel (`nr`), the speck
  mask (`mask`, `count_noise`), histogram and value splitting and merging
  around the mean brightness (`hist_split`, `hist_merge`, `value_split`,
  `value_merge`), and a count of differing pixels (`pix_difference`).
  `he`, `clahe` and `gc` return the full image with the new value channel
  put back (`apply_new_value`).
- `photofix.hnorm` normalises the value channel through its cumulative
  distribution (`hnorm`, with the steps `value_counts`, `cumulative`,
  `h_fun` and `equalize`).
- `photofix.filters` provides `bilateral`, `gaussian`, `denoise` and
  `unsharp_mask`, each returning a filtered value channel.
- `photofix.imaging` holds the array operations underneath: reading and
  writing files (`read_image` always returns a 3-channel BGR array),
  HSV conversion, histograms, median, Gaussian and bilateral filtering,
  non-local means, histogram equalisation, CLAHE, thresholding and weighted
  addition.
- `photofix.cli` exposes `run_operation`, `remove_specks` and `main`.

## What it does not do

photofix has no viewer: it does not open windows or display images or
histograms. All results are written to files or returned as arrays.

## Running the tests

```
pip install .[test]
pytest
```