[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "photofix"
version = "0.1.0"
description = "Brightness-channel image cleanup: speck removal, histogram normalisation and smoothing filters"
requires-python = ">=3.10"
keywords = ["image", "denoise", "histogram", "equalization", "filter", "hsv", "clahe"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]
dependencies = [
    "numpy",
    "pillow",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
photofix = "photofix.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["photofix"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
