"""Brightness-channel image cleanup: speck removal, histogram normalisation and filters."""

__version__ = "0.1.0"