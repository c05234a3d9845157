"""Stitch audio clips into one MP3, or into an MP4 over a still background."""

__version__ = "1.0.0"
