"""Async client application for the NuSong AI music platform."""

__version__ = "0.1.0"
