"""Falling-block puzzle simulation core with pygame and gymnasium front-ends."""

__version__ = "0.1.0"
