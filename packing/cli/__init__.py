"""Command line interface (``python -m packing.cli``)."""

from .__main__ import main

__all__ = ["main"]
