"""Homeboard CLI - household task board with recurring task batches."""

__version__ = "0.3.0"
