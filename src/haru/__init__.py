"""Mood journal core: calendar aggregation and inline content rendering."""

__version__ = "0.1.0"
