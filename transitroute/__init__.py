"""Timetable-aware A* routing over a multimodal transit network."""

__version__ = "0.1.0"
