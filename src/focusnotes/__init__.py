"""Focusnotes: notes and productivity techniques over a REST API."""

__version__ = "0.1.0"
