"""Pluggable card-game framework."""

__version__ = "0.1.0"
