"""Congestion tax calculation for road toll passages."""

__version__ = "1.0.0"
