"""Atomic funds transfers between account holders."""

__version__ = "0.1.0"
