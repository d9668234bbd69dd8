"""Structural map of a source tree: declarations, imports, and dependencies."""

__version__ = "0.1.0"
