"""Cellular-automaton maze solver."""

__version__ = "0.1.0"
