"""Zengym command-line strength coach."""

__version__ = "0.1.0"
