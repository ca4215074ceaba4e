"""Whitespace hygiene checker for source trees."""

__version__ = "0.1.0"
