"""Validated natural-language querying for a personal nutrition log."""

__version__ = "0.1.0"
