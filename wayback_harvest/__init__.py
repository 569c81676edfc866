"""Wayback Harvest: list historical snapshots of a domain from the web archive index."""

__version__ = "2.0.1"

__all__ = ["__version__"]
