"""Bulk-load a JSON array file into a relational table."""

__version__ = "0.1.0"
