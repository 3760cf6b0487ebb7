"""Aria - sales and receivables analysis over uploaded files."""

__version__ = "0.1.0"
