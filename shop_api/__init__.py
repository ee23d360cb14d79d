"""Flat-file product catalog served over HTTP and HTTPS."""

__version__ = "1.0.0"
