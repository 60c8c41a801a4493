"""Structured chapter, cover, and metadata extraction for e-books."""

__version__ = "0.1.0"
