"""Viral short-form video script generation."""

__version__ = "0.1.0"
