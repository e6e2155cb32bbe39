"""Civic AI: AI-assisted civic issue classification."""

__version__ = "1.0.0"
