"""Civic issue classification service."""
