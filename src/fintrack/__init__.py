"""Fintrack: personal-finance tracking client."""

__version__ = "0.1.0"
