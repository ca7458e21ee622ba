"""Insights: content store, homepage configuration and hero management."""

__version__ = "0.1.0"
