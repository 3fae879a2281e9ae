# src/__init__.py — v1
"""bankchat — banking analytics chatbot backend with a cached document context."""

from bankchat.version import __version__

__all__ = ["__version__"]
