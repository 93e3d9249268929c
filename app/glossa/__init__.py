"""Glossa - thread-safe translation lookup with locale fallback and caching."""

__version__ = "0.1.0"
