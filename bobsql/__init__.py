"""Transpile a compact schema and query language into SQL."""

__version__ = "0.1.0"
__all__ = ["__version__"]