"""FayStar backend: authenticated gateway to external AI providers."""

__version__ = "1.0.0"
