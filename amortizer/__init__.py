"""Amortización de préstamos a tasa fija."""

__version__ = "0.1.0"
