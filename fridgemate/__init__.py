"""Fridge inventory tracking and recipe suggestions."""

__version__ = "0.1.0"
