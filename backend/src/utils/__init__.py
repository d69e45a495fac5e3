"""Utility functions and reference data for the rock drying engine."""

from .rock_catalog import ROCK_TYPES, get_rock_type

__all__ = [
    "ROCK_TYPES",
    "get_rock_type",
]
