"""Herodex: superhero catalog client with a locally persisted favorites list."""

__version__ = "0.1.0"
