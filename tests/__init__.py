"""Herodex test suite; shared builders live under ``tests.herodex.support``."""
