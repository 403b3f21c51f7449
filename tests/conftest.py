"""Shared fixtures for the Herodex test suite."""

from __future__ import annotations

import random
from typing import Any

import pytest

from herodex.schemas.hero import Hero
from herodex.storage import MemoryStore
from tests.herodex.support.heroes import make_hero_payload


@pytest.fixture
def catalog_payload() -> list[dict[str, Any]]:
    """Three-hero catalog used by the search scenarios."""

    return [
        make_hero_payload(1, "Batman", full_name="Bruce Wayne", publisher="DC Comics"),
        make_hero_payload(2, "Superman", full_name="Clark Kent", publisher="DC Comics"),
        make_hero_payload(3, "batwoman", full_name="Kate Kane", publisher="DC Comics"),
    ]


@pytest.fixture
def catalog(catalog_payload: list[dict[str, Any]]) -> list[Hero]:
    return [Hero.model_validate(item) for item in catalog_payload]


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1234)
