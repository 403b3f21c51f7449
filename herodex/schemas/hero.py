"""Pydantic models mirroring the superhero API payload."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic.alias_generators import to_camel


class _HeroPayload(BaseModel):
    """Base configuration shared by every model decoded from the catalog.

    Wire names are camelCase; Python attributes stay snake_case. Unknown fields
    are dropped so new API attributes never break decoding.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class PowerStats(_HeroPayload):
    intelligence: int
    strength: int
    speed: int
    durability: int
    power: int
    combat: int


class Appearance(_HeroPayload):
    gender: str
    race: str | None = None
    # Parallel pairs: imperial first, metric second (e.g. ["6'2", "188 cm"]).
    height: list[str]
    weight: list[str]
    eye_color: str
    hair_color: str


class Biography(_HeroPayload):
    full_name: str
    alter_egos: str
    aliases: list[str]
    place_of_birth: str
    first_appearance: str
    publisher: str | None = None
    alignment: str


class Work(_HeroPayload):
    occupation: str
    base: str


class Connections(_HeroPayload):
    group_affiliation: str
    relatives: str


class Images(_HeroPayload):
    xs: str
    sm: str
    md: str
    lg: str


class Hero(_HeroPayload):
    """A single catalog record. Identity is the integer ``id``."""

    id: int
    name: str
    slug: str
    powerstats: PowerStats
    appearance: Appearance
    biography: Biography
    work: Work
    connections: Connections
    images: Images

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hero):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def matches(self, query: str) -> bool:
        """Return ``True`` when ``query`` appears in the name or full name."""

        needle = query.lower()
        return needle in self.name.lower() or needle in self.biography.full_name.lower()


_HERO_LIST_ADAPTER: TypeAdapter[list[Hero]] = TypeAdapter(list[Hero])


def decode_heroes(payload: str | bytes) -> list[Hero]:
    """Decode a JSON array of hero records.

    Raises :class:`pydantic.ValidationError` for malformed JSON as well as for
    payloads that do not match the hero schema.
    """

    return _HERO_LIST_ADAPTER.validate_json(payload)


def encode_heroes(heroes: Sequence[Hero]) -> bytes:
    """Encode heroes as a JSON array using the API's wire field names."""

    return _HERO_LIST_ADAPTER.dump_json(list(heroes), by_alias=True)


def hero_to_payload(hero: Hero) -> dict[str, Any]:
    return hero.model_dump(mode="json", by_alias=True)


__all__ = [
    "Appearance",
    "Biography",
    "Connections",
    "Hero",
    "Images",
    "PowerStats",
    "Work",
    "decode_heroes",
    "encode_heroes",
    "hero_to_payload",
]
