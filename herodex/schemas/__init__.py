"""Pydantic schemas and error types shared across Herodex."""

from herodex.schemas.error import (  # noqa: F401
    DecodingError,
    ErrorType,
    HeroAPIError,
    HTTPStatusError,
    InvalidResponseError,
    InvalidURLError,
    UnknownAPIError,
)
from herodex.schemas.hero import (  # noqa: F401
    Appearance,
    Biography,
    Connections,
    Hero,
    Images,
    PowerStats,
    Work,
    decode_heroes,
    encode_heroes,
)
