"""Async client for the superhero catalog endpoint.

The catalog is small (a few hundred records) and has no server-side search, so
every operation downloads the whole array and derives its answer in memory.
Nothing is cached and nothing is retried: each call maps to exactly one GET and
surfaces exactly one :class:`~herodex.schemas.error.HeroAPIError` on failure.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from types import TracebackType

import httpx
from pydantic import ValidationError

from herodex.schemas.error import (
    DecodingError,
    HTTPStatusError,
    InvalidResponseError,
    InvalidURLError,
    UnknownAPIError,
)
from herodex.schemas.hero import Hero, decode_heroes
from herodex.settings import AppSettings, get_settings

logger = logging.getLogger(__name__)


def filter_heroes(heroes: Sequence[Hero], query: str) -> list[Hero]:
    """Return heroes whose name or full name contains ``query`` (case-insensitive).

    An empty query returns the catalog unfiltered.
    """

    if not query:
        return list(heroes)
    return [hero for hero in heroes if hero.matches(query)]


def pick_random_hero(
    heroes: Sequence[Hero], rng: random.Random | None = None
) -> Hero | None:
    """Return a uniformly chosen hero, or ``None`` for an empty catalog."""

    if not heroes:
        return None
    chooser = rng if rng is not None else random
    return chooser.choice(heroes)


def _build_url(raw_url: str) -> httpx.URL:
    try:
        url = httpx.URL(raw_url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidURLError(raw_url) from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise InvalidURLError(raw_url)
    return url


class HeroClient:
    """Fetches the full hero catalog and answers random/search queries from it."""

    def __init__(
        self,
        *,
        url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        rng: random.Random | None = None,
        active_settings: AppSettings | None = None,
    ) -> None:
        resolved = active_settings or get_settings()
        self._url = url if url is not None else resolved.all_heroes_url
        self._timeout = timeout if timeout is not None else resolved.request_timeout_seconds
        self._client = client
        self._owns_client = False
        self._rng = rng

    @property
    def url(self) -> str:
        return self._url

    async def __aenter__(self) -> HeroClient:
        if self._client is None:
            self._client = self._new_http_client()
            self._owns_client = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying httpx client when this instance created it."""

        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
            self._owns_client = False

    async def fetch_all_heroes(self) -> list[Hero]:
        """Download and decode the complete catalog.

        Raises
        ------
        InvalidURLError
            The configured endpoint is not an absolute http(s) URL.
        InvalidResponseError
            The connection closed without an HTTP response.
        HTTPStatusError
            The server answered outside the 2xx range.
        DecodingError
            The body is not a JSON array of hero records.
        UnknownAPIError
            Any other transport failure.
        """

        url = _build_url(self._url)
        response = await self._get(url)

        if not 200 <= response.status_code < 300:
            logger.warning(
                "Hero catalog request to %s failed with HTTP %s", url, response.status_code
            )
            raise HTTPStatusError(response.status_code)

        try:
            heroes = decode_heroes(response.content)
        except ValidationError as exc:
            logger.warning("Hero catalog payload from %s failed to decode: %s", url, exc)
            raise DecodingError(exc) from exc

        logger.debug("Fetched %d heroes from %s", len(heroes), url)
        return heroes

    async def fetch_random_hero(self) -> Hero | None:
        """Return one hero chosen uniformly at random, or ``None`` if the catalog is empty."""

        heroes = await self.fetch_all_heroes()
        return pick_random_hero(heroes, self._rng)

    async def search_heroes(self, query: str) -> list[Hero]:
        """Return heroes whose name or full name contains ``query``."""

        heroes = await self.fetch_all_heroes()
        return filter_heroes(heroes, query)

    async def _get(self, url: httpx.URL) -> httpx.Response:
        try:
            if self._client is not None:
                return await self._client.get(url, follow_redirects=True)
            async with self._new_http_client() as client:
                return await client.get(url, follow_redirects=True)
        except httpx.RemoteProtocolError as exc:
            logger.warning("No HTTP response received from %s: %s", url, exc)
            raise InvalidResponseError() from exc
        except (httpx.HTTPError, OSError) as exc:
            logger.warning("Hero catalog request to %s failed: %s", url, exc)
            raise UnknownAPIError(exc) from exc

    def _new_http_client(self) -> httpx.AsyncClient:
        if self._timeout is None:
            return httpx.AsyncClient(follow_redirects=True)
        return httpx.AsyncClient(follow_redirects=True, timeout=self._timeout)


__all__ = ["HeroClient", "filter_heroes", "pick_random_hero"]
