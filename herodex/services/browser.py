"""Presentation-facing state for the hero list screen.

:class:`HeroBrowser` loads the catalog once, keeps a random "current" hero,
and filters the loaded catalog as search text settles. It holds no rendering
logic; observers read the attributes after each ``on_change`` notification.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable

from herodex.schemas.error import HeroAPIError
from herodex.schemas.hero import Hero
from herodex.services.debounce import Debouncer
from herodex.services.hero_client import HeroClient, filter_heroes, pick_random_hero
from herodex.settings import DEFAULT_SEARCH_DEBOUNCE_SECONDS

logger = logging.getLogger(__name__)


class HeroBrowser:
    def __init__(
        self,
        client: HeroClient,
        *,
        debounce_seconds: float = DEFAULT_SEARCH_DEBOUNCE_SECONDS,
        rng: random.Random | None = None,
        on_change: Callable[[HeroBrowser], None] | None = None,
    ) -> None:
        self._client = client
        self._rng = rng
        self._on_change = on_change
        self._debouncer: Debouncer[str] = Debouncer(
            self.apply_filter, delay=debounce_seconds
        )

        self.all_heroes: list[Hero] = []
        self.filtered_heroes: list[Hero] = []
        self.current_hero: Hero | None = None
        self.search_text: str = ""
        self.is_search_active: bool = False
        self.is_loading: bool = False
        self.error_message: str | None = None

    async def load(self) -> None:
        """Fetch the catalog; failures land in ``error_message``."""

        self.is_loading = True
        self.error_message = None
        self._changed()

        try:
            heroes = await self._client.fetch_all_heroes()
        except HeroAPIError as exc:
            logger.info("Hero catalog load failed: %s", exc.description)
            self.error_message = exc.description
            return
        finally:
            self.is_loading = False
            self._changed()

        self.all_heroes = heroes
        self.pick_random_hero()
        self.apply_filter(self.search_text)

    async def retry(self) -> None:
        await self.load()

    def pick_random_hero(self) -> Hero | None:
        self.current_hero = pick_random_hero(self.all_heroes, self._rng)
        self._changed()
        return self.current_hero

    def set_search_text(self, text: str) -> None:
        """Record ``text`` and schedule a filter pass after the quiet period."""

        self.search_text = text
        self._debouncer.submit(text)

    def flush_search(self) -> None:
        self._debouncer.flush()

    def apply_filter(self, text: str) -> None:
        if not text:
            self.filtered_heroes = list(self.all_heroes)
            self.is_search_active = False
        else:
            self.filtered_heroes = filter_heroes(self.all_heroes, text)
            self.is_search_active = True
        self._changed()

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self)


__all__ = ["HeroBrowser"]
