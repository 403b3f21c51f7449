"""Favorites list mirrored to key-value storage.

Operations:
* ``is_favorite`` – membership test by hero id.
* ``add_to_favorites`` – append when absent, then persist.
* ``remove_from_favorites`` – drop every entry with the id, then persist.
* ``toggle_favorite`` – exactly one of the two mutations above.
* ``subscribe`` – change notifications carrying the new snapshot.

The in-memory list is authoritative for the running session. Storage is
written after every mutation as a whole-list replacement, so a failed write
loses at most that mutation; read and write failures are logged and recorded
on :attr:`FavoritesStore.last_persistence_error`, never raised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import ValidationError

from herodex.schemas.hero import Hero, decode_heroes, encode_heroes
from herodex.settings import DEFAULT_FAVORITES_KEY
from herodex.storage import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

FavoritesListener = Callable[[tuple[Hero, ...]], None]


class FavoritesStore:
    """Ordered, id-unique list of favorite heroes backed by ``storage``."""

    def __init__(
        self,
        storage: KeyValueStore,
        *,
        key: str = DEFAULT_FAVORITES_KEY,
        on_change: FavoritesListener | None = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._favorites: list[Hero] = []
        self._listeners: list[FavoritesListener] = []
        self.last_persistence_error: Exception | None = None
        if on_change is not None:
            self._listeners.append(on_change)
        self._load()

    @property
    def key(self) -> str:
        return self._key

    @property
    def favorites(self) -> tuple[Hero, ...]:
        """Snapshot of the current list in insertion order."""

        return tuple(self._favorites)

    def __len__(self) -> int:
        return len(self._favorites)

    def is_favorite(self, hero: Hero) -> bool:
        return any(item.id == hero.id for item in self._favorites)

    def add_to_favorites(self, hero: Hero) -> None:
        if self.is_favorite(hero):
            return
        self._favorites.append(hero)
        self._save()
        self._notify()

    def remove_from_favorites(self, hero: Hero) -> None:
        remaining = [item for item in self._favorites if item.id != hero.id]
        changed = len(remaining) != len(self._favorites)
        self._favorites = remaining
        self._save()
        if changed:
            self._notify()

    def toggle_favorite(self, hero: Hero) -> None:
        if self.is_favorite(hero):
            self.remove_from_favorites(hero)
        else:
            self.add_to_favorites(hero)

    def subscribe(self, listener: FavoritesListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that unregisters it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        snapshot = self.favorites
        for listener in list(self._listeners):
            listener(snapshot)

    def _save(self) -> None:
        try:
            self._storage.set(self._key, encode_heroes(self._favorites))
        except StorageError as exc:
            logger.warning("Error saving favorites under %r: %s", self._key, exc)
            self.last_persistence_error = exc
            return
        self.last_persistence_error = None

    def _load(self) -> None:
        try:
            payload = self._storage.get(self._key)
        except StorageError as exc:
            logger.warning("Error loading favorites from %r: %s", self._key, exc)
            self.last_persistence_error = exc
            return

        if payload is None:
            return

        try:
            heroes = decode_heroes(payload)
        except ValidationError as exc:
            logger.warning("Error loading favorites from %r: %s", self._key, exc)
            self.last_persistence_error = exc
            return

        unique: list[Hero] = []
        for hero in heroes:
            if all(item.id != hero.id for item in unique):
                unique.append(hero)
        self._favorites = unique
        logger.debug("Loaded %d favorites from %r", len(unique), self._key)


__all__ = ["FavoritesListener", "FavoritesStore"]
