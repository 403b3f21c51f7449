"""Catalog access, favorites persistence and search state.

Each module holds one responsibility so callers can depend on exactly the
collaborator they need.
"""

from .browser import HeroBrowser
from .debounce import Debouncer
from .favorites_service import FavoritesStore
from .hero_client import HeroClient, filter_heroes, pick_random_hero

__all__ = [
    "Debouncer",
    "FavoritesStore",
    "HeroBrowser",
    "HeroClient",
    "filter_heroes",
    "pick_random_hero",
]
