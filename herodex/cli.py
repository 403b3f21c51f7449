"""Command line entry point: random picks, search and favorites management.

Usage:
    herodex random
    herodex search bat
    herodex favorites add 70
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Sequence

import click
from rich.console import Console
from rich.table import Table

from herodex.schemas.error import HeroAPIError
from herodex.schemas.hero import Hero, hero_to_payload
from herodex.services.favorites_service import FavoritesStore
from herodex.services.hero_client import HeroClient
from herodex.settings import AppSettings, get_settings
from herodex.storage import create_store

logger = logging.getLogger(__name__)
console = Console()


def _configure_logging(active_settings: AppSettings) -> None:
    logging.basicConfig(
        level=active_settings.log_level_numeric,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _validate_environment(*, active_settings: AppSettings) -> None:
    """Log warnings for optional configuration that may surprise the user."""

    warnings = active_settings.optional_config_warnings()
    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning(f"  • {warning}")
        logger.warning("=" * 60)


def _run_client_call(active_settings: AppSettings, operation: str, *args: str):
    async def _call():
        async with HeroClient(active_settings=active_settings) as client:
            return await getattr(client, operation)(*args)

    try:
        return asyncio.run(_call())
    except HeroAPIError as exc:
        console.print(f"[red]{exc.description}[/red]")
        raise SystemExit(1) from exc


def _open_favorites(active_settings: AppSettings) -> FavoritesStore:
    store = create_store(active_settings)
    return FavoritesStore(store, key=active_settings.favorites_key)


def _find_hero(heroes: Sequence[Hero], hero_id: int) -> Hero | None:
    return next((hero for hero in heroes if hero.id == hero_id), None)


def _heroes_table(title: str, heroes: Sequence[Hero]) -> Table:
    table = Table("ID", "Name", "Full name", "Publisher", "Alignment", title=title)
    for hero in heroes:
        table.add_row(
            str(hero.id),
            hero.name,
            hero.biography.full_name or "-",
            hero.biography.publisher or "-",
            hero.biography.alignment,
        )
    return table


def _print_hero(hero: Hero, *, favorite: bool) -> None:
    marker = "[red]♥[/red] " if favorite else ""
    console.print(f"{marker}[bold]{hero.name}[/bold] (#{hero.id})")
    if hero.biography.full_name:
        console.print(f"  Full name: {hero.biography.full_name}")
    console.print(f"  Publisher: {hero.biography.publisher or 'Unknown'}")

    stats = hero.powerstats
    table = Table("Stat", "Value", title="Power stats")
    for label, value in (
        ("Intelligence", stats.intelligence),
        ("Strength", stats.strength),
        ("Speed", stats.speed),
        ("Durability", stats.durability),
        ("Power", stats.power),
        ("Combat", stats.combat),
    ):
        table.add_row(label, str(value))
    console.print(table)


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Browse the superhero catalog and manage favorite heroes."""

    active_settings = get_settings()
    _configure_logging(active_settings)
    _validate_environment(active_settings=active_settings)
    ctx.obj = active_settings


@cli.command("random")
@click.option("--json", "as_json", is_flag=True, help="Print the raw hero record.")
@click.pass_obj
def random_hero(active_settings: AppSettings, as_json: bool) -> None:
    """Show one hero picked at random from the catalog."""

    hero = _run_client_call(active_settings, "fetch_random_hero")
    if hero is None:
        console.print("[yellow]The catalog is empty.[/yellow]")
        return

    if as_json:
        click.echo(json.dumps(hero_to_payload(hero), indent=2))
        return

    favorites = _open_favorites(active_settings)
    _print_hero(hero, favorite=favorites.is_favorite(hero))


@cli.command("search")
@click.argument("query", default="")
@click.pass_obj
def search(active_settings: AppSettings, query: str) -> None:
    """List heroes whose name or full name contains QUERY."""

    heroes = _run_client_call(active_settings, "search_heroes", query)
    if not heroes:
        console.print(f"[yellow]No heroes match {query!r}.[/yellow]")
        return
    console.print(_heroes_table(f"{len(heroes)} heroes", heroes))


@cli.group("favorites")
def favorites_group() -> None:
    """Manage the locally persisted favorites list."""


@favorites_group.command("list")
@click.pass_obj
def list_favorites(active_settings: AppSettings) -> None:
    favorites = _open_favorites(active_settings)
    if not favorites.favorites:
        console.print("No Favorites Yet")
        return
    console.print(_heroes_table("Favorites", favorites.favorites))


@favorites_group.command("add")
@click.argument("hero_id", type=int)
@click.pass_obj
def add_favorite(active_settings: AppSettings, hero_id: int) -> None:
    favorites = _open_favorites(active_settings)
    heroes = _run_client_call(active_settings, "fetch_all_heroes")
    hero = _find_hero(heroes, hero_id)
    if hero is None:
        raise click.ClickException(f"No hero with id {hero_id}")

    favorites.add_to_favorites(hero)
    _report_persistence(favorites)
    console.print(f"[green]Added {hero.name} to favorites.[/green]")


@favorites_group.command("remove")
@click.argument("hero_id", type=int)
@click.pass_obj
def remove_favorite(active_settings: AppSettings, hero_id: int) -> None:
    favorites = _open_favorites(active_settings)
    hero = _find_hero(favorites.favorites, hero_id)
    if hero is None:
        console.print(f"Hero {hero_id} is not a favorite.")
        return

    favorites.remove_from_favorites(hero)
    _report_persistence(favorites)
    console.print(f"Removed {hero.name} from favorites.")


@favorites_group.command("toggle")
@click.argument("hero_id", type=int)
@click.pass_obj
def toggle_favorite(active_settings: AppSettings, hero_id: int) -> None:
    favorites = _open_favorites(active_settings)
    hero = _find_hero(favorites.favorites, hero_id)
    if hero is None:
        heroes = _run_client_call(active_settings, "fetch_all_heroes")
        hero = _find_hero(heroes, hero_id)
    if hero is None:
        raise click.ClickException(f"No hero with id {hero_id}")

    favorites.toggle_favorite(hero)
    _report_persistence(favorites)
    state = "added to" if favorites.is_favorite(hero) else "removed from"
    console.print(f"{hero.name} {state} favorites.")


def _report_persistence(favorites: FavoritesStore) -> None:
    if favorites.last_persistence_error is not None:
        console.print(
            "[yellow]Favorites could not be saved and will be lost on exit: "
            f"{favorites.last_persistence_error}[/yellow]"
        )


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
