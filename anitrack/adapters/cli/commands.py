"""
Commandes CLI d'AniTrack : base de donnees, donnees de demonstration,
cache des reponses et interrogation du catalogue.
"""

import asyncio
from typing import Annotated, Any, Optional

import typer
from rich.table import Table

from anitrack.adapters.cli.helpers import (
    console,
    make_container,
    suppress_loguru,
)
from anitrack.core.entities.catalog import CatalogQuery, display_title
from anitrack.core.exceptions import AggregateProviderError, AniTrackError
from anitrack.services.aggregator import parse_source


def init_db() -> None:
    """Cree les tables de la base de donnees si necessaire."""
    container = make_container()
    console.print(f"[green]Base initialisee:[/green] {container.config().database_url}")


def seed(
    episodes: Annotated[
        int,
        typer.Option(
            "--episodes", "-e",
            min=0,
            help="Episodes factices a creer par anime (0 = aucun)",
        ),
    ] = 0,
) -> None:
    """Insere les anime de demonstration et l'utilisateur de demonstration."""
    container = make_container()
    seeder = container.seeder_service()

    with suppress_loguru():
        report = seeder.seed(episodes_per_anime=episodes)

    console.print("[bold]Resume du seed:[/bold]")
    console.print(f"  [green]{report.anime_created}[/green] anime cree(s)")
    console.print(f"  [cyan]{report.anime_updated}[/cyan] anime mis a jour")
    if report.episodes_created:
        console.print(f"  [green]{report.episodes_created}[/green] episode(s) cree(s)")
    if report.user_created:
        console.print(f"  Utilisateur de demonstration cree: {container.config().demo_user_id}")


def clear_cache() -> None:
    """Vide le cache des reponses AniList/Kitsu."""
    container = make_container(requires_db=False)
    cache = container.api_cache()
    try:
        removed = asyncio.run(cache.clear())
    finally:
        cache.close()
    console.print(f"[green]{removed}[/green] entree(s) supprimee(s) du cache")


def fetch(
    kind: Annotated[
        str,
        typer.Argument(help="trending, seasonal, popular, search ou detail"),
    ],
    search: Annotated[
        Optional[str],
        typer.Option("--search", "-s", help="Texte recherche (type search)"),
    ] = None,
    anime_id: Annotated[
        Optional[str],
        typer.Option("--id", help="ID de l'anime chez le fournisseur (type detail)"),
    ] = None,
    season: Annotated[
        Optional[str],
        typer.Option("--season", help="WINTER, SPRING, SUMMER ou FALL (type seasonal)"),
    ] = None,
    year: Annotated[
        Optional[int],
        typer.Option("--year", help="Annee (type seasonal)"),
    ] = None,
    source: Annotated[
        Optional[str],
        typer.Option("--source", help="Impose un fournisseur: anilist ou kitsu"),
    ] = None,
    no_fallback: Annotated[
        bool,
        typer.Option("--no-fallback", help="Desactive le repli sur Kitsu"),
    ] = False,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Affiche la reponse JSON brute"),
    ] = False,
    save: Annotated[
        bool,
        typer.Option("--save", help="Importe les resultats dans la bibliotheque locale"),
    ] = False,
) -> None:
    """
    Interroge le catalogue agrege (AniList, repli Kitsu).

    Exemples:
      anitrack fetch trending
      anitrack fetch search --search "one piece"
      anitrack fetch detail --id 16498 --json
      anitrack fetch popular --source kitsu --save
    """
    try:
        query = CatalogQuery.build(kind, search=search, id=anime_id, season=season, year=year)
        provider = parse_source(source)
    except AniTrackError as e:
        console.print(f"[red]Erreur: {e.message}[/red]")
        raise typer.Exit(1) from None

    try:
        container = make_container(requires_db=save)
        asyncio.run(_fetch_async(container, query, provider, not no_fallback, as_json, save))
    except AniTrackError as e:
        console.print(f"[red]Erreur: {e.message}[/red]")
        if isinstance(e, AggregateProviderError):
            for name, cause in e.errors.items():
                console.print(f"  [dim]{name}: {cause}[/dim]")
        raise typer.Exit(1) from None


async def _fetch_async(
    container, query, provider, fallback: bool, as_json: bool, save: bool
) -> None:
    """Implementation async de la commande fetch."""
    aggregator = container.aggregator_service()
    try:
        with suppress_loguru():
            payload = await aggregator.fetch(query, source=provider, fallback=fallback)
    finally:
        await container.anilist_client().close()
        await container.kitsu_client().close()
        container.api_cache().close()

    records = payload if isinstance(payload, list) else [payload]
    if as_json:
        console.print_json(data=payload)
    else:
        console.print(_records_table(records))

    if save:
        library = container.library_service()
        for record in records:
            library.import_anime(record)
        console.print(f"[green]{len(records)}[/green] anime importe(s) dans la bibliotheque")


def _records_table(records: list[dict[str, Any]]) -> Table:
    """Tableau Rich des enregistrements canoniques."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Titre")
    table.add_column("Episodes", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Statut")

    for record in records:
        score = record.get("averageScore")
        table.add_row(
            str(record.get("id", "")),
            display_title(record),
            str(record.get("episodes") or "-"),
            f"{score:g}" if score is not None else "-",
            str(record.get("status") or "-"),
        )
    return table
