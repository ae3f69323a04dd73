"""
Commandes CLI du cache d'images (cache, remove, upload).
"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from cinecache.adapters.api.tmdb_images import build_image_url
from cinecache.adapters.cli.helpers import (
    async_command,
    build_container,
    console,
    with_container,
)
from cinecache.core.entities.image import ImageCategory


async def _cache_async(
    container,
    source: str,
    category: ImageCategory,
    size: Optional[str],
) -> None:
    """Implementation async de la commande cache."""
    config = container.config()

    url = source
    if source.startswith("/"):
        try:
            url = build_image_url(
                source, size, category, base_url=config.tmdb_image_base_url
            )
        except ValueError as e:
            console.print(f"[red]Erreur: {e}[/red]")
            raise typer.Exit(1)

    service = container.image_cache_service()
    outcome = await service.fetch(url, category)

    if not outcome.ok:
        console.print(
            f"[red]Echec ({outcome.failure.value}): {outcome.reason}[/red]"
        )
        console.print(f"[dim]Repli sur l'URL distante: {url}[/dim]")
        raise typer.Exit(1)

    suffix = " [dim](deja en cache)[/dim]" if outcome.from_cache else ""
    console.print(f"[green]{outcome.public_path}[/green]{suffix}")


def cache(
    source: Annotated[
        str,
        typer.Argument(help="URL HTTPS de l'image, ou chemin TMDB (ex: /abc123.jpg)"),
    ],
    category: Annotated[
        ImageCategory,
        typer.Option("--category", "-c", help="Categorie de l'image"),
    ] = ImageCategory.POSTER,
    size: Annotated[
        Optional[str],
        typer.Option("--size", "-s", help="Variante TMDB (w342, w500, original...)"),
    ] = None,
) -> None:
    """
    Met en cache une image distante et affiche son chemin public.

    Exemples:
      cinecache cache https://image.tmdb.org/t/p/w500/abc123.jpg
      cinecache cache /abc123.jpg --category backdrop
      cinecache cache /abc123.jpg --size w342
    """
    async_command(with_container(_cache_async))(source, category, size)


def remove(
    public_path: Annotated[
        str,
        typer.Argument(help="Chemin public de l'image (ex: /uploads/posters/<cle>.jpg)"),
    ],
) -> None:
    """Supprime une image stockee (sans erreur si deja absente)."""
    container = build_container()
    service = container.image_cache_service()

    if not service.remove_image(public_path):
        console.print(f"[red]Suppression refusee ou impossible: {public_path}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Supprime:[/green] {public_path}")


def upload(
    file: Annotated[
        Path,
        typer.Argument(help="Fichier image a utiliser comme affiche", exists=True, dir_okay=False),
    ],
    owner: Annotated[int, typer.Option("--owner", help="Identifiant de l'utilisateur")],
    target: Annotated[int, typer.Option("--target", help="ID TMDB du film")],
    previous: Annotated[
        Optional[str],
        typer.Option("--previous", help="Chemin public de l'affiche actuelle"),
    ] = None,
) -> None:
    """Enregistre une affiche personnalisee pour un film."""
    container = build_container()
    service = container.image_cache_service()

    with open(file, "rb") as stream:
        outcome = service.ingest_upload(
            stream,
            file.stat().st_size,
            owner_id=owner,
            target_id=target,
            previous_path=previous,
        )

    if not outcome.ok:
        console.print(f"[red]Echec ({outcome.failure.value}): {outcome.reason}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]{outcome.public_path}[/green]")
