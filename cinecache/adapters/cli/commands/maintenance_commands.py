"""
Commandes CLI de maintenance du cache d'images (stats, prune).
"""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.table import Table

from cinecache.adapters.cli.helpers import build_container, console
from cinecache.services.maintenance import PruneReport, load_manifest
from cinecache.utils.helpers import bytes_human


def stats() -> None:
    """Affiche l'occupation du cache d'images."""
    container = build_container()
    cache_stats = container.maintenance_service().stats()

    table = Table(title="Cache d'images")
    table.add_column("Categorie")
    table.add_column("Fichiers", justify="right")
    table.add_row("Affiches", str(cache_stats.posters))
    table.add_row("  dont personnalisees", str(cache_stats.overrides), style="dim")
    table.add_row("Fonds d'ecran", str(cache_stats.backdrops))
    table.add_row("Total", str(cache_stats.total), style="bold")
    console.print(table)
    console.print(f"Taille: {bytes_human(cache_stats.total_bytes)}")


def prune(
    orphans: Annotated[
        bool,
        typer.Option("--orphans", help="Supprime les fichiers absents du manifeste"),
    ] = False,
    older_than: Annotated[
        Optional[int],
        typer.Option("--older-than", min=1, help="Supprime les fichiers non references de plus de N jours"),
    ] = None,
    manifest: Annotated[
        Optional[Path],
        typer.Option(
            "--manifest",
            "-m",
            exists=True,
            dir_okay=False,
            help="Fichier listant les chemins publics en usage (un par ligne)",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Simule sans supprimer"),
    ] = False,
) -> None:
    """
    Purge les images inutilisees.

    Exemples:
      cinecache prune --orphans --manifest in_use.txt --dry-run
      cinecache prune --older-than 90 --manifest in_use.txt
    """
    if not orphans and older_than is None:
        console.print("[red]Erreur: preciser --orphans ou --older-than N[/red]")
        raise typer.Exit(1)
    if orphans and manifest is None:
        console.print("[red]Erreur: --orphans exige --manifest[/red]")
        raise typer.Exit(1)

    referenced = load_manifest(manifest) if manifest else set()
    maintenance = build_container().maintenance_service()

    if orphans:
        report = maintenance.prune_orphans(referenced, dry_run=dry_run)
    else:
        report = maintenance.prune_older_than(older_than, referenced, dry_run=dry_run)

    _print_report(report)


def _print_report(report: PruneReport) -> None:
    if report.dry_run:
        for path in report.candidates:
            console.print(f"[yellow]DRY-RUN suppression:[/yellow] {path}")
        console.print(f"{len(report.candidates)} fichier(s) seraient supprimes")
        return

    for path in report.deleted:
        console.print(f"[red]Supprime:[/red] {path}")
    console.print(
        f"{len(report.deleted)} fichier(s) supprime(s), "
        f"{bytes_human(report.freed_bytes)} liberes"
    )
