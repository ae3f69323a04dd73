"""
Point d'entrée CLI de CineCache.

Configure le logging et fournit les commandes CLI du cache d'images.
"""

from typing import Annotated

import typer
from loguru import logger

from . import __version__
from .adapters.cli.commands import cache, prune, remove, stats, upload
from .adapters.cli.helpers import build_container
from .config import Settings
from .logging_config import configure_logging
from .utils.helpers import bytes_human, mask_secret

app = typer.Typer(
    name="cinecache",
    help="Cache local des affiches et fonds d'écran de films",
)


# Commandes du cache
app.command()(cache)
app.command()(remove)
app.command()(upload)

# Commandes de maintenance
app.command()(stats)
app.command()(prune)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return build_container().config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration CineCache")
    typer.echo(f"Racine d'upload : {config.upload_root}")
    typer.echo(f"Préfixe public : {config.public_prefix}")
    typer.echo(f"Hôtes autorisés : {', '.join(config.allowed_hosts)}")
    typer.echo(f"Taille max : {bytes_human(config.max_image_bytes)}")
    typer.echo(f"Timeouts : connexion {config.connect_timeout}s / total {config.request_timeout}s")
    if config.tmdb_enabled:
        typer.echo(f"API TMDB : activée ({mask_secret(config.tmdb_api_key)})")
    else:
        typer.echo("API TMDB : désactivée")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"CineCache v{__version__}")


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Adresse d'écoute")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port d'écoute")] = 8000,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance l'API web CineCache."""
    import uvicorn

    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("cinecache.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    settings = get_config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    logger.info("Démarrage de CineCache", version=__version__)

    # Lance la CLI
    app()


if __name__ == "__main__":
    main()
