"""
Application FastAPI de CineCache.

Initialise l'application web avec le Container DI, sert l'arborescence
d'upload en fichiers statiques et monte les routes de l'API d'images.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from loguru import logger

from ..container import Container
from ..core.entities.image import ImageCategory
from .routes.images import router as images_router


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construit l'application web.

    Args:
        container: Container DI a utiliser (defaut: nouveau Container)
    """
    container = container or Container()
    settings = container.config()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Prepare l'arborescence au démarrage et ferme le client HTTP à l'arrêt."""
        store = container.image_store()
        # Une racine inutilisable est une erreur de configuration : le démarrage échoue
        for category in ImageCategory:
            store.ensure_directory(category)
        app.state.container = container
        logger.info("API CineCache prête", upload_root=str(store.upload_root))
        yield
        await container.image_fetcher().close()

    app = FastAPI(title="CineCache", lifespan=lifespan)

    # Images stockées
    app.mount(
        settings.public_prefix,
        StaticFiles(directory=settings.upload_root, check_dir=False),
        name="uploads",
    )

    # Routes
    app.include_router(images_router)
    return app


app = create_app()
